"""Static limits for corpus and lemmatization input lines."""

from __future__ import annotations

# Longest field accepted from a corpus line or lemmatization input line;
# longer fields are truncated at the last codepoint boundary that fits.
MAX_FIELD_BYTES = 1024


__all__ = ["MAX_FIELD_BYTES"]
