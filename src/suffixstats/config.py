"""Static configuration for the suffix statistics engine."""

from __future__ import annotations

# Prepended to every word so that suffix enumeration always reaches a suffix
# spanning the whole word. Words must not contain it.
START_MARKER = b"$"

# Column separator of the persisted model format.
FIELD_SEPARATOR = b"\t"
LINE_TERMINATOR = b"\n"

DEFAULT_MAX_SUFFIX_SIZE = 8
MIN_SUFFIX_SIZE = 1
MAX_SUFFIX_SIZE = 1024


__all__ = [
    "DEFAULT_MAX_SUFFIX_SIZE",
    "FIELD_SEPARATOR",
    "LINE_TERMINATOR",
    "MAX_SUFFIX_SIZE",
    "MIN_SUFFIX_SIZE",
    "START_MARKER",
]
