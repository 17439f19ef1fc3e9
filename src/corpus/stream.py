"""Line-by-line lemmatization of a word stream."""

from __future__ import annotations

from typing import BinaryIO, Iterable

from src.suffixstats.model import Lemmatizer

from .reader import clip_field


def lemmatize_stream(
    lemmatizer: Lemmatizer,
    source: Iterable[bytes],
    sink: BinaryIO,
    flush: bool = False,
) -> int:
    """
    Read one word per line from ``source`` and write one lemma per line to ``sink``.

    Output order follows input order exactly; blank input lines yield blank
    output lines. Returns the number of lines processed.
    """
    processed = 0
    for line in source:
        word = clip_field(line.strip())
        lemma = lemmatizer.lemmatize(word) if word else word
        sink.write(lemma + b"\n")
        if flush:
            sink.flush()
        processed += 1
    sink.flush()
    return processed


__all__ = ["lemmatize_stream"]
