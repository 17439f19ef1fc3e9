"""Line-oriented text format for persisting a :class:`FrequencyStore`.

Layout (``\\t`` separated, ``\\n`` terminated, counts in decimal)::

    <max_suffix_size>\\t<is_trimmed 0|1>
    <number of lemma entries>
    <lemma suffix>\\t<tp>\\t<fp>                  repeated
    <number of inflected entries>
    <inflected suffix>\\t<tp>\\t<fp>              repeated
    <number of replacement keys>
    <inflected suffix>\\t<number of lemma suffixes>
    <lemma suffix>\\t<tp>\\t<fp>                  repeated per key

Suffixes are written as raw bytes in bytewise order and may be empty, so
equal stores always save identically. Loading replays every
entry through the store's ``record_*`` primitives, so duplicate lines add up
exactly as repeated training would.
"""

from __future__ import annotations

import io
import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Iterator, List, Mapping, Tuple, Union

from .config import FIELD_SEPARATOR, LINE_TERMINATOR
from .errors import ModelFormatError
from .store import CountPair, FrequencyStore

PathLike = Union[str, Path]


# ---------------------------------------------------------------------------
# Writing


def dump(store: FrequencyStore, stream: BinaryIO) -> None:
    """Write ``store`` to a binary stream."""
    stream.write(b"%d\t%d\n" % (store.max_suffix_size, int(store.is_trimmed)))
    _write_counts(stream, store.lemma_counts)
    _write_counts(stream, store.inflected_counts)
    stream.write(b"%d\n" % len(store.replacements))
    for inflected_suffix in sorted(store.replacements):
        inner = store.replacements[inflected_suffix]
        stream.write(inflected_suffix + FIELD_SEPARATOR + b"%d\n" % len(inner))
        for lemma_suffix in sorted(inner):
            pair = inner[lemma_suffix]
            stream.write(_count_line(lemma_suffix, pair))


def dumps(store: FrequencyStore) -> bytes:
    buffer = io.BytesIO()
    dump(store, buffer)
    return buffer.getvalue()


def save_model(store: FrequencyStore, path: PathLike) -> Path:
    """Persist ``store`` atomically: write a sibling temp file, then rename it over ``path``."""
    dest = Path(path)
    dest.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(delete=False, dir=dest.parent, prefix=f".{dest.name}.", suffix=".tmp") as tmp:
        try:
            dump(store, tmp)
        except BaseException:
            tmp.close()
            os.unlink(tmp.name)
            raise
    os.replace(tmp.name, dest)
    return dest


def _write_counts(stream: BinaryIO, table: Mapping[bytes, CountPair]) -> None:
    stream.write(b"%d\n" % len(table))
    for suffix in sorted(table):
        pair = table[suffix]
        stream.write(_count_line(suffix, pair))


def _count_line(suffix: bytes, pair: CountPair) -> bytes:
    return suffix + FIELD_SEPARATOR + b"%d\t%d\n" % (pair.tp, pair.fp)


# ---------------------------------------------------------------------------
# Reading


def load(stream: BinaryIO) -> FrequencyStore:
    """Rebuild a store from a binary stream produced by :func:`dump`."""
    lines = _LineCursor(stream)

    header = lines.fields(2, "header")
    max_suffix_size = lines.count(header[0], "max_suffix_size")
    trimmed_flag = header[1]
    if trimmed_flag not in (b"0", b"1"):
        raise ModelFormatError(f"Trimmed flag must be 0 or 1, found {trimmed_flag!r}", lines.line_number)
    store = FrequencyStore(max_suffix_size)

    for suffix, tp, fp in _read_count_block(lines, "lemma"):
        store.record_lemma(suffix, tp, fp)
    for suffix, tp, fp in _read_count_block(lines, "inflected"):
        store.record_inflected(suffix, tp, fp)

    num_keys = lines.count(lines.fields(1, "replacement key count")[0], "replacement key count")
    for _ in range(num_keys):
        key_fields = lines.fields(2, "replacement key")
        inflected_suffix = key_fields[0]
        num_inner = lines.count(key_fields[1], "replacement entry count")
        for _ in range(num_inner):
            lemma_suffix, tp, fp = lines.count_entry("replacement")
            store.record_replacement(inflected_suffix, lemma_suffix, tp, fp)

    lines.expect_end()
    if trimmed_flag == b"1":
        store.mark_trimmed()
    return store


def loads(data: bytes) -> FrequencyStore:
    return load(io.BytesIO(data))


def load_model(path: PathLike) -> FrequencyStore:
    """Read a persisted store from ``path``; missing or unreadable files raise ``OSError``."""
    with Path(path).open("rb") as handle:
        return load(handle)


def _read_count_block(lines: "_LineCursor", label: str) -> Iterator[Tuple[bytes, int, int]]:
    size = lines.count(lines.fields(1, f"{label} entry count")[0], f"{label} entry count")
    for _ in range(size):
        yield lines.count_entry(label)


class _LineCursor:
    """Sequential access to ``\\n`` terminated lines with line-numbered errors."""

    def __init__(self, stream: BinaryIO) -> None:
        self._lines = iter(stream)
        self.line_number = 0

    def next_line(self, what: str) -> bytes:
        try:
            raw = next(self._lines)
        except StopIteration:
            raise ModelFormatError(f"Unexpected end of model data while reading {what}", self.line_number + 1) from None
        self.line_number += 1
        if not raw.endswith(LINE_TERMINATOR):
            raise ModelFormatError(f"Unterminated line while reading {what}", self.line_number)
        return raw[: -len(LINE_TERMINATOR)]

    def fields(self, expected: int, what: str) -> List[bytes]:
        parts = self.next_line(what).split(FIELD_SEPARATOR)
        if len(parts) != expected:
            raise ModelFormatError(f"Expected {expected} field(s) for {what}, found {len(parts)}", self.line_number)
        return parts

    def count(self, field: bytes, what: str) -> int:
        if not field.isdigit():
            raise ModelFormatError(f"Invalid {what} {field!r}", self.line_number)
        return int(field)

    def count_entry(self, label: str) -> Tuple[bytes, int, int]:
        suffix, tp, fp = self.fields(3, f"{label} entry")
        return suffix, self.count(tp, f"{label} tp count"), self.count(fp, f"{label} fp count")

    def expect_end(self) -> None:
        for raw in self._lines:
            self.line_number += 1
            if raw.strip():
                raise ModelFormatError("Unexpected trailing data after model", self.line_number)


__all__ = ["dump", "dumps", "load", "load_model", "loads", "save_model"]
