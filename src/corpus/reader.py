"""Parser for tab-separated ``inflected<TAB>lemma<TAB>count`` training corpora."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from src.suffixstats.errors import InvalidInputError

from .config import MAX_FIELD_BYTES


@dataclass(frozen=True)
class TrainingRecord:
    """One corpus line: an inflected form, its lemma and how often the pair occurred."""

    inflected: bytes
    lemma: bytes
    count: int
    line_number: int


def clip_field(field: bytes, limit: int = MAX_FIELD_BYTES) -> bytes:
    """Truncate ``field`` to at most ``limit`` bytes without splitting a codepoint."""
    if len(field) <= limit:
        return field
    cut = limit
    while cut > 0 and field[cut] & 0xC0 == 0x80:
        cut -= 1
    return field[:cut]


def parse_training_line(line: bytes, line_number: int) -> Optional[TrainingRecord]:
    """
    Turn one corpus line into a record.

    Returns None for lines that do not split into exactly three tab-separated
    fields or whose count is not an integer; those lines are skipped.

    Raises
    ------
    InvalidInputError
        If the inflected form or lemma is empty after stripping, or the count is not positive.
    """
    parts = line.rstrip(b"\r\n").split(b"\t")
    if len(parts) != 3:
        return None
    inflected, lemma = (clip_field(part.strip()) for part in parts[:2])
    try:
        count = int(parts[2].strip())
    except ValueError:
        return None

    if not inflected or not lemma:
        raise InvalidInputError(f"Zero-length string on line {line_number}")
    if count <= 0:
        raise InvalidInputError(f"count<=0 on line {line_number}")
    return TrainingRecord(inflected=inflected, lemma=lemma, count=count, line_number=line_number)


def iter_training_records(lines: Iterable[bytes]) -> Iterator[TrainingRecord]:
    """Yield records from an iterable of raw corpus lines (1-based line numbers)."""
    for line_number, line in enumerate(lines, start=1):
        record = parse_training_line(line, line_number)
        if record is not None:
            yield record


def read_training_records(path: Union[str, Path]) -> Iterator[TrainingRecord]:
    """Stream records from a corpus file on disk."""
    with Path(path).open("rb") as handle:
        yield from iter_training_records(handle)


__all__ = [
    "TrainingRecord",
    "clip_field",
    "iter_training_records",
    "parse_training_line",
    "read_training_records",
]
