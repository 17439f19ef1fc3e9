"""Frequency tables backing the suffix replacement model."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from .config import DEFAULT_MAX_SUFFIX_SIZE, MAX_SUFFIX_SIZE, MIN_SUFFIX_SIZE
from .errors import FrozenModelError, InvalidInputError


@dataclass
class CountPair:
    """True-positive / false-positive counts attached to a suffix key."""

    tp: int = 0
    fp: int = 0

    def add(self, tp: int, fp: int) -> None:
        self.tp += tp
        self.fp += fp

    @property
    def probability(self) -> float:
        """``tp / (tp + fp)``; NaN for an empty pair so it never wins a comparison."""
        total = self.tp + self.fp
        if total == 0:
            return math.nan
        return self.tp / total


CountTable = Dict[bytes, CountPair]
ReplacementTable = Dict[bytes, Dict[bytes, CountPair]]


@dataclass(frozen=True)
class TrimReport:
    """Number of entries removed from each table by :meth:`FrequencyStore.trim`."""

    lemma_entries: int = 0
    inflected_entries: int = 0
    replacement_entries: int = 0
    replacement_keys: int = 0

    @property
    def total(self) -> int:
        return self.lemma_entries + self.inflected_entries + self.replacement_entries


@dataclass(frozen=True)
class TableSizes:
    lemma_entries: int
    inflected_entries: int
    replacement_keys: int
    replacement_entries: int


class FrequencyStore:
    """Replacement, lemma-suffix and inflected-suffix counts.

    The store is mutable until :meth:`trim` is called. Afterwards every
    ``record_*`` call raises :class:`FrozenModelError`, which makes a trimmed
    store safe to share between any number of readers.
    """

    def __init__(self, max_suffix_size: int = DEFAULT_MAX_SUFFIX_SIZE) -> None:
        if isinstance(max_suffix_size, bool) or not isinstance(max_suffix_size, int):
            raise InvalidInputError(f"max_suffix_size must be an integer, received {max_suffix_size!r}")
        if not MIN_SUFFIX_SIZE <= max_suffix_size <= MAX_SUFFIX_SIZE:
            raise InvalidInputError(
                f"max_suffix_size must satisfy {MIN_SUFFIX_SIZE} <= max_suffix_size <= {MAX_SUFFIX_SIZE}, "
                f"received {max_suffix_size}"
            )
        self._max_suffix_size = max_suffix_size
        self._is_trimmed = False
        self._replacements: ReplacementTable = {}
        self._lemma_counts: CountTable = {}
        self._inflected_counts: CountTable = {}

    @property
    def max_suffix_size(self) -> int:
        return self._max_suffix_size

    @property
    def is_trimmed(self) -> bool:
        return self._is_trimmed

    # Read-only views; callers must not mutate the returned mappings.
    @property
    def replacements(self) -> Mapping[bytes, Mapping[bytes, CountPair]]:
        return self._replacements

    @property
    def lemma_counts(self) -> Mapping[bytes, CountPair]:
        return self._lemma_counts

    @property
    def inflected_counts(self) -> Mapping[bytes, CountPair]:
        return self._inflected_counts

    # ------------------------------------------------------------------
    # Update primitives

    def record_replacement(self, inflected_suffix: bytes, lemma_suffix: bytes, tp: int, fp: int) -> None:
        self._ensure_mutable()
        inner = self._replacements.setdefault(inflected_suffix, {})
        inner.setdefault(lemma_suffix, CountPair()).add(tp, fp)

    def record_inflected(self, suffix: bytes, tp: int, fp: int) -> None:
        self._ensure_mutable()
        self._inflected_counts.setdefault(suffix, CountPair()).add(tp, fp)

    def record_lemma(self, suffix: bytes, tp: int, fp: int) -> None:
        self._ensure_mutable()
        self._lemma_counts.setdefault(suffix, CountPair()).add(tp, fp)

    def _ensure_mutable(self) -> None:
        if self._is_trimmed:
            raise FrozenModelError("Cannot update a trimmed model.")

    # ------------------------------------------------------------------
    # Lookups

    def inflected_pair(self, suffix: bytes) -> Optional[CountPair]:
        return self._inflected_counts.get(suffix)

    def lemma_pair(self, suffix: bytes) -> Optional[CountPair]:
        return self._lemma_counts.get(suffix)

    def replacements_for(self, inflected_suffix: bytes) -> Optional[Mapping[bytes, CountPair]]:
        return self._replacements.get(inflected_suffix)

    def table_sizes(self) -> TableSizes:
        return TableSizes(
            lemma_entries=len(self._lemma_counts),
            inflected_entries=len(self._inflected_counts),
            replacement_keys=len(self._replacements),
            replacement_entries=sum(len(inner) for inner in self._replacements.values()),
        )

    # ------------------------------------------------------------------
    # Lifecycle

    def trim(self) -> TrimReport:
        """Drop every entry with a zero true-positive count and freeze the store.

        Calling ``trim`` on an already trimmed store is a no-op.
        """
        if self._is_trimmed:
            return TrimReport()

        lemma_removed = _prune(self._lemma_counts)
        inflected_removed = _prune(self._inflected_counts)
        replacement_removed = 0
        empty_keys = []
        for inflected_suffix, inner in self._replacements.items():
            replacement_removed += _prune(inner)
            if not inner:
                empty_keys.append(inflected_suffix)
        for inflected_suffix in empty_keys:
            del self._replacements[inflected_suffix]

        self._is_trimmed = True
        return TrimReport(
            lemma_entries=lemma_removed,
            inflected_entries=inflected_removed,
            replacement_entries=replacement_removed,
            replacement_keys=len(empty_keys),
        )

    def mark_trimmed(self) -> None:
        """Freeze the store without pruning, as recorded in a persisted model."""
        self._is_trimmed = True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrequencyStore):
            return NotImplemented
        return (
            self._max_suffix_size == other._max_suffix_size
            and self._is_trimmed == other._is_trimmed
            and self._lemma_counts == other._lemma_counts
            and self._inflected_counts == other._inflected_counts
            and self._replacements == other._replacements
        )

    def __repr__(self) -> str:
        sizes = self.table_sizes()
        return (
            f"FrequencyStore(max_suffix_size={self._max_suffix_size}, is_trimmed={self._is_trimmed}, "
            f"lemma_entries={sizes.lemma_entries}, inflected_entries={sizes.inflected_entries}, "
            f"replacement_entries={sizes.replacement_entries})"
        )


def _prune(table: Dict[bytes, CountPair]) -> int:
    stale = [key for key, pair in table.items() if pair.tp == 0]
    for key in stale:
        del table[key]
    return len(stale)


__all__ = ["CountPair", "FrequencyStore", "TableSizes", "TrimReport"]
