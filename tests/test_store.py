"""Tests for the frequency store tables and trimming."""

from __future__ import annotations

import math
from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.suffixstats.errors import FrozenModelError, InvalidInputError
from src.suffixstats.store import CountPair, FrequencyStore, TrimReport


def test_count_pair_probability() -> None:
    assert CountPair(3, 1).probability == pytest.approx(0.75)
    assert CountPair(0, 4).probability == 0.0
    assert math.isnan(CountPair().probability)


@pytest.mark.parametrize("size", [0, -1, 1025])
def test_max_suffix_size_out_of_range(size: int) -> None:
    with pytest.raises(InvalidInputError):
        FrequencyStore(size)


def test_max_suffix_size_bounds_accepted() -> None:
    assert FrequencyStore(1).max_suffix_size == 1
    assert FrequencyStore(1024).max_suffix_size == 1024
    assert FrequencyStore().max_suffix_size == 8


def test_max_suffix_size_rejects_non_integers() -> None:
    with pytest.raises(InvalidInputError):
        FrequencyStore(True)
    with pytest.raises(InvalidInputError):
        FrequencyStore(4.0)  # type: ignore[arg-type]


def test_record_primitives_accumulate() -> None:
    store = FrequencyStore()
    store.record_replacement(b"s", b"", 2, 0)
    store.record_replacement(b"s", b"", 1, 4)
    store.record_replacement(b"s", b"x", 0, 1)
    store.record_lemma(b"a", 1, 2)
    store.record_lemma(b"a", 3, 0)
    store.record_inflected(b"b", 0, 5)

    assert store.replacements_for(b"s") == {b"": CountPair(3, 4), b"x": CountPair(0, 1)}
    assert store.lemma_pair(b"a") == CountPair(4, 2)
    assert store.inflected_pair(b"b") == CountPair(0, 5)
    assert store.lemma_pair(b"missing") is None
    assert store.replacements_for(b"missing") is None


def test_table_sizes() -> None:
    store = FrequencyStore()
    store.record_replacement(b"s", b"", 1, 0)
    store.record_replacement(b"s", b"e", 1, 0)
    store.record_replacement(b"es", b"e", 1, 0)
    store.record_lemma(b"", 1, 0)
    store.record_inflected(b"s", 1, 0)

    sizes = store.table_sizes()
    assert sizes.replacement_keys == 2
    assert sizes.replacement_entries == 3
    assert sizes.lemma_entries == 1
    assert sizes.inflected_entries == 1


# ---------------------------------------------------------------------------
# Trim


def _populated_store() -> FrequencyStore:
    store = FrequencyStore(4)
    store.record_lemma(b"", 5, 0)
    store.record_lemma(b"s", 0, 5)
    store.record_inflected(b"s", 5, 0)
    store.record_inflected(b"", 0, 5)
    store.record_replacement(b"s", b"", 5, 0)
    store.record_replacement(b"s", b"e", 0, 2)
    store.record_replacement(b"ts", b"te", 0, 3)
    return store


def test_trim_removes_zero_true_positive_entries() -> None:
    store = _populated_store()

    report = store.trim()

    assert store.is_trimmed
    assert dict(store.lemma_counts) == {b"": CountPair(5, 0)}
    assert dict(store.inflected_counts) == {b"s": CountPair(5, 0)}
    assert {key: dict(inner) for key, inner in store.replacements.items()} == {b"s": {b"": CountPair(5, 0)}}
    assert report == TrimReport(lemma_entries=1, inflected_entries=1, replacement_entries=2, replacement_keys=1)
    assert report.total == 4


def test_trim_leaves_no_zero_counts() -> None:
    store = _populated_store()
    store.trim()

    pairs = list(store.lemma_counts.values()) + list(store.inflected_counts.values())
    pairs += [pair for inner in store.replacements.values() for pair in inner.values()]
    assert pairs
    assert all(pair.tp > 0 for pair in pairs)


def test_trim_is_idempotent() -> None:
    store = _populated_store()
    store.trim()
    snapshot = repr(store)

    assert store.trim() == TrimReport()
    assert repr(store) == snapshot


def test_trimmed_store_rejects_updates() -> None:
    store = _populated_store()
    store.trim()

    with pytest.raises(FrozenModelError):
        store.record_lemma(b"a", 1, 0)
    with pytest.raises(FrozenModelError):
        store.record_inflected(b"a", 1, 0)
    with pytest.raises(FrozenModelError):
        store.record_replacement(b"a", b"b", 1, 0)


def test_mark_trimmed_keeps_entries() -> None:
    store = _populated_store()
    store.mark_trimmed()

    assert store.is_trimmed
    assert store.lemma_pair(b"s") == CountPair(0, 5)


def test_store_equality() -> None:
    assert _populated_store() == _populated_store()
    other = _populated_store()
    other.record_lemma(b"s", 1, 0)
    assert other != _populated_store()
