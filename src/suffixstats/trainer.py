"""Accumulate suffix replacement statistics from (inflected, lemma, count) triples."""

from __future__ import annotations

from .config import START_MARKER
from .errors import FrozenModelError, InvalidInputError
from .segmenter import codepoint_offsets, common_prefix_length
from .store import FrequencyStore


def train(store: FrequencyStore, inflected: bytes, lemma: bytes, count: int) -> None:
    """Record every candidate suffix pair of ``inflected``/``lemma`` with weight ``count``.

    Both words get the start marker prepended. Cut points are enumerated from
    the end of the longer word backwards, ``store.max_suffix_size + 1`` of them
    at most. A pair is a true positive when replacing the inflected suffix by
    the lemma suffix rebuilds the lemma, i.e. when the cut lies inside the
    prefix both words share.

    Raises
    ------
    FrozenModelError
        If the store has been trimmed.
    InvalidInputError
        If ``count`` is not positive or either word is empty.
    DecodingError
        If either word is not valid UTF-8.
    """
    if store.is_trimmed:
        raise FrozenModelError("Cannot update a trimmed model.")
    if not inflected or not lemma:
        raise InvalidInputError("Inflected form and lemma must be non-empty.")
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        raise InvalidInputError(f"count must be a positive integer, received {count!r}")

    inf = START_MARKER + inflected
    lem = START_MARKER + lemma
    inf_offsets = codepoint_offsets(inf)
    lem_offsets = codepoint_offsets(lem)

    # Offset lists carry the end sentinel, so the last index selects the empty suffix.
    inf_last = len(inf_offsets) - 1
    lem_last = len(lem_offsets) - 1
    n = max(len(inf_offsets), len(lem_offsets))
    lowest = max(n - store.max_suffix_size - 2, 0)
    prefix_len = common_prefix_length(inf, lem, inf_offsets, lem_offsets)

    for i in range(n - 2, lowest - 1, -1):
        inf_suffix = inf[inf_offsets[min(inf_last, i)] :]
        lem_suffix = lem[lem_offsets[min(lem_last, i)] :]
        if i <= prefix_len:
            store.record_replacement(inf_suffix, lem_suffix, count, 0)
        else:
            store.record_replacement(inf_suffix, lem_suffix, 0, count)
        store.record_lemma(lem_suffix, count, 0)
        store.record_lemma(inf_suffix, 0, count)
        store.record_inflected(inf_suffix, count, 0)
        store.record_inflected(lem_suffix, 0, count)


__all__ = ["train"]
