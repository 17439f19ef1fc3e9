"""Pick the most probable suffix replacement for an unseen inflected word."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .config import START_MARKER
from .segmenter import codepoint_offsets
from .store import FrequencyStore


@dataclass(frozen=True)
class Replacement:
    """Winning rule for a word: ``inflected_suffix`` is rewritten as ``lemma_suffix``."""

    lemma: bytes
    inflected_suffix: bytes
    lemma_suffix: bytes
    score: float


def bayes_score(pr_ba: float, pr_a: float, pr_b: float) -> float:
    """Return ``P(A|B) = P(B|A) * P(A) / P(B)`` with IEEE division semantics."""
    numerator = pr_ba * pr_a
    if pr_b == 0.0:
        if numerator > 0.0:
            return math.inf
        return math.nan
    return numerator / pr_b


def best_replacement(store: FrequencyStore, inflected: bytes) -> Optional[Replacement]:
    """Search suffixes from longest to shortest and return the first applicable rule.

    The search stops at the longest suffix length for which any replacement
    scores above zero, even if a shorter suffix would score higher. Candidates
    are visited in bytewise order of lemma suffix, so ties go to the smallest.
    """
    marked = (START_MARKER + inflected).strip()
    offsets = codepoint_offsets(marked)

    for offset in offsets:
        inflected_suffix = marked[offset:]
        inflected_pair = store.inflected_pair(inflected_suffix)
        if inflected_pair is None:
            continue
        pr_b = inflected_pair.probability

        candidates = store.replacements_for(inflected_suffix)
        if candidates is None:
            continue

        best: Optional[Replacement] = None
        best_score = 0.0
        for lemma_suffix in sorted(candidates):
            replacement_pair = candidates[lemma_suffix]
            lemma_pair = store.lemma_pair(lemma_suffix)
            if lemma_pair is None:
                continue
            score = bayes_score(replacement_pair.probability, lemma_pair.probability, pr_b)
            if score > best_score:
                best_score = score
                best = Replacement(
                    lemma=(marked[:offset] + lemma_suffix)[len(START_MARKER) :],
                    inflected_suffix=inflected_suffix,
                    lemma_suffix=lemma_suffix,
                    score=score,
                )
        if best is not None:
            return best
    return None


def lemmatize(store: FrequencyStore, inflected: bytes) -> bytes:
    """Return the lemma of ``inflected``, or ``inflected`` itself when no rule applies."""
    found = best_replacement(store, inflected)
    if found is None:
        return inflected
    return found.lemma


__all__ = ["Replacement", "bayes_score", "best_replacement", "lemmatize"]
