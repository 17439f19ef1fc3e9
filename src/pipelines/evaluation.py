"""Accuracy of a trained model against a labelled corpus."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

import numpy as np

from src.corpus.reader import TrainingRecord
from src.suffixstats.model import Lemmatizer

Mistake = Tuple[bytes, bytes, bytes]  # (inflected, expected lemma, predicted lemma)


@dataclass(frozen=True)
class EvaluationResult:
    """Token- and type-level accuracy over a gold corpus."""

    pairs: int
    tokens: int
    type_accuracy: float
    token_accuracy: float
    mistakes: Tuple[Mistake, ...]


def evaluate_lemmatizer(
    lemmatizer: Lemmatizer,
    records: Iterable[TrainingRecord],
    max_mistakes: int = 20,
) -> EvaluationResult:
    """
    Lemmatize every gold record and compare against its lemma.

    ``type_accuracy`` weights each (inflected, lemma) pair equally;
    ``token_accuracy`` weights each pair by its corpus count.
    """
    hits: List[bool] = []
    weights: List[int] = []
    mistakes: List[Mistake] = []
    for record in records:
        predicted = lemmatizer.lemmatize(record.inflected)
        correct = predicted == record.lemma
        hits.append(correct)
        weights.append(record.count)
        if not correct and len(mistakes) < max_mistakes:
            mistakes.append((record.inflected, record.lemma, predicted))

    if not hits:
        raise ValueError("Gold corpus must contain at least one record.")

    hit_array = np.asarray(hits, dtype=float)
    weight_array = np.asarray(weights, dtype=float)
    return EvaluationResult(
        pairs=len(hits),
        tokens=int(weight_array.sum()),
        type_accuracy=float(hit_array.mean()),
        token_accuracy=float(np.average(hit_array, weights=weight_array)),
        mistakes=tuple(mistakes),
    )


__all__ = ["EvaluationResult", "Mistake", "evaluate_lemmatizer"]
