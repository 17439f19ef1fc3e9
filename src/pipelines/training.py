"""End-to-end training: read a corpus, train, trim and persist a model."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple

from src.corpus.reader import TrainingRecord, read_training_records
from src.suffixstats.config import DEFAULT_MAX_SUFFIX_SIZE, MAX_SUFFIX_SIZE, MIN_SUFFIX_SIZE
from src.suffixstats.errors import InvalidInputError
from src.suffixstats.model import Lemmatizer, ModelStats
from src.suffixstats.store import TrimReport


@dataclass
class TrainingConfig:
    """Configuration for `train_model`."""

    max_suffix_size: int = DEFAULT_MAX_SUFFIX_SIZE
    trim: bool = True

    def validate(self) -> None:
        if not MIN_SUFFIX_SIZE <= self.max_suffix_size <= MAX_SUFFIX_SIZE:
            raise InvalidInputError(
                f"must be {MIN_SUFFIX_SIZE} <= max_suffix_size <= {MAX_SUFFIX_SIZE}, got {self.max_suffix_size}"
            )


@dataclass(frozen=True)
class TrainingSummary:
    records: int
    trim_report: Optional[TrimReport]
    stats: ModelStats


def train_from_records(
    records: Iterable[TrainingRecord],
    config: Optional[TrainingConfig] = None,
) -> Tuple[Lemmatizer, int]:
    """Train a fresh, untrimmed model; returns it with the number of records consumed."""
    cfg = config or TrainingConfig()
    cfg.validate()
    lemmatizer = Lemmatizer(cfg.max_suffix_size)
    consumed = lemmatizer.train_many(records)
    return lemmatizer, consumed


def train_model(
    corpus_path: Path,
    model_path: Path,
    config: Optional[TrainingConfig] = None,
) -> TrainingSummary:
    """Train on ``corpus_path``, optionally trim, and save the model to ``model_path``."""
    cfg = config or TrainingConfig()

    print(f"[train] Training model from dataset {corpus_path} (max suffix size {cfg.max_suffix_size}).", file=sys.stderr)
    lemmatizer, consumed = train_from_records(read_training_records(corpus_path), cfg)
    print(f"[train] Consumed {consumed} records.", file=sys.stderr)

    report: Optional[TrimReport] = None
    if cfg.trim:
        report = lemmatizer.trim()
        print(f"[train] Trimmed {report.total} zero-count entries.", file=sys.stderr)

    lemmatizer.save(model_path)
    print(f"[train] Saved model to {model_path}", file=sys.stderr)
    return TrainingSummary(records=consumed, trim_report=report, stats=lemmatizer.stats())


def trim_model_file(model_path: Path, output_path: Optional[Path] = None) -> TrimReport:
    """Trim a persisted model in place (or into ``output_path``)."""
    lemmatizer = Lemmatizer.load(model_path)
    report = lemmatizer.trim()
    destination = output_path or model_path
    lemmatizer.save(destination)
    print(f"[trim] Removed {report.total} entries; saved to {destination}", file=sys.stderr)
    return report


__all__ = ["TrainingConfig", "TrainingSummary", "train_from_records", "train_model", "trim_model_file"]
