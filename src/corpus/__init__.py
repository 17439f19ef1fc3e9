"""Corpus reading and streaming lemmatization."""

from .reader import TrainingRecord, iter_training_records, parse_training_line, read_training_records
from .stream import lemmatize_stream

__all__ = [
    "TrainingRecord",
    "iter_training_records",
    "lemmatize_stream",
    "parse_training_line",
    "read_training_records",
]
