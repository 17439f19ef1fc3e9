"""Training and evaluation pipelines built on the suffix statistics engine."""

from .evaluation import EvaluationResult, evaluate_lemmatizer
from .training import TrainingConfig, TrainingSummary, train_from_records, train_model, trim_model_file

__all__ = [
    "EvaluationResult",
    "TrainingConfig",
    "TrainingSummary",
    "evaluate_lemmatizer",
    "train_from_records",
    "train_model",
    "trim_model_file",
]
