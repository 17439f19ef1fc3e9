"""Suffix statistics engine: training, trimming, persistence and lemmatization."""

from .errors import DecodingError, FrozenModelError, InvalidInputError, ModelFormatError, SuflemError
from .inferencer import Replacement, best_replacement, lemmatize
from .model import Lemmatizer, ModelStats
from .segmenter import codepoint_offsets, common_prefix_length
from .serialization import dump, dumps, load, load_model, loads, save_model
from .store import CountPair, FrequencyStore, TrimReport
from .trainer import train

__all__ = [
    "CountPair",
    "DecodingError",
    "FrequencyStore",
    "FrozenModelError",
    "InvalidInputError",
    "Lemmatizer",
    "ModelFormatError",
    "ModelStats",
    "Replacement",
    "SuflemError",
    "TrimReport",
    "best_replacement",
    "codepoint_offsets",
    "common_prefix_length",
    "dump",
    "dumps",
    "lemmatize",
    "load",
    "load_model",
    "loads",
    "save_model",
    "train",
]
