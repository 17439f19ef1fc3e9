"""High-level lemmatizer wrapping the frequency store, trainer and inferencer.

The engine itself works on UTF-8 ``bytes``. This wrapper accepts either
``str`` or ``bytes`` and hands results back in the type it received, so
callers that already hold decoded text never touch the byte layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, TypeVar

from .config import DEFAULT_MAX_SUFFIX_SIZE
from .inferencer import Replacement, best_replacement
from .serialization import PathLike, dumps, load_model, loads, save_model
from .segmenter import WordLike, from_bytes, to_bytes
from .store import FrequencyStore, TrimReport
from .trainer import train

T_Word = TypeVar("T_Word", str, bytes)


class RecordLike(Protocol):
    """Anything carrying an inflected form, its lemma and a count."""

    inflected: WordLike
    lemma: WordLike
    count: int


@dataclass(frozen=True)
class ModelStats:
    """Summary of a model's configuration and table sizes."""

    max_suffix_size: int
    is_trimmed: bool
    lemma_entries: int
    inflected_entries: int
    replacement_keys: int
    replacement_entries: int


class Lemmatizer:
    """Statistical suffix replacement lemmatizer."""

    def __init__(
        self,
        max_suffix_size: int = DEFAULT_MAX_SUFFIX_SIZE,
        store: Optional[FrequencyStore] = None,
    ) -> None:
        self.store = store if store is not None else FrequencyStore(max_suffix_size)

    @classmethod
    def from_records(
        cls,
        records: Iterable[RecordLike],
        max_suffix_size: int = DEFAULT_MAX_SUFFIX_SIZE,
    ) -> "Lemmatizer":
        lemmatizer = cls(max_suffix_size)
        lemmatizer.train_many(records)
        return lemmatizer

    @classmethod
    def load(cls, path: PathLike) -> "Lemmatizer":
        return cls(store=load_model(path))

    @classmethod
    def deserialize(cls, data: bytes) -> "Lemmatizer":
        return cls(store=loads(data))

    @property
    def max_suffix_size(self) -> int:
        return self.store.max_suffix_size

    @property
    def is_trimmed(self) -> bool:
        return self.store.is_trimmed

    def train(self, inflected: WordLike, lemma: WordLike, count: int = 1) -> None:
        train(self.store, to_bytes(inflected), to_bytes(lemma), count)

    def train_many(self, records: Iterable[RecordLike]) -> int:
        """Train on every record; returns how many were consumed."""
        seen = 0
        for record in records:
            self.train(record.inflected, record.lemma, record.count)
            seen += 1
        return seen

    def lemmatize(self, inflected: T_Word) -> T_Word:
        found = best_replacement(self.store, to_bytes(inflected))
        if found is None:
            return inflected
        return from_bytes(found.lemma, inflected)

    def lemmatize_many(self, words: Iterable[T_Word]) -> List[T_Word]:
        return [self.lemmatize(word) for word in words]

    def explain(self, inflected: WordLike) -> Optional[Replacement]:
        """Return the winning replacement rule for ``inflected`` or None."""
        return best_replacement(self.store, to_bytes(inflected))

    def trim(self) -> TrimReport:
        return self.store.trim()

    def save(self, path: PathLike) -> Path:
        return save_model(self.store, path)

    def serialize(self) -> bytes:
        return dumps(self.store)

    def stats(self) -> ModelStats:
        sizes = self.store.table_sizes()
        return ModelStats(
            max_suffix_size=self.store.max_suffix_size,
            is_trimmed=self.store.is_trimmed,
            lemma_entries=sizes.lemma_entries,
            inflected_entries=sizes.inflected_entries,
            replacement_keys=sizes.replacement_keys,
            replacement_entries=sizes.replacement_entries,
        )


__all__ = ["Lemmatizer", "ModelStats", "RecordLike"]
