"""Exception hierarchy shared by the suffix statistics engine."""

from __future__ import annotations

from typing import Optional


class SuflemError(Exception):
    """Base class for every error raised by the engine."""


class DecodingError(SuflemError, ValueError):
    """Input bytes could not be segmented as UTF-8."""


class FrozenModelError(SuflemError, RuntimeError):
    """A trimmed model was asked to accept more counts."""


class InvalidInputError(SuflemError, ValueError):
    """Caller supplied a value outside the accepted domain."""


class ModelFormatError(InvalidInputError):
    """A persisted model does not follow the expected line layout."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        if line_number is not None:
            message = f"{message} (line {line_number})"
        super().__init__(message)
        self.line_number = line_number


__all__ = [
    "DecodingError",
    "FrozenModelError",
    "InvalidInputError",
    "ModelFormatError",
    "SuflemError",
]
