"""Codepoint segmentation of UTF-8 byte strings.

Suffixes are always cut at codepoint boundaries, never inside a multi-byte
sequence. The segmenter only needs to know where each codepoint starts, so it
accepts the historical 5- and 6-byte forms and does not check that a lead byte
is followed by the right number of continuation bytes. The one exception is
the tail of the string: a sequence whose declared length runs past the end of
the data is reported as truncated.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple, Union

from .errors import DecodingError

Offsets = List[int]  # codepoint start offsets followed by the byte length
WordLike = Union[str, bytes]

# (shift, pattern, sequence length) for each recognised lead byte.
_LEAD_PATTERNS: Tuple[Tuple[int, int, int], ...] = (
    (7, 0x00, 1),
    (5, 0x06, 2),
    (4, 0x0E, 3),
    (3, 0x1E, 4),
    (2, 0x3E, 5),
    (1, 0x7E, 6),
)


def _sequence_length(byte: int) -> int:
    for shift, pattern, length in _LEAD_PATTERNS:
        if byte >> shift == pattern:
            return length
    return 0


def codepoint_offsets(data: bytes) -> Offsets:
    """Return the byte offset of every codepoint in ``data`` plus a final sentinel.

    The result is strictly increasing and always ends with ``len(data)``, so
    ``data[offsets[i]:]`` is the suffix starting at codepoint ``i`` and
    ``data[offsets[-1]:]`` is the empty suffix.

    Raises
    ------
    DecodingError
        If a byte is neither a lead byte nor a continuation byte, if the data
        starts with a continuation byte, or if the last sequence is cut short.
    """
    offsets: Offsets = []
    declared = 0
    for position, byte in enumerate(data):
        length = _sequence_length(byte)
        if length:
            offsets.append(position)
            declared = length
            continue
        if byte >> 6 != 0x2 or position == 0:
            raise DecodingError(f"Invalid UTF-8 byte 0x{byte:02x} at offset {position}.")

    if offsets and offsets[-1] + declared > len(data):
        raise DecodingError(f"Truncated UTF-8 sequence at offset {offsets[-1]}.")
    offsets.append(len(data))
    return offsets


def common_prefix_length(a: bytes, b: bytes, a_offsets: Sequence[int], b_offsets: Sequence[int]) -> int:
    """Count the leading codepoints that ``a`` and ``b`` share byte for byte.

    Both offset lists must come from :func:`codepoint_offsets` (sentinel included).
    """
    shared = min(len(a_offsets), len(b_offsets)) - 1
    for index in range(shared):
        if a[a_offsets[index] : a_offsets[index + 1]] != b[b_offsets[index] : b_offsets[index + 1]]:
            return index
    return shared


def to_bytes(word: WordLike) -> bytes:
    """Encode ``str`` input as UTF-8; pass ``bytes`` through untouched."""
    if isinstance(word, bytes):
        return word
    if isinstance(word, str):
        try:
            return word.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise DecodingError(f"Cannot encode {word!r} as UTF-8.") from exc
    raise TypeError(f"Expected str or bytes, received {type(word).__name__}")


def from_bytes(data: bytes, like: WordLike) -> WordLike:
    """Return ``data`` as the same type as ``like``."""
    if isinstance(like, str):
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodingError(f"Result {data!r} is not decodable as UTF-8.") from exc
    return data


__all__ = ["Offsets", "WordLike", "codepoint_offsets", "common_prefix_length", "from_bytes", "to_bytes"]
