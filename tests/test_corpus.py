"""Tests for corpus parsing and stream lemmatization."""

from __future__ import annotations

import io
from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.corpus.reader import (
    TrainingRecord,
    clip_field,
    iter_training_records,
    parse_training_line,
    read_training_records,
)
from src.corpus.stream import lemmatize_stream
from src.suffixstats.errors import InvalidInputError
from src.suffixstats.model import Lemmatizer

CORPUS = "cats\tcat\t5\ndogs\tdog\t5\ncars\tcar\t3\n"


# ---------------------------------------------------------------------------
# Reader


def test_parse_training_line() -> None:
    record = parse_training_line(b"cats\tcat\t5\n", 1)
    assert record == TrainingRecord(inflected=b"cats", lemma=b"cat", count=5, line_number=1)


def test_parse_training_line_strips_fields() -> None:
    record = parse_training_line(b" dogs \t dog\t 2 \r\n", 4)
    assert record is not None
    assert (record.inflected, record.lemma, record.count) == (b"dogs", b"dog", 2)


@pytest.mark.parametrize(
    "line",
    [b"\n", b"cats\tcat\n", b"cats\tcat\t5\textra\n", b"cats cat 5\n", b"cats\tcat\tmany\n"],
)
def test_unparseable_lines_are_skipped(line: bytes) -> None:
    assert parse_training_line(line, 1) is None


def test_empty_field_raises_with_line_number() -> None:
    with pytest.raises(InvalidInputError, match="line 7"):
        parse_training_line(b"  \tcat\t5\n", 7)
    with pytest.raises(InvalidInputError):
        parse_training_line(b"cats\t\t5\n", 1)


@pytest.mark.parametrize("count", [b"0", b"-2"])
def test_non_positive_count_raises(count: bytes) -> None:
    with pytest.raises(InvalidInputError, match="line 3"):
        parse_training_line(b"cats\tcat\t" + count + b"\n", 3)


def test_clip_field_respects_codepoints() -> None:
    assert clip_field(b"a" * 2000) == b"a" * 1024
    assert clip_field(b"short") == b"short"

    wide = ("a" + "é" * 600).encode("utf-8")
    clipped = clip_field(wide)
    assert len(clipped) == 1023
    assert clipped.decode("utf-8") == "a" + "é" * 511


def test_iter_training_records_skips_bad_lines() -> None:
    lines = [b"cats\tcat\t5\n", b"garbage\n", b"dogs\tdog\t5\n", b"cats\tcat\t1\n"]
    records = list(iter_training_records(lines))

    assert [(r.inflected, r.count, r.line_number) for r in records] == [
        (b"cats", 5, 1),
        (b"dogs", 5, 3),
        (b"cats", 1, 4),
    ]


def test_read_training_records_from_file(tmp_path: Path) -> None:
    corpus = tmp_path / "train.tsv"
    corpus.write_text("jõed\tjõgi\t2\n" + CORPUS, encoding="utf-8")

    records = list(read_training_records(corpus))

    assert len(records) == 4
    assert records[0].inflected.decode("utf-8") == "jõed"


def test_duplicate_pairs_sum_through_training() -> None:
    lines = [b"cats\tcat\t2\n", b"cats\tcat\t3\n"]
    twice = Lemmatizer.from_records(iter_training_records(lines), max_suffix_size=4)
    once = Lemmatizer.from_records(iter_training_records([b"cats\tcat\t5\n"]), max_suffix_size=4)
    assert twice.store == once.store


# ---------------------------------------------------------------------------
# Stream lemmatization


class CountingSink(io.BytesIO):
    def __init__(self) -> None:
        super().__init__()
        self.flushes = 0

    def flush(self) -> None:
        self.flushes += 1
        super().flush()


def _animals() -> Lemmatizer:
    return Lemmatizer.from_records(iter_training_records(CORPUS.encode("utf-8").splitlines()), max_suffix_size=4)


def test_lemmatize_stream_preserves_order() -> None:
    sink = CountingSink()
    processed = lemmatize_stream(_animals(), [b"rats\n", b"  dogs \n", b"\n", b"xyz\n"], sink)

    assert processed == 4
    assert sink.getvalue() == b"rat\ndog\n\nxyz\n"
    assert sink.flushes == 1


def test_lemmatize_stream_flushes_each_line() -> None:
    sink = CountingSink()
    lemmatize_stream(_animals(), [b"rats\n", b"cars\n"], sink, flush=True)

    assert sink.getvalue() == b"rat\ncar\n"
    assert sink.flushes == 3


def test_lemmatize_stream_truncates_long_lines() -> None:
    sink = CountingSink()
    lemmatize_stream(Lemmatizer(), [b"x" * 1500 + b"\n"], sink)
    assert sink.getvalue() == b"x" * 1024 + b"\n"


def test_corpus_config_only_holds_field_limit() -> None:
    from src.corpus import config

    assert config.__all__ == ["MAX_FIELD_BYTES"]
    assert config.MAX_FIELD_BYTES == 1024
