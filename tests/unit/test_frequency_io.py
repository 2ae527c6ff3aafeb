"""Unit tests for frequency-list reading and record parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from vocab_pipeline.errors import MalformedFrequencyRecord
from vocab_pipeline.io.frequency_io import parse_frequency_record, read_frequency_lines
from vocab_pipeline.models import FrequencyRecord, RawFrequencyLine


def test_read_frequency_lines_skips_header_and_blank_lines(tmp_path: Path) -> None:
    path = tmp_path / "freq.csv"
    path.write_text('"Rank","Word"\n"1","di"\n\n"2","e"\n', encoding="utf-8")

    lines = list(read_frequency_lines(path))

    assert lines == [
        RawFrequencyLine(line_number=2, fields=("1", "di")),
        RawFrequencyLine(line_number=4, fields=("2", "e")),
    ]


def test_read_frequency_lines_tolerates_bom_and_keeps_header_when_asked(tmp_path: Path) -> None:
    path = tmp_path / "freq.csv"
    path.write_text('\ufeff"1","di"\n', encoding="utf-8")

    lines = list(read_frequency_lines(path, skip_header=False))

    assert lines == [RawFrequencyLine(line_number=1, fields=("1", "di"))]


def test_parse_frequency_record_returns_rank_and_surface_word() -> None:
    record = parse_frequency_record(RawFrequencyLine(7, ("12", "Casa", "1234")))

    assert record == FrequencyRecord(rank=12, word="Casa", line_number=7)


@pytest.mark.parametrize(
    ("fields", "reason"),
    [
        (("12",), "expected rank and word fields"),
        (("twelve", "casa"), "is not an integer"),
        (("1_000", "casa"), "is not an integer"),
        (("\u0661\u0662", "casa"), "is not an integer"),
        (("-3", "casa"), "is not an integer"),
        (("0", "casa"), "is not positive"),
        (("12", "  "), "empty word"),
    ],
)
def test_parse_frequency_record_rejects_malformed_lines(fields: tuple[str, ...], reason: str) -> None:
    with pytest.raises(MalformedFrequencyRecord, match=reason) as excinfo:
        parse_frequency_record(RawFrequencyLine(3, fields))

    assert excinfo.value.line_number == 3


def test_read_frequency_lines_isolates_unclosed_quote(tmp_path: Path) -> None:
    """An unterminated quote is confined to its own line."""

    path = tmp_path / "freq.csv"
    path.write_text('"Rank","Word"\n"1","casa"\n"2","dell\n"3","gatto"\n', encoding="utf-8")

    lines = list(read_frequency_lines(path))

    assert [line.line_number for line in lines] == [2, 3, 4]
    assert lines[1].fields == ('"2","dell',)
    assert lines[1].error is not None
    assert lines[2] == RawFrequencyLine(line_number=4, fields=("3", "gatto"))
    with pytest.raises(MalformedFrequencyRecord, match="unparseable line"):
        parse_frequency_record(lines[1])


def test_read_frequency_lines_flags_invalid_utf8(tmp_path: Path) -> None:
    path = tmp_path / "freq.csv"
    path.write_bytes(b'"Rank","Word"\n"2","caf\xe8"\n"3","gatto"\n')

    lines = list(read_frequency_lines(path))

    assert lines[0].error == "invalid UTF-8"
    assert lines[1] == RawFrequencyLine(line_number=3, fields=("3", "gatto"))
    with pytest.raises(MalformedFrequencyRecord, match="invalid UTF-8"):
        parse_frequency_record(lines[0])
