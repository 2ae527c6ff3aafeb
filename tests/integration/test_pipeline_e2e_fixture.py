"""Integration tests running the full join on fixture files."""

from __future__ import annotations

from pathlib import Path

import pytest

from vocab_pipeline.cli import main
from vocab_pipeline.dictionary.index import GroupBy
from vocab_pipeline.errors import DictionarySourceUnreadable
from vocab_pipeline.pipeline import run_pipeline

FIXTURES = Path("tests/fixtures")


def test_run_pipeline_fixture_roundtrip(tmp_path: Path) -> None:
    """Fixture run should dedup folded words, skip bad lines and keep rank order."""

    output = tmp_path / "dist" / "italian-vocab.tsv"

    result = run_pipeline(
        frequency_path=FIXTURES / "mini_frequency.csv",
        dictionary_path=FIXTURES / "mini_dict.tei",
        output_path=output,
    )

    assert output.read_text(encoding="utf-8") == (
        "Frequency Rank\tItalian\tEnglish\n"
        '"1"\t"Perché"\t"perché: why\nperché: because"\n'
        '"2"\t"e"\t"è: is\ne: and"\n'
        '"12"\t"casa"\t"casa: house, home"\n'
    )
    assert result.rows_written == 3
    assert result.report.records_read == 6
    assert result.report.duplicates_suppressed == 2
    assert result.report.uncovered == 1
    assert [item.line_number for item in result.report.malformed_lines] == [5]
    assert len(result.index.skipped) == 2


def test_run_pipeline_entry_grouping_unquoted(tmp_path: Path) -> None:
    output = tmp_path / "out.tsv"

    run_pipeline(
        frequency_path=FIXTURES / "mini_frequency.csv",
        dictionary_path=FIXTURES / "mini_dict.tei",
        output_path=output,
        group_by=GroupBy.ENTRY,
        quote_fields=False,
        include_header=False,
    )

    assert output.read_text(encoding="utf-8").startswith("1\tPerché\tperché: why, because\n")


def test_run_pipeline_unreadable_dictionary_writes_no_output(tmp_path: Path) -> None:
    broken = tmp_path / "broken.tei"
    broken.write_text("not xml", encoding="utf-8")
    output = tmp_path / "out.tsv"

    with pytest.raises(DictionarySourceUnreadable):
        run_pipeline(
            frequency_path=FIXTURES / "mini_frequency.csv",
            dictionary_path=broken,
            output_path=output,
        )

    assert not output.exists()


def test_cli_writes_tsv_and_report(tmp_path: Path, capsys) -> None:
    output = tmp_path / "vocab.tsv"
    report = tmp_path / "report.md"

    status = main(
        [
            str(FIXTURES / "mini_frequency.csv"),
            str(FIXTURES / "mini_dict.tei"),
            "--output",
            str(output),
            "--report",
            str(report),
        ]
    )

    assert status == 0
    assert len(output.read_text(encoding="utf-8").splitlines()) == 6
    assert "# Vocabulary Join Report" in report.read_text(encoding="utf-8")
    assert f"Wrote 3 rows to {output}" in capsys.readouterr().out


def test_cli_exits_non_zero_for_missing_dictionary(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Dictionary not found"):
        main([str(FIXTURES / "mini_frequency.csv"), str(tmp_path / "missing.tei")])


def test_cli_exits_non_zero_for_unwritable_output(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Cannot write output"):
        main(
            [
                str(FIXTURES / "mini_frequency.csv"),
                str(FIXTURES / "mini_dict.tei"),
                "--output",
                str(tmp_path),
            ]
        )


def test_run_pipeline_continues_past_unclosed_quote_and_bad_encoding(tmp_path: Path) -> None:
    """Broken lines are reported one by one and the following words still join."""

    frequency = tmp_path / "freq.csv"
    frequency.write_bytes(
        b'"Rank","Word"\n"1","casa"\n"2","dell\n"3","perche"\n"4","caf\xe8"\n"5","e"\n'
    )
    output = tmp_path / "out.tsv"

    result = run_pipeline(
        frequency_path=frequency,
        dictionary_path=FIXTURES / "mini_dict.tei",
        output_path=output,
        quote_fields=False,
        include_header=False,
    )

    lines = output.read_text(encoding="utf-8").splitlines()
    words = [line.split("\t")[1] for line in lines if "\t" in line]
    assert words == ["casa", "perche", "e"]
    assert result.report.malformed == 2
    assert [item.line_number for item in result.report.malformed_lines] == [3, 5]


def test_cli_exits_non_zero_for_unwritable_report(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Cannot write report"):
        main(
            [
                str(FIXTURES / "mini_frequency.csv"),
                str(FIXTURES / "mini_dict.tei"),
                "--output",
                str(tmp_path / "vocab.tsv"),
                "--report",
                str(tmp_path),
            ]
        )
