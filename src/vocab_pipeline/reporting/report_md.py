"""Markdown report generation for join run summaries."""

from __future__ import annotations

from typing import Iterable, Sequence

from vocab_pipeline.pipeline import PipelineResult


def _cell(value: str) -> str:
    """Escape a value for use inside a markdown table cell."""

    return value.replace("|", "\\|").replace("\n", " ")


def _markdown_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a deterministic GitHub-flavored markdown table.

    Args:
        headers: Table header labels.
        rows: Table body rows as string sequences.

    Returns:
        Markdown table text.
    """

    line_header = "| " + " | ".join(headers) + " |"
    line_sep = "| " + " | ".join("---" for _ in headers) + " |"
    body = ["| " + " | ".join(_cell(value) for value in row) + " |" for row in rows]
    return "\n".join([line_header, line_sep, *body])


def build_report_md(result: PipelineResult) -> str:
    """Build the markdown report for one pipeline run.

    Args:
        result: Completed pipeline result.

    Returns:
        Full markdown content with summary and diagnostic tables.
    """

    index = result.index
    report = result.report

    summary_rows = [
        ("dictionary entries", str(index.entry_count)),
        ("dictionary entries skipped", str(len(index.skipped))),
        ("normalized keys", str(len(index))),
        ("frequency records read", str(report.records_read)),
        ("malformed frequency lines", str(report.malformed)),
        ("duplicates suppressed", str(report.duplicates_suppressed)),
        ("rank regressions", str(report.regressions)),
        ("words without dictionary coverage", str(report.uncovered)),
        ("rows written", str(result.rows_written)),
    ]

    skipped_rows = [(str(item.position), item.headword, item.reason) for item in index.skipped]
    malformed_rows = [
        (str(item.line_number), ", ".join(item.fields), item.reason)
        for item in report.malformed_lines
    ]
    regression_rows = [
        (str(item.line_number), str(item.rank), str(item.previous_rank))
        for item in report.rank_regressions
    ]
    duplicate_rows = [
        (str(item.rank), item.word, str(item.first_rank), item.first_word)
        for item in report.duplicate_samples
    ]
    uncovered_rows = [(str(item.rank), item.word) for item in report.uncovered_samples]

    sections = [
        "# Vocabulary Join Report",
        "",
        f"Output: `{result.output_path}`",
        "",
        "## Summary",
        _markdown_table(["metric", "value"], summary_rows),
        "",
        "## Skipped dictionary entries",
        _markdown_table(["position", "headword", "reason"], skipped_rows),
        "",
        f"## Malformed frequency lines (first {len(malformed_rows)} of {report.malformed})",
        _markdown_table(["line", "fields", "reason"], malformed_rows),
        "",
        f"## Rank regressions (first {len(regression_rows)} of {report.regressions})",
        _markdown_table(["line", "rank", "previous_rank"], regression_rows),
        "",
        f"## Suppressed duplicates (first {len(duplicate_rows)} of {report.duplicates_suppressed})",
        _markdown_table(["rank", "word", "first_rank", "first_word"], duplicate_rows),
        "",
        f"## Words without dictionary coverage (first {len(uncovered_rows)} of {report.uncovered})",
        _markdown_table(["rank", "word"], uncovered_rows),
    ]

    return "\n".join(sections) + "\n"
