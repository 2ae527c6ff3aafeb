"""TSV formatting and writing for the joined study list."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence, TextIO

from vocab_pipeline.errors import OutputSinkUnwritable
from vocab_pipeline.models import Contribution, OutputRow

TSV_HEADER = ["Frequency Rank", "Italian", "English"]


def format_translations(contributions: Sequence[Contribution]) -> str:
    """Render a bucket as ``headword: t1, t2`` lines, one per contribution."""

    return "\n".join(
        f"{item.headword}: {', '.join(item.translations)}" for item in contributions
    )


def format_row(row: OutputRow, quote_fields: bool = True) -> str:
    """Render one output row as a TSV line without the trailing newline.

    With ``quote_fields`` every cell is wrapped in double quotes so the
    translations cell may span several lines. Embedded quotes and tabs are
    written verbatim.

    Args:
        row: Joined row.
        quote_fields: Whether to wrap each cell in double quotes.

    Returns:
        Tab-separated line.
    """

    cells = [str(row.rank), row.word, format_translations(row.contributions)]
    if quote_fields:
        cells = [f'"{cell}"' for cell in cells]
    return "\t".join(cells)


def write_tsv(
    rows: Iterable[OutputRow],
    output_path: Path,
    include_header: bool = True,
    quote_fields: bool = True,
    header: Sequence[str] = TSV_HEADER,
) -> int:
    """Stream rows into a TSV file, creating the parent directory if needed.

    Args:
        rows: Rows to serialize; consumed lazily.
        output_path: Destination TSV file path.
        include_header: Whether to include the header line.
        quote_fields: Passed to :func:`format_row`.
        header: Column names for the header line.

    Returns:
        Number of rows written.

    Raises:
        OutputSinkUnwritable: If the file cannot be opened or written.
    """

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        handle = output_path.open("w", encoding="utf-8", newline="\n")
    except OSError as exc:
        raise OutputSinkUnwritable(output_path, str(exc)) from exc

    written = 0
    with handle:
        if include_header:
            _write_line(handle, output_path, "\t".join(header))
        # Rows are pulled one at a time so upstream readers stay lazy.
        for row in rows:
            _write_line(handle, output_path, format_row(row, quote_fields=quote_fields))
            written += 1
    return written


def _write_line(handle: TextIO, output_path: Path, line: str) -> None:
    try:
        handle.write(line)
        handle.write("\n")
    except OSError as exc:
        raise OutputSinkUnwritable(output_path, str(exc)) from exc
