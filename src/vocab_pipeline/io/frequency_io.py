"""Readers for ranked word-frequency lists."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterator

from vocab_pipeline.errors import MalformedFrequencyRecord
from vocab_pipeline.models import FrequencyRecord, RawFrequencyLine

REPLACEMENT_CHAR = "\ufffd"


def split_frequency_line(text: str) -> tuple[str, ...]:
    """Split one physical line into unquoted comma-separated fields.

    Raises:
        csv.Error: If a quoted field is not closed on this line or a closing
            quote is followed by stray characters.
    """

    return tuple(next(csv.reader([text], strict=True), []))


def read_frequency_lines(path: Path, skip_header: bool = True) -> Iterator[RawFrequencyLine]:
    """Lazily yield split, unquoted data lines from a comma-delimited list.

    The file is expected to look like ``"rank","word"`` per line with one header
    line. Each physical line is split on its own, so a broken line never
    swallows the next one. Lines that cannot be split or decoded are still
    yielded, carrying ``error`` and their raw text as the only field. Blank
    lines are ignored.

    Args:
        path: Frequency list path.
        skip_header: Whether the first line is a header.

    Yields:
        One ``RawFrequencyLine`` per data line, in file order.
    """

    with path.open("r", encoding="utf-8-sig", errors="replace") as handle:
        for line_number, raw in enumerate(handle, start=1):
            if line_number == 1 and skip_header:
                continue
            text = raw.rstrip("\r\n")
            if not text.strip():
                continue
            if REPLACEMENT_CHAR in text:
                yield RawFrequencyLine(line_number, (text,), error="invalid UTF-8")
                continue
            try:
                fields = split_frequency_line(text)
            except csv.Error as exc:
                yield RawFrequencyLine(line_number, (text,), error=f"unparseable line: {exc}")
                continue
            yield RawFrequencyLine(line_number=line_number, fields=fields)


def parse_frequency_record(line: RawFrequencyLine) -> FrequencyRecord:
    """Turn a raw line into a ``FrequencyRecord``.

    Only the first two fields are used; extra columns are ignored.

    Args:
        line: Split line from :func:`read_frequency_lines`.

    Returns:
        Parsed record.

    Raises:
        MalformedFrequencyRecord: If the reader flagged the line, fields are
            missing, the rank is not a positive ASCII integer, or the word is blank.
    """

    if line.error is not None:
        raise MalformedFrequencyRecord(line.line_number, line.fields, line.error)
    if len(line.fields) < 2:
        raise MalformedFrequencyRecord(line.line_number, line.fields, "expected rank and word fields")

    rank_field, word = line.fields[0].strip(), line.fields[1].strip()
    if not (rank_field.isascii() and rank_field.isdigit()):
        raise MalformedFrequencyRecord(
            line.line_number, line.fields, f"rank {rank_field!r} is not an integer"
        )
    rank = int(rank_field)
    if rank <= 0:
        raise MalformedFrequencyRecord(line.line_number, line.fields, f"rank {rank} is not positive")
    if not word:
        raise MalformedFrequencyRecord(line.line_number, line.fields, "empty word")

    return FrequencyRecord(rank=rank, word=word, line_number=line.line_number)
