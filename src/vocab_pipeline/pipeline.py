"""Top-level orchestration: build the dictionary index, then stream the join."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from vocab_pipeline.dictionary.index import DictionaryIndex, GroupBy
from vocab_pipeline.dictionary.repository import DictionaryRepository
from vocab_pipeline.io.frequency_io import read_frequency_lines
from vocab_pipeline.io.tsv_io import write_tsv
from vocab_pipeline.joiner import FrequencyJoiner
from vocab_pipeline.models import JoinReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """Result bundle returned by :func:`run_pipeline`.

    Attributes:
        output_path: TSV file that was written.
        rows_written: Number of data rows in the TSV.
        index: Dictionary index used for the join.
        report: Join diagnostics.
    """

    output_path: Path
    rows_written: int
    index: DictionaryIndex
    report: JoinReport


def run_pipeline(
    frequency_path: Path,
    dictionary_path: Path,
    output_path: Path,
    group_by: GroupBy = GroupBy.SENSE,
    quote_fields: bool = True,
    include_header: bool = True,
) -> PipelineResult:
    """Execute the full dictionary/frequency join.

    The dictionary is parsed and indexed before the output file is opened, so
    an unreadable dictionary aborts the run without producing output.

    Args:
        frequency_path: Ranked frequency list (CSV with header).
        dictionary_path: TEI dictionary file.
        output_path: Destination TSV path.
        group_by: Contribution granularity for the index.
        quote_fields: Whether to quote every output cell.
        include_header: Whether to write the TSV header line.

    Returns:
        ``PipelineResult`` with the row count, index and join report.

    Raises:
        DictionarySourceUnreadable: If the dictionary cannot be loaded.
        OutputSinkUnwritable: If the TSV cannot be written.
    """

    logger.info("Loading dictionary %s", dictionary_path)
    index = DictionaryRepository(dictionary_path, group_by=group_by).index

    logger.info("Joining frequency list %s", frequency_path)
    joiner = FrequencyJoiner(index)
    rows_written = write_tsv(
        joiner.join(read_frequency_lines(frequency_path)),
        output_path=output_path,
        include_header=include_header,
        quote_fields=quote_fields,
    )

    return PipelineResult(
        output_path=output_path,
        rows_written=rows_written,
        index=index,
        report=joiner.report,
    )
