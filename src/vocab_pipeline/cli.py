"""CLI entrypoint for building a frequency-ranked vocabulary TSV.

Expected inputs
- Frequency list: comma-separated, double-quoted ``"rank","word"`` lines after
  one header line, in increasing rank order.
- Dictionary: TEI XML as distributed by FreeDict, with ``entry/form/orth``
  headwords and ``entry/sense/cit/quote`` translations.

Output rows are ``"rank"\\t"word"\\t"headword: t1, t2"`` with one
``headword: ...`` line per dictionary sense (or entry with ``--group-by entry``)
whose headword folds to the same accent- and case-insensitive key.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from vocab_pipeline.dictionary.index import GroupBy
from vocab_pipeline.errors import VocabPipelineError
from vocab_pipeline.pipeline import PipelineResult, run_pipeline
from vocab_pipeline.reporting.report_md import build_report_md

DEFAULT_OUTPUT_PATH = Path("dist") / "italian-vocab.tsv"
LOG_FORMAT = "%(levelname)s: %(message)s"


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Configured parser for the build command.
    """

    parser = argparse.ArgumentParser(
        description="Join a ranked frequency list with a TEI dictionary into a study TSV."
    )
    parser.add_argument("frequency_list", type=Path, help="Path to the ranked frequency CSV.")
    parser.add_argument("dictionary", type=Path, help="Path to the TEI dictionary XML.")
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_PATH,
        help=f"Destination TSV path (default: {DEFAULT_OUTPUT_PATH}).",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional markdown report output path.",
    )
    parser.add_argument(
        "--group-by",
        choices=[item.value for item in GroupBy],
        default=GroupBy.SENSE.value,
        help="One translation line per dictionary sense or per entry (default: sense).",
    )
    parser.add_argument("--no-quote", action="store_true", help="Do not quote TSV fields.")
    parser.add_argument("--no-header", action="store_true", help="Do not write TSV header.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO).",
    )
    return parser


def _print_summary(result: PipelineResult) -> None:
    report = result.report
    print(f"Wrote {result.rows_written} rows to {result.output_path}")
    print(
        "Join summary: "
        f"records={report.records_read}, "
        f"duplicates={report.duplicates_suppressed}, "
        f"uncovered={report.uncovered}, "
        f"malformed_lines={report.malformed}, "
        f"skipped_entries={len(result.index.skipped)}"
    )
    if report.regressions:
        print(f"WARNING: {report.regressions} ranks did not increase over the previous line")


def main(argv: list[str] | None = None) -> int:
    """Run CLI workflow from arguments through TSV generation.

    Args:
        argv: Argument list; defaults to ``sys.argv[1:]``.

    Returns:
        Zero exit status on success.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    if not args.frequency_list.is_file():
        raise SystemExit(f"Frequency list not found: {args.frequency_list}")
    if not args.dictionary.is_file():
        raise SystemExit(f"Dictionary not found: {args.dictionary}")

    try:
        result = run_pipeline(
            frequency_path=args.frequency_list,
            dictionary_path=args.dictionary,
            output_path=args.output,
            group_by=GroupBy(args.group_by),
            quote_fields=not args.no_quote,
            include_header=not args.no_header,
        )
    except VocabPipelineError as exc:
        raise SystemExit(str(exc)) from exc

    if args.report is not None:
        try:
            args.report.parent.mkdir(parents=True, exist_ok=True)
            args.report.write_text(build_report_md(result), encoding="utf-8")
        except OSError as exc:
            raise SystemExit(f"Cannot write report {args.report}: {exc}") from exc
        print(f"Wrote report to {args.report}")

    _print_summary(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
