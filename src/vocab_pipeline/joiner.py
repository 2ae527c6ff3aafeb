"""Join a ranked frequency list against the dictionary index."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Iterable, Iterator

from vocab_pipeline.dictionary.index import DictionaryIndex
from vocab_pipeline.errors import MalformedFrequencyRecord
from vocab_pipeline.io.frequency_io import parse_frequency_record
from vocab_pipeline.models import (
    FrequencyRecord,
    JoinReport,
    MalformedLine,
    OutputRow,
    RankRegression,
    RawFrequencyLine,
    SuppressedDuplicate,
    UncoveredWord,
)
from vocab_pipeline.normalize import normalize

logger = logging.getLogger(__name__)

REPORT_SAMPLE_LIMIT = 25


@dataclass
class FrequencyJoiner:
    """Single-pass joiner holding the shared index and its own seen-key state.

    One instance covers one run: ``seen`` grows monotonically while
    :meth:`join` is consumed and is never shared between joiners. Each key maps
    to the rank and spelling of the first word that claimed it.
    """

    index: DictionaryIndex
    sample_limit: int = REPORT_SAMPLE_LIMIT
    seen: dict[str, tuple[int, str]] = field(default_factory=dict)
    _records_read: int = field(default=0, init=False)
    _rows_emitted: int = field(default=0, init=False)
    _duplicates: int = field(default=0, init=False)
    _uncovered: int = field(default=0, init=False)
    _malformed_count: int = field(default=0, init=False)
    _regression_count: int = field(default=0, init=False)
    _last_rank: int | None = field(default=None, init=False)
    _malformed: list[MalformedLine] = field(default_factory=list, init=False)
    _regressions: list[RankRegression] = field(default_factory=list, init=False)
    _duplicate_samples: list[SuppressedDuplicate] = field(default_factory=list, init=False)
    _uncovered_samples: list[UncoveredWord] = field(default_factory=list, init=False)

    def join(self, lines: Iterable[RawFrequencyLine]) -> Iterator[OutputRow]:
        """Lazily yield one row per first-seen key that has dictionary coverage.

        Malformed lines are logged and skipped. A word whose key was already
        seen is suppressed even when the earlier word had no coverage.

        Args:
            lines: Raw frequency lines in rank order.

        Yields:
            Output rows in input order.
        """

        for line in lines:
            try:
                record = parse_frequency_record(line)
            except MalformedFrequencyRecord as exc:
                logger.warning("Skipping frequency line: %s", exc)
                self._malformed_count += 1
                if len(self._malformed) < self.sample_limit:
                    self._malformed.append(
                        MalformedLine(
                            line_number=exc.line_number, fields=exc.fields, reason=exc.reason
                        )
                    )
                continue

            row = self._join_record(record)
            if row is not None:
                self._rows_emitted += 1
                yield row

    def _join_record(self, record: FrequencyRecord) -> OutputRow | None:
        self._records_read += 1
        self._check_rank(record)

        key = normalize(record.word)
        first = self.seen.get(key)
        if first is not None:
            self._duplicates += 1
            if len(self._duplicate_samples) < self.sample_limit:
                self._duplicate_samples.append(
                    SuppressedDuplicate(
                        rank=record.rank,
                        word=record.word,
                        first_rank=first[0],
                        first_word=first[1],
                    )
                )
            return None
        self.seen[key] = (record.rank, record.word)

        bucket = self.index.lookup(key)
        if not bucket:
            self._uncovered += 1
            if len(self._uncovered_samples) < self.sample_limit:
                self._uncovered_samples.append(UncoveredWord(rank=record.rank, word=record.word))
            return None

        return OutputRow(rank=record.rank, word=record.word, contributions=bucket)

    def _check_rank(self, record: FrequencyRecord) -> None:
        previous = self._last_rank
        if previous is not None and record.rank <= previous:
            logger.warning(
                "Frequency line %d: rank %d does not increase over %d",
                record.line_number,
                record.rank,
                previous,
            )
            self._regression_count += 1
            if len(self._regressions) < self.sample_limit:
                self._regressions.append(
                    RankRegression(
                        line_number=record.line_number, rank=record.rank, previous_rank=previous
                    )
                )
        self._last_rank = record.rank

    @property
    def report(self) -> JoinReport:
        """Snapshot of the diagnostics collected so far."""

        return JoinReport(
            records_read=self._records_read,
            rows_emitted=self._rows_emitted,
            duplicates_suppressed=self._duplicates,
            uncovered=self._uncovered,
            malformed=self._malformed_count,
            regressions=self._regression_count,
            malformed_lines=tuple(self._malformed),
            rank_regressions=tuple(self._regressions),
            duplicate_samples=tuple(self._duplicate_samples),
            uncovered_samples=tuple(self._uncovered_samples),
        )
