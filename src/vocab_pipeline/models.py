"""Data models shared by the dictionary, join and output stages.

Every record is an immutable dataclass so stage boundaries stay explicit: the
dictionary parser produces entries, the index builder turns them into
contributions, and the joiner produces output rows plus a run report.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Sense:
    """One meaning of a headword with its translation quotes in source order."""

    translations: tuple[str, ...]


@dataclass(frozen=True)
class DictionaryEntry:
    """One headword record parsed from the source dictionary.

    ``headword`` keeps its original casing and diacritics. The parser may emit an
    entry with a blank headword or no senses; the index builder rejects those.
    """

    headword: str
    senses: tuple[Sense, ...]


@dataclass(frozen=True)
class Contribution:
    """One ``(headword, translations)`` item stored in an index bucket."""

    headword: str
    translations: tuple[str, ...]


@dataclass(frozen=True)
class RawFrequencyLine:
    """Split and unquoted fields of one frequency-list data line.

    ``error`` is set by the reader when the line could not be decoded or split;
    ``fields`` then holds the raw text only.
    """

    line_number: int
    fields: tuple[str, ...]
    error: str | None = None


@dataclass(frozen=True)
class FrequencyRecord:
    """One parsed frequency-list row."""

    rank: int
    word: str
    line_number: int


@dataclass(frozen=True)
class OutputRow:
    """Joined study-list row.

    ``word`` is the frequency-list spelling, not the dictionary spelling, and
    ``contributions`` is the whole bucket for the word's normalized key.
    """

    rank: int
    word: str
    contributions: tuple[Contribution, ...]


@dataclass(frozen=True)
class SkippedEntry:
    """Report item for a dictionary entry rejected by the index builder."""

    position: int
    headword: str
    reason: str


@dataclass(frozen=True)
class MalformedLine:
    """Report item for a frequency line that could not be parsed."""

    line_number: int
    fields: tuple[str, ...]
    reason: str


@dataclass(frozen=True)
class SuppressedDuplicate:
    """Report item for a frequency word folded onto an earlier word."""

    rank: int
    word: str
    first_rank: int
    first_word: str


@dataclass(frozen=True)
class UncoveredWord:
    """Report item for a frequency word with no dictionary bucket."""

    rank: int
    word: str


@dataclass(frozen=True)
class RankRegression:
    """Report item for a rank that does not increase over the previous one."""

    line_number: int
    rank: int
    previous_rank: int


@dataclass(frozen=True)
class JoinReport:
    """Diagnostics captured during one join pass.

    Every problem is counted. Only the first few items of each kind are kept
    as samples so the report stays bounded for large frequency lists.
    """

    records_read: int = 0
    rows_emitted: int = 0
    duplicates_suppressed: int = 0
    uncovered: int = 0
    malformed: int = 0
    regressions: int = 0
    malformed_lines: tuple[MalformedLine, ...] = field(default_factory=tuple)
    rank_regressions: tuple[RankRegression, ...] = field(default_factory=tuple)
    duplicate_samples: tuple[SuppressedDuplicate, ...] = field(default_factory=tuple)
    uncovered_samples: tuple[UncoveredWord, ...] = field(default_factory=tuple)
