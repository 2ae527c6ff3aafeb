"""Normalized-key index over dictionary entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Iterable

from vocab_pipeline.errors import MalformedDictionary
from vocab_pipeline.models import Contribution, DictionaryEntry, SkippedEntry
from vocab_pipeline.normalize import normalize

logger = logging.getLogger(__name__)


class GroupBy(str, Enum):
    """How one dictionary entry is split into bucket contributions."""

    SENSE = "sense"
    ENTRY = "entry"


@dataclass(frozen=True)
class DictionaryIndex:
    """Read-only mapping from normalized key to ordered contributions.

    Buckets keep the source order of the entries that contributed to them, and
    several headword spellings may share one bucket (``è`` and ``e``).
    """

    buckets: dict[str, tuple[Contribution, ...]]
    entry_count: int = 0
    skipped: tuple[SkippedEntry, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.buckets)

    def __contains__(self, key: object) -> bool:
        return key in self.buckets

    def lookup(self, key: str) -> tuple[Contribution, ...]:
        """Return the bucket for an already-normalized ``key``; empty when absent."""

        return self.buckets.get(key, ())


def validate_entry(entry: DictionaryEntry, position: int) -> None:
    """Reject entries that cannot contribute to the index.

    Raises:
        MalformedDictionary: If the headword is blank or there are no senses.
    """

    if not entry.headword.strip():
        raise MalformedDictionary(position, entry.headword, "missing headword")
    if not entry.senses:
        raise MalformedDictionary(position, entry.headword, "no senses")


def entry_contributions(entry: DictionaryEntry, group_by: GroupBy) -> list[Contribution]:
    """Flatten an entry into bucket contributions.

    ``GroupBy.SENSE`` yields one contribution per sense with duplicate quotes
    removed (first occurrence wins). ``GroupBy.ENTRY`` yields a single
    contribution holding every sense's translations in sense order.
    """

    if group_by is GroupBy.ENTRY:
        translations = tuple(item for sense in entry.senses for item in sense.translations)
        return [Contribution(headword=entry.headword, translations=translations)]

    return [
        Contribution(headword=entry.headword, translations=tuple(dict.fromkeys(sense.translations)))
        for sense in entry.senses
    ]


def build_index(
    entries: Iterable[DictionaryEntry],
    group_by: GroupBy = GroupBy.SENSE,
) -> DictionaryIndex:
    """Group dictionary entries by normalized headword.

    Malformed entries are logged and recorded in ``DictionaryIndex.skipped``;
    the rest of the dictionary is still indexed.

    Args:
        entries: Parsed entries in source order.
        group_by: Contribution granularity.

    Returns:
        Built index.
    """

    buckets: dict[str, list[Contribution]] = {}
    skipped: list[SkippedEntry] = []
    count = 0

    for position, entry in enumerate(entries, start=1):
        count += 1
        try:
            validate_entry(entry, position)
        except MalformedDictionary as exc:
            logger.warning("Skipping dictionary entry: %s", exc)
            skipped.append(SkippedEntry(position=position, headword=entry.headword, reason=exc.reason))
            continue

        key = normalize(entry.headword)
        buckets.setdefault(key, []).extend(entry_contributions(entry, group_by))

    logger.info(
        "Indexed %d dictionary entries under %d keys (%d skipped)",
        count - len(skipped),
        len(buckets),
        len(skipped),
    )
    return DictionaryIndex(
        buckets={key: tuple(items) for key, items in buckets.items()},
        entry_count=count,
        skipped=tuple(skipped),
    )
