"""Repository exposing a parsed TEI dictionary and its lookup index."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from pathlib import Path

from vocab_pipeline.dictionary.index import DictionaryIndex, GroupBy, build_index
from vocab_pipeline.dictionary.parser import parse_tei_file
from vocab_pipeline.errors import DictionarySourceUnreadable
from vocab_pipeline.models import DictionaryEntry


@dataclass(frozen=True)
class DictionaryRepository:
    """Read-only, path-scoped view of one TEI dictionary.

    The document is parsed on first access and the index is built once from
    the cached entries. Instances are deterministic for a given file.
    """

    path: Path
    group_by: GroupBy = GroupBy.SENSE

    @cached_property
    def entries(self) -> tuple[DictionaryEntry, ...]:
        """Load and cache parsed entries from disk.

        Returns:
            Immutable tuple of entries in document order.

        Raises:
            DictionarySourceUnreadable: If the file is missing or unparseable.
        """

        if not self.path.is_file():
            raise DictionarySourceUnreadable(self.path, "file not found")
        return tuple(parse_tei_file(self.path))

    @cached_property
    def index(self) -> DictionaryIndex:
        """Build and cache the normalized-key index."""

        return build_index(self.entries, group_by=self.group_by)
