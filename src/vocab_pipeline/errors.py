"""Exception taxonomy for the vocabulary pipeline.

``DictionarySourceUnreadable`` and ``OutputSinkUnwritable`` are fatal and
propagate to the CLI. ``MalformedDictionary`` and ``MalformedFrequencyRecord``
are raised per entry or per line and recovered by the stage that raised them.
"""

from __future__ import annotations

from pathlib import Path


class VocabPipelineError(Exception):
    """Base class for all pipeline errors."""


class DictionarySourceUnreadable(VocabPipelineError):
    """The dictionary file is missing, unreadable, or not a usable TEI document."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Dictionary source unreadable: {path}: {reason}")
        self.path = path
        self.reason = reason


class MalformedDictionary(VocabPipelineError):
    """One dictionary entry lacks a headword or senses."""

    def __init__(self, position: int, headword: str, reason: str) -> None:
        super().__init__(f"Dictionary entry #{position} ({headword!r}): {reason}")
        self.position = position
        self.headword = headword
        self.reason = reason


class MalformedFrequencyRecord(VocabPipelineError):
    """One frequency-list line does not hold a valid ``rank, word`` pair."""

    def __init__(self, line_number: int, fields: tuple[str, ...], reason: str) -> None:
        super().__init__(f"Frequency line {line_number}: {reason} (fields={list(fields)!r})")
        self.line_number = line_number
        self.fields = fields
        self.reason = reason


class OutputSinkUnwritable(VocabPipelineError):
    """The output TSV could not be created or written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot write output {path}: {reason}")
        self.path = path
        self.reason = reason
