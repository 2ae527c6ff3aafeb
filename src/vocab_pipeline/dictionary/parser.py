"""Parsing utilities for TEI bilingual dictionaries (FreeDict layout)."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from lxml import etree

from vocab_pipeline.errors import DictionarySourceUnreadable
from vocab_pipeline.models import DictionaryEntry, Sense


def _local_name(element: etree._Element) -> str | None:
    """Return the namespace-free tag name, or ``None`` for comments/PIs."""

    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def _children(element: etree._Element, name: str) -> Iterator[etree._Element]:
    """Yield direct children whose local tag name equals ``name``."""

    for child in element:
        if _local_name(child) == name:
            yield child


def _first_child(element: etree._Element, name: str) -> etree._Element | None:
    return next(_children(element, name), None)


def _text(element: etree._Element) -> str:
    """Return the element's full text content with outer whitespace trimmed."""

    return "".join(element.itertext()).strip()


def parse_entry(entry_element: etree._Element) -> DictionaryEntry:
    """Convert one ``<entry>`` element into a :class:`DictionaryEntry`.

    The headword is the first ``form/orth``. Each ``sense`` contributes the text
    of every ``cit/quote`` it holds; senses without any non-empty quote are
    dropped. Missing parts produce an empty headword or empty senses rather
    than an error so the index builder can decide how to handle them.

    Args:
        entry_element: TEI ``entry`` element.

    Returns:
        Parsed entry.
    """

    headword = ""
    form = _first_child(entry_element, "form")
    if form is not None:
        orth = _first_child(form, "orth")
        if orth is not None:
            headword = _text(orth)

    senses: list[Sense] = []
    for sense_element in _children(entry_element, "sense"):
        translations = [
            _text(quote)
            for cit in _children(sense_element, "cit")
            for quote in _children(cit, "quote")
        ]
        translations = [item for item in translations if item]
        if translations:
            senses.append(Sense(translations=tuple(translations)))

    return DictionaryEntry(headword=headword, senses=tuple(senses))


def parse_tei_root(root: etree._Element, source: Path | str = "<memory>") -> list[DictionaryEntry]:
    """Parse all entries under ``TEI/text/body``.

    Args:
        root: Document root element (``TEI``).
        source: Path used in error messages.

    Returns:
        Entries in document order.

    Raises:
        DictionarySourceUnreadable: If the document has no ``text/body`` section.
    """

    if _local_name(root) != "TEI":
        raise DictionarySourceUnreadable(Path(source), f"unexpected root element {root.tag!r}")
    text = _first_child(root, "text")
    body = _first_child(text, "body") if text is not None else None
    if body is None:
        raise DictionarySourceUnreadable(Path(source), "missing TEI text/body section")

    return [parse_entry(element) for element in _children(body, "entry")]


def parse_tei_file(path: Path) -> list[DictionaryEntry]:
    """Read and parse a TEI dictionary file.

    Args:
        path: TEI XML file path.

    Returns:
        Entries in document order.

    Raises:
        DictionarySourceUnreadable: If the file cannot be read or parsed.
    """

    try:
        tree = etree.parse(str(path))
    except OSError as exc:
        raise DictionarySourceUnreadable(path, str(exc)) from exc
    except etree.XMLSyntaxError as exc:
        raise DictionarySourceUnreadable(path, f"invalid XML: {exc}") from exc
    return parse_tei_root(tree.getroot(), source=path)
