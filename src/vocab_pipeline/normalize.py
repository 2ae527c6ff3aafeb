"""Lookup-key normalization shared by the dictionary and frequency sides."""

from __future__ import annotations

import re
import unicodedata

COMBINING_DIACRITICS_RE = re.compile(r"[\u0300-\u036f]")


def strip_diacritics(word: str) -> str:
    """Decompose ``word`` (NFD) and drop Combining Diacritical Marks.

    Case is preserved, e.g. ``Perché`` becomes ``Perche``.
    """

    return COMBINING_DIACRITICS_RE.sub("", unicodedata.normalize("NFD", word))


def normalize(word: str) -> str:
    """Return the canonical lookup key for ``word``.

    The key is the lowercased, diacritic-stripped form. Lowercasing happens
    first because some uppercase letters lowercase to a base letter plus a
    combining mark (``İ`` lowercases to ``i`` + U+0307), and stripping afterwards keeps
    ``normalize(normalize(x)) == normalize(x)``.

    Args:
        word: Surface word from either the dictionary or the frequency list.

    Returns:
        Normalized key used for indexing and deduplication.
    """

    return strip_diacritics(word.lower())
