# hitzkale/core/collation.py
# Locale-style sort keys. Raw code-point order puts "Z" before "a" and
# "á" after "z"; a dictionary reader expects neither.

from __future__ import annotations

import unicodedata
from functools import lru_cache
from typing import Tuple

SortKey = Tuple[str, str, Tuple[bool, ...], str]


def fold(text: str) -> str:
    """Strip diacritics and case: 'Ñandú' -> 'nandu'."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


@lru_cache(maxsize=4096)
def sort_key(text: str) -> SortKey:
    """
    Three-level key in the spirit of the Unicode collation algorithm:
     1. base letters, ignoring accents and case
     2. accents (decomposed, case-folded)
     3. case, lower before upper
    The raw string is the final tie-break so equal keys mean equal strings.
    """
    primary = fold(text)
    secondary = unicodedata.normalize("NFKD", text).casefold()
    tertiary = tuple(ch.isupper() for ch in text)
    return (primary, secondary, tertiary, text)


def compare(a: str, b: str) -> int:
    """-1, 0 or 1, like localeCompare."""
    ka, kb = sort_key(a), sort_key(b)
    return (ka > kb) - (ka < kb)
