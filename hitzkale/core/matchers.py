# hitzkale/core/matchers.py
"""
The two search directions over the dictionary.

extract_suffixed_forms(base, entries)
    words that extend `base` by a trailing fragment: "etxe" -> etxe + kide
find_words_ending_with(suffix, entries)
    words that end with `suffix`: "tegi" -> liburu + tegi

Both accept a DictionaryStore (candidates come from its tries) or any plain
sequence of WordEntry (linear scan). Results are deduplicated by full form,
first occurrence in source order wins, then sorted with the collation key.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from hitzkale.core.dedup import normalize_results
from hitzkale.core.dictionary import DictionaryStore
from hitzkale.core.models import MatchResult, WordEntry

logger = logging.getLogger(__name__)


def _is_boundary_char(ch: str) -> bool:
    return ch.isspace() or ch == "-"


def is_valid_suffix(fragment: str) -> bool:
    """
    A trailing fragment counts as a suffix only when it is a glued-on ending,
    not a separate word or the second half of a hyphenated compound.
    """
    if not fragment.strip():
        return False
    if _is_boundary_char(fragment[0]):
        return False
    return not any(ch.isspace() for ch in fragment)


def _prefix_candidates(lowered: str, entries: Sequence[WordEntry]) -> Iterable[WordEntry]:
    if isinstance(entries, DictionaryStore):
        return entries.starting_with(lowered)
    return entries


def _suffix_candidates(lowered: str, entries: Sequence[WordEntry]) -> Iterable[WordEntry]:
    if isinstance(entries, DictionaryStore):
        return entries.ending_with(lowered)
    return entries


def extract_suffixed_forms(base: str, entries: Sequence[WordEntry]) -> List[MatchResult]:
    """
    All entries whose word strictly extends `base` by a valid suffix,
    sorted by suffix.
    """
    needle = base.strip()
    if not needle:
        return []

    lowered = needle.lower()
    n = len(needle)
    forms: List[MatchResult] = []

    for entry in _prefix_candidates(lowered, entries):
        word = entry.word
        if len(word) <= n:
            continue
        if not word.lower().startswith(lowered) or word[:n].lower() != lowered:
            continue
        # character just before the boundary: "etxe-" or "lan " never count
        if _is_boundary_char(word[n - 1]):
            continue
        suffix = word[n:]
        if not is_valid_suffix(suffix):
            continue
        forms.append(
            MatchResult(
                id=f"{entry.id}-{word}",
                base=word[:n],
                suffix=suffix,
                full_form=word,
                translation=entry.translation,
            )
        )

    out = normalize_results(forms, "suffix")
    logger.debug("base %r: %d candidates, %d forms", needle, len(forms), len(out))
    return out


def find_words_ending_with(suffix: str, entries: Sequence[WordEntry]) -> List[MatchResult]:
    """
    All entries whose word ends with `suffix` (case-insensitive),
    split into (base, suffix) and sorted by full form.
    """
    if not suffix.strip():
        return []

    lowered = suffix.lower()
    n = len(suffix)
    forms: List[MatchResult] = []

    for entry in _suffix_candidates(lowered, entries):
        word = entry.word
        if len(word) < n:
            continue
        cut = len(word) - n
        if not word.lower().endswith(lowered) or word[cut:].lower() != lowered:
            continue
        forms.append(
            MatchResult(
                id=f"{entry.id}-{word}",
                base=word[:cut],
                suffix=word[cut:],
                full_form=word,
                translation=entry.translation,
            )
        )

    out = normalize_results(forms, "full_form")
    logger.debug("suffix %r: %d candidates, %d forms", suffix, len(forms), len(out))
    return out
