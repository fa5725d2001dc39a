# hitzkale/presentation.py
# Display projections over a QueryState. Nothing here is stored back into
# the state: callers recompute these on every render.

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from hitzkale.core.collation import sort_key
from hitzkale.core.models import MatchResult, QueryKind, QueryState, QueryStatus

MEANING_SEPARATOR = "//"


def split_meanings(translation: Optional[str]) -> List[str]:
    """'casa // hogar' -> ['casa', 'hogar']"""
    if not translation:
        return []
    return [part.strip() for part in translation.split(MEANING_SEPARATOR) if part.strip()]


def initial_of(result: MatchResult) -> str:
    return result.full_form[:1].upper()


def group_by_initial(results: Iterable[MatchResult]) -> Dict[str, List[MatchResult]]:
    """
    Bucket results by the upper-cased first letter of the full form.
    Groups are ordered by collation, members keep their incoming order.
    """
    grouped: Dict[str, List[MatchResult]] = {}
    for r in results:
        grouped.setdefault(initial_of(r), []).append(r)
    return {letter: grouped[letter] for letter in sorted(grouped, key=sort_key)}


def describe_result(result: MatchResult, kind: QueryKind) -> str:
    """List label: '-kide (etxekide)' for base searches, the word for suffix searches."""
    if kind is QueryKind.SUFFIX:
        return result.full_form
    return f"-{result.suffix} ({result.full_form})"


def heading(state: QueryState) -> str:
    if state.active_term is None:
        return ""
    if state.kind is QueryKind.SUFFIX:
        return f"Suffix: {state.active_term.strip()}"
    return state.active_term


def status_line(state: QueryState) -> str:
    if state.status is QueryStatus.IDLE:
        return "Enter a word (e.g. 'etxe') or a suffix (e.g. '*kide') and press Enter."
    if state.status is QueryStatus.LOADING:
        return "Searching..."
    if state.status is QueryStatus.RESULTS:
        n = len(state.results)
        noun = "word" if state.kind is QueryKind.SUFFIX else "suffixed form"
        return f"{n} {noun}{'s' if n != 1 else ''} found."
    return state.error or ""
