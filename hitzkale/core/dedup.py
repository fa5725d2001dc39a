# hitzkale/core/dedup.py
# Shared post-processing for both matchers: drop repeated full forms, then
# order the survivors with the collation key.

from __future__ import annotations

from typing import Iterable, Iterator, List, Literal, Set

from hitzkale.core.collation import sort_key
from hitzkale.core.models import MatchResult

SortField = Literal["suffix", "full_form"]


class SeenForms:
    """Case-insensitive set of full forms already emitted in one pass."""

    __slots__ = ("_seen",)

    def __init__(self) -> None:
        self._seen: Set[str] = set()

    def add(self, full_form: str) -> bool:
        """Record `full_form`; False if it was already there."""
        key = full_form.lower()
        if key in self._seen:
            return False
        self._seen.add(key)
        return True

    def __contains__(self, full_form: str) -> bool:
        return full_form.lower() in self._seen

    def __len__(self) -> int:
        return len(self._seen)


def dedupe_by_full_form(results: Iterable[MatchResult]) -> Iterator[MatchResult]:
    """Yield results whose full form has not been seen yet; first one wins."""
    seen = SeenForms()
    for r in results:
        if seen.add(r.full_form):
            yield r


def sort_results(results: Iterable[MatchResult], key: SortField) -> List[MatchResult]:
    """Stable sort on `suffix` or `full_form` using the collation key."""
    if key not in ("suffix", "full_form"):
        raise ValueError(f"cannot sort results by {key!r}")
    return sorted(results, key=lambda r: sort_key(getattr(r, key)))


def normalize_results(results: Iterable[MatchResult], key: SortField) -> List[MatchResult]:
    return sort_results(dedupe_by_full_form(results), key)
