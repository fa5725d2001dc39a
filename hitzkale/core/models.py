# hitzkale/core/models.py
"""
Value types shared by the matchers, the store and the query controller.

WordEntry   - one dictionary row, immutable once loaded
MatchResult - one (base, suffix) decomposition of a dictionary word
QueryKind   - base search vs. suffix search
QueryStatus - states of the query controller
QueryState  - immutable snapshot the presentation layer renders
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from typing_extensions import TypedDict

EntryId = Union[int, str]


class RawEntry(TypedDict):
    """Shape of a row in the static data files."""
    id: EntryId
    word: str
    translation: str


@dataclass(frozen=True)
class WordEntry:
    id: EntryId
    word: str
    translation: str


@dataclass(frozen=True)
class MatchResult:
    """
    A dictionary word split at a suffix boundary.
    Invariant: base + suffix == full_form.
    """
    id: str
    base: str
    suffix: str
    full_form: str
    translation: str

    def __post_init__(self) -> None:
        if not self.suffix:
            raise ValueError(f"empty suffix for {self.full_form!r}")
        if self.base + self.suffix != self.full_form:
            raise ValueError(
                f"{self.base!r} + {self.suffix!r} does not spell {self.full_form!r}"
            )


class QueryKind(str, Enum):
    BASE = "base"
    SUFFIX = "suffix"


class QueryStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    RESULTS = "results"
    NO_RESULTS = "no_results"
    FAILED = "failed"


@dataclass(frozen=True)
class QueryState:
    raw_input: str = ""
    active_term: Optional[str] = None
    kind: QueryKind = QueryKind.BASE
    status: QueryStatus = QueryStatus.IDLE
    results: Tuple[MatchResult, ...] = field(default_factory=tuple)
    selected: Optional[MatchResult] = None
    error: Optional[str] = None
    seq: int = 0

    @property
    def loading(self) -> bool:
        return self.status is QueryStatus.LOADING

    @property
    def is_suffix_search(self) -> bool:
        return self.kind is QueryKind.SUFFIX

    def find(self, result_id: str) -> Optional[MatchResult]:
        for r in self.results:
            if r.id == result_id:
                return r
        return None
