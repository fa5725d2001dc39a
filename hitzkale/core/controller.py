# hitzkale/core/controller.py
"""
QueryController - the state machine behind the search box.

    IDLE --submit--> LOADING --> RESULTS | NO_RESULTS | FAILED
      ^                 |                    |
      +-----clear-------+--------------------+

State lives in an immutable QueryState and only changes through reduce(),
a pure function of (state, action), so every transition can be tested without
a UI. The controller owns the sequence counter: each submit and each clear
takes a new number, and a completion whose number is no longer current is
dropped. The last submitted query always wins.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from hitzkale.core.errors import (
    EmptySuffixQuery,
    NoMatches,
    ProcessingFailure,
    QueryError,
    UnrecognizedSuffix,
)
from hitzkale.core.matchers import extract_suffixed_forms, find_words_ending_with
from hitzkale.core.models import MatchResult, QueryKind, QueryState, QueryStatus, WordEntry

logger = logging.getLogger(__name__)

SUFFIX_SENTINEL = "*"
DEFAULT_SUFFIXES: Tuple[str, ...] = ("kide", "tegi", "kor", "tasun", "keria")
DEFAULT_LATENCY = 0.05

Listener = Callable[[QueryState], None]


# Actions ----------------------------------------------------------------------
@dataclass(frozen=True)
class Submitted:
    seq: int
    raw_input: str
    term: str
    kind: QueryKind


@dataclass(frozen=True)
class Completed:
    seq: int
    results: Tuple[MatchResult, ...] = ()
    error: Optional[QueryError] = None


@dataclass(frozen=True)
class Cleared:
    seq: int


@dataclass(frozen=True)
class Selected:
    result_id: str


Action = Union[Submitted, Completed, Cleared, Selected]


# Reducer -----------------------------------------------------------------------
def reduce(state: QueryState, action: Action) -> QueryState:
    """Return the next state. Returns `state` itself when nothing changes."""
    if isinstance(action, Cleared):
        return QueryState(seq=action.seq)

    if isinstance(action, Submitted):
        return QueryState(
            raw_input=action.raw_input,
            active_term=action.term,
            kind=action.kind,
            status=QueryStatus.LOADING,
            seq=action.seq,
        )

    if isinstance(action, Completed):
        # stale: a newer query (or a clear) was issued after this one
        if action.seq != state.seq or state.status is not QueryStatus.LOADING:
            return state
        if action.error is None and action.results:
            return replace(
                state,
                status=QueryStatus.RESULTS,
                results=tuple(action.results),
                selected=action.results[0],
                error=None,
            )
        if action.error is None or isinstance(action.error, NoMatches):
            message = action.error.message if action.error else None
            return replace(state, status=QueryStatus.NO_RESULTS, results=(), selected=None, error=message)
        return replace(state, status=QueryStatus.FAILED, results=(), selected=None, error=action.error.message)

    if isinstance(action, Selected):
        if state.status is not QueryStatus.RESULTS:
            return state
        chosen = state.find(action.result_id)
        if chosen is None or chosen == state.selected:
            return state
        return replace(state, selected=chosen)

    raise TypeError(f"unknown action: {action!r}")


@dataclass(frozen=True)
class Ticket:
    """A submitted query waiting for its matching step."""
    seq: int
    kind: QueryKind
    term: str


class QueryController:
    """
    Owns the current QueryState and dispatches queries to the matchers.
    Public API:
      submit_query(raw) -> QueryState
      submit_query_async(raw, latency=None) -> QueryState
      clear() -> QueryState
      select_result(result_id) -> bool
      subscribe(listener) -> unsubscribe callable
    begin()/finish() split a submit in two for callers that schedule the
    matching step themselves.
    """

    def __init__(
        self,
        entries: Sequence[WordEntry],
        suffixes: Iterable[str] = DEFAULT_SUFFIXES,
        sentinel: str = SUFFIX_SENTINEL,
        latency: float = DEFAULT_LATENCY,
    ) -> None:
        if not sentinel:
            raise ValueError("sentinel must be a non-empty string")
        self._entries = entries
        self._suffixes: Tuple[str, ...] = tuple(suffixes)
        self._allowed = frozenset(s.strip().lower() for s in self._suffixes)
        self._sentinel = sentinel
        self._latency = latency
        self._seq = 0
        self._state = QueryState()
        self._listeners: List[Listener] = []

    # properties ---------------------------------------------------------------
    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def suffixes(self) -> Tuple[str, ...]:
        return self._suffixes

    @property
    def sentinel(self) -> str:
        return self._sentinel

    @property
    def entries(self) -> Sequence[WordEntry]:
        return self._entries

    # listeners ---------------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(state)` after every state change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _dispatch(self, action: Action) -> QueryState:
        new_state = reduce(self._state, action)
        if new_state is not self._state:
            self._state = new_state
            for listener in list(self._listeners):
                listener(new_state)
        return self._state

    # classification ---------------------------------------------------------------
    def classify(self, text: str) -> Tuple[QueryKind, str]:
        """Split trimmed input into (kind, term); the sentinel selects suffix mode."""
        if text.startswith(self._sentinel):
            return QueryKind.SUFFIX, text[len(self._sentinel):]
        return QueryKind.BASE, text

    def is_recognized_suffix(self, suffix: str) -> bool:
        return suffix.lower() in self._allowed

    # two-step submit -----------------------------------------------------------------
    def begin(self, raw_input: str) -> Optional[Ticket]:
        """
        Enter LOADING for `raw_input` and return its ticket.
        Blank input clears instead and returns None.
        """
        text = raw_input.strip()
        if not text:
            self.clear()
            return None

        kind, term = self.classify(text)
        self._seq += 1
        ticket = Ticket(seq=self._seq, kind=kind, term=term)
        self._dispatch(Submitted(seq=ticket.seq, raw_input=raw_input, term=term, kind=kind))
        logger.debug("query #%d submitted: %s %r", ticket.seq, kind.value, term)
        return ticket

    def run(self, ticket: Ticket) -> Completed:
        """Match one ticket. Pure with respect to controller state."""
        t0 = time.perf_counter()
        try:
            results = self._match(ticket)
        except QueryError as e:
            return Completed(seq=ticket.seq, error=e)
        except Exception as e:
            logger.exception("query #%d failed while matching %r", ticket.seq, ticket.term)
            return Completed(seq=ticket.seq, error=ProcessingFailure(e))
        finally:
            logger.debug("query #%d matched in %.2f ms", ticket.seq, (time.perf_counter() - t0) * 1000)
        return Completed(seq=ticket.seq, results=tuple(results))

    def _match(self, ticket: Ticket) -> List[MatchResult]:
        if ticket.kind is QueryKind.SUFFIX:
            # only the emptiness test trims; "* kide" is not "kide"
            suffix = ticket.term
            if not suffix.strip():
                raise EmptySuffixQuery(self._sentinel)
            if not self.is_recognized_suffix(suffix):
                raise UnrecognizedSuffix(suffix, self._suffixes)
            results = find_words_ending_with(suffix, self._entries)
            if not results:
                raise NoMatches.for_suffix(suffix)
            return results

        results = extract_suffixed_forms(ticket.term, self._entries)
        if not results:
            raise NoMatches.for_base(ticket.term)
        return results

    def finish(self, ticket: Ticket) -> bool:
        """Run and commit `ticket`. False when a newer query made it stale."""
        if ticket.seq != self._seq:
            logger.debug("query #%d dropped before matching (current #%d)", ticket.seq, self._seq)
            return False
        completion = self.run(ticket)
        before = self._state
        after = self._dispatch(completion)
        return after is not before

    # public API ----------------------------------------------------------------------
    def submit_query(self, raw_input: str) -> QueryState:
        ticket = self.begin(raw_input)
        if ticket is not None:
            self.finish(ticket)
        return self._state

    async def submit_query_async(self, raw_input: str, latency: Optional[float] = None) -> QueryState:
        """
        Same as submit_query with a deferred matching step, as a UI would run
        it. A newer submit or clear during the wait discards this one.
        """
        ticket = self.begin(raw_input)
        if ticket is None:
            return self._state
        delay = self._latency if latency is None else latency
        if delay > 0:
            await asyncio.sleep(delay)
        else:
            await asyncio.sleep(0)
        self.finish(ticket)
        return self._state

    def clear(self) -> QueryState:
        self._seq += 1
        return self._dispatch(Cleared(seq=self._seq))

    def select_result(self, result_id: str) -> bool:
        """Move the selection within the current results; unknown ids are ignored."""
        before = self._state
        after = self._dispatch(Selected(result_id=result_id))
        if after is before and before.find(result_id) is None:
            logger.debug("select ignored: %r is not in the current results", result_id)
        return after.selected is not None and after.selected.id == result_id
