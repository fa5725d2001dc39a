# hitzkale/core/errors.py
"""
Exception hierarchy.

QueryError subclasses are scoped to a single query: the controller turns them
into a terminal state with a user-facing message and the next query starts
clean. DictionaryLoadError and DatasetImportError belong to load time and the
offline importer, never to search time.
"""

from __future__ import annotations

from typing import Iterable, Tuple


class HitzkaleError(Exception):
    """Base class for all errors raised by hitzkale."""


class QueryError(HitzkaleError):
    """An error that ends one query. `message` is shown to the user as-is."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EmptySuffixQuery(QueryError):
    def __init__(self, sentinel: str = "*") -> None:
        super().__init__(f"A suffix is required after '{sentinel}' to search by suffix.")


class UnrecognizedSuffix(QueryError):
    def __init__(self, suffix: str, allowed: Iterable[str]) -> None:
        self.suffix = suffix
        self.allowed: Tuple[str, ...] = tuple(allowed)
        super().__init__(
            f'"{suffix}" is not a recognized suffix for this search. '
            f"Use one of: {', '.join(self.allowed)}."
        )


class NoMatches(QueryError):
    """Well-formed query with an empty result set. Not a failure."""

    @classmethod
    def for_base(cls, base: str) -> "NoMatches":
        return cls(f"No suffixed forms found starting with '{base}'.")

    @classmethod
    def for_suffix(cls, suffix: str) -> "NoMatches":
        return cls(f"No words end with the suffix '{suffix}'.")


class ProcessingFailure(QueryError):
    def __init__(self, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__("An error occurred while searching for words.")


class DictionaryLoadError(HitzkaleError):
    """Malformed static data. Raised while building the store."""


class DatasetImportError(HitzkaleError):
    """Raised by the offline CSV importer."""
