"""
hitzkale.core

The search engine behind the explorer:
 - word store and trie index (DictionaryStore)
 - base -> suffixed forms and suffix -> words matchers
 - dedup + collation-aware ordering shared by both matchers
 - the query state machine (QueryController)
"""

from .models import WordEntry, MatchResult, QueryKind, QueryStatus, QueryState
from .dictionary import DictionaryStore
from .matchers import extract_suffixed_forms, find_words_ending_with
from .controller import QueryController, reduce
from .errors import (
    HitzkaleError,
    QueryError,
    EmptySuffixQuery,
    UnrecognizedSuffix,
    NoMatches,
    ProcessingFailure,
    DictionaryLoadError,
    DatasetImportError,
)

__all__ = [
    "WordEntry",
    "MatchResult",
    "QueryKind",
    "QueryStatus",
    "QueryState",
    "DictionaryStore",
    "extract_suffixed_forms",
    "find_words_ending_with",
    "QueryController",
    "reduce",
    "HitzkaleError",
    "QueryError",
    "EmptySuffixQuery",
    "UnrecognizedSuffix",
    "NoMatches",
    "ProcessingFailure",
    "DictionaryLoadError",
    "DatasetImportError",
]
