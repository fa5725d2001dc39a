# hitzkale/core/dictionary.py
"""
DictionaryStore - the read-only word list every query is matched against.

Built once at startup from one or more static sources, concatenated in source
order. No dedup happens here: two sources may both list the same word and the
matchers decide which occurrence wins. Malformed rows are an authoring problem
and are rejected while loading.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Mapping, Sequence, Tuple, Union, overload

from hitzkale.core.errors import DictionaryLoadError
from hitzkale.core.models import WordEntry
from hitzkale.core.trie import Trie

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_SOURCES = (DATA_DIR / "words.json", DATA_DIR / "verbs.json")

Source = Union[str, Path, Iterable[Union[Mapping[str, Any], WordEntry]]]


def _to_entry(row: Union[Mapping[str, Any], WordEntry], where: str) -> WordEntry:
    if isinstance(row, WordEntry):
        entry = row
    elif isinstance(row, Mapping):
        if "id" not in row:
            raise DictionaryLoadError(f"{where}: entry without an id: {dict(row)!r}")
        entry = WordEntry(
            id=row["id"],
            word=row.get("word"),  # type: ignore[arg-type]
            translation=row.get("translation", ""),
        )
    else:
        raise DictionaryLoadError(f"{where}: expected a mapping, got {type(row).__name__}")

    if isinstance(entry.id, bool) or not isinstance(entry.id, (int, str)):
        raise DictionaryLoadError(f"{where}: id must be an int or str, got {entry.id!r}")
    if not isinstance(entry.word, str) or not entry.word.strip():
        raise DictionaryLoadError(f"{where}: entry {entry.id!r} has no word")
    if not isinstance(entry.translation, str):
        raise DictionaryLoadError(f"{where}: entry {entry.id!r} has a non-text translation")
    return entry


def read_source(source: Source) -> List[WordEntry]:
    """Read one source: a JSON file path or an iterable of rows."""
    if isinstance(source, (str, Path)):
        path = Path(source)
        try:
            with open(path, "r", encoding="utf-8") as f:
                rows = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DictionaryLoadError(f"cannot read {path}: {e}") from e
        if not isinstance(rows, list):
            raise DictionaryLoadError(f"{path}: top-level JSON value must be a list")
        where = path.name
    else:
        rows = list(source)
        where = "<memory>"

    return [_to_entry(row, f"{where}[{i}]") for i, row in enumerate(rows)]


class DictionaryStore(Sequence[WordEntry]):
    """
    Ordered, immutable collection of WordEntry.
    Keeps two tries over entry positions:
     - prefix index over lower-cased words
     - suffix index over reversed lower-cased words
    """

    def __init__(self, entries: Iterable[WordEntry] = ()) -> None:
        self._entries: Tuple[WordEntry, ...] = tuple(entries)
        self._prefix = Trie()
        self._suffix = Trie(reverse=True)
        for pos, entry in enumerate(self._entries):
            self._prefix.insert(entry.word, pos)
            self._suffix.insert(entry.word, pos)
        logger.debug("dictionary store built with %d entries", len(self._entries))

    @classmethod
    def from_sources(cls, *sources: Source) -> "DictionaryStore":
        """Concatenate sources in the given order."""
        entries: List[WordEntry] = []
        for source in sources:
            loaded = read_source(source)
            logger.debug("loaded %d entries from %s", len(loaded), source if isinstance(source, (str, Path)) else "memory")
            entries.extend(loaded)
        return cls(entries)

    @classmethod
    def load_default(cls) -> "DictionaryStore":
        """The bundled Basque word and verb lists."""
        return cls.from_sources(*DEFAULT_SOURCES)

    # Sequence protocol ---------------------------------------------------------
    @overload
    def __getitem__(self, index: int) -> WordEntry: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[WordEntry, ...]: ...

    def __getitem__(self, index):
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[WordEntry]:
        return iter(self._entries)

    def __contains__(self, word: object) -> bool:
        """Case-insensitive word membership (accepts a WordEntry too)."""
        if isinstance(word, WordEntry):
            return word in self._entries
        if not isinstance(word, str):
            return False
        return word in self._prefix

    # candidate lookup ------------------------------------------------------------
    def starting_with(self, prefix: str) -> List[WordEntry]:
        """Entries whose lower-cased word starts with `prefix`, in source order."""
        return [self._entries[p] for p in self._prefix.search(prefix)]

    def ending_with(self, suffix: str) -> List[WordEntry]:
        """Entries whose lower-cased word ends with `suffix`, in source order."""
        return [self._entries[p] for p in self._suffix.search(suffix)]

    # introspection -----------------------------------------------------
    def words(self) -> List[str]:
        return [e.word for e in self._entries]

    def max_id(self) -> int:
        """Highest integer id, 0 if none are integers."""
        ids = [e.id for e in self._entries if isinstance(e.id, int)]
        return max(ids, default=0)
