# trie.py
# Prefix tree over dictionary words, mapping each key to the positions of the
# entries that spell it. Used by the DictionaryStore to fetch prefix and
# suffix candidates without scanning every entry.

from __future__ import annotations
from collections import defaultdict
from typing import Dict, List


class TrieNode:
    """
    A single node in the Trie.
    children: char -> TrieNode
    positions: entry positions whose key ends at this node (source order)
    """

    __slots__ = ("children", "positions")

    def __init__(self) -> None:
        self.children: Dict[str, TrieNode] = defaultdict(TrieNode)
        self.positions: List[int] = []


class Trie:
    """
    Trie keyed by lower-cased words.
    With reverse=True keys are stored back to front, so a suffix lookup
    becomes a prefix walk.
    """

    def __init__(self, reverse: bool = False) -> None:
        self._root = TrieNode()
        self._reverse = reverse
        self._count = 0

    def _key(self, text: str) -> str:
        key = text.lower()
        return key[::-1] if self._reverse else key

    # insertion -----------------------------------------------------
    def insert(self, word: str, position: int) -> None:
        """Record that the entry at `position` spells `word`."""
        if not word:
            return

        node = self._root
        for ch in self._key(word):
            node = node.children[ch]
        node.positions.append(position)
        self._count += 1

    # search/traversal ---------------------------------------------------------
    def search(self, fragment: str) -> List[int]:
        """
        Return positions of every key that starts with `fragment`
        (ends with it, for a reversed trie), ascending.
        """
        if not fragment:
            return []

        node = self._root
        for ch in self._key(fragment):
            nxt = node.children.get(ch)
            if nxt is None:
                return []
            node = nxt

        out: List[int] = []
        self._collect(node, out)
        out.sort()
        return out

    def _collect(self, node: TrieNode, results: List[int]) -> None:
        """DFS collecting positions under a node."""
        stack = [node]
        while stack:
            cur = stack.pop()
            results.extend(cur.positions)
            stack.extend(cur.children.values())

    # convenience -----------------------------------------------------
    def __len__(self) -> int:
        return self._count

    def __contains__(self, word: str) -> bool:
        """Exact (case-insensitive) membership check."""
        node = self._root
        for ch in self._key(word):
            node = node.children.get(ch)
            if node is None:
                return False
        return bool(node.positions)
