# core/naming/name_accumulator.py
"""
Name Accumulator
================
Collects token → characters associations from every name source
during an index build. Lives only as long as the build does.
"""
from typing import Dict, Iterable, Iterator, Set, Tuple
from core.naming.name_tokenizer import tokenize

class NameAccumulator:
    """Token to character set map, iterated in token order."""

    def __init__(self):
        self._map: Dict[str, Set[str]] = {}

    def insert(self, names: Iterable[str], ch: str):
        """Insert a character under every token of each of its names."""
        for name in names:
            for token in tokenize(name):
                self._map.setdefault(token, set()).add(ch)

    def get(self, token: str) -> Set[str]:
        """Characters currently filed under a token (empty if absent)."""
        return set(self._map.get(token, ()))

    def iter_sorted(self) -> Iterator[Tuple[str, Tuple[str, ...]]]:
        """
        Yield (token, characters) with tokens in ascending order and each
        token's characters in ascending code point order.

        Iteration order is independent of insertion order, which keeps
        build artifacts byte-identical between runs.
        """
        for token in sorted(self._map):
            yield token, tuple(sorted(self._map[token]))

    def __contains__(self, token: str) -> bool:
        return token in self._map

    def __len__(self) -> int:
        return len(self._map)

    def __eq__(self, other) -> bool:
        if not isinstance(other, NameAccumulator):
            return NotImplemented
        return self._map == other._map
