"""A set of unique strings that remembers insertion order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator


class DuplicateEntryError(ValueError):
    """Raised when adding a string that is already in the list."""


@dataclass
class StrNode:
    s: str
    priv: Any = None


class StrList:
    """Unique strings with fast lookup, iterated in the order they were added."""

    def __init__(self, entries: Iterable[str] | None = None) -> None:
        self._nodes: dict[str, StrNode] = {}
        for entry in entries or ():
            self.add(entry)

    def add(self, entry: str, priv: Any = None) -> StrNode:
        if entry in self._nodes:
            raise DuplicateEntryError(entry)
        node = StrNode(entry, priv)
        self._nodes[entry] = node
        return node

    def load(self, filename) -> None:
        """Add one entry per line of a text file; stops at the first duplicate."""
        with open(filename, encoding="utf-8") as fp:
            for line in fp:
                self.add(line[:-1] if line.endswith("\n") else line)

    def has_entry(self, entry: str) -> bool:
        return entry in self._nodes

    def remove(self, entry: str) -> None:
        del self._nodes[entry]

    def priv(self, entry: str) -> Any:
        """Private data attached to an entry."""
        return self._nodes[entry].priv

    def __contains__(self, entry: object) -> bool:
        return entry in self._nodes

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._nodes))

    def __len__(self) -> int:
        return len(self._nodes)