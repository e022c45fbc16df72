"""
Batch-local dense indexing.

An ``Indexing`` maps node ids to ``[0, size)`` in insertion order. Tables are
rebuilt from scratch for every batch and never updated across batches.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

NOT_FOUND = -1


class Indexing:
    """Bijection node id -> dense local index."""

    __slots__ = ("_index",)

    def __init__(self) -> None:
        self._index: Dict[int, int] = {}

    @classmethod
    def build(cls, nodes: Iterable[int]) -> "Indexing":
        """Build a table from ``nodes``; each node must appear at most once."""
        indexing = cls()
        for node in nodes:
            if node in indexing._index:
                raise ValueError(f"Duplicate node in indexing input: {node}")
            indexing._index[node] = len(indexing._index)
        return indexing

    def get(self, node: int) -> int:
        """Return the local index of ``node`` or ``NOT_FOUND`` (-1)."""
        return self._index.get(node, NOT_FOUND)

    def size(self) -> int:
        return len(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, node: object) -> bool:
        return node in self._index

    def __iter__(self) -> Iterator[int]:
        return iter(self._index)

    def items(self) -> Iterable[Tuple[int, int]]:
        return self._index.items()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={len(self._index)})"


def create_indexings(level_nodes: Sequence[Iterable[int]], indexings: List[Indexing]) -> List[Indexing]:
    """Replace the contents of ``indexings`` with one fresh table per level."""
    indexings[:] = [Indexing.build(nodes) for nodes in level_nodes]
    return indexings


__all__ = ["Indexing", "NOT_FOUND", "create_indexings"]
