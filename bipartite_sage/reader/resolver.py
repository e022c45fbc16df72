"""Unified user/item index resolution."""

from __future__ import annotations

from typing import Sequence

from ..errors import IndexInconsistencyError
from ..io.indexing import Indexing
from ..io.node_id import get_node_type


class UnifiedIndexResolver:
    """
    Maps a node to one flat index over both type-scoped tables.

    User nodes keep their level-0 user index; every other node resolves
    through the item table and is offset by the user table size. Build the
    resolver only after both encoders have been filled for the batch.
    """

    __slots__ = ("user_indexing", "item_indexing", "user_ns_id")

    def __init__(self, user_indexing: Indexing, item_indexing: Indexing, user_ns_id: int) -> None:
        self.user_indexing = user_indexing
        self.item_indexing = item_indexing
        self.user_ns_id = user_ns_id

    @classmethod
    def from_levels(
        cls,
        user_indexings: Sequence[Indexing],
        item_indexings: Sequence[Indexing],
        user_ns_id: int,
    ) -> "UnifiedIndexResolver":
        if not user_indexings or not item_indexings:
            raise IndexInconsistencyError(
                "Index tables are not built; fill both encoders before resolving"
            )
        return cls(user_indexings[0], item_indexings[0], user_ns_id)

    @property
    def offset(self) -> int:
        return self.user_indexing.size()

    @property
    def size(self) -> int:
        return self.user_indexing.size() + self.item_indexing.size()

    def resolve(self, node: int) -> int:
        if get_node_type(node) == self.user_ns_id:
            index = self.user_indexing.get(node)
            if index < 0:
                raise IndexInconsistencyError(f"User node {node} was never indexed")
            return index

        index = self.item_indexing.get(node)
        if index < 0:
            raise IndexInconsistencyError(f"Item node {node} was never indexed")
        return index + self.offset

    __call__ = resolve
