"""
Node Identifiers - Type Tag Encoding and Classification

WHAT: Packs (ns_id, local_id) into one 64-bit node id and splits mixed ids by type
WHERE: bipartite_sage/io/node_id.py - leaf of the reader stack
WHO: Batch builders partitioning endpoints, negatives and predict nodes
TIME: O(n) per classification pass, no allocation beyond the output lists

Layout: the high 16 bits carry the node-type tag (ns_id), the low 48 bits the
type-local id. Ids are plain Python ints so uint64 values survive verbatim.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

NODE_TYPE_BITS = 16
LOCAL_ID_BITS = 48
MAX_NODE_TYPE = (1 << NODE_TYPE_BITS) - 1
LOCAL_ID_MASK = (1 << LOCAL_ID_BITS) - 1


def make_node_id(ns_id: int, local_id: int) -> int:
    """Build a node id from its type tag and type-local id."""
    if not 0 <= ns_id <= MAX_NODE_TYPE:
        raise ValueError(f"ns_id out of range: {ns_id}")
    if not 0 <= local_id <= LOCAL_ID_MASK:
        raise ValueError(f"local_id out of range: {local_id}")
    return (ns_id << LOCAL_ID_BITS) | local_id


def get_node_type(node: int) -> int:
    return (node >> LOCAL_ID_BITS) & MAX_NODE_TYPE


def get_local_id(node: int) -> int:
    return node & LOCAL_ID_MASK


def classify_nodes(
    nodes: Iterable[int],
    user_ns_id: int,
    item_ns_id: int,
    user_nodes: Optional[List[int]] = None,
    item_nodes: Optional[List[int]] = None,
) -> Tuple[List[int], List[int]]:
    """
    Stable partition of ``nodes`` into user and item lists.

    Nodes whose tag matches neither registered type are logged and dropped.
    Pass ``user_nodes`` / ``item_nodes`` to accumulate across several calls.

    Returns:
        (user_nodes, item_nodes)
    """
    if user_nodes is None:
        user_nodes = []
    if item_nodes is None:
        item_nodes = []

    for node in nodes:
        group = get_node_type(node)
        if group == user_ns_id:
            user_nodes.append(node)
        elif group == item_ns_id:
            item_nodes.append(node)
        else:
            logger.error(
                "Invalid node: %d with ns_id: %d, expect %d or %d.",
                node,
                group,
                user_ns_id,
                item_ns_id,
            )
    return user_nodes, item_nodes


__all__ = [
    "NODE_TYPE_BITS",
    "LOCAL_ID_BITS",
    "classify_nodes",
    "get_local_id",
    "get_node_type",
    "make_node_id",
]
