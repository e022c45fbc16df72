"""Node ids, batch-local indexing and record sources."""

from .indexing import NOT_FOUND, Indexing, create_indexings  # noqa: F401
from .node_id import classify_nodes, get_local_id, get_node_type, make_node_id  # noqa: F401
from .records import EdgeValue, IterableRecordSource, NodeValue, RecordSource  # noqa: F401

__all__ = [
    "NOT_FOUND",
    "Indexing",
    "create_indexings",
    "classify_nodes",
    "get_local_id",
    "get_node_type",
    "make_node_id",
    "EdgeValue",
    "NodeValue",
    "RecordSource",
    "IterableRecordSource",
]
