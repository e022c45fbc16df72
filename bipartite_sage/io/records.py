"""
Record types and record sources.

The reader pulls fixed-size batches from a ``RecordSource``; an empty batch
signals end of stream.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import islice
from typing import Generic, Iterable, Iterator, List, Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@dataclass(frozen=True, slots=True)
class EdgeValue:
    """One observed positive edge; endpoints may be of either type."""

    src_node: int
    dst_node: int


@dataclass(frozen=True, slots=True)
class NodeValue:
    """One node to embed at inference time."""

    node: int


class RecordSource(Protocol[T_co]):
    def next_batch(self, max_size: int) -> List[T_co]:
        """Return up to ``max_size`` records; an empty list means end of stream."""

    def close(self) -> None:
        ...


class IterableRecordSource(Generic[T]):
    """Record source over any in-memory iterable."""

    def __init__(self, records: Iterable[T]) -> None:
        self._it: Iterator[T] = iter(records)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def next_batch(self, max_size: int) -> List[T]:
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        if self._closed:
            return []
        return list(islice(self._it, max_size))

    def close(self) -> None:
        if not self._closed:
            logger.debug("Closing record source")
        self._closed = True


__all__ = ["EdgeValue", "NodeValue", "RecordSource", "IterableRecordSource"]
