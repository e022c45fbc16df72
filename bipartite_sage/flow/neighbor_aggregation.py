"""
Neighbor Aggregation Flow - Feature and Graph Block Materialization
===================================================================

Turns sampled levels and batch-local indexings into tensors for a
GraphSAGE-style encoder.

Layout written into the instance:
- node / neighbor feature: float32 [|levels[-1]|, dim], rows follow the
  iteration order of levels[-1] (the order the last-level Indexing uses)
- self / neighbor blocks: one sparse COO tensor per hop i, shape
  [|levels[i]|, |levels[i+1]|]; the neighbor block carries 1/deg weights
- edges: int64 flat indices, positive pair then its negatives per edge
- labels: float32, 1.0 for positives and 0.0 for negatives

Feature lookup failures surface as GraphServiceError chained to the cause,
the same way the sampler reports them.

The flow decides tensor layout only. Which nodes appear and which index each
receives is decided by the reader.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Protocol, Sequence, Set

import torch
from torch import Tensor

from ..errors import GraphServiceError, IndexInconsistencyError, InstanceReaderError
from ..graph.client import GraphClient
from ..instance import Instance
from ..io.indexing import Indexing

logger = logging.getLogger(__name__)

IndexFn = Callable[[int], int]


class FeatureFlow(Protocol):
    """Interface the reader delegates tensor materialization to."""

    def fill_node_feature(self, inst: Instance, key: str, levels: Sequence[Set[int]]) -> None:
        ...

    def fill_neighbor_feature(self, inst: Instance, key: str, levels: Sequence[Set[int]]) -> None:
        ...

    def fill_self_and_neighbor_block(
        self,
        inst: Instance,
        self_key: str,
        neigh_key: str,
        levels: Sequence[Set[int]],
        neighbors: Sequence[Dict[int, List[int]]],
        indexings: Sequence[Indexing],
        directed: bool,
    ) -> None:
        ...

    def fill_edge_and_label(
        self,
        inst: Instance,
        src_key: str,
        dst_key: str,
        label_key: str,
        src: Sequence[int],
        dst: Sequence[int],
        negatives: Sequence[Sequence[int]],
        src_index_fn: IndexFn,
        dst_index_fn: IndexFn,
    ) -> None:
        ...


class NeighborAggregationFlow:
    """Reference FeatureFlow producing torch tensors from a GraphClient."""

    def __init__(self, graph_client: GraphClient) -> None:
        self.graph_client = graph_client

    def fill_node_feature(self, inst: Instance, key: str, levels: Sequence[Set[int]]) -> None:
        features = self._lookup("node", _last_level(levels))
        inst.set(key, torch.as_tensor(features, dtype=torch.float32))

    def fill_neighbor_feature(self, inst: Instance, key: str, levels: Sequence[Set[int]]) -> None:
        features = self._lookup("neighbor", _last_level(levels))
        inst.set(key, torch.as_tensor(features, dtype=torch.float32))

    def _lookup(self, kind: str, nodes: List[int]):
        lookup = (
            self.graph_client.lookup_node_features
            if kind == "node"
            else self.graph_client.lookup_neighbor_features
        )
        try:
            return lookup(nodes)
        except InstanceReaderError:
            raise
        except Exception as exc:
            raise GraphServiceError(
                f"{kind.capitalize()} feature lookup failed for {len(nodes)} nodes: {exc}"
            ) from exc

    def fill_self_and_neighbor_block(
        self,
        inst: Instance,
        self_key: str,
        neigh_key: str,
        levels: Sequence[Set[int]],
        neighbors: Sequence[Dict[int, List[int]]],
        indexings: Sequence[Indexing],
        directed: bool,
    ) -> None:
        if len(indexings) != len(levels):
            raise ValueError(
                f"Expected one indexing per level, got {len(indexings)} for {len(levels)} levels"
            )

        self_blocks: List[Tensor] = []
        neigh_blocks: List[Tensor] = []
        for hop, hop_neighbors in enumerate(neighbors):
            rows, cols = indexings[hop], indexings[hop + 1]
            shape = (len(rows), len(cols))

            self_rc = [(rows.get(node), cols.get(node)) for node in rows]
            self_blocks.append(_sparse(self_rc, [1.0] * len(self_rc), shape))

            neigh_rc = []
            weights = []
            for node in rows:
                neighs = hop_neighbors.get(node, [])
                if not directed:
                    neighs = [n for n in neighs if n != node]
                if not neighs:
                    continue
                weight = 1.0 / len(neighs)
                for neigh in neighs:
                    neigh_rc.append((rows.get(node), cols.get(neigh)))
                    weights.append(weight)
            neigh_blocks.append(_sparse(neigh_rc, weights, shape))

        inst.set(self_key, self_blocks)
        inst.set(neigh_key, neigh_blocks)

    def fill_edge_and_label(
        self,
        inst: Instance,
        src_key: str,
        dst_key: str,
        label_key: str,
        src: Sequence[int],
        dst: Sequence[int],
        negatives: Sequence[Sequence[int]],
        src_index_fn: IndexFn,
        dst_index_fn: IndexFn,
    ) -> None:
        if not (len(src) == len(dst) == len(negatives)):
            raise ValueError(
                f"src/dst/negatives length mismatch: {len(src)}/{len(dst)}/{len(negatives)}"
            )

        src_ids: List[int] = []
        dst_ids: List[int] = []
        labels: List[float] = []
        for src_node, dst_node, negs in zip(src, dst, negatives):
            src_index = src_index_fn(src_node)
            src_ids.append(src_index)
            dst_ids.append(dst_index_fn(dst_node))
            labels.append(1.0)
            for neg in negs:
                src_ids.append(src_index)
                dst_ids.append(dst_index_fn(neg))
                labels.append(0.0)

        inst.set(src_key, torch.tensor(src_ids, dtype=torch.int64))
        inst.set(dst_key, torch.tensor(dst_ids, dtype=torch.int64))
        inst.set(label_key, torch.tensor(labels, dtype=torch.float32))


def _last_level(levels: Sequence[Set[int]]) -> List[int]:
    return list(levels[-1]) if levels else []


def _sparse(coords: Sequence[tuple], values: Sequence[float], shape: tuple) -> Tensor:
    if any(r < 0 or c < 0 for r, c in coords):
        raise IndexInconsistencyError("Graph block references a node missing from the level indexing")
    if coords:
        indices = torch.tensor(coords, dtype=torch.int64).t()
    else:
        indices = torch.empty((2, 0), dtype=torch.int64)
    return torch.sparse_coo_tensor(
        indices, torch.tensor(values, dtype=torch.float32), size=shape
    ).coalesce()


__all__ = ["FeatureFlow", "IndexFn", "NeighborAggregationFlow"]
