"""
Graph Client - Sampling and Feature Lookup Interface

WHAT: Protocol for the graph-serving collaborator plus an in-process implementation
WHERE: bipartite_sage/graph/client.py - boundary between reader and graph store
WHO: SubgraphSampler (negatives, k-hop expansion) and NeighborAggregationFlow (features)
TIME: In-memory sampling O(sum of fanouts) per seed; remote clients block the caller

The reader owns no sampling logic. It only decides how many negatives and hops
to request; sampling probabilities belong to the client.

Subgraph contract:
- levels[0] is the seed set
- levels[i + 1] = levels[i] plus every neighbor sampled at hop i
- neighbors[i] maps each node of levels[i] to its sampled neighbor list

Boundary Notes:
- Remote implementations may raise on timeouts; the reader never retries
- InMemoryGraphClient is seeded so batches are reproducible in tests
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Set, Tuple

import numpy as np

logger = logging.getLogger(__name__)

LevelNodes = List[Set[int]]
LevelNeighbors = List[Dict[int, List[int]]]


class GraphClient(Protocol):
    """Interface consumed from the graph-serving collaborator."""

    def sample_negatives(
        self,
        k: int,
        anchors: Sequence[int],
        pool: Sequence[int],
    ) -> List[List[int]]:
        ...

    def sample_subgraph(
        self,
        seeds: Sequence[int],
        fanouts: Sequence[int],
    ) -> Tuple[LevelNodes, LevelNeighbors]:
        ...

    def lookup_node_features(self, nodes: Sequence[int]) -> np.ndarray:
        ...

    def lookup_neighbor_features(self, nodes: Sequence[int]) -> np.ndarray:
        ...


class InMemoryGraphClient:
    """
    Graph client backed by in-process adjacency lists and feature vectors.

    Args:
        edges: (src, dst) pairs; stored in both directions unless ``directed``
        features: node id -> feature vector; missing nodes read as zeros
        feature_dim: feature width, inferred from ``features`` when omitted
        directed: keep edges one-way
        seed: seed for the sampling generator
    """

    def __init__(
        self,
        edges: Iterable[Tuple[int, int]] = (),
        features: Optional[Mapping[int, Sequence[float]]] = None,
        *,
        feature_dim: Optional[int] = None,
        directed: bool = False,
        seed: Optional[int] = None,
    ) -> None:
        self._adj: Dict[int, List[int]] = defaultdict(list)
        for src, dst in edges:
            self._adj[src].append(dst)
            if not directed:
                self._adj[dst].append(src)

        self._features: Dict[int, np.ndarray] = {
            node: np.asarray(vec, dtype=np.float32) for node, vec in (features or {}).items()
        }
        if feature_dim is None:
            feature_dim = next((len(v) for v in self._features.values()), 1)
        for node, vec in self._features.items():
            if vec.shape != (feature_dim,):
                raise ValueError(
                    f"Feature of node {node} has shape {vec.shape}, expected ({feature_dim},)"
                )
        self.feature_dim = feature_dim
        self._rng = np.random.default_rng(seed)

    def neighbors(self, node: int) -> List[int]:
        return list(self._adj.get(node, ()))

    # ---------------------- sampling ----------------------
    def sample_negatives(
        self,
        k: int,
        anchors: Sequence[int],
        pool: Sequence[int],
    ) -> List[List[int]]:
        """
        Draw ``k`` negatives once from ``pool`` and share them across anchors.

        A shared candidate equal to its anchor is replaced by another pool
        member when the pool has one.
        """
        if k <= 0:
            raise ValueError(f"k must be positive, got {k}")
        if not anchors:
            return []
        if not pool:
            raise ValueError("Cannot sample negatives from an empty pool")

        shared = [pool[i] for i in self._rng.integers(len(pool), size=k)]

        result: List[List[int]] = []
        for anchor in anchors:
            if anchor not in shared:
                result.append(list(shared))
                continue
            candidates = [n for n in pool if n != anchor]
            negs = []
            for neg in shared:
                if neg == anchor and candidates:
                    neg = int(candidates[self._rng.integers(len(candidates))])
                negs.append(neg)
            result.append(negs)
        return result

    def sample_subgraph(
        self,
        seeds: Sequence[int],
        fanouts: Sequence[int],
    ) -> Tuple[LevelNodes, LevelNeighbors]:
        levels: LevelNodes = [set(seeds)]
        level_neighbors: LevelNeighbors = []

        for fanout in fanouts:
            current = levels[-1]
            hop: Dict[int, List[int]] = {}
            next_level = set(current)
            for node in current:
                sampled = self._sample_neighbors(node, fanout)
                hop[node] = sampled
                next_level.update(sampled)
            level_neighbors.append(hop)
            levels.append(next_level)

        return levels, level_neighbors

    def _sample_neighbors(self, node: int, fanout: int) -> List[int]:
        adj = self._adj.get(node)
        if not adj:
            return []
        if len(adj) <= fanout:
            return list(adj)
        picks = self._rng.choice(len(adj), size=fanout, replace=False)
        return [adj[i] for i in picks]

    # ---------------------- features ----------------------
    def lookup_node_features(self, nodes: Sequence[int]) -> np.ndarray:
        out = np.zeros((len(nodes), self.feature_dim), dtype=np.float32)
        for row, node in enumerate(nodes):
            vec = self._features.get(node)
            if vec is not None:
                out[row] = vec
        return out

    def lookup_neighbor_features(self, nodes: Sequence[int]) -> np.ndarray:
        """Mean feature of each node's full adjacency list (zeros when isolated)."""
        out = np.zeros((len(nodes), self.feature_dim), dtype=np.float32)
        for row, node in enumerate(nodes):
            adj = self._adj.get(node)
            if adj:
                out[row] = self.lookup_node_features(adj).mean(axis=0)
        return out

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"nodes={len(self._adj)}, "
            f"features={len(self._features)}, "
            f"feature_dim={self.feature_dim})"
        )
