"""
Subgraph Sampler - Request/Result Shaping over the Graph Client

WHAT: Adapter asking the graph client for negatives and k-hop expansions
WHERE: bipartite_sage/reader/sampler.py - between builders and GraphClient
WHO: TrainBatchBuilder (negatives) and InstanceFiller (subgraphs)
TIME: Dominated by the client; shaping is O(result size)

Owns no sampling logic. Client exceptions and malformed results surface as
GraphServiceError chained to the cause; nothing is retried or masked.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

from ..errors import GraphServiceError, InstanceReaderError
from ..graph.client import GraphClient, LevelNeighbors, LevelNodes

logger = logging.getLogger(__name__)


class SubgraphSampler:
    def __init__(self, graph_client: GraphClient) -> None:
        self.graph_client = graph_client

    def sample_negatives(
        self,
        k: int,
        anchors: Sequence[int],
        pool: Sequence[int],
    ) -> List[List[int]]:
        """One list of ``k`` negatives per anchor, drawn from ``pool``."""
        anchors = list(anchors)
        try:
            raw = self.graph_client.sample_negatives(k, anchors, list(pool))
        except InstanceReaderError:
            raise
        except Exception as exc:
            raise GraphServiceError(
                f"Negative sampling failed for {len(anchors)} anchors: {exc}"
            ) from exc

        negatives = [list(negs) for negs in raw]
        if len(negatives) != len(anchors):
            raise GraphServiceError(
                f"Expected {len(anchors)} negative lists, got {len(negatives)}"
            )
        for anchor, negs in zip(anchors, negatives):
            if len(negs) != k:
                raise GraphServiceError(
                    f"Expected {k} negatives for node {anchor}, got {len(negs)}"
                )
        return negatives

    def sample_subgraph(
        self,
        seeds: Iterable[int],
        fanouts: Sequence[int],
    ) -> Tuple[LevelNodes, LevelNeighbors]:
        """
        Expand ``len(fanouts)`` hops from ``seeds``.

        Returns:
            (levels, neighbors) with ``len(levels) == len(fanouts) + 1``
        """
        seeds = list(seeds)
        fanouts = list(fanouts)
        try:
            raw_levels, raw_neighbors = self.graph_client.sample_subgraph(seeds, fanouts)
        except InstanceReaderError:
            raise
        except Exception as exc:
            raise GraphServiceError(
                f"Subgraph sampling failed for {len(seeds)} seeds, fanouts={fanouts}: {exc}"
            ) from exc

        levels: LevelNodes = [set(level) for level in raw_levels]
        neighbors: LevelNeighbors = [
            {node: list(neighs) for node, neighs in hop.items()} for hop in raw_neighbors
        ]

        if len(levels) != len(fanouts) + 1 or len(neighbors) != len(fanouts):
            raise GraphServiceError(
                f"Expected {len(fanouts) + 1} levels and {len(fanouts)} neighbor maps, "
                f"got {len(levels)} and {len(neighbors)}"
            )
        missing = set(seeds) - levels[0]
        if missing:
            raise GraphServiceError(f"Level 0 is missing {len(missing)} seed nodes")

        logger.debug(
            "Sampled subgraph: seeds=%d level_sizes=%s",
            len(levels[0]),
            [len(level) for level in levels],
        )
        return levels, neighbors


__all__ = ["SubgraphSampler"]
