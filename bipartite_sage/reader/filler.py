"""
Instance filling for one encoder.

Sample the k-hop subgraph of the encoder's nodes, hand the levels to the flow
for feature materialization, rebuild the per-level indexings, then build the
self/neighbor graph blocks against the fresh tables.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from ..flow.neighbor_aggregation import FeatureFlow
from ..instance import Instance
from ..instance_names import (
    X_NEIGH_BLOCK_NAME,
    X_NEIGH_FEATURE_NAME,
    X_NODE_FEATURE_NAME,
    X_SELF_BLOCK_NAME,
    encoder_key,
)
from ..io.indexing import Indexing, create_indexings
from .sampler import SubgraphSampler

logger = logging.getLogger(__name__)


class InstanceFiller:
    def __init__(self, sampler: SubgraphSampler, flow: FeatureFlow, *, use_neigh_feat: bool = False) -> None:
        self.sampler = sampler
        self.flow = flow
        self.use_neigh_feat = use_neigh_feat

    def fill_instance(
        self,
        inst: Instance,
        encoder_name: str,
        nodes: Iterable[int],
        fanouts: Sequence[int],
        indexings: List[Indexing],
    ) -> List[Indexing]:
        """Fill one encoder's tensors; replaces every table in ``indexings``."""
        levels, neighbors = self.sampler.sample_subgraph(nodes, fanouts)

        self.flow.fill_node_feature(inst, encoder_key(X_NODE_FEATURE_NAME, encoder_name), levels)

        if self.use_neigh_feat:
            self.flow.fill_neighbor_feature(
                inst, encoder_key(X_NEIGH_FEATURE_NAME, encoder_name), levels
            )

        create_indexings(levels, indexings)
        self.flow.fill_self_and_neighbor_block(
            inst,
            encoder_key(X_SELF_BLOCK_NAME, encoder_name),
            encoder_key(X_NEIGH_BLOCK_NAME, encoder_name),
            levels,
            neighbors,
            indexings,
            directed=False,
        )

        logger.debug(
            "Filled %s: level sizes %s", encoder_name, [len(indexing) for indexing in indexings]
        )
        return indexings


__all__ = ["InstanceFiller"]
