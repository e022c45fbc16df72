"""Feature, graph-block and edge/label materialization."""

from .neighbor_aggregation import FeatureFlow, IndexFn, NeighborAggregationFlow  # noqa: F401

__all__ = ["FeatureFlow", "IndexFn", "NeighborAggregationFlow"]
