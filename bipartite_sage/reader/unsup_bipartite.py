"""
Unsupervised Bipartite Instance Reader - Train and Predict Batch Builders

WHAT: Builds per-batch instances for an unsupervised user/item GraphSAGE encoder
WHERE: bipartite_sage/reader/unsup_bipartite.py - top of the reader stack
WHO: Training and inference loops pulling one instance per call
TIME: One batch per call; blocking only inside the record source and graph client

Training pipeline (one call):
```
edges → src/dst → shared negatives (pool = batch dst) → classify user/item
      → fill user encoder → fill item encoder → unified resolver → edges + labels
```

Predict pipeline skips negatives and labels, writes one flat index per input
node plus the input ids verbatim.

Index spaces:
- each encoder owns a per-level list of Indexing tables, rebuilt every batch
- only level 0 feeds the unified resolver (users first, items offset by the
  user table size)
- the resolver is built after both encoders are filled; resolving earlier
  would hand out indices from the previous batch

Boundary Notes:
- Builders are not thread-safe; use one per pipeline
- End of stream closes the source and clears the instance
"""

from __future__ import annotations

import abc
import enum
import logging
from typing import Iterator, List, Optional

import torch

from ..errors import InstanceReaderError
from ..flow.neighbor_aggregation import FeatureFlow, NeighborAggregationFlow
from ..graph.client import GraphClient
from ..instance import Instance
from ..instance_names import (
    ITEM_ENCODER_NAME,
    USER_ENCODER_NAME,
    X_DST_ID_NAME,
    X_PREDICT_NODE_NAME,
    X_SRC_ID_NAME,
    Y_NAME,
)
from ..io.indexing import Indexing
from ..io.node_id import classify_nodes
from ..io.records import EdgeValue, NodeValue, RecordSource
from ..telemetry import NoOpTelemetryClient, TelemetryClient
from .config import InstanceReaderConfig
from .filler import InstanceFiller
from .resolver import UnifiedIndexResolver
from .sampler import SubgraphSampler

logger = logging.getLogger(__name__)


class BuilderState(enum.Enum):
    IDLE = "idle"
    BATCH_READ = "batch_read"
    PARTITIONED = "partitioned"
    INDEXED = "indexed"
    EDGE_FILLED = "edge_filled"
    DONE = "done"


class _BipartiteBatchBuilder(abc.ABC):
    """Steps shared by the train and predict pipelines."""

    span_name = "instance_reader.batch"

    def __init__(
        self,
        config: InstanceReaderConfig,
        sampler: SubgraphSampler,
        flow: FeatureFlow,
        *,
        telemetry: Optional[TelemetryClient] = None,
    ) -> None:
        self.config = config
        self.sampler = sampler
        self.flow = flow
        self.filler = InstanceFiller(sampler, flow, use_neigh_feat=config.use_neigh_feat)
        self.telemetry = telemetry or NoOpTelemetryClient()
        self.state = BuilderState.IDLE

        self.src_nodes: List[int] = []
        self.user_indexings: List[Indexing] = []
        self.item_indexings: List[Indexing] = []

    def _end_of_stream(self, source: RecordSource, inst: Instance) -> bool:
        source.close()
        inst.clear_batch()
        self.state = BuilderState.IDLE
        logger.info("Record source exhausted, closing it")
        return False

    def _classify(self, *node_lists: List[int]) -> tuple[List[int], List[int]]:
        user_nodes: List[int] = []
        item_nodes: List[int] = []
        for nodes in node_lists:
            classify_nodes(
                nodes,
                self.config.user_ns_id,
                self.config.item_ns_id,
                user_nodes,
                item_nodes,
            )
        return user_nodes, item_nodes

    def _fill_encoders(self, inst: Instance, user_nodes: List[int], item_nodes: List[int]) -> None:
        fanouts = self.config.num_neighbors
        self.filler.fill_instance(inst, USER_ENCODER_NAME, user_nodes, fanouts, self.user_indexings)
        self.filler.fill_instance(inst, ITEM_ENCODER_NAME, item_nodes, fanouts, self.item_indexings)

    def resolver(self) -> UnifiedIndexResolver:
        return UnifiedIndexResolver.from_levels(
            self.user_indexings, self.item_indexings, self.config.user_ns_id
        )

    @abc.abstractmethod
    def next_batch(self, source: RecordSource, inst: Instance) -> bool:
        """Fill ``inst`` from the next source batch; False at end of stream."""


class TrainBatchBuilder(_BipartiteBatchBuilder):
    """Edge batches with shared negatives, flat edge indices and labels."""

    span_name = "instance_reader.train_batch"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.dst_nodes: List[int] = []
        self.neg_nodes_list: List[List[int]] = []

    def next_batch(self, source: RecordSource[EdgeValue], inst: Instance) -> bool:
        self.state = BuilderState.BATCH_READ
        values = source.next_batch(self.config.batch)
        if not values:
            return self._end_of_stream(source, inst)

        with self.telemetry.span(self.span_name) as span:
            inst.clear_batch()
            self.src_nodes = [value.src_node for value in values]
            self.dst_nodes = [value.dst_node for value in values]
            self.neg_nodes_list = self.sampler.sample_negatives(
                self.config.num_neg, self.dst_nodes, self.dst_nodes
            )

            user_nodes, item_nodes = self._classify(
                self.src_nodes, self.dst_nodes, *self.neg_nodes_list
            )
            self.state = BuilderState.PARTITIONED

            self._fill_encoders(inst, user_nodes, item_nodes)
            self.state = BuilderState.INDEXED

            resolver = self.resolver()
            self.flow.fill_edge_and_label(
                inst,
                X_SRC_ID_NAME,
                X_DST_ID_NAME,
                Y_NAME,
                self.src_nodes,
                self.dst_nodes,
                self.neg_nodes_list,
                resolver.resolve,
                resolver.resolve,
            )
            self.state = BuilderState.EDGE_FILLED

            inst.batch = len(self.src_nodes)
            span.set_attribute("batch", inst.batch)
            span.set_attribute("user_nodes", resolver.offset)
            span.set_attribute("item_nodes", resolver.size - resolver.offset)

        self.state = BuilderState.DONE
        return True


class PredictBatchBuilder(_BipartiteBatchBuilder):
    """Node batches with one flat index per node and the ids kept verbatim."""

    span_name = "instance_reader.predict_batch"

    def next_batch(self, source: RecordSource[NodeValue], inst: Instance) -> bool:
        self.state = BuilderState.BATCH_READ
        values = source.next_batch(self.config.batch)
        if not values:
            return self._end_of_stream(source, inst)

        with self.telemetry.span(self.span_name) as span:
            inst.clear_batch()
            self.src_nodes = [value.node for value in values]

            user_nodes, item_nodes = self._classify(self.src_nodes)
            self.state = BuilderState.PARTITIONED

            self._fill_encoders(inst, user_nodes, item_nodes)
            self.state = BuilderState.INDEXED

            resolver = self.resolver()
            inst.set(
                X_SRC_ID_NAME,
                torch.tensor([resolver.resolve(node) for node in self.src_nodes], dtype=torch.int64),
            )
            inst.set(X_PREDICT_NODE_NAME, list(self.src_nodes))

            inst.batch = len(self.src_nodes)
            span.set_attribute("batch", inst.batch)
            span.set_attribute("user_nodes", resolver.offset)
            span.set_attribute("item_nodes", resolver.size - resolver.offset)

        self.state = BuilderState.DONE
        return True


def new_batch_builder(
    config: InstanceReaderConfig,
    graph_client: GraphClient,
    *,
    flow: Optional[FeatureFlow] = None,
    telemetry: Optional[TelemetryClient] = None,
) -> _BipartiteBatchBuilder:
    """Pick the train or predict pipeline from ``config.is_train``."""
    builder_cls = TrainBatchBuilder if config.is_train else PredictBatchBuilder
    return builder_cls(
        config,
        SubgraphSampler(graph_client),
        flow or NeighborAggregationFlow(graph_client),
        telemetry=telemetry,
    )


class UnsupBipartiteInstReader:
    """Pull-based reader: ``open`` a record source, then call ``get_batch``."""

    def __init__(
        self,
        config: InstanceReaderConfig,
        graph_client: GraphClient,
        *,
        flow: Optional[FeatureFlow] = None,
        telemetry: Optional[TelemetryClient] = None,
    ) -> None:
        self.config = config
        self.builder = new_batch_builder(config, graph_client, flow=flow, telemetry=telemetry)
        self._source: Optional[RecordSource] = None

    @property
    def is_train(self) -> bool:
        return self.config.is_train

    def open(self, source: RecordSource) -> None:
        """Attach ``source``; a previously opened source is closed first."""
        if self._source is not None and self._source is not source:
            self.close()
        self._source = source

    def get_batch(self, inst: Instance) -> bool:
        """Fill ``inst`` with the next batch; False at end of stream."""
        if self._source is None:
            raise InstanceReaderError("get_batch() called before open()")
        return self.builder.next_batch(self._source, inst)

    def iter_batches(self) -> Iterator[Instance]:
        while True:
            inst = Instance()
            if not self.get_batch(inst):
                return
            yield inst

    def close(self) -> None:
        if self._source is not None:
            self._source.close()
            self._source = None

    def __repr__(self) -> str:
        mode = "train" if self.config.is_train else "predict"
        return (
            f"{self.__class__.__name__}("
            f"mode={mode}, "
            f"batch={self.config.batch}, "
            f"num_neighbors={self.config.num_neighbors})"
        )


__all__ = [
    "BuilderState",
    "PredictBatchBuilder",
    "TrainBatchBuilder",
    "UnsupBipartiteInstReader",
    "new_batch_builder",
]
