"""Instance reader: configuration, index resolution, instance filling and batch builders."""

from .config import InstanceReaderConfig, parse_config_string  # noqa: F401
from .filler import InstanceFiller  # noqa: F401
from .registry import build_reader_table, new_instance_reader  # noqa: F401
from .resolver import UnifiedIndexResolver  # noqa: F401
from .sampler import SubgraphSampler  # noqa: F401
from .unsup_bipartite import (  # noqa: F401
    BuilderState,
    PredictBatchBuilder,
    TrainBatchBuilder,
    UnsupBipartiteInstReader,
    new_batch_builder,
)

__all__ = [
    "InstanceReaderConfig",
    "parse_config_string",
    "InstanceFiller",
    "build_reader_table",
    "new_instance_reader",
    "UnifiedIndexResolver",
    "SubgraphSampler",
    "BuilderState",
    "PredictBatchBuilder",
    "TrainBatchBuilder",
    "UnsupBipartiteInstReader",
    "new_batch_builder",
]
