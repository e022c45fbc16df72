"""
Bipartite GraphSAGE Instance Reader
===================================

WHAT: Batch constructor for unsupervised user/item GraphSAGE training and inference
WHERE: bipartite_sage/ - between raw edge/node records and the encoder
WHO: Training and embedding-export loops consuming one instance per call
TIME: Per-batch cost dominated by graph-client sampling

Pipeline:
```
records → classify user/item → k-hop sampling per encoder → per-level Indexing
        → unified index (users, then items offset by user count) → Instance
```

Subpackages:
- io: node-id layout, batch-local Indexing, record sources
- graph: GraphClient protocol and an in-memory client
- flow: FeatureFlow protocol and the torch NeighborAggregationFlow
- reader: config, sampler adapter, resolver, filler, batch builders, factory
"""

from .errors import (  # noqa: F401
    ConfigurationError,
    GraphServiceError,
    IndexInconsistencyError,
    InstanceReaderError,
)
from .instance import Instance  # noqa: F401
from .reader import (  # noqa: F401
    InstanceReaderConfig,
    UnsupBipartiteInstReader,
    build_reader_table,
    new_instance_reader,
)

__all__ = [
    "ConfigurationError",
    "GraphServiceError",
    "IndexInconsistencyError",
    "InstanceReaderError",
    "Instance",
    "InstanceReaderConfig",
    "UnsupBipartiteInstReader",
    "build_reader_table",
    "new_instance_reader",
]
