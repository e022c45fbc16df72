"""
Reader factory table.

``build_reader_table`` returns a fresh name -> constructor mapping; callers
build it once and pass it where readers are created. There is no global
registration step.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Mapping, Optional, Union

from ..errors import ConfigurationError
from ..flow.neighbor_aggregation import FeatureFlow
from ..graph.client import GraphClient
from ..telemetry import TelemetryClient
from .config import ConfigPairs, InstanceReaderConfig
from .unsup_bipartite import UnsupBipartiteInstReader

logger = logging.getLogger(__name__)

ReaderFactory = Callable[..., UnsupBipartiteInstReader]


def build_reader_table() -> Dict[str, ReaderFactory]:
    return {
        "UnsupBipartiteInstReader": UnsupBipartiteInstReader,
        "unsup_bipartite_graphsage": UnsupBipartiteInstReader,
    }


def new_instance_reader(
    name: str,
    config: Union[InstanceReaderConfig, str, ConfigPairs],
    graph_client: GraphClient,
    *,
    table: Optional[Mapping[str, ReaderFactory]] = None,
    flow: Optional[FeatureFlow] = None,
    telemetry: Optional[TelemetryClient] = None,
) -> UnsupBipartiteInstReader:
    """Construct the reader registered under ``name``."""
    readers = table if table is not None else build_reader_table()
    factory = readers.get(name)
    if factory is None:
        raise ConfigurationError(
            f"Unknown instance reader: {name}; expected one of {sorted(readers)}"
        )

    if isinstance(config, str):
        config = InstanceReaderConfig.from_string(config)
    elif not isinstance(config, InstanceReaderConfig):
        config = InstanceReaderConfig.from_kv(config)

    logger.info("Creating instance reader %s (is_train=%s)", name, config.is_train)
    return factory(config, graph_client, flow=flow, telemetry=telemetry)


__all__ = ["ReaderFactory", "build_reader_table", "new_instance_reader"]
