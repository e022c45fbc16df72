"""Exception hierarchy for the bipartite instance reader."""

from __future__ import annotations


class InstanceReaderError(RuntimeError):
    """Base class for failures raised while building instances."""


class ConfigurationError(InstanceReaderError, ValueError):
    """Raised for unknown config keys, malformed values or unknown reader names."""


class IndexInconsistencyError(InstanceReaderError):
    """Raised when a node reaches index resolution without having been indexed."""


class GraphServiceError(InstanceReaderError):
    """Raised when the graph client fails or returns a malformed result."""


__all__ = [
    "InstanceReaderError",
    "ConfigurationError",
    "IndexInconsistencyError",
    "GraphServiceError",
]
