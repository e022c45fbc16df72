"""
Telemetry - Batch Construction Spans

WHAT: One span per batch the reader builds
WHERE: bipartite_sage/telemetry.py - observability layer
WHO: Train/predict batch builders
TIME: Zero overhead with the no-op client, one perf_counter pair otherwise

A builder opens ``client.span("instance_reader.train_batch")`` around the
batch body and records the batch size and user/item node counts on it. The
span adds ``success`` and ``duration_ms`` on exit and hands everything to
``emit_span``.
"""

from __future__ import annotations

import abc
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict

logger = logging.getLogger(__name__)


class TelemetrySpan:
    """Timing and attributes of one batch; exceptions are never suppressed."""

    def __init__(self, client: "TelemetryClient", name: str) -> None:
        self._client = client
        self.name = name
        self.attributes: Dict[str, Any] = {}
        self._start = 0.0

    def set_attribute(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def __enter__(self) -> "TelemetrySpan":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, exc_tb) -> bool:
        self.attributes["success"] = exc is None
        self.attributes["duration_ms"] = (time.perf_counter() - self._start) * 1000.0
        self._client.emit_span(self.name, self.attributes)
        return False


class TelemetryClient(abc.ABC):
    """Span sink used by the batch builders."""

    def span(self, name: str) -> TelemetrySpan:
        return TelemetrySpan(self, name)

    @abc.abstractmethod
    def emit_span(self, name: str, attributes: Dict[str, Any]) -> None:
        ...


@dataclass(slots=True)
class NoOpTelemetryClient(TelemetryClient):
    """Discards spans; the builders' default."""

    def emit_span(self, name: str, attributes: Dict[str, Any]) -> None:
        pass


@dataclass(slots=True)
class LoggingTelemetryClient(TelemetryClient):
    """Writes each span to the module logger, at DEBUG unless ``level`` says otherwise."""

    level: int = logging.DEBUG

    def emit_span(self, name: str, attributes: Dict[str, Any]) -> None:
        payload = {k: attributes[k] for k in sorted(attributes)}
        logger.log(self.level, "[telemetry] %s: %s", name, payload)


__all__ = [
    "TelemetryClient",
    "TelemetrySpan",
    "NoOpTelemetryClient",
    "LoggingTelemetryClient",
]
