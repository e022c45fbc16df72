from typing import Dict, List, Sequence

import numpy as np
import pytest

from bipartite_sage.graph import InMemoryGraphClient
from bipartite_sage.io import make_node_id
from bipartite_sage.telemetry import TelemetryClient

USER = 0
ITEM = 1
UNKNOWN = 7


def user(local_id: int) -> int:
    return make_node_id(USER, local_id)


def item(local_id: int) -> int:
    return make_node_id(ITEM, local_id)


class ScriptedGraphClient(InMemoryGraphClient):
    """In-memory client whose negatives are fixed by the test."""

    def __init__(self, *args, negatives: Sequence[int] = (), **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.scripted_negatives = list(negatives)
        self.subgraph_calls: List[tuple] = []

    def sample_negatives(self, k, anchors, pool):
        return [list(self.scripted_negatives[:k]) for _ in anchors]

    def sample_subgraph(self, seeds, fanouts):
        self.subgraph_calls.append((list(seeds), list(fanouts)))
        return super().sample_subgraph(seeds, fanouts)


class CaptureTelemetryClient(TelemetryClient):
    def __init__(self) -> None:
        self.spans: list[tuple[str, dict]] = []

    def emit_span(self, name: str, attributes: dict) -> None:
        self.spans.append((name, attributes))


@pytest.fixture
def ids():
    return {
        "U1": user(1),
        "U2": user(2),
        "U3": user(3),
        "I1": item(1),
        "I2": item(2),
        "I5": item(5),
        "BAD": make_node_id(UNKNOWN, 1),
    }


@pytest.fixture
def features(ids) -> Dict[int, np.ndarray]:
    return {
        node: np.array([float(i), float(i) * 10.0], dtype=np.float32)
        for i, node in enumerate(ids.values(), start=1)
    }


@pytest.fixture
def small_graph_edges(ids):
    return [
        (ids["U1"], ids["I1"]),
        (ids["U2"], ids["I1"]),
        (ids["U2"], ids["I2"]),
        (ids["U3"], ids["I5"]),
    ]


@pytest.fixture
def graph_client(small_graph_edges, features):
    return InMemoryGraphClient(small_graph_edges, features, seed=11)


@pytest.fixture
def telemetry():
    return CaptureTelemetryClient()


@pytest.fixture
def scripted_client_cls():
    return ScriptedGraphClient
