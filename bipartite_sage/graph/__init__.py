"""Graph-serving collaborator interface and the in-process reference client."""

from .client import GraphClient, InMemoryGraphClient, LevelNeighbors, LevelNodes  # noqa: F401

__all__ = ["GraphClient", "InMemoryGraphClient", "LevelNeighbors", "LevelNodes"]
