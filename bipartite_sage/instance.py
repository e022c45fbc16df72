"""
Instance container.

A named bag of per-batch values (tensors, block lists, id lists) plus the
batch size. The reader only writes into it.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, Optional, TypeVar

V = TypeVar("V")


class Instance:
    def __init__(self) -> None:
        self._values: Dict[str, Any] = {}
        self.batch: int = 0

    def get_or_insert(self, name: str, factory: Callable[[], V]) -> V:
        if name not in self._values:
            self._values[name] = factory()
        return self._values[name]

    def set(self, name: str, value: Any) -> None:
        self._values[name] = value

    def get(self, name: str, default: Optional[Any] = None) -> Any:
        return self._values.get(name, default)

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    @property
    def empty(self) -> bool:
        return self.batch == 0 and not self._values

    def clear_batch(self) -> None:
        """Drop every value and reset the batch size."""
        self._values.clear()
        self.batch = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(batch={self.batch}, names={sorted(self._values)})"
