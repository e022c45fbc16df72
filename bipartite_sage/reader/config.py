"""
Reader Configuration - Validated Key/Value Options

WHAT: Pydantic model for the instance reader's string key/value configuration
WHERE: bipartite_sage/reader/config.py - construction-time validation
WHO: Reader factory and batch builders
TIME: Validation once per reader, never on the batch path

Accepted keys: batch, is_train, num_neg, num_neighbors, use_neigh_feat,
user_ns_id, item_ns_id. Anything else, or any malformed value, raises
ConfigurationError naming the offending key and value.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..errors import ConfigurationError
from ..io.node_id import MAX_NODE_TYPE

logger = logging.getLogger(__name__)

ConfigPairs = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


class InstanceReaderConfig(BaseModel):
    """Options for the unsupervised bipartite GraphSAGE reader."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    batch: int = Field(default=32, gt=0)
    is_train: bool = True
    num_neg: int = Field(default=5, gt=0)
    num_neighbors: List[int] = Field(default_factory=list)
    use_neigh_feat: bool = False
    user_ns_id: int = Field(default=0, ge=0, le=MAX_NODE_TYPE)
    item_ns_id: int = Field(default=1, ge=0, le=MAX_NODE_TYPE)

    @field_validator("is_train", "use_neigh_feat", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        try:
            flag = int(str(value).strip())
        except ValueError as exc:
            raise ValueError(f"expected 0 or 1, got {value!r}") from exc
        if flag not in (0, 1):
            raise ValueError(f"expected 0 or 1, got {value!r}")
        return bool(flag)

    @field_validator("num_neighbors", mode="before")
    @classmethod
    def _split_fanouts(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        text = value.strip()
        if not text:
            return []
        try:
            return [int(part) for part in text.split(",")]
        except ValueError as exc:
            raise ValueError(f"expected comma-separated integers, got {value!r}") from exc

    @field_validator("num_neighbors")
    @classmethod
    def _positive_fanouts(cls, value: List[int]) -> List[int]:
        if any(fanout <= 0 for fanout in value):
            raise ValueError(f"every fanout must be positive, got {value}")
        return value

    @model_validator(mode="after")
    def _distinct_ns_ids(self) -> "InstanceReaderConfig":
        if self.user_ns_id == self.item_ns_id:
            raise ValueError(f"user_ns_id and item_ns_id must differ, both are {self.user_ns_id}")
        return self

    @classmethod
    def from_kv(cls, pairs: ConfigPairs) -> "InstanceReaderConfig":
        """Validate string key/value pairs into a config."""
        items = list(pairs.items()) if isinstance(pairs, Mapping) else list(pairs)
        raw: dict[str, Any] = {}
        for key, value in items:
            if key not in cls.model_fields:
                raise ConfigurationError(f"Unexpected config: {key} = {value}.")
            raw[key] = value

        try:
            config = cls.model_validate(raw)
        except ValidationError as exc:
            raise ConfigurationError(_describe(exc, raw)) from exc

        for key, value in items:
            logger.info("Instance reader argument: %s = %s.", key, value)
        return config

    @classmethod
    def from_string(cls, text: str) -> "InstanceReaderConfig":
        return cls.from_kv(parse_config_string(text))

    def num_hops(self) -> int:
        return len(self.num_neighbors)


def parse_config_string(text: str) -> List[Tuple[str, str]]:
    """Split ``"k=v;k=v"`` into pairs; blank segments are ignored."""
    pairs: List[Tuple[str, str]] = []
    for segment in text.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        key, sep, value = segment.partition("=")
        if not sep or not key.strip():
            raise ConfigurationError(f"Malformed config entry: {segment!r}")
        pairs.append((key.strip(), value.strip()))
    return pairs


def _describe(exc: ValidationError, raw: Mapping[str, Any]) -> str:
    messages = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        key = str(loc[0]) if loc else "<config>"
        if key in raw:
            messages.append(f"Invalid config: {key} = {raw[key]} ({error['msg']})")
        else:
            messages.append(f"Invalid config: {error['msg']}")
    return "; ".join(messages)


__all__ = ["InstanceReaderConfig", "parse_config_string"]
