"""Node and edge value types stored in a Graph."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


def _freeze(data: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(data or {}))


@dataclass(frozen=True, slots=True)
class Node:
    """A uniquely identified vertex with an opaque payload.

    Attributes:
        id: Non-empty identifier, unique within a graph.
        data: Payload (label, type, image, ...). Not interpreted by the graph.

    """

    id: str
    data: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _freeze(self.data))


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed connection from ``source_id`` to ``target_id``.

    ``Edge("a", "b")`` and ``Edge("b", "a")`` are distinct edges.
    """

    source_id: str
    target_id: str
    data: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _freeze(self.data))

    @property
    def key(self) -> tuple[str, str]:
        """The ``(source_id, target_id)`` pair identifying this edge."""
        return (self.source_id, self.target_id)
