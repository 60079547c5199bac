"""Serialized graph layout used for persistence and CLI files.

The persisted layout nests each payload under ``data``::

    {
        "nodes": [{"id": "1", "data": {"label": "Home", ...}}],
        "edges": [{"sourceId": "1", "targetId": "2", "data": {"label": "Click on Button", ...}}]
    }

Loading flattens the payloads back into records and runs them through
``Graph.build_graph`` again, which re-validates the graph and is a no-op for
the cycle removal step of an already acyclic payload.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ._graph import Graph

if TYPE_CHECKING:
    from collections.abc import Mapping


class SerializedNode(BaseModel):
    """A node in the persisted layout."""

    id: str
    data: dict[str, Any] = Field(default_factory=dict)


class SerializedEdge(BaseModel):
    """An edge in the persisted layout."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    source_id: str
    target_id: str
    data: dict[str, Any] = Field(default_factory=dict)


class SerializedGraph(BaseModel):
    """The ``{nodes, edges}`` document stored for a built graph."""

    nodes: list[SerializedNode] = Field(default_factory=list)
    edges: list[SerializedEdge] = Field(default_factory=list)

    @classmethod
    def from_graph(cls, graph: Graph) -> SerializedGraph:
        """Capture the nodes and edges of a graph."""
        return cls(
            nodes=[SerializedNode(id=node.id, data=dict(node.data)) for node in graph.nodes.values()],
            edges=[
                SerializedEdge(source_id=edge.source_id, target_id=edge.target_id, data=dict(edge.data))
                for edge in graph.edges
            ],
        )

    def to_records(self) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
        """Flatten into the node and edge records accepted by ``Graph.build_graph``."""
        nodes = [{**node.data, "id": node.id} for node in self.nodes]
        edges = [{**edge.data, "sourceId": edge.source_id, "targetId": edge.target_id} for edge in self.edges]
        return nodes, edges

    def to_graph(self, *, adjacency_matrix: bool = False) -> Graph:
        """Rebuild a live graph from this document."""
        nodes, edges = self.to_records()
        return Graph().build_graph(nodes, edges, adjacency_matrix=adjacency_matrix)


def graph_to_dict(graph: Graph) -> dict[str, Any]:
    """Convert a graph to the JSON-compatible persisted layout."""
    return SerializedGraph.from_graph(graph).model_dump(mode="json", by_alias=True)


def graph_from_dict(data: Mapping[str, Any], *, adjacency_matrix: bool = False) -> Graph:
    """Rebuild a graph from the persisted layout.

    Raises:
        pydantic.ValidationError: If ``data`` does not have the persisted layout.
        GraphBuildError: If the nodes and edges do not form a valid graph.

    """
    return SerializedGraph.model_validate(data).to_graph(adjacency_matrix=adjacency_matrix)


def dump_graph_json(graph: Graph, *, indent: int | None = None) -> str:
    """Serialize a graph to JSON text."""
    return SerializedGraph.from_graph(graph).model_dump_json(by_alias=True, indent=indent)


def load_graph_json(text: str | bytes, *, adjacency_matrix: bool = False) -> Graph:
    """Rebuild a graph from JSON text produced by :func:`dump_graph_json`."""
    return SerializedGraph.model_validate_json(text).to_graph(adjacency_matrix=adjacency_matrix)
