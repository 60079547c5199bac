"""Fetch, build and store flow graphs for Figma files.

This is the imperative shell around the graph: it asks the source for the
current version, reuses a stored graph for that version when there is one,
and otherwise fetches the file, builds the graph and stores it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ._graph import Graph
from ._serialize import graph_to_dict

if TYPE_CHECKING:
    from ._figma import FigmaClient
    from ._store import GraphStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DagResult:
    """A built graph together with the file version it was built from."""

    graph: Graph
    version: str
    created: bool

    @property
    def message(self) -> str:
        """Status line reported for this result."""
        return "DAG created successfully" if self.created else "DAG already exists"

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-compatible response body for this result."""
        return {
            "message": self.message,
            "graph": graph_to_dict(self.graph),
            "version": self.version,
        }


def figma_to_dag(
    client: FigmaClient,
    store: GraphStore,
    file_key: str,
    *,
    adjacency_matrix: bool = False,
) -> DagResult:
    """Return the flow graph of the current version of a Figma file.

    Args:
        client: Figma API client.
        store: Store consulted first and updated when a graph is built.
        file_key: The Figma file key, also used as the document id in the store.
        adjacency_matrix: Build the adjacency matrix of a newly built graph.

    Returns:
        The graph with its version; ``created`` is False when it came from the store.

    Raises:
        FigmaError: If the file version or contents cannot be fetched.
        GraphBuildError: If the fetched records do not form a valid graph.

    """
    version = client.file_version(file_key)

    existing = store.load(file_key, version)
    if existing is not None:
        logger.info(f"Using stored graph for {file_key} at version {version}")
        return DagResult(graph=existing, version=version, created=False)

    source = client.file_document(file_key)
    graph = Graph().build_graph(source.nodes, source.edges, adjacency_matrix=adjacency_matrix)
    store.save(file_key, version, graph)
    logger.info(f"Built graph for {file_key} at version {version}: {len(graph)} nodes, {len(graph.edges)} edges")
    return DagResult(graph=graph, version=version, created=True)


def load_dag(client: FigmaClient, store: GraphStore, file_key: str) -> DagResult | None:
    """Return the stored graph for the current version of a file, or None if it was never built."""
    version = client.file_version(file_key)
    graph = store.load(file_key, version)
    if graph is None:
        return None
    return DagResult(graph=graph, version=version, created=False)
