"""Mutable directed graph with cycle elimination."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from figdag._errors import (
    GraphBuildError,
    InvalidArgumentError,
    NodeReferenceError,
    RejectedEdge,
    RejectionReason,
)
from figdag._records import EdgeRecord, NodeRecord

from . import _algorithms
from ._model import Edge, Node

if TYPE_CHECKING:
    from typing import Self

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)


def _validate_records(records: object, model: type[R], what: str) -> list[R]:
    """Check that ``records`` is an ordered sequence and validate each item."""
    if not isinstance(records, (list, tuple)):
        msg = f"{what.capitalize()} must be a list of records, got {type(records).__name__}."
        raise InvalidArgumentError(msg)

    validated: list[R] = []
    for position, record in enumerate(records):
        if isinstance(record, model):
            validated.append(record)
            continue
        if not isinstance(record, Mapping):
            msg = f"Invalid record at {what}[{position}]: expected a mapping, got {type(record).__name__}."
            raise InvalidArgumentError(msg)
        try:
            validated.append(model.model_validate(record))
        except ValidationError as e:
            msg = f"Invalid record at {what}[{position}]: {e}"
            raise InvalidArgumentError(msg) from e
    return validated


class Graph:
    """A directed graph of uniquely identified nodes and unique, loop-free edges.

    The graph is populated once through :meth:`build_graph`, which guarantees an
    acyclic result, and can be reset with :meth:`clear` for reuse. Nodes are
    kept in insertion order and edges in the order they were accepted; both
    orders drive the depth-first algorithms and the adjacency matrix indices.

    Example:
        >>> graph = Graph().build_graph(
        ...     [{"id": "1"}, {"id": "2"}],
        ...     [{"sourceId": "1", "targetId": "2"}, {"sourceId": "2", "targetId": "1"}],
        ... )
        >>> [edge.key for edge in graph.edges]
        [('1', '2')]

    """

    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {}
        self._edges: list[Edge] = []
        self._edge_keys: set[tuple[str, str]] = set()
        self._successors: dict[str, list[str]] = {}
        self._rejected: list[RejectedEdge] = []
        self._removed: list[Edge] = []
        self._node_index: dict[str, int] = {}
        self._adjacency_matrix: list[list[int]] = []

    # ------------------------------------------------------------------
    # Entity store
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> Mapping[str, Node]:
        """Nodes keyed by id, in insertion order."""
        return MappingProxyType(self._nodes)

    @property
    def edges(self) -> tuple[Edge, ...]:
        """Accepted edges, in sequence order."""
        return tuple(self._edges)

    @property
    def rejected_edges(self) -> tuple[RejectedEdge, ...]:
        """Self-loops and duplicates dropped since the last :meth:`clear`."""
        return tuple(self._rejected)

    @property
    def removed_edges(self) -> tuple[Edge, ...]:
        """Edges deleted by :meth:`make_acyclic` since the last :meth:`clear`."""
        return tuple(self._removed)

    def successors(self, node_id: str) -> tuple[str, ...]:
        """Return the direct successors of a node, in edge order."""
        if node_id not in self._nodes:
            raise NodeReferenceError(node_id)
        return tuple(self._successors[node_id])

    def add_node(self, node_id: str, data: Mapping[str, Any] | None = None) -> None:
        """Add a node unless a node with the same id already exists.

        The payload of an existing node is never overwritten.

        Raises:
            InvalidArgumentError: If ``node_id`` is empty or None.

        """
        if not node_id:
            msg = "Node ID is required"
            raise InvalidArgumentError(msg)
        if node_id not in self._nodes:
            self._nodes[node_id] = Node(node_id, data or {})
            self._successors[node_id] = []

    def add_edge(self, source_id: str, target_id: str, data: Mapping[str, Any] | None = None) -> bool:
        """Add a directed edge between two existing nodes.

        Self-loops and edges whose ``(source_id, target_id)`` pair is already
        present are dropped: a warning is logged, a :class:`RejectedEdge` is
        recorded in :attr:`rejected_edges`, and False is returned.

        Returns:
            True if the edge was added.

        Raises:
            NodeReferenceError: If either endpoint is not a node of the graph.

        """
        if source_id not in self._nodes:
            raise NodeReferenceError(source_id, "Source node")
        if target_id not in self._nodes:
            raise NodeReferenceError(target_id, "Target node")

        if source_id == target_id:
            self._reject(source_id, target_id, RejectionReason.SELF_LOOP)
            return False
        if (source_id, target_id) in self._edge_keys:
            self._reject(source_id, target_id, RejectionReason.DUPLICATE)
            return False

        edge = Edge(source_id, target_id, data or {})
        self._edges.append(edge)
        self._edge_keys.add(edge.key)
        self._successors[source_id].append(target_id)
        return True

    def _reject(self, source_id: str, target_id: str, reason: RejectionReason) -> None:
        rejected = RejectedEdge(source_id, target_id, reason)
        self._rejected.append(rejected)
        logger.warning(str(rejected))

    # ------------------------------------------------------------------
    # Cycles
    # ------------------------------------------------------------------

    def has_cycle(self) -> bool:
        """Check whether the graph currently contains a directed cycle."""
        return _algorithms.has_cycle(self._nodes, self._successors)

    def make_acyclic(self) -> list[Edge]:
        """Remove back edges until the graph has no cycle.

        Nodes are never removed. The surviving edges keep their relative order.

        Returns:
            The removed edges, in sequence order.

        """
        back_edges = set(_algorithms.find_back_edges(self._nodes, self._successors))
        if not back_edges:
            return []

        removed = [edge for edge in self._edges if edge.key in back_edges]
        self._edges = [edge for edge in self._edges if edge.key not in back_edges]
        self._removed.extend(removed)
        self._edge_keys -= back_edges
        for source_id, target_id in back_edges:
            self._successors[source_id].remove(target_id)

        for edge in removed:
            logger.debug(f"Removed edge '{edge.source_id}' -> '{edge.target_id}' to break a cycle")
        logger.info(f"Removed {len(removed)} edge(s) to make the graph acyclic")
        return removed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def depth_first_from(self, start_id: str) -> list[str]:
        """Return the ids reachable from ``start_id`` in depth-first pre-order.

        Raises:
            NodeReferenceError: If ``start_id`` is not a node of the graph.

        """
        if start_id not in self._nodes:
            raise NodeReferenceError(start_id)
        return _algorithms.depth_first_order(start_id, self._successors)

    def build_adjacency_matrix(self) -> list[list[int]]:
        """Build and cache the adjacency matrix for the current edges.

        Node indices follow insertion order and are available through
        :attr:`node_index`. The cached matrix is a snapshot and is not updated
        when edges change afterwards.
        """
        self._node_index, self._adjacency_matrix = _algorithms.adjacency_matrix(
            list(self._nodes),
            (edge.key for edge in self._edges),
        )
        return self._adjacency_matrix

    @property
    def node_index(self) -> Mapping[str, int]:
        """Node id to matrix index, as of the last :meth:`build_adjacency_matrix`."""
        return MappingProxyType(self._node_index)

    @property
    def adjacency_matrix(self) -> list[list[int]]:
        """The matrix from the last :meth:`build_adjacency_matrix`, or ``[]``."""
        return self._adjacency_matrix

    def index_of(self, node_id: str) -> int:
        """Return the matrix index of a node.

        Raises:
            NodeReferenceError: If the node has no index (unknown id, or the
                matrix was not built since the node was added).

        """
        try:
            return self._node_index[node_id]
        except KeyError:
            raise NodeReferenceError(node_id) from None

    # ------------------------------------------------------------------
    # Orchestration
    # ------------------------------------------------------------------

    def build_graph(
        self,
        nodes: Sequence[Mapping[str, Any] | NodeRecord],
        edges: Sequence[Mapping[str, Any] | EdgeRecord],
        *,
        adjacency_matrix: bool = False,
    ) -> Self:
        """Populate the graph from node and edge records and make it acyclic.

        Only the recognized payload fields are kept: ``label``, ``type`` and
        ``image`` for nodes; ``triggerType``, ``actionType``, ``label`` and
        ``image`` for edges.

        Args:
            nodes: Node records (mappings or :class:`NodeRecord`).
            edges: Edge records (mappings or :class:`EdgeRecord`).
            adjacency_matrix: Also build the adjacency matrix when True.

        Returns:
            This graph, for chaining.

        Raises:
            GraphBuildError: If the inputs are malformed, a node id is empty, or
                an edge refers to a missing node. The graph may be partially
                populated in that case.

        """
        try:
            node_records = _validate_records(nodes, NodeRecord, "nodes")
            edge_records = _validate_records(edges, EdgeRecord, "edges")

            for node in node_records:
                self.add_node(node.id, node.payload())  # type: ignore[arg-type]
            for edge in edge_records:
                self.add_edge(edge.source_id, edge.target_id, edge.payload())  # type: ignore[arg-type]
        except (InvalidArgumentError, NodeReferenceError) as e:
            msg = f"Error building graph: {e}"
            raise GraphBuildError(msg) from e

        if self.has_cycle():
            logger.warning("Cycles detected. Modifying graph to be acyclic.")
            self.make_acyclic()
        else:
            logger.info("Graph is already acyclic.")

        if adjacency_matrix:
            self.build_adjacency_matrix()

        return self

    def clear(self) -> None:
        """Reset the graph to empty so it can be built again."""
        self._nodes.clear()
        self._edges = []
        self._edge_keys.clear()
        self._successors.clear()
        self._rejected.clear()
        self._removed.clear()
        self._node_index = {}
        self._adjacency_matrix = []

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        """Check if a node id is in the graph."""
        return node_id in self._nodes

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._nodes)}, edges={len(self._edges)})"


def build_graph(
    nodes: Sequence[Mapping[str, Any] | NodeRecord],
    edges: Sequence[Mapping[str, Any] | EdgeRecord],
    *,
    adjacency_matrix: bool = False,
) -> Graph:
    """Build a new acyclic graph from node and edge records.

    See :meth:`Graph.build_graph`.
    """
    return Graph().build_graph(nodes, edges, adjacency_matrix=adjacency_matrix)
