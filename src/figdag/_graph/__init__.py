"""Graph module providing the flow graph and its algorithms.

This module contains:
- Graph, build_graph: Node/edge store with cycle detection, cycle removal, traversal
  and adjacency-matrix construction
- Node, Edge: Immutable value types held by a Graph
- has_cycle, find_back_edges, depth_first_order, adjacency_matrix:
  Explicit-stack algorithms over a successor mapping
"""

from ._algorithms import adjacency_matrix, depth_first_order, find_back_edges, has_cycle
from ._graph import Graph, build_graph
from ._model import Edge, Node

__all__ = [
    "Edge",
    "Graph",
    "Node",
    "adjacency_matrix",
    "build_graph",
    "depth_first_order",
    "find_back_edges",
    "has_cycle",
]
