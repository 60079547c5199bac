"""Build acyclic flow graphs from design-tool prototypes."""

__all__ = [
    "DagResult",
    "Edge",
    "EdgeData",
    "EdgeRecord",
    "FigmaClient",
    "FigmaError",
    "FileGraphStore",
    "Graph",
    "GraphBuildError",
    "GraphStore",
    "InvalidArgumentError",
    "Node",
    "NodeData",
    "NodeRecord",
    "NodeReferenceError",
    "RejectedEdge",
    "RejectionReason",
    "SerializedGraph",
    "SourceDocument",
    "build_graph",
    "dump_graph_json",
    "extract_flow",
    "figma_to_dag",
    "load_dag",
    "load_graph_json",
    "render_graph_html",
]

from ._errors import GraphBuildError, InvalidArgumentError, NodeReferenceError, RejectedEdge, RejectionReason
from ._export.html import render_graph_html
from ._figma import FigmaClient, FigmaError, SourceDocument, extract_flow
from ._graph import Edge, Graph, Node, build_graph
from ._pipeline import DagResult, figma_to_dag, load_dag
from ._records import EdgeData, EdgeRecord, NodeData, NodeRecord
from ._serialize import SerializedGraph, dump_graph_json, load_graph_json
from ._store import FileGraphStore, GraphStore
