"""HTML rendering for figdag graphs.

The page draws the graph with cytoscape.js and shows the details of the
clicked node or edge in a sidebar. Only the nodes and edges of the graph are
read; cycle detection and the adjacency matrix are not involved.
"""

from __future__ import annotations

import json
import math
from typing import TYPE_CHECKING, Any

from htpy import Element, aside, body, div, h2, head, html, meta, p, script, style, title
from markupsafe import Markup

from ._css import CSS
from ._script import CYTOSCAPE_URL, SCRIPT

if TYPE_CHECKING:
    from figdag._graph import Graph

GRID_COLUMNS = 4


def graph_elements(graph: Graph) -> dict[str, Any]:
    """Convert a graph to cytoscape element data.

    Returns:
        ``{"nodes": [...], "edges": [...], "rows": int}`` where each element is
        ``{"data": {...}}``.

    """
    nodes = [
        {
            "data": {
                "id": node.id,
                "label": node.data.get("label") or "",
                "type": node.data.get("type"),
                "image": node.data.get("image") or "",
            },
        }
        for node in graph.nodes.values()
    ]
    edges = [
        {
            "data": {
                "source": edge.source_id,
                "target": edge.target_id,
                "label": edge.data.get("label") or "",
                "action": edge.data.get("triggerType"),
                "image": edge.data.get("image") or "",
            },
        }
        for edge in graph.edges
    ]
    return {"nodes": nodes, "edges": edges, "rows": max(1, math.ceil(len(nodes) / GRID_COLUMNS))}


def _script_json(value: Any) -> str:
    """Serialize ``value`` for embedding in an inline <script> element."""
    # "<" only occurs inside JSON strings, where < is equivalent
    return json.dumps(value, ensure_ascii=False).replace("<", "\\u003c")


def render_graph_html(graph: Graph, *, page_title: str = "Graph Visualization") -> str:
    """Render a graph as a standalone interactive HTML document.

    Args:
        graph: The graph to render.
        page_title: Content of the <title> element.

    Returns:
        Complete HTML document as a string.

    """
    elements = graph_elements(graph)
    data_script = f"const FIGDAG_GRAPH = {_script_json(elements)};"

    page = html(lang="en")[
        _render_head(page_title),
        body[
            div("#cy"),
            _render_sidebar(graph),
            script[Markup(data_script)],  # noqa: S704
            script[Markup(SCRIPT)],  # noqa: S704
        ],
    ]
    return f"<!DOCTYPE html>\n{page}"


def _render_head(page_title: str) -> Element:
    """Render HTML <head> with inline CSS and the cytoscape library."""
    return head[
        meta(charset="UTF-8"),
        meta(name="viewport", content="width=device-width, initial-scale=1.0"),
        title[page_title],
        script(src=CYTOSCAPE_URL),
        style[Markup(CSS)],  # noqa: S704
    ]


def _render_sidebar(graph: Graph) -> Element:
    """Render the details sidebar."""
    return aside(".sidebar")[
        h2["Node/Edge Information"],
        p(".summary")[f"{len(graph)} nodes, {len(graph.edges)} edges"],
        div("#details")["Click on a node or edge to see details"],
    ]
