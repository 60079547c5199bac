"""Rich rendering utilities for graph commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

if TYPE_CHECKING:
    from rich.console import Console

    from figdag._graph import Edge, Graph


def render_summary_table(graph: Graph, removed: list[Edge], console: Console) -> None:
    """Render node/edge counts of a built graph as a Rich table.

    Args:
        graph: The built graph.
        removed: Edges removed to break cycles.
        console: Rich Console to output to.

    """
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Nodes", justify="right")
    table.add_column("Edges", justify="right")
    table.add_column("Rejected", justify="right", style="yellow")
    table.add_column("Removed", justify="right", style="red")
    table.add_row(
        str(len(graph)),
        str(len(graph.edges)),
        str(len(graph.rejected_edges)),
        str(len(removed)),
    )
    console.print(table)


def render_rejected_edges(graph: Graph, console: Console) -> None:
    """List edges dropped as self-loops or duplicates."""
    if not graph.rejected_edges:
        return
    console.print(f"[yellow]⚠ {len(graph.rejected_edges)} edge(s) rejected:[/yellow]")
    for rejected in graph.rejected_edges:
        console.print(
            f"  [yellow]•[/yellow] {escape(rejected.source_id)} -> {escape(rejected.target_id)} "
            f"[dim]({rejected.reason})[/dim]",
        )


def render_removed_edges(removed: list[Edge], console: Console) -> None:
    """List edges removed to break cycles."""
    if not removed:
        return
    console.print(f"[red]✂ {len(removed)} edge(s) removed to break cycles:[/red]")
    for edge in removed:
        console.print(f"  [red]•[/red] {escape(edge.source_id)} -> {escape(edge.target_id)}")


def render_matrix(graph: Graph, console: Console) -> None:
    """Render the cached adjacency matrix with node ids as row and column headers."""
    if not graph.adjacency_matrix:
        console.print("[dim]Adjacency matrix is empty[/dim]")
        return

    node_ids = sorted(graph.node_index, key=graph.index_of)
    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("", style="bold")
    for node_id in node_ids:
        table.add_column(escape(node_id), justify="center")

    for node_id, row in zip(node_ids, graph.adjacency_matrix, strict=True):
        table.add_row(escape(node_id), *("[green]1[/green]" if cell else "[dim]0[/dim]" for cell in row))

    console.print(table)


def render_order(start_id: str, order: list[str], console: Console) -> None:
    """Render a depth-first visitation order as a numbered Rich tree."""
    tree = Tree(f"[bold]Depth-first from {escape(start_id)}[/bold]")
    for position, node_id in enumerate(order, start=1):
        tree.add(f"[dim]{position}.[/dim] {escape(node_id)}")
    console.print(tree)
