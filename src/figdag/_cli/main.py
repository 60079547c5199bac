import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from figdag._errors import GraphBuildError, NodeReferenceError
from figdag._export.html import render_graph_html
from figdag._figma import DEFAULT_BASE_URL, FigmaClient, FigmaError
from figdag._graph import Graph
from figdag._pipeline import figma_to_dag, load_dag
from figdag._serialize import dump_graph_json, graph_from_dict
from figdag._store import FileGraphStore

from .config import ConfigError, FigdagConfig, get_config
from .graph_render import (
    render_matrix,
    render_order,
    render_rejected_edges,
    render_removed_edges,
    render_summary_table,
)

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

TokenOption = Annotated[
    str,
    typer.Option("--token", envvar="FIGMA_TOKEN", help="Figma personal access token"),
]
StoreOption = Annotated[
    Path | None,
    typer.Option("--store", help="Graph store directory (defaults to [tool.figdag].store or .figdag)"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """figdag CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> FigdagConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _is_serialized(data: dict[str, Any]) -> bool:
    """Tell the persisted layout (payloads under "data") from flat records."""
    nodes, edges = data.get("nodes"), data.get("edges")
    if not isinstance(nodes, list) or not isinstance(edges, list):
        return False
    records = [*nodes, *edges]
    return bool(records) and all(isinstance(r, dict) and isinstance(r.get("data"), dict) for r in records)


def _read_graph_file(path: Path, *, adjacency_matrix: bool = False) -> Graph:
    """Build a graph from a JSON file of flat records or of the persisted layout.

    Exits with code 1 when the file cannot be read or does not form a valid graph.
    """
    err_console.print(f"[cyan]Loading graph from:[/cyan] {path}")
    try:
        with path.open("rb") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        err_console.print(f"[red]✗ Could not read {escape(str(path))}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if not isinstance(data, dict):
        err_console.print("[red]✗ Expected a JSON object with 'nodes' and 'edges'[/red]")
        raise typer.Exit(code=1)

    try:
        if _is_serialized(data):
            return graph_from_dict(data, adjacency_matrix=adjacency_matrix)
        return Graph().build_graph(data.get("nodes"), data.get("edges"), adjacency_matrix=adjacency_matrix)  # type: ignore[arg-type]
    except (GraphBuildError, ValidationError) as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


@app.command()
def build(
    input: Annotated[  # noqa: A002
        Path,
        typer.Argument(help="Path to a JSON file with 'nodes' and 'edges' records"),
    ],
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to write the built graph JSON"),
    ] = None,
    matrix: Annotated[
        bool,
        typer.Option("--matrix", help="Build and print the adjacency matrix"),
    ] = False,
    indent: Annotated[
        int,
        typer.Option("--indent", help="JSON indentation spaces"),
    ] = 2,
) -> None:
    """Build an acyclic graph from node and edge records."""
    err_console.print()
    graph = _read_graph_file(input, adjacency_matrix=matrix)
    err_console.print()

    render_summary_table(graph, list(graph.removed_edges), err_console)
    render_rejected_edges(graph, err_console)
    render_removed_edges(list(graph.removed_edges), err_console)

    if matrix:
        err_console.print()
        render_matrix(graph, out_console)

    if output is None:
        output = _load_config().output
    if output is not None:
        err_console.print(f"[cyan]Writing graph to:[/cyan] {output}")
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(dump_graph_json(graph, indent=indent), encoding="utf-8")

    err_console.print()
    err_console.print("[green]✓ Graph is acyclic[/green]")
    err_console.print()


@app.command()
def traverse(
    input: Annotated[  # noqa: A002
        Path,
        typer.Argument(help="Path to a JSON graph file"),
    ],
    start: Annotated[
        str,
        typer.Argument(help="Id of the node to start from"),
    ],
) -> None:
    """Print the nodes reachable from START in depth-first order."""
    graph = _read_graph_file(input)

    try:
        order = graph.depth_first_from(start)
    except NodeReferenceError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    render_order(start, order, out_console)


@app.command()
def render(
    input: Annotated[  # noqa: A002
        Path,
        typer.Argument(help="Path to a JSON graph file"),
    ],
    *,
    output: Annotated[
        Path,
        typer.Option("-o", "--output", help="Path to the output HTML file"),
    ],
    title: Annotated[
        str,
        typer.Option("--title", help="HTML page title"),
    ] = "Graph Visualization",
) -> None:
    """Render a graph file as an interactive HTML page."""
    err_console.print()
    graph = _read_graph_file(input)

    err_console.print(f"[cyan]Writing HTML to:[/cyan] {output}")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render_graph_html(graph, page_title=title), encoding="utf-8")

    err_console.print()
    err_console.print("[green]✓ HTML export complete[/green]")
    err_console.print()


def _open_client_and_store(token: str, store_dir: Path | None) -> tuple[FigmaClient, FileGraphStore]:
    config = _load_config()
    store = FileGraphStore(store_dir or config.store_dir())
    client = FigmaClient(token, base_url=config.base_url or DEFAULT_BASE_URL)
    return client, store


@app.command()
def fetch(
    file_key: Annotated[
        str,
        typer.Argument(help="Figma file key"),
    ],
    *,
    token: TokenOption,
    store_dir: StoreOption = None,
    matrix: Annotated[
        bool,
        typer.Option("--matrix", help="Build the adjacency matrix of a newly built graph"),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Also write the response JSON to this path"),
    ] = None,
) -> None:
    """Build (or reuse) the flow graph for the current version of a Figma file."""
    err_console.print()
    client, store = _open_client_and_store(token, store_dir)
    err_console.print(f"[cyan]Graph store:[/cyan] {store.root}")

    with client:
        try:
            result = figma_to_dag(client, store, file_key, adjacency_matrix=matrix)
        except (FigmaError, GraphBuildError, ValidationError) as e:
            err_console.print(f"[red]✗ {escape(str(e))}[/red]")
            raise typer.Exit(code=1) from e

    err_console.print(f"[cyan]Version:[/cyan] {result.version}")
    err_console.print()
    render_summary_table(result.graph, list(result.graph.removed_edges), err_console)
    render_rejected_edges(result.graph, err_console)
    render_removed_edges(list(result.graph.removed_edges), err_console)

    if output is not None:
        err_console.print(f"[cyan]Writing response to:[/cyan] {output}")
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")

    err_console.print()
    err_console.print(f"[green]✓ {result.message}[/green]")
    err_console.print()


@app.command()
def visualize(
    file_key: Annotated[
        str,
        typer.Argument(help="Figma file key"),
    ],
    *,
    output: Annotated[
        Path,
        typer.Option("-o", "--output", help="Path to the output HTML file"),
    ],
    token: TokenOption,
    store_dir: StoreOption = None,
) -> None:
    """Render the stored graph of the current version of a Figma file as HTML."""
    err_console.print()
    client, store = _open_client_and_store(token, store_dir)

    with client:
        try:
            result = load_dag(client, store, file_key)
        except (FigmaError, GraphBuildError, ValidationError) as e:
            err_console.print(f"[red]✗ {escape(str(e))}[/red]")
            raise typer.Exit(code=1) from e

    if result is None:
        err_console.print(f"[red]✗ DAG not found for {escape(file_key)}. Run 'figdag fetch' first.[/red]")
        raise typer.Exit(code=1)

    err_console.print(f"[cyan]Writing HTML to:[/cyan] {output}")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render_graph_html(result.graph), encoding="utf-8")

    err_console.print()
    err_console.print("[green]✓ HTML export complete[/green]")
    err_console.print()


def main() -> None:
    app()
