"""Persistence of built graphs keyed by document id and version."""

from __future__ import annotations

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from ._serialize import dump_graph_json, load_graph_json

if TYPE_CHECKING:
    from ._graph import Graph

logger = logging.getLogger(__name__)


class GraphStore(ABC):
    """Abstract base for graph persistence.

    A store maps ``(document_id, version)`` to a serialized graph. Loading a
    graph rebuilds it through ``Graph.build_graph``. Deduplicating concurrent
    writers of the same key is the store's concern, not the graph's.
    """

    @abstractmethod
    def save(self, document_id: str, version: str, graph: Graph) -> None:
        """Persist ``graph`` under ``(document_id, version)``, replacing any previous value."""

    @abstractmethod
    def load(self, document_id: str, version: str) -> Graph | None:
        """Return the graph stored under ``(document_id, version)``, or None if there is none."""

    def exists(self, document_id: str, version: str) -> bool:
        """Check whether a graph is stored under ``(document_id, version)``."""
        return self.load(document_id, version) is not None


class FileGraphStore(GraphStore):
    """Stores graphs as JSON files under ``<root>/graphs/<document_id>-<version>.json``.

    Files are written to a temporary file first and then moved into place, so
    a concurrent reader sees either the old file or the complete new one.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def path_for(self, document_id: str, version: str) -> Path:
        """Return the file path used for ``(document_id, version)``."""
        if not document_id or not version:
            msg = "Document id and version are required"
            raise ValueError(msg)
        for part in (document_id, version):
            if "/" in part or "\\" in part or part in {".", ".."}:
                msg = f"Invalid key component: {part!r}"
                raise ValueError(msg)
        return self.root / "graphs" / f"{document_id}-{version}.json"

    def save(self, document_id: str, version: str, graph: Graph) -> None:
        path = self.path_for(document_id, version)
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(dump_graph_json(graph))
            Path(tmp_name).replace(path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Saved graph to {path}")

    def load(self, document_id: str, version: str) -> Graph | None:
        path = self.path_for(document_id, version)
        if not path.is_file():
            logger.debug(f"No stored graph at {path}")
            return None

        graph = load_graph_json(path.read_bytes())
        logger.debug(f"Loaded graph from {path}")
        return graph

    def exists(self, document_id: str, version: str) -> bool:
        return self.path_for(document_id, version).is_file()
