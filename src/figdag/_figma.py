"""Figma REST API client and prototype flow extraction.

A Figma file becomes a flow graph as follows: every interactive node (a
frame, component or instance) is a graph node, and every prototype
interaction inside it whose action navigates to another interactive node is
an edge from the enclosing interactive node to the destination.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Self

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping
    from types import TracebackType

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.figma.com"

INTERACTIVE_NODE_TYPES = frozenset({"FRAME", "COMPONENT", "COMPONENT_SET", "INSTANCE", "SECTION"})

ACTION_NAMES: dict[str, str] = {
    "ON_CLICK": "Click",
    "ON_HOVER": "Hover",
    "ON_PRESS": "Press",
    "ON_DRAG": "Drag",
    "ON_KEY_DOWN": "Keypress",
    "MOUSE_ENTER": "Mouse enter",
    "MOUSE_LEAVE": "Mouse leave",
    "MOUSE_UP": "Mouse up",
    "MOUSE_DOWN": "Mouse down",
    "AFTER_TIMEOUT": "Timeout",
}

INTERACTION_TYPES = frozenset(ACTION_NAMES)

MAX_IMAGE_IDS_PER_REQUEST = 100


class FigmaError(Exception):
    """Raised when the Figma API returns an error or an unusable response."""


@dataclass(frozen=True, slots=True)
class SourceDocument:
    """Node and edge records extracted from a Figma file."""

    nodes: list[dict[str, Any]] = field(default_factory=list)
    edges: list[dict[str, Any]] = field(default_factory=list)


def action_name(trigger_type: str) -> str:
    """Get the human readable name of an interaction trigger."""
    return ACTION_NAMES.get(trigger_type, "Action")


def _is_interactive(node: Mapping[str, Any]) -> bool:
    return node.get("type") in INTERACTIVE_NODE_TYPES


def extract_flow(document: Mapping[str, Any]) -> SourceDocument:
    """Extract flow node and edge records from a Figma document tree.

    The tree is walked in document order. Interactions are attributed to the
    closest interactive ancestor (or the node itself when it is interactive).
    Edges whose endpoints are not both interactive nodes of the document are
    dropped. Image fields are left empty; see :meth:`FigmaClient.node_images`.

    Args:
        document: The ``document`` object of a ``GET /v1/files/:key`` response.

    Returns:
        The extracted records, nodes in document order.

    """
    nodes: dict[str, dict[str, Any]] = {}
    candidate_edges: list[dict[str, Any]] = []

    stack: list[tuple[Mapping[str, Any], Mapping[str, Any] | None]] = [(document, None)]
    while stack:
        node, frame = stack.pop()
        if _is_interactive(node):
            frame = node
            nodes.setdefault(
                node["id"],
                {"id": node["id"], "label": node.get("name", ""), "type": node["type"], "image": ""},
            )

        if frame is not None:
            candidate_edges.extend(_interaction_edges(node, frame))

        # Reversed so that children are popped in document order
        stack.extend((child, frame) for child in reversed(node.get("children") or []))

    edges = [edge for edge in candidate_edges if edge["sourceId"] in nodes and edge["targetId"] in nodes]
    if len(edges) < len(candidate_edges):
        logger.debug(f"Dropped {len(candidate_edges) - len(edges)} interaction(s) without a known destination")
    return SourceDocument(nodes=list(nodes.values()), edges=edges)


def _interaction_edges(node: Mapping[str, Any], frame: Mapping[str, Any]) -> Iterable[dict[str, Any]]:
    for interaction in node.get("interactions") or []:
        trigger = (interaction or {}).get("trigger") or {}
        trigger_type = trigger.get("type")
        if trigger_type not in INTERACTION_TYPES:
            continue
        for action in interaction.get("actions") or []:
            if not action or not action.get("destinationId"):
                continue
            yield {
                "sourceId": frame["id"],
                "targetId": action["destinationId"],
                "triggerType": trigger_type,
                "actionType": action.get("navigation") or action.get("type"),
                "label": f"{action_name(trigger_type)} on {node.get('name', '')}",
                "image": "",
            }


def apply_images(source: SourceDocument, images: Mapping[str, str | None]) -> SourceDocument:
    """Return a copy of ``source`` with node images, and edge images taken from their source node."""
    nodes = [{**node, "image": images.get(node["id"]) or ""} for node in source.nodes]
    edges = [{**edge, "image": images.get(edge["sourceId"]) or ""} for edge in source.edges]
    return SourceDocument(nodes=nodes, edges=edges)


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


def default_timeout() -> httpx.Timeout:
    return httpx.Timeout(connect=10.0, read=60.0, write=20.0, pool=10.0)


TransientHttpError = (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError)


def transient_retry() -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    return retry(
        reraise=True,
        stop=stop_after_attempt(5),
        wait=wait_exponential_jitter(initial=0.5, max=10.0),
        retry=retry_if_exception_type(TransientHttpError),
    )


class FigmaClient:
    """Synchronous client for the parts of the Figma REST API used here.

    Docs: https://www.figma.com/developers/api

    Keep one client per process and close it when done (or use it as a
    context manager).
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not token:
            msg = "A Figma access token is required"
            raise ValueError(msg)
        self._client = httpx.Client(
            base_url=base_url,
            headers={"X-Figma-Token": token},
            timeout=default_timeout(),
            transport=transport,
            follow_redirects=True,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @transient_retry()
    def _get_json(self, path: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        response = self._client.get(path, params=params)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            msg = f"Figma request to {path} failed: {response.status_code} {response.reason_phrase}"
            raise FigmaError(msg) from e
        try:
            return response.json()
        except ValueError as e:
            msg = f"Figma request to {path} returned a non-JSON body"
            raise FigmaError(msg) from e

    def file_version(self, file_key: str) -> str:
        """Get the id of the newest version of a file.

        Raises:
            FigmaError: If the request fails or the file has no versions.

        """
        data = self._get_json(f"/v1/files/{file_key}/versions")
        versions = data.get("versions") or []
        if not versions:
            msg = "No versions found for this Figma file"
            raise FigmaError(msg)
        return str(versions[0]["id"])

    def node_images(self, file_key: str, node_ids: list[str]) -> dict[str, str | None]:
        """Render node images, requesting at most 100 ids per call.

        A chunk that fails is logged and skipped; the images of the other
        chunks are still returned.
        """
        images: dict[str, str | None] = {}
        for start in range(0, len(node_ids), MAX_IMAGE_IDS_PER_REQUEST):
            chunk = node_ids[start : start + MAX_IMAGE_IDS_PER_REQUEST]
            try:
                data = self._get_json(f"/v1/images/{file_key}", params={"ids": ",".join(chunk)})
            except (FigmaError, httpx.HTTPError) as e:
                logger.error(f"Error fetching node images: {e}")  # noqa: TRY400
                continue
            if data.get("err") is not None:
                logger.error(f"Error fetching node images: {data['err']}")
                continue
            images.update(data.get("images") or {})
        return images

    def file_document(self, file_key: str) -> SourceDocument:
        """Fetch a file and extract its flow nodes and edges, with images.

        Raises:
            FigmaError: If the file request fails.

        """
        data = self._get_json(f"/v1/files/{file_key}")
        source = extract_flow(data["document"])
        logger.debug(f"Extracted {len(source.nodes)} nodes and {len(source.edges)} edges from {file_key}")

        if not source.nodes:
            return source
        images = self.node_images(file_key, [node["id"] for node in source.nodes])
        if not images:
            return source
        return apply_images(source, images)
