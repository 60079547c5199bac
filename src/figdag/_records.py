"""Inbound node/edge records and their recognized payload fields.

Records arrive as plain mappings in the camelCase shape produced by the
source-data provider::

    {"id": "1:2", "label": "Home", "type": "FRAME", "image": "https://..."}
    {"sourceId": "1:2", "targetId": "1:3", "triggerType": "ON_CLICK", ...}

Validation is lenient about extra keys (they are dropped) and numeric ids
(they are coerced to strings). Missing ids validate to ``None`` so that the
graph itself reports them with its own error types.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_RECORD_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    coerce_numbers_to_str=True,
    extra="ignore",
    frozen=True,
)


class NodeData(BaseModel):
    """Payload fields kept for a node."""

    model_config = _RECORD_CONFIG

    label: str | None = None
    type: str | None = None
    image: str | None = None


class EdgeData(BaseModel):
    """Payload fields kept for an edge."""

    model_config = _RECORD_CONFIG

    trigger_type: str | None = None
    action_type: str | None = None
    label: str | None = None
    image: str | None = None


class NodeRecord(NodeData):
    """A node as supplied to ``Graph.build_graph``."""

    id: str | None = None

    def payload(self) -> dict[str, Any]:
        """Return the recognized payload subset as a camelCase dict."""
        return self.model_dump(by_alias=True, include=set(NodeData.model_fields))


class EdgeRecord(EdgeData):
    """An edge as supplied to ``Graph.build_graph``."""

    source_id: str | None = None
    target_id: str | None = None

    def payload(self) -> dict[str, Any]:
        """Return the recognized payload subset as a camelCase dict."""
        return self.model_dump(by_alias=True, include=set(EdgeData.model_fields))
