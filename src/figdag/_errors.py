"""Exceptions and diagnostics raised while building flow graphs."""

from dataclasses import dataclass
from enum import StrEnum


class InvalidArgumentError(ValueError):
    """Raised for malformed node/edge collections or an empty node id."""


class NodeReferenceError(LookupError):
    """Raised when an operation refers to a node that is not in the graph."""

    def __init__(self, node_id: object, role: str = "Node") -> None:
        self.node_id = node_id
        self.role = role
        super().__init__(f"{role} with ID '{node_id}' does not exist.")


class GraphBuildError(Exception):
    """Raised by the build pipeline when populating the graph fails.

    The underlying error is always available as ``__cause__``. The graph that
    was being built may be partially populated and should be discarded or
    cleared.
    """


class RejectionReason(StrEnum):
    """Why an edge was dropped instead of being added to the graph."""

    SELF_LOOP = "self-loop"
    DUPLICATE = "duplicate"


@dataclass(frozen=True, slots=True)
class RejectedEdge:
    """A non-fatal diagnostic for an edge that was silently dropped."""

    source_id: str
    target_id: str
    reason: RejectionReason

    def __str__(self) -> str:
        match self.reason:
            case RejectionReason.SELF_LOOP:
                return f"Edge from '{self.source_id}' to '{self.target_id}' is a self-loop and was ignored."
            case RejectionReason.DUPLICATE:
                return f"Edge from '{self.source_id}' to '{self.target_id}' already exists."
