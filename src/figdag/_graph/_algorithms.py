"""Depth-first graph algorithms used by Graph.

All functions take the graph as an iterable of nodes (in insertion order) and
a mapping from each node to its successors (in edge order). They use explicit
work stacks instead of recursion, so chain length is bounded by memory rather
than by the interpreter recursion limit.
"""

from collections.abc import Hashable, Iterable, Iterator, Mapping, Sequence
from typing import TypeVar

T = TypeVar("T", bound=Hashable)


def _walk(
    nodes: Iterable[T],
    successors: Mapping[T, Sequence[T]],
) -> Iterator[tuple[T, T]]:
    """Yield every back edge found by a multi-source depth-first search.

    Sources are taken in the order of ``nodes``. A single visited set is shared
    by all sources; the on-stack set holds the nodes of the current path. An
    edge ``(node, target)`` is yielded when ``target`` is on the current path
    at the time the edge is scanned. Scanning continues with the node's
    remaining out-edges afterwards.
    """
    visited: set[T] = set()
    on_stack: set[T] = set()

    for root in nodes:
        if root in visited:
            continue
        visited.add(root)
        on_stack.add(root)
        stack: list[tuple[T, Iterator[T]]] = [(root, iter(successors.get(root, ())))]

        while stack:
            node, targets = stack[-1]
            for target in targets:
                if target in on_stack:
                    yield (node, target)
                elif target not in visited:
                    visited.add(target)
                    on_stack.add(target)
                    stack.append((target, iter(successors.get(target, ()))))
                    break
            else:
                # All out-edges scanned
                stack.pop()
                on_stack.discard(node)


def has_cycle(nodes: Iterable[T], successors: Mapping[T, Sequence[T]]) -> bool:
    """Check whether the directed graph contains any cycle.

    Args:
        nodes: All nodes, in the order sources are tried.
        successors: Mapping from node to its direct successors.

    Returns:
        True as soon as a back edge is found, False if the graph is acyclic.

    Example:
        >>> has_cycle(["a", "b"], {"a": ["b"], "b": ["a"]})
        True

    """
    return next(_walk(nodes, successors), None) is not None


def find_back_edges(nodes: Iterable[T], successors: Mapping[T, Sequence[T]]) -> list[tuple[T, T]]:
    """Find a set of edges whose removal leaves the graph acyclic.

    Every cycle contains at least one back edge of any depth-first forest that
    covers it, so dropping all of them breaks every cycle. Which edge of a
    given cycle is chosen depends on the node order and the successor order,
    and is stable for a fixed input.

    Args:
        nodes: All nodes, in the order sources are tried.
        successors: Mapping from node to its direct successors.

    Returns:
        The back edges as ``(source, target)`` pairs, in discovery order.

    """
    return list(_walk(nodes, successors))


def depth_first_order(start: T, successors: Mapping[T, Sequence[T]]) -> list[T]:
    """Return the nodes reachable from ``start`` in depth-first pre-order.

    Successors are pushed in reverse so they are popped, and therefore
    explored, in their original order.

    Example:
        >>> depth_first_order("a", {"a": ["b", "c"], "b": ["d"], "c": ["d"]})
        ['a', 'b', 'd', 'c']

    """
    visited: set[T] = set()
    order: list[T] = []
    stack = [start]

    while stack:
        node = stack.pop()
        if node in visited:
            continue
        visited.add(node)
        order.append(node)
        stack.extend(target for target in reversed(successors.get(node, ())) if target not in visited)

    return order


def adjacency_matrix(
    nodes: Sequence[T],
    edges: Iterable[tuple[T, T]],
) -> tuple[dict[T, int], list[list[int]]]:
    """Build a dense 0/1 adjacency matrix.

    Args:
        nodes: All nodes; a node's position is its matrix index.
        edges: ``(source, target)`` pairs. Both endpoints must be in ``nodes``.

    Returns:
        Tuple of (node -> index mapping, N x N matrix) where
        ``matrix[index[s]][index[t]] == 1`` iff ``(s, t)`` is an edge.

    """
    index = {node: i for i, node in enumerate(nodes)}
    size = len(index)
    matrix = [[0] * size for _ in range(size)]
    for source, target in edges:
        matrix[index[source]][index[target]] = 1
    return index, matrix
