"""Bounded breadth-first edge expansion with cycle avoidance.

The traversal is storage-agnostic: it receives a ``fetch_hop`` callable
that returns the edges touching a frontier of nodes (with the endpoint
opposite the frontier eager-loaded) and repeatedly expands the frontier
until no unvisited node is reached or the hop budget runs out.

Visited nodes are tracked by id in a set that only ever grows, so a node
is expanded at most once and cyclic graphs terminate.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from edgy.domain.filters import Direction
from edgy.domain.records import EdgeRecord, NodeRecord

logger = logging.getLogger(__name__)

type FetchHop = Callable[[Sequence[NodeRecord]], Iterable[EdgeRecord]]


def reached_nodes(hop_edges: Iterable[EdgeRecord], direction: Direction) -> dict[int, NodeRecord]:
    """Endpoints on the far side of *hop_edges*, keyed by node id.

    Outgoing traversal reaches ``to`` nodes, incoming reaches ``from``
    nodes, and undirected traversal reaches both.
    """
    reached: dict[int, NodeRecord] = {}
    for edge in hop_edges:
        if direction is not Direction.INCOMING and edge.to_node is not None:
            reached.setdefault(edge.to_id, edge.to_node)
        if direction is not Direction.OUTGOING and edge.from_node is not None:
            reached.setdefault(edge.from_id, edge.from_node)
    return reached


def expand(
    seeds: Iterable[NodeRecord],
    fetch_hop: FetchHop,
    *,
    direction: Direction = Direction.EITHER,
    depth_limit: int | None = None,
    recursive: bool = True,
) -> set[EdgeRecord]:
    """Collect every edge reachable from *seeds*.

    Args:
        seeds: Starting nodes. Duplicates are ignored.
        fetch_hop: Returns the edges touching the given frontier.
        direction: Side of the edge the frontier sits on.
        depth_limit: Maximum number of hops. ``None`` or a non-positive
            value expands until the frontier is exhausted.
        recursive: When False, exactly one hop is expanded.

    Returns:
        The union of edges fetched across all hops, each edge once.
    """
    frontier = list({node.id: node for node in seeds}.values())
    collected: set[EdgeRecord] = set()
    if not frontier:
        return collected

    visited: set[int] = {node.id for node in frontier}
    remaining = depth_limit if depth_limit is not None and depth_limit > 0 else None
    hop = 0

    while frontier:
        hop += 1
        hop_edges = list(fetch_hop(frontier))
        collected.update(hop_edges)
        logger.debug(
            "traversal hop %d: frontier=%d edges=%d total=%d",
            hop,
            len(frontier),
            len(hop_edges),
            len(collected),
        )

        if not recursive:
            break
        if remaining is not None:
            remaining -= 1
            if remaining == 0:
                break

        reached = reached_nodes(hop_edges, direction)
        frontier = [node for node_id, node in reached.items() if node_id not in visited]
        visited.update(node.id for node in frontier)

    return collected
