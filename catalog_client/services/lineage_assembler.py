"""
Assemble a depth-bounded lineage graph from lineage search results.

The catalog reports two partially redundant facts per result: the ``degree``
(hop distance from the start node) and, optionally, one or more path groups
tracing a route from the start node. Nodes are selected by degree; edges are
read from the path groups. When no path group yields an edge, edges are
inferred for degree-1 nodes only. Deeper nodes stay edge-less in that case.
"""

from __future__ import annotations

import logging
from typing import Iterable

from catalog_client.models.lineage import (LineageDirection, LineageEdge,
                                           LineageNode, LineageResult,
                                           LineageSearchResult, PathGroup)

_LOGGER = logging.getLogger(__name__)


def assemble_lineage(
    start_urn: str,
    direction: LineageDirection,
    effective_depth: int,
    results: Iterable[LineageSearchResult],
) -> LineageResult:
    """Build the lineage graph for one search response.

    Args:
        start_urn: URN the lineage query started from.
        direction: Traversal direction; orients inferred edges.
        effective_depth: Depth after clamping to the configured maximum.
        results: Decoded search results in server order.

    Returns:
        LineageResult echoing ``effective_depth`` so callers can detect
        clamping.
    """
    nodes: list[LineageNode] = []
    edges: list[LineageEdge] = []
    seen_edges: set[tuple[str, str]] = set()

    for result in results:
        if result.degree > effective_depth:
            continue
        nodes.append(result.node)
        for group in result.paths:
            for edge in _path_edges(group, effective_depth):
                key = (edge.source, edge.target)
                if key in seen_edges:
                    continue
                seen_edges.add(key)
                edges.append(edge)

    if not edges and nodes:
        edges = _infer_first_hop_edges(start_urn, direction, nodes)
        _LOGGER.debug(
            "No lineage paths for %s; inferred %d first-hop edge(s)",
            start_urn,
            len(edges),
        )

    return LineageResult(
        start=start_urn,
        direction=direction,
        depth=effective_depth,
        nodes=tuple(nodes),
        edges=tuple(edges),
    )


def _path_edges(group: PathGroup, effective_depth: int) -> list[LineageEdge]:
    """Consecutive pairs of ``group`` up to ``effective_depth`` hops."""
    max_index = min(effective_depth, len(group.urns) - 1)
    return [
        LineageEdge(source=group.urns[i], target=group.urns[i + 1])
        for i in range(max_index)
    ]


def _infer_first_hop_edges(
    start_urn: str,
    direction: LineageDirection,
    nodes: Iterable[LineageNode],
) -> list[LineageEdge]:
    edges: list[LineageEdge] = []
    seen: set[tuple[str, str]] = set()
    for node in nodes:
        if node.level != 1:
            continue
        if direction is LineageDirection.UPSTREAM:
            edge = LineageEdge(source=node.urn, target=start_urn)
        else:
            edge = LineageEdge(source=start_urn, target=node.urn)
        if (edge.source, edge.target) not in seen:
            seen.add((edge.source, edge.target))
            edges.append(edge)
    return edges
