"""
Straight-line crossing check for the current drawing.

This tests the drawing, not the abstract graph: every pair of edges that
share no endpoint is checked for a proper crossing. The check is O(E^2).
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence
import logging

from .geom import Point, as_xy, segments_intersect
from .graph import Edge, EdgeLike, as_edge

logger = logging.getLogger(__name__)


def find_crossing(
    positions: Sequence[Any],
    edges: Iterable[EdgeLike]
) -> Optional[tuple[Edge, Edge]]:
    """
    Find the first pair of crossing edges.

    Args:
        positions: Vertex positions indexable by vertex id, as (x, y) pairs,
                   an (n x 2) array or objects with x and y attributes
        edges: Edges as Edge objects or (a, b) pairs

    Returns:
        The first crossing pair in edge order, or None
    """
    edge_list = [as_edge(e) for e in edges]
    points = [Point(*as_xy(p)) for p in positions]

    for i, e1 in enumerate(edge_list):
        p1 = points[e1.source]
        q1 = points[e1.target]

        for j in range(i + 1, len(edge_list)):
            e2 = edge_list[j]

            # Edges meeting at a vertex do not count as crossing
            if e1.shares_endpoint(e2):
                continue

            if segments_intersect(p1, q1, points[e2.source], points[e2.target]):
                logger.debug("Crossing between %r and %r", e1, e2)
                return e1, e2

    return None


def is_planar(positions: Sequence[Any], edges: Iterable[EdgeLike]) -> bool:
    """Return True when no two non-adjacent edges cross."""
    return find_crossing(positions, edges) is None
