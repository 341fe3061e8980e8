"""
Geometric predicates for the crossing check.

Points may be given as objects with x and y attributes or as (x, y) pairs.
"""

from __future__ import annotations

from typing import Any


# Tolerance on the raw cross product below which three points count as collinear
EPSILON = 1e-10


class Point:
    """2D point."""

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = x
        self.y = y

    def __repr__(self) -> str:
        return f"Point({self.x!r}, {self.y!r})"


def as_xy(p: Any) -> tuple[float, float]:
    """Coerce a point-like value (object with x/y, or a pair) to a tuple."""
    if hasattr(p, 'x') and hasattr(p, 'y'):
        return p.x, p.y
    return p[0], p[1]


def orientation(p: Point, q: Point, r: Point) -> int:
    """
    Classify the turn p -> q -> r.

    Returns:
        0 when the points are collinear (within EPSILON)
        1 for a clockwise turn
        2 for a counter-clockwise turn
    """
    val = (q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y)
    if abs(val) < EPSILON:
        return 0
    return 1 if val > 0 else 2


def segments_intersect(p1: Point, q1: Point, p2: Point, q2: Point) -> bool:
    """
    Test whether segment p1q1 properly crosses segment p2q2.

    Only the general case is detected. Collinear overlaps, where every
    orientation is zero, are reported as non-intersecting.
    """
    o1 = orientation(p1, q1, p2)
    o2 = orientation(p1, q1, q2)
    o3 = orientation(p2, q2, p1)
    o4 = orientation(p2, q2, q1)

    return o1 != o2 and o3 != o4
