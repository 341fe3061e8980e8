"""
Random planar graph generation.

A graph topology is taken from the Delaunay triangulation of random points,
its convex hull becomes the boundary, and the points are then scattered
again so that only the topology survives.
"""

from __future__ import annotations

from typing import Optional, Union
import logging
import math
import numbers
import warnings

import numpy as np
from scipy.spatial import ConvexHull, Delaunay, QhullError

from .graph import (
    Graph, Vertex, Edge, InvalidInputError, DegenerateGeometryWarning, unique_edges
)

logger = logging.getLogger(__name__)


# Half side of the square that vertices are sampled in
RADIUS = 500.0
MIN_VERTICES = 3

SeedLike = Optional[Union[int, np.random.Generator]]


def triangulate(points: np.ndarray) -> np.ndarray:
    """
    Delaunay simplices of points as an (m x 3) index array.

    Three points always form the single triangle, which qhull cannot build
    on its own. Input qhull rejects as degenerate (all points collinear,
    for instance) is triangulated again with joggled coordinates (option QJ).
    """
    if len(points) == MIN_VERTICES:
        return np.array([[0, 1, 2]], dtype=np.intp)

    try:
        tri = Delaunay(points)
    except QhullError:
        warnings.warn(
            "Degenerate sample points, triangulating with joggled input",
            DegenerateGeometryWarning,
            stacklevel=3
        )
        tri = Delaunay(points, qhull_options="QJ")

    if len(tri.coplanar):
        warnings.warn(
            f"{len(tri.coplanar)} sample point(s) were left out of the triangulation",
            DegenerateGeometryWarning,
            stacklevel=3
        )
    return tri.simplices


def triangulation_edges(points: np.ndarray) -> tuple[list[Edge], np.ndarray]:
    """
    Delaunay-triangulate points and return the undirected edge set.

    Args:
        points: (n x 2) array of sample coordinates

    Returns:
        The de-duplicated edges and the (m x 3) simplices array
    """
    simplices = triangulate(points)

    raw: list[tuple[int, int]] = []
    for a, b, c in simplices:
        raw.append((int(a), int(b)))
        raw.append((int(b), int(c)))
        raw.append((int(c), int(a)))

    # Shared triangle sides show up twice; that is not degenerate
    edges, _ = unique_edges(raw)
    return edges, simplices


def hull_indices(points: np.ndarray, simplices: np.ndarray) -> list[int]:
    """
    Indices of the convex hull of points, counter-clockwise.

    Falls back to the outer cycle of the triangulation when the point set
    is too degenerate for qhull to find a hull.
    """
    try:
        return [int(i) for i in ConvexHull(points).vertices]
    except QhullError:
        logger.warning("Degenerate sample hull, using triangulation boundary")
        return _outer_cycle(simplices)


def _outer_cycle(simplices: np.ndarray) -> list[int]:
    """Walk the triangle sides that belong to exactly one triangle."""
    counts: dict[tuple[int, int], int] = {}
    for a, b, c in simplices:
        for u, v in ((a, b), (b, c), (c, a)):
            key = (int(min(u, v)), int(max(u, v)))
            counts[key] = counts.get(key, 0) + 1

    adj: dict[int, list[int]] = {}
    for (u, v), k in counts.items():
        if k == 1:
            adj.setdefault(u, []).append(v)
            adj.setdefault(v, []).append(u)

    if not adj:
        return []

    start = min(adj)
    cycle = [start]
    prev, cur = None, start
    while True:
        nxt = [w for w in adj[cur] if w != prev]
        if not nxt or nxt[0] == start:
            break
        prev, cur = cur, nxt[0]
        cycle.append(cur)
        if len(cycle) > len(adj):
            break
    return cycle


def generate(n: int, radius: float = RADIUS, seed: SeedLike = None) -> Graph:
    """
    Generate a random planar graph with a marked outer face.

    1. Sample n points uniformly in the square [-radius, radius]^2.
    2. Delaunay-triangulate them; every triangle contributes its three sides.
    3. Flag the convex hull of the samples as boundary.
    4. Re-sample every vertex position so that only the topology remains.

    Args:
        n: Number of vertices, at least 3
        radius: Half side of the sampling square
        seed: Seed or numpy Generator for reproducible graphs

    Returns:
        The generated graph with zero velocities
    """
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidInputError(f"Vertex count must be an integer, got {n!r}")
    if n < MIN_VERTICES:
        raise InvalidInputError(f"Need at least {MIN_VERTICES} vertices, got {n}")

    rng = np.random.default_rng(seed)

    points = rng.uniform(-radius, radius, size=(n, 2))
    edges, simplices = triangulation_edges(points)
    hull = hull_indices(points, simplices)

    scattered = rng.uniform(-radius, radius, size=(n, 2))
    on_hull = set(hull)
    vertices = [
        Vertex(i, scattered[i, 0], scattered[i, 1], is_boundary=i in on_hull)
        for i in range(n)
    ]

    graph = Graph(vertices, edges, hull=hull)
    logger.info(
        "Generated graph: %d vertices, %d edges, %d boundary",
        n, len(graph.edges), len(hull)
    )
    return graph


def arrange_boundary(graph: Graph, radius: float = RADIUS) -> Graph:
    """
    Place hull vertices on a regular polygon.

    Hull vertices that are still flagged as boundary are spread evenly on a
    circle of the given radius, in hull order, and their velocity is cleared.
    Other boundary vertices keep their positions.
    """
    ring = [i for i in graph.hull if graph.vertices[i].is_boundary]
    k = len(ring)
    for j, i in enumerate(ring):
        angle = 2.0 * math.pi * j / k
        v = graph.vertices[i]
        v.x = radius * math.cos(angle)
        v.y = radius * math.sin(angle)
        v.vx = 0.0
        v.vy = 0.0

    logger.debug("Arranged %d boundary vertices on radius %.1f", k, radius)
    return graph
