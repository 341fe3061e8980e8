"""
Barycentric relaxation towards a Tutte embedding.

Each step moves every free vertex towards the centroid of its neighbours
using positions from the start of the step (a Jacobi update). Motion is
smoothed with an exponential moving average of the force, so vertices
glide towards the fixed point instead of jumping straight to it.
"""

from __future__ import annotations

from typing import Optional
import logging

import numpy as np

from .graph import Graph

logger = logging.getLogger(__name__)


# Velocity update: v = DAMPING * v + FORCE_WEIGHT * (centroid - x)
DAMPING = 0.8
FORCE_WEIGHT = 0.2

# Empirical stopping threshold on the largest per-step displacement
CONVERGENCE_THRESHOLD = 1e-3


def step(graph: Graph) -> tuple[Graph, float]:
    """
    Advance every free vertex one relaxation step.

    Boundary vertices are not touched. A free vertex without neighbours
    keeps its position and velocity.

    Args:
        graph: Graph to update in place

    Returns:
        The graph and the largest velocity magnitude over free vertices
    """
    n = len(graph.vertices)
    if n == 0:
        return graph, 0.0

    x = graph.positions()
    v = graph.velocities()
    free = ~graph.boundary_mask()

    if not free.any():
        return graph, 0.0

    edges = graph.edge_array()
    sums = np.zeros((n, 2))
    np.add.at(sums, edges[:, 0], x[edges[:, 1]])
    np.add.at(sums, edges[:, 1], x[edges[:, 0]])
    degree = np.bincount(edges.ravel(), minlength=n)

    orphans = free & (degree == 0)
    if orphans.any():
        logger.debug("Skipping %d free vertices without neighbours", int(orphans.sum()))

    moving = free & (degree > 0)
    target = sums[moving] / degree[moving][:, None]
    force = target - x[moving]
    v[moving] = DAMPING * v[moving] + FORCE_WEIGHT * force
    x[moving] += v[moving]

    for i in np.flatnonzero(moving):
        o = graph.vertices[i]
        o.x = float(x[i, 0])
        o.y = float(x[i, 1])
        o.vx = float(v[i, 0])
        o.vy = float(v[i, 1])

    speeds = np.hypot(v[free, 0], v[free, 1])
    return graph, float(speeds.max())


def relax(
    graph: Graph,
    max_iterations: Optional[int] = None,
    threshold: float = CONVERGENCE_THRESHOLD
) -> tuple[Graph, int, float]:
    """
    Step until the displacement drops below threshold.

    Args:
        graph: Graph to update in place
        max_iterations: Optional cap on the number of steps
        threshold: Convergence threshold on the per-step displacement

    Returns:
        The graph, the number of steps taken and the last displacement
    """
    iterations = 0
    displacement = float('inf')
    while max_iterations is None or iterations < max_iterations:
        graph, displacement = step(graph)
        iterations += 1
        if displacement < threshold:
            logger.debug("Converged after %d steps", iterations)
            break
    return graph, iterations, displacement
