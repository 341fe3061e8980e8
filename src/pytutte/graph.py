"""
Graph model for Tutte embedding.

A Graph is an ordered list of vertices, an immutable set of undirected
edges between them and the hull classification produced at generation.
Vertex positions and velocities are mutated in place by the relaxation
step; the boundary flag can be overridden through set_boundary.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Union
import copy
import logging
import warnings

import numpy as np

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised for requests the core rejects outright (bad counts, unknown ids)."""
    pass


class DegenerateGeometryWarning(UserWarning):
    """Warning about degenerate input that was repaired rather than rejected."""
    pass


class Vertex:
    """
    Graph vertex with position and relaxation state.

    Attributes:
        index: Position of the vertex in Graph.vertices
        x, y: Plane coordinates
        vx, vy: Smoothed velocity used by the relaxation step
        is_boundary: True when the vertex belongs to the pinned outer face
    """

    def __init__(
        self,
        index: int,
        x: float = 0.0,
        y: float = 0.0,
        is_boundary: bool = False,
        vx: float = 0.0,
        vy: float = 0.0
    ):
        self.index = index
        self.x = float(x)
        self.y = float(y)
        self.vx = float(vx)
        self.vy = float(vy)
        self.is_boundary = bool(is_boundary)

    def __repr__(self) -> str:
        flag = ", boundary" if self.is_boundary else ""
        return f"Vertex({self.index}, x={self.x:.3f}, y={self.y:.3f}{flag})"


class Edge:
    """
    Undirected edge between two vertex indices.

    Edges compare equal regardless of endpoint order.
    """

    def __init__(self, source: int, target: int):
        self.source = int(source)
        self.target = int(target)

    def key(self) -> tuple[int, int]:
        """Endpoint pair in ascending order."""
        if self.source <= self.target:
            return (self.source, self.target)
        return (self.target, self.source)

    def shares_endpoint(self, other: Edge) -> bool:
        return (
            self.source == other.source or self.source == other.target or
            self.target == other.source or self.target == other.target
        )

    def __iter__(self):
        yield self.source
        yield self.target

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self) -> int:
        return hash(self.key())

    def __repr__(self) -> str:
        return f"Edge({self.source}, {self.target})"


EdgeLike = Union[Edge, Sequence[int]]


def as_edge(e: EdgeLike) -> Edge:
    """Convert an (a, b) pair or Edge into an Edge."""
    if isinstance(e, Edge):
        return e
    a, b = e
    return Edge(a, b)


def unique_edges(edges: Iterable[EdgeLike]) -> tuple[list[Edge], int]:
    """
    Drop self-loops and duplicate edges, keeping first-seen order.

    Returns:
        The cleaned edge list and the number of edges removed
    """
    seen: set[tuple[int, int]] = set()
    result: list[Edge] = []
    dropped = 0
    for e in edges:
        edge = as_edge(e)
        key = edge.key()
        if edge.source == edge.target or key in seen:
            dropped += 1
            continue
        seen.add(key)
        result.append(edge)
    return result, dropped


class Graph:
    """
    Vertices, edges and the derived boundary set.

    Args:
        vertices: Vertices in index order; vertex i must have index i
        edges: Undirected edges as Edge objects or (a, b) pairs
        hull: Vertex ids on the generator's convex hull, in cyclic order.
              Defaults to the vertices currently flagged as boundary.
    """

    def __init__(
        self,
        vertices: Sequence[Vertex],
        edges: Iterable[EdgeLike],
        hull: Optional[Sequence[int]] = None
    ):
        self.vertices: list[Vertex] = list(vertices)
        n = len(self.vertices)

        for i, v in enumerate(self.vertices):
            if v.index != i:
                raise InvalidInputError(f"Vertex at position {i} has index {v.index}")

        self.edges, dropped = unique_edges(edges)
        if dropped:
            warnings.warn(
                f"Removed {dropped} self-loop or duplicate edge(s)",
                DegenerateGeometryWarning,
                stacklevel=2
            )

        for e in self.edges:
            if not (0 <= e.source < n and 0 <= e.target < n):
                raise InvalidInputError(f"{e!r} references a vertex outside 0..{n - 1}")

        if hull is None:
            hull = [v.index for v in self.vertices if v.is_boundary]
        self.hull: list[int] = list(hull)
        for i in self.hull:
            if not 0 <= i < n:
                raise InvalidInputError(f"Hull vertex {i} outside 0..{n - 1}")

        self._adjacency: Optional[list[list[int]]] = None
        self._edge_array: Optional[np.ndarray] = None

    @classmethod
    def from_positions(
        cls,
        positions: Sequence[Sequence[float]],
        edges: Iterable[EdgeLike],
        boundary: Iterable[int] = ()
    ) -> Graph:
        """Build a graph from (x, y) pairs, edge pairs and boundary ids."""
        boundary = list(boundary)
        flags = set(boundary)
        vertices = [
            Vertex(i, x, y, is_boundary=i in flags)
            for i, (x, y) in enumerate(positions)
        ]
        return cls(vertices, edges, hull=boundary)

    def __len__(self) -> int:
        return len(self.vertices)

    def __repr__(self) -> str:
        return (
            f"Graph({len(self.vertices)} vertices, {len(self.edges)} edges, "
            f"{len(self.boundary)} boundary)"
        )

    @property
    def boundary(self) -> list[int]:
        """Ids of vertices currently flagged as boundary."""
        return [v.index for v in self.vertices if v.is_boundary]

    def adjacency(self) -> list[list[int]]:
        """Neighbour lists indexed by vertex id. Edges never change, so this is cached."""
        if self._adjacency is None:
            adj: list[list[int]] = [[] for _ in self.vertices]
            for e in self.edges:
                adj[e.source].append(e.target)
                adj[e.target].append(e.source)
            self._adjacency = adj
        return self._adjacency

    def neighbours(self, i: int) -> list[int]:
        return self.adjacency()[i]

    def edge_array(self) -> np.ndarray:
        """Edges as an (m x 2) integer array."""
        if self._edge_array is None:
            self._edge_array = np.array(
                [e.key() for e in self.edges], dtype=np.intp
            ).reshape(-1, 2)
        return self._edge_array

    def positions(self) -> np.ndarray:
        """Current positions as an (n x 2) array."""
        return np.array([(v.x, v.y) for v in self.vertices], dtype=float).reshape(-1, 2)

    def velocities(self) -> np.ndarray:
        """Current velocities as an (n x 2) array."""
        return np.array([(v.vx, v.vy) for v in self.vertices], dtype=float).reshape(-1, 2)

    def boundary_mask(self) -> np.ndarray:
        return np.array([v.is_boundary for v in self.vertices], dtype=bool)

    def vertex(self, i: int) -> Vertex:
        """Look up a vertex by id, rejecting unknown ids."""
        if isinstance(i, bool) or not isinstance(i, (int, np.integer)):
            raise InvalidInputError(f"Vertex id must be an integer, got {i!r}")
        if not 0 <= i < len(self.vertices):
            raise InvalidInputError(f"No vertex with id {i}")
        return self.vertices[i]

    def copy(self) -> Graph:
        """Deep copy suitable for handing to a renderer."""
        return copy.deepcopy(self)


def set_boundary(graph: Graph, vertex_id: int, value: bool) -> Graph:
    """
    Pin or release a vertex.

    Overrides the generator's hull classification for one vertex.
    """
    v = graph.vertex(vertex_id)
    v.is_boundary = bool(value)
    logger.debug("Vertex %d boundary=%s", vertex_id, v.is_boundary)
    return graph


def set_position(graph: Graph, vertex_id: int, x: float, y: float) -> Graph:
    """Move a vertex, e.g. at the end of a drag. Velocity is kept."""
    v = graph.vertex(vertex_id)
    v.x = float(x)
    v.y = float(y)
    logger.debug("Vertex %d moved to (%.3f, %.3f)", vertex_id, v.x, v.y)
    return graph


def reset_boundary(graph: Graph) -> Graph:
    """
    Re-apply the hull classification.

    Hull vertices become boundary and every other vertex becomes free,
    discarding interactive set_boundary overrides.
    """
    hull = set(graph.hull)
    for v in graph.vertices:
        v.is_boundary = v.index in hull
    logger.info("Boundary reset to %d hull vertices", len(hull))
    return graph
