"""Display annotations derived from the graph state."""

from __future__ import annotations

from .graph import Graph


BOUNDARY_COLOR = 'black'
PLANAR_COLOR = 'pink'
FREE_COLOR = 'skyblue'


def vertex_colors(graph: Graph, planar: bool) -> list[str]:
    """
    Colour for each vertex, indexed by vertex id.

    Boundary vertices are black; free vertices turn pink once the drawing
    has no crossings.
    """
    free = PLANAR_COLOR if planar else FREE_COLOR
    return [BOUNDARY_COLOR if v.is_boundary else free for v in graph.vertices]
