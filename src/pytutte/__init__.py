"""
PyTutte: Tutte embeddings of random planar graphs

Generates random triangulated graphs, relaxes them towards the barycentric
(Tutte) embedding and checks the drawing for edge crossings.
"""

__version__ = "0.1.0"

from .graph import (
    Vertex, Edge, Graph,
    InvalidInputError, DegenerateGeometryWarning,
    set_boundary, set_position, reset_boundary
)
from .generator import generate, arrange_boundary, RADIUS
from .relaxation import step, relax, CONVERGENCE_THRESHOLD
from .planarity import is_planar, find_crossing
from .animation import Animation, EventType, Ticker
from .view import vertex_colors

__all__ = [
    "Vertex", "Edge", "Graph",
    "InvalidInputError", "DegenerateGeometryWarning",
    "set_boundary", "set_position", "reset_boundary",
    "generate", "arrange_boundary", "RADIUS",
    "step", "relax", "CONVERGENCE_THRESHOLD",
    "is_planar", "find_crossing",
    "Animation", "EventType", "Ticker",
    "vertex_colors",
]
