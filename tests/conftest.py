"""Shared graph fixtures."""

import pytest
from pytutte.graph import Graph


@pytest.fixture
def triangle():
    """Three boundary vertices joined in a cycle."""
    return Graph.from_positions(
        [(0.0, 0.0), (100.0, 0.0), (0.0, 100.0)],
        [(0, 1), (1, 2), (2, 0)],
        boundary=[0, 1, 2]
    )


@pytest.fixture
def wheel():
    """Boundary triangle with one free vertex placed far outside it."""
    return Graph.from_positions(
        [(0.0, 0.0), (100.0, 0.0), (0.0, 100.0), (300.0, 300.0)],
        [(0, 1), (1, 2), (2, 0), (0, 3), (1, 3), (2, 3)],
        boundary=[0, 1, 2]
    )
