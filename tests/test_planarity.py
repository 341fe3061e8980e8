"""Tests for the crossing check."""

import random

import pytest
import numpy as np
from pytutte.graph import Edge, Vertex
from pytutte.geom import Point
from pytutte.planarity import is_planar, find_crossing
from pytutte.generator import generate


SQUARE = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]


class TestIsPlanar:
    """Test is_planar()."""

    def test_crossing_diagonals(self):
        """Test the diagonals of a convex quadrilateral cross."""
        assert not is_planar(SQUARE, [(0, 2), (1, 3)])

    def test_quadrilateral_sides(self):
        """Test the sides of a convex quadrilateral do not cross."""
        assert is_planar(SQUARE, [(0, 1), (1, 2), (2, 3), (3, 0)])

    def test_triangle(self):
        """Test a triangle is planar."""
        assert is_planar([(0, 0), (5, 1), (2, 4)], [(0, 1), (1, 2), (2, 0)])

    def test_no_edges(self):
        """Test an edgeless drawing is planar."""
        assert is_planar(SQUARE, [])

    def test_shared_endpoint_ignored(self):
        """Test edges meeting at a vertex never count as crossing."""
        assert is_planar([(0, 0), (1, 0), (1, 0)], [(0, 1), (0, 2)])

    def test_collinear_overlap_not_detected(self):
        """Test overlapping collinear edges are not reported."""
        positions = [(0, 0), (2, 0), (1, 0), (3, 0)]
        assert is_planar(positions, [(0, 1), (2, 3)])

    def test_degenerate_edges_tolerated(self):
        """Test duplicate and zero-length edges do not raise."""
        positions = [(0, 0), (1, 0), (0, 1), (0, 1)]
        assert is_planar(positions, [(0, 1), (1, 0), (2, 2), (2, 3)])

    def test_position_formats(self):
        """Test vertices, points and arrays are accepted."""
        edges = [Edge(0, 2), Edge(1, 3)]
        assert not is_planar(np.array(SQUARE), edges)
        assert not is_planar([Point(x, y) for x, y in SQUARE], edges)
        assert not is_planar([Vertex(i, x, y) for i, (x, y) in enumerate(SQUARE)], edges)

    def test_wheel_transitions(self, wheel):
        """Test the wheel is crossing while the hub is outside, planar once inside."""
        assert not is_planar(wheel.vertices, wheel.edges)
        wheel.vertices[3].x = 100.0 / 3.0
        wheel.vertices[3].y = 100.0 / 3.0
        assert is_planar(wheel.vertices, wheel.edges)

    def test_edge_order_symmetry(self):
        """Test permuting the edge list does not change the result."""
        g = generate(15, seed=21)
        positions = g.positions()
        expected = is_planar(positions, g.edges)

        rng = random.Random(0)
        for _ in range(5):
            edges = list(g.edges)
            rng.shuffle(edges)
            reversed_edges = [(e.target, e.source) for e in edges]
            assert is_planar(positions, edges) == expected
            assert is_planar(positions, reversed_edges) == expected

    @pytest.mark.parametrize("seed", [0, 1])
    def test_relabel_symmetry(self, seed):
        """Test relabelling vertices consistently does not change the result."""
        g = generate(15, seed=30 + seed)
        positions = g.positions()
        expected = is_planar(positions, g.edges)

        n = len(positions)
        perm = list(range(n))
        random.Random(seed).shuffle(perm)
        relabelled = np.empty_like(positions)
        for old, new in enumerate(perm):
            relabelled[new] = positions[old]
        edges = [(perm[e.source], perm[e.target]) for e in g.edges]

        assert is_planar(relabelled, edges) == expected

    def test_relabel_symmetry_on_crossing(self):
        """Test relabelling keeps a known crossing."""
        positions = [SQUARE[2], SQUARE[0], SQUARE[3], SQUARE[1]]
        assert not is_planar(positions, [(1, 0), (3, 2)])


class TestFindCrossing:
    """Test find_crossing()."""

    def test_reports_pair(self):
        """Test the crossing pair is returned."""
        result = find_crossing(SQUARE, [(0, 1), (0, 2), (1, 3)])
        assert result == (Edge(0, 2), Edge(1, 3))

    def test_none_when_planar(self):
        """Test None is returned for a planar drawing."""
        assert find_crossing(SQUARE, [(0, 1), (1, 2)]) is None

    def test_first_in_edge_order(self):
        """Test the first offending pair wins."""
        positions = SQUARE + [(0.5, -1.0), (0.5, 2.0)]
        result = find_crossing(positions, [(4, 5), (0, 2), (1, 3)])
        assert result == (Edge(4, 5), Edge(0, 2))
