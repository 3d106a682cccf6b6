from __future__ import annotations

import numpy as np
import pytest

from povrounding.errors import DegenerateControlPointError
from povrounding.rounding.offset import displace_quad, outward_normal
from povrounding.rounding.quads import Quad

from helpers import distance_to_line


def test_outward_normal_length():
    normal = outward_normal(np.array([0.0, 0.0]), np.array([3.0, 4.0]), 2.5)
    assert np.isclose(np.linalg.norm(normal), 2.5)


def test_displace_bottom_edge_moves_down():
    displaced = displace_quad(Quad.line((0, 0), (10, 0)), 1.0)
    assert np.allclose(displaced.points, [[0, -1], [10 / 3, -1], [20 / 3, -1], [10, -1]])
    assert displaced.radius == 1.0


@pytest.mark.parametrize("radius", [0.25, 1.0, 3.0])
def test_straight_quad_constant_distance(radius):
    a, b = (1.0, 2.0), (7.0, 5.0)
    displaced = displace_quad(Quad.line(a, b), radius)
    for point in displaced.points:
        assert np.isclose(distance_to_line(point, a, b), radius)


def test_zero_radius_is_identity():
    quad = Quad(np.array([[0, 0], [1, 2], [3, 2], [4, 0]]))
    displaced = displace_quad(quad, 0.0)
    assert np.allclose(displaced.points, quad.points)


def test_displace_does_not_mutate_source():
    quad = Quad.line((0, 0), (10, 0))
    before = quad.points.copy()
    displace_quad(quad, 2.0)
    assert np.array_equal(quad.points, before)


def test_degenerate_control_point():
    quad = Quad(np.array([[0, 0], [0, 0], [10, 10], [10, 0]]))
    with pytest.raises(DegenerateControlPointError) as info:
        displace_quad(quad, 1.0)
    assert info.value.location == (0.0, 0.0)


def test_degenerate_end_control_point():
    quad = Quad(np.array([[0, 0], [0, 5], [10, 0], [10, 0]]))
    with pytest.raises(DegenerateControlPointError) as info:
        displace_quad(quad, 1.0)
    assert info.value.location == (10.0, 0.0)
