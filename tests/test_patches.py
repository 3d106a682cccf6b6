from __future__ import annotations

import numpy as np
import pytest

from povrounding.rounding.fillet import synthesize_fillet
from povrounding.rounding.offset import displace_quad
from povrounding.rounding.patches import (
    BACK_CORNER_LABEL,
    BACK_LABEL,
    FRONT_CORNER_LABEL,
    FRONT_LABEL,
    SIDE_CORNER_LABEL,
    SIDE_LABEL,
    Patch,
    fillet_patches,
    quad_patches,
)
from povrounding.rounding.quads import Quad
from povrounding.settings import RoundingSettings

QUAD = Quad.line((0, 0), (10, 0))
NEXT = Quad.line((10, 0), (10, 10))


def test_patch_requires_four_by_four_grid():
    with pytest.raises(ValueError):
        Patch("bad", np.zeros((3, 4, 3)), 4)


def test_quad_patch_triple(settings):
    patches = quad_patches(QUAD, displace_quad(QUAD, settings.radius), settings)
    assert [p.label for p in patches] == [FRONT_LABEL, SIDE_LABEL, BACK_LABEL]
    assert all(p.smoothness == 4 for p in patches)
    assert all(p.rows.shape == (4, 4, 3) for p in patches)


def test_front_bevel_rows(settings):
    front, _, _ = quad_patches(QUAD, displace_quad(QUAD, 1.0), settings)
    assert np.allclose(front.rows[0, :, :2], QUAD.points)
    assert np.allclose(front.rows[0, :, 2], 0.0)
    assert np.allclose(front.rows[1, :, 1], -0.76)
    assert np.allclose(front.rows[1, :, 2], 0.0)
    assert np.allclose(front.rows[2, :, 2], -(1 - 0.76))
    assert np.allclose(front.rows[3, :, 1], -1.0)
    assert np.allclose(front.rows[3, :, 2], -1.0)


def test_side_rows_sweep_depth(settings):
    _, side, _ = quad_patches(QUAD, displace_quad(QUAD, 1.0), settings)
    assert np.allclose(side.rows[:, 0, 2], [-1.0, -7.0 / 3.0, -11.0 / 3.0, -5.0])
    assert np.allclose(side.rows[:, :, 1], -1.0)


def test_back_bevel_mirrors_front(settings):
    _, _, back = quad_patches(QUAD, displace_quad(QUAD, 1.0), settings)
    assert np.allclose(back.rows[0, :, 2], -5.0)
    assert np.allclose(back.rows[1, :, 2], -5.0 * 0.24 - 6.0 * 0.76)
    assert np.allclose(back.rows[2, :, 1], -0.76)
    assert np.allclose(back.rows[3, :, :2], QUAD.points)
    assert np.allclose(back.rows[3, :, 2], -6.0)


def test_fillet_patches_use_corner_point(settings):
    fillet = synthesize_fillet(QUAD, NEXT, displace_quad(QUAD, 1.0), displace_quad(NEXT, 1.0), 0.76)
    patches = fillet_patches(fillet, settings)
    assert [p.label for p in patches] == [FRONT_CORNER_LABEL, SIDE_CORNER_LABEL, BACK_CORNER_LABEL]
    front, side, back = patches
    assert np.allclose(front.rows[0, :, :2], [10, 0])
    assert np.allclose(front.rows[3, :, :2], fillet.points)
    assert np.allclose(back.rows[3, :, :2], [10, 0])
    assert np.allclose(side.rows[:, 0, 2], [-1.0, -7.0 / 3.0, -11.0 / 3.0, -5.0])


@pytest.mark.parametrize(
    ("skip_front", "skip_back", "labels"),
    [
        (True, False, [SIDE_LABEL, BACK_LABEL]),
        (False, True, [FRONT_LABEL, SIDE_LABEL]),
        (True, True, [SIDE_LABEL]),
    ],
)
def test_skip_flags(skip_front, skip_back, labels):
    settings = RoundingSettings(skip_front=skip_front, skip_back=skip_back)
    patches = quad_patches(QUAD, displace_quad(QUAD, 1.0), settings)
    assert [p.label for p in patches] == labels


def test_smoothness_propagates():
    settings = RoundingSettings(smoothness=6)
    patches = quad_patches(QUAD, displace_quad(QUAD, 1.0), settings)
    assert {p.smoothness for p in patches} == {6}
