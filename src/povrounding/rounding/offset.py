from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from povrounding.errors import DegenerateControlPointError

from .quads import Quad

# For each control point: the pair of quad points whose direction defines its normal.
_NORMAL_EDGES = ((0, 1), (0, 2), (1, 3), (2, 3))


@dataclass(frozen=True)
class DisplacedQuad:
    """A quad's control points pushed outward by ``radius``."""

    source: Quad
    points: np.ndarray
    radius: float

    def __post_init__(self) -> None:
        pts = np.asarray(self.points, dtype=float).reshape(4, 2).copy()
        pts.setflags(write=False)
        object.__setattr__(self, "points", pts)

    @property
    def p0(self) -> np.ndarray:
        return self.points[0]

    @property
    def p1(self) -> np.ndarray:
        return self.points[1]

    @property
    def p2(self) -> np.ndarray:
        return self.points[2]

    @property
    def p3(self) -> np.ndarray:
        return self.points[3]


def outward_normal(on: np.ndarray, right: np.ndarray, radius: float) -> np.ndarray:
    """Normal of the direction ``on -> right`` scaled to ``radius``.

    The normal is subtracted from a point to move it outward.
    """
    vec = np.array([on[1] - right[1], right[0] - on[0]], dtype=float)
    length = float(np.hypot(vec[0], vec[1]))
    if length == 0:
        raise DegenerateControlPointError(on)
    return vec * (radius / length)


def displace_point(point: np.ndarray, on: np.ndarray, right: np.ndarray, radius: float) -> np.ndarray:
    return point - outward_normal(on, right, radius)


def displace_quad(quad: Quad, radius: float) -> DisplacedQuad:
    pts = quad.points
    displaced = [
        displace_point(pts[i], pts[a], pts[b], radius) for i, (a, b) in enumerate(_NORMAL_EDGES)
    ]
    return DisplacedQuad(source=quad, points=np.vstack(displaced), radius=float(radius))


__all__ = ["DisplacedQuad", "displace_point", "displace_quad", "outward_normal"]
