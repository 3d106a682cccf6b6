from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from povrounding.errors import DiscontinuousCurveError

from .offset import DisplacedQuad
from .points import same_point
from .quads import Quad


@dataclass(frozen=True)
class Fillet:
    """Corner geometry bridging two displaced quads at a convex junction."""

    corner: np.ndarray
    points: np.ndarray

    def __post_init__(self) -> None:
        corner = np.asarray(self.corner, dtype=float).reshape(2).copy()
        pts = np.asarray(self.points, dtype=float).reshape(4, 2).copy()
        corner.setflags(write=False)
        pts.setflags(write=False)
        object.__setattr__(self, "corner", corner)
        object.__setattr__(self, "points", pts)


def blend(one, two, ratio_of_two: float):
    """``one * (1 - k) + two * k`` for scalars or coordinate arrays."""
    return one * (1 - ratio_of_two) + two * ratio_of_two


def turn_angle(quad: Quad, next_quad: Quad) -> float:
    """Angle between the incoming and the reversed outgoing tangent, in [0, 2*pi)."""

    incoming = quad.p3 - quad.p2
    outgoing = next_quad.p0 - next_quad.p1
    angle = math.atan2(incoming[1], incoming[0]) - math.atan2(outgoing[1], outgoing[0])
    if angle < 0:
        angle += 2 * math.pi
    return angle


def is_convex(angle: float) -> bool:
    return angle < math.pi


def intersect_lines(
    f1: np.ndarray, t1: np.ndarray, f2: np.ndarray, t2: np.ndarray
) -> np.ndarray | None:
    """Intersect the line through f1, t1 with the line through f2, t2."""

    det = (f1[0] - t1[0]) * (f2[1] - t2[1]) - (f1[1] - t1[1]) * (f2[0] - t2[0])
    if det == 0:
        return None
    a = f1[0] * t1[1] - f1[1] * t1[0]
    b = f2[0] * t2[1] - f2[1] * t2[0]
    return np.array(
        [
            (a * (f2[0] - t2[0]) - (f1[0] - t1[0]) * b) / det,
            (a * (f2[1] - t2[1]) - (f1[1] - t1[1]) * b) / det,
        ],
        dtype=float,
    )


def synthesize_fillet(
    quad: Quad,
    next_quad: Quad,
    displaced: DisplacedQuad,
    displaced_next: DisplacedQuad,
    factor: float,
) -> Fillet | None:
    """Build the corner fillet between two consecutive quads, if the turn is convex."""

    if not same_point(quad.p3, next_quad.p0):
        raise DiscontinuousCurveError(quad.p3, next_quad.p0)

    if not is_convex(turn_angle(quad, next_quad)):
        return None

    intersection = intersect_lines(displaced.p2, displaced.p3, displaced_next.p1, displaced_next.p0)
    if intersection is None:
        return None

    points = np.vstack(
        [
            displaced.p3,
            blend(displaced.p3, intersection, factor),
            blend(displaced_next.p0, intersection, factor),
            displaced_next.p0,
        ]
    )
    return Fillet(corner=next_quad.p0, points=points)


__all__ = ["Fillet", "blend", "intersect_lines", "is_convex", "synthesize_fillet", "turn_angle"]
