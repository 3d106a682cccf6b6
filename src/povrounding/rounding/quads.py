from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

import numpy as np

from .points import same_point
from .segments import CubicSegment, Curve, LineSegment, Segment


@dataclass(frozen=True)
class Quad:
    """One cubic Bezier piece of a curve as four control points.

    Straight segments are stored as degenerate cubics whose interior points sit
    at 1/3 and 2/3 along the line.
    """

    points: np.ndarray

    def __post_init__(self) -> None:
        pts = np.asarray(self.points, dtype=float).reshape(4, 2).copy()
        pts.setflags(write=False)
        object.__setattr__(self, "points", pts)

    @classmethod
    def line(cls, start: Sequence[float], end: Sequence[float]) -> "Quad":
        a = np.asarray(start, dtype=float)
        b = np.asarray(end, dtype=float)
        return cls(np.vstack([a, a * 2 / 3 + b * 1 / 3, a * 1 / 3 + b * 2 / 3, b]))

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


@dataclass
class _QuadAccumulator:
    last_point: np.ndarray
    quads: List[Quad] = field(default_factory=list)

    def add(self, segment: Segment) -> "_QuadAccumulator":
        if isinstance(segment, LineSegment):
            if same_point(segment.end, self.last_point):
                return self
            self.quads.append(Quad.line(self.last_point, segment.end))
        elif isinstance(segment, CubicSegment):
            self.quads.append(Quad(np.vstack([self.last_point, segment.c1, segment.c2, segment.end])))
        else:
            raise TypeError(f"Unsupported segment type: {type(segment).__name__}")
        self.last_point = segment.end
        return self


def curve_quads(curve: Curve) -> List[Quad]:
    """Normalize a curve into quads, closing it back to its start point."""

    accumulator = _QuadAccumulator(last_point=curve.start)
    for segment in (*curve.segments, LineSegment(curve.start)):
        accumulator = accumulator.add(segment)
    return accumulator.quads


def curve_points(curve: Curve) -> np.ndarray:
    """Return the curve's quads flattened into a (4n, 2) control point array."""

    return quads_points(curve_quads(curve))


def quads_points(quads: Iterable[Quad]) -> np.ndarray:
    rows = [quad.points for quad in quads]
    if not rows:
        return np.zeros((0, 2), dtype=float)
    return np.vstack(rows)


__all__ = ["Quad", "curve_points", "curve_quads", "quads_points"]
