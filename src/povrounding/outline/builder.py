from __future__ import annotations

from typing import Iterable, List, Sequence

import numpy as np

from povrounding.rounding.points import PointKind, TypedPoint, _require_vec2, same_point


class OutlineBuilder:
    """Accumulate figures into a typed point stream.

    Each figure starts with a ``START`` point; ``close_figure`` tags the last
    point of the open figure with ``CLOSE_SUBPATH``. Figures left open when the
    stream is read are closed implicitly.
    """

    def __init__(self) -> None:
        self._points: List[TypedPoint] = []
        self._current: np.ndarray | None = None
        self._figure_open = False

    @property
    def current_point(self) -> np.ndarray | None:
        return self._current

    @property
    def figure_open(self) -> bool:
        return self._figure_open

    def move_to(self, point: Sequence[float]) -> "OutlineBuilder":
        if self._figure_open:
            self.close_figure()
        self._current = _require_vec2(point, "point")
        return self

    def _ensure_figure(self) -> None:
        if self._current is None:
            raise ValueError("A figure must begin with move_to().")
        if not self._figure_open:
            self._points.append(TypedPoint(self._current, PointKind.START))
            self._figure_open = True

    def line_to(self, point: Sequence[float]) -> "OutlineBuilder":
        self._ensure_figure()
        target = _require_vec2(point, "point")
        self._points.append(TypedPoint(target, PointKind.LINE))
        self._current = target
        return self

    def curve_to(
        self,
        c1: Sequence[float],
        c2: Sequence[float],
        end: Sequence[float],
    ) -> "OutlineBuilder":
        self._ensure_figure()
        for control in (c1, c2, end):
            self._points.append(TypedPoint(_require_vec2(control, "control point"), PointKind.BEZIER))
        self._current = self._points[-1].location
        return self

    def close_figure(self) -> "OutlineBuilder":
        if not self._figure_open:
            return self
        last = self._points[-1]
        self._points[-1] = TypedPoint(last.location, last.kind | PointKind.CLOSE_SUBPATH)
        start = next(p for p in reversed(self._points) if p.kind.segment_kind == PointKind.START)
        self._current = start.location
        self._figure_open = False
        return self

    def add_polygon(self, vertices: Iterable[Sequence[float]]) -> "OutlineBuilder":
        pts = [_require_vec2(v, "vertex") for v in vertices]
        if len(pts) < 3:
            raise ValueError("A polygon requires at least three vertices.")
        self.move_to(pts[0])
        for pt in pts[1:]:
            if not same_point(pt, self._current):
                self.line_to(pt)
        if not self._figure_open:
            raise ValueError("A polygon requires at least two distinct vertices.")
        return self.close_figure()

    def points(self) -> List[TypedPoint]:
        """Return the typed point stream, closing any figure still open."""
        self.close_figure()
        return list(self._points)


def transform_points(points: Iterable[TypedPoint], matrix: np.ndarray) -> List[TypedPoint]:
    """Apply a 2x3 affine matrix ``[[a, c, e], [b, d, f]]`` to every point."""

    m = np.asarray(matrix, dtype=float).reshape(2, 3)
    result = []
    for point in points:
        x, y = point.location
        location = (m[0, 0] * x + m[0, 1] * y + m[0, 2], m[1, 0] * x + m[1, 1] * y + m[1, 2])
        result.append(TypedPoint(location, point.kind))
    return result


__all__ = ["OutlineBuilder", "transform_points"]
