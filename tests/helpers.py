from __future__ import annotations

import numpy as np

from povrounding.outline.builder import OutlineBuilder

SQUARE = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]
L_SHAPE = [(0.0, 0.0), (10.0, 0.0), (10.0, 5.0), (5.0, 5.0), (5.0, 10.0), (0.0, 10.0)]


def polygon_points(vertices):
    return OutlineBuilder().add_polygon(vertices).points()


def distance_to_line(point, a, b) -> float:
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    p = np.asarray(point, dtype=float)
    d = b - a
    return abs(d[0] * (p[1] - a[1]) - d[1] * (p[0] - a[0])) / float(np.hypot(d[0], d[1]))
