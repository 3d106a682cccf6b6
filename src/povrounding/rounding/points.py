from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import Sequence

import numpy as np


class PointKind(IntFlag):
    """Point tags of an outline stream, laid out like GDI+ path point types."""

    START = 0
    LINE = 1
    BEZIER = 3
    TYPE_MASK = 0x07
    CLOSE_SUBPATH = 0x80

    @property
    def segment_kind(self) -> "PointKind":
        return PointKind(self & PointKind.TYPE_MASK)

    @property
    def closes(self) -> bool:
        return bool(self & PointKind.CLOSE_SUBPATH)


def _require_vec2(value: Sequence[float], label: str) -> np.ndarray:
    try:
        arr = np.asarray(value, dtype=float).reshape(2)
    except Exception as exc:
        raise ValueError(f"{label} must be a 2D coordinate.") from exc
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{label} must be finite.")
    return arr


@dataclass(frozen=True)
class TypedPoint:
    location: np.ndarray
    kind: PointKind

    def __post_init__(self) -> None:
        object.__setattr__(self, "location", _require_vec2(self.location, "location"))
        object.__setattr__(self, "kind", PointKind(self.kind))

    @property
    def x(self) -> float:
        return float(self.location[0])

    @property
    def y(self) -> float:
        return float(self.location[1])


def same_point(a: np.ndarray, b: np.ndarray) -> bool:
    """Exact coordinate equality; quads share endpoints by construction."""
    return bool(a[0] == b[0] and a[1] == b[1])


__all__ = ["PointKind", "TypedPoint", "same_point"]
