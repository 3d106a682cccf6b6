from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, List, Sequence

import numpy as np

from povrounding.errors import MalformedOutlineError

from .points import PointKind, TypedPoint, _require_vec2


@dataclass(frozen=True)
class LineSegment:
    end: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "end", _require_vec2(self.end, "end"))


@dataclass(frozen=True)
class CubicSegment:
    c1: np.ndarray
    c2: np.ndarray
    end: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "c1", _require_vec2(self.c1, "c1"))
        object.__setattr__(self, "c2", _require_vec2(self.c2, "c2"))
        object.__setattr__(self, "end", _require_vec2(self.end, "end"))


Segment = LineSegment | CubicSegment


@dataclass(frozen=True)
class Curve:
    """One closed run of an outline: a start point followed by segments."""

    start: np.ndarray
    segments: tuple[Segment, ...] = field(default_factory=tuple)
    closed: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _require_vec2(self.start, "start"))
        object.__setattr__(self, "segments", tuple(self.segments))


class _ScanState(Enum):
    EXPECT_START = auto()
    IN_LINE = auto()
    IN_CUBIC = auto()
    CLOSED = auto()


def validate_stream(points: Sequence[TypedPoint]) -> None:
    """Check the Start/Close placement invariants of a typed point stream."""

    if not points:
        raise MalformedOutlineError("Outline contains no points.")
    if points[0].kind.segment_kind != PointKind.START:
        raise MalformedOutlineError("Outline must begin with a start point.", 0)
    last = len(points) - 1
    for i, point in enumerate(points):
        if point.kind.segment_kind == PointKind.START and i > 0 and not points[i - 1].kind.closes:
            raise MalformedOutlineError("Start point does not follow a closed subpath.", i)
        if point.kind.closes and i < last and points[i + 1].kind.segment_kind != PointKind.START:
            raise MalformedOutlineError("Closed subpath is not followed by a start point.", i)


def segment_curves(points: Iterable[TypedPoint]) -> List[Curve]:
    """Group a typed point stream into closed curves, one per start/close run."""

    stream = list(points)
    validate_stream(stream)

    curves: List[Curve] = []
    state = _ScanState.EXPECT_START
    start: np.ndarray | None = None
    segments: list[Segment] = []
    pending: list[np.ndarray] = []

    for index, point in enumerate(stream):
        kind = point.kind.segment_kind

        if state in (_ScanState.EXPECT_START, _ScanState.CLOSED):
            if kind != PointKind.START:
                raise MalformedOutlineError("Expected a start point.", index)
            if point.kind.closes:
                raise MalformedOutlineError("Subpath closes without any segments.", index)
            start = point.location
            segments = []
            state = _ScanState.IN_LINE
            continue

        if state == _ScanState.IN_LINE:
            if kind == PointKind.LINE:
                segments.append(LineSegment(point.location))
            elif kind == PointKind.BEZIER:
                if point.kind.closes:
                    raise MalformedOutlineError("Subpath closes inside a cubic segment.", index)
                pending = [point.location]
                state = _ScanState.IN_CUBIC
                continue
            elif kind == PointKind.START:
                raise MalformedOutlineError("Start point inside an open subpath.", index)
            else:
                raise MalformedOutlineError(f"Unknown point type {int(point.kind)}.", index)
        else:
            if kind != PointKind.BEZIER:
                raise MalformedOutlineError("Cubic segment requires three consecutive control points.", index)
            pending.append(point.location)
            if len(pending) < 3:
                if point.kind.closes:
                    raise MalformedOutlineError("Subpath closes inside a cubic segment.", index)
                continue
            segments.append(CubicSegment(*pending))
            pending = []
            state = _ScanState.IN_LINE

        if point.kind.closes:
            curves.append(Curve(start=start, segments=tuple(segments), closed=True))
            state = _ScanState.CLOSED

    if state != _ScanState.CLOSED:
        raise MalformedOutlineError("Outline ends inside an unclosed subpath.", len(stream) - 1)
    return curves


__all__ = [
    "CubicSegment",
    "Curve",
    "LineSegment",
    "Segment",
    "segment_curves",
    "validate_stream",
]
