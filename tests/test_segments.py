from __future__ import annotations

import numpy as np
import pytest

from povrounding.errors import MalformedOutlineError
from povrounding.rounding.points import PointKind, TypedPoint
from povrounding.rounding.segments import CubicSegment, LineSegment, segment_curves, validate_stream

S = PointKind.START
L = PointKind.LINE
B = PointKind.BEZIER
CLOSE = PointKind.CLOSE_SUBPATH


def _stream(*entries):
    return [TypedPoint(location, kind) for location, kind in entries]


def test_point_kind_flags():
    kind = PointKind.BEZIER | PointKind.CLOSE_SUBPATH
    assert kind.closes
    assert kind.segment_kind == PointKind.BEZIER
    assert not PointKind.LINE.closes


def test_typed_point_invalid_coordinate():
    with pytest.raises(ValueError):
        TypedPoint((0, 0, 0), PointKind.START)


def test_segment_lines_positive(square_points):
    curves = segment_curves(square_points)
    assert len(curves) == 1
    curve = curves[0]
    assert curve.closed
    assert np.allclose(curve.start, [0, 0])
    assert all(isinstance(seg, LineSegment) for seg in curve.segments)
    assert [tuple(seg.end) for seg in curve.segments] == [(10, 0), (10, 10), (0, 10)]


def test_segment_cubic_positive():
    stream = _stream(((0, 0), S), ((0, 5), B), ((5, 10), B), ((10, 10), B | CLOSE))
    (curve,) = segment_curves(stream)
    (segment,) = curve.segments
    assert isinstance(segment, CubicSegment)
    assert np.allclose(segment.c1, [0, 5])
    assert np.allclose(segment.c2, [5, 10])
    assert np.allclose(segment.end, [10, 10])


def test_segment_mixed_and_multiple_runs():
    stream = _stream(
        ((0, 0), S),
        ((4, 0), L),
        ((5, 1), B),
        ((5, 3), B),
        ((4, 4), B),
        ((0, 4), L | CLOSE),
        ((10, 10), S),
        ((11, 10), L),
        ((11, 11), L | CLOSE),
    )
    curves = segment_curves(stream)
    assert len(curves) == 2
    assert [type(seg) for seg in curves[0].segments] == [LineSegment, CubicSegment, LineSegment]
    assert np.allclose(curves[1].start, [10, 10])
    assert len(curves[1].segments) == 2


def test_segment_empty_stream():
    with pytest.raises(MalformedOutlineError):
        segment_curves([])


def test_segment_must_begin_with_start():
    stream = _stream(((0, 0), L), ((1, 0), L), ((1, 1), L | CLOSE))
    with pytest.raises(MalformedOutlineError) as info:
        segment_curves(stream)
    assert info.value.index == 0


def test_validate_start_without_preceding_close():
    stream = _stream(((0, 0), S), ((1, 0), L), ((2, 2), S), ((3, 2), L | CLOSE))
    with pytest.raises(MalformedOutlineError) as info:
        validate_stream(stream)
    assert info.value.index == 2


def test_validate_close_not_followed_by_start():
    stream = _stream(((0, 0), S), ((1, 0), L | CLOSE), ((1, 1), L))
    with pytest.raises(MalformedOutlineError) as info:
        validate_stream(stream)
    assert info.value.index == 1


def test_segment_unclosed_run():
    stream = _stream(((0, 0), S), ((1, 0), L), ((1, 1), L))
    with pytest.raises(MalformedOutlineError):
        segment_curves(stream)


def test_segment_close_inside_cubic():
    stream = _stream(((0, 0), S), ((0, 5), B), ((5, 10), B | CLOSE))
    with pytest.raises(MalformedOutlineError) as info:
        segment_curves(stream)
    assert info.value.index == 2


def test_segment_incomplete_cubic_before_line():
    stream = _stream(((0, 0), S), ((0, 5), B), ((5, 10), L), ((9, 9), L | CLOSE))
    with pytest.raises(MalformedOutlineError):
        segment_curves(stream)


def test_segment_start_that_closes_immediately():
    stream = _stream(((0, 0), S | CLOSE))
    with pytest.raises(MalformedOutlineError):
        segment_curves(stream)
