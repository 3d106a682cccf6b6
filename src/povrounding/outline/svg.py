from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List

import numpy as np

from povrounding.errors import UnsupportedPathSyntaxError
from povrounding.rounding.points import TypedPoint

from .builder import OutlineBuilder, transform_points

_NUM = r"-?\d*(?:\d|\.\d+)(?=$|[\s,MLCZz])"
_SEP = r"[\s,]*"
_SEP1 = r"[\s,]+"
_MATRIX_NUM = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_MATRIX_OPEN = re.compile(r"\s*matrix\s*\(\s*")
_MATRIX_ARG = re.compile(rf"({_MATRIX_NUM})\s*")
_MATRIX_SEP = re.compile(r",?\s*")
_MATRIX_CLOSE = re.compile(r"\)\s*")


def _command(letters: str, count: int, optional: bool) -> re.Pattern[str]:
    head = f"[{letters}]" + ("?" if optional else "")
    numbers = _SEP1.join([f"({_NUM})"] * count)
    return re.compile(head + _SEP + numbers + _SEP)


_MOVE_LINE = _command("ML", 2, optional=False)
_MOVE_LINE_IMPLICIT = _command("ML", 2, optional=True)
_CURVE = _command("C", 6, optional=False)
_CURVE_IMPLICIT = _command("C", 6, optional=True)
_CLOSE = re.compile(r"[Zz]" + _SEP)


def parse_matrix(text: str) -> np.ndarray:
    """Parse ``matrix(a,b,c,d,e,f)`` into ``[[a, c, e], [b, d, f]]``.

    Error offsets index into ``text``, i.e. the ``transform`` attribute value.
    """

    opening = _MATRIX_OPEN.match(text)
    if opening is None:
        offset = len(text) - len(text.lstrip())
        raise UnsupportedPathSyntaxError("Only matrix(a,b,c,d,e,f) transforms are supported in transform", offset)
    index = opening.end()
    values: List[float] = []
    for position in range(6):
        if position:
            index = _MATRIX_SEP.match(text, index).end()
        number = _MATRIX_ARG.match(text, index)
        if number is None:
            raise UnsupportedPathSyntaxError("Expected a number in the matrix transform", index)
        values.append(float(number.group(1)))
        index = number.end()
    closing = _MATRIX_CLOSE.match(text, index)
    if closing is None:
        raise UnsupportedPathSyntaxError("Expected ')' closing the matrix transform", index)
    if closing.end() != len(text):
        raise UnsupportedPathSyntaxError("Unexpected text after the matrix transform", closing.end())
    a, b, c, d, e, f = values
    return np.array([[a, c, e], [b, d, f]], dtype=float)


def parse_svg_path(data: str, transform: np.ndarray | str | None = None) -> List[TypedPoint]:
    """Parse SVG path data using the absolute M, L, C and Z/z commands.

    Coordinates after a command repeat it implicitly; pairs following ``M``
    continue as line-to.
    """

    builder = OutlineBuilder()
    index = len(data) - len(data.lstrip())
    end = len(data.rstrip())
    previous: str | None = None

    while index < end:
        line_pattern = _MOVE_LINE_IMPLICIT if previous in ("M", "L") else _MOVE_LINE
        curve_pattern = _CURVE_IMPLICIT if previous == "C" else _CURVE

        match = line_pattern.match(data, index, end)
        if match is not None:
            command = match.group(0)[0]
            if command not in "ML":
                command = "L"
            if command != "M" and builder.current_point is None:
                raise UnsupportedPathSyntaxError("Path data must start with an M command", index)
            point = (float(match.group(1)), float(match.group(2)))
            if command == "M":
                builder.move_to(point)
            else:
                builder.line_to(point)
        elif (match := curve_pattern.match(data, index, end)) is not None:
            command = "C"
            if builder.current_point is None:
                raise UnsupportedPathSyntaxError("Path data must start with an M command", index)
            values = [float(g) for g in match.groups()]
            builder.curve_to(values[0:2], values[2:4], values[4:6])
        elif (match := _CLOSE.match(data, index, end)) is not None:
            command = "Z"
            if builder.current_point is None:
                raise UnsupportedPathSyntaxError("Path data must start with an M command", index)
            builder.close_figure()
        else:
            raise UnsupportedPathSyntaxError("The path data does not conform to the expected syntax", index)

        previous = command
        index = match.end()

    points = builder.points()
    if not points:
        raise UnsupportedPathSyntaxError("The path data does not draw anything", index)
    if transform is not None:
        matrix = parse_matrix(transform) if isinstance(transform, str) else transform
        points = transform_points(points, matrix)
    return points


def load_svg_path(path: Path, element_id: str) -> tuple[str, str | None]:
    """Return the ``d`` and ``transform`` attributes of the element with ``element_id``."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"SVG file {path} does not exist.")
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as exc:
        line, column = exc.position
        raise UnsupportedPathSyntaxError(f"{path} is not well-formed XML (line {line})", column) from exc
    for element in root.iter():
        if element.get("id") != element_id:
            continue
        data = element.get("d")
        if data is None:
            raise LookupError(f"The element with id '{element_id}' has no 'd' attribute.")
        return data, element.get("transform")
    raise LookupError(f"No element with id '{element_id}' exists in {path}.")


def parse_svg_file(path: Path, element_id: str) -> List[TypedPoint]:
    data, transform = load_svg_path(path, element_id)
    return parse_svg_path(data, transform)


__all__ = ["load_svg_path", "parse_matrix", "parse_svg_file", "parse_svg_path"]
