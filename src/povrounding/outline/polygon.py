from __future__ import annotations

import re
from typing import List

from povrounding.errors import UnsupportedPathSyntaxError
from povrounding.rounding.points import TypedPoint

from .builder import OutlineBuilder

NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_VERTEX = re.compile(rf"\s*\(\s*({NUMBER})\s*,\s*({NUMBER})\s*\)\s*")
_SEPARATOR = re.compile(r",")


def parse_vertices(text: str) -> List[tuple[float, float]]:
    """Parse ``"(x1,y1),(x2,y2),...,(xn,yn)"`` into a vertex list."""

    vertices: List[tuple[float, float]] = []
    index = 0
    while True:
        match = _VERTEX.match(text, index)
        if match is None:
            raise UnsupportedPathSyntaxError("The polygon does not conform to the expected syntax", index)
        vertices.append((float(match.group(1)), float(match.group(2))))
        index = match.end()
        if index == len(text):
            return vertices
        separator = _SEPARATOR.match(text, index)
        if separator is None:
            raise UnsupportedPathSyntaxError("Expected ',' between polygon vertices", index)
        index = separator.end()


def parse_polygon(text: str) -> List[TypedPoint]:
    vertices = parse_vertices(text)
    if len(vertices) < 3:
        raise UnsupportedPathSyntaxError("A polygon requires at least three vertices", len(text))
    return OutlineBuilder().add_polygon(vertices).points()


__all__ = ["parse_polygon", "parse_vertices"]
