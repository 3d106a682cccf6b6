"""Outline decoders producing typed point streams from polygons, SVG paths and text."""

from __future__ import annotations

from .builder import OutlineBuilder, transform_points
from .polygon import parse_polygon, parse_vertices
from .svg import load_svg_path, parse_matrix, parse_svg_file, parse_svg_path

__all__ = [
    "OutlineBuilder",
    "load_svg_path",
    "parse_matrix",
    "parse_polygon",
    "parse_svg_file",
    "parse_svg_path",
    "parse_vertices",
    "transform_points",
]
