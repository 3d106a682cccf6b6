"""Rounding geometry: curve segmentation, offsets, corner fillets and bevel patches."""

from __future__ import annotations

from .fillet import Fillet, blend, intersect_lines, is_convex, synthesize_fillet, turn_angle
from .offset import DisplacedQuad, displace_quad
from .patches import Patch, fillet_patches, quad_patches
from .points import PointKind, TypedPoint
from .quads import Quad, curve_points, curve_quads
from .segments import CubicSegment, Curve, LineSegment, Segment, segment_curves
from .solid import RoundedSolid, round_outline, round_quads

__all__ = [
    "CubicSegment",
    "Curve",
    "DisplacedQuad",
    "Fillet",
    "LineSegment",
    "Patch",
    "PointKind",
    "Quad",
    "RoundedSolid",
    "Segment",
    "TypedPoint",
    "blend",
    "curve_points",
    "curve_quads",
    "displace_quad",
    "fillet_patches",
    "intersect_lines",
    "is_convex",
    "quad_patches",
    "round_outline",
    "round_quads",
    "segment_curves",
    "synthesize_fillet",
    "turn_angle",
]
