from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

import numpy as np

from povrounding.settings import RoundingSettings

from .fillet import synthesize_fillet
from .offset import displace_quad
from .patches import Patch, fillet_patches, quad_patches
from .points import TypedPoint
from .quads import Quad, curve_quads, quads_points
from .segments import segment_curves


@dataclass
class RoundedSolid:
    """Everything needed to write one rounded extrusion."""

    name: str
    settings: RoundingSettings
    prism_rows: List[np.ndarray] = field(default_factory=list)
    patches: List[Patch] = field(default_factory=list)
    curve_count: int = 0
    quad_count: int = 0
    convex_junctions: int = 0

    @property
    def depth(self) -> float:
        return self.settings.depth

    @property
    def extra_code(self) -> str:
        return self.settings.extra_code

    @property
    def prism_point_count(self) -> int:
        return int(sum(row.shape[0] for row in self.prism_rows))


def round_quads(quads: List[Quad], settings: RoundingSettings) -> tuple[List[Patch], int]:
    """Emit the bevel patches of one closed curve.

    Returns the patches and the number of convex junctions that received a fillet.
    """

    if not quads:
        return [], 0
    displaced = [displace_quad(quad, settings.radius) for quad in quads]
    patches: List[Patch] = []
    fillets = 0
    count = len(quads)
    for i in range(count):
        j = (i + 1) % count
        patches.extend(quad_patches(quads[i], displaced[i], settings))
        fillet = synthesize_fillet(quads[i], quads[j], displaced[i], displaced[j], settings.factor)
        if fillet is None:
            continue
        fillets += 1
        patches.extend(fillet_patches(fillet, settings))
    return patches, fillets


def round_outline(
    points: Iterable[TypedPoint],
    settings: RoundingSettings | None = None,
    name: str = "Rounded",
) -> RoundedSolid:
    """Run the full rounding pipeline over a typed point stream."""

    settings = settings or RoundingSettings()
    if not name or not name.strip():
        raise ValueError("name must be a non-empty string.")

    curves = segment_curves(points)
    solid = RoundedSolid(name=name, settings=settings, curve_count=len(curves))
    for curve in curves:
        quads = curve_quads(curve)
        patches, fillets = round_quads(quads, settings)
        solid.prism_rows.append(quads_points(quads))
        solid.patches.extend(patches)
        solid.quad_count += len(quads)
        solid.convex_junctions += fillets
    return solid


__all__ = ["RoundedSolid", "round_outline", "round_quads"]
