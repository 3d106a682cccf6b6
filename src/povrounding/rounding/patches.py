from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from povrounding.settings import RoundingSettings

from .fillet import Fillet, blend
from .offset import DisplacedQuad
from .quads import Quad

FRONT_LABEL = "Front fillet"
SIDE_LABEL = "Side"
BACK_LABEL = "Back fillet"
FRONT_CORNER_LABEL = "Front corner fillet"
SIDE_CORNER_LABEL = "Side corner fillet"
BACK_CORNER_LABEL = "Back corner fillet"


@dataclass(frozen=True)
class Patch:
    """A bicubic patch: four rows of four 3D control points."""

    label: str
    rows: np.ndarray
    smoothness: int

    def __post_init__(self) -> None:
        rows = np.asarray(self.rows, dtype=float).reshape(4, 4, 3).copy()
        rows.setflags(write=False)
        object.__setattr__(self, "rows", rows)
        object.__setattr__(self, "smoothness", int(self.smoothness))


def _row(points: np.ndarray, z: float) -> np.ndarray:
    pts = np.asarray(points, dtype=float).reshape(4, 2)
    return np.column_stack([pts, np.full(4, float(z))])


def _bevel_triple(
    flat: np.ndarray,
    wall: np.ndarray,
    settings: RoundingSettings,
    labels: tuple[str, str, str],
) -> List[Patch]:
    """Front bevel, side wall and back bevel between flat points and wall points."""

    r = settings.radius
    depth = settings.depth
    k = settings.factor
    steps = settings.smoothness
    front_label, side_label, back_label = labels
    blended = blend(flat, wall, k)

    patches: List[Patch] = []
    if not settings.skip_front:
        patches.append(
            Patch(
                front_label,
                [_row(flat, 0.0), _row(blended, 0.0), _row(wall, -r * (1 - k)), _row(wall, -r)],
                steps,
            )
        )
    patches.append(
        Patch(
            side_label,
            [
                _row(wall, -r),
                _row(wall, -r * 1 / 3 - depth * 1 / 3),
                _row(wall, r * 1 / 3 - depth * 2 / 3),
                _row(wall, r - depth),
            ],
            steps,
        )
    )
    if not settings.skip_back:
        patches.append(
            Patch(
                back_label,
                [
                    _row(wall, r - depth),
                    _row(wall, blend(r - depth, -depth, k)),
                    _row(blended, -depth),
                    _row(flat, -depth),
                ],
                steps,
            )
        )
    return patches


def quad_patches(quad: Quad, displaced: DisplacedQuad, settings: RoundingSettings) -> List[Patch]:
    return _bevel_triple(quad.points, displaced.points, settings, (FRONT_LABEL, SIDE_LABEL, BACK_LABEL))


def fillet_patches(fillet: Fillet, settings: RoundingSettings) -> List[Patch]:
    flat = np.tile(fillet.corner, (4, 1))
    return _bevel_triple(
        flat, fillet.points, settings, (FRONT_CORNER_LABEL, SIDE_CORNER_LABEL, BACK_CORNER_LABEL)
    )


__all__ = [
    "BACK_CORNER_LABEL",
    "BACK_LABEL",
    "FRONT_CORNER_LABEL",
    "FRONT_LABEL",
    "Patch",
    "SIDE_CORNER_LABEL",
    "SIDE_LABEL",
    "fillet_patches",
    "quad_patches",
]
