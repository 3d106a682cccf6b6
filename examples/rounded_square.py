"""Round a square and a triangle and write them as one POV-Ray declaration."""

from __future__ import annotations

from pathlib import Path

from povrounding import RoundingSettings, round_outline
from povrounding.io.pov import write_pov
from povrounding.outline import OutlineBuilder


def build():
    builder = OutlineBuilder()
    builder.add_polygon([(0, 0), (10, 0), (10, 10), (0, 10)])
    builder.add_polygon([(14, 0), (24, 0), (19, 8)])
    settings = RoundingSettings(depth=4.0, radius=0.8, extra_code="pigment { rgb <1, 0.5, 0> }")
    return round_outline(builder.points(), settings, name="Shapes")


if __name__ == "__main__":
    solid = build()
    path = write_pov(solid, Path("shapes.pov"))
    print(f"Wrote {len(solid.patches)} patches to {path}")
