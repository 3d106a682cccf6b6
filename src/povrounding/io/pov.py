from __future__ import annotations

from pathlib import Path
from typing import List

import numpy as np

from povrounding.rounding.patches import Patch
from povrounding.rounding.solid import RoundedSolid

INDENT = "    "


def _num(value: float) -> str:
    value = float(value)
    if value == 0:
        value = 0.0
    return format(value, ".9g")


def _vec2(point: np.ndarray) -> str:
    return f"<{_num(point[0])}, {_num(point[1])}>"


def _vec3(point: np.ndarray) -> str:
    return f"<{_num(point[0])}, {_num(point[1])}, {_num(point[2])}>"


def _extra_lines(extra_code: str, depth: int) -> List[str]:
    if not extra_code or not extra_code.strip():
        return []
    pad = INDENT * depth
    return [pad + line if line.strip() else "" for line in extra_code.strip("\n").splitlines()]


def format_prism(solid: RoundedSolid) -> List[str]:
    points = [p for row in solid.prism_rows for p in row]
    pad = INDENT * 2
    lines = [
        f"{INDENT}prism {{",
        f"{pad}bezier_spline linear_sweep 0, {_num(solid.depth)}, {len(points)}",
    ]
    groups = [points[i : i + 4] for i in range(0, len(points), 4)]
    for i, group in enumerate(groups):
        suffix = "," if i < len(groups) - 1 else ""
        lines.append(pad + ", ".join(_vec2(p) for p in group) + suffix)
    lines.extend(_extra_lines(solid.extra_code, 2))
    lines.append(f"{pad}rotate 90*x")
    lines.append(f"{INDENT}}}")
    return lines


def format_patch(patch: Patch, extra_code: str = "") -> List[str]:
    pad = INDENT * 2
    lines = [
        f"{INDENT}// {patch.label}",
        f"{INDENT}bicubic_patch {{",
        f"{pad}type 1 flatness 0.001",
        f"{pad}u_steps {patch.smoothness} v_steps {patch.smoothness}",
    ]
    for i, row in enumerate(patch.rows):
        suffix = "," if i < 3 else ""
        lines.append(pad + ", ".join(_vec3(p) for p in row) + suffix)
    lines.extend(_extra_lines(extra_code, 2))
    lines.append(f"{pad}rotate 180*x")
    lines.append(f"{INDENT}}}")
    return lines


def format_solid(solid: RoundedSolid) -> str:
    """Render the solid as a POV-Ray ``#declare`` of a union."""

    lines = [f"#declare {solid.name} = union {{"]
    lines.extend(format_prism(solid))
    for patch in solid.patches:
        lines.append("")
        lines.extend(format_patch(patch, solid.extra_code))
    lines.append("}")
    return "\n".join(lines) + "\n"


def write_pov(solid: RoundedSolid, path: Path) -> Path:
    path = Path(path)
    text = format_solid(solid)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


__all__ = ["format_patch", "format_prism", "format_solid", "write_pov"]
