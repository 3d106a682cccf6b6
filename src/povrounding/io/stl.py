from __future__ import annotations

from pathlib import Path

import numpy as np

from povrounding.mesh import Mesh

_BINARY_RECORD = np.dtype(
    [("normal", "<f4", (3,)), ("corners", "<f4", (3, 3)), ("attributes", "<u2")]
)


def _triangles(mesh: Mesh) -> np.ndarray:
    return mesh.vertices[mesh.faces] if mesh.n_faces else np.zeros((0, 3, 3), dtype=float)


def _unit_normals(triangles: np.ndarray) -> np.ndarray:
    cross = np.cross(triangles[:, 1] - triangles[:, 0], triangles[:, 2] - triangles[:, 0])
    length = np.linalg.norm(cross, axis=1, keepdims=True)
    # Sliver triangles get a zero normal.
    return np.divide(cross, length, out=np.zeros_like(cross), where=length > 0)


def _ascii_stl(name: str, triangles: np.ndarray, normals: np.ndarray) -> str:
    lines = [f"solid {name}"]
    for normal, corners in zip(normals, triangles):
        lines.append("  facet normal {:.6e} {:.6e} {:.6e}".format(*normal))
        lines.append("    outer loop")
        lines.extend("      vertex {:.6e} {:.6e} {:.6e}".format(*corner) for corner in corners)
        lines.append("    endloop")
        lines.append("  endfacet")
    lines.append(f"endsolid {name}")
    return "\n".join(lines) + "\n"


def write_stl(mesh: Mesh, path: Path, ascii: bool = False) -> Path:
    """Write a tessellated solid as binary (default) or ASCII STL."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    name = str(mesh.metadata.get("name", "povrounding"))
    triangles = _triangles(mesh)
    normals = _unit_normals(triangles)

    if ascii:
        path.write_text(_ascii_stl(name, triangles, normals))
        return path

    records = np.zeros(triangles.shape[0], dtype=_BINARY_RECORD)
    records["normal"] = normals
    records["corners"] = triangles
    header = f"povrounding {name}".encode("ascii", "replace")[:80].ljust(80, b"\0")
    with path.open("wb") as handle:
        handle.write(header)
        handle.write(np.uint32(records.shape[0]).astype("<u4").tobytes())
        handle.write(records.tobytes())
    return path


__all__ = ["write_stl"]
