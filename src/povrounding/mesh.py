from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

import mapbox_earcut as earcut
import numpy as np

from povrounding.rounding.patches import Patch
from povrounding.rounding.solid import RoundedSolid


@dataclass
class Mesh:
    """Triangle soup produced by tessellating a rounded solid."""

    vertices: np.ndarray
    faces: np.ndarray
    metadata: dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.vertices = np.array(self.vertices, dtype=float, ndmin=2).reshape(-1, 3)
        self.faces = np.array(self.faces, dtype=np.int64, ndmin=2).reshape(-1, 3)

    @property
    def n_vertices(self) -> int:
        return len(self.vertices)

    @property
    def n_faces(self) -> int:
        return len(self.faces)

    @property
    def bounds(self) -> tuple[float, ...]:
        """(xmin, xmax, ymin, ymax, zmin, zmax); all zero for an empty mesh."""
        if not self.n_vertices:
            return (0.0,) * 6
        span = np.stack([self.vertices.min(axis=0), self.vertices.max(axis=0)], axis=1)
        return tuple(float(v) for v in span.ravel())

    def flip_x(self) -> "Mesh":
        """Apply POV-Ray's ``rotate 180*x``: negate y and z, keep the winding."""
        self.vertices = self.vertices * np.array([1.0, -1.0, -1.0])
        return self


def _bernstein(t: np.ndarray) -> np.ndarray:
    t = np.asarray(t, dtype=float).reshape(-1, 1)
    return np.hstack([(1 - t) ** 3, 3 * (1 - t) ** 2 * t, 3 * (1 - t) * t**2, t**3])


def _grid_faces(rows: int, cols: int, offset: int = 0) -> np.ndarray:
    idx = np.arange(rows * cols).reshape(rows, cols) + offset
    a = idx[:-1, :-1].ravel()
    b = idx[:-1, 1:].ravel()
    c = idx[1:, 1:].ravel()
    d = idx[1:, :-1].ravel()
    return np.vstack([np.column_stack([a, b, c]), np.column_stack([a, c, d])])


def tessellate_patch(patch: Patch, steps: int | None = None) -> Mesh:
    """Evaluate a bicubic patch on a regular (steps + 1) x (steps + 1) grid."""

    steps = max(int(steps if steps is not None else patch.smoothness), 1)
    basis = _bernstein(np.linspace(0.0, 1.0, steps + 1))
    grid = np.einsum("ui,vj,ijk->uvk", basis, basis, patch.rows)
    return Mesh(grid.reshape(-1, 3), _grid_faces(steps + 1, steps + 1))


def sample_loop(control_points: np.ndarray, samples_per_quad: int = 8) -> np.ndarray:
    """Sample a closed row of quads (4 control points each) into a polygon."""

    pts = np.asarray(control_points, dtype=float).reshape(-1, 4, 2)
    if pts.shape[0] == 0:
        return np.zeros((0, 2), dtype=float)
    basis = _bernstein(np.linspace(0.0, 1.0, max(int(samples_per_quad), 1) + 1)[:-1])
    return np.vstack([basis @ quad for quad in pts])


def _signed_area(points: np.ndarray) -> float:
    if points.shape[0] < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))


def _contains(polygon: np.ndarray, point: np.ndarray) -> bool:
    x, y = float(point[0]), float(point[1])
    xi = polygon[:, 0]
    yi = polygon[:, 1]
    xj = np.roll(xi, 1)
    yj = np.roll(yi, 1)
    crosses = (yi > y) != (yj > y)
    with np.errstate(divide="ignore", invalid="ignore"):
        x_at = (xj - xi) * (y - yi) / (yj - yi) + xi
    return bool(np.count_nonzero(crosses & (x < x_at)) % 2)


def group_loops(loops: Sequence[np.ndarray]) -> List[List[np.ndarray]]:
    """Group loops into [outer, *holes]; outers wind positively, holes negatively."""

    outers = [loop for loop in loops if _signed_area(loop) > 0]
    holes = [loop for loop in loops if _signed_area(loop) < 0]
    groups: List[List[np.ndarray]] = [[outer] for outer in outers]
    for hole in holes:
        candidates = [i for i, outer in enumerate(outers) if _contains(outer, hole[0])]
        if not candidates:
            continue
        best = min(candidates, key=lambda i: abs(_signed_area(outers[i])))
        groups[best].append(hole)
    return groups


def _triangulate_group(group: List[np.ndarray]) -> tuple[np.ndarray, np.ndarray]:
    vertices = np.vstack(group)
    ring_ends = np.cumsum([len(loop) for loop in group]).astype(np.uint32)
    indices = earcut.triangulate_float64(vertices, ring_ends)
    return vertices, np.asarray(indices, dtype=np.int64).reshape(-1, 3)


def _orient_faces(vertices_2d: np.ndarray, faces: np.ndarray, facing_up: bool) -> np.ndarray:
    """Reorder triangles so their normals point along +z (or -z)."""

    if not faces.size:
        return faces
    a, b, c = (vertices_2d[faces[:, k]] for k in range(3))
    cross_z = (b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) - (b[:, 1] - a[:, 1]) * (c[:, 0] - a[:, 0])
    wrong = cross_z < 0 if facing_up else cross_z > 0
    oriented = faces.copy()
    oriented[wrong] = oriented[wrong][:, ::-1]
    return oriented


def cap_meshes(solid: RoundedSolid, samples_per_quad: int = 8) -> List[Mesh]:
    """Flat front (z = 0) and back (z = -depth) faces of the un-rounded prism."""

    loops = [sample_loop(row, samples_per_quad) for row in solid.prism_rows]
    meshes: List[Mesh] = []
    for group in group_loops([loop for loop in loops if len(loop) >= 3]):
        vertices_2d, faces = _triangulate_group(group)
        for z, facing_up in ((0.0, True), (-solid.depth, False)):
            vertices = np.column_stack([vertices_2d, np.full(len(vertices_2d), z)])
            meshes.append(Mesh(vertices, _orient_faces(vertices_2d, faces, facing_up)))
    return meshes


def combine_meshes(meshes: Iterable[Mesh]) -> Mesh:
    parts = list(meshes)
    if not parts:
        raise ValueError("combine_meshes requires at least one mesh.")
    offsets = np.cumsum([0] + [part.n_vertices for part in parts[:-1]])
    return Mesh(
        vertices=np.concatenate([part.vertices for part in parts]),
        faces=np.concatenate([part.faces + offset for part, offset in zip(parts, offsets)]),
    )


def solid_to_mesh(solid: RoundedSolid, steps: int | None = None, samples_per_quad: int = 8) -> Mesh:
    """Tessellate a rounded solid, oriented like the POV-Ray declaration."""

    parts = cap_meshes(solid, samples_per_quad=samples_per_quad)
    parts.extend(tessellate_patch(patch, steps) for patch in solid.patches)
    mesh = combine_meshes(parts) if parts else Mesh(np.zeros((0, 3)), np.zeros((0, 3)))
    mesh.metadata["name"] = solid.name
    return mesh.flip_x()


__all__ = [
    "Mesh",
    "cap_meshes",
    "combine_meshes",
    "group_loops",
    "sample_loop",
    "solid_to_mesh",
    "tessellate_patch",
]
