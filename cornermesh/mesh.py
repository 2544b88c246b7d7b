# cornermesh/mesh.py
"""
Prism with independently filleted vertical edges.

The mesh is a non-indexed triangle soup in three contiguous face groups:

    FaceGroup.LATERAL  end faces at x = -w/2 and x = +w/2
    FaceGroup.CAP      top and bottom caps
    FaceGroup.WALL     faces at z = -d/2 and z = +d/2 plus the curved strips

Each group has its own planar UV frame:

    LATERAL  u = (z + d/2) / depth   v = (h/2 - y) / height
    CAP      u = (x + w/2) / width   v = (z + d/2) / depth
    WALL     u = (x + w/2) / width   v = (h/2 - y) / height

All triangles wind counter-clockwise seen from outside.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Mapping, Optional, Tuple, Union

import numpy as np

from .fillet import generate_corner
from .params import (BoxSpec, Corner, CornerMap, CornerSpec, FaceGroup, GroupRange,
                     corners_from, validate_spec)
from .texture import Material, MaterialSlots, configure_material

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]


# --------------
# Mesh container
# --------------

@dataclass
class CornerMesh:
    positions: np.ndarray                        # (N, 3) float64
    uvs: np.ndarray                              # (N, 2) float64, aligned 1:1 with positions
    groups: List[GroupRange] = field(default_factory=list)
    normals: Optional[np.ndarray] = None         # (N, 3) when computed
    material: Optional[MaterialSlots] = None
    name: str = "corner_mesh"

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return self.vertex_count // 3

    def triangles(self) -> np.ndarray:
        """(T, 3, 3) view of the soup."""
        return self.positions.reshape(-1, 3, 3)

    def flat_positions(self) -> np.ndarray:
        return self.positions.reshape(-1)

    def flat_uvs(self) -> np.ndarray:
        return self.uvs.reshape(-1)

    def group_range(self, group: Union[FaceGroup, int]) -> GroupRange:
        return self.groups[int(group)]

    def group_positions(self, group: Union[FaceGroup, int]) -> np.ndarray:
        start, count, _ = self.group_range(group)
        return self.positions[start:start + count]

    def group_uvs(self, group: Union[FaceGroup, int]) -> np.ndarray:
        start, count, _ = self.group_range(group)
        return self.uvs[start:start + count]

    def material_for(self, group: Union[FaceGroup, int]) -> Optional[Material]:
        if isinstance(self.material, tuple):
            return self.material[int(group)]
        return self.material

    def bounds(self) -> Tuple[Vec3, Vec3]:
        lo = self.positions.min(axis=0)
        hi = self.positions.max(axis=0)
        return tuple(float(v) for v in lo), tuple(float(v) for v in hi)

    # ---- shading ----
    def compute_normals(self, smooth: bool = True, eps: float = 1e-7) -> "CornerMesh":
        """
        Per-vertex normals from the triangle soup.

        smooth: average unit face normals over all vertices sharing a position
        (positions are matched on a grid of size eps). Otherwise every vertex
        takes its own triangle's normal.
        """
        if self.vertex_count == 0:
            self.normals = np.zeros((0, 3))
            return self
        tris = self.triangles()
        face_n = np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0])
        face_n = _normalize(face_n)
        per_vertex = np.repeat(face_n, 3, axis=0)
        if not smooth:
            self.normals = per_vertex
            return self
        keys = np.round(self.positions / eps).astype(np.int64)
        _, inverse = np.unique(keys, axis=0, return_inverse=True)
        inverse = inverse.reshape(-1)
        acc = np.zeros((int(inverse.max()) + 1, 3))
        np.add.at(acc, inverse, per_vertex)
        self.normals = _normalize(acc)[inverse]
        return self


def _normalize(v: np.ndarray) -> np.ndarray:
    length = np.linalg.norm(v, axis=1, keepdims=True)
    out = np.zeros_like(v)
    np.divide(v, length, out=out, where=length > 0)
    return out


# -------------
# Group buffers
# -------------

class _GroupBuffer:
    def __init__(self, uv: Callable[[float, float, float], Vec2]) -> None:
        self.positions: List[Vec3] = []
        self.uvs: List[Vec2] = []
        self._uv = uv

    def quad(self, p0: Vec3, p1: Vec3, p2: Vec3, p3: Vec3) -> None:
        """Counter-clockwise p0..p3 from outside; UVs from the group's planar frame."""
        for p in (p0, p1, p2, p0, p2, p3):
            self.positions.append(p)
            self.uvs.append(self._uv(*p))

    def extend(self, positions: List[Vec3], uvs: List[Vec2]) -> None:
        self.positions.extend(positions)
        self.uvs.extend(uvs)

    def __len__(self) -> int:
        return len(self.positions)


def _wall(buf: _GroupBuffer, p: Tuple[float, float], q: Tuple[float, float], h2: float) -> None:
    # vertical quad walking the outline from p to q; outside is on the (-dz, dx) side
    (px, pz), (qx, qz) = p, q
    buf.quad((px, -h2, pz), (qx, -h2, qz), (qx, h2, qz), (px, h2, pz))


def _cap_rect(buf: _GroupBuffer, x0: float, x1: float, z0: float, z1: float, h2: float) -> None:
    x0, x1 = min(x0, x1), max(x0, x1)
    z0, z1 = min(z0, z1), max(z0, z1)
    buf.quad((x0, h2, z1), (x1, h2, z1), (x1, h2, z0), (x0, h2, z0))
    buf.quad((x0, -h2, z0), (x1, -h2, z0), (x1, -h2, z1), (x0, -h2, z1))


# --------------------
# Footprint assembler
# --------------------

def build_mesh(box: BoxSpec, corners: Mapping[Union[str, Corner], CornerSpec],
               name: str = "corner_mesh") -> CornerMesh:
    """
    Assemble the closed prism. No validation: bad input gives bad geometry.
    Normals are not computed here; see create_corner_mesh.
    """
    corners = corners_from(corners)
    w, h, d = box.width, box.height, box.depth
    w2, h2, d2 = box.half
    r = {c: (s.radius if s.rounded else 0.0) for c, s in corners.items()}

    lateral = _GroupBuffer(lambda x, y, z: ((z + d2) / d, (h2 - y) / h))
    cap = _GroupBuffer(lambda x, y, z: ((x + w2) / w, (z + d2) / d))
    wall = _GroupBuffer(lambda x, y, z: ((x + w2) / w, (h2 - y) / h))

    left_max = max(r[Corner.NEAR_LEFT], r[Corner.FAR_LEFT])
    right_max = max(r[Corner.NEAR_RIGHT], r[Corner.FAR_RIGHT])

    # centre of the cap, between the two side strips
    _cap_rect(cap, left_max - w2, w2 - right_max, -d2, d2, h2)
    # near wall runs towards -x, far wall towards +x
    _wall(wall, (w2 - r[Corner.NEAR_RIGHT], -d2), (r[Corner.NEAR_LEFT] - w2, -d2), h2)
    _wall(wall, (r[Corner.FAR_LEFT] - w2, d2), (w2 - r[Corner.FAR_RIGHT], d2), h2)

    for near, far in ((Corner.NEAR_LEFT, Corner.FAR_LEFT), (Corner.NEAR_RIGHT, Corner.FAR_RIGHT)):
        _assemble_side(box, corners, near, far, lateral, cap, wall)

    logger.debug("%s: lateral=%d cap=%d wall=%d vertices", name, len(lateral), len(cap), len(wall))

    positions = np.array(lateral.positions + cap.positions + wall.positions, dtype=np.float64).reshape(-1, 3)
    uvs = np.array(lateral.uvs + cap.uvs + wall.uvs, dtype=np.float64).reshape(-1, 2)
    groups = [
        GroupRange(0, len(lateral), FaceGroup.LATERAL),
        GroupRange(len(lateral), len(cap), FaceGroup.CAP),
        GroupRange(len(lateral) + len(cap), len(wall), FaceGroup.WALL),
    ]
    return CornerMesh(positions, uvs, groups, name=name)


def _assemble_side(box: BoxSpec, corners: CornerMap, near: Corner, far: Corner,
                   lateral: _GroupBuffer, cap: _GroupBuffer, wall: _GroupBuffer) -> None:
    """One end of the footprint (x < 0 or x > 0) with its two corners."""
    w2, h2, d2 = box.half
    sx = near.sx
    rn = corners[near].radius if corners[near].rounded else 0.0
    rf = corners[far].radius if corners[far].rounded else 0.0
    x_out = sx * w2
    z_near = rn - d2
    z_far = d2 - rf

    # end face between the tangent points (or the whole face when both are sharp)
    if sx < 0:
        _wall(lateral, (x_out, z_near), (x_out, z_far), h2)
    else:
        _wall(lateral, (x_out, z_far), (x_out, z_near), h2)

    if rn == 0 and rf == 0:
        return

    for corner, radius in ((near, rn), (far, rf)):
        if radius == 0:
            continue
        center = (corner.sx * (w2 - radius), corner.sz * (d2 - radius))
        patch = generate_corner(corner, center, radius, corners[corner].segments, h2, box.width, box.depth)
        cap.extend(patch.cap_positions, patch.cap_uvs)
        wall.extend(patch.side_positions, patch.side_uvs)

    if rn and rf and rn != rf:
        # flat patch on the smaller corner's edge, between the two fillet centres
        x_near = sx * (w2 - rn)
        x_far = sx * (w2 - rf)
        if rn > rf:
            _cap_rect(cap, x_near, x_far, z_far, d2, h2)
        else:
            _cap_rect(cap, x_near, x_far, -d2, z_near, h2)
        logger.debug("stitching %s/%s (radii %s, %s)", near.label, far.label, rn, rf)

    # cap strip from the end face to the inner edge of the larger fillet
    x_in = sx * (w2 - max(rn, rf))
    _cap_rect(cap, x_out, x_in, z_near, z_far, h2)


# ------------
# Entry point
# ------------

def create_corner_mesh(box: BoxSpec, corners: Optional[Mapping[Union[str, Corner], CornerSpec]] = None,
                       material: Optional[Material] = None, *, check: bool = True,
                       smooth: bool = True, name: str = "corner_mesh") -> CornerMesh:
    """
    Validate, build, shade and attach material(s).

    check: raise InvalidSpecError on violated preconditions; when False the
    mesh is built anyway.
    """
    result = validate_spec(box, corners or {})
    if check:
        result.raise_for_violations()
    elif not result.ok:
        logger.warning("building %s with %d violation(s): %s", name, len(result.violations),
                       "; ".join(v.message for v in result.violations))
    mesh = build_mesh(box, result.corners, name=name)
    mesh.compute_normals(smooth=smooth)
    if material is not None:
        mesh.material = configure_material(material, box)
    return mesh
