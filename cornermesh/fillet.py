# cornermesh/fillet.py
"""
Rounded corner ("fillet") geometry.

A fillet replaces one vertical edge of the prism by a quarter cylinder of
the given radius. For a single corner this module produces

  * the cap fans, one wedge per segment at the top and one at the bottom
  * the curved vertical strip, one quad (two triangles) per segment

as plain triangle lists with UVs. Cap UVs project the arc onto the
footprint's axis fractions (u along width, v along depth), so flat and
curved parts of the cap share one linear frame.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Tuple

from .params import Corner

Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]


@dataclass
class CornerPatch:
    cap_positions: List[Vec3] = field(default_factory=list)
    cap_uvs: List[Vec2] = field(default_factory=list)
    side_positions: List[Vec3] = field(default_factory=list)
    side_uvs: List[Vec2] = field(default_factory=list)


def reference_uv(corner: Corner, radius: float, width: float, depth: float) -> Vec2:
    """UV of the fillet centre: the corner of the unit square shrunk by the radius fractions."""
    cx = radius / width
    cy = radius / depth
    return (cx if corner.sx < 0 else 1 - cx, cy if corner.sz < 0 else 1 - cy)


def arc_points(corner: Corner, center: Vec2, radius: float, segments: int) -> List[Vec2]:
    """segments + 1 points from tangent point to tangent point, (x, z) plane."""
    cx, cz = center
    ux, uz = corner.start_direction
    pts = [(cx + radius * ux, cz + radius * uz)]
    step = (math.pi / 2) / segments if segments > 0 else 0.0
    for i in range(1, segments):
        a = corner.start_angle + i * step
        pts.append((cx + radius * math.cos(a), cz + radius * math.sin(a)))
    if segments > 0:
        # snap the closing tangent point so it never drifts with the segment count
        ex, ez = corner.end_direction
        pts.append((cx + radius * ex, cz + radius * ez))
    return pts


def generate_corner(corner: Corner, center: Vec2, radius: float, segments: int,
                    half_height: float, width: float, depth: float) -> CornerPatch:
    """
    Triangulate one fillet.

    center is the fillet axis in the (x, z) plane; width/depth are the full
    footprint sizes used for the UV fractions. Triangles wind outward.
    """
    patch = CornerPatch()
    pts = arc_points(corner, center, radius, segments)
    cx = radius / width
    cy = radius / depth
    rx, ry = reference_uv(corner, radius, width, depth)

    def cap_uv(i: int) -> Vec2:
        if i == 0:
            dx, dz = corner.start_direction
        elif i == segments:
            dx, dz = corner.end_direction
        else:
            a = corner.start_angle + i * (math.pi / 2) / segments
            dx, dz = math.cos(a), math.sin(a)
        return (rx + cx * dx, ry + cy * dz)

    h2 = half_height
    ox, oz = center
    uvs = [cap_uv(i) for i in range(len(pts))]
    for i in range(segments):
        (x1, z1), (x2, z2) = pts[i], pts[i + 1]
        uv1, uv2 = uvs[i], uvs[i + 1]
        # top fan wedge (+y), bottom wedge reversed (-y)
        patch.cap_positions += [(x1, h2, z1), (ox, h2, oz), (x2, h2, z2),
                                (x2, -h2, z2), (ox, -h2, oz), (x1, -h2, z1)]
        patch.cap_uvs += [uv1, (rx, ry), uv2,
                          uv2, (rx, ry), uv1]
        # strip quad: later arc point first keeps the normal pointing away from the axis
        u1, u2 = uv1[0], uv2[0]
        patch.side_positions += [(x2, -h2, z2), (x1, -h2, z1), (x1, h2, z1),
                                 (x2, -h2, z2), (x1, h2, z1), (x2, h2, z2)]
        patch.side_uvs += [(u2, 1.0), (u1, 1.0), (u1, 0.0),
                           (u2, 1.0), (u1, 0.0), (u2, 0.0)]
    return patch
