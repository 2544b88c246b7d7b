# cornermesh/texture.py
"""
Per-group material setup.

A single source image is wrapped around all three face groups by giving
each group its own sampling parameters. Repeats keep a fixed world-space
texel density: one texture tile per TEXEL_SPAN units of box size.
"""
from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple, Union

from .params import BoxSpec, FaceGroup

logger = logging.getLogger(__name__)

Vec2 = Tuple[float, float]

TEXEL_SPAN = 512.0


class WrapMode(enum.Enum):
    CLAMP = "clamp"
    REPEAT = "repeat"
    MIRRORED_REPEAT = "mirrored_repeat"


@dataclass(frozen=True)
class Texture:
    """Sampling parameters over a shared, read-only image reference."""

    image: Any
    wrap_s: WrapMode = WrapMode.CLAMP
    wrap_t: WrapMode = WrapMode.CLAMP
    repeat: Vec2 = (1.0, 1.0)
    rotation: float = 0.0
    center: Vec2 = (0.0, 0.0)


@dataclass(frozen=True)
class Material:
    texture: Optional[Texture] = None
    color: Tuple[float, float, float] = (1.0, 1.0, 1.0)
    double_sided: bool = True
    wireframe: bool = False
    name: str = "material"


MaterialSlots = Union[Material, Tuple[Material, Material, Material]]

# (rotation, repeat axes) per face group; axes index into (width, height, depth)
_GROUP_LAYOUT = {
    FaceGroup.LATERAL: (0.0, (2, 1)),            # u along depth, v along height
    FaceGroup.CAP: (-math.pi / 2, (2, 0)),       # u along width, v along depth
    FaceGroup.WALL: (-math.pi / 2, (1, 0)),      # u along width, v along height
}


def group_texture(source: Texture, group: FaceGroup, box: BoxSpec) -> Texture:
    rotation, (i, j) = _GROUP_LAYOUT[group]
    dims = (box.width, box.height, box.depth)
    return replace(
        source,
        wrap_s=WrapMode.MIRRORED_REPEAT,
        wrap_t=WrapMode.MIRRORED_REPEAT,
        center=(0.5, 0.5),
        rotation=rotation,
        repeat=(dims[i] / TEXEL_SPAN, dims[j] / TEXEL_SPAN),
    )


def configure_material(material: Material, box: BoxSpec) -> MaterialSlots:
    """
    Untextured materials are shared by all groups unchanged. A textured one
    yields a (LATERAL, CAP, WALL) tuple of new materials; the source texture
    and its image are left untouched.
    """
    if material.texture is None:
        return material
    out = []
    for group in FaceGroup:
        tex = group_texture(material.texture, group, box)
        logger.debug("%s texture: repeat=(%.4f, %.4f) rotation=%.4f",
                     group.name.lower(), tex.repeat[0], tex.repeat[1], tex.rotation)
        out.append(Material(texture=tex, color=material.color, double_sided=True, wireframe=False,
                            name=f"{material.name}_{group.name.lower()}"))
    return tuple(out)
