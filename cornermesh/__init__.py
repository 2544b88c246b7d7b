"""
cornermesh: triangle mesh of a box whose four vertical edges can each be
rounded with their own radius and arc density, with UVs and per-group
materials for three face groups (ends, caps, walls).
"""
from .fillet import CornerPatch, generate_corner
from .mesh import CornerMesh, build_mesh, create_corner_mesh
from .params import (BoxSpec, Corner, CornerSpec, FaceGroup, GroupRange, InvalidSpecError, SpecCheck,
                     Violation, ViolationKind, corners_from, validate_spec)
from .texture import TEXEL_SPAN, Material, Texture, WrapMode, configure_material

__all__ = [
    "BoxSpec", "Corner", "CornerSpec", "FaceGroup", "GroupRange",
    "InvalidSpecError", "SpecCheck", "Violation", "ViolationKind",
    "corners_from", "validate_spec",
    "CornerPatch", "generate_corner",
    "CornerMesh", "build_mesh", "create_corner_mesh",
    "TEXEL_SPAN", "Material", "Texture", "WrapMode", "configure_material",
]
