# cornermesh/export.py
from __future__ import annotations

from .mesh import CornerMesh


def save_obj(path: str, mesh: CornerMesh) -> None:
    """Save OBJ with vt (and vn when normals are present), one g/usemtl block per face group."""
    use_vn = mesh.normals is not None
    with open(path, "w", encoding="utf-8") as f:
        f.write(f"o {mesh.name}\n")
        for x, y, z in mesh.positions:
            f.write(f"v {x:.6f} {y:.6f} {z:.6f}\n")
        for u, v in mesh.uvs:
            f.write(f"vt {u:.6f} {v:.6f}\n")
        if use_vn:
            for nx, ny, nz in mesh.normals:
                f.write(f"vn {nx:.6f} {ny:.6f} {nz:.6f}\n")
        for start, count, group in mesh.groups:
            material = mesh.material_for(group)
            f.write(f"g {group.name.lower()}\n")
            f.write(f"usemtl {material.name if material is not None else group.name.lower()}\n")
            for i in range(start + 1, start + count + 1, 3):
                if use_vn:
                    f.write(f"f {i}/{i}/{i} {i + 1}/{i + 1}/{i + 1} {i + 2}/{i + 2}/{i + 2}\n")
                else:
                    f.write(f"f {i}/{i} {i + 1}/{i + 1} {i + 2}/{i + 2}\n")
