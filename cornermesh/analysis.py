# cornermesh/analysis.py
from __future__ import annotations

from collections import Counter
from typing import List, Optional, Tuple

import numpy as np

from .mesh import CornerMesh

Edge = Tuple[int, int]


# ----------------------------
# Mesh analysis: area & volume
# ----------------------------

def surface_area(mesh: CornerMesh) -> float:
    t = mesh.triangles()
    cr = np.cross(t[:, 1] - t[:, 0], t[:, 2] - t[:, 0])
    return float(0.5 * np.linalg.norm(cr, axis=1).sum())


def signed_volume(mesh: CornerMesh) -> float:
    """
    Signed volume for a closed, consistently oriented triangle soup.
    Uses origin-based tetrahedron summation: V = sum(dot(a, cross(b,c))) / 6
    Positive when triangles wind outward.
    """
    t = mesh.triangles()
    return float(np.einsum("ij,ij->i", t[:, 0], np.cross(t[:, 1], t[:, 2])).sum() / 6.0)


# -------------------
# Closure / adjacency
# -------------------

def _weld(positions: np.ndarray, tol: float) -> Tuple[np.ndarray, np.ndarray]:
    keys = np.round(positions / tol).astype(np.int64)
    _, first, inverse = np.unique(keys, axis=0, return_index=True, return_inverse=True)
    return positions[first], inverse.reshape(-1)


def open_edges(mesh: CornerMesh, tol: Optional[float] = None) -> List[Edge]:
    """
    Directed edges without an oppositely directed partner.

    Vertices are welded on a grid of size tol (default: 1e-7 of the largest
    extent). Every triangle edge is split at welded vertices lying on it, so
    a long edge meeting several shorter ones (a T-junction) still pairs up.
    An empty result means the soup is closed and consistently wound.
    """
    if mesh.vertex_count == 0:
        return []
    if tol is None:
        lo, hi = mesh.bounds()
        tol = 1e-7 * max(max(h - l for l, h in zip(lo, hi)), 1.0)
    verts, ids = _weld(mesh.positions, tol)
    tris = ids.reshape(-1, 3)

    directed: Counter = Counter()
    for a, b, c in tris:
        for u, v in ((a, b), (b, c), (c, a)):
            if u == v:
                continue
            chain = _split_edge(verts, int(u), int(v), tol)
            for s, e in zip(chain, chain[1:]):
                directed[(s, e)] += 1

    out: List[Edge] = []
    for (u, v), n in sorted(directed.items()):
        if n > directed.get((v, u), 0):
            out.append((u, v))
    return out


def _split_edge(verts: np.ndarray, u: int, v: int, tol: float) -> List[int]:
    p, q = verts[u], verts[v]
    d = q - p
    length2 = float(d @ d)
    rel = verts - p
    t = rel @ d / length2
    off = rel - np.outer(t, d)
    dist = np.linalg.norm(off, axis=1)
    margin = tol / np.sqrt(length2)
    inside = (dist < 2 * tol) & (t > margin) & (t < 1 - margin)
    inside[[u, v]] = False
    mids = np.nonzero(inside)[0]
    mids = mids[np.argsort(t[mids], kind="stable")]
    return [u] + [int(i) for i in mids] + [v]


def is_closed(mesh: CornerMesh, tol: Optional[float] = None) -> bool:
    return not open_edges(mesh, tol)
