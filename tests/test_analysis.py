import numpy as np
import pytest

from cornermesh.analysis import is_closed, open_edges, signed_volume, surface_area
from cornermesh.mesh import CornerMesh, build_mesh
from cornermesh.params import BoxSpec, Corner, CornerSpec


def _soup(mesh: CornerMesh, positions: np.ndarray) -> CornerMesh:
    return CornerMesh(positions, np.zeros((len(positions), 2)), list(mesh.groups))


def test_surface_area_of_plain_box() -> None:
    mesh = build_mesh(BoxSpec(3.0, 2.0, 5.0), {})
    assert surface_area(mesh) == pytest.approx(2 * (3 * 2 + 3 * 5 + 2 * 5))


def test_removing_a_triangle_opens_the_mesh() -> None:
    mesh = build_mesh(BoxSpec(3.0, 2.0, 5.0), {})
    cut = _soup(mesh, mesh.positions[3:])
    assert len(open_edges(cut)) == 3
    assert not is_closed(cut)


def test_flipped_triangle_is_reported() -> None:
    mesh = build_mesh(BoxSpec(3.0, 2.0, 5.0), {})
    flipped = mesh.positions.copy()
    flipped[[1, 2]] = flipped[[2, 1]]
    assert not is_closed(_soup(mesh, flipped))


def test_inverted_mesh_has_negative_volume() -> None:
    mesh = build_mesh(BoxSpec(3.0, 2.0, 5.0), {})
    inverted = mesh.positions.reshape(-1, 3, 3)[:, ::-1].reshape(-1, 3)
    soup = _soup(mesh, inverted)
    assert signed_volume(soup) == pytest.approx(-30.0)
    # reversed everywhere is still closed, just facing in
    assert is_closed(soup)


def test_t_junctions_pair_up() -> None:
    # one long edge on the centre cap against two shorter ones on the side strip and fillet
    mesh = build_mesh(BoxSpec(1000.0, 100.0, 600.0), {Corner.NEAR_LEFT: CornerSpec(200.0, 3)})
    assert is_closed(mesh)


def test_empty_mesh_has_no_open_edges() -> None:
    empty = CornerMesh(np.zeros((0, 3)), np.zeros((0, 2)))
    assert open_edges(empty) == []
