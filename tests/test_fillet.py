import math

import numpy as np
import pytest

from cornermesh.fillet import arc_points, generate_corner, reference_uv
from cornermesh.params import Corner


def _patch(corner=Corner.NEAR_LEFT, radius=400.0, segments=12):
    center = (corner.sx * (1000.0 - radius), corner.sz * (500.0 - radius))
    return center, generate_corner(corner, center, radius, segments, 250.0, 2000.0, 1000.0)


@pytest.mark.parametrize("segments", [1, 3, 90])
def test_patch_triangle_counts(segments: int) -> None:
    _, patch = _patch(segments=segments)
    # 2n cap wedges (top + bottom) and n strip quads
    assert len(patch.cap_positions) == 3 * 2 * segments
    assert len(patch.side_positions) == 3 * 2 * segments
    assert len(patch.cap_uvs) == len(patch.cap_positions)
    assert len(patch.side_uvs) == len(patch.side_positions)


def test_zero_segments_gives_empty_patch() -> None:
    _, patch = _patch(segments=0)
    assert patch.cap_positions == [] and patch.side_positions == []


@pytest.mark.parametrize("corner", list(Corner))
def test_tangent_points_do_not_depend_on_segments(corner: Corner) -> None:
    center = (corner.sx * 700.0, corner.sz * 200.0)
    ends = {(tuple(arc_points(corner, center, 300.0, n)[0]), tuple(arc_points(corner, center, 300.0, n)[-1]))
            for n in (1, 2, 7, 90)}
    assert len(ends) == 1
    (start, end), = ends
    sx, sz = corner.start_direction
    ex, ez = corner.end_direction
    assert start == (center[0] + 300.0 * sx, center[1] + 300.0 * sz)
    assert end == (center[0] + 300.0 * ex, center[1] + 300.0 * ez)


@pytest.mark.parametrize("corner", list(Corner))
def test_arc_points_lie_on_the_quarter_circle(corner: Corner) -> None:
    center = (corner.sx * 600.0, corner.sz * 100.0)
    pts = np.array(arc_points(corner, center, 400.0, 16))
    radii = np.hypot(pts[:, 0] - center[0], pts[:, 1] - center[1])
    np.testing.assert_allclose(radii, 400.0)
    # points sit in the corner's own quadrant around the centre
    assert np.all(corner.sx * (pts[:, 0] - center[0]) >= -1e-9)
    assert np.all(corner.sz * (pts[:, 1] - center[1]) >= -1e-9)


@pytest.mark.parametrize("corner", list(Corner))
def test_cap_wedges_face_up_and_down(corner: Corner) -> None:
    _, patch = _patch(corner=corner, radius=300.0, segments=6)
    tris = np.array(patch.cap_positions).reshape(-1, 3, 3)
    n = np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0])
    top = tris[:, 0, 1] > 0
    assert np.all(n[top, 1] > 0)
    assert np.all(n[~top, 1] < 0)


@pytest.mark.parametrize("corner", list(Corner))
def test_strip_faces_away_from_the_fillet_axis(corner: Corner) -> None:
    center, patch = _patch(corner=corner, radius=300.0, segments=6)
    tris = np.array(patch.side_positions).reshape(-1, 3, 3)
    n = np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0])
    mid = tris.mean(axis=1)
    radial = np.stack([mid[:, 0] - center[0], np.zeros(len(mid)), mid[:, 2] - center[1]], axis=1)
    assert np.all(np.einsum("ij,ij->i", n, radial) > 0)
    assert np.allclose(n[:, 1], 0.0)


def test_cap_uvs_follow_axis_fractions() -> None:
    center, patch = _patch(corner=Corner.NEAR_LEFT, radius=400.0, segments=9)
    cx, cy = 400.0 / 2000.0, 400.0 / 1000.0
    assert reference_uv(Corner.NEAR_LEFT, 400.0, 2000.0, 1000.0) == (cx, cy)
    # first wedge: tangent point, centre, next arc point
    assert patch.cap_uvs[0] == (0.0, cy)
    assert patch.cap_uvs[1] == (cx, cy)
    pos = np.array(patch.cap_positions)
    uvs = np.array(patch.cap_uvs)
    # the projection matches the planar cap frame u = (x + w/2) / w, v = (z + d/2) / d
    np.testing.assert_allclose(uvs[:, 0], (pos[:, 0] + 1000.0) / 2000.0, atol=1e-12)
    np.testing.assert_allclose(uvs[:, 1], (pos[:, 2] + 500.0) / 1000.0, atol=1e-12)


@pytest.mark.parametrize("corner, expected", [
    (Corner.FAR_RIGHT, (0.8, 0.7)),
    (Corner.FAR_LEFT, (0.2, 0.7)),
    (Corner.NEAR_LEFT, (0.2, 0.3)),
    (Corner.NEAR_RIGHT, (0.8, 0.3)),
])
def test_reference_uv_per_quadrant(corner: Corner, expected) -> None:
    u, v = reference_uv(corner, 300.0, 1500.0, 1000.0)
    assert u == pytest.approx(expected[0])
    assert v == pytest.approx(expected[1])


def test_strip_uvs_span_full_height() -> None:
    _, patch = _patch(corner=Corner.FAR_RIGHT, radius=250.0, segments=5)
    pos = np.array(patch.side_positions)
    uvs = np.array(patch.side_uvs)
    np.testing.assert_array_equal(uvs[pos[:, 1] > 0, 1], 0.0)
    np.testing.assert_array_equal(uvs[pos[:, 1] < 0, 1], 1.0)
    np.testing.assert_allclose(uvs[:, 0], (pos[:, 0] + 1000.0) / 2000.0, atol=1e-12)
    assert uvs[:, 0].min() >= 1 - 250.0 / 2000.0 - 1e-12
    assert math.isclose(uvs[:, 0].max(), 1.0)
