import numpy as np
import pytest

from geometry.errors import DegenerateGeometryError
from geometry.ops import compute_rotation, fit_plane, project_to_xy, reduce_points


def tilted_points():
    rng = np.random.RandomState(3)
    xy = rng.uniform(-50.0, 50.0, size=(25, 2))
    z = 0.3 * xy[:, 0] - 0.2 * xy[:, 1] + 7.0
    return np.column_stack((xy, z))


def test_forward_times_inverse_is_identity():
    forward, inverse = compute_rotation(tilted_points())
    assert np.allclose(forward @ inverse, np.eye(3), atol=1e-12)
    assert np.allclose(inverse, forward.T)


def test_rotation_flattens_plane_and_restores_points():
    P = tilted_points()
    reduced, reduction = reduce_points(P, rotate=True)

    assert reduction.rotated
    assert np.ptp(reduced[:, 2]) < 1e-9
    assert np.allclose(reduction.restore(reduced), P, atol=1e-9)


def test_horizontal_plane_gives_identity_rotation():
    P = np.array([[0.0, 0.0, 2.0], [1.0, 0.0, 2.0], [0.0, 1.0, 2.0], [1.0, 1.0, 2.0]])
    forward, _ = compute_rotation(P)
    assert np.allclose(forward, np.eye(3))


def test_fitted_normal_points_up():
    P = tilted_points()
    normal, centroid = fit_plane(P[::-1])
    assert normal[2] >= 0.0
    assert np.linalg.norm(normal) == pytest.approx(1.0)
    assert np.allclose(centroid, P.mean(axis=0))


@pytest.mark.parametrize("points", [
    [[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]],
    [[1.0, 2.0, 3.0]] * 5,
    [[0.0, 0.0, 0.0], [1.0, 1.0, 1.0], [2.0, 2.0, 2.0], [3.0, 3.0, 3.0]],
])
def test_degenerate_point_sets_raise(points):
    with pytest.raises(DegenerateGeometryError):
        compute_rotation(np.array(points))


def test_projection_drops_elevation():
    P = tilted_points()
    reduced, reduction = reduce_points(P, rotate=False)

    assert not reduction.rotated
    assert np.array_equal(reduced[:, :2], P[:, :2])
    assert np.all(reduced[:, 2] == 0.0)
    assert np.allclose(reduction.restore(reduced), reduced)
    assert np.array_equal(project_to_xy().inverse, np.eye(3))


def test_reduction_accepts_xy_input():
    reduced, _ = reduce_points(np.array([[1.0, 2.0], [3.0, 4.0]]), rotate=False)
    assert reduced.shape == (2, 3)
