import numpy as np
import pytest

from geometry.topology.loop import (
    INSIDE,
    ON_BOUNDARY,
    OUTSIDE,
    bounding_box,
    edge_samples,
    locate_points,
    orientation,
    path_crosses_ring,
    point_in_ring,
    rings_cross,
    signed_area,
)

UNIT = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])


def test_signed_area_and_orientation():
    assert signed_area(UNIT) == pytest.approx(1.0)
    assert signed_area(UNIT[::-1]) == pytest.approx(-1.0)
    assert orientation(UNIT) == "CCW"
    assert orientation(UNIT[::-1]) == "CW"


def test_explicitly_closed_ring_has_same_area():
    closed = np.vstack((UNIT, UNIT[:1]))
    assert signed_area(closed) == pytest.approx(signed_area(UNIT))


def test_signed_area_needs_three_points():
    with pytest.raises(ValueError):
        signed_area(UNIT[:2])


def test_locate_points_three_way():
    pts = np.array([
        [0.5, 0.5],   # inside
        [2.0, 2.0],   # outside
        [1.0, 0.5],   # on the right edge
        [0.0, 0.0],   # on a vertex
        [-0.5, 0.5],  # left of the ring, same height as the interior
    ])
    loc = locate_points(pts, UNIT, tol=1e-12)
    assert loc.tolist() == [INSIDE, OUTSIDE, ON_BOUNDARY, ON_BOUNDARY, OUTSIDE]


def test_locate_points_is_orientation_independent():
    pts = np.array([[0.25, 0.75], [1.5, 0.5]])
    assert locate_points(pts, UNIT).tolist() == locate_points(pts, UNIT[::-1]).tolist()


def test_point_in_ring_counts_boundary_as_inside():
    assert point_in_ring((1.0, 0.25), UNIT)
    assert point_in_ring((0.5, 0.5), UNIT)
    assert not point_in_ring((1.0 + 1e-6, 0.25), UNIT)


def test_locate_points_rejects_bad_shape():
    with pytest.raises(ValueError):
        locate_points(np.zeros((3, 2)), np.zeros((3, 3)))


def test_rings_cross():
    shifted = UNIT + 0.5
    assert rings_cross(UNIT, shifted)

    inner = 0.25 + 0.5 * UNIT
    assert not rings_cross(UNIT, inner)

    # shares the edge x == 1 with UNIT: touching is not crossing
    neighbour = UNIT + np.array([1.0, 0.0])
    assert not rings_cross(UNIT, neighbour)


def test_bounding_box():
    bb = bounding_box([UNIT, UNIT * 3.0 - 1.0])
    assert bb.tolist() == [[-1.0, -1.0], [2.0, 2.0]]


def test_edge_samples_split_at_vertices_of_the_other_ring():
    ring = np.array([[0.0, 0.0], [2.0, 0.0], [2.0, 2.0], [0.0, 2.0]])
    path = np.array([[-1.0, 0.0], [3.0, 0.0]])
    samples = edge_samples(path, ring, closed=False)
    # the two endpoints plus midpoints of the pieces split at (0, 0) and (2, 0)
    assert sorted(map(tuple, samples.tolist())) == [(-1.0, 0.0), (-0.5, 0.0), (1.0, 0.0), (2.5, 0.0), (3.0, 0.0)]


def test_path_crosses_ring():
    ring = np.array([[0.0, 0.0], [2.0, 0.0], [2.0, 2.0], [0.0, 2.0]])
    assert path_crosses_ring(np.array([[-1.0, 1.0], [3.0, 1.0]]), ring)
    assert not path_crosses_ring(np.array([[0.5, 0.5], [1.5, 1.5]]), ring)
    # touching the ring at a vertex is not a crossing
    assert not path_crosses_ring(np.array([[-1.0, -1.0], [0.0, 0.0]]), ring)
