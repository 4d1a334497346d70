import numpy as np
import pytest

from geometry.errors import DegenerateGeometryError
from mesh.core.density import AdaptiveMeshDensity, FixedMeshDensity, MeshDensityStrategy
from mesh.errors import ConfigurationError

# four points 0.01 apart near the origin and one far outlier
CLUSTER = np.array([[0.0, 0.0], [0.01, 0.0], [0.0, 0.01], [0.01, 0.01]])
OUTLIER = np.array([10.0, 10.0])
POINTS = np.vstack((CLUSTER, OUTLIER))


def test_fixed_density_is_constant():
    d = FixedMeshDensity(0.5)
    d.initialize(POINTS)
    assert isinstance(d, MeshDensityStrategy)
    assert {d.density_at(p) for p in POINTS} == {0.5}
    assert d.density_at_station((123.0, -4.0, 7.0)) == 0.5
    assert d.steiner_points() == []


@pytest.mark.parametrize("value", [0.0, -1.0])
def test_fixed_density_rejects_non_positive(value):
    with pytest.raises(ConfigurationError):
        FixedMeshDensity(value)


@pytest.mark.parametrize("args", [
    (2.0, 1.0, 2),   # min > max
    (0.0, 1.0, 2),   # non-positive min
    (0.1, 1.0, 0),   # leaf capacity < 1
])
def test_adaptive_rejects_bad_parameters(args):
    with pytest.raises(ConfigurationError):
        AdaptiveMeshDensity(*args)


def test_adaptive_requires_initialize():
    with pytest.raises(RuntimeError):
        AdaptiveMeshDensity(0.1, 1.0, 2).density_at((0.0, 0.0))


def test_adaptive_rejects_zero_extent():
    with pytest.raises(DegenerateGeometryError):
        AdaptiveMeshDensity(0.1, 1.0, 2).initialize(np.ones((3, 2)))


def test_adaptive_outlier_is_coarser_than_cluster():
    d = AdaptiveMeshDensity(0.001, 1.0, 4)
    d.initialize(POINTS)

    cluster = [d.density_at(p) for p in CLUSTER]
    outlier = d.density_at(OUTLIER)

    assert cluster == pytest.approx([0.01] * 4)
    assert outlier == 1.0
    assert all(0.001 <= v <= 1.0 for v in cluster + [outlier])
    assert outlier >= max(cluster)


def test_adaptive_values_are_clamped():
    d = AdaptiveMeshDensity(0.05, 1.0, 4)
    d.initialize(POINTS)
    assert d.density_at(CLUSTER[0]) == 0.05


def test_empty_leaf_uses_its_edge_length():
    d = AdaptiveMeshDensity(0.001, 10.0, 4)
    d.initialize(POINTS)
    # root square is 0..10, the empty south-east child has edge length 5
    assert d.density_at((7.5, 2.5)) == 5.0
    assert d.density_at(OUTLIER) == 10.0


def test_steiner_points_are_centres_of_empty_leaves():
    d = AdaptiveMeshDensity(0.001, 1.0, 4)
    d.initialize(POINTS)
    assert sorted(d.steiner_points()) == [(2.5, 7.5), (7.5, 2.5)]


def test_density_accepts_3d_points():
    d = AdaptiveMeshDensity(0.001, 1.0, 4)
    d.initialize(np.column_stack((POINTS, np.full(len(POINTS), 3.0))))
    assert d.density_at((0.0, 0.0, 3.0)) == pytest.approx(0.01)
