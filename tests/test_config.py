import pytest

from mesh.config import DEFAULTS, MeshDensityAlgorithm, WriteSettings, make_density_strategy, settings_from_dict
from mesh.core.density import AdaptiveMeshDensity, FixedMeshDensity
from mesh.errors import ConfigurationError


def test_defaults_are_merged():
    s = settings_from_dict({"Geometries": ["site"], "ROTATE": True})
    assert s.geometries == ("site",)
    assert s.rotate is True
    assert s.mesh_density == DEFAULTS["mesh_density"]
    assert s.density_algorithm is MeshDensityAlgorithm.FIXED


def test_unknown_key_is_rejected():
    with pytest.raises(ConfigurationError, match="Unknown setting"):
        settings_from_dict({"geometries": ["site"], "mesh_sise": 1.0})


def test_unknown_algorithm_is_rejected():
    with pytest.raises(ConfigurationError):
        WriteSettings(geometries=("site",), density_algorithm="voronoi")


@pytest.mark.parametrize("params", [
    {"geometries": ()},
    {"geometries": ("",)},
    {"geometries": ("site",), "mesh_density": 0.0},
    {"geometries": ("site",), "density_algorithm": "adaptive", "min_density": -1.0},
    {"geometries": ("site",), "density_algorithm": "adaptive", "max_points_per_leaf": 0},
])
def test_invalid_settings(params):
    with pytest.raises(ConfigurationError):
        WriteSettings(**params)


def test_inactive_parameters_are_not_checked():
    s = WriteSettings(geometries=("site",), density_algorithm="adaptive", mesh_density=-1.0)
    assert s.density_algorithm is MeshDensityAlgorithm.ADAPTIVE


def test_strategy_factory():
    assert isinstance(make_density_strategy(WriteSettings(geometries=("a",))), FixedMeshDensity)
    adaptive = make_density_strategy(
        WriteSettings(geometries=("a",), density_algorithm="adaptive", max_points_per_leaf=3)
    )
    assert isinstance(adaptive, AdaptiveMeshDensity)
    assert adaptive.max_points_per_leaf == 3


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        WriteSettings()
