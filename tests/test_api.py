import pytest

from conftest import SAMPLE_MSH
from mesh.api import build_mesh
from mesh.core import MeshGenerator


class CannedGenerator(MeshGenerator):
    """Writes a fixed mesh instead of running Gmsh."""

    def __init__(self, content=SAMPLE_MSH):
        self.content = content
        self.calls = []

    def generate_mesh(self, input_path, output_path, settings):
        self.calls.append((input_path, output_path, settings))
        with open(output_path, "w", encoding="utf-8") as fh:
            fh.write(self.content)
        return output_path


def test_build_mesh_writes_script_and_reads_mesh(square_store, tmp_path):
    geo = tmp_path / "square.geo"
    msh = tmp_path / "square.msh"
    generator = CannedGenerator()

    mesh = build_mesh(square_store, {"geometries": "square", "mesh_density": 2.0},
                      geo_path=str(geo), msh_path=str(msh), gmsh_algo=6, mesh_generator=generator)

    assert "Plane Surface(1) = {1};" in geo.read_text(encoding="utf-8")
    assert mesh.name == "square"
    assert mesh.n_nodes == 5
    assert mesh.material_ids.tolist() == [7, 3, 3, 4, 0]

    (input_path, output_path, settings), = generator.calls
    assert (input_path, output_path) == (str(geo), str(msh))
    assert settings == {"dim": 2, "algo": 6, "msh_format": "msh2"}


def test_build_mesh_condenses_materials(square_store, tmp_path):
    mesh = build_mesh(square_store, {"geometries": "square"},
                      geo_path=str(tmp_path / "a.geo"), msh_path=str(tmp_path / "a.msh"),
                      mesh_generator=CannedGenerator(), condense_materials=True)
    assert mesh.material_ids.tolist() == [3, 1, 1, 2, 0]


def test_write_failure_stops_before_meshing(square_store, tmp_path):
    generator = CannedGenerator()
    with pytest.raises(RuntimeError, match="NO_GEOMETRY"):
        build_mesh(square_store, {"geometries": ["lake"]},
                   geo_path=str(tmp_path / "a.geo"), msh_path=str(tmp_path / "a.msh"),
                   mesh_generator=generator)
    assert generator.calls == []


def test_generator_output_must_be_a_gmsh_mesh(square_store, tmp_path):
    with pytest.raises(RuntimeError, match="not a Gmsh mesh"):
        build_mesh(square_store, {"geometries": "square"},
                   geo_path=str(tmp_path / "a.geo"), msh_path=str(tmp_path / "a.msh"),
                   mesh_generator=CannedGenerator("garbage\n"))


def test_build_mesh_exports_through_meshio(square_store, tmp_path):
    meshio = pytest.importorskip("meshio")
    out = tmp_path / "square.vtu"
    build_mesh(square_store, {"geometries": "square"},
               geo_path=str(tmp_path / "a.geo"), msh_path=str(tmp_path / "a.msh"),
               mesh_generator=CannedGenerator(), export_path=str(out))
    assert meshio.read(str(out)).points.shape == (5, 3)
