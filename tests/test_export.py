import io

import numpy as np
import pytest

from mesh.io import read_gmsh_mesh, to_meshio, write_mesh
from mesh.model import ElementType, Mesh

meshio = pytest.importorskip("meshio")


@pytest.fixture
def sample_mesh(msh_text):
    return read_gmsh_mesh(io.StringIO(msh_text), name="sample")


def test_blocks_follow_first_appearance(sample_mesh):
    m = to_meshio(sample_mesh)

    assert [c.type for c in m.cells] == ["line", "triangle", "quad"]
    assert m.cells[1].data.tolist() == [[4, 1, 0], [4, 2, 1], [4, 3, 2]]
    assert [a.tolist() for a in m.cell_data["gmsh:physical"]] == [[7], [3, 3, 4], [0]]
    assert [a.tolist() for a in m.cell_data["material"]] == [[7], [3, 3, 4], [0]]
    assert m.field_data["domain"].tolist() == [3, 2]
    assert m.field_data["river"].tolist() == [7, 1]
    assert np.array_equal(m.points, sample_mesh.points)


def test_empty_mesh_cannot_be_exported():
    mesh = Mesh("empty")
    mesh.add_node(0.0, 0.0)
    with pytest.raises(ValueError):
        to_meshio(mesh)


def test_write_vtu(sample_mesh, tmp_path):
    path = tmp_path / "sample.vtu"
    assert write_mesh(sample_mesh, path) == str(path)

    back = meshio.read(str(path))
    assert back.points.shape == (5, 3)
    assert sum(len(c.data) for c in back.cells) == sample_mesh.n_elements


def test_material_ids_survive_condensation(sample_mesh):
    sample_mesh.condense_material_ids()
    m = to_meshio(sample_mesh)
    assert [a.tolist() for a in m.cell_data["material"]] == [[3], [1, 1, 2], [0]]
    assert sample_mesh.connectivity(ElementType.QUAD).tolist() == [[0, 1, 2, 3]]
