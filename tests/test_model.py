import pytest

from mesh.model import ElementType, Mesh


def unit_square_mesh():
    mesh = Mesh("square")
    for x, y in ((0, 0), (1, 0), (1, 1), (0, 1)):
        mesh.add_node(x, y)
    mesh.add_element(ElementType.TRIANGLE, (0, 1, 2), material=5)
    mesh.add_element(ElementType.TRIANGLE, (0, 2, 3), material=9)
    mesh.add_element(ElementType.LINE, (0, 1), material=5)
    return mesh


def test_sink_assigns_dense_indices():
    mesh = unit_square_mesh()
    assert [n.index for n in mesh.nodes] == [0, 1, 2, 3]
    assert [n.external_id for n in mesh.nodes] == [0, 1, 2, 3]
    assert mesh.points.shape == (4, 3)
    assert mesh.element_counts() == {"triangle": 2, "line": 1}


def test_connectivity_per_type():
    mesh = unit_square_mesh()
    assert mesh.connectivity(ElementType.TRIANGLE).tolist() == [[0, 1, 2], [0, 2, 3]]
    assert mesh.connectivity(ElementType.QUAD).shape == (0, 4)


def test_add_element_validates_nodes():
    mesh = unit_square_mesh()
    with pytest.raises(ValueError):
        mesh.add_element(ElementType.TRIANGLE, (0, 1))
    with pytest.raises(ValueError):
        mesh.add_element(ElementType.TRIANGLE, (0, 1, 4))


def test_condense_material_ids():
    mesh = unit_square_mesh()
    mapping = mesh.condense_material_ids()
    assert mapping == {5: 0, 9: 1}
    assert mesh.material_ids.tolist() == [0, 1, 0]


def test_element_type_lookup():
    assert ElementType.from_gmsh(2) is ElementType.TRIANGLE
    assert ElementType.from_gmsh(15) is None
    assert ElementType.QUAD.dimension == 2
    assert ElementType.TETRAHEDRON.dimension == 3
