import numpy as np
import pytest

from geometry.errors import TopologyError
from geometry.topology import build_hierarchy, default_tolerance


def sq(x0, y0, size):
    return np.array([[x0, y0], [x0 + size, y0], [x0 + size, y0 + size], [x0, y0 + size]], dtype=float)


def test_three_level_nesting():
    # deliberately not listed outer-first
    rings = [sq(4, 4, 2), sq(0, 0, 10), sq(2, 2, 6)]
    h = build_hierarchy(rings)

    assert h.roots == [1]
    assert h.nodes[1].children == [2]
    assert h.nodes[2].children == [0]
    assert h.nodes[0].parent == 2
    assert [h.nodes[i].depth for i in range(3)] == [2, 0, 1]
    assert list(h.preorder()) == [1, 2, 0]
    assert h.ancestors(0) == [2, 1]


def test_stations_attach_to_innermost_polygon():
    rings = [sq(0, 0, 10), sq(2, 2, 6), sq(4, 4, 2)]
    stations = np.array([[5.0, 5.0], [3.0, 3.0], [1.0, 1.0], [20.0, 20.0]])
    h = build_hierarchy(rings, stations=stations)

    assert h.nodes[2].stations == [0]
    assert h.nodes[1].stations == [1]
    assert h.nodes[0].stations == [2]
    assert h.free_stations == [3]


def test_polyline_attaches_to_deepest_polygon_containing_all_vertices():
    rings = [sq(0, 0, 10), sq(2, 2, 6), sq(4, 4, 2)]
    polylines = [
        np.array([[2.5, 2.5], [3.0, 7.0]]),   # inside the middle ring only
        np.array([[4.5, 4.5], [5.5, 5.5]]),   # inside the innermost ring
        np.array([[5.0, 5.0], [12.0, 5.0]]),  # leaves the outer ring
    ]
    h = build_hierarchy(rings, polylines)

    assert h.nodes[1].polylines == [0]
    assert h.nodes[2].polylines == [1]
    assert h.free_polylines == [2]


def test_disjoint_polygons_are_all_roots():
    h = build_hierarchy([sq(0, 0, 1), sq(5, 5, 1), sq(10, 0, 1)])
    assert h.roots == [0, 1, 2]
    assert all(n.parent is None and n.depth == 0 for n in h.nodes)


def test_adjacent_polygons_sharing_an_edge_are_not_overlapping():
    h = build_hierarchy([sq(0, 0, 1), sq(1, 0, 1)])
    assert h.roots == [0, 1]


def test_hole_touching_parent_boundary_is_contained():
    h = build_hierarchy([sq(0, 0, 10), sq(0, 0, 5)])
    assert h.nodes[1].parent == 0


def test_overlapping_polygons_raise():
    with pytest.raises(TopologyError) as exc:
        build_hierarchy([sq(0, 0, 2), sq(1, 1, 2)])
    assert "overlap" in str(exc.value)


def test_identical_polygons_raise_cyclic_containment():
    with pytest.raises(TopologyError, match="Cyclic"):
        build_hierarchy([sq(0, 0, 2), sq(0, 0, 2)])


def test_degenerate_rings_raise():
    with pytest.raises(TopologyError):
        build_hierarchy([np.array([[0.0, 0.0], [1.0, 0.0], [2.0, 0.0]])])
    with pytest.raises(TopologyError):
        build_hierarchy([np.array([[0.0, 0.0], [1.0, 1.0], [0.0, 0.0], [1.0, 1.0]])])


def test_default_tolerance_scales_with_extent():
    small = default_tolerance([sq(0, 0, 1)])
    large = default_tolerance([sq(0, 0, 1000)])
    assert large == pytest.approx(1000 * small)


def test_empty_input():
    h = build_hierarchy([], stations=np.array([[1.0, 2.0]]))
    assert len(h) == 0
    assert h.roots == []
    assert h.free_stations == [0]


def test_polygons_sharing_only_vertices_but_overlapping_raise():
    # every vertex of each ring lies on or outside the other; the interiors still overlap
    triangle = np.array([[0.0, 0.0], [2.0, 2.0], [3.0, 0.0]])
    with pytest.raises(TopologyError) as exc:
        build_hierarchy([sq(0, 0, 2), triangle])
    assert "overlap" in str(exc.value)


def test_polygon_touching_from_outside_at_vertices_is_disjoint():
    triangle = np.array([[2.0, 0.0], [3.0, 1.0], [2.0, 2.0]])
    h = build_hierarchy([sq(0, 0, 2), triangle])
    assert h.roots == [0, 1]


def test_polyline_through_a_hole_is_not_embedded():
    rings = [sq(0, 0, 10), sq(4, 4, 2)]
    polylines = [
        np.array([[1.0, 5.0], [9.0, 5.0]]),              # crosses the hole
        np.array([[1.0, 1.0], [9.0, 1.0]]),              # stays in the outer surface
        np.array([[4.0, 4.0], [6.0, 6.0]]),              # diagonal of the hole, both ends on its ring
        np.array([[1.0, 4.0], [4.0, 4.0], [6.0, 4.0]]),  # runs along the hole's edge
    ]
    h = build_hierarchy(rings, polylines)

    assert h.nodes[0].polylines == [1, 3]
    assert h.nodes[1].polylines == [2]
    assert h.free_polylines == [0]
