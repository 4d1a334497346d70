import numpy as np
import pytest

from geometry.errors import DegenerateGeometryError
from mesh.core.density import QuadTree


def _assert_balanced(tree):
    for leaf in tree.leaves():
        for dx, dy in ((-1.0, 0.0), (1.0, 0.0), (0.0, -1.0), (0.0, 1.0)):
            sample = leaf.ll + leaf.size * (0.5 + np.array([dx, dy]))
            if not tree.contains(sample):
                continue
            assert tree.leaf_at(sample).depth >= leaf.depth - 1


def test_empty_or_zero_extent_point_sets_raise():
    with pytest.raises(DegenerateGeometryError):
        QuadTree.from_points(np.zeros((0, 2)), 2)
    with pytest.raises(DegenerateGeometryError):
        QuadTree.from_points(np.ones((4, 2)), 2)


def test_root_is_square_over_bounding_box():
    tree = QuadTree.from_points(np.array([[1.0, 2.0], [5.0, 3.0]]), 4)
    assert tree.ll.tolist() == [1.0, 2.0]
    assert tree.size == 4.0
    assert tree.is_leaf


def test_leaf_capacity_and_lookup():
    rng = np.random.RandomState(0)
    pts = rng.uniform(0.0, 1.0, size=(200, 2))
    tree = QuadTree.from_points(pts, 3)

    assert sum(len(leaf.points) for leaf in tree.leaves()) == len(pts)
    assert all(len(leaf.points) <= 3 for leaf in tree.leaves())
    for p in pts:
        leaf = tree.leaf_at(p)
        assert any(np.array_equal(p, q) for q in leaf.points)


def test_tree_is_two_to_one_balanced():
    # one dense corner forces deep leaves next to coarse ones
    pts = np.vstack((
        [[0.0, 0.0], [1.0, 1.0]],
        0.001 * np.arange(8)[:, None] * np.ones((8, 2)) + [0.0, 0.0005],
    ))
    tree = QuadTree.from_points(pts, 1)
    assert tree.max_leaf_depth() > 3
    _assert_balanced(tree)


def test_split_line_belongs_to_upper_right_child():
    tree = QuadTree.from_points(np.array([[0.0, 0.0], [1.0, 1.0]]), 1)
    leaf = tree.leaf_at((0.5, 0.5))
    assert leaf.depth == 1
    assert leaf.ll.tolist() == [0.5, 0.5]
    assert tree.leaf_at((0.5, 0.25)).ll.tolist() == [0.5, 0.0]


def test_query_outside_root_descends_to_boundary_leaf():
    tree = QuadTree.from_points(np.array([[0.0, 0.0], [1.0, 1.0]]), 1)
    assert tree.leaf_at((-5.0, -5.0)).ll.tolist() == [0.0, 0.0]
    assert tree.leaf_at((9.0, 9.0)).ll.tolist() == [0.5, 0.5]


def test_max_depth_caps_subdivision():
    pts = np.array([[0.0, 0.0], [1.0, 1.0], [1e-9, 0.0], [2e-9, 0.0]])
    tree = QuadTree.from_points(pts, 1, max_depth=5)
    assert tree.max_leaf_depth() == 5
