# -*- coding: utf-8 -*-
# Meshbridge/mesh/core/density/quadtree.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
Square, point-region quad-tree on the x-y plane used by the adaptive density strategy.

Main Tasks:
-----------
    1. Bound the point set by a square and insert points, splitting leaves that hold more
       than `max_points_per_leaf` points (down to `max_depth`).
    2. Locate the leaf for any query point in O(depth).
    3. Enforce the 2:1 balance rule: edge-adjacent leaves differ by at most one level.

Notes:
------
- Children are ordered SW, SE, NW, NE.
- A coordinate equal to a split line belongs to the upper/right child. Insertion and lookup
  share this rule, so a point always resolves to the leaf it was stored in.
- Queries outside the root square descend to the nearest boundary leaf.
"""

from typing import List, Optional
import numpy as np
from geometry.errors import DegenerateGeometryError

MAX_DEPTH = 24


class QuadTree:
    """
    Node of a square quad-tree; the root is the whole tree.

    Parameters
    ----------
    ll : array-like
        Lower-left corner (x, y) of the square.
    size : float
        Edge length of the square.
    max_points_per_leaf : int
        Leaf capacity; a leaf with more points is split.
    depth : int
        Level of this node (root = 0).
    max_depth : int
        Levels below which no split happens.
    """

    def __init__(self, ll, size: float, max_points_per_leaf: int, depth: int = 0,
                 max_depth: int = MAX_DEPTH):
        self.ll = np.asarray(ll, dtype=np.float64)[:2].copy()
        self.size = float(size)
        self.max_points_per_leaf = int(max_points_per_leaf)
        self.depth = int(depth)
        self.max_depth = int(max_depth)
        self.children: Optional[List["QuadTree"]] = None
        self.points: List[np.ndarray] = []

    @classmethod
    def from_points(cls, points, max_points_per_leaf: int, max_depth: int = MAX_DEPTH) -> "QuadTree":
        """
        Build a balanced tree over the bounding square of `points` ((N, >=2) array).

        Raises
        ------
        DegenerateGeometryError
            Empty point set or zero spatial extent.
        """
        P = np.asarray(points, dtype=np.float64)
        if P.size == 0:
            raise DegenerateGeometryError("Cannot build a quad-tree from an empty point set.")
        P = np.atleast_2d(P)[:, :2]
        lo = P.min(axis=0)
        hi = P.max(axis=0)
        size = float((hi - lo).max())
        if not size > 0.0:
            raise DegenerateGeometryError(
                "Point set has zero extent; cannot build a quad-tree.", {"n_points": int(P.shape[0])}
            )
        tree = cls(lo, size, max_points_per_leaf, 0, max_depth)
        for p in P:
            tree.add_point(p)
        tree.balance()
        return tree

    # --------------------
    # Structure
    # --------------------
    @property
    def is_leaf(self) -> bool:
        return self.children is None

    @property
    def ur(self) -> np.ndarray:
        return self.ll + self.size

    @property
    def center(self) -> np.ndarray:
        return self.ll + 0.5 * self.size

    def contains(self, xy) -> bool:
        return bool(np.all(xy >= self.ll) and np.all(xy <= self.ur))

    def _child_index(self, xy) -> int:
        mid = self.center
        return int(xy[1] >= mid[1]) * 2 + int(xy[0] >= mid[0])

    def add_point(self, xy) -> None:
        p = np.asarray(xy, dtype=np.float64)[:2]
        leaf = self.leaf_at(p)
        leaf.points.append(p)
        if len(leaf.points) > leaf.max_points_per_leaf and leaf.depth < leaf.max_depth:
            leaf.split()

    def split(self) -> None:
        """Subdivide this leaf into four and push its points down."""
        if not self.is_leaf:
            return
        half = 0.5 * self.size
        offsets = ((0.0, 0.0), (half, 0.0), (0.0, half), (half, half))
        self.children = [
            QuadTree(self.ll + np.asarray(o), half, self.max_points_per_leaf,
                     self.depth + 1, self.max_depth)
            for o in offsets
        ]
        pts, self.points = self.points, []
        for p in pts:
            self.children[self._child_index(p)].points.append(p)
        for child in self.children:
            if len(child.points) > child.max_points_per_leaf and child.depth < child.max_depth:
                child.split()

    def balance(self) -> None:
        """Split coarse leaves until every edge neighbour is at most one level apart."""
        changed = True
        while changed:
            changed = False
            for leaf in self.leaves():
                if not leaf.is_leaf:
                    continue
                for dx, dy in ((-1.0, 0.0), (1.0, 0.0), (0.0, -1.0), (0.0, 1.0)):
                    sample = leaf.ll + leaf.size * (0.5 + np.array([dx, dy]))
                    if not self.contains(sample):
                        continue
                    neighbour = self.leaf_at(sample)
                    if neighbour.depth < leaf.depth - 1:
                        neighbour.split()
                        changed = True

    # --------------------
    # Queries
    # --------------------
    def leaf_at(self, xy) -> "QuadTree":
        node = self
        p = np.asarray(xy, dtype=np.float64)[:2]
        while not node.is_leaf:
            node = node.children[node._child_index(p)]
        return node

    def leaves(self) -> List["QuadTree"]:
        out: List[QuadTree] = []
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                out.append(node)
            else:
                stack.extend(reversed(node.children))
        return out

    def max_leaf_depth(self) -> int:
        return max(leaf.depth for leaf in self.leaves())

    def __repr__(self):
        return (f"QuadTree(ll={self.ll.tolist()}, size={self.size:g}, depth={self.depth}, "
                f"leaf={self.is_leaf}, n_points={len(self.points)})")
