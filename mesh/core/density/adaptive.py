# -*- coding: utf-8 -*-
# Meshbridge/mesh/core/density/adaptive.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
Adaptive mesh density derived from local point spacing. A balanced quad-tree is built over
the reduced point set; every leaf gets one element size and queries return the size of the
leaf containing the query point.

Leaf value:
-----------
    - >= 2 points : minimum pairwise distance of the leaf's points, clamped to [min, max]
    - 1 point     : max_density (no neighbour to measure against)
    - 0 points    : leaf edge length, clamped to [min, max]

Notes:
------
- Building is O(P log P); each query is O(depth).
- Centres of empty leaves are offered as Steiner points so the generator grades the
  element size across sparse areas.
"""

import logging
from typing import Dict, List, Optional, Tuple
import numpy as np
from mesh.config import validate_adaptive_parameters
from .base import MeshDensityStrategy, _xy
from .quadtree import QuadTree, MAX_DEPTH

logger = logging.getLogger(__name__)


class AdaptiveMeshDensity(MeshDensityStrategy):
    """
    Parameters
    ----------
    min_density : float
        Lower bound of the returned element size (> 0).
    max_density : float
        Upper bound of the returned element size (>= min_density).
    max_points_per_leaf : int
        Quad-tree leaf capacity (>= 1); smaller values give finer trees.
    """

    def __init__(self, min_density: float, max_density: float, max_points_per_leaf: int = 2,
                 max_depth: int = MAX_DEPTH):
        validate_adaptive_parameters(min_density, max_density, max_points_per_leaf)
        self.min_density = float(min_density)
        self.max_density = float(max_density)
        self.max_points_per_leaf = int(max_points_per_leaf)
        self.max_depth = int(max_depth)
        self._tree: Optional[QuadTree] = None
        self._cache: Dict[int, float] = {}

    # --------------------
    # Strategy API
    # --------------------
    def initialize(self, points) -> None:
        """
        (Re)build the quad-tree over `points` ((N, 2|3) reduced coordinates).

        Raises
        ------
        DegenerateGeometryError
            Empty point set or zero extent.
        """
        self._tree = QuadTree.from_points(points, self.max_points_per_leaf, self.max_depth)
        self._cache = {}
        leaves = self._tree.leaves()
        logger.debug(
            "[AdaptiveMeshDensity] Quad-tree built: %d leaves, max depth %d.",
            len(leaves), self._tree.max_leaf_depth(),
        )

    def density_at(self, point) -> float:
        leaf = self.tree.leaf_at(_xy(point))
        key = id(leaf)
        value = self._cache.get(key)
        if value is None:
            value = self._leaf_density(leaf)
            self._cache[key] = value
        return value

    def steiner_points(self) -> List[Tuple[float, float]]:
        return [tuple(float(c) for c in leaf.center) for leaf in self.tree.leaves() if not leaf.points]

    # --------------------
    # Internals
    # --------------------
    @property
    def tree(self) -> QuadTree:
        if self._tree is None:
            raise RuntimeError("[AdaptiveMeshDensity] Not initialized. Call `.initialize(points)` first.")
        return self._tree

    def _clamp(self, value: float) -> float:
        return float(min(max(value, self.min_density), self.max_density))

    def _leaf_density(self, leaf: QuadTree) -> float:
        n = len(leaf.points)
        if n == 0:
            return self._clamp(leaf.size)
        if n == 1:
            return self.max_density
        P = np.asarray(leaf.points)
        diff = P[:, None, :] - P[None, :, :]
        dist = np.sqrt((diff * diff).sum(axis=-1))
        iu = np.triu_indices(n, k=1)
        return self._clamp(float(dist[iu].min()))

    def __repr__(self):
        return (f"AdaptiveMeshDensity(min_density={self.min_density!r}, "
                f"max_density={self.max_density!r}, max_points_per_leaf={self.max_points_per_leaf!r})")
