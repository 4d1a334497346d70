# -*- coding: utf-8 -*-
# Meshbridge/mesh/core/density/__init__.py

"""
Project: Meshbridge
Date: 3/2/2026

Density Subpackage:
-------------------
Mesh density strategies assigning a target element size to every written point.

Modules:
--------
- base:     MeshDensityStrategy interface and the DensityPoint record.
- fixed:    FixedMeshDensity, one constant everywhere.
- adaptive: AdaptiveMeshDensity, element size derived from a balanced quad-tree.
- quadtree: Square point-region quad-tree with 2:1 balancing.
"""

from .base import DensityPoint, MeshDensityStrategy
from .fixed import FixedMeshDensity
from .adaptive import AdaptiveMeshDensity
from .quadtree import QuadTree

__all__ = [
    "DensityPoint",
    "MeshDensityStrategy",
    "FixedMeshDensity",
    "AdaptiveMeshDensity",
    "QuadTree",
]
