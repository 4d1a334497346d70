# -*- coding: utf-8 -*-
# Meshbridge/geometry/topology/__init__.py

"""
Project: Meshbridge
Date: 3/2/2026

Topology Subfolder:
-------------------
Containment topology for planar polygons.

Modules:
--------
- loop:        Signed area, orientation (CW/CCW), three-way point location against a ring
               (outside / on boundary / inside) and strict edge-crossing detection.

- hierarchy:   Polygon containment forest (arena of HierarchyNode addressed by index),
               with free stations and polylines attached to their innermost polygon.

- _validation: Shared validation utilities for point arrays and ring normalization.
"""

from .loop import (
    OUTSIDE,
    ON_BOUNDARY,
    INSIDE,
    signed_area,
    orientation,
    locate_points,
    point_in_ring,
    rings_cross,
    path_crosses_ring,
    edge_samples,
)
from .hierarchy import HierarchyNode, PolygonHierarchy, build_hierarchy, default_tolerance

__all__ = [
    "OUTSIDE",
    "ON_BOUNDARY",
    "INSIDE",
    "signed_area",
    "orientation",
    "locate_points",
    "point_in_ring",
    "rings_cross",
    "path_crosses_ring",
    "edge_samples",
    "HierarchyNode",
    "PolygonHierarchy",
    "build_hierarchy",
    "default_tolerance",
]
