# -*- coding: utf-8 -*-
# Meshbridge/geometry/loaders/__init__.py

"""
Project: Meshbridge
Date: 3/2/2026

Loaders Subpackage:
-------------------
Format-specific readers that register geometries in a GeometryStore.

Modules:
--------
- json_loader: points / polylines / stations from a JSON document.
"""

from .json_loader import load_geometry_json, geometry_from_dict

__all__ = ["load_geometry_json", "geometry_from_dict"]
