# -*- coding: utf-8 -*-
# Meshbridge/geometry/__init__.py

"""
Project: Meshbridge
Date: 3/2/2026

Modules:
--------
- primitives: Immutable GeoPoint / Station / Polyline / Polygon records.

- store:      In-memory geometry store. Geometries are addressed by name; supports fetch by
              name and merging several geometries into a composite with duplicate-point
              collapse.

- errors:     Typed exceptions (GeometryError, TopologyError, DegenerateGeometryError,
              GeometryNotFoundError) with compact context suffixes.

- topology:   Ring predicates (signed area, orientation, point location, edge crossings)
              and the polygon containment hierarchy (holes inside polygons).

- ops:        Plane reduction: best-fit plane rotation onto x-y, or orthogonal projection,
              with the inverse transform for restoring coordinates.

- loaders:    Readers that fill a GeometryStore from files (JSON).
"""

__all__ = ["primitives", "store", "errors", "topology", "ops", "loaders"]
