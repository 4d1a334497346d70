# -*- coding: utf-8 -*-
# Meshbridge/mesh/core/interface.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
Gmsh geometry interface: pulls the selected geometries from a GeometryStore and writes them
as a Gmsh `.geo` script with per-point mesh density.

Main Tasks:
-----------
    1. Merge the selected geometries into the composite "GMSHGeometry" (duplicate points
       collapsed, polylines re-indexed).
    2. Reduce the composite to the x-y plane (rotation or projection).
    3. Split closed polylines into polygons, build the containment hierarchy, attach open
       polylines and stations.
    4. Initialize the density strategy on all reduced points and drive GeoScriptWriter.
    5. Keep the reduced composite in the store for diagnosis, or remove it.

Notes:
------
- Settings are validated when the interface is built (ConfigurationError). The write path
  itself never raises for topology, numeric or stream failures; it returns a WriteStatus
  and keeps the message in `last_error`.
- Repeated writes on an unchanged store produce byte-identical scripts.
"""

import logging
from typing import List, Optional
import numpy as np
from geometry.errors import DegenerateGeometryError, TopologyError
from geometry.ops.reduction import PlaneReduction, reduce_points
from geometry.primitives import GeoPoint, Polygon, Polyline, Station, coords_array
from geometry.store import GeometryGroup, GeometryStore
from geometry.topology import PolygonHierarchy, build_hierarchy
from mesh.config import WriteSettings, make_density_strategy, settings_from_dict
from .writer import GeoScriptWriter, WriteStatus

logger = logging.getLogger(__name__)

COMPOSITE_NAME = "GMSHGeometry"


class GMSHInterface:
    """
    Parameters
    ----------
    store : GeometryStore
        Source of named geometries. The composite "GMSHGeometry" is (re)written into it.
    settings : WriteSettings
        Validated write settings.

    Raises
    ------
    ConfigurationError
        Invalid settings or density parameters.
    """

    def __init__(self, store: GeometryStore, settings: WriteSettings):
        if not isinstance(settings, WriteSettings):
            settings = settings_from_dict(settings)
        self.store = store
        self.settings = settings
        self.strategy = make_density_strategy(settings)
        self.last_error: Optional[str] = None
        self.n_points = 0
        self.n_lines = 0
        self.n_plane_surfaces = 0

    # --------------------
    # Public API
    # --------------------
    def write(self, out) -> WriteStatus:
        """Write the `.geo` script for the selected geometries to the text stream `out`."""
        self.last_error = None
        self.n_points = self.n_lines = self.n_plane_surfaces = 0
        names = list(self.settings.geometries)

        missing = [n for n in names if not self.store.has_geometry(n)]
        if missing:
            return self._fail(WriteStatus.NO_GEOMETRY, f"Unknown geometries: {missing}")

        composite = self.store.merge_geometries(names, COMPOSITE_NAME, overwrite=True)
        try:
            status = self._write_composite(out, composite)
        finally:
            if not self.settings.keep_preprocessed_geometry and self.store.has_geometry(COMPOSITE_NAME):
                self.store.remove_geometry(COMPOSITE_NAME)

        if status is WriteStatus.OK:
            logger.info(
                "[GMSHInterface] Wrote %s: %d points, %d lines, %d plane surfaces.",
                names, self.n_points, self.n_lines, self.n_plane_surfaces,
            )
        return status

    def write_file(self, path) -> WriteStatus:
        """Open `path` for writing (UTF-8, LF line endings) and delegate to `write`."""
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as fh:
                return self.write(fh)
        except OSError as exc:
            return self._fail(WriteStatus.STREAM_FAILED, f"Cannot write '{path}': {exc}")

    # --------------------
    # Pipeline
    # --------------------
    def _write_composite(self, out, composite: GeometryGroup) -> WriteStatus:
        s = self.settings
        if not composite.points:
            return self._fail(WriteStatus.NO_GEOMETRY, "Selected geometries contain no points.")

        coords = coords_array(composite.points)
        stations = list(composite.stations) if s.include_stations_as_constraints else []

        try:
            reduced, reduction = reduce_points(coords, s.rotate)
        except DegenerateGeometryError as exc:
            return self._fail(WriteStatus.REDUCTION_FAILED, str(exc))
        reduced_stations = reduction.apply(coords_array(stations)) if stations else np.zeros((0, 3))

        polygons = [Polygon.from_polyline(p) for p in composite.polylines if p.is_closed]
        open_polylines = [p for p in composite.polylines if not p.is_closed]

        try:
            hierarchy = build_hierarchy(
                [poly.ring(reduced) for poly in polygons],
                [reduced[list(p.point_ids), :2] for p in open_polylines],
                reduced_stations[:, :2] if stations else None,
            )
        except TopologyError as exc:
            return self._fail(WriteStatus.HIERARCHY_FAILED, str(exc))
        self._log_hierarchy(hierarchy)

        try:
            self.strategy.initialize(np.vstack((reduced[:, :2], reduced_stations[:, :2])))
        except DegenerateGeometryError as exc:
            return self._fail(WriteStatus.REDUCTION_FAILED, str(exc))

        writer = GeoScriptWriter(
            reduced,
            polygons,
            hierarchy,
            self.strategy,
            reduction,
            stations=reduced_stations,
            polylines=open_polylines,
            include_stations=s.include_stations_as_constraints,
            emit_original_coordinates=s.emit_original_coordinates,
        )
        status = writer.write(out)
        if status is not WriteStatus.OK:
            return self._fail(status, "Writing the geometry script to the stream failed.")

        self.n_points = writer.n_points
        self.n_lines = writer.n_lines
        self.n_plane_surfaces = writer.n_plane_surfaces

        if s.keep_preprocessed_geometry:
            self._keep_reduced(composite, reduced, reduction)
        return WriteStatus.OK

    def _keep_reduced(self, composite: GeometryGroup, reduced: np.ndarray,
                      reduction: PlaneReduction) -> None:
        points = [GeoPoint(float(x), float(y), float(z), i) for i, (x, y, z) in enumerate(reduced)]
        stations: List[Station] = []
        if composite.stations:
            rs = reduction.apply(coords_array(composite.stations))
            stations = [Station(st.name, float(p[0]), float(p[1]), float(p[2]))
                        for st, p in zip(composite.stations, rs)]
        polylines: List[Polyline] = list(composite.polylines)
        self.store.add_geometry(COMPOSITE_NAME, points, polylines, stations, overwrite=True)
        logger.debug("[GMSHInterface] Kept reduced composite '%s' in the store.", COMPOSITE_NAME)

    def _fail(self, status: WriteStatus, message: str) -> WriteStatus:
        self.last_error = message
        logger.error("[GMSHInterface] Write failed (%s): %s", status.name, message)
        return status

    @staticmethod
    def _log_hierarchy(hierarchy: PolygonHierarchy) -> None:
        depth = max((n.depth for n in hierarchy.nodes), default=-1) + 1
        logger.debug(
            "[GMSHInterface] Hierarchy: %d polygons, %d roots, depth %d, %d free polylines, "
            "%d free stations.",
            len(hierarchy), len(hierarchy.roots), depth,
            len(hierarchy.free_polylines), len(hierarchy.free_stations),
        )

    def __repr__(self):
        return f"GMSHInterface(geometries={list(self.settings.geometries)!r}, strategy={self.strategy!r})"
