# -*- coding: utf-8 -*-
# Meshbridge/mesh/core/writer.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
Emit a Gmsh `.geo` script from reduced geometry, a polygon hierarchy and a density strategy.
The writer only formats; merging, reduction and hierarchy building happen upstream in
`GMSHInterface`.

Main Tasks:
-----------
    1. Number points sequentially from 0 (geometry points, then stations, then Steiner points)
       and attach a target element size to each.
    2. Emit one `Line` per distinct segment (IDs from 1): polygon edges first, in hierarchy
       pre-order, then open polyline segments.
    3. Emit one `Curve Loop` per polygon and one `Plane Surface` per polygon whose holes are
       its immediate children.
    4. Embed attached polylines, stations and Steiner points into their innermost surface.

Notes:
------
- The whole script is rendered into an in-memory buffer and written in one call.
- A segment shared by two polygons is emitted once; the second loop references it with a
  negative sign when traversed backwards.
- Numbers use 16 significant digits with -0 normalised to 0, so repeated writes of the
  same input are byte-identical.
"""

import io
import logging
from enum import IntEnum
from typing import Dict, List, Optional, Sequence, Tuple
import numpy as np
from geometry.ops.reduction import PlaneReduction
from geometry.primitives import Polygon, Polyline
from geometry.topology import INSIDE, PolygonHierarchy, default_tolerance, locate_points
from .density.base import DensityPoint, MeshDensityStrategy

logger = logging.getLogger(__name__)


class WriteStatus(IntEnum):
    OK = 0
    NO_GEOMETRY = 1
    HIERARCHY_FAILED = 2
    STREAM_FAILED = 3
    REDUCTION_FAILED = 4


class GeoScriptWriter:
    """
    Parameters
    ----------
    points : (N, 3) array
        Reduced coordinates of the merged geometry, in store order.
    polygons : sequence of Polygon
        Polygons indexed like the hierarchy nodes; ids index into `points`.
    hierarchy : PolygonHierarchy
        Containment forest of `polygons`; polyline/station attachments index into
        `polylines` / `stations`.
    strategy : MeshDensityStrategy
        Initialized density strategy queried with reduced coordinates.
    reduction : PlaneReduction
        Transform used to restore original coordinates before emission.
    stations : (S, 3) array, optional
        Reduced station coordinates.
    polylines : sequence of Polyline, optional
        Open polylines; ids index into `points`.
    include_stations : bool
        Emit stations as points embedded in their enclosing surface.
    emit_original_coordinates : bool
        Apply `reduction.restore` to every emitted coordinate.
    """

    def __init__(
        self,
        points: np.ndarray,
        polygons: Sequence[Polygon],
        hierarchy: PolygonHierarchy,
        strategy: MeshDensityStrategy,
        reduction: PlaneReduction,
        *,
        stations: Optional[np.ndarray] = None,
        polylines: Sequence[Polyline] = (),
        include_stations: bool = False,
        emit_original_coordinates: bool = True,
    ):
        self.points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        self.polygons = list(polygons)
        self.hierarchy = hierarchy
        self.strategy = strategy
        self.reduction = reduction
        self.stations = (
            np.zeros((0, 3)) if stations is None
            else np.asarray(stations, dtype=np.float64).reshape(-1, 3)
        )
        self.polylines = list(polylines)
        self.include_stations = bool(include_stations)
        self.emit_original_coordinates = bool(emit_original_coordinates)

        if len(self.polygons) != len(self.hierarchy):
            raise ValueError(
                f"Hierarchy has {len(self.hierarchy)} nodes but {len(self.polygons)} polygons were given."
            )

        self.n_points = 0
        self.n_lines = 0
        self.n_plane_surfaces = 0
        self.density_points: List[DensityPoint] = []

    # --------------------
    # Public API
    # --------------------
    def render(self) -> str:
        """Build the complete `.geo` text and update the counters."""
        density_points, station_ids, steiner = self._number_points()
        lines, loops, polyline_lines, edge_keys = self._number_lines()

        order = list(self.hierarchy.preorder())
        loop_id = {p: k + 1 for k, p in enumerate(order)}

        self.density_points = density_points
        self.n_points = len(density_points)
        self.n_lines = len(lines)
        self.n_plane_surfaces = len(order)

        buf = io.StringIO()
        W = buf.write

        W("// Meshbridge geometry script\n")
        W("// points: {}, lines: {}, plane surfaces: {}\n".format(
            self.n_points, self.n_lines, self.n_plane_surfaces))
        W("// coordinates: {}\n\n".format(
            "original" if self.emit_original_coordinates else "reduced"))

        # --- Points ---
        for dp in density_points:
            x, y, z = dp.xyz
            W("Point({}) = {{{}, {}, {}, {}}};\n".format(
                dp.id, _fmt(x), _fmt(y), _fmt(z), _fmt(dp.density)))

        # --- Lines ---
        if lines:
            W("\n")
        for lid, (a, b) in enumerate(lines, start=1):
            W("Line({}) = {{{}, {}}};\n".format(lid, a, b))

        # --- Surfaces ---
        if order:
            W("\n")
        for p in order:
            W("Curve Loop({}) = {{{}}};\n".format(loop_id[p], ", ".join(str(s) for s in loops[p])))
        for p in order:
            holes = [loop_id[c] for c in self.hierarchy.nodes[p].children]
            refs = ", ".join(str(r) for r in [loop_id[p]] + holes)
            W("Plane Surface({}) = {{{}}};\n".format(loop_id[p], refs))

        # --- Constraints ---
        constraints: List[str] = []
        for p in order:
            node = self.hierarchy.nodes[p]
            surface = loop_id[p]
            seen = set()
            for k in node.polylines:
                for lid in polyline_lines[k]:
                    if lid in seen or lid in edge_keys:
                        continue
                    seen.add(lid)
                    constraints.append("Curve{{{}}} In Surface{{{}}};\n".format(lid, surface))
            if self.include_stations:
                for k in node.stations:
                    constraints.append("Point{{{}}} In Surface{{{}}};\n".format(station_ids[k], surface))
            for pid, owner in steiner:
                if owner == p:
                    constraints.append("Point{{{}}} In Surface{{{}}};\n".format(pid, surface))
        if constraints:
            W("\n")
            for c in constraints:
                W(c)

        return buf.getvalue()

    def write(self, out) -> WriteStatus:
        """
        Render and write the script to the text stream `out`.

        Returns
        -------
        WriteStatus
            OK, or STREAM_FAILED when the stream raises OSError. Nothing is written if
            rendering fails.
        """
        text = self.render()
        try:
            out.write(text)
            flush = getattr(out, "flush", None)
            if flush is not None:
                flush()
        except OSError as exc:
            logger.error("[GeoScriptWriter] Writing to stream failed: %s", exc)
            return WriteStatus.STREAM_FAILED
        logger.debug(
            "[GeoScriptWriter] Wrote %d points, %d lines, %d plane surfaces.",
            self.n_points, self.n_lines, self.n_plane_surfaces,
        )
        return WriteStatus.OK

    # --------------------
    # Numbering
    # --------------------
    def _emitted(self, reduced: np.ndarray) -> np.ndarray:
        if self.emit_original_coordinates:
            return self.reduction.restore(reduced)
        return reduced

    def _number_points(self) -> Tuple[List[DensityPoint], Dict[int, int], List[Tuple[int, int]]]:
        out: List[DensityPoint] = []

        coords = self._emitted(self.points) if len(self.points) else self.points
        for i in range(self.points.shape[0]):
            d = self.strategy.density_at(self.points[i])
            out.append(DensityPoint(i, tuple(float(c) for c in coords[i]), float(d)))

        station_ids: Dict[int, int] = {}
        if self.include_stations and len(self.stations):
            scoords = self._emitted(self.stations)
            for k in range(self.stations.shape[0]):
                d = self.strategy.density_at_station(self.stations[k])
                station_ids[k] = len(out)
                out.append(DensityPoint(len(out), tuple(float(c) for c in scoords[k]), float(d)))

        steiner: List[Tuple[int, int]] = []
        for xy, owner in self._steiner_candidates():
            z = float(self.points[list(self.polygons[owner].point_ids), 2].mean())
            reduced = np.array([[xy[0], xy[1], z]])
            xyz = self._emitted(reduced)[0]
            d = self.strategy.density_at(reduced[0])
            steiner.append((len(out), owner))
            out.append(DensityPoint(len(out), tuple(float(c) for c in xyz), float(d)))

        return out, station_ids, steiner

    def _steiner_candidates(self) -> List[Tuple[Tuple[float, float], int]]:
        """Steiner points strictly inside some polygon, paired with their innermost polygon."""
        candidates = self.strategy.steiner_points()
        if not candidates or not self.polygons:
            return []
        rings = [poly.ring(self.points) for poly in self.polygons]
        tol = default_tolerance(rings)
        S = np.asarray(candidates, dtype=np.float64).reshape(-1, 2)
        owner = np.full(S.shape[0], -1, dtype=int)
        depth = np.full(S.shape[0], -1, dtype=int)
        for i, ring in enumerate(rings):
            inside = locate_points(S, ring, tol) == INSIDE
            deeper = inside & (self.hierarchy.nodes[i].depth > depth)
            owner[deeper] = i
            depth[deeper] = self.hierarchy.nodes[i].depth
        # a Steiner point on a child boundary is owned by the parent but sits on a hole edge
        for k in np.flatnonzero(owner >= 0):
            for c in self.hierarchy.nodes[owner[k]].children:
                if locate_points(S[k:k + 1], rings[c], tol)[0] >= 0:
                    owner[k] = -1
                    break
        return [((float(S[k, 0]), float(S[k, 1])), int(owner[k])) for k in np.flatnonzero(owner >= 0)]

    def _number_lines(self):
        """
        Returns
        -------
        lines : list of (a, b)
            Distinct segments; line id = position + 1.
        loops : dict polygon -> list of signed line ids
        polyline_lines : dict polyline -> list of line ids
        edge_ids : set of line ids that are polygon edges
        """
        lines: List[Tuple[int, int]] = []
        index: Dict[Tuple[int, int], int] = {}

        def signed(a: int, b: int) -> Optional[int]:
            if a == b:
                return None
            key = (a, b) if a < b else (b, a)
            lid = index.get(key)
            if lid is None:
                lines.append((a, b))
                lid = len(lines)
                index[key] = lid
                return lid
            return lid if lines[lid - 1] == (a, b) else -lid

        loops: Dict[int, List[int]] = {}
        for p in self.hierarchy.preorder():
            refs = [signed(a, b) for a, b in self.polygons[p].edges()]
            loops[p] = [r for r in refs if r is not None]
        edge_ids = set(abs(r) for refs in loops.values() for r in refs)

        polyline_lines: Dict[int, List[int]] = {}
        for k, ply in enumerate(self.polylines):
            refs = [signed(a, b) for a, b in ply.segments()]
            polyline_lines[k] = [abs(r) for r in refs if r is not None]

        return lines, loops, polyline_lines, edge_ids


def _fmt(x) -> str:
    """16 significant digits; -0 is written as 0."""
    v = float(x)
    if v == 0.0:
        v = 0.0
    return "{:.16g}".format(v)
