# -*- coding: utf-8 -*-
# Meshbridge/geometry/store.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose
-------
Minimal in-memory geometry store. Geometries are addressed by name; each holds a point
vector, polylines indexing into it, and stations (named free points).

Main Tasks
----------
    1. Register / replace / remove named geometries.
    2. Fetch points, polylines, polygons (closed polylines) and stations by name.
    3. Merge several named geometries into a new composite, collapsing points that share
       coordinates and remapping polyline indices accordingly.

Notes
-----
- Stored sequences are tuples; callers never mutate a geometry in place.
- Merging is the only operation that creates a new geometry from existing ones.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple
from .errors import GeometryError, GeometryNotFoundError
from .primitives import GeoPoint, Polyline, Polygon, Station

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeometryGroup:
    points: Tuple[GeoPoint, ...]
    polylines: Tuple[Polyline, ...] = field(default_factory=tuple)
    stations: Tuple[Station, ...] = field(default_factory=tuple)


class GeometryStore:
    """Name-indexed collection of GeometryGroup objects."""

    def __init__(self):
        self._geometries: Dict[str, GeometryGroup] = {}

    # --------------------
    # Registration
    # --------------------
    def add_geometry(
        self,
        name: str,
        points: Sequence[GeoPoint],
        polylines: Iterable[Polyline] = (),
        stations: Iterable[Station] = (),
        *,
        overwrite: bool = False,
    ) -> GeometryGroup:
        """
        Register a geometry under `name`.

        Raises
        ------
        GeometryError
            If the name is taken (and `overwrite` is False) or a polyline references a
            point index outside the point vector.
        """
        if not name:
            raise GeometryError("Geometry name must be a non-empty string.")
        if name in self._geometries and not overwrite:
            raise GeometryError("Geometry already exists.", {"name": name})

        pts = tuple(points)
        plys = tuple(polylines)
        n_pts = len(pts)
        for k, ply in enumerate(plys):
            bad = [i for i in ply.point_ids if i < 0 or i >= n_pts]
            if bad:
                raise GeometryError(
                    "Polyline references unknown point ids.",
                    {"name": name, "polyline": k, "ids": bad},
                )

        group = GeometryGroup(points=pts, polylines=plys, stations=tuple(stations))
        self._geometries[name] = group
        logger.debug(
            "[GeometryStore] Registered '%s': %d points, %d polylines, %d stations.",
            name, len(group.points), len(group.polylines), len(group.stations),
        )
        return group

    def remove_geometry(self, name: str) -> None:
        if name not in self._geometries:
            raise GeometryNotFoundError("Unknown geometry.", {"name": name})
        del self._geometries[name]
        logger.debug("[GeometryStore] Removed '%s'.", name)

    # --------------------
    # Queries
    # --------------------
    def names(self) -> List[str]:
        return list(self._geometries.keys())

    def has_geometry(self, name: str) -> bool:
        return name in self._geometries

    def get(self, name: str) -> GeometryGroup:
        try:
            return self._geometries[name]
        except KeyError:
            raise GeometryNotFoundError("Unknown geometry.", {"name": name}) from None

    def get_points(self, name: str) -> Tuple[GeoPoint, ...]:
        return self.get(name).points

    def get_polylines(self, name: str) -> Tuple[Polyline, ...]:
        return self.get(name).polylines

    def get_stations(self, name: str) -> Tuple[Station, ...]:
        return self.get(name).stations

    def get_polygons(self, name: str) -> List[Polygon]:
        return [Polygon.from_polyline(p) for p in self.get(name).polylines if p.is_closed]

    # --------------------
    # Merge
    # --------------------
    def merge_geometries(
        self,
        names: Sequence[str],
        new_name: str,
        *,
        tol: float = 0.0,
        overwrite: bool = False,
    ) -> GeometryGroup:
        """
        Merge the named geometries into a new geometry `new_name`.

        Points whose coordinates coincide (exactly, or on a `tol` grid if tol > 0) are
        collapsed onto the first occurrence; polylines are re-indexed and consecutive
        repeated ids produced by the collapse are dropped. Stations are concatenated.

        Returns
        -------
        GeometryGroup
            The newly registered composite.
        """
        if not names:
            raise GeometryError("Nothing to merge: empty list of geometry names.")
        groups = [self.get(n) for n in names]

        points: List[GeoPoint] = []
        lookup: Dict[Tuple, int] = {}
        polylines: List[Polyline] = []
        stations: List[Station] = []

        for group in groups:
            id_map: List[int] = []
            for p in group.points:
                key = _coord_key(p.xyz, tol)
                idx = lookup.get(key)
                if idx is None:
                    idx = len(points)
                    lookup[key] = idx
                    points.append(GeoPoint(p.x, p.y, p.z, idx))
                id_map.append(idx)

            for ply in group.polylines:
                ids = [id_map[i] for i in ply.point_ids]
                dedup = [ids[0]]
                for i in ids[1:]:
                    if i != dedup[-1]:
                        dedup.append(i)
                if len(dedup) < 2:
                    logger.warning(
                        "[GeometryStore] Dropping polyline '%s' collapsed to a single point.",
                        ply.name,
                    )
                    continue
                polylines.append(Polyline(tuple(dedup), ply.name))

            stations.extend(group.stations)

        n_in = sum(len(g.points) for g in groups)
        logger.info(
            "[GeometryStore] Merged %s into '%s': %d -> %d points, %d polylines.",
            list(names), new_name, n_in, len(points), len(polylines),
        )
        return self.add_geometry(new_name, points, polylines, stations, overwrite=overwrite)


def _coord_key(xyz, tol: float) -> Tuple:
    if tol > 0.0:
        return tuple(int(round(c / tol)) for c in xyz)
    return tuple(float(c) for c in xyz)
