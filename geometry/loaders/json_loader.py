# -*- coding: utf-8 -*-
# Meshbridge/geometry/loaders/json_loader.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
Read named geometries from a JSON document and register them in a GeometryStore.

Accepted layout (a single object or a list of objects):

    {
      "name": "site",
      "points": [[x, y, z], [x, y], ...],
      "polylines": [{"name": "boundary", "points": [0, 1, 2, 3, 0]}, [4, 5], ...],
      "stations": [{"name": "well-1", "x": 1.0, "y": 2.0, "z": 0.0}, ...]
    }

Notes:
------
   - Points may have 2 or 3 coordinates; missing z is 0.
   - A polyline may be given as a bare list of point indices.
   - This module does no reduction or topology work; it only parses and registers.
"""

import json
import logging
from typing import Any, Dict, List, Optional
from ..errors import GeometryError
from ..primitives import GeoPoint, Polyline, Station
from ..store import GeometryStore

logger = logging.getLogger(__name__)


def geometry_from_dict(doc: Dict[str, Any], store: GeometryStore, *, overwrite: bool = False) -> str:
    """
    Register one geometry described by `doc` in `store`; return its name.

    Raises
    ------
    GeometryError
        Missing name, malformed point, polyline or station entries.
    """
    name = doc.get("name")
    if not name:
        raise GeometryError("Geometry entry is missing a 'name'.")

    points: List[GeoPoint] = []
    for i, xyz in enumerate(doc.get("points", [])):
        if not isinstance(xyz, (list, tuple)) or len(xyz) not in (2, 3):
            raise GeometryError("Point must have 2 or 3 coordinates.", {"name": name, "point": i})
        z = float(xyz[2]) if len(xyz) == 3 else 0.0
        points.append(GeoPoint(float(xyz[0]), float(xyz[1]), z, i))

    polylines: List[Polyline] = []
    for k, entry in enumerate(doc.get("polylines", [])):
        if isinstance(entry, dict):
            ids, ply_name = entry.get("points", []), entry.get("name")
        else:
            ids, ply_name = entry, None
        try:
            polylines.append(Polyline(tuple(int(i) for i in ids), ply_name))
        except (TypeError, ValueError) as e:
            raise GeometryError("Malformed polyline.", {"name": name, "polyline": k}) from e

    stations: List[Station] = []
    for k, entry in enumerate(doc.get("stations", [])):
        try:
            stations.append(Station(
                str(entry.get("name", f"station-{k}")),
                float(entry["x"]),
                float(entry["y"]),
                float(entry.get("z", 0.0)),
            ))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise GeometryError("Malformed station.", {"name": name, "station": k}) from e

    store.add_geometry(name, points, polylines, stations, overwrite=overwrite)
    return name


def load_geometry_json(filename: str, store: Optional[GeometryStore] = None) -> GeometryStore:
    """
    Load every geometry in a JSON file into `store` (a new store if None).

    Returns
    -------
    GeometryStore
        The store the geometries were registered in.
    """
    with open(filename, "r", encoding="utf-8") as f:
        doc = json.load(f)

    store = store if store is not None else GeometryStore()
    entries = doc if isinstance(doc, list) else [doc]
    names = [geometry_from_dict(entry, store) for entry in entries]
    logger.info("[load_geometry_json] Loaded %s from %s", names, filename)
    return store
