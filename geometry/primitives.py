# -*- coding: utf-8 -*-
# Meshbridge/geometry/primitives.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
Immutable geometric primitives held by the geometry store: points, stations (named free
points), polylines (index lists into a point vector) and polygons (rings of closed polylines).

Notes:
------
- Polylines reference points by position in their geometry's point list; they never own them.
- A polyline is closed when it has at least 4 entries and first index == last index.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
import numpy as np


@dataclass(frozen=True)
class GeoPoint:
    """3D coordinate triple with a stable external identifier."""
    x: float
    y: float
    z: float = 0.0
    id: int = 0

    @property
    def xyz(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Station:
    """Named free point (observation well, borehole, gauge...)."""
    name: str
    x: float
    y: float
    z: float = 0.0

    @property
    def xyz(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Polyline:
    point_ids: Tuple[int, ...]
    name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "point_ids", tuple(int(i) for i in self.point_ids))
        if len(self.point_ids) < 2:
            raise ValueError("A polyline needs at least 2 point ids.")

    @property
    def is_closed(self) -> bool:
        return len(self.point_ids) >= 4 and self.point_ids[0] == self.point_ids[-1]

    def segments(self):
        """Yield consecutive (a, b) point-id pairs."""
        ids = self.point_ids
        for k in range(1, len(ids)):
            yield ids[k - 1], ids[k]


@dataclass(frozen=True)
class Polygon:
    """
    Ring of point ids (closed, last id NOT repeated).

    Orientation is not stored; derive it from coordinates with
    `geometry.topology.loop.orientation(polygon.ring(coords))`.
    """
    point_ids: Tuple[int, ...]
    name: Optional[str] = None

    @classmethod
    def from_polyline(cls, polyline: Polyline) -> "Polygon":
        if not polyline.is_closed:
            raise ValueError("Only closed polylines can be turned into polygons.")
        return cls(point_ids=polyline.point_ids[:-1], name=polyline.name)

    def ring(self, coords: np.ndarray) -> np.ndarray:
        """Return the (M, 2) xy ring of this polygon from an (N, >=2) coordinate array."""
        return np.asarray(coords, dtype=float)[list(self.point_ids), :2]

    def edges(self):
        """Yield (a, b) point-id pairs, including the closing edge."""
        ids = self.point_ids
        n = len(ids)
        for k in range(n):
            yield ids[k], ids[(k + 1) % n]


def coords_array(points: Sequence) -> np.ndarray:
    """Stack `.xyz` of GeoPoint/Station objects into an (N, 3) float64 array."""
    if len(points) == 0:
        return np.zeros((0, 3), dtype=np.float64)
    return np.asarray([p.xyz for p in points], dtype=np.float64)
