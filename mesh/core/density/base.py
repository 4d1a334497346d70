# -*- coding: utf-8 -*-
# Meshbridge/mesh/core/density/base.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
Interfaces shared by mesh density strategies, plus the DensityPoint record that pairs a
written point with its output ID and target element size.

Abstract Classes:
-----------------
- MeshDensityStrategy: initialize on the reduced point set, then answer `density_at`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence, Tuple
import numpy as np


@dataclass(frozen=True)
class DensityPoint:
    """
    A point as it is written to the .geo script.

    Attributes
    ----------
    id : int
        Sequential output identifier (0-based, assigned by the writer).
    xyz : tuple of float
        Coordinates as emitted.
    density : float
        Target element size (> 0) at this point.
    """
    id: int
    xyz: Tuple[float, float, float]
    density: float


class MeshDensityStrategy(ABC):
    """
    Policy computing a target element size for any location on the working plane.
    """

    def initialize(self, points: Sequence) -> None:
        """Prepare the strategy for the (N, 2|3) reduced point set. No-op by default."""

    @abstractmethod
    def density_at(self, point) -> float:
        """Target element size at `point` (x, y[, z]); always > 0."""

    def density_at_station(self, point) -> float:
        """Target element size at a station; defaults to `density_at`."""
        return self.density_at(point)

    def steiner_points(self) -> List[Tuple[float, float]]:
        """Additional grading points suggested by the strategy; none by default."""
        return []


def _xy(point) -> np.ndarray:
    p = np.asarray(point, dtype=np.float64).ravel()
    if p.size < 2:
        raise ValueError(f"Expected a point with at least 2 coordinates, got {p.size}.")
    return p[:2]
