# -*- coding: utf-8 -*-
# Meshbridge/mesh/config.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose
-------
Write-operation settings for the Gmsh interface: which geometries to export, how to assign
mesh density, how to reduce 3D input to the plane, and what to keep afterwards. Settings
are validated eagerly so configuration errors surface before any I/O.

Main Tasks
----------
    1. Define MeshDensityAlgorithm (fixed | adaptive) and the frozen WriteSettings record.
    2. Merge user overrides over DEFAULTS (`settings_from_dict`), rejecting unknown keys.
    3. Build the density strategy matching the settings (`make_density_strategy`).

Notes
-----
- Fixed density uses `mesh_density`; adaptive uses `min_density`, `max_density` and
  `max_points_per_leaf`. Parameters of the inactive algorithm are ignored.
"""

import copy
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple
from .errors import ConfigurationError


class MeshDensityAlgorithm(str, Enum):
    FIXED = "fixed"        # one value everywhere
    ADAPTIVE = "adaptive"  # quad-tree derived from local point spacing


DEFAULTS: Dict[str, Any] = {
    "geometries": (),
    "density_algorithm": MeshDensityAlgorithm.FIXED,
    "mesh_density": 0.1,
    "min_density": 0.01,
    "max_density": 1.0,
    "max_points_per_leaf": 2,
    "include_stations_as_constraints": False,
    "rotate": False,
    "keep_preprocessed_geometry": False,
    "emit_original_coordinates": True,
}


@dataclass(frozen=True)
class WriteSettings:
    """
    Immutable settings of one Gmsh write operation.

    Attributes
    ----------
    geometries : tuple of str
        Names of the store geometries to export (merged if more than one).
    density_algorithm : MeshDensityAlgorithm
        FIXED or ADAPTIVE.
    mesh_density : float
        Constant target element size (FIXED).
    min_density, max_density : float
        Bounds of the adaptive element size (ADAPTIVE).
    max_points_per_leaf : int
        Quad-tree leaf capacity (ADAPTIVE).
    include_stations_as_constraints : bool
        Emit stations as points embedded in their enclosing surface.
    rotate : bool
        Rotate the best-fit plane onto x-y (True) or project orthogonally (False).
    keep_preprocessed_geometry : bool
        Keep the merged, reduced composite geometry in the store for diagnosis.
    emit_original_coordinates : bool
        Apply the inverse reduction to points before writing them.
    """
    geometries: Tuple[str, ...] = ()
    density_algorithm: MeshDensityAlgorithm = MeshDensityAlgorithm.FIXED
    mesh_density: float = 0.1
    min_density: float = 0.01
    max_density: float = 1.0
    max_points_per_leaf: int = 2
    include_stations_as_constraints: bool = False
    rotate: bool = False
    keep_preprocessed_geometry: bool = False
    emit_original_coordinates: bool = True

    def __post_init__(self):
        geoms = self.geometries
        if isinstance(geoms, str):
            geoms = (geoms,)
        object.__setattr__(self, "geometries", tuple(geoms))
        try:
            object.__setattr__(self, "density_algorithm", MeshDensityAlgorithm(self.density_algorithm))
        except ValueError:
            raise ConfigurationError(
                "Unknown mesh density algorithm.", {"density_algorithm": self.density_algorithm}
            ) from None

        if not self.geometries:
            raise ConfigurationError("No geometries selected for writing.")
        if any(not g for g in self.geometries):
            raise ConfigurationError("Geometry names must be non-empty.", {"geometries": self.geometries})

        if self.density_algorithm is MeshDensityAlgorithm.FIXED:
            if not (float(self.mesh_density) > 0.0):
                raise ConfigurationError(
                    "mesh_density must be > 0.", {"mesh_density": self.mesh_density}
                )
        else:
            validate_adaptive_parameters(self.min_density, self.max_density, self.max_points_per_leaf)


def validate_adaptive_parameters(min_density: float, max_density: float, max_points_per_leaf: int) -> None:
    """
    Raises
    ------
    ConfigurationError
        Non-positive bounds, min > max, or leaf capacity < 1.
    """
    ctx = {"min_density": min_density, "max_density": max_density}
    if not (float(min_density) > 0.0 and float(max_density) > 0.0):
        raise ConfigurationError("Density bounds must be > 0.", ctx)
    if float(min_density) > float(max_density):
        raise ConfigurationError("min_density must not exceed max_density.", ctx)
    if int(max_points_per_leaf) < 1:
        raise ConfigurationError(
            "max_points_per_leaf must be >= 1.", {"max_points_per_leaf": max_points_per_leaf}
        )


def settings_from_dict(params: Optional[Mapping[str, Any]] = None) -> WriteSettings:
    """
    Merge `params` over DEFAULTS and build validated WriteSettings.

    Keys are case-insensitive; unknown keys raise ConfigurationError.
    """
    merged = copy.deepcopy(DEFAULTS)
    known = {f.name for f in fields(WriteSettings)}
    for k, v in (params or {}).items():
        key = str(k).strip().lower()
        if key not in known:
            raise ConfigurationError("Unknown setting.", {"key": k})
        merged[key] = copy.deepcopy(v)
    return WriteSettings(**merged)


def make_density_strategy(settings: WriteSettings):
    """Instantiate the MeshDensityStrategy selected by `settings`."""
    from .core.density import AdaptiveMeshDensity, FixedMeshDensity

    if settings.density_algorithm is MeshDensityAlgorithm.ADAPTIVE:
        return AdaptiveMeshDensity(
            settings.min_density, settings.max_density, settings.max_points_per_leaf
        )
    return FixedMeshDensity(settings.mesh_density)
