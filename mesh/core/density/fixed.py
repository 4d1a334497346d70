# -*- coding: utf-8 -*-
# Meshbridge/mesh/core/density/fixed.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
Fixed mesh density: one configured element size for every point, regardless of location.
"""

from mesh.errors import ConfigurationError
from .base import MeshDensityStrategy


class FixedMeshDensity(MeshDensityStrategy):
    def __init__(self, mesh_density: float):
        if not (float(mesh_density) > 0.0):
            raise ConfigurationError("mesh_density must be > 0.", {"mesh_density": mesh_density})
        self.mesh_density = float(mesh_density)

    def density_at(self, point) -> float:
        return self.mesh_density

    def __repr__(self):
        return f"FixedMeshDensity({self.mesh_density!r})"
