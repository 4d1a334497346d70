# -*- coding: utf-8 -*-
# Meshbridge/mesh/core/__init__.py

"""
Project: Meshbridge
Date: 3/2/2026

Core Subpackage:
----------------
Geometry-to-Gmsh script generation and Gmsh execution.

Modules:
--------
- density:    Mesh density strategies (fixed, adaptive quad-tree).
- writer:     GeoScriptWriter, emitting Point / Line / Curve Loop / Plane Surface statements.
- interface:  GMSHInterface, the store-to-script pipeline returning a WriteStatus.
- base:       MeshGenerator abstract interface.
- generators: Gmsh subprocess generator.
- runner:     mesh_geo, running a generator on a `.geo` file.
"""

from .density import (
    DensityPoint,
    MeshDensityStrategy,
    FixedMeshDensity,
    AdaptiveMeshDensity,
    QuadTree,
)
from .writer import GeoScriptWriter, WriteStatus
from .interface import GMSHInterface, COMPOSITE_NAME
from .base import MeshGenerator
from .generators import GmshGenerator, default_gmsh_generator
from .runner import mesh_geo

__all__ = [
    # Density
    "DensityPoint",
    "MeshDensityStrategy",
    "FixedMeshDensity",
    "AdaptiveMeshDensity",
    "QuadTree",
    # Script generation
    "GeoScriptWriter",
    "WriteStatus",
    "GMSHInterface",
    "COMPOSITE_NAME",
    # Execution
    "MeshGenerator",
    "GmshGenerator",
    "default_gmsh_generator",
    "mesh_geo",
]
