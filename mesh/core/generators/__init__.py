# -*- coding: utf-8 -*-
# Meshbridge/mesh/core/generators/__init__.py

"""
Project: Meshbridge
Date: 3/2/2026

Generators Subpackage:
----------------------
Concrete MeshGenerator implementations.

Modules:
--------
- gmsh_generator: runs the Gmsh binary and writes MSH 2.2 ASCII output.
"""

from .gmsh_generator import GmshGenerator, default_gmsh_generator

__all__ = [
    "GmshGenerator",
    "default_gmsh_generator",
]
