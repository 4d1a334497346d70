# -*- coding: utf-8 -*-
# Meshbridge/mesh/io/__init__.py

"""
Project: Meshbridge
Date: 3/2/2026

IO Subpackage:
--------------
Reading generator output and exporting meshes.

Modules:
--------
- msh_reader: MSH 2.x ASCII reader (state machine, external-ID remapping) and header check.

- export:     meshio conversion and writing (VTU, XDMF, ...).
"""

from .msh_reader import NODE_ORDER, is_gmsh_mesh_file, read_gmsh_mesh, read_gmsh_mesh_file
from .export import to_meshio, write_mesh

__all__ = [
    "NODE_ORDER",
    "is_gmsh_mesh_file",
    "read_gmsh_mesh",
    "read_gmsh_mesh_file",
    "to_meshio",
    "write_mesh",
]
