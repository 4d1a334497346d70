# -*- coding: utf-8 -*-
# Meshbridge/mesh/tools/__init__.py

"""
Project: Meshbridge
Date: 3/2/2026

Tools Subpackage:
-----------------
Helpers supporting the Gmsh runner.

Modules:
--------
- utils: mesher executable resolution (explicit path, GMSH_BIN, PATH).
"""

__all__ = ["utils"]
