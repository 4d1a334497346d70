# -*- coding: utf-8 -*-
# Meshbridge/mesh/__init__.py

"""
Project: Meshbridge
Date: 3/2/2026

Modules:
--------
- config: write settings, density algorithm selection and defaults.
- errors: MeshError hierarchy (configuration and read errors).
- model:  Node / Element / Mesh containers used by the solver.
- core:   density strategies, .geo writer, GMSHInterface and the Gmsh runner.
- io:     MSH 2.x reader and meshio export.
- tools:  executable lookup.
- api:    high-level write -> mesh -> read pipeline.
"""

__all__ = ["config", "errors", "model", "core", "io", "tools", "api"]
