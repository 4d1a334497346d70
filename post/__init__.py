# -*- coding: utf-8 -*-
# Meshbridge/post/__init__.py

"""
Project: Meshbridge
Date: 3/2/2026

Modules:
--------
- plot_geo:  Polygon hierarchy on the reduced plane (depth colouring, stations, Steiner points).

- plot_mesh: Read-back mesh wireframe, optionally coloured by material ID.
             Headless-safe backend selection.
"""

__all__ = ["plot_geo", "plot_mesh"]
