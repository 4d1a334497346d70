# -*- coding: utf-8 -*-
# Meshbridge/geometry/ops/__init__.py

"""
Project: Meshbridge
Date: 3/2/2026

Ops Subpackage:
---------------
Numeric operations on point sets.

Modules:
--------
- reduction: best-fit plane, rotation onto the x-y plane, orthogonal projection and the
             PlaneReduction record holding forward/inverse matrices.
"""

from .reduction import (
    PlaneReduction,
    fit_plane,
    rotation_to_xy,
    compute_rotation,
    rotate_to_xy,
    project_to_xy,
    reduce_points,
)

__all__ = [
    "PlaneReduction",
    "fit_plane",
    "rotation_to_xy",
    "compute_rotation",
    "rotate_to_xy",
    "project_to_xy",
    "reduce_points",
]
