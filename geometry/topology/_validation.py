# -*- coding: utf-8 -*-
# Meshbridge/geometry/topology/_validation.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
Shared validation helpers for topology operations so every module checks point arrays
the same way.

Main Tasks:
   1. Validate (N, 2) point array structure, optionally checking for finite values.
   2. Coerce ring inputs into open (last != first) float64 arrays.
"""

from typing import Optional
import numpy as np


def _assert_xy(points: Optional[np.ndarray], check_finite: bool = False) -> None:
    """
    Validate that points array is (N, 2) with optional finite value checking.

    Raises
    ------
    ValueError
        If points array fails validation checks
    """
    if points is None:
        raise ValueError("No geometry provided (points is None).")

    if points.ndim != 2 or points.shape[1] != 2:
        raise ValueError(f"Expected (N, 2) array for points, got shape {points.shape}.")

    if check_finite and not np.isfinite(points).all():
        bad_indices = np.argwhere(~np.isfinite(points))
        raise ValueError(f"Non-finite coordinates detected at indices: {bad_indices.tolist()}")


def _is_exactly_closed(points: np.ndarray, tol: float) -> bool:
    """True if the polyline repeats its first vertex at the end (within tol)."""
    if points.shape[0] < 2:
        return False
    return np.allclose(points[0], points[-1], atol=tol, rtol=0.0)


def _as_open_ring(points, tol: float = 0.0) -> np.ndarray:
    """
    Return `points` as an (N, 2) float64 ring without a duplicated closing vertex.
    """
    P = np.asarray(points, dtype=np.float64)
    _assert_xy(P, check_finite=True)
    if P.shape[0] > 1 and _is_exactly_closed(P, tol):
        P = P[:-1]
    return P
