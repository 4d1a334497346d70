# -*- coding: utf-8 -*-
# Meshbridge/geometry/ops/reduction.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
Reduce 3D site geometry to the x-y plane so that a planar mesh generator can consume it,
and keep the transform needed to bring the points back.

Two modes:
   - rotate:  fit the best plane through the points and rotate its normal onto +z.
              The inverse (transpose) restores the original coordinates exactly.
   - project: drop the elevation (orthogonal projection onto z = 0). The inverse is the
              identity; elevation is NOT recoverable.

Notes:
------
   - Pure NumPy; no logging or file I/O.
   - Rotation is about the origin, so reduced points of a planar set share one z value.
   - Degenerate sets (fewer than 3 points, all identical, all collinear) raise
     DegenerateGeometryError instead of returning a singular transform.
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np
from ..errors import DegenerateGeometryError

_IDENTICAL_TOL = 1e-12
_COLLINEAR_TOL = 1e-10
_ORTHONORMAL_TOL = 1e-9


@dataclass(frozen=True)
class PlaneReduction:
    forward: np.ndarray
    inverse: np.ndarray
    rotated: bool

    def apply(self, points: np.ndarray) -> np.ndarray:
        """Map (N, 3) points onto the working plane."""
        return _as_xyz(points) @ self.forward.T

    def restore(self, points: np.ndarray) -> np.ndarray:
        """Map (N, 3) reduced points back (exact for rotation, z stays 0 for projection)."""
        return _as_xyz(points) @ self.inverse.T


def fit_plane(points: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Best-fit plane through a point cloud.

    Returns
    -------
    normal : np.ndarray
        Unit normal (3,), oriented so that normal[2] >= 0.
    centroid : np.ndarray
        Centroid (3,) of the points.

    Raises
    ------
    DegenerateGeometryError
        Fewer than 3 points, all points identical, or all points collinear.
    """
    P = _as_xyz(points)
    if P.shape[0] < 3:
        raise DegenerateGeometryError(
            "At least 3 points are needed to fit a plane.", {"n_points": int(P.shape[0])}
        )
    centroid = P.mean(axis=0)
    Q = P - centroid
    scale = max(float(np.abs(P).max()), 1.0)
    _, s, vt = np.linalg.svd(Q, full_matrices=False)
    if s[0] <= _IDENTICAL_TOL * scale:
        raise DegenerateGeometryError("All points are identical; no plane can be fitted.")
    if s[1] <= _COLLINEAR_TOL * s[0]:
        raise DegenerateGeometryError(
            "Points are collinear; no plane can be fitted.",
            {"singular_values": tuple(float(v) for v in s)},
        )
    normal = vt[-1]
    normal = normal / np.linalg.norm(normal)
    if normal[2] < 0.0:
        normal = -normal
    return normal, centroid


def rotation_to_xy(normal: np.ndarray) -> np.ndarray:
    """
    Rotation matrix R with R @ normal == e_z (Rodrigues formula).
    """
    n = np.asarray(normal, dtype=np.float64)
    n = n / np.linalg.norm(n)
    ez = np.array([0.0, 0.0, 1.0])
    v = np.cross(n, ez)
    s = float(np.linalg.norm(v))
    c = float(np.dot(n, ez))
    if s < 1e-15:
        if c > 0.0:
            return np.eye(3)
        # antiparallel: half-turn about x
        return np.diag([1.0, -1.0, -1.0])
    vx = np.array([
        [0.0, -v[2], v[1]],
        [v[2], 0.0, -v[0]],
        [-v[1], v[0], 0.0],
    ])
    return np.eye(3) + vx + vx @ vx * ((1.0 - c) / (s * s))


def compute_rotation(points: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Forward rotation taking the best-fit plane of `points` onto the x-y plane, and its inverse.

    Raises
    ------
    DegenerateGeometryError
        Degenerate point set, or a numerically non-orthonormal result.
    """
    normal, _ = fit_plane(points)
    forward = rotation_to_xy(normal)
    inverse = forward.T.copy()
    if not np.allclose(forward @ inverse, np.eye(3), atol=_ORTHONORMAL_TOL, rtol=0.0):
        raise DegenerateGeometryError("Rotation matrix is not orthonormal.")
    return forward, inverse


def rotate_to_xy(points: np.ndarray) -> PlaneReduction:
    forward, inverse = compute_rotation(points)
    return PlaneReduction(forward=forward, inverse=inverse, rotated=True)


def project_to_xy() -> PlaneReduction:
    return PlaneReduction(forward=np.diag([1.0, 1.0, 0.0]), inverse=np.eye(3), rotated=False)


def reduce_points(points: np.ndarray, rotate: bool) -> Tuple[np.ndarray, PlaneReduction]:
    """
    Apply rotation (rotate=True) or projection (rotate=False) to (N, 3) points.

    Returns
    -------
    reduced : np.ndarray
        (N, 3) points on the working plane.
    reduction : PlaneReduction
        The transform, for restoring coordinates before emission.
    """
    reduction = rotate_to_xy(points) if rotate else project_to_xy()
    return reduction.apply(points), reduction


def _as_xyz(points) -> np.ndarray:
    P = np.asarray(points, dtype=np.float64)
    if P.ndim == 1:
        P = P.reshape(1, -1)
    if P.ndim != 2 or P.shape[1] not in (2, 3):
        raise ValueError(f"Expected (N, 3) array for points, got shape {P.shape}.")
    if P.shape[1] == 2:
        P = np.hstack((P, np.zeros((P.shape[0], 1))))
    return P
