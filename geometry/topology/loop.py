# -*- coding: utf-8 -*-
# Meshbridge/geometry/topology/loop.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
This module owns *ring-level* predicates used by the polygon hierarchy:
   - Signed area and orientation (CW/CCW),
   - Three-way point location against a ring (outside / on boundary / inside),
   - Strict edge-crossing detection between two rings, or a polyline and a ring,
   - Boundary sampling (vertices plus split edge midpoints) for whole-edge classification.

Notes:
------------
   - Pure NumPy; no logging, plotting, or file I/O.
   - Rings are (N, 2) arrays; a duplicated closing vertex is accepted and ignored.
   - Points within `tol` of an edge are reported as ON the boundary. Callers that need a
     binary answer treat ON as inside.
"""

import numpy as np
from ._validation import _assert_xy, _as_open_ring

OUTSIDE = -1
ON_BOUNDARY = 0
INSIDE = 1


# -----------------------
# Area / orientation
# -----------------------
def signed_area(ring: np.ndarray) -> float:
    """
    Shoelace signed area of a polygonal ring.

    Conventions
    -----------
    - Positive area => counter-clockwise (CCW) orientation.
    - The ring is implicitly closed (last vertex connects back to the first).

    Raises
    ------
    ValueError
        If input is not (N, 2) or N < 3.
    """
    P = _as_open_ring(ring)
    if P.shape[0] < 3:
        raise ValueError("Need at least 3 points to compute area.")
    x = P[:, 0]
    y = P[:, 1]
    area2 = np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))
    return 0.5 * float(area2)


def orientation(ring: np.ndarray) -> str:
    """
    Return "CCW" if the ring is counter-clockwise, else "CW".

    Zero area (degenerate rings) is reported as "CW" by convention.
    """
    return "CCW" if signed_area(ring) > 0.0 else "CW"


# -----------------------
# Point location
# -----------------------
def locate_points(points: np.ndarray, ring: np.ndarray, tol: float = 1e-12) -> np.ndarray:
    """
    Classify each point against a ring using the crossing-number rule.

    Parameters
    ----------
    points : np.ndarray
        (K, 2) query points.
    ring : np.ndarray
        (N, 2) polygon ring (open or explicitly closed).
    tol : float
        Absolute distance under which a point counts as lying on an edge.

    Returns
    -------
    np.ndarray
        (K,) int array with OUTSIDE (-1), ON_BOUNDARY (0) or INSIDE (1).
    """
    Q = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    _assert_xy(Q)
    A = _as_open_ring(ring)
    B = np.roll(A, -1, axis=0)

    px = Q[:, 0][:, None]
    py = Q[:, 1][:, None]
    ax, ay = A[:, 0][None, :], A[:, 1][None, :]
    bx, by = B[:, 0][None, :], B[:, 1][None, :]

    # --- on-edge test: distance from point to each segment ---
    ex, ey = bx - ax, by - ay
    len2 = ex * ex + ey * ey
    with np.errstate(invalid="ignore", divide="ignore"):
        t = ((px - ax) * ex + (py - ay) * ey) / len2
    t = np.where(len2 > 0.0, np.clip(t, 0.0, 1.0), 0.0)
    dx = ax + t * ex - px
    dy = ay + t * ey - py
    on_edge = (dx * dx + dy * dy <= tol * tol).any(axis=1)

    # --- crossing number (half-open rule on y) ---
    straddle = (ay > py) != (by > py)
    with np.errstate(invalid="ignore", divide="ignore"):
        x_cross = ax + (py - ay) * ex / ey
    crossings = (straddle & (px < x_cross)).sum(axis=1)
    inside = (crossings % 2) == 1

    out = np.full(Q.shape[0], OUTSIDE, dtype=int)
    out[inside] = INSIDE
    out[on_edge] = ON_BOUNDARY
    return out


def point_in_ring(point, ring: np.ndarray, tol: float = 1e-12) -> bool:
    """Binary containment: ON_BOUNDARY counts as inside."""
    return bool(locate_points(np.asarray(point, dtype=float)[:2], ring, tol)[0] >= ON_BOUNDARY)


# -----------------------
# Edge crossings
# -----------------------
def _edges(points: np.ndarray, closed: bool):
    P0 = points if closed else points[:-1]
    P1 = np.roll(points, -1, axis=0) if closed else points[1:]
    return P0, P1


def _segments_cross(A0, A1, B0, B1, tol: float) -> bool:
    """True if some segment A0[k]->A1[k] properly crosses some segment B0[m]->B1[m]."""

    def _orient(p, q, r):
        # sign of cross((q - p), (r - p)), broadcast over (na, nb)
        return (q[..., 0] - p[..., 0]) * (r[..., 1] - p[..., 1]) - \
               (q[..., 1] - p[..., 1]) * (r[..., 0] - p[..., 0])

    a0 = A0[:, None, :]
    a1 = A1[:, None, :]
    b0 = B0[None, :, :]
    b1 = B1[None, :, :]

    # scale tolerance by edge length so it behaves like a distance
    la = np.hypot(*(A1 - A0).T)[:, None]
    lb = np.hypot(*(B1 - B0).T)[None, :]

    o1 = _orient(a0, a1, b0) / np.where(la > 0, la, 1.0)
    o2 = _orient(a0, a1, b1) / np.where(la > 0, la, 1.0)
    o3 = _orient(b0, b1, a0) / np.where(lb > 0, lb, 1.0)
    o4 = _orient(b0, b1, a1) / np.where(lb > 0, lb, 1.0)

    cross_ab = ((o1 > tol) & (o2 < -tol)) | ((o1 < -tol) & (o2 > tol))
    cross_ba = ((o3 > tol) & (o4 < -tol)) | ((o3 < -tol) & (o4 > tol))
    return bool((cross_ab & cross_ba).any())


def rings_cross(ring_a: np.ndarray, ring_b: np.ndarray, tol: float = 1e-12) -> bool:
    """
    True if some edge of `ring_a` properly crosses some edge of `ring_b`.

    Touching (shared vertices, collinear overlap, T-junctions within `tol`) is NOT a
    crossing; only transversal intersections in the interior of both edges count.
    """
    A0, A1 = _edges(_as_open_ring(ring_a), closed=True)
    B0, B1 = _edges(_as_open_ring(ring_b), closed=True)
    return _segments_cross(A0, A1, B0, B1, tol)


def path_crosses_ring(path: np.ndarray, ring: np.ndarray, tol: float = 1e-12) -> bool:
    """Same test as `rings_cross` for an open polyline against a ring."""
    P = np.asarray(path, dtype=np.float64)[:, :2]
    _assert_xy(P)
    if P.shape[0] < 2:
        return False
    A0, A1 = _edges(P, closed=False)
    B0, B1 = _edges(_as_open_ring(ring), closed=True)
    return _segments_cross(A0, A1, B0, B1, tol)


def edge_samples(points: np.ndarray, ring: np.ndarray, closed: bool = True,
                 tol: float = 1e-12) -> np.ndarray:
    """
    Vertices of `points` plus one midpoint per edge piece, where edges are split at every
    vertex of `ring` lying on them.

    If the two boundaries do not properly cross, each piece lies entirely inside, outside
    or on `ring`, so locating the samples classifies the whole path.
    """
    P = _as_open_ring(points) if closed else np.asarray(points, dtype=np.float64)[:, :2]
    V = _as_open_ring(ring)
    P0, P1 = _edges(P, closed)
    samples = [P]
    for a, b in zip(P0, P1):
        e = b - a
        len2 = float(e @ e)
        if len2 == 0.0:
            continue
        t = (V - a) @ e / len2
        foot = a + t[:, None] * e
        on = (t > 0.0) & (t < 1.0) & (np.hypot(*(V - foot).T) <= tol)
        cuts = np.concatenate(([0.0], np.sort(t[on]), [1.0]))
        mids = 0.5 * (cuts[:-1] + cuts[1:])
        samples.append(a + mids[:, None] * e)
    return np.vstack(samples)


def bounding_box(rings) -> np.ndarray:
    """Return [[xmin, ymin], [xmax, ymax]] over a sequence of rings."""
    stacked = np.vstack([np.asarray(r, dtype=float)[:, :2] for r in rings])
    return np.vstack((stacked.min(axis=0), stacked.max(axis=0)))
