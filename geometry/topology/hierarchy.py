# -*- coding: utf-8 -*-
# Meshbridge/geometry/topology/hierarchy.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
Reconstruct the containment forest of a flat set of polygons: which polygon is a hole
inside which other polygon. Free stations and open polylines are attached to the
innermost polygon enclosing them.

Main Tasks:
-----------
    1. Pairwise classification of polygons (contains / disjoint / overlapping).
    2. Immediate-parent selection (the deepest container), with chain verification.
    3. Attachment of free points and polylines to the deepest enclosing polygon.

Notes:
------
- Nodes live in an arena (`PolygonHierarchy.nodes`) addressed by polygon index; parents
  and children are indices, never object references.
- A vertex lying on an edge (within `tol`) counts as inside. Edges are classified through
  `edge_samples`, so rings that only touch at vertices still reveal interior overlap.
- A polyline belongs to the deepest polygon that holds it without crossing the ring or
  entering one of its holes; a polyline through a hole is left free.
- Overlapping and mutually containing polygons raise TopologyError; the write pipeline
  treats this as fatal.
- Cost is O(N^2 * M) for N polygons of M vertices, fine for tens of polygons.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence
import numpy as np
from ..errors import TopologyError
from ._validation import _as_open_ring
from .loop import (
    INSIDE,
    ON_BOUNDARY,
    bounding_box,
    edge_samples,
    locate_points,
    path_crosses_ring,
    rings_cross,
    signed_area,
)


@dataclass
class HierarchyNode:
    polygon: int
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    polylines: List[int] = field(default_factory=list)
    stations: List[int] = field(default_factory=list)
    depth: int = 0


@dataclass
class PolygonHierarchy:
    nodes: List[HierarchyNode]
    roots: List[int]
    free_polylines: List[int] = field(default_factory=list)
    free_stations: List[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.nodes)

    def preorder(self) -> Iterator[int]:
        """Depth-first node indices, roots in ascending order, children in ascending order."""
        stack = list(reversed(self.roots))
        while stack:
            idx = stack.pop()
            yield idx
            stack.extend(reversed(self.nodes[idx].children))

    def ancestors(self, idx: int) -> List[int]:
        out = []
        parent = self.nodes[idx].parent
        while parent is not None:
            out.append(parent)
            parent = self.nodes[parent].parent
        return out


def default_tolerance(rings: Sequence[np.ndarray]) -> float:
    """1e-9 of the bounding-box diagonal of all rings (floored at 1e-12)."""
    if not rings:
        return 1e-12
    bb = bounding_box(rings)
    return max(1e-9 * float(np.hypot(*(bb[1] - bb[0]))), 1e-12)


def build_hierarchy(
    rings: Sequence[np.ndarray],
    polylines: Sequence[np.ndarray] = (),
    stations: Optional[np.ndarray] = None,
    tol: Optional[float] = None,
) -> PolygonHierarchy:
    """
    Build the polygon containment forest.

    Parameters
    ----------
    rings : sequence of (M_i, 2) arrays
        Polygon rings (open or explicitly closed), indexed by position.
    polylines : sequence of (K_j, 2) arrays, optional
        Open polylines to attach to their innermost enclosing polygon.
    stations : (S, 2) array, optional
        Free points to attach to their innermost enclosing polygon.
    tol : float, optional
        On-edge tolerance. Defaults to `default_tolerance(rings)`.

    Returns
    -------
    PolygonHierarchy

    Raises
    ------
    TopologyError
        Degenerate ring, overlapping polygons, or cyclic (mutual) containment.
    """
    R = [_as_open_ring(r) for r in rings]
    if tol is None:
        tol = default_tolerance(R)
    n = len(R)

    for i, ring in enumerate(R):
        if len(np.unique(ring, axis=0)) < 3:
            raise TopologyError("Polygon has fewer than 3 distinct vertices.", {"polygon": i})
        if abs(signed_area(ring)) <= tol * tol:
            raise TopologyError("Polygon has zero area.", {"polygon": i})

    # contains[i, j] == polygon j lies inside polygon i
    contains = np.zeros((n, n), dtype=bool)
    for i in range(n):
        for j in range(i + 1, n):
            crossing = rings_cross(R[i], R[j], tol)
            loc_j_in_i = locate_points(edge_samples(R[j], R[i], tol=tol), R[i], tol)
            loc_i_in_j = locate_points(edge_samples(R[i], R[j], tol=tol), R[j], tol)

            j_in_i = bool((loc_j_in_i >= ON_BOUNDARY).all()) and not crossing
            i_in_j = bool((loc_i_in_j >= ON_BOUNDARY).all()) and not crossing

            if j_in_i and i_in_j:
                raise TopologyError(
                    "Cyclic containment: polygons contain each other.", {"polygons": (i, j)}
                )
            if not (j_in_i or i_in_j):
                if crossing or (loc_j_in_i == INSIDE).any() or (loc_i_in_j == INSIDE).any():
                    raise TopologyError(
                        "Polygons overlap without nesting.", {"polygons": (i, j)}
                    )
            contains[i, j] = j_in_i
            contains[j, i] = i_in_j

    n_containers = contains.sum(axis=0)
    nodes = [HierarchyNode(polygon=i, depth=int(n_containers[i])) for i in range(n)]
    roots: List[int] = []
    for j in range(n):
        containers = np.flatnonzero(contains[:, j])
        if containers.size == 0:
            roots.append(j)
            continue
        # Immediate parent: the container that is itself inside all other containers.
        parent = int(containers[np.argmax(n_containers[containers])])
        if n_containers[parent] != containers.size - 1:
            raise TopologyError(
                "Containers do not form a nesting chain.",
                {"polygon": j, "containers": tuple(int(c) for c in containers)},
            )
        nodes[j].parent = parent
        nodes[parent].children.append(j)

    hierarchy = PolygonHierarchy(nodes=nodes, roots=roots)

    for k, ply in enumerate(polylines):
        owner = _polyline_owner(np.asarray(ply, dtype=float)[:, :2], R, nodes, tol)
        if owner is None:
            hierarchy.free_polylines.append(k)
        else:
            nodes[owner].polylines.append(k)

    if stations is not None and len(stations) > 0:
        S = np.atleast_2d(np.asarray(stations, dtype=float))
        for k in range(S.shape[0]):
            owner = _innermost(S[k:k + 1, :2], R, nodes, tol)
            if owner is None:
                hierarchy.free_stations.append(k)
            else:
                nodes[owner].stations.append(k)

    return hierarchy


def _innermost(points: np.ndarray, rings, nodes, tol) -> Optional[int]:
    """Deepest polygon containing every point in `points`, or None."""
    best = None
    for i, ring in enumerate(rings):
        if (locate_points(points, ring, tol) >= ON_BOUNDARY).all():
            if best is None or nodes[i].depth > nodes[best].depth:
                best = i
    return best


def _polyline_owner(path: np.ndarray, rings, nodes, tol) -> Optional[int]:
    """
    Polygon whose surface holds the whole polyline: inside or on its ring, never crossing
    it, and never entering or crossing one of its holes. None if no polygon qualifies.
    """
    best = None
    for i, ring in enumerate(rings):
        if path_crosses_ring(path, ring, tol):
            continue
        if not (locate_points(edge_samples(path, ring, closed=False, tol=tol), ring, tol)
                >= ON_BOUNDARY).all():
            continue
        if any(_enters(path, rings[c], tol) for c in nodes[i].children):
            continue
        if best is None or nodes[i].depth > nodes[best].depth:
            best = i
    return best


def _enters(path: np.ndarray, ring: np.ndarray, tol: float) -> bool:
    if path_crosses_ring(path, ring, tol):
        return True
    samples = edge_samples(path, ring, closed=False, tol=tol)
    return bool((locate_points(samples, ring, tol) == INSIDE).any())
