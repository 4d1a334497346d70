# -*- coding: utf-8 -*-
# Meshbridge/post/plot_geo.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
Diagnostic plot of the polygon forest on the reduced plane: polygons coloured by nesting
depth, attached polylines and stations, and the adaptive Steiner points when a strategy is
given. Useful to check containment before handing the script to Gmsh.
"""

from typing import Optional, Sequence
import numpy as np
from geometry.ops.reduction import reduce_points
from geometry.primitives import Polygon, Polyline, coords_array
from geometry.topology import PolygonHierarchy, build_hierarchy
from .plot_mesh import _finish, _get_pyplot


def plot_hierarchy(
    points: np.ndarray,
    polygons: Sequence[Polygon],
    hierarchy: PolygonHierarchy,
    *,
    polylines: Sequence[Polyline] = (),
    stations: Optional[np.ndarray] = None,
    steiner_points: Optional[Sequence] = None,
    title: str = "Polygon hierarchy",
    show: bool = True,
    save_path: Optional[str] = None,
    ax=None,
):
    """
    Parameters
    ----------
    points : (N, 2|3) array
        Reduced coordinates indexed by the polygon/polyline point ids.
    polygons : sequence of Polygon
        Polygons indexed like `hierarchy.nodes`.
    hierarchy : PolygonHierarchy
        Containment forest; depth selects the colour.
    polylines, stations, steiner_points : optional
        Extra features drawn on top.
    show, save_path, ax
        Display, save, or draw on an existing Axes.

    Returns
    -------
    matplotlib.axes.Axes
    """
    P = np.asarray(points, dtype=float)
    if P.ndim != 2 or P.shape[1] < 2:
        raise ValueError("Expected (N,2) or (N,3) array for points.")
    if len(polygons) != len(hierarchy):
        raise ValueError("polygons and hierarchy sizes differ.")

    plt = _get_pyplot()
    created_fig = ax is None
    if created_fig:
        fig = plt.figure(figsize=(8, 8))
        ax = fig.add_subplot(111)

    cmap = plt.get_cmap("viridis")
    max_depth = max((n.depth for n in hierarchy.nodes), default=0)
    for p in hierarchy.preorder():
        node = hierarchy.nodes[p]
        ring = polygons[p].ring(P)
        closed = np.vstack((ring, ring[:1]))
        color = cmap(node.depth / max(max_depth, 1))
        ax.fill(ring[:, 0], ring[:, 1], color=color, alpha=0.25, lw=0)
        ax.plot(closed[:, 0], closed[:, 1], "-", color=color, lw=1.5, label="depth {}".format(node.depth))
        cx, cy = ring.mean(axis=0)
        ax.text(cx, cy, str(p), fontsize=8, ha="center", va="center")

    for ply in polylines:
        xy = P[list(ply.point_ids), :2]
        ax.plot(xy[:, 0], xy[:, 1], "k--", lw=1.0)

    if stations is not None and len(stations):
        S = np.atleast_2d(np.asarray(stations, dtype=float))
        ax.plot(S[:, 0], S[:, 1], "r^", ms=6, label="stations")

    if steiner_points:
        T = np.asarray(steiner_points, dtype=float).reshape(-1, 2)
        ax.plot(T[:, 0], T[:, 1], ".", color="tab:orange", ms=3, label="steiner")

    ax.set_aspect("equal", adjustable="box")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title(title)
    ax.grid(True)
    handles, labels = ax.get_legend_handles_labels()
    if handles:
        by_label = dict(zip(labels, handles))
        ax.legend(by_label.values(), by_label.keys(), fontsize=8)

    if created_fig:
        _finish(plt, ax.figure, show, save_path)
    elif save_path:
        ax.figure.savefig(save_path, dpi=300)
    return ax


def plot_geometry(store, name: str, *, rotate: bool = False, strategy=None, **kwargs):
    """
    Reduce geometry `name` from `store`, build its hierarchy and plot it.

    `strategy` (a MeshDensityStrategy) is initialized on the reduced points and its Steiner
    points are drawn.
    """
    group = store.get(name)
    reduced, reduction = reduce_points(coords_array(group.points), rotate)
    polygons = [Polygon.from_polyline(p) for p in group.polylines if p.is_closed]
    open_plys = [p for p in group.polylines if not p.is_closed]
    stations = reduction.apply(coords_array(group.stations))[:, :2] if group.stations else None
    hierarchy = build_hierarchy([poly.ring(reduced) for poly in polygons],
                                [reduced[list(p.point_ids), :2] for p in open_plys], stations)
    steiner = None
    if strategy is not None:
        strategy.initialize(reduced[:, :2])
        steiner = strategy.steiner_points()
    kwargs.setdefault("title", "Geometry '{}'".format(name))
    return plot_hierarchy(reduced, polygons, hierarchy, polylines=open_plys,
                          stations=stations, steiner_points=steiner, **kwargs)
