# -*- coding: utf-8 -*-
# Meshbridge/post/plot_mesh.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose
-------
Quick visualization of a read-back Mesh using matplotlib.

Main Tasks
----------
    1) Import pyplot with a headless-safe backend (`_get_pyplot`).
    2) Draw element edges (lines, triangles, quads) as one LineCollection, optionally
       coloured by material ID, with the nodes as a light scatter.
"""

import os
import numpy as np
from mesh.model import ElementType


def _get_pyplot():
    """
    Import matplotlib.pyplot with a headless-safe backend if needed.

    Raises
    ------
    RuntimeError
        If matplotlib cannot be imported.
    """
    try:
        import matplotlib
        # Agg when DISPLAY is not set, to avoid GUI backend errors in headless/CI.
        if not os.environ.get("DISPLAY"):
            try:
                matplotlib.use("Agg")  # must be set before importing pyplot
            except (ValueError, ImportError):
                pass
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError("matplotlib is required for plotting: {}".format(e))


def _finish(plt, fig, show, save_path):
    if save_path:
        fig.savefig(save_path, dpi=300, bbox_inches="tight")
    backend = plt.get_backend().lower()
    if show and not backend.startswith("agg"):
        plt.show()
    else:
        plt.close(fig)


def _edge_segments(mesh):
    """(Nseg, 2, 2) xy segments and the material of the element each one belongs to."""
    points = mesh.points
    segs = []
    mats = []
    for etype in (ElementType.LINE, ElementType.TRIANGLE, ElementType.QUAD):
        conn = mesh.connectivity(etype)
        if conn.size == 0:
            continue
        materials = np.asarray([e.material for e in mesh.elements if e.type is etype])
        n = conn.shape[1]
        pairs = [(0, 1)] if n == 2 else [(k, (k + 1) % n) for k in range(n)]
        for a, b in pairs:
            segs.append(np.stack([points[conn[:, a], :2], points[conn[:, b], :2]], axis=1))
            mats.append(materials)
    if not segs:
        return np.zeros((0, 2, 2)), np.zeros(0, dtype=int)
    return np.concatenate(segs), np.concatenate(mats)


def plot_mesh(mesh, show=True, save_path=None, *, linewidth=0.3, alpha=1.0,
              color_by_material=True, node_size=0.0):
    """
    2D wireframe of the mesh elements.

    Parameters
    ----------
    mesh : Mesh
        Mesh read by `mesh.io.read_gmsh_mesh`.
    show : bool, optional
        Display the figure (ignored on non-GUI backends).
    save_path : str, optional
        If given, save the figure (PNG) to this path.
    linewidth, alpha : float, optional
        Edge style.
    color_by_material : bool, optional
        Colour edges by element material ID.
    node_size : float, optional
        Marker size of a node scatter; 0 disables it.

    Returns
    -------
    matplotlib.figure.Figure

    Raises
    ------
    ValueError
        If the mesh contains no line, triangle or quad elements.
    """
    from matplotlib.collections import LineCollection

    segs, mats = _edge_segments(mesh)
    if len(segs) == 0:
        raise ValueError("No line, triangle or quad elements found in the mesh.")

    plt = _get_pyplot()
    fig = plt.figure(figsize=(8, 8))
    ax = fig.add_subplot(111)

    if color_by_material and len(np.unique(mats)) > 1:
        lc = LineCollection(segs, cmap="tab10", linewidths=linewidth, alpha=alpha)
        lc.set_array(mats.astype(float))
        ax.add_collection(lc)
        fig.colorbar(lc, ax=ax, label="material")
    else:
        ax.add_collection(LineCollection(segs, colors="k", linewidths=linewidth, alpha=alpha))

    if node_size > 0.0:
        pts = mesh.points
        ax.scatter(pts[:, 0], pts[:, 1], s=node_size, c="tab:red", alpha=0.6)

    ax.autoscale()
    ax.set_aspect("equal", adjustable="box")
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.set_title("Mesh '{}': {} nodes, {} elements".format(mesh.name, mesh.n_nodes, mesh.n_elements))

    _finish(plt, fig, show, save_path)
    return fig
