# -*- coding: utf-8 -*-
# Meshbridge/main.py

"""
End-to-end driver:
  1) Load site geometry from JSON into a GeometryStore
  2) Preview the polygon hierarchy on the reduced plane
  3) Write the Gmsh .geo script (adaptive density, stations as constraints)
  4) Generate the mesh via Gmsh (MSH 2.2)
  5) Read the mesh back, plot it, export VTU
"""

import os
import logging
import sys

from geometry.loaders.json_loader import load_geometry_json
from mesh.api import build_mesh
from mesh.config import make_density_strategy, settings_from_dict
from mesh.io import write_mesh
from post.plot_geo import plot_geometry
from post.plot_mesh import plot_mesh


if __name__ == "__main__":
    # ------------------------------------------------------------------
    # 0) Logging
    # ------------------------------------------------------------------
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    log = logging.getLogger("Meshbridge")

    os.makedirs("mesh_out", exist_ok=True)
    os.makedirs("plots", exist_ok=True)

    # ------------------------------------------------------------------
    # 1) Load geometry
    # ------------------------------------------------------------------
    source = sys.argv[1] if len(sys.argv) > 1 else os.path.join("data", "site.json")
    store = load_geometry_json(source)

    # ------------------------------------------------------------------
    # 2) Settings + hierarchy preview
    #    density_algorithm: "fixed" uses mesh_density everywhere,
    #    "adaptive" derives sizes from point spacing (quad-tree).
    # ------------------------------------------------------------------
    settings = settings_from_dict({
        "geometries": tuple(store.names()),
        "density_algorithm": "adaptive",
        "min_density": 1.0,
        "max_density": 10.0,
        "max_points_per_leaf": 2,
        "include_stations_as_constraints": True,
        "rotate": False,
    })

    try:
        for name in store.names():
            plot_geometry(store, name, strategy=make_density_strategy(settings),
                          show=False, save_path=os.path.join("plots", f"{name}_hierarchy.png"))
    except Exception as e:
        log.warning("Skipping hierarchy preview: %s", e)

    # ------------------------------------------------------------------
    # 3-4) Write .geo, mesh with Gmsh, read back
    # ------------------------------------------------------------------
    geo_path = os.path.join("mesh_out", "site.geo")
    msh_path = os.path.join("mesh_out", "site.msh")
    try:
        mesh = build_mesh(
            store,
            settings,
            geo_path=geo_path,
            msh_path=msh_path,
            gmsh_algo=6,                # Frontal-Delaunay triangles
            condense_materials=True,
        )
    except RuntimeError as e:
        log.error("Meshing failed: %s", e)
        log.info("The .geo script (if written) is at %s; open it in Gmsh to inspect.", geo_path)
        sys.exit(1)

    log.info("Mesh '%s': %d nodes, %s", mesh.name, mesh.n_nodes, mesh.element_counts())

    # ------------------------------------------------------------------
    # 5) Plot + export
    # ------------------------------------------------------------------
    try:
        plot_mesh(mesh, show=False, save_path=os.path.join("plots", "site_mesh.png"))
    except Exception as e:
        log.warning("Skipping mesh plot: %s", e)

    vtu_path = write_mesh(mesh, os.path.join("mesh_out", "site.vtu"))
    print("Artifacts written:")
    print(" - GEO:", geo_path)
    print(" - MSH:", msh_path)
    print(" - VTU:", vtu_path)
