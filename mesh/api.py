# -*- coding: utf-8 -*-
# Meshbridge/mesh/api.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose
-------
High-level API tying the pieces together: write the `.geo` script for geometries held in a
GeometryStore, run Gmsh on it, and read the MSH 2.x result back into a Mesh.

Main Tasks
----------
    1. Build a GMSHInterface from WriteSettings (or a plain dict) and write `geo_path`.
    2. Turn a non-OK WriteStatus into a RuntimeError carrying `last_error`.
    3. Call the runner (`mesh_geo`) with MSH 2 output.
    4. Check and read the `.msh`; optionally export it through meshio.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union
from geometry.store import GeometryStore
from mesh.config import WriteSettings, settings_from_dict
from mesh.core import GMSHInterface, MeshGenerator, WriteStatus, mesh_geo
from mesh.io import is_gmsh_mesh_file, read_gmsh_mesh_file, write_mesh
from mesh.model import Mesh

logger = logging.getLogger(__name__)


def build_mesh(
    store: GeometryStore,
    settings: Union[WriteSettings, Mapping[str, Any]],
    geo_path: str = "domain.geo",
    msh_path: str = "domain.msh",
    gmsh_algo: Optional[int] = None,
    *,
    gmsh_extra_cli: Optional[Dict[str, Union[int, float, str]]] = None,
    gmsh_bin: Optional[str] = None,
    mesh_generator: Optional[MeshGenerator] = None,
    condense_materials: bool = False,
    export_path: Optional[str] = None,
) -> Mesh:
    """
    Write, mesh and read back the selected geometries.

    Parameters
    ----------
    store : GeometryStore
        Holds the geometries named in `settings.geometries`.
    settings : WriteSettings or dict
        Write settings; a dict is merged over `mesh.config.DEFAULTS`.
    geo_path, msh_path : str
        Paths of the intermediate script and of the generated mesh.
    gmsh_algo : int, optional
        Forces `Mesh.Algorithm`.
    gmsh_extra_cli : dict, optional
        Extra Gmsh options ({"Mesh.Option": value}).
    gmsh_bin : str, optional
        Explicit Gmsh executable.
    mesh_generator : MeshGenerator, optional
        Replaces the default GmshGenerator.
    condense_materials : bool
        Renumber material IDs onto 0..k-1 after reading.
    export_path : str, optional
        Also write the mesh through meshio (format from extension).

    Returns
    -------
    Mesh
        The mesh read back from `msh_path`.

    Raises
    ------
    ConfigurationError
        Invalid settings.
    RuntimeError
        The script could not be written, or Gmsh failed.
    MeshReadError
        The generated mesh is malformed.
    """
    if not isinstance(settings, WriteSettings):
        settings = settings_from_dict(settings)

    interface = GMSHInterface(store, settings)
    status = interface.write_file(geo_path)
    if status is not WriteStatus.OK:
        raise RuntimeError(
            f"Writing '{geo_path}' failed with {status.name}: {interface.last_error}"
        )
    logger.info("[build_mesh] .geo written to %s", geo_path)

    if gmsh_extra_cli:
        logger.info("[build_mesh] Gmsh options: %s", gmsh_extra_cli)

    mesh_geo(
        geo_path=geo_path,
        msh_path=msh_path,
        dim=2,
        algo=gmsh_algo,
        extra_cli=gmsh_extra_cli,
        gmsh_bin=gmsh_bin,
        msh_format="msh2",
        mesh_generator=mesh_generator,
    )
    logger.info("[build_mesh] .msh written to %s", msh_path)

    if not is_gmsh_mesh_file(msh_path):
        raise RuntimeError(f"'{msh_path}' is not a Gmsh mesh file.")
    mesh = read_gmsh_mesh_file(msh_path)

    if condense_materials:
        mapping = mesh.condense_material_ids()
        logger.info("[build_mesh] Material IDs condensed: %s", mapping)
    if export_path:
        write_mesh(mesh, export_path)
    return mesh
