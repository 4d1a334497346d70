# -*- coding: utf-8 -*-
# Meshbridge/mesh/core/runner.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
Run a MeshGenerator (Gmsh by default) on a `.geo` script written by GMSHInterface.
"""

from typing import Dict, Optional, Union
from .generators.gmsh_generator import default_gmsh_generator
from .base import MeshGenerator


def mesh_geo(
        *,
        geo_path: str,
        msh_path: str,
        dim: int = 2,
        algo: Optional[int] = None,
        extra_cli: Optional[Dict[str, Union[int, float, str]]] = None,
        gmsh_bin: Optional[str] = None,
        msh_format: str = "msh2",
        mesh_generator: Optional[MeshGenerator] = None,
) -> str:
    """
    Mesh a `.geo` file and write the `.msh` to disk.

    Parameters
    ----------
    geo_path : str
        Input Gmsh script.
    msh_path : str
        Destination mesh file.
    dim : int, optional
        Mesh dimension flag passed to Gmsh (default 2).
    algo : int, optional
        Forces `Mesh.Algorithm` (e.g. 5 Delaunay, 6 Frontal-Delaunay).
    extra_cli : dict, optional
        Extra options passed as `-setnumber` (numeric) or `-setstring`.
    gmsh_bin : str, optional
        Explicit Gmsh executable; otherwise GMSH_BIN, then PATH.
    msh_format : str, optional
        Output format; only "msh2" is supported.
    mesh_generator : MeshGenerator, optional
        Generator to use instead of the default GmshGenerator.

    Returns
    -------
    str
        `msh_path`, once the mesh has been written.

    Raises
    ------
    FileNotFoundError
        If `geo_path` does not exist.
    ValueError
        If `msh_format` is not "msh2".
    RuntimeError
        If the generator fails or writes a missing/too-small mesh.
    """
    generator = mesh_generator or default_gmsh_generator

    settings = {
        "dim": dim,
        "algo": algo,
        "extra_cli": extra_cli,
        "gmsh_bin": gmsh_bin,
        "msh_format": msh_format,
    }
    settings = {k: v for k, v in settings.items() if v is not None}

    return generator.generate_mesh(geo_path, msh_path, settings)
