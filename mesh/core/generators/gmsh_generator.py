# -*- coding: utf-8 -*-
# Meshbridge/mesh/core/generators/gmsh_generator.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
MeshGenerator backed by the Gmsh command-line binary. Runs Gmsh on a `.geo` script written
by GMSHInterface and checks the produced legacy ASCII `.msh` (format 2.2).

Main Tasks:
-----------
    1. Locate the Gmsh binary (explicit path, GMSH_BIN, then PATH).
    2. Build the CLI: `gmsh -<dim> <geo> -o <msh> -format msh2 [options] -save -nopopup -v 2`.
    3. Raise with the captured output when Gmsh fails or writes an empty mesh.

Notes:
------
- Only "msh2" is accepted: the reader parses the 2.x text format.
- The call blocks until Gmsh exits.
"""

import logging
import os
import subprocess
from typing import Any, Dict, List
from mesh.tools.utils import resolve_executable
from ..base import MeshGenerator

logger = logging.getLogger(__name__)

MIN_MESH_BYTES = 200
SUPPORTED_FORMATS = ("msh2",)


class GmshGenerator(MeshGenerator):
    """Runs the Gmsh binary as a subprocess."""

    def build_command(self, input_path: str, output_path: str, settings: Dict[str, Any]) -> List[str]:
        """
        Assemble the Gmsh command line.

        Raises
        ------
        ValueError
            If `msh_format` is not "msh2".
        RuntimeError
            If the Gmsh binary cannot be found.
        """
        dim = settings.get("dim", 2)
        algo = settings.get("algo")
        extra_cli = settings.get("extra_cli")
        msh_format = settings.get("msh_format", "msh2")

        fmt = (msh_format or "msh2").lower()
        if fmt not in SUPPORTED_FORMATS:
            raise ValueError(f"msh_format must be 'msh2' (got '{msh_format}')")

        gmsh = resolve_executable("gmsh", settings.get("gmsh_bin"))

        cmd: List[str] = [gmsh, f"-{abs(int(dim))}", input_path, "-o", output_path, "-format", fmt]
        if algo is not None:
            cmd += ["-setnumber", "Mesh.Algorithm", str(int(algo))]
        if extra_cli:
            for k, v in extra_cli.items():
                if isinstance(v, (int, float)):
                    cmd += ["-setnumber", str(k), str(v)]
                else:
                    cmd += ["-setstring", str(k), str(v)]
        cmd += ["-save", "-nopopup", "-v", "2"]
        return cmd

    def generate_mesh(self, input_path: str, output_path: str,
                      settings: Dict[str, Any]) -> str:
        """
        Run Gmsh on `input_path` and write `output_path`.

        Raises
        ------
        FileNotFoundError
            If `input_path` does not exist.
        ValueError
            If `msh_format` is not "msh2".
        RuntimeError
            If Gmsh returns a non-zero code, or the mesh file is missing or too small.
        """
        if not os.path.exists(input_path):
            raise FileNotFoundError(f"Geometry file not found: {input_path}")

        out_dir = os.path.dirname(os.path.abspath(output_path))
        if out_dir and not os.path.exists(out_dir):
            os.makedirs(out_dir, exist_ok=True)

        cmd = self.build_command(input_path, output_path, settings)
        logger.info("[GmshGenerator] Running: %s", " ".join(cmd))

        proc = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, universal_newlines=True)
        if proc.returncode != 0:
            msg = (
                "Gmsh failed (code {}):\n"
                "CMD: {}\n"
                "STDOUT:\n{}\n"
                "STDERR:\n{}"
            ).format(proc.returncode, " ".join(cmd), proc.stdout, proc.stderr)
            raise RuntimeError(msg)

        try:
            size = os.path.getsize(output_path)
        except OSError as e:
            raise RuntimeError(f"Gmsh reported success but mesh file not found: {output_path}") from e

        if size < MIN_MESH_BYTES:
            raise RuntimeError(
                f"Gmsh wrote an unexpectedly small mesh ({size} bytes). "
                "Usually no surface was meshed; inspect the Plane Surface statements in the .geo."
            )
        return output_path


default_gmsh_generator = GmshGenerator()
