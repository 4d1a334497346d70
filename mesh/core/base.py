# -*- coding: utf-8 -*-
# Meshbridge/mesh/core/base.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
Abstract interface for external mesh generators so the runner can drive Gmsh or any other
tool that turns a geometry script into a mesh file.

Abstract Classes:
-----------------
- MeshGenerator: turns an input geometry file into an output mesh file.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class MeshGenerator(ABC):
    """
    Base interface of all mesh generators.
    """

    @abstractmethod
    def generate_mesh(self, input_path: str, output_path: str,
                      settings: Dict[str, Any]) -> str:
        """
        Execute mesh generation from input to output file.

        Parameters
        ----------
        input_path : str
            Path to the input geometry script (.geo).
        output_path : str
            Path for the output mesh file (.msh).
        settings : Dict[str, Any]
            Generator settings (dimension, algorithm, extra options, binary path).

        Returns
        -------
        str
            Path to the generated mesh file.
        """
