# -*- coding: utf-8 -*-
# Meshbridge/mesh/errors.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose
-------
Typed exceptions for the mesh layer: eager configuration checks and `.msh` parsing.

Main Tasks
----------
    1. Define MeshError(message, context) rendering a compact context suffix.
    2. Provide ConfigurationError (write settings / density parameters) and
       MeshReadError (malformed mesh content, always carries the offending line).

Notes
-----
- Write-path failures are reported as WriteStatus codes, not exceptions; see
  mesh.core.writer.
"""

from geometry.errors import format_context

__all__ = [
    "MeshError",
    "ConfigurationError",
    "MeshReadError",
]


class MeshError(Exception):
    """
    Base class for mesh-layer errors.

    Parameters
    ----------
    message : str
        Human-readable error.
    context : dict, optional
        Extra fields appended in the string form (e.g., {"line": 12}).
    """
    def __init__(self, message, context=None):
        self.context = dict(context) if context else None
        super().__init__(message)

    def __str__(self):
        return super().__str__() + format_context(self.context)


class ConfigurationError(MeshError, ValueError):
    """
    Invalid write settings detected at construction time:
      - empty geometry selection
      - non-positive densities, min_density > max_density
      - leaf capacity < 1, unknown keys or algorithms
    """

    def __str__(self):
        return MeshError.__str__(self)


class MeshReadError(MeshError):
    """
    Malformed mesh file content: bad header, truncated records, unknown element types,
    references to undeclared nodes. `context["line"]` is the 1-based line number.
    """

    @property
    def line(self):
        return (self.context or {}).get("line")
