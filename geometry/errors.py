# -*- coding: utf-8 -*-
# Meshbridge/geometry/errors.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose
-------
Typed exceptions for the geometry layer with compact, context-aware messages, so that
topological and numeric failures can be told apart by the write pipeline.

Main Tasks
----------
    1. Define GeometryError(message, context) with a compact context suffix in __str__.
    2. Provide typed subclasses: TopologyError, DegenerateGeometryError, GeometryNotFoundError.
    3. Expose `format_context` so the mesh layer renders its errors the same way.

Notes
-----
- Context is optional; long values are truncated for readability.
"""

__all__ = [
    "format_context",
    "GeometryError",
    "TopologyError",
    "DegenerateGeometryError",
    "GeometryNotFoundError",
]


def format_context(ctx):
    """Return a compact ' | key1=val1, key2=val2' string or '' if no context."""
    if not ctx:
        return ""
    parts = []
    for k in sorted(ctx.keys()):
        sv = repr(ctx[k])
        if len(sv) > 120:
            sv = sv[:117] + "..."
        parts.append("{}={}".format(k, sv))
    return " | " + ", ".join(parts)


class GeometryError(Exception):
    """
    Base class for all geometry-related errors.

    Parameters
    ----------
    message : str
        Human-readable error.
    context : dict, optional
        Extra fields appended in the string form (e.g., {"polygons": (0, 3)}).
    """
    def __init__(self, message, context=None):
        self.context = dict(context) if context else None
        super().__init__(message)

    def __str__(self):
        return super().__str__() + format_context(self.context)


class TopologyError(GeometryError):
    """
    Polygon containment could not be resolved into a strict nesting:
      - two polygons overlap without one containing the other
      - two polygons contain each other (identical rings)
      - a ring is degenerate (fewer than 3 distinct vertices, zero area)
    """


class DegenerateGeometryError(GeometryError):
    """
    Numeric degeneracy of a point set:
      - all points identical or collinear (no best-fit plane)
      - zero spatial extent where a bounding square is needed
    """


class GeometryNotFoundError(GeometryError, KeyError):
    """A geometry name was requested that the store does not hold."""

    def __str__(self):
        return GeometryError.__str__(self)
