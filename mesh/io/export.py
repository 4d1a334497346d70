# -*- coding: utf-8 -*-
# Meshbridge/mesh/io/export.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose
-------
Hand a read-back Mesh to the rest of the ecosystem through meshio (VTU, XDMF, MSH4, ...).

Main Tasks
----------
    1. `to_meshio`: convert nodes, element blocks and material IDs to a meshio.Mesh.
    2. `write_mesh`: write the converted mesh to any format meshio supports.

Notes:
------
- Element blocks follow the first-appearance order of each element kind in the mesh.
- Material IDs are exported as the "gmsh:physical" and "material" cell data.
- Node order inside each element is kept as stored (triangles already reversed by the reader).
"""

import logging
from typing import Dict, List, Optional
import numpy as np
from mesh.model import ElementType, Mesh

logger = logging.getLogger(__name__)


def _import_meshio():
    try:
        import meshio  # lazy import
    except ImportError:
        raise ImportError("meshio is required for mesh export. Install via: pip install meshio")
    return meshio


def to_meshio(mesh: Mesh):
    """
    Convert `mesh` to a meshio.Mesh.

    Raises
    ------
    ValueError
        If the mesh has no elements.
    """
    meshio = _import_meshio()
    if mesh.n_elements == 0:
        raise ValueError(f"Mesh '{mesh.name}' has no elements to export.")

    order: List[ElementType] = []
    for e in mesh.elements:
        if e.type not in order:
            order.append(e.type)

    cells = []
    materials = []
    for etype in order:
        block = [e for e in mesh.elements if e.type is etype]
        cells.append((etype.label, np.asarray([e.nodes for e in block], dtype=np.int64)))
        materials.append(np.asarray([e.material for e in block], dtype=np.int64))

    field_data: Dict[str, np.ndarray] = {}
    for tag, name in sorted(mesh.physical_names.items()):
        dims = [e.type.dimension for e in mesh.elements if e.material == tag]
        if dims:
            field_data[name] = np.array([tag, max(dims)], dtype=np.int64)

    return meshio.Mesh(
        mesh.points,
        cells,
        cell_data={"gmsh:physical": materials, "material": [m.copy() for m in materials]},
        field_data=field_data,
    )


def write_mesh(mesh: Mesh, path, file_format: Optional[str] = None) -> str:
    """
    Write `mesh` with meshio; the format is inferred from the extension unless given.

    Returns
    -------
    str
        The written path.
    """
    meshio = _import_meshio()
    meshio.write(str(path), to_meshio(mesh), file_format=file_format)
    logger.info("[MeshExport] Wrote '%s' (%d nodes, %d elements).", path, mesh.n_nodes, mesh.n_elements)
    return str(path)
