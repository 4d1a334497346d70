# -*- coding: utf-8 -*-
# Meshbridge/mesh/model.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
Solver-facing mesh containers: nodes with dense indices, typed elements referencing
nodes by index, and the Mesh that owns both.

Main Tasks:
-----------
    1. Define ElementType with its node count and Gmsh MSH2 type tag.
    2. Provide a mesh sink (`add_node`, `add_element`) with index validation.
    3. Offer array views (`points`, `connectivity`) and material-ID condensation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple
import numpy as np


class ElementType(Enum):
    LINE = ("line", 2, 1)
    TRIANGLE = ("triangle", 3, 2)
    QUAD = ("quad", 4, 3)
    TETRAHEDRON = ("tetra", 4, 4)
    HEXAHEDRON = ("hexahedron", 8, 5)
    PRISM = ("wedge", 6, 6)
    PYRAMID = ("pyramid", 5, 7)

    def __init__(self, label: str, n_nodes: int, gmsh_type: int):
        self.label = label
        self.n_nodes = n_nodes
        self.gmsh_type = gmsh_type

    @classmethod
    def from_gmsh(cls, tag: int) -> Optional["ElementType"]:
        for et in cls:
            if et.gmsh_type == tag:
                return et
        return None

    @property
    def dimension(self) -> int:
        if self is ElementType.LINE:
            return 1
        if self in (ElementType.TRIANGLE, ElementType.QUAD):
            return 2
        return 3


@dataclass(frozen=True)
class Node:
    index: int
    external_id: int
    x: float
    y: float
    z: float = 0.0

    @property
    def xyz(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Element:
    type: ElementType
    nodes: Tuple[int, ...]
    material: int = 0


@dataclass
class Mesh:
    name: str = "mesh"
    nodes: List[Node] = field(default_factory=list)
    elements: List[Element] = field(default_factory=list)
    physical_names: Dict[int, str] = field(default_factory=dict)

    # --------------------
    # Sink
    # --------------------
    def add_node(self, x: float, y: float, z: float = 0.0, external_id: Optional[int] = None) -> int:
        idx = len(self.nodes)
        ext = idx if external_id is None else int(external_id)
        self.nodes.append(Node(idx, ext, float(x), float(y), float(z)))
        return idx

    def add_element(self, etype: ElementType, nodes, material: int = 0) -> int:
        nodes = tuple(int(n) for n in nodes)
        if len(nodes) != etype.n_nodes:
            raise ValueError(
                f"{etype.label} needs {etype.n_nodes} nodes, got {len(nodes)}."
            )
        n = len(self.nodes)
        if any(i < 0 or i >= n for i in nodes):
            raise ValueError(f"Element references node index outside 0..{n - 1}: {nodes}")
        self.elements.append(Element(etype, nodes, int(material)))
        return len(self.elements) - 1

    # --------------------
    # Views
    # --------------------
    @property
    def n_nodes(self) -> int:
        return len(self.nodes)

    @property
    def n_elements(self) -> int:
        return len(self.elements)

    @property
    def points(self) -> np.ndarray:
        """(N, 3) node coordinates in index order."""
        if not self.nodes:
            return np.zeros((0, 3))
        return np.asarray([n.xyz for n in self.nodes], dtype=np.float64)

    @property
    def material_ids(self) -> np.ndarray:
        return np.asarray([e.material for e in self.elements], dtype=int)

    def connectivity(self, etype: ElementType) -> np.ndarray:
        """(K, n_nodes) index array for every element of `etype` (in element order)."""
        rows = [e.nodes for e in self.elements if e.type is etype]
        if not rows:
            return np.zeros((0, etype.n_nodes), dtype=int)
        return np.asarray(rows, dtype=int)

    def element_counts(self) -> Dict[str, int]:
        out: Dict[str, int] = {}
        for e in self.elements:
            out[e.type.label] = out.get(e.type.label, 0) + 1
        return out

    def node_coordinates(self, element: Element) -> np.ndarray:
        return np.asarray([self.nodes[i].xyz for i in element.nodes], dtype=np.float64)

    def condense_material_ids(self) -> Dict[int, int]:
        """
        Renumber material IDs onto 0..k-1 (ascending order of the original IDs).

        Returns
        -------
        dict
            Mapping original ID -> condensed ID.
        """
        mapping = {old: new for new, old in enumerate(sorted({e.material for e in self.elements}))}
        self.elements = [Element(e.type, e.nodes, mapping[e.material]) for e in self.elements]
        return mapping
