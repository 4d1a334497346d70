# -*- coding: utf-8 -*-
# Meshbridge/mesh/io/msh_reader.py

"""
Project: Meshbridge
Date: 3/2/2026

Purpose:
--------
Read legacy ASCII Gmsh meshes (MSH 2.x) into a Mesh: nodes with dense indices, typed
elements with a material ID, and the optional physical-name table.

Main Tasks:
-----------
    1. Cheap header check (`is_gmsh_mesh_file`) that never raises.
    2. Line-oriented state machine over $MeshFormat / $Nodes / $Elements; $PhysicalNames is
       parsed and other sections are skipped.
    3. Map external node IDs to dense indices (the whole node table is read before any
       element) and reorder element node lists through NODE_ORDER.

Notes:
------
- Every malformed record raises MeshReadError with the 1-based line number in its context.
  The mesh under construction is discarded; no partial mesh is returned.
- Supported element types: 1 line, 2 triangle, 3 quad, 4 tetrahedron, 5 hexahedron,
  6 prism, 7 pyramid. Type 15 (single-node point) is skipped.
- Triangles are stored with reversed node order (2, 1, 0); the other kinds keep Gmsh order.
- The material is the physical tag (first tag). When it is 0, as Gmsh writes for meshes
  without physical groups, the elementary tag (second tag) is used instead.
"""

import logging
import os
from enum import Enum
from typing import Dict, Iterator, List, Optional, TextIO, Tuple
from mesh.errors import MeshReadError
from mesh.model import ElementType, Mesh

logger = logging.getLogger(__name__)

POINT_ELEMENT = 15

# Bounds on the header check so a huge single-line file is never read whole.
HEADER_MAX_LINES = 64
HEADER_MAX_CHARS = 256

# Permutation applied to the Gmsh node list of each element kind.
NODE_ORDER: Dict[ElementType, Tuple[int, ...]] = {
    ElementType.LINE: (0, 1),
    ElementType.TRIANGLE: (2, 1, 0),
    ElementType.QUAD: (0, 1, 2, 3),
    ElementType.TETRAHEDRON: (0, 1, 2, 3),
    ElementType.HEXAHEDRON: (0, 1, 2, 3, 4, 5, 6, 7),
    ElementType.PRISM: (0, 1, 2, 3, 4, 5),
    ElementType.PYRAMID: (0, 1, 2, 3, 4),
}


class ReaderState(Enum):
    EXPECT_HEADER = "expect_header"
    EXPECT_NODE_COUNT = "expect_node_count"
    READING_NODES = "reading_nodes"
    EXPECT_ELEMENT_COUNT = "expect_element_count"
    READING_ELEMENTS = "reading_elements"
    DONE = "done"


# --------------------
# Header check
# --------------------
def is_gmsh_mesh_file(path) -> bool:
    """
    True if the first non-blank line of `path` starts with `$MeshFormat`.

    Returns False (never raises) for missing, unreadable, empty, binary or non-matching files.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            first = _first_non_blank(fh)
            if first is None or not first.startswith("$MeshFormat"):
                return False
            version = _first_non_blank(fh)
    except (OSError, UnicodeDecodeError, ValueError):
        return False
    if version is not None:
        logger.debug("[MshReader] '%s': format line '%s'.", path, version)
    return True


def _first_non_blank(fh) -> Optional[str]:
    """First non-blank line among the next few, each read in bounded chunks."""
    for _ in range(HEADER_MAX_LINES):
        raw = fh.readline(HEADER_MAX_CHARS)
        if not raw:
            return None
        line = raw.strip()
        if line:
            return line
    return None


# --------------------
# Reader
# --------------------
def read_gmsh_mesh_file(path, name: Optional[str] = None) -> Mesh:
    """
    Read an MSH 2.x ASCII file. The mesh is named after the file stem unless `name` is given.

    Raises
    ------
    FileNotFoundError
        If `path` does not exist.
    MeshReadError
        Malformed content (with the offending line number).
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Mesh file not found: {path}")
    if name is None:
        name = os.path.splitext(os.path.basename(str(path)))[0]
    with open(path, "r", encoding="utf-8", errors="replace") as fh:
        return read_gmsh_mesh(fh, name=name)


def read_gmsh_mesh(stream: TextIO, name: str = "mesh") -> Mesh:
    """
    Parse MSH 2.x ASCII text from `stream`.

    Parameters
    ----------
    stream : text stream
        Open in text mode, positioned at the start of the file.
    name : str
        Name given to the returned mesh.

    Returns
    -------
    Mesh
        Nodes in file order (dense indices 0..N-1), supported elements in file order.

    Raises
    ------
    MeshReadError
        Bad or missing header, unsupported version or binary file type, non-numeric or
        truncated record, duplicate or unregistered node ID, unknown element type, premature
        section end, end of file, count mismatch, or a mesh without elements.
    """
    lines = _Lines(stream)
    mesh = Mesh(name=name)
    id_map: Dict[int, int] = {}
    skipped_points = 0
    n_expected = 0
    n_read = 0

    state = ReaderState.EXPECT_HEADER
    while state is not ReaderState.DONE:
        lineno, line = lines.next()

        if state is ReaderState.EXPECT_HEADER:
            if line != "$MeshFormat":
                raise _error("Expected '$MeshFormat' header.", lineno, line)
            _read_format(lines)
            state = ReaderState.EXPECT_NODE_COUNT

        elif state is ReaderState.EXPECT_NODE_COUNT:
            if line == "$Nodes":
                n_expected = _read_count(lines, "node")
                n_read = 0
                state = ReaderState.READING_NODES
            elif line == "$PhysicalNames":
                mesh.physical_names.update(_read_physical_names(lines))
            elif line.startswith("$"):
                _skip_section(lines, line)
            else:
                raise _error("Expected '$Nodes' section.", lineno, line)

        elif state is ReaderState.READING_NODES:
            if n_read == n_expected:
                if line != "$EndNodes":
                    raise _error(f"Node count mismatch: declared {n_expected}.", lineno, line)
                state = ReaderState.EXPECT_ELEMENT_COUNT
                continue
            if line.startswith("$"):
                raise _error(f"Premature section end after {n_read} of {n_expected} nodes.", lineno, line)
            ext, x, y, z = _read_node(line, lineno)
            if ext in id_map:
                raise _error(f"Duplicate node id {ext}.", lineno, line)
            id_map[ext] = mesh.add_node(x, y, z, external_id=ext)
            n_read += 1

        elif state is ReaderState.EXPECT_ELEMENT_COUNT:
            if line == "$Elements":
                n_expected = _read_count(lines, "element")
                n_read = 0
                state = ReaderState.READING_ELEMENTS
            elif line == "$PhysicalNames":
                mesh.physical_names.update(_read_physical_names(lines))
            elif line.startswith("$"):
                _skip_section(lines, line)
            else:
                raise _error("Expected '$Elements' section.", lineno, line)

        elif state is ReaderState.READING_ELEMENTS:
            if n_read == n_expected:
                if line != "$EndElements":
                    raise _error(f"Element count mismatch: declared {n_expected}.", lineno, line)
                if mesh.n_elements == 0:
                    raise _error("Mesh has no elements.", lineno, line)
                state = ReaderState.DONE
                continue
            if line.startswith("$"):
                raise _error(
                    f"Premature section end after {n_read} of {n_expected} elements.", lineno, line
                )
            element = _read_element(line, lineno, id_map)
            if element is None:
                skipped_points += 1
            else:
                etype, nodes, material = element
                mesh.add_element(etype, nodes, material)
            n_read += 1

    logger.info(
        "[MshReader] Read '%s': %d nodes, %d elements %s.",
        name, mesh.n_nodes, mesh.n_elements, mesh.element_counts(),
    )
    if skipped_points:
        logger.debug("[MshReader] Skipped %d point elements.", skipped_points)
    return mesh


# --------------------
# Record parsers
# --------------------
class _Lines:
    """Non-blank stripped lines with 1-based line numbers; EOF raises MeshReadError."""

    def __init__(self, stream: TextIO):
        self._it: Iterator[str] = iter(stream)
        self.lineno = 0

    def next(self) -> Tuple[int, str]:
        for raw in self._it:
            self.lineno += 1
            line = raw.strip()
            if line:
                return self.lineno, line
        raise MeshReadError("Unexpected end of file.", {"line": self.lineno + 1})


def _error(message: str, lineno: int, line: str) -> MeshReadError:
    return MeshReadError(message, {"line": lineno, "record": line})


def _read_format(lines: _Lines) -> None:
    lineno, line = lines.next()
    parts = line.split()
    if len(parts) < 3:
        raise _error("Truncated format line; expected '<version> <file-type> <data-size>'.", lineno, line)
    try:
        major = int(float(parts[0]))
        file_type = int(parts[1])
        int(parts[2])
    except ValueError:
        raise _error("Non-numeric field in format line.", lineno, line) from None
    if major != 2:
        raise _error(f"Unsupported MSH version {parts[0]}; only 2.x is supported.", lineno, line)
    if file_type != 0:
        raise _error("Binary MSH files are not supported.", lineno, line)

    lineno, line = lines.next()
    if line != "$EndMeshFormat":
        raise _error("Expected '$EndMeshFormat'.", lineno, line)


def _read_count(lines: _Lines, what: str) -> int:
    lineno, line = lines.next()
    try:
        count = int(line)
    except ValueError:
        raise _error(f"Invalid {what} count.", lineno, line) from None
    if count < 0:
        raise _error(f"Negative {what} count.", lineno, line)
    return count


def _read_node(line: str, lineno: int) -> Tuple[int, float, float, float]:
    parts = line.split()
    if len(parts) != 4:
        raise _error("Node record must be 'id x y z'.", lineno, line)
    try:
        return int(parts[0]), float(parts[1]), float(parts[2]), float(parts[3])
    except ValueError:
        raise _error("Non-numeric field in node record.", lineno, line) from None


def _read_node_ids(fields: List[str], etype: ElementType, id_map: Dict[int, int],
                   lineno: int, line: str) -> List[int]:
    dense = []
    for f in fields:
        ext = int(f)
        idx = id_map.get(ext)
        if idx is None:
            raise _error(f"Element references undeclared node id {ext}.", lineno, line)
        dense.append(idx)
    return [dense[k] for k in NODE_ORDER[etype]]


def _read_element(line: str, lineno: int,
                  id_map: Dict[int, int]) -> Optional[Tuple[ElementType, List[int], int]]:
    """Parse `id type ntags tag... node...`; None for skipped point elements."""
    parts = line.split()
    if len(parts) < 3:
        raise _error("Truncated element record.", lineno, line)
    try:
        fields = [int(p) for p in parts]
    except ValueError:
        raise _error("Non-numeric field in element record.", lineno, line) from None

    type_tag, n_tags = fields[1], fields[2]
    if n_tags < 0:
        raise _error("Negative tag count.", lineno, line)

    if type_tag == POINT_ELEMENT:
        n_nodes = 1
        etype = None
    else:
        etype = ElementType.from_gmsh(type_tag)
        if etype is None:
            raise _error(f"Unsupported element type {type_tag}.", lineno, line)
        n_nodes = etype.n_nodes

    expected = 3 + n_tags + n_nodes
    if len(fields) < expected:
        raise _error(f"Truncated element record: expected {expected} fields.", lineno, line)
    if len(fields) > expected:
        raise _error(f"Too many fields in element record: expected {expected}.", lineno, line)

    if etype is None:
        return None
    tags = fields[3:3 + n_tags]
    material = tags[0] if tags else 0
    # without physical groups Gmsh writes `0 <elementary>`
    if material == 0 and len(tags) >= 2:
        material = tags[1]
    nodes = _read_node_ids(parts[3 + n_tags:], etype, id_map, lineno, line)
    return etype, nodes, material


def _read_physical_names(lines: _Lines) -> Dict[int, str]:
    count = _read_count(lines, "physical name")
    names: Dict[int, str] = {}
    for _ in range(count):
        lineno, line = lines.next()
        parts = line.split(None, 2)
        if len(parts) < 3:
            raise _error("Physical name record must be 'dim tag \"name\"'.", lineno, line)
        try:
            tag = int(parts[1])
            int(parts[0])
        except ValueError:
            raise _error("Non-numeric field in physical name record.", lineno, line) from None
        names[tag] = parts[2].strip().strip('"')
    lineno, line = lines.next()
    if line != "$EndPhysicalNames":
        raise _error("Expected '$EndPhysicalNames'.", lineno, line)
    return names


def _skip_section(lines: _Lines, header: str) -> None:
    end = "$End" + header[1:]
    logger.debug("[MshReader] Skipping section %s.", header)
    while True:
        _, line = lines.next()
        if line == end:
            return
