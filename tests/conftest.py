import pytest

from geometry.primitives import GeoPoint, Polyline, Station
from geometry.store import GeometryStore


SAMPLE_MSH = """$MeshFormat
2.2 0 8
$EndMeshFormat
$PhysicalNames
2
1 7 "river"
2 3 "domain"
$EndPhysicalNames
$Nodes
5
10 0 0 0
20 1 0 0
30 1 1 0
40 0 1 0
50 0.5 0.5 0
$EndNodes
$Elements
6
1 15 2 0 1 10
2 1 2 7 1 10 20
3 2 2 3 1 10 20 50
4 2 2 3 1 20 30 50
5 2 2 4 1 30 40 50
6 3 0 10 20 30 40
$EndElements
"""


def square(x0, y0, size, z=0.0, start=0):
    """Four GeoPoints of an axis-aligned square and the closed polyline through them."""
    pts = [
        GeoPoint(x0, y0, z, start),
        GeoPoint(x0 + size, y0, z, start + 1),
        GeoPoint(x0 + size, y0 + size, z, start + 2),
        GeoPoint(x0, y0 + size, z, start + 3),
    ]
    ids = (start, start + 1, start + 2, start + 3, start)
    return pts, Polyline(ids, "square")


@pytest.fixture
def msh_text():
    return SAMPLE_MSH


@pytest.fixture
def square_store():
    store = GeometryStore()
    pts, ply = square(0.0, 0.0, 10.0)
    store.add_geometry("square", pts, [ply])
    return store


@pytest.fixture
def nested_store():
    """Outer square 0..10 with a hole 4..6, a river inside the outer ring and two stations."""
    store = GeometryStore()
    outer, outer_ply = square(0.0, 0.0, 10.0)
    hole, hole_ply = square(4.0, 4.0, 2.0, start=4)
    river = [GeoPoint(1.0, 1.0, 0.0, 8), GeoPoint(2.0, 3.0, 0.0, 9)]
    stations = [Station("well-in", 8.0, 8.0, 0.0), Station("well-out", 20.0, 20.0, 0.0)]
    store.add_geometry(
        "site",
        outer + hole + river,
        [outer_ply, hole_ply, Polyline((8, 9), "river")],
        stations,
    )
    return store
