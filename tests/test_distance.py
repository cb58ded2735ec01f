import pytest

from emilia3d.distance import (
    FAR_AWAY_SQR,
    point_polygon_sqr_distance,
    point_triangle_sqr_distance,
)
from emilia3d.mesh import Mesh, Polygon, Vertex

A = Vertex(0.0, 0.0, 0.0)
B = Vertex(1.0, 0.0, 0.0)
C = Vertex(0.0, 1.0, 0.0)


def test_point_above_interior():
    point = Vertex(0.25, 0.25, 2.0)
    distance, offset = point_triangle_sqr_distance(point, A, B, C)
    assert distance == pytest.approx(4.0)
    closest = point + offset
    assert closest.x == pytest.approx(0.25)
    assert closest.y == pytest.approx(0.25)
    assert closest.z == pytest.approx(0.0)


@pytest.mark.parametrize(
    "point, vertex",
    [
        (Vertex(2.0, 0.0, 0.0), B),
        (Vertex(0.0, 3.0, 0.0), C),
        (Vertex(-1.0, -1.0, 0.0), A),
    ],
)
def test_point_beyond_a_corner_is_nearest_that_corner(point, vertex):
    distance, offset = point_triangle_sqr_distance(point, A, B, C)
    closest = point + offset
    assert closest.x == pytest.approx(vertex.x)
    assert closest.y == pytest.approx(vertex.y)
    assert closest.z == pytest.approx(vertex.z)
    assert distance == pytest.approx((point - vertex).length_sqr())


@pytest.mark.parametrize(
    "point",
    [
        Vertex(0.3, 0.3, 1.0),
        Vertex(2.0, 2.0, 0.5),
        Vertex(-0.5, 0.5, -1.0),
        Vertex(0.5, -0.5, 0.2),
        Vertex(3.0, -1.0, 0.0),
        Vertex(-1.0, 3.0, 1.0),
        Vertex(0.1, 0.1, 0.0),
    ],
)
def test_distance_matches_offset_and_is_not_beyond_corners(point):
    distance, offset = point_triangle_sqr_distance(point, A, B, C)
    assert distance == pytest.approx(offset.length_sqr())
    for corner in (A, B, C):
        assert distance <= (point - corner).length_sqr() + 1e-9


def test_point_on_triangle_has_zero_distance():
    point = Vertex(0.2, 0.3, 0.0)
    distance, offset = point_triangle_sqr_distance(point, A, B, C)
    assert distance == pytest.approx(0.0)
    assert offset.length_sqr() == pytest.approx(0.0)


def _square_mesh():
    mesh = Mesh()
    for point in ((0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)):
        mesh.add_vertex(*point)
    polygon = mesh.add_polygon((0, 1, 2, 3))
    return mesh, polygon


def test_polygon_distance_covers_whole_quad():
    mesh, polygon = _square_mesh()
    point = Vertex(0.9, 0.9, 1.0)
    distance, offset = point_polygon_sqr_distance(point, mesh, polygon)
    assert distance == pytest.approx(1.0)
    assert (point + offset).z == pytest.approx(0.0)


def test_polygon_distance_uses_transformed_vertices():
    mesh, polygon = _square_mesh()
    shift = Vertex(0.0, 0.0, 3.0)
    mesh.apply_transform(lambda v: v + shift)
    point = Vertex(0.5, 0.5, 0.0)
    distance, offset = point_polygon_sqr_distance(point, mesh, polygon)
    assert distance == pytest.approx(shift.length_sqr())
    assert offset.z == pytest.approx(3.0)


def test_far_polygon_returns_limit():
    mesh, polygon = _square_mesh()
    point = Vertex(0.0, 0.0, 1000.0)
    distance, offset = point_polygon_sqr_distance(point, mesh, polygon)
    assert distance == FAR_AWAY_SQR
    assert offset == Vertex(0.0, 1.0, 0.0)


def test_polygon_with_two_vertices_is_rejected():
    mesh, _ = _square_mesh()
    with pytest.raises(ValueError):
        point_polygon_sqr_distance(Vertex(), mesh, Polygon((0, 1)))