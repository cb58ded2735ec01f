"""Intersection test between two convex polygons of (possibly different) meshes."""

from __future__ import annotations

from typing import Iterator

from .mesh import Mesh, Polygon, Vertex

_ZERO = 1e-4


def _is_zero(value: float) -> bool:
    return abs(value) < _ZERO


def _plane(mesh: Mesh, polygon: Polygon) -> tuple[Vertex, float]:
    """Normal and offset of the plane a polygon lies in."""
    normal = mesh.polygon_normal(polygon)
    first = mesh.transformed[polygon.indices[0]]
    return normal, -normal.dot(first)


def _crossings(
    mesh: Mesh, polygon: Polygon, normal: Vertex, offset: float, axis: str
) -> Iterator[float]:
    """Coordinates, along ``axis``, where the polygon's edges pass through a plane."""
    vertices = mesh.transformed
    indices = polygon.indices
    for i, start_index in enumerate(indices):
        end_index = indices[(i + 1) % len(indices)]
        start = vertices[start_index]
        end = vertices[end_index]
        dist1 = normal.dot(start) + offset
        dist2 = normal.dot(end) + offset
        if dist1 * dist2 < 0:
            near = abs(dist1)
            fraction = near / (near + abs(dist2))
            a = getattr(start, axis)
            b = getattr(end, axis)
            yield a + (b - a) * fraction


def _two_crossings(
    mesh: Mesh, polygon: Polygon, normal: Vertex, offset: float, axis: str
) -> tuple[float, float] | None:
    found = _crossings(mesh, polygon, normal, offset, axis)
    first = next(found, None)
    second = next(found, None)
    if first is None or second is None:
        return None
    return first, second


def _projection_axis(normal_a: Vertex, normal_b: Vertex) -> str:
    """The axis closest to the direction of the planes' line of intersection."""
    c = normal_a.cross(normal_b)
    cx, cy, cz = abs(c.x), abs(c.y), abs(c.z)
    if cx > cy:
        if cx > cz:
            return "x"
        if cy > cz:
            return "y"
        return "z"
    if cy > cz:
        return "y"
    return "z"


def polygons_intersect(
    mesh1: Mesh, polygon1: Polygon, mesh2: Mesh, polygon2: Polygon
) -> bool:
    """True if two convex polygons, taken from the meshes' transformed vertices, intersect.

    Polygons with fewer than three vertices never intersect, and neither do
    coplanar polygons.
    """
    if len(polygon1.indices) < 3 or len(polygon2.indices) < 3:
        return False

    normal_a, d1 = _plane(mesh1, polygon1)
    normal_b, d2 = _plane(mesh2, polygon2)

    if (
        _is_zero(normal_b.x - normal_a.x)
        and _is_zero(normal_b.y - normal_a.y)
        and _is_zero(normal_b.z - normal_a.z)
        and _is_zero(d1 - d2)
    ):
        return False

    axis = _projection_axis(normal_a, normal_b)

    span1 = _two_crossings(mesh1, polygon1, normal_b, d2, axis)
    if span1 is None:
        return False
    span2 = _two_crossings(mesh2, polygon2, normal_a, d1, axis)
    if span2 is None:
        return False

    return max(span1) > min(span2) and max(span2) > min(span1)