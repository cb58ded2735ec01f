"""Squared distances from a point to triangles and convex polygons."""

from __future__ import annotations

import math

from .mesh import Mesh, Polygon, Vertex

FAR_AWAY_SQR = 9999.9


def _div(numer: float, denom: float) -> float:
    """Division that yields infinities or NaN for a zero denominator."""
    if denom != 0.0:
        return numer / denom
    if numer == 0.0 or math.isnan(numer):
        return math.nan
    return math.copysign(math.inf, numer) * math.copysign(1.0, denom)


def point_triangle_sqr_distance(
    point: Vertex, a: Vertex, b: Vertex, c: Vertex
) -> tuple[float, Vertex]:
    """Squared distance from a point to a triangle.

    Returns the distance and the vector from the point to the closest point
    of the triangle.
    """
    diff = a - point
    e0 = b - a
    e1 = c - a
    a00 = e0.length_sqr()
    a01 = e0.dot(e1)
    a11 = e1.length_sqr()
    b0 = diff.dot(e0)
    b1 = diff.dot(e1)
    cc = diff.length_sqr()
    det = abs(a00 * a11 - a01 * a01)
    s = a01 * b1 - a11 * b0
    t = a01 * b0 - a00 * b1

    def interior(s: float, t: float) -> float:
        return s * (a00 * s + a01 * t + 2.0 * b0) + t * (a01 * s + a11 * t + 2.0 * b1) + cc

    if s + t <= det:
        if s < 0.0:
            if t < 0.0:  # region 4
                if b0 < 0.0:
                    t = 0.0
                    if -b0 >= a00:
                        s = 1.0
                        sqrdist = a00 + 2.0 * b0 + cc
                    else:
                        s = _div(-b0, a00)
                        sqrdist = b0 * s + cc
                else:
                    s = 0.0
                    if b1 >= 0.0:
                        t = 0.0
                        sqrdist = cc
                    elif -b0 >= a11:
                        t = 1.0
                        sqrdist = a11 + 2.0 * b1 + cc
                    else:
                        t = _div(-b1, a11)
                        sqrdist = b1 * t + cc
            else:  # region 3
                s = 0.0
                if b1 >= 0.0:
                    t = 0.0
                    sqrdist = cc
                elif -b1 >= a11:
                    t = 1.0
                    sqrdist = a11 + 2.0 * b1 + cc
                else:
                    t = _div(-b1, a11)
                    sqrdist = b1 * t + cc
        elif t < 0.0:  # region 5
            t = 0.0
            if b0 >= 0.0:
                s = 0.0
                sqrdist = cc
            elif -b0 >= a00:
                s = 1.0
                sqrdist = a00 + 2.0 * b0 + cc
            else:
                s = _div(-b0, a00)
                sqrdist = b0 * s + cc
        else:  # region 0
            invdet = _div(1.0, det)
            s *= invdet
            t *= invdet
            sqrdist = interior(s, t)
    else:
        if s < 0.0:  # region 2
            tmp0 = a01 + b0
            tmp1 = a11 + b1
            if tmp1 > tmp0:
                numer = tmp1 - tmp0
                denom = a00 - 2.0 * a01 + a11
                if numer >= denom:
                    s, t = 1.0, 0.0
                    sqrdist = a00 + 2.0 * b0 + cc
                else:
                    s = _div(numer, denom)
                    t = 1.0 - s
                    sqrdist = interior(s, t)
            else:
                s = 0.0
                if tmp1 <= 0.0:
                    t = 1.0
                    sqrdist = a11 + 2.0 * b1 + cc
                elif b1 >= 0.0:
                    t = 0.0
                    sqrdist = cc
                else:
                    t = _div(-b1, a11)
                    sqrdist = b1 * t + cc
        elif t < 0.0:  # region 6
            tmp0 = a01 + b1
            tmp1 = a00 + b0
            if tmp1 > tmp0:
                numer = tmp1 - tmp0
                denom = a00 - 2.0 * a01 + a11
                if numer >= denom:
                    t, s = 1.0, 0.0
                    sqrdist = a11 + 2.0 * b1 + cc
                else:
                    t = _div(numer, denom)
                    s = 1.0 - t
                    sqrdist = interior(s, t)
            else:
                t = 0.0
                if tmp1 <= 0.0:
                    s = 1.0
                    sqrdist = a00 + 2.0 * b0 + cc
                elif b0 >= 0.0:
                    s = 0.0
                    sqrdist = cc
                else:
                    s = _div(-b0, a00)
                    sqrdist = b0 * s + cc
        else:  # region 1
            numer = a11 + b1 - a01 - b0
            if numer <= 0.0:
                s, t = 0.0, 1.0
                sqrdist = a11 + 2.0 * b1 + cc
            else:
                denom = a00 - 2.0 * a01 + a11
                if numer >= denom:
                    s, t = 1.0, 0.0
                    sqrdist = a00 + 2.0 * b0 + cc
                else:
                    s = _div(numer, denom)
                    t = 1.0 - s
                    sqrdist = interior(s, t)

    offset = diff + e0.scaled(s) + e1.scaled(t)
    return abs(sqrdist), offset


def point_polygon_sqr_distance(
    point: Vertex, mesh: Mesh, polygon: Polygon
) -> tuple[float, Vertex]:
    """Squared distance from a point to a convex polygon of the mesh's transformed vertices.

    The polygon is split into a fan of triangles. Returns the smallest
    distance found and the vector to the closest point; when nothing is
    nearer than the far-away limit, the limit and an up vector are returned.
    """
    if len(polygon.indices) < 3:
        raise ValueError("polygon has less than 3 vertices")
    vertices = mesh.transformed
    first = vertices[polygon.indices[0]]
    best = FAR_AWAY_SQR
    best_offset = Vertex(0.0, 1.0, 0.0)
    for i, j in zip(polygon.indices[1:-1], polygon.indices[2:]):
        distance, offset = point_triangle_sqr_distance(point, first, vertices[i], vertices[j])
        if distance < best:
            best = distance
            best_offset = offset
    return best, best_offset