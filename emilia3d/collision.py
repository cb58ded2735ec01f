"""Collision tests between bounds trees: sphere-sphere, sphere-polygon and polygon-polygon."""

from __future__ import annotations

from typing import Iterable, Optional

from .bounds import CollisionBounds
from .distance import point_polygon_sqr_distance
from .intersect import polygons_intersect
from .mesh import Mesh, Polygon, Vertex

_ZERO = 1e-4

PolygonRef = tuple[Mesh, Polygon]


def spheres_intersect(cb1: CollisionBounds, cb2: CollisionBounds) -> bool:
    """True if the bounding spheres of two bounds touch or overlap."""
    d = cb2.trans - cb1.trans
    radius = cb1.radius + cb2.radius
    return d.length_sqr() <= radius * radius


def sphere_normals(
    cb1: CollisionBounds, cb2: CollisionBounds
) -> Optional[tuple[Vertex, Vertex]]:
    """The vectors between the centres of two intersecting spheres, or None.

    The first vector points from ``cb1`` to ``cb2``, the second the other way.
    Neither is normalized.
    """
    if not spheres_intersect(cb1, cb2):
        return None
    d = cb2.trans - cb1.trans
    return d, -d


def average_normal(polygons: Iterable[PolygonRef]) -> Vertex:
    """Unit sum of the normals of (mesh, polygon) pairs; straight up when they cancel out."""
    total = Vertex()
    for mesh, polygon in polygons:
        total = total + mesh.polygon_normal(polygon)
    if abs(total.x) < _ZERO and abs(total.y) < _ZERO and abs(total.z) < _ZERO:
        total = Vertex(total.x, 1.0, total.z)
    return total.normalized()


def _contains(refs: list[PolygonRef], polygon: Polygon) -> bool:
    return any(known is polygon for _, known in refs)


class CollisionDetector:
    """Finds colliding polygons between two bounds trees.

    The polygons found by the last detection are kept in ``polygons1`` and
    ``polygons2`` as (mesh, polygon) pairs, one list for each side.
    """

    def __init__(self) -> None:
        self.polygons1: list[PolygonRef] = []
        self.polygons2: list[PolygonRef] = []

    def detect_collision(self, cb1: CollisionBounds, cb2: CollisionBounds) -> bool:
        """Polygon-polygon collision between two trees that both hold a mesh."""
        self.polygons1 = []
        self.polygons2 = []
        return self._detect(cb1, cb2)

    def _detect(self, cb1: CollisionBounds, cb2: CollisionBounds) -> bool:
        if not spheres_intersect(cb1, cb2):
            return False
        if cb1.children and cb2.children:
            pairs = [(c1, c2) for c1 in cb1.children for c2 in cb2.children]
        elif cb1.children:
            pairs = [(c1, cb2) for c1 in cb1.children]
        elif cb2.children:
            pairs = [(cb1, c2) for c2 in cb2.children]
        else:
            return self.collide_polygons(cb1, cb2)
        collision = False
        for first, second in pairs:
            if self._detect(first, second):
                collision = True
        return collision

    def detect_collision_empty(
        self, cb1: CollisionBounds, cb2: CollisionBounds
    ) -> Optional[Vertex]:
        """Collision between the sphere of ``cb1`` and the polygons of ``cb2``.

        Returns the vector from the centre of ``cb1`` to the closest point of
        the closest polygon touched, or None when nothing is touched. The
        polygons touched are kept in ``polygons1``.
        """
        self.polygons1 = []
        best: list = [-1.0, None]
        if self._detect_empty(cb1, cb2, best):
            return best[1]
        return None

    def _detect_empty(self, cb1: CollisionBounds, cb2: CollisionBounds, best: list) -> bool:
        if not spheres_intersect(cb1, cb2):
            return False
        if cb2.children:
            collision = False
            for child in cb2.children:
                if self._detect_empty(cb1, child, best):
                    collision = True
            return collision
        collision = False
        radius_sqr = cb1.radius * cb1.radius
        for polygon in cb2.polygons:
            distance, offset = point_polygon_sqr_distance(cb1.trans, cb2.mesh, polygon)
            if distance > radius_sqr:
                continue
            collision = True
            if not _contains(self.polygons1, polygon):
                self.polygons1.append((cb2.mesh, polygon))
            if distance < best[0] or best[0] < 0.0:
                best[0] = distance
                best[1] = offset
        return collision

    def collide_polygons(self, cb1: CollisionBounds, cb2: CollisionBounds) -> bool:
        """Test every polygon pair of two leaves, skipping polygons already found."""
        collision = False
        for p1 in cb1.polygons:
            if _contains(self.polygons1, p1):
                continue
            for p2 in cb2.polygons:
                if _contains(self.polygons2, p2):
                    continue
                if polygons_intersect(cb1.mesh, p1, cb2.mesh, p2):
                    self.polygons1.append((cb1.mesh, p1))
                    self.polygons2.append((cb2.mesh, p2))
                    collision = True
        return collision