"""Hierarchical cubic bounds used to narrow down collision tests between meshes."""

from __future__ import annotations

import math
from typing import Any, Callable, Optional

from .mesh import Mesh, Polygon, Vertex

BOUNDS_OVERLAP = 1.0
_SLACK = 0.01


class CollisionBounds:
    """A cube (and bounding sphere) around part of a group, optionally split into an octree.

    Only leaf bounds hold polygons. The polygons refer to the vertices of
    ``mesh``, which is shared by every node of the tree.
    """

    def __init__(self, size: float, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.src = Vertex(float(x), float(y), float(z))
        self.trans = self.src
        self.box_size = float(size)
        self.radius = size * math.sqrt(3.0) * BOUNDS_OVERLAP
        self.parent: Any = None
        self.mesh: Optional[Mesh] = None
        self.has_mesh = False
        self.polygons: list[Polygon] = []
        self.children: list[CollisionBounds] = []

    def __repr__(self) -> str:
        return (
            f"CollisionBounds(size={self.box_size}, center={tuple(self.src)}, "
            f"polygons={len(self.polygons)}, children={len(self.children)})"
        )

    def set_mesh(self, mesh: Optional[Mesh], level: int) -> None:
        """Drop the old tree, split into ``level`` levels and sort the mesh's polygons into leaves."""
        if mesh is None:
            return
        self.has_mesh = True
        self.mesh = mesh
        self.children = []
        self.polygons = []
        self.split(level)
        for polygon in mesh.polygons:
            if not self.add_surround(polygon):
                self.add_intersect(polygon)
        self.remove_empty()

    def transform(self, apply: Callable[[Vertex], Vertex]) -> None:
        """Map the centre of this node and of every child through ``apply``."""
        for child in self.children:
            child.transform(apply)
        self.trans = apply(self.src)

    def split(self, level: int) -> None:
        """Add eight half-size children, recursively, until ``level`` reaches one."""
        if level <= 1:
            return
        half = self.box_size * 0.5
        for a in (-1, 1):
            for b in (-1, 1):
                for c in (-1, 1):
                    child = CollisionBounds(
                        half,
                        self.src.x + a * half,
                        self.src.y + b * half,
                        self.src.z + c * half,
                    )
                    child.parent = self.parent
                    child.mesh = self.mesh
                    self.children.append(child)
        for child in self.children:
            child.split(level - 1)

    def _source_vertices(self, polygon: Optional[Polygon]) -> list[Vertex]:
        if polygon is None or self.mesh is None or not polygon.indices:
            return []
        return [self.mesh.vertices[i] for i in polygon.indices]

    def surround(self, polygon: Optional[Polygon]) -> int:
        """2 if the box holds every vertex of the polygon, 1 if it holds some, else 0."""
        vertices = self._source_vertices(polygon)
        if not vertices:
            return 0
        limit = self.box_size * BOUNDS_OVERLAP
        inside = [
            -limit <= self.src.x - v.x <= limit
            and -limit <= self.src.y - v.y <= limit
            and -limit <= self.src.z - v.z <= limit
            for v in vertices
        ]
        if all(inside):
            return 2
        if any(inside):
            return 1
        return 0

    def intersect(self, polygon: Optional[Polygon]) -> bool:
        """Conservative box-polygon overlap test; may report overlap where there is none."""
        vertices = self._source_vertices(polygon)
        if not vertices:
            return False
        limit = self.box_size * BOUNDS_OVERLAP
        for axis in ("x", "y", "z"):
            center = getattr(self.src, axis)
            values = [getattr(v, axis) for v in vertices]
            if all(not (center - limit < value + _SLACK) for value in values):
                return False
            if all(not (value - _SLACK < center + limit) for value in values):
                return False
        return True

    def add_surround(self, polygon: Polygon) -> bool:
        """Put the polygon in the first leaf that fully holds it; True if one did."""
        if polygon is None:
            raise ValueError("polygon must not be None")
        if self.children:
            return any(child.add_surround(polygon) for child in self.children)
        if self.surround(polygon) == 2:
            self.polygons.append(polygon)
            return True
        return False

    def add_intersect(self, polygon: Polygon) -> None:
        """Put the polygon in every leaf it may overlap."""
        if polygon is None:
            raise ValueError("polygon must not be None")
        if self.children:
            for child in self.children:
                child.add_intersect(polygon)
        elif self.intersect(polygon):
            self.polygons.append(polygon)

    def remove_empty(self) -> bool:
        """Prune children without polygons; True if this node is now empty itself."""
        self.children = [child for child in self.children if not child.remove_empty()]
        return not self.children and not self.polygons

    def tree_lines(self, level: int = 0) -> list[str]:
        """An indented description of the tree, one line per node."""
        lines = ["  " * level + f"CollisionBounds {len(self.polygons)} polygons"]
        for child in self.children:
            lines.extend(child.tree_lines(level + 1))
        return lines