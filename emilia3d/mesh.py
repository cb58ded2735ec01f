"""Polygon meshes and generators for simple primitive shapes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

SIN_45 = math.sin(math.pi / 4)


def _turn_sin(fraction: float) -> float:
    """Sine of an angle given as a fraction of a full turn."""
    return math.sin(fraction * 2.0 * math.pi)


def _turn_cos(fraction: float) -> float:
    """Cosine of an angle given as a fraction of a full turn."""
    return math.cos(fraction * 2.0 * math.pi)


@dataclass(frozen=True)
class Vertex:
    """A point or direction in three dimensions."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vertex) -> Vertex:
        return Vertex(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vertex) -> Vertex:
        return Vertex(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vertex:
        return Vertex(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def length_sqr(self) -> float:
        """Squared length of the vector."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def dot(self, other: Vertex) -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vertex) -> Vertex:
        """Cross product with another vector."""
        return Vertex(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def normalized(self) -> Vertex:
        """Unit vector in the same direction; the zero vector stays zero."""
        length = math.sqrt(self.length_sqr())
        if length == 0.0:
            return self
        return Vertex(self.x / length, self.y / length, self.z / length)

    def scaled(self, factor: float) -> Vertex:
        """The vector multiplied by a scalar."""
        return Vertex(self.x * factor, self.y * factor, self.z * factor)


@dataclass(frozen=True)
class Color:
    """An RGBA color with components in the range 0..1."""

    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0


@dataclass
class Polygon:
    """A convex polygon given by indices into its mesh's vertex list."""

    indices: tuple[int, ...]
    transparent: bool = False

    def __len__(self) -> int:
        return len(self.indices)


@dataclass
class Mesh:
    """A set of vertices with per-vertex color and texture coordinates, and polygons."""

    vertices: list[Vertex] = field(default_factory=list)
    colors: list[Color] = field(default_factory=list)
    uvs: list[tuple[float, float]] = field(default_factory=list)
    polygons: list[Polygon] = field(default_factory=list)
    texture: Any = None
    transparent: bool = False
    transformed: list[Vertex] = field(default_factory=list)

    def add_vertex(
        self,
        x: float,
        y: float,
        z: float,
        color: Optional[Color] = None,
        uv: tuple[float, float] = (0.0, 0.0),
    ) -> int:
        """Append a vertex and return its index."""
        vertex = Vertex(float(x), float(y), float(z))
        self.vertices.append(vertex)
        self.transformed.append(vertex)
        self.colors.append(color if color is not None else Color())
        self.uvs.append((float(uv[0]), float(uv[1])))
        return len(self.vertices) - 1

    def find_vertex(
        self, x: float, y: float, z: float, tolerance: float = 0.001
    ) -> Optional[int]:
        """Index of the first vertex within tolerance on every axis, or None."""
        for index, vertex in enumerate(self.vertices):
            if (
                abs(vertex.x - x) < tolerance
                and abs(vertex.y - y) < tolerance
                and abs(vertex.z - z) < tolerance
            ):
                return index
        return None

    def add_polygon(self, indices: Iterable[int], transparent: bool = False) -> Polygon:
        """Append a polygon made of existing vertex indices."""
        index_tuple = tuple(int(i) for i in indices)
        for index in index_tuple:
            if not 0 <= index < len(self.vertices):
                raise IndexError(f"vertex index {index} out of range")
        polygon = Polygon(index_tuple, transparent)
        self.polygons.append(polygon)
        return polygon

    def polygon_normal(self, polygon: Polygon) -> Vertex:
        """Unit normal of a polygon, computed from the transformed vertices."""
        if len(polygon.indices) < 3:
            return Vertex()
        v0, v1, v2 = (self.transformed[i] for i in polygon.indices[:3])
        return (v2 - v0).cross(v1 - v0).normalized()

    def vertex_normals(self) -> list[Vertex]:
        """Per-vertex normals: the normalized sum of adjacent polygon normals."""
        sums = [Vertex() for _ in self.vertices]
        for polygon in self.polygons:
            normal = self.polygon_normal(polygon)
            for index in polygon.indices:
                sums[index] = sums[index] + normal
        return [normal.normalized() for normal in sums]

    def apply_transform(self, apply: Callable[[Vertex], Vertex]) -> list[Vertex]:
        """Map every source vertex through ``apply`` into the transformed list."""
        self.transformed = [apply(vertex) for vertex in self.vertices]
        return self.transformed


def cube(size: float, color: Optional[Color] = None, texture: Any = None) -> Mesh:
    """An axis aligned cube centred at the origin."""
    color = color if color is not None else Color()
    half = size / 2
    mesh = Mesh(texture=texture)
    for x, y, z in (
        (half, half, -half),
        (-half, half, -half),
        (half, -half, -half),
        (-half, -half, -half),
        (half, half, half),
        (-half, half, half),
        (half, -half, half),
        (-half, -half, half),
    ):
        mesh.add_vertex(x, y, z, color)
    for face in (
        (0, 1, 3, 2),
        (4, 0, 2, 6),
        (5, 4, 6, 7),
        (1, 5, 7, 3),
        (0, 4, 5, 1),
        (2, 3, 7, 6),
    ):
        mesh.add_polygon(face)
    return mesh


def sphere(size: float, color: Optional[Color] = None) -> Mesh:
    """A coarse sphere of 26 vertices and 40 polygons."""
    color = color if color is not None else Color()
    mesh = Mesh()
    mesh.add_vertex(0, size, 0)
    mesh.add_vertex(0, -size, 0)
    rings = (
        (SIN_45, SIN_45),
        (1.0, 0.0),
        (SIN_45, -SIN_45),
    )
    for radius, height in rings:
        for step in range(8):
            fraction = step / 8
            mesh.add_vertex(
                radius * _turn_sin(fraction) * size,
                height * size,
                radius * _turn_cos(fraction) * size,
                color,
            )
    for a in range(2, 9):
        mesh.add_polygon((0, a + 1, a))
    mesh.add_polygon((0, 2, 9))
    for a in range(2, 9):
        mesh.add_polygon((a, a + 1, a + 9, a + 8))
    mesh.add_polygon((9, 2, 10, 17))
    for a in range(10, 17):
        mesh.add_polygon((a, a + 1, a + 9, a + 8))
    mesh.add_polygon((17, 10, 18, 25))
    for a in range(18, 25):
        mesh.add_polygon((a, a + 1, 1))
    mesh.add_polygon((25, 18, 1))
    return mesh


def big_sphere(size: float, level: int, color: Optional[Color] = None) -> Mesh:
    """A sphere made by subdividing an octahedron ``level`` times."""
    color = color if color is not None else Color()
    mesh = Mesh()
    for x, y, z in (
        (0, -size, 0),
        (-SIN_45 * size, 0, SIN_45 * size),
        (SIN_45 * size, 0, SIN_45 * size),
        (SIN_45 * size, 0, -SIN_45 * size),
        (-SIN_45 * size, 0, -SIN_45 * size),
        (0, size, 0),
    ):
        mesh.add_vertex(x, y, z, color)

    triangles = [
        (0, 1, 2), (0, 2, 3), (0, 3, 4), (0, 4, 1),
        (5, 2, 1), (5, 3, 2), (5, 4, 3), (5, 1, 4),
    ]

    def surface_midpoint(i: int, j: int) -> int:
        first, second = mesh.vertices[i], mesh.vertices[j]
        point = (first + (second - first).scaled(0.5)).normalized().scaled(size)
        found = mesh.find_vertex(point.x, point.y, point.z, 0.001)
        if found is not None:
            return found
        return mesh.add_vertex(point.x, point.y, point.z, color)

    for _ in range(max(level, 0)):
        refined = []
        for a, b, c in triangles:
            d = surface_midpoint(a, b)
            e = surface_midpoint(b, c)
            f = surface_midpoint(c, a)
            refined.extend([(a, d, f), (d, b, e), (f, e, c), (d, e, f)])
        triangles = refined

    transparent = color.a < 0.95
    for triangle in triangles:
        mesh.add_polygon(triangle, transparent)
    mesh.transparent = transparent
    return mesh


def cylinder(
    size: float, sides: int, color: Optional[Color] = None, top: bool = True
) -> Mesh:
    """A cylinder with at least three sides, optionally closed at both ends."""
    color = color if color is not None else Color()
    sides = max(sides, 3)
    mesh = Mesh()
    for height in (size / 2, -size / 2):
        for step in range(sides):
            fraction = step / sides
            mesh.add_vertex(
                _turn_sin(fraction) * size / 2,
                height,
                _turn_cos(fraction) * size / 2,
                color,
            )
    for a in range(sides - 1):
        mesh.add_polygon((a, a + 1, a + sides + 1, a + sides))
    mesh.add_polygon((sides - 1, 0, sides, sides + sides - 1))
    if top:
        mesh.add_polygon(range(sides - 1, -1, -1))
        mesh.add_polygon(range(sides, sides + sides))
    return mesh


def cone(size: float, sides: int, color: Optional[Color] = None) -> Mesh:
    """A cone with its apex up and a polygonal base of at least three sides."""
    color = color if color is not None else Color()
    sides = max(sides, 3)
    mesh = Mesh()
    mesh.add_vertex(0, size / 2, 0)
    for step in range(sides):
        fraction = step / sides
        mesh.add_vertex(
            _turn_sin(fraction) * size / 2,
            -size / 2,
            _turn_cos(fraction) * size / 2,
            color,
        )
    for a in range(1, sides):
        mesh.add_polygon((0, a + 1, a))
    mesh.add_polygon((0, 1, sides))
    mesh.add_polygon(range(1, sides + 1))
    return mesh


def grid(
    size_x: float,
    size_y: float,
    steps: int,
    bitmap_step: float,
    color: Optional[Color] = None,
    texture: Any = None,
) -> Mesh:
    """A flat square grid in the xz plane centred at the origin."""
    if steps < 1:
        raise ValueError("steps must be at least 1")
    color = color if color is not None else Color()
    step_x = size_x / steps
    step_y = size_y / steps
    mesh = Mesh(texture=texture)
    for a in range(steps + 1):
        for b in range(steps + 1):
            mesh.add_vertex(
                a * step_x - steps * step_x * 0.5,
                0,
                -b * step_y + steps * step_y * 0.5,
                color,
                (b * bitmap_step, a * bitmap_step),
            )
    row = steps + 1
    for a in range(steps):
        for b in range(steps):
            mesh.add_polygon(
                (
                    a + b * row,
                    (a + 1) + b * row,
                    (a + 1) + (b + 1) * row,
                    a + (b + 1) * row,
                )
            )
    return mesh