"""Per-vertex ambient and point lighting of meshes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Iterable, Optional

from .mesh import Color, Mesh, Vertex


class LightFlag(IntFlag):
    """Options that control how a point light is applied."""

    NONE = 0
    USE_DIFFUSE = 1
    USE_SPECULAR = 2
    USE_BOUNDS = 4
    IGNORE_ANGLE_FULL = 8
    IGNORE_ANGLE_HALF = 16
    IGNORE_DISTANCE = 32


@dataclass
class Light:
    """A point light with attenuation ``1 / (constant + linear*d + quadratic*d*d)``."""

    constant: float = 1.0
    linear: float = 0.0
    quadratic: float = 0.0
    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    position: Vertex = field(default_factory=Vertex)
    on: bool = True
    flags: LightFlag = LightFlag.USE_DIFFUSE
    bounds: float = 0.0


class AmbientLighting:
    """Lights mesh vertices with a global light from above plus a set of point lights."""

    def __init__(self, strength: float = 0.1, background: float = 0.0) -> None:
        self.strength = strength
        self.background = background
        self.lights: list[Light] = []

    def add(self, light: Optional[Light]) -> None:
        """Register a point light; None is ignored."""
        if light is None:
            return
        self.lights.append(light)

    def clear(self) -> None:
        """Forget every point light."""
        self.lights.clear()

    def set_lighting(self, strength: float, background: float) -> None:
        """Set the strength of the light from above and the background level."""
        self.strength = strength
        self.background = background

    def _ambient(self, normals: Iterable[Vertex]) -> list[list[float]]:
        diffuse = []
        for normal in normals:
            level = normal.y / 2 + 0.5
            value = min(1.0, level * self.strength + self.background)
            diffuse.append([value, value, value])
        return diffuse

    @staticmethod
    def _point_factor(light: Light, vertex: Vertex, normal: Vertex) -> Optional[float]:
        """Diffuse factor of a light on a vertex, or None when out of bounds."""
        to_light = light.position - vertex
        length_sqr = to_light.length_sqr()
        if light.flags & LightFlag.USE_BOUNDS and length_sqr > light.bounds * light.bounds:
            return None
        if light.flags & LightFlag.IGNORE_ANGLE_FULL:
            level = 1.0
        elif light.flags & LightFlag.IGNORE_ANGLE_HALF:
            level = normal.dot(to_light.normalized())
            if level > 0.0:
                level = 1.0
        else:
            level = max(0.0, normal.dot(to_light.normalized()))
        if light.flags & LightFlag.IGNORE_DISTANCE:
            return level
        return level / (
            light.constant
            + light.linear * math.sqrt(length_sqr)
            + light.quadratic * length_sqr
        )

    def light_mesh(
        self,
        mesh: Mesh,
        normals: Optional[list[Vertex]] = None,
        use_lights: bool = True,
    ) -> list[Color]:
        """Lit color of every vertex of the mesh.

        ``normals`` are the per-vertex normals in world space; by default they
        are computed from the mesh. Point lights are applied only when
        ``use_lights`` is true.
        """
        if normals is None:
            normals = mesh.vertex_normals()
        if len(normals) != len(mesh.vertices):
            raise ValueError("one normal is needed for every vertex")
        diffuse = self._ambient(normals)
        if use_lights:
            for light in self.lights:
                if not light.on or not light.flags & LightFlag.USE_DIFFUSE:
                    continue
                for accum, vertex, normal in zip(diffuse, mesh.transformed, normals):
                    k = self._point_factor(light, vertex, normal)
                    if k is None:
                        continue
                    accum[0] += k * light.r
                    accum[1] += k * light.g
                    accum[2] += k * light.b
        return [
            Color(color.r * d[0], color.g * d[1], color.b * d[2], color.a)
            for color, d in zip(mesh.colors, diffuse)
        ]