"""Meshes, collision bounds and tests, vertex lighting, text menus and configuration for a 3D pinball engine."""

__version__ = "0.1.0"

__all__ = [
    "bounds",
    "collision",
    "config",
    "distance",
    "intersect",
    "lighting",
    "menu",
    "mesh",
]