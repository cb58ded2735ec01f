import math

import pytest

from emilia3d.bounds import CollisionBounds
from emilia3d.mesh import Mesh, Vertex, cube


def _leaves(bounds):
    if not bounds.children:
        return [bounds]
    result = []
    for child in bounds.children:
        result.extend(_leaves(child))
    return result


def _all_nodes(bounds):
    nodes = [bounds]
    for child in bounds.children:
        nodes.extend(_all_nodes(child))
    return nodes


def test_radius_is_size_times_sqrt3():
    bounds = CollisionBounds(2.0, 1.0, 2.0, 3.0)
    assert bounds.radius == pytest.approx(2.0 * math.sqrt(3.0))
    assert bounds.src == Vertex(1.0, 2.0, 3.0)
    assert bounds.trans == bounds.src


def test_split_level_one_does_nothing():
    bounds = CollisionBounds(1.0)
    bounds.split(1)
    assert bounds.children == []


def test_split_creates_eight_half_size_children():
    bounds = CollisionBounds(2.0)
    bounds.split(2)
    assert len(bounds.children) == 8
    assert all(child.box_size == 1.0 for child in bounds.children)
    centers = {tuple(child.src) for child in bounds.children}
    expected = {(a, b, c) for a in (-1.0, 1.0) for b in (-1.0, 1.0) for c in (-1.0, 1.0)}
    assert centers == expected


def test_split_three_levels_gives_64_leaves():
    bounds = CollisionBounds(4.0)
    bounds.split(3)
    assert len(_leaves(bounds)) == 64


def test_surround_full_partial_and_none():
    mesh = cube(1.0)
    polygon = mesh.polygons[0]
    full = CollisionBounds(1.0)
    full.mesh = mesh
    far = CollisionBounds(1.0, 5.0, 0.0, 0.0)
    far.mesh = mesh
    partial = CollisionBounds(0.6, 1.0, 0.0, 0.0)
    partial.mesh = mesh
    assert full.surround(polygon) == 2
    assert far.surround(polygon) == 0
    assert partial.surround(polygon) == 1


def test_surround_without_mesh_is_zero():
    mesh = cube(1.0)
    assert CollisionBounds(1.0).surround(mesh.polygons[0]) == 0
    assert CollisionBounds(1.0).intersect(mesh.polygons[0]) is False


def test_intersect_far_and_near():
    mesh = cube(1.0)
    near = CollisionBounds(0.3, 0.5, 0.5, 0.5)
    near.mesh = mesh
    far = CollisionBounds(0.3, 3.0, 3.0, 3.0)
    far.mesh = mesh
    touched = [near.intersect(p) for p in mesh.polygons]
    assert any(touched)
    assert not any(far.intersect(p) for p in mesh.polygons)


def test_set_mesh_single_level_holds_all_polygons():
    mesh = cube(1.0)
    bounds = CollisionBounds(1.0)
    bounds.set_mesh(mesh, 1)
    assert bounds.has_mesh
    assert bounds.children == []
    assert bounds.polygons == mesh.polygons


def test_set_mesh_none_is_ignored():
    bounds = CollisionBounds(1.0)
    bounds.set_mesh(None, 3)
    assert bounds.has_mesh is False
    assert bounds.children == []


def test_set_mesh_two_levels_every_polygon_in_a_leaf():
    mesh = cube(1.0)
    bounds = CollisionBounds(1.0)
    bounds.set_mesh(mesh, 2)
    assert 0 < len(bounds.children) <= 8
    leaves = _leaves(bounds)
    assert all(leaf.polygons for leaf in leaves)
    stored = [id(p) for leaf in leaves for p in leaf.polygons]
    assert {id(p) for p in mesh.polygons} <= set(stored)
    assert all(node.mesh is mesh for node in _all_nodes(bounds))


def test_set_mesh_replaces_previous_tree():
    bounds = CollisionBounds(1.0)
    bounds.set_mesh(cube(1.0), 2)
    first_count = len(_all_nodes(bounds))
    bounds.set_mesh(cube(1.0), 2)
    assert len(_all_nodes(bounds)) == first_count


def test_remove_empty_prunes_fresh_split():
    bounds = CollisionBounds(1.0)
    bounds.split(3)
    assert bounds.remove_empty() is True
    assert bounds.children == []


def test_add_surround_goes_to_one_leaf():
    mesh = Mesh()
    for point in ((0.1, 0.1, 0.1), (0.2, 0.1, 0.1), (0.1, 0.2, 0.1)):
        mesh.add_vertex(*point)
    polygon = mesh.add_polygon((0, 1, 2))
    bounds = CollisionBounds(1.0)
    bounds.mesh = mesh
    bounds.split(2)
    assert bounds.add_surround(polygon) is True
    holders = [leaf for leaf in _leaves(bounds) if leaf.polygons]
    assert len(holders) == 1


def test_add_surround_rejects_none():
    with pytest.raises(ValueError):
        CollisionBounds(1.0).add_surround(None)
    with pytest.raises(ValueError):
        CollisionBounds(1.0).add_intersect(None)


def test_transform_moves_every_node():
    bounds = CollisionBounds(2.0, 1.0, 0.0, 0.0)
    bounds.split(2)
    shift = Vertex(0.0, 5.0, 0.0)
    bounds.transform(lambda v: v + shift)
    for node in _all_nodes(bounds):
        assert node.trans == node.src + shift


def test_tree_lines_describes_tree():
    bounds = CollisionBounds(1.0)
    bounds.set_mesh(cube(1.0), 1)
    assert bounds.tree_lines() == ["CollisionBounds 6 polygons"]
    bounds.split(2)
    lines = bounds.tree_lines()
    assert len(lines) == 9
    assert all(line.startswith("  CollisionBounds") for line in lines[1:])