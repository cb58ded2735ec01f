# emilia3d

Building blocks for a small 3D pinball engine, in plain Python with no
third-party dependencies.

- **`emilia3d.mesh`**: `Vertex` (an immutable 3D vector with `dot`, `cross`,
  `normalized`, `scaled` and `length_sqr`), `Color`, `Polygon` and `Mesh`,
  plus ready-made shapes: `cube`, `sphere`, `big_sphere` (a subdivided
  octahedron), `cylinder`, `cone` and `grid`.
- **`emilia3d.bounds`**: `CollisionBounds`, a hierarchy of boxes that splits a
  mesh into an octree-like tree whose leaves hold the polygons they touch.
- **`emilia3d.distance`**: squared distance from a point to a triangle or to a
  polygon of a mesh (`point_triangle_sqr_distance`,
  `point_polygon_sqr_distance`). Both also return the vector from the point
  to the closest point found.
- **`emilia3d.intersect`**: `polygons_intersect`, a fast test for whether two
  convex polygons cross. Coplanar polygons are reported as not intersecting.
- **`emilia3d.collision`**: `CollisionDetector` with polygon-polygon
  (`detect_collision`) and sphere-polygon (`detect_collision_empty`) tests over
  bounds trees, and the helpers `spheres_intersect`, `sphere_normals` and
  `average_normal`.
- **`emilia3d.lighting`**: `Light`, `LightFlag` and `AmbientLighting`, which
  compute a lit colour for every vertex from a light above the scene and a set
  of point lights with distance attenuation.
- **`emilia3d.menu`**: `MenuSub`, `MenuChoose`, `MenuFunction` and
  `MenuInput`, keyboard-driven menus that return a `MenuAction`.
- **`emilia3d.config`**: `Config` with screen size, volumes, texture filter,
  key bindings and data directories. It reads and writes a plain
  `key: value` settings file and takes options from the command line.

## Shapes

```python
from emilia3d.mesh import Color, cube, big_sphere, cylinder

red = Color(1.0, 0.0, 0.0, 1.0)

box = cube(1.0, red, None)
ball = big_sphere(0.5, 2, red)
tube = cylinder(1.0, 32, red, True)

print(len(box.vertices), len(box.polygons))   # 8 6
```

`big_sphere` with an alpha below 0.95 marks its polygons and the mesh as
transparent. `Mesh.find_vertex` looks up an existing vertex within a
tolerance and returns its index or `None`. `Mesh.apply_transform` maps every
vertex through a function into `Mesh.transformed`, which is what the
collision and lighting code work on.

## Collision

```python
from emilia3d.bounds import CollisionBounds
from emilia3d.collision import CollisionDetector
from emilia3d.mesh import Color, cube

mesh = cube(2.0, Color(1.0, 1.0, 1.0, 1.0), None)
bounds = CollisionBounds(2.0)
bounds.set_mesh(mesh, 3)        # split three levels deep, drop empty boxes
for line in bounds.tree_lines(0):
    print(line)

ball = CollisionBounds(0.2, 0.0, 1.0, 0.0)   # a bounds without a mesh
offset = CollisionDetector().detect_collision_empty(ball, bounds)
```

`detect_collision_empty` returns the vector from the centre of the first
bounds to the nearest touched polygon, or `None`. After a detection the
touched polygons are kept on the detector as `(mesh, polygon)` pairs in
`polygons1` and `polygons2`.

## Lighting

```python
from emilia3d.lighting import AmbientLighting, Light
from emilia3d.mesh import Vertex, cube

lighting = AmbientLighting()
lighting.set_lighting(0.5, 0.1)
lighting.add(Light(position=Vertex(5.0, 0.0, 0.0)))
colors = lighting.light_mesh(cube(1.0))
```

## Menus

Menus draw through a screen object you supply (with `clear_screen`,
`draw_splash`, `print_row_center` and `swap`) and read keys from a keyboard
object (with `wait_for_key` and `clear`); key codes are those of
`emilia3d.config.Key`. `MenuSub.perform` returns `MenuAction.EXIT`,
`MenuAction.RESUME` or `MenuAction.NOP` to its caller.

## Configuration

```python
from emilia3d.config import Config, Key

config = Config()
config.set_size(800, 600)       # clamped to 100..1600 by 100..1200
config.set_sound(12)            # clamped to 0..8
config.set_key("launch", Key.RETURN)
remaining = config.load_args(["game", "--fullscreen", "--nosound", "table"])
config.save("settings.cfg")
```

`Config.load_args` removes the options it knows about (`--fullscreen`,
`--size W H`, `--bpp N`, `--nosound`, `--nolights`, `--nearest`,
`--externgl`) and returns the arguments that are left; `-dir` prints the
install directory and exits. `Config.load` resets to defaults and reads a
settings file, falling back to a system-wide one. `default_config_path()`
gives the per-user location of the settings file.

## What this package does not do

It draws nothing itself: there is no window, renderer, texture loading,
sound or game loop, and no command to run. Menus only call the screen and
keyboard objects they are given. There are no billboards and no path or
texture animation.

## Tests

The test suite uses pytest; install the `test` extra to get it.