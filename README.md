# hexrecon

Reconstructs hexahedral cells from a bare set of points and shows each stage
in a 3D view drawn with matplotlib.

Every point carries the number of neighbours it must connect to. The
reconstruction then runs in three steps:

1. **Build the adjacency graph.** Each point is linked to its nearest
   `required_neighbors` points.
2. **Find faces.** A closed four-cycle in the graph becomes a quadrilateral
   face if its four points are coplanar (within a tolerance of `1e-3`). Both
   squared diagonals must also exceed 1.01 times the longest squared edge.
   Faces with the same set of points are kept once.
3. **Build hexahedra.** A hexahedron is made from two faces that share no
   vertex and are joined by exactly four graph edges, one from each vertex.
   Hexahedra with the same set of points are kept once.

## Installation

```
pip install .
```

## Command

```
hexrecon
```

This opens a window on the built-in sample, which is a 3×1×1 block of cubes
made of sixteen points. The buttons on the right are:

- *Reset / Load Points*
- *Step 1: Build Adjacency Graph*
- *Step 2: Find Faces*
- *Step 3: Build Hexahedra*

Only the next step is available at any time, and the other step buttons are
greyed out. Each result is drawn over the previous ones:

- points are white,
- graph edges are grey,
- faces are translucent blue,
- hexahedra are translucent red.

The reset button clears the results and shows the points again. The view
turns and zooms with matplotlib's usual 3D mouse controls.

Options:

- `--steps N` runs the first `N` steps (0 to 3) before showing.
- `--save FILE` writes the view to `FILE` instead of opening a window.

For example:

```
hexrecon --steps 3 --save hexahedra.png
```

Progress messages are logged to the terminal.

## Library use

The steps are plain functions in `hexrecon.geometry`:

```python
from hexrecon.geometry import build_adjacency_graph, find_valid_faces, build_hexahedra
from hexrecon.app import default_points

points = default_points()
graph = build_adjacency_graph(points)
faces = find_valid_faces(points, graph)
hexahedra = build_hexahedra(faces, graph)
print(len(faces), "faces,", len(hexahedra), "hexahedra")
```

The data types are as follows:

- A point is a `MeshPoint(pos, required_neighbors)`, where `pos` is an
  `(x, y, z)` tuple.
- A graph maps each point index to the set of its neighbours' indices.
- A face is a tuple of four point indices.
- A hexahedron is a tuple of eight point indices. The first four belong to one
  face and the last four to the face opposite it, in matching order.
- `are_points_coplanar(points, face, tolerance=1e-3)` is the planarity test
  used in step 2.

Other modules:

- `hexrecon.app.Session` runs the steps one at a time, in order. It raises
  `StepOrderError` when a step is called out of turn.
  `Session.available_steps()` tells which step may run next.
- `hexrecon.app.render(scene, axes)` draws a scene onto a matplotlib 3D axes.
- `hexrecon.scene.Scene` holds the points, graph, faces and hexahedra. It
  turns them into segments and polygons and reports which layers are visible.
  `hexahedron_faces()` lists the six outward-wound faces of a hexahedron.
- `hexrecon.camera.Camera` is a standalone orbit camera. It provides
  perspective projection, quaternion rotation from mouse drags, wheel zoom, and
  projection of world points to pixels. The viewer does not use it.

## Limitations

Points cannot be loaded from a file. The only input is the built-in sample or
a list of `MeshPoint` objects passed in from Python. Results can be saved as a
picture but not as mesh data.