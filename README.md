# defillet

Pure-Python building blocks for working with triangle meshes. There are no
runtime dependencies.

## Modules

### `defillet.point3d`

`Point3D` is an immutable, lexicographically ordered 3D point/vector that can
be unpacked as `x, y, z`. It supports `+`, `-`, unary `-`, multiplication and
division by a number, and the methods `cross`, `dot`, `length`, `normalized`
(a zero vector raises `ZeroDivisionError`) and `rotate` (returns `(z, x, y)`).

Helper functions:

- `vector_cross(pt1, pt2, pt3)` – cross product of the edges pt1→pt2 and pt2→pt3.
- `triangle_area(pt1, pt2, pt3)` – area of a triangle.
- `angle_between(u, v)` – angle in radians between two vectors.
- `turning_angle(pt1, pt2, pt3)` – angle between the segments pt1→pt2 and pt2→pt3.
- `combine(pt1, coef1, pt2, coef2)` – the linear combination `coef1 * pt1 + coef2 * pt2`.

### `defillet.mesh_model`

`BaseModel(filename)` holds a triangle mesh in `verts`, `faces` (vertex index
triples), `normals`, `scale` and `useless_faces` (face indices left out when
writing).

- `load()` reads the file named at construction and calls
  `compute_scale_and_normals()`, which sets unit vertex normals and `scale`,
  half the largest extent of the bounding box.
- `read(filename)` picks a parser by extension: `read_obj`, `read_off` or
  `read_m`. Polygons are fan-triangulated. A name without a dot, an unknown
  extension or malformed data raises `MeshFormatError` (a `ValueError`).
- `save_m`, `save_off` and `save_obj` write the mesh.
- `save_scalar_field_obj(values, filename, comments=None, max_value=None)`
  writes an OBJ file with one `vt` line per value; with `max_value` the values
  are divided by it, and `comments` replaces the default header line.
- `save_parametrization_obj(uvs, filename)` writes an OBJ file with the given
  `(u, v)` texture coordinates.
- `print_info(out=None)` prints a short summary (to standard output by default).
- `vertex_id(point)` returns the index of the nearest vertex.
- `short_name()` and `short_name_without_extension()` return the file name
  after the last backslash.

The module functions `read_scalar_field(filename)` and `read_comments(filename)`
read back the `vt` values and the `#` comment lines of a written file.

### `defillet.maxflow`

`Graph` computes a maximum flow / minimum s-t cut by growing search trees from
both terminals.

- `add_node(count=1)` adds nodes and returns the index of the first.
- `add_edge(i, j, capacity, reverse_capacity)` adds an edge pair.
- `add_tweights(i, cap_source, cap_sink)` adds terminal capacities.
- `maxflow(reuse_trees=False, changed_list=None)` returns the total flow.
  With `reuse_trees=True` the search trees of the previous call are kept;
  nodes whose terminal capacities changed must first be passed to
  `mark_node(i)`. Indices of nodes whose side may have changed are appended to
  `changed_list`. Using `reuse_trees` on the first call, or `changed_list`
  without `reuse_trees`, raises `ValueError`.
- `what_segment(i, default_segment=Segment.SOURCE)` returns `Segment.SOURCE`
  or `Segment.SINK`.
- `copy()` returns an independent copy including the search trees;
  `check_consistency()` raises `AssertionError` if a tree invariant is broken.
- The properties `flow`, `node_count` and `edge_count` describe the graph.

### `defillet.segmenter`

`segment(vertices, faces, labels, label)` builds a `SegmentedMesh` from the
faces whose label equals `label`. Vertices keep the order of their original
indices, and `original_vertex_index` / `original_face_index` map back into the
input mesh.

## Examples

```python
from defillet.mesh_model import BaseModel

model = BaseModel("part.obj")
model.load()
model.print_info()
model.save_off("part.off")
```

```python
from defillet.maxflow import Graph, Segment

g = Graph()
first = g.add_node(2)
g.add_tweights(first, 5, 1)
g.add_tweights(first + 1, 1, 5)
g.add_edge(first, first + 1, 3, 3)
print(g.maxflow())                              # 5
print(g.what_segment(first) is Segment.SOURCE)  # True
```

```python
from defillet.segmenter import segment

vertices = [(0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 1, 0)]
faces = [(0, 1, 2), (1, 3, 2)]
part = segment(vertices, faces, labels=[0, 1], label=1)
print(part.faces)                  # [(0, 2, 1)]
print(part.original_vertex_index)  # [1, 2, 3]
```

## What the package does not do

It is a library only: there is no command-line program and no viewer. It does
not compute geodesic distances on meshes, and it does not detect or remove
fillets by itself; the pieces above are meant to be combined by your own code.

## Installation and tests

```
pip install .
pip install .[test]
pytest
```