# roundedbox

Generates triangle meshes for boxes whose edges and corners are rounded off
with a given radius. Each mesh holds vertex positions, normals and triangle
indices. It can also hold texture coordinates and a face index for each vertex.

## Installation

```
pip install roundedbox
```

The package has no runtime dependencies.

## Usage

```python
from roundedbox.mesh import RoundedBox

mesh = (
    RoundedBox(size=(2.0, 2.0, 2.0), radius=0.4)
    .mesh()
    .with_subdivisions(6)
    .with_uv()
    .with_face()
    .build()
)

print(mesh.count_vertices())
for a, b, c in mesh.triangles():
    print(mesh.positions[a], mesh.positions[b], mesh.positions[c])
```

`RoundedBox()` with no arguments is a unit cube with a radius of 0.1. The size
must have three components, or `ValueError` is raised.
`RoundedBox.to_mesh()` builds a mesh with the default settings in one step.

### Builder settings

`RoundedBox.mesh()` returns a `RoundedBoxMeshBuilder`. Its methods return a
new builder each time:

- `with_subdivisions(n)`: how many sectors and stacks each rounded corner is
  split into. The default is 4. `build()` raises `ValueError` if it is not
  positive. When UVs or faces are generated, an odd count is rounded up to the
  next even one.
- `with_uv()`: fills `Mesh.uvs` with a texture coordinate for each vertex.
  Each of the six faces is laid out over the unit square.
- `with_face()`: fills `Mesh.faces` with a face index for each vertex. The +Z
  and -Z faces are numbered 0 and 5, and the four side faces 1 to 4.
- `with_options(options)`: replaces the options with a
  `RoundedBoxMeshOptions` value, which has its own `with_uv()` and
  `with_face()`.

If UVs or faces are asked for, vertices are duplicated along the face
boundaries so that each face has its own attributes. Otherwise the mesh is one
closed surface with shared vertices.

### The mesh

`Mesh` has the lists `positions`, `normals` and `indices`, and `uvs` and
`faces`, which are `None` unless they were asked for. `topology` is always
`PrimitiveTopology.TRIANGLE_LIST`. `count_vertices()` gives the number of
vertices and `triangles()` yields the indices of each triangle as a tuple of
three.

The layout of the vertex grid is worked out by
`roundedbox.indexer.PhysicalIndexer`, which the builder uses internally.

## What it does not do

The package only produces mesh data in memory. It does not render meshes,
and it does not read or write any mesh file format.

## Running the tests

```
pip install -e ".[test]"
pytest
```