# fortunevoronoi

Voronoi diagrams of points inside the rectangle `[0, x_bound] × [0, y_bound]`,
computed with Fortune's sweep-line algorithm. The result is a `Graph` of
sites, edges and cells. Cells touched by the bounding box are closed with
border edges along the box.

Pure Python, no dependencies.

## Installation

```
pip install .
```

## Usage

```python
from fortunevoronoi.fortune import build
from fortunevoronoi.geometry import Site

sites = [Site(20.0, 30.0), Site(70.0, 40.0), Site(50.0, 80.0)]
graph = build(sites, 100.0, 100.0)

for cell in graph.cells:
    site = graph.sites[cell.site]
    print(f"cell around ({site.x}, {site.y}):")
    for half_edge in cell.half_edges:
        start = graph.half_edge_startpoint(half_edge)
        end = graph.half_edge_endpoint(half_edge)
        print(f"  ({start.x:.2f}, {start.y:.2f}) -> ({end.x:.2f}, {end.y:.2f})")
```

`build(sites, x_bound, y_bound)` accepts any iterable of `Vertex`/`Site`
objects or `(x, y)` tuples. Sites equal to the one directly before them in
the input are skipped.

### What the graph holds

- `graph.sites` — the input points as `Site` objects. Each records in
  `cell` the index of its cell (`-1` for a skipped duplicate).
- `graph.edges` — `Edge` objects with `left_site`, `right_site`, `p0` and
  `p1`. Edges that fall outside the box or collapse to a point stay in the
  list, so indices remain stable, but their end points are undefined;
  `Vertex.is_defined()` (or the truth value of a `Vertex`) tells them apart.
  Border edges added while closing cells have `right_site == -1`.
- `graph.cells` — `Cell` objects with the index of their site and a list of
  `HalfEdge` records (`site`, `edge`, `angle`). Half edges of undefined
  edges are dropped, the rest are sorted by descending angle, and border
  half edges are inserted where a cell meets the box.
- `graph.half_edge_startpoint(h)` / `graph.half_edge_endpoint(h)` — the end
  points of a half edge as seen from its own site.

### Building blocks

- `fortunevoronoi.rbtree` — `RBNode` and `RBTree`, a red-black tree whose
  nodes are also linked in order through `previous` / `next`. Nodes are
  placed with `insert(node, successor)` (after `node`, or at the front when
  `node` is `None`) and taken out with `remove(node)`; `first()`, `len()` and
  iteration walk the nodes in order.
- `fortunevoronoi.geometry` — `Vertex`, `Site`, `Edge`, `HalfEdge`, `Cell`.
- `fortunevoronoi.graph` — `Graph` with edge creation, connecting and
  clipping to the box (`connect_edge`, `clip_edge`, `clip_edges`) and cell
  closing (`prepare_half_edges`, `close_cells`); the tolerance `EPSILON`.
- `fortunevoronoi.fortune` — the sweep (`Fortune`, `BeachArc`,
  `CircleEvent`) and `build`.

## What it does not do

This is a library only: there is no command-line tool, no drawing or
export of diagrams, and no Delaunay triangulation or Lloyd relaxation.
Coordinates are always measured from the origin; the box cannot be offset.

## Running the tests

```
pip install .[test]
pytest
```