"""Bounded Voronoi diagrams with Fortune's sweep-line algorithm.

Submodules: rbtree (threaded red-black tree), geometry (vertices, sites,
edges, half edges, cells), graph (clipping and cell closing) and fortune
(the sweep and the build function).
"""

__version__ = "0.1.0"
__all__ = ["rbtree", "geometry", "graph", "fortune"]