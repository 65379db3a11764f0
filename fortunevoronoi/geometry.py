"""Basic geometric records used while building a Voronoi graph."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

__all__ = ["Vertex", "Site", "Edge", "HalfEdge", "Cell"]


@dataclass(eq=False)
class Vertex:
    """A 2D point. A vertex with a NaN coordinate counts as undefined."""

    x: float = math.nan
    y: float = math.nan

    @staticmethod
    def undefined() -> Vertex:
        """Return a new vertex with both coordinates undefined."""
        return Vertex(math.nan, math.nan)

    def is_defined(self) -> bool:
        """Return True when neither coordinate is NaN."""
        return not math.isnan(self.x) and not math.isnan(self.y)

    def __bool__(self) -> bool:
        return self.is_defined()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.x != other.x or self.y != other.y

    __hash__ = None  # type: ignore[assignment]


@dataclass(eq=False)
class Site(Vertex):
    """An input point together with the index of the cell built around it."""

    cell: int = -1


@dataclass
class Edge:
    """An edge between two sites; its end points stay undefined until set."""

    left_site: int = -1
    right_site: int = -1
    p0: Vertex = field(default_factory=Vertex.undefined)
    p1: Vertex = field(default_factory=Vertex.undefined)

    def set_startpoint(self, left_site: int, right_site: int, vertex: Vertex) -> None:
        """Set the start point of the edge as seen from ``left_site``."""
        if not self.p0 and not self.p1:
            self.p0 = vertex
            self.left_site = left_site
            self.right_site = right_site
        elif self.left_site == right_site:
            self.p1 = vertex
        else:
            self.p0 = vertex

    def set_endpoint(self, left_site: int, right_site: int, vertex: Vertex) -> None:
        """Set the end point of the edge as seen from ``left_site``."""
        self.set_startpoint(right_site, left_site, vertex)


@dataclass
class HalfEdge:
    """An edge as it relates to a single site, with its angle around it."""

    site: int
    edge: int
    angle: float


@dataclass
class Cell:
    """The region around one site, bounded by its half edges."""

    site: int
    half_edges: list[HalfEdge] = field(default_factory=list)
    close_me: bool = False