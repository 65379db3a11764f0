"""Voronoi graph container: edges, cells, clipping and cell closing."""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from fortunevoronoi.geometry import Cell, Edge, HalfEdge, Site, Vertex

__all__ = ["EPSILON", "Graph"]

EPSILON = 1e-4


class _Side(Enum):
    LEFT = "left"
    BOTTOM = "bottom"
    RIGHT = "right"
    TOP = "top"


class Graph:
    """Sites, edges and cells of a Voronoi diagram inside ``[0, x_bound] x [0, y_bound]``."""

    def __init__(
        self,
        x_bound: float = 0.0,
        y_bound: float = 0.0,
        sites: Optional[list[Site]] = None,
    ) -> None:
        self.x_bound = float(x_bound)
        self.y_bound = float(y_bound)
        self.sites: list[Site] = list(sites) if sites is not None else []
        self.edges: list[Edge] = []
        self.cells: list[Cell] = []

    # ------------------------------------------------------------------
    # edge creation

    def create_edge(
        self,
        left: int,
        right: int,
        va: Optional[Vertex] = None,
        vb: Optional[Vertex] = None,
    ) -> int:
        """Create an edge between two sites and register its half edges."""
        edge = Edge(left, right)
        self.edges.append(edge)
        index = len(self.edges) - 1

        if va is not None and va.is_defined():
            edge.set_startpoint(left, right, va)
        if vb is not None and vb.is_defined():
            edge.set_endpoint(left, right, vb)

        left_cell = self.sites[left].cell
        right_cell = self.sites[right].cell
        self.cells[left_cell].half_edges.append(self.create_half_edge(index, left, right))
        self.cells[right_cell].half_edges.append(self.create_half_edge(index, right, left))
        return index

    def create_border_edge(self, site: int, va: Vertex, vb: Vertex) -> int:
        """Create an edge lying on the bounding box, owned by ``site`` alone."""
        self.edges.append(
            Edge(site, -1, p0=Vertex(va.x, va.y), p1=Vertex(vb.x, vb.y))
        )
        return len(self.edges) - 1

    def create_half_edge(self, edge: int, left_site: int, right_site: int) -> HalfEdge:
        """Build the half edge of ``edge`` as seen from ``left_site``."""
        here = self.sites[left_site]
        if right_site >= 0:
            there = self.sites[right_site]
            angle = math.atan2(there.y - here.y, there.x - here.x)
        else:
            ref = self.edges[edge]
            if ref.left_site == left_site:
                angle = math.atan2(ref.p1.x - ref.p0.x, ref.p0.y - ref.p1.y)
            else:
                angle = math.atan2(ref.p0.x - ref.p1.x, ref.p1.y - ref.p0.y)
        return HalfEdge(site=left_site, edge=edge, angle=angle)

    # ------------------------------------------------------------------
    # clipping

    def connect_edge(self, edge_index: int) -> bool:
        """Connect a dangling edge to the bounding box; False if it misses the box."""
        edge = self.edges[edge_index]
        if edge.p1.is_defined():
            return True

        xl, xr, yt, yb = 0.0, self.x_bound, 0.0, self.y_bound
        left_site = self.sites[edge.left_site]
        right_site = self.sites[edge.right_site]
        lx, ly = left_site.x, left_site.y
        rx, ry = right_site.x, right_site.y
        fx = (lx + rx) / 2
        fy = (ly + ry) / 2

        self.cells[left_site.cell].close_me = True
        self.cells[right_site.cell].close_me = True

        p0 = edge.p0
        if ry == ly:
            if fx < xl or fx >= xr:
                return False
            if lx > rx:
                if not p0 or p0.x < yt:
                    p0 = Vertex(fx, yt)
                elif p0.y >= yb:
                    return False
                p1 = Vertex(fx, yb)
            else:
                if not p0 or p0.y > yb:
                    p0 = Vertex(fx, yb)
                elif p0.y < yt:
                    return False
                p1 = Vertex(fx, yt)
        else:
            fm = (lx - rx) / (ry - ly)
            fb = fy - fm * fx
            if fm < -1.0 or fm > 1.0:
                if lx > rx:
                    if not p0 or p0.y < yt:
                        p0 = Vertex((yt - fb) / fm, yt)
                    elif p0.y >= yb:
                        return False
                    p1 = Vertex((yb - fb) / fm, yb)
                else:
                    if not p0 or p0.y > yb:
                        p0 = Vertex((yb - fb) / fm, yb)
                    elif p0.y < yt:
                        return False
                    p1 = Vertex((yt - fb) / fm, yt)
            else:
                if ly < ry:
                    if not p0 or p0.x < xl:
                        p0 = Vertex(xl, fm * xl + fb)
                    elif p0.x >= xr:
                        return False
                    p1 = Vertex(xr, fm * xr + fb)
                else:
                    if not p0 or p0.x > xr:
                        p0 = Vertex(xr, fm * xr + fb)
                    elif p0.x < xl:
                        return False
                    p1 = Vertex(xl, fm * xl + fb)

        edge.p0 = p0
        edge.p1 = p1
        return True

    def clip_edge(self, edge_index: int) -> bool:
        """Clip an edge to the bounding box (Liang-Barsky); False if it lies outside."""
        edge = self.edges[edge_index]
        ax, ay = edge.p0.x, edge.p0.y
        bx, by = edge.p1.x, edge.p1.y
        dx = bx - ax
        dy = by - ay
        t0, t1 = 0.0, 1.0

        # Each boundary: (distance q, direction d, sign of the parameter).
        for q, d, entering_when_negative in (
            (ax, dx, False),
            (self.x_bound - ax, dx, True),
            (ay, dy, False),
            (self.y_bound - ay, dy, True),
        ):
            if d == 0.0:
                if q < 0:
                    return False
                continue
            r = q / d if entering_when_negative else -q / d
            limits_end = (d < 0.0) != entering_when_negative
            if limits_end:
                if r < t0:
                    return False
                if r < t1:
                    t1 = r
            else:
                if r > t1:
                    return False
                if r > t0:
                    t0 = r

        if t0 > 0.0:
            edge.p0 = self._snapped(ax + t0 * dx, ay + t0 * dy)
        if t1 < 1.0:
            edge.p1 = self._snapped(ax + t1 * dx, ay + t1 * dy)

        if t0 > 0.0 or t1 < 1.0:
            self.cells[self.sites[edge.left_site].cell].close_me = True
            self.cells[self.sites[edge.right_site].cell].close_me = True
        return True

    @staticmethod
    def _snapped(x: float, y: float) -> Vertex:
        return Vertex(0.0 if x < EPSILON else x, 0.0 if y < EPSILON else y)

    def clip_edges(self) -> None:
        """Connect and clip every edge; edges outside the box or point-like become undefined."""
        for index, edge in enumerate(self.edges):
            if (
                not self.connect_edge(index)
                or not self.clip_edge(index)
                or (
                    abs(edge.p0.x - edge.p1.x) < EPSILON
                    and abs(edge.p0.y - edge.p1.y) < EPSILON
                )
            ):
                edge.p0 = Vertex.undefined()
                edge.p1 = Vertex.undefined()

    # ------------------------------------------------------------------
    # cells

    def half_edge_startpoint(self, half_edge: HalfEdge) -> Vertex:
        """Return the start point of a half edge, relative to its site."""
        edge = self.edges[half_edge.edge]
        return edge.p0 if edge.left_site == half_edge.site else edge.p1

    def half_edge_endpoint(self, half_edge: HalfEdge) -> Vertex:
        """Return the end point of a half edge, relative to its site."""
        edge = self.edges[half_edge.edge]
        return edge.p1 if edge.left_site == half_edge.site else edge.p0

    def prepare_half_edges(self, cell_index: int) -> bool:
        """Drop half edges of undefined edges, sort by descending angle; True if any remain."""
        if cell_index >= len(self.cells):
            return False
        cell = self.cells[cell_index]
        kept = [
            half_edge
            for half_edge in cell.half_edges
            if self.edges[half_edge.edge].p0.is_defined()
            and self.edges[half_edge.edge].p1.is_defined()
        ]
        kept.sort(key=lambda half_edge: half_edge.angle, reverse=True)
        cell.half_edges = kept
        return bool(kept)

    def close_cells(self) -> None:
        """Add border edges so that every open cell forms a closed loop."""
        for cell_index in reversed(range(len(self.cells))):
            if not self.prepare_half_edges(cell_index):
                continue
            cell = self.cells[cell_index]
            if not cell.close_me:
                continue

            half_edges = cell.half_edges
            i_left = 0
            while i_left < len(half_edges):
                va = self.half_edge_endpoint(half_edges[i_left])
                vz = self.half_edge_startpoint(half_edges[(i_left + 1) % len(half_edges)])
                if abs(va.x - vz.x) >= EPSILON or abs(va.y - vz.y) >= EPSILON:
                    i_left = self._fill_gap(cell, i_left, va, vz)
                i_left += 1
            cell.close_me = False

    def _fill_gap(self, cell: Cell, i_left: int, va: Vertex, vz: Vertex) -> int:
        last = False
        for side in (_Side.LEFT, _Side.BOTTOM, _Side.RIGHT, _Side.TOP):
            if not last and self._can_walk(side, va):
                last, vb = self._border_step(side, vz)
                i_left = self._insert_border(cell, i_left, va, vb)
                if not last:
                    va = vb
        for side in (_Side.LEFT, _Side.BOTTOM, _Side.RIGHT):
            if not last:
                last, vb = self._border_step(side, vz)
                i_left = self._insert_border(cell, i_left, va, vb)
                if not last:
                    va = vb
        return i_left

    def _can_walk(self, side: _Side, va: Vertex) -> bool:
        xl, xr, yt, yb = 0.0, self.x_bound, 0.0, self.y_bound
        if side is _Side.LEFT:
            return abs(va.x - xl) < EPSILON and (yb - va.y) > EPSILON
        if side is _Side.BOTTOM:
            return abs(va.y - yb) < EPSILON and (xr - va.x) > EPSILON
        if side is _Side.RIGHT:
            return abs(va.x - xr) < EPSILON and (va.y - yt) > EPSILON
        return abs(va.y - yt) < EPSILON and (va.x - xl) > EPSILON

    def _border_step(self, side: _Side, vz: Vertex) -> tuple[bool, Vertex]:
        xl, xr, yt, yb = 0.0, self.x_bound, 0.0, self.y_bound
        if side is _Side.LEFT:
            last = abs(vz.x - xl) < EPSILON
            return last, Vertex(xl, vz.y if last else yb)
        if side is _Side.BOTTOM:
            last = abs(vz.y - yb) < EPSILON
            return last, Vertex(vz.x if last else xr, yb)
        if side is _Side.RIGHT:
            last = abs(vz.x - xr) < EPSILON
            return last, Vertex(xr, vz.y if last else yt)
        last = abs(vz.y - yt) < EPSILON
        return last, Vertex(vz.x if last else xl, yt)

    def _insert_border(self, cell: Cell, i_left: int, va: Vertex, vb: Vertex) -> int:
        edge_index = self.create_border_edge(cell.site, va, vb)
        i_left += 1
        cell.half_edges.insert(i_left, self.create_half_edge(edge_index, cell.site, -1))
        return i_left