"""Fortune's sweep-line algorithm producing a bounded Voronoi :class:`Graph`."""

from __future__ import annotations

import math
from typing import Iterable, Optional, Union

from fortunevoronoi.geometry import Cell, Site, Vertex
from fortunevoronoi.graph import EPSILON, Graph
from fortunevoronoi.rbtree import RBNode, RBTree

__all__ = ["BeachArc", "CircleEvent", "Fortune", "build"]


def _div(numerator: float, denominator: float) -> float:
    """Divide with IEEE semantics instead of raising on a zero denominator."""
    if denominator != 0.0:
        return numerator / denominator
    if numerator == 0.0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


class BeachArc(RBNode):
    """A parabolic section of the beach line belonging to one site."""

    def __init__(self, site: int) -> None:
        super().__init__()
        self.site = site
        self.edge = -1
        self.circle_event: Optional[CircleEvent] = None


class CircleEvent(RBNode):
    """A pending collapse of a beach arc at the bottom of a circumcircle."""

    def __init__(self, arc: BeachArc) -> None:
        super().__init__()
        self.arc = arc
        self.site = -1
        self.x = 0.0
        self.y = 0.0
        self.y_center = 0.0


class Fortune:
    """Beach line and circle event queue that fill the edges of a graph."""

    def __init__(self, graph: Graph) -> None:
        self._graph = graph
        self.beachline: RBTree[BeachArc] = RBTree()
        self.circle_events: RBTree[CircleEvent] = RBTree()
        self._top_circle_event: Optional[CircleEvent] = None

    @property
    def top_circle_event(self) -> Optional[CircleEvent]:
        """The circle event with the smallest y, or None."""
        return self._top_circle_event

    # ------------------------------------------------------------------
    # break points

    def left_break_point(self, arc: BeachArc, directrix: float) -> float:
        """Return the x of the break point on the left of ``arc``."""
        sites = self._graph.sites
        site = sites[arc.site]
        rfocx, rfocy = site.x, site.y
        pby2 = rfocy - directrix
        if pby2 == 0.0:
            return rfocx
        left_arc = arc.previous
        if left_arc is None:
            return -math.inf

        left_site = sites[left_arc.site]
        lfocx, lfocy = left_site.x, left_site.y
        plby2 = lfocy - directrix
        if plby2 == 0.0:
            return lfocx
        hl = lfocx - rfocx
        aby2 = 1 / pby2 - 1 / plby2
        b = hl / plby2
        if aby2 != 0.0:
            disc = b * b - 2 * aby2 * (
                hl * hl / (-2 * plby2) - lfocy + plby2 / 2 + rfocy - pby2 / 2
            )
            dist = math.sqrt(disc) if disc >= 0 else math.nan
            return (-b + dist) / aby2 + rfocx
        return (rfocx + lfocx) / 2

    def right_break_point(self, arc: BeachArc, directrix: float) -> float:
        """Return the x of the break point on the right of ``arc``."""
        right_arc = arc.next
        if right_arc is not None:
            return self.left_break_point(right_arc, directrix)
        site = self._graph.sites[arc.site]
        return site.x if site.y == directrix else math.inf

    # ------------------------------------------------------------------
    # circle events

    def _attach_circle_event(self, arc: BeachArc) -> None:
        left_arc = arc.previous
        right_arc = arc.next
        if left_arc is None or right_arc is None:
            return
        if left_arc.site == right_arc.site:
            return

        sites = self._graph.sites
        left_site = sites[left_arc.site]
        center_site = sites[arc.site]
        right_site = sites[right_arc.site]

        bx, by = center_site.x, center_site.y
        ax, ay = left_site.x - bx, left_site.y - by
        cx, cy = right_site.x - bx, right_site.y - by

        # Clockwise triplets never converge.
        d = 2 * (ax * cy - ay * cx)
        if d >= -2e-9:
            return

        ha = ax * ax + ay * ay
        hc = cx * cx + cy * cy
        x = (cy * ha - ay * hc) / d
        y = (ax * hc - cx * ha) / d
        y_center = y + by

        event = CircleEvent(arc)
        event.site = arc.site
        event.x = x + bx
        event.y = y_center + math.sqrt(x * x + y * y)
        event.y_center = y_center
        arc.circle_event = event

        predecessor: Optional[CircleEvent] = None
        node = self.circle_events.root
        while node is not None:
            if event.y < node.y or (event.y == node.y and event.x <= node.x):
                if node.left is not None:
                    node = node.left
                else:
                    predecessor = node.previous
                    break
            else:
                if node.right is not None:
                    node = node.right
                else:
                    predecessor = node
                    break
        self.circle_events.insert(predecessor, event)
        if predecessor is None:
            self._top_circle_event = event

    def _detach_circle_event(self, arc: BeachArc) -> None:
        event = arc.circle_event
        if event is None:
            return
        if event.previous is None:
            self._top_circle_event = event.next
        self.circle_events.remove(event)
        arc.circle_event = None

    def _detach_beach_section(self, arc: BeachArc) -> None:
        self._detach_circle_event(arc)
        self.beachline.remove(arc)

    # ------------------------------------------------------------------
    # beach line updates

    def add_beach_section(self, site_index: int) -> None:
        """Insert the arc of a new site into the beach line."""
        graph = self._graph
        site = graph.sites[site_index]
        x, directrix = site.x, site.y

        left_arc: Optional[BeachArc] = None
        right_arc: Optional[BeachArc] = None
        node = self.beachline.root
        while node is not None:
            dxl = self.left_break_point(node, directrix) - x
            if dxl > EPSILON:
                node = node.left
                continue
            dxr = x - self.right_break_point(node, directrix)
            if dxr > EPSILON:
                if node.right is None:
                    left_arc = node
                    break
                node = node.right
                continue
            if dxl > -EPSILON:
                left_arc = node.previous
                right_arc = node
            elif dxr > -EPSILON:
                left_arc = node
                right_arc = node.next
            else:
                left_arc = right_arc = node
            break

        new_arc = BeachArc(site_index)
        self.beachline.insert(left_arc, new_arc)

        if left_arc is None and right_arc is None:
            return

        if left_arc is right_arc:
            self._detach_circle_event(left_arc)
            right_arc = BeachArc(left_arc.site)
            self.beachline.insert(new_arc, right_arc)
            edge = graph.create_edge(left_arc.site, new_arc.site)
            new_arc.edge = right_arc.edge = edge
            self._attach_circle_event(left_arc)
            self._attach_circle_event(right_arc)
            return

        if left_arc is not None and right_arc is None:
            new_arc.edge = graph.create_edge(left_arc.site, new_arc.site)
            return

        if left_arc is None:
            # Only reachable with inconsistent break points; nothing to connect.
            return

        self._detach_circle_event(left_arc)
        self._detach_circle_event(right_arc)

        sites = graph.sites
        left_site = sites[left_arc.site]
        ax, ay = left_site.x, left_site.y
        bx, by = site.x - ax, site.y - ay
        right_site = sites[right_arc.site]
        cx, cy = right_site.x - ax, right_site.y - ay
        d = 2 * (bx * cy - by * cx)
        hb = bx * bx + by * by
        hc = cx * cx + cy * cy
        vertex = Vertex(ax + _div(cy * hb - by * hc, d), ay + _div(bx * hc - cx * hb, d))

        graph.edges[right_arc.edge].set_startpoint(left_arc.site, right_arc.site, vertex)
        new_arc.edge = graph.create_edge(left_arc.site, site_index, None, vertex)
        right_arc.edge = graph.create_edge(site_index, right_arc.site, None, vertex)

        self._attach_circle_event(left_arc)
        self._attach_circle_event(right_arc)

    def remove_beach_section(self, arc: BeachArc) -> None:
        """Collapse ``arc`` at its circle event, creating a Voronoi vertex."""
        event = arc.circle_event
        x, y = event.x, event.y_center
        vertex = Vertex(x, y)

        previous = arc.previous
        following = arc.next
        detached = [arc]
        self._detach_beach_section(arc)

        def collapses_here(candidate: BeachArc) -> bool:
            ce = candidate.circle_event
            return (
                ce is not None
                and abs(x - ce.x) < EPSILON
                and abs(y - ce.y_center) < EPSILON
            )

        left_arc = previous
        while collapses_here(left_arc):
            previous = left_arc.previous
            detached.insert(0, left_arc)
            self._detach_beach_section(left_arc)
            left_arc = previous
        detached.insert(0, left_arc)
        self._detach_circle_event(left_arc)

        right_arc = following
        while collapses_here(right_arc):
            following = right_arc.next
            detached.append(right_arc)
            self._detach_beach_section(right_arc)
            right_arc = following
        detached.append(right_arc)
        self._detach_circle_event(right_arc)

        edges = self._graph.edges
        for left, right in zip(detached, detached[1:]):
            edges[right.edge].set_startpoint(left.site, right.site, vertex)

        left_arc = detached[0]
        right_arc = detached[-1]
        right_arc.edge = self._graph.create_edge(left_arc.site, right_arc.site, None, vertex)

        self._attach_circle_event(left_arc)
        self._attach_circle_event(right_arc)


def _as_site(point: Union[Vertex, tuple[float, float]]) -> Site:
    if isinstance(point, Vertex):
        return Site(float(point.x), float(point.y))
    px, py = point
    return Site(float(px), float(py))


def build(
    sites: Iterable[Union[Vertex, tuple[float, float]]],
    x_bound: float,
    y_bound: float,
) -> Graph:
    """Build the Voronoi graph of ``sites`` clipped to ``[0, x_bound] x [0, y_bound]``.

    Consecutive duplicate sites are ignored.
    """
    graph = Graph(x_bound, y_bound, [_as_site(point) for point in sites])
    graph_sites = graph.sites

    site_events: list[int] = []
    last: Optional[Site] = None
    for index, site in enumerate(graph_sites):
        if last is None or last != site:
            site_events.append(index)
        last = site
    site_events.sort(key=lambda i: (graph_sites[i].y, graph_sites[i].x))

    fortune = Fortune(graph)
    pending = iter(site_events)
    site_index = next(pending, None)

    while True:
        circle = fortune.top_circle_event
        site = graph_sites[site_index] if site_index is not None else None
        if site is not None and (
            circle is None
            or site.y < circle.y
            or (site.y == circle.y and site.x < circle.x)
        ):
            graph.cells.append(Cell(site_index))
            site.cell = len(graph.cells) - 1
            fortune.add_beach_section(site_index)
            site_index = next(pending, None)
        elif circle is not None:
            fortune.remove_beach_section(circle.arc)
        else:
            break

    graph.clip_edges()
    graph.close_cells()
    return graph