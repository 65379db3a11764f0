import math
import random

import pytest

from fortunevoronoi.fortune import BeachArc, Fortune, build
from fortunevoronoi.geometry import Cell, Site, Vertex
from fortunevoronoi.graph import Graph

TOL = 1e-3


def _polygon(graph, cell):
    return [graph.half_edge_startpoint(h) for h in cell.half_edges]


def _area(points):
    total = 0.0
    for a, b in zip(points, points[1:] + points[:1]):
        total += a.x * b.y - b.x * a.y
    return abs(total) / 2


def _contains(points, px, py):
    signs = set()
    for a, b in zip(points, points[1:] + points[:1]):
        cross = (b.x - a.x) * (py - a.y) - (b.y - a.y) * (px - a.x)
        if abs(cross) > 1e-9:
            signs.add(cross > 0)
    return len(signs) <= 1


def _random_sites(seed, count, bound=100.0):
    rng = random.Random(seed)
    return [Vertex(rng.uniform(1, bound - 1), rng.uniform(1, bound - 1)) for _ in range(count)]


def _graph_with_cells(points, bound=100.0):
    graph = Graph(bound, bound, [Site(x, y) for x, y in points])
    for index, site in enumerate(graph.sites):
        graph.cells.append(Cell(index))
        site.cell = index
    return graph


@pytest.mark.parametrize("seed", [1, 2, 3, 4])
def test_cells_are_closed_loops(seed):
    graph = build(_random_sites(seed, 25), 100, 100)
    assert len(graph.cells) == 25
    for cell in graph.cells:
        assert len(cell.half_edges) >= 3
        halves = cell.half_edges
        for current, following in zip(halves, halves[1:] + halves[:1]):
            end = graph.half_edge_endpoint(current)
            start = graph.half_edge_startpoint(following)
            assert abs(end.x - start.x) < TOL
            assert abs(end.y - start.y) < TOL


@pytest.mark.parametrize("seed", [5, 6])
def test_cell_areas_cover_the_box(seed):
    graph = build(_random_sites(seed, 30), 100, 100)
    total = sum(_area(_polygon(graph, cell)) for cell in graph.cells)
    assert total == pytest.approx(100 * 100, rel=1e-3)


@pytest.mark.parametrize("seed", [7, 8])
def test_each_site_lies_in_its_cell(seed):
    graph = build(_random_sites(seed, 20), 100, 100)
    for cell in graph.cells:
        site = graph.sites[cell.site]
        assert site.cell == graph.cells.index(cell)
        assert _contains(_polygon(graph, cell), site.x, site.y)


def test_defined_edges_stay_in_bounds():
    graph = build(_random_sites(9, 40), 100, 100)
    for edge in graph.edges:
        for point in (edge.p0, edge.p1):
            if point.is_defined():
                assert -TOL <= point.x <= 100 + TOL
                assert -TOL <= point.y <= 100 + TOL


def test_two_sites_split_by_bisector():
    graph = build([Vertex(25, 50), Vertex(75, 50)], 100, 100)
    inner = [e for e in graph.edges if e.right_site >= 0 and e.p0.is_defined()]
    assert len(inner) == 1
    assert inner[0].p0.x == pytest.approx(50)
    assert inner[0].p1.x == pytest.approx(50)
    areas = [_area(_polygon(graph, cell)) for cell in graph.cells]
    assert areas == pytest.approx([5000, 5000], rel=1e-6)


def test_single_site_has_no_edges():
    graph = build([(40, 60)], 100, 100)
    assert len(graph.cells) == 1
    assert graph.cells[0].half_edges == []
    assert graph.edges == []


def test_consecutive_duplicates_are_ignored():
    graph = build([Vertex(30, 30), Vertex(30, 30), Vertex(70, 70)], 100, 100)
    assert len(graph.cells) == 2
    assert sorted(cell.site for cell in graph.cells) == [0, 2]


def test_left_break_point_without_neighbour():
    graph = _graph_with_cells([(10, 10)])
    fortune = Fortune(graph)
    arc = BeachArc(0)
    assert fortune.left_break_point(arc, 20) == -math.inf
    assert fortune.left_break_point(arc, 10) == 10


def test_right_break_point_without_neighbour():
    graph = _graph_with_cells([(10, 10)])
    fortune = Fortune(graph)
    arc = BeachArc(0)
    assert fortune.right_break_point(arc, 20) == math.inf
    assert fortune.right_break_point(arc, 10) == 10


def test_add_beach_section_splits_arc():
    graph = _graph_with_cells([(10, 10), (50, 50)])
    fortune = Fortune(graph)
    fortune.add_beach_section(0)
    fortune.add_beach_section(1)
    assert [arc.site for arc in fortune.beachline] == [0, 1, 0]
    assert len(graph.edges) == 1
    assert len(graph.cells[0].half_edges) == 1
    assert len(graph.cells[1].half_edges) == 1


def test_circle_event_and_removal():
    points = [(50, 10), (20, 40), (80, 40)]
    graph = _graph_with_cells(points)
    fortune = Fortune(graph)
    for index in range(3):
        fortune.add_beach_section(index)
    assert [arc.site for arc in fortune.beachline] == [0, 1, 0, 2, 0]

    event = fortune.top_circle_event
    assert event.arc.site == 0
    radii = [math.hypot(event.x - px, event.y_center - py) for px, py in points]
    assert radii[0] == pytest.approx(radii[1])
    assert radii[1] == pytest.approx(radii[2])
    assert event.y == pytest.approx(event.y_center + radii[0])

    edges_before = len(graph.edges)
    fortune.remove_beach_section(event.arc)
    assert [arc.site for arc in fortune.beachline] == [0, 1, 2, 0]
    assert len(graph.edges) == edges_before + 1
    new_edge = graph.edges[-1]
    assert new_edge.p0 == Vertex(event.x, event.y_center)
    assert fortune.top_circle_event is None