import math

from fortunevoronoi.geometry import Cell, Edge, HalfEdge, Site, Vertex


def test_undefined_vertex_is_not_defined():
    v = Vertex.undefined()
    assert not v.is_defined()
    assert not v
    assert math.isnan(v.x) and math.isnan(v.y)


def test_partly_nan_vertex_is_not_defined():
    assert not Vertex(1.0, math.nan).is_defined()
    assert not Vertex(math.nan, 2.0).is_defined()


def test_defined_vertex():
    v = Vertex(3.0, 4.0)
    assert v.is_defined()
    assert bool(v) is True


def test_vertex_equality():
    assert Vertex(1.5, 2.5) == Vertex(1.5, 2.5)
    assert Vertex(1.5, 2.5) != Vertex(1.5, 3.5)
    assert not (Vertex(1.0, 2.0) != Vertex(1.0, 2.0))


def test_undefined_vertices_are_not_equal():
    v = Vertex.undefined()
    assert not (v == v)
    assert v != Vertex.undefined()


def test_site_defaults_and_equality_ignores_cell():
    s = Site(1.0, 2.0)
    assert s.cell == -1
    other = Site(1.0, 2.0, cell=5)
    assert s == other
    assert s == Vertex(1.0, 2.0)


def test_edge_defaults():
    e = Edge()
    assert e.left_site == -1
    assert e.right_site == -1
    assert not e.p0.is_defined()
    assert not e.p1.is_defined()


def test_set_startpoint_on_fresh_edge_sets_sites():
    e = Edge(0, 1)
    v = Vertex(5.0, 6.0)
    e.set_startpoint(2, 3, v)
    assert e.p0 == v
    assert not e.p1.is_defined()
    assert (e.left_site, e.right_site) == (2, 3)


def test_set_startpoint_reversed_sets_p1():
    e = Edge(0, 1)
    start = Vertex(1.0, 1.0)
    end = Vertex(2.0, 2.0)
    e.set_startpoint(0, 1, start)
    e.set_startpoint(1, 0, end)
    assert e.p0 == start
    assert e.p1 == end


def test_set_startpoint_same_direction_overwrites_p0():
    e = Edge(0, 1)
    e.set_startpoint(0, 1, Vertex(1.0, 1.0))
    replacement = Vertex(7.0, 8.0)
    e.set_startpoint(0, 1, replacement)
    assert e.p0 == replacement
    assert not e.p1.is_defined()


def test_set_endpoint_on_fresh_edge_swaps_sites():
    e = Edge(0, 1)
    v = Vertex(3.0, 4.0)
    e.set_endpoint(0, 1, v)
    assert e.p0 == v
    assert (e.left_site, e.right_site) == (1, 0)


def test_startpoint_then_endpoint_fills_both():
    e = Edge(4, 9)
    a = Vertex(0.0, 1.0)
    b = Vertex(2.0, 3.0)
    e.set_startpoint(4, 9, a)
    e.set_endpoint(4, 9, b)
    assert e.p0 == a
    assert e.p1 == b
    assert (e.left_site, e.right_site) == (4, 9)


def test_edges_do_not_share_default_vertices():
    e1 = Edge()
    e2 = Edge()
    assert e1.p0 is not e2.p0
    e1.set_startpoint(0, 1, Vertex(1.0, 1.0))
    assert not e2.p0.is_defined()


def test_half_edge_fields():
    h = HalfEdge(site=2, edge=7, angle=math.pi)
    assert (h.site, h.edge, h.angle) == (2, 7, math.pi)


def test_cell_defaults_and_independent_lists():
    c1 = Cell(0)
    c2 = Cell(1)
    assert c1.half_edges == []
    assert c1.close_me is False
    c1.half_edges.append(HalfEdge(0, 0, 0.0))
    assert c2.half_edges == []
    assert len(c1.half_edges) == 1