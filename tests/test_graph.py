"""Tests for network graph construction and lookup."""

import pytest

from metro_planner.graph import Edge, Station, build_graph, neighbors_of, resolve_station_id

from conftest import BLUE, RED, make_graph


def test_every_station_is_a_key(disconnected_graph):
    """Test isolated stations are present with no neighbors."""
    assert len(disconnected_graph) == 5
    assert "id-E" in disconnected_graph
    assert neighbors_of(disconnected_graph, "id-E") == ()


def test_edges_are_undirected(single_line_graph):
    """Test each edge is reachable from both endpoints."""
    assert [n.station_id for n in single_line_graph.neighbors_of("id-P")] == ["id-Q"]
    assert [n.station_id for n in single_line_graph.neighbors_of("id-R")] == ["id-Q"]
    assert single_line_graph.edge_count == 2


def test_neighbor_order_follows_edge_order(two_line_graph):
    """Test neighbor order is the order the edges were given in."""
    neighbors = two_line_graph.neighbors_of("id-Q")
    assert [(n.station_id, n.distance, n.line_id) for n in neighbors] == [
        ("id-P", 1000, "blue"),
        ("id-R", 1500, "blue"),
        ("id-R", 500, "red"),
    ]


def test_build_is_deterministic():
    """Test the same input gives the same adjacency."""
    edges = [("A", "B", BLUE, 100), ("B", "C", RED, 200), ("A", "C", RED, 400)]
    first = make_graph(["A", "B", "C"], edges)
    second = make_graph(["A", "B", "C"], edges)
    assert dict(first.adjacency) == dict(second.adjacency)


def test_unknown_station_neighbors_empty(single_line_graph):
    """Test asking for an unknown station is not an error."""
    assert single_line_graph.neighbors_of("id-nowhere") == ()


def test_edge_to_unknown_station_skipped():
    """Test edges touching unloaded stations are dropped."""
    graph = build_graph(
        [Station("a", "A"), Station("b", "B")],
        [Edge("a", "b", "blue", 100), Edge("a", "zzz", "blue", 100)],
    )
    assert graph.edge_count == 1
    assert [n.station_id for n in graph.neighbors_of("a")] == ["b"]


def test_negative_distance_rejected():
    """Test negative edge distances are refused."""
    with pytest.raises(ValueError):
        build_graph([Station("a", "A"), Station("b", "B")], [Edge("a", "b", "blue", -1)])


def test_resolve_station_id_exact(single_line_graph):
    """Test name lookup is exact and case-sensitive."""
    assert resolve_station_id(single_line_graph, "Q") == "id-Q"
    assert single_line_graph.resolve_station_id("q") is None
    assert single_line_graph.resolve_station_id("Q ") is None


def test_line_name_lookup(two_line_graph):
    """Test line ids resolve to display names."""
    assert two_line_graph.line_name("red") == "Red Line"
    assert two_line_graph.line_name(None) is None
    assert two_line_graph.line_name("green") == "green"


def test_graph_is_read_only(single_line_graph):
    """Test the adjacency mapping cannot be modified."""
    with pytest.raises(TypeError):
        single_line_graph.adjacency["id-X"] = ()
