"""Tests for the network store."""

from metro_planner.fare import FarePolicy
from metro_planner.graph import Edge


def test_missing_fare_policy(test_db):
    """Test an empty store has no fare policy."""
    assert test_db.get_fare_policy() is None


def test_set_and_get_fare_policy(test_db):
    """Test the fare policy is replaced, not duplicated."""
    test_db.set_fare_policy(FarePolicy(1000, 200, 500))
    test_db.set_fare_policy(FarePolicy(1200, 250, 600))
    assert test_db.get_fare_policy() == FarePolicy(1200, 250, 600)


def test_load_network(test_db):
    """Test stations, lines and edges round trip into graph types."""
    a = test_db.add_station("rajivchowk")
    b = test_db.add_station("barakhamba")
    blue = test_db.add_line("Blue Line", "blue")
    test_db.add_edge(a, b, blue, 1200)

    assert [s.name for s in test_db.load_stations()] == ["barakhamba", "rajivchowk"]
    assert [(l.name, l.color) for l in test_db.load_lines()] == [("Blue Line", "blue")]
    assert test_db.load_edges() == [Edge(a, b, blue, 1200)]


def test_edges_keep_insertion_order(test_db):
    """Test edges load in the order they were written."""
    a, b, c = (test_db.add_station(n) for n in ("a", "b", "c"))
    line = test_db.add_line("Red Line", "red")
    test_db.add_edge(c, b, line, 3)
    test_db.add_edge(a, b, line, 1)
    test_db.add_edge(b, c, line, 2)
    assert [e.distance for e in test_db.load_edges()] == [3, 1, 2]


def test_station_line_upsert(test_db):
    """Test re-adding a station to a line updates its position."""
    station = test_db.add_station("kashmerigate")
    line = test_db.add_line("Red Line", "red")
    test_db.add_station_to_line(station, line, order=0, distance=0)
    test_db.add_station_to_line(station, line, order=4, distance=5200)

    lines = test_db.list_lines()
    assert lines[0]["stations"] == [
        {"id": station, "name": "kashmerigate", "order": 4, "distance": 5200}
    ]


def test_list_lines_in_order(test_db):
    """Test line listings give stations in line order."""
    line = test_db.add_line("Yellow Line", "yellow")
    empty = test_db.add_line("Aqua Line", "aqua")
    for order, name in enumerate(["samaypurbadli", "rohinisector18", "haiderpur"]):
        test_db.add_station_to_line(test_db.add_station(name), line, order, order * 1000)

    lines = test_db.list_lines()
    assert [l["name"] for l in lines] == ["Aqua Line", "Yellow Line"]
    assert lines[0]["id"] == empty
    assert lines[0]["stations"] == []
    assert [s["name"] for s in lines[1]["stations"]] == ["samaypurbadli", "rohinisector18", "haiderpur"]


def test_list_stations_with_lines(test_db):
    """Test station listings include every serving line."""
    station = test_db.add_station("rajivchowk")
    lonely = test_db.add_station("airport")
    blue = test_db.add_line("Blue Line", "blue")
    yellow = test_db.add_line("Yellow Line", "yellow")
    test_db.add_station_to_line(station, blue, 3)
    test_db.add_station_to_line(station, yellow, 7)

    stations = {s["name"]: s for s in test_db.list_stations()}
    assert [l["name"] for l in stations["rajivchowk"]["lines"]] == ["Blue Line", "Yellow Line"]
    assert stations["airport"]["lines"] == []
    assert stations["airport"]["id"] == lonely


def test_lookup_ids(test_db):
    """Test name to id lookups."""
    station = test_db.add_station("mandihouse")
    line = test_db.add_line("Violet Line", "violet")
    assert test_db.get_station_id("mandihouse") == station
    assert test_db.get_line_id("Violet Line") == line
    assert test_db.get_station_id("nowhere") is None


def test_clear_network(test_db):
    """Test clearing removes every record."""
    a, b = test_db.add_station("a"), test_db.add_station("b")
    line = test_db.add_line("Blue Line")
    test_db.add_edge(a, b, line, 10)
    test_db.set_fare_policy(FarePolicy(1, 2, 3))

    test_db.clear_network()

    assert test_db.load_stations() == []
    assert test_db.load_lines() == []
    assert test_db.load_edges() == []
    assert test_db.get_fare_policy() is None
