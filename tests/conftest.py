"""Shared fixtures: small hand-built metro networks."""

import pytest

from metro_planner.database import Database
from metro_planner.fare import FareCalculator, FarePolicy
from metro_planner.graph import Edge, Line, Station, build_graph
from metro_planner.planner import RoutePlanner

BLUE = Line("blue", "Blue Line", "blue")
RED = Line("red", "Red Line", "red")
YELLOW = Line("yellow", "Yellow Line", "yellow")

POLICY = FarePolicy(base_fare=1000, per_km_rate=200, interchange_fee=500)


def make_graph(names, edges, lines=(BLUE, RED, YELLOW)):
    """Graph whose station ids are the names prefixed with ``id-``."""
    stations = [Station(f"id-{name}", name) for name in names]
    return build_graph(
        stations,
        [Edge(f"id-{a}", f"id-{b}", line.id, distance) for a, b, line, distance in edges],
        lines,
    )


@pytest.fixture
def single_line_graph():
    """P - Q - R on the Blue Line."""
    return make_graph(
        ["P", "Q", "R"],
        [("P", "Q", BLUE, 1000), ("Q", "R", BLUE, 1500)],
    )


@pytest.fixture
def two_line_graph():
    """P - Q - R on the Blue Line plus a shorter Red Line hop from Q to R."""
    return make_graph(
        ["P", "Q", "R"],
        [("P", "Q", BLUE, 1000), ("Q", "R", BLUE, 1500), ("Q", "R", RED, 500)],
    )


@pytest.fixture
def disconnected_graph():
    """Two components: A - B on Blue, C - D on Red, plus isolated E."""
    return make_graph(
        ["A", "B", "C", "D", "E"],
        [("A", "B", BLUE, 800), ("C", "D", RED, 900)],
    )


@pytest.fixture
def planner(two_line_graph):
    return RoutePlanner(two_line_graph, FareCalculator(POLICY))


@pytest.fixture
def test_db(tmp_path):
    """Create a temporary test database."""
    db = Database(f"sqlite:///{tmp_path / 'test.db'}")
    yield db
    db.engine.dispose()
