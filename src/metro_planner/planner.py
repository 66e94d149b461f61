"""Journey planning: both searches plus fares for one origin/destination query."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .database import Database
from .exceptions import StationNotFound
from .fare import FareCalculator
from .graph import NetworkGraph, build_graph
from .routing import PathResult, find_least_interchange_path, find_shortest_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteOption:
    """A found path together with its fare."""
    path: PathResult
    fare: Decimal

    def to_dict(self) -> dict:
        result = self.path.to_dict()
        result["fare"] = float(self.fare)
        return result


@dataclass(frozen=True)
class JourneyPlan:
    """Combined result of a query. ``least_interchange`` is None when it would repeat ``shortest``."""
    shortest: Optional[RouteOption]
    least_interchange: Optional[RouteOption]

    @property
    def found(self) -> bool:
        return self.shortest is not None or self.least_interchange is not None

    def to_dict(self) -> dict:
        return {
            "shortest": self.shortest.to_dict() if self.shortest else None,
            "leastInterchange": self.least_interchange.to_dict() if self.least_interchange else None,
        }


class RoutePlanner:
    """Answers route queries by station name against a prebuilt graph."""

    def __init__(self, graph: NetworkGraph, fare_calculator: FareCalculator):
        self.graph = graph
        self.fare_calculator = fare_calculator

    @classmethod
    def from_database(cls, database: Database) -> RoutePlanner:
        """Load the network and fare policy from the store and build the graph."""
        graph = build_graph(
            database.load_stations(),
            database.load_edges(),
            database.load_lines(),
        )
        policy = database.get_fare_policy()
        if policy is None:
            logger.warning("No fare policy configured; fare requests will fail")
        return cls(graph, FareCalculator(policy))

    def resolve(self, name: str) -> str:
        station_id = self.graph.resolve_station_id(name)
        if station_id is None:
            raise StationNotFound(name)
        return station_id

    def find_shortest_path(self, from_name: str, to_name: str) -> Optional[PathResult]:
        return find_shortest_path(self.graph, self.resolve(from_name), self.resolve(to_name))

    def find_least_interchange_path(self, from_name: str, to_name: str) -> Optional[PathResult]:
        return find_least_interchange_path(self.graph, self.resolve(from_name), self.resolve(to_name))

    def calculate_fare(self, distance_m: int, interchanges: int) -> Decimal:
        return self.fare_calculator.calculate_fare(distance_m, interchanges)

    def plan(self, from_name: str, to_name: str) -> JourneyPlan:
        """Shortest and least-interchange routes between two stations, with fares.

        Raises StationNotFound for an unknown name. When no path exists both
        options are None.
        """
        source_id = self.resolve(from_name)
        target_id = self.resolve(to_name)

        shortest = find_shortest_path(self.graph, source_id, target_id)
        least_interchange = find_least_interchange_path(self.graph, source_id, target_id)

        if shortest is not None and shortest.same_route(least_interchange):
            least_interchange = None

        return JourneyPlan(
            shortest=self._price(shortest),
            least_interchange=self._price(least_interchange),
        )

    def _price(self, path: Optional[PathResult]) -> Optional[RouteOption]:
        if path is None:
            return None
        return RouteOption(path, self.calculate_fare(path.total_distance, path.interchanges))


_planner: Optional[RoutePlanner] = None
_planner_lock = threading.Lock()


def get_planner(database: Optional[Database] = None) -> RoutePlanner:
    """Process-wide planner, built from the store on first use."""
    global _planner
    if _planner is None:
        with _planner_lock:
            if _planner is None:
                database = database or Database()
                logger.info("Building route planner from %s", database.url)
                _planner = RoutePlanner.from_database(database)
    return _planner


def reset_planner():
    """Drop the cached planner so the next call rebuilds it."""
    global _planner
    with _planner_lock:
        _planner = None
