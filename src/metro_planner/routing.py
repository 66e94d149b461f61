"""Metro routing with graph-based pathfinding."""

from __future__ import annotations

import heapq
import itertools
import math
from collections import deque
from dataclasses import dataclass
from typing import NamedTuple, Optional

from .exceptions import StationNotFound
from .graph import NetworkGraph


class Hop(NamedTuple):
    """A station on a path and the line used to arrive there (None at the origin)."""
    station: str
    line: Optional[str]


@dataclass
class SearchNode:
    """Per-query Dijkstra bookkeeping for one station."""
    station_id: str
    distance: float = math.inf
    previous: Optional[str] = None
    line_id: Optional[str] = None


@dataclass(frozen=True)
class RouteSegment:
    """A run of consecutive hops on one line."""
    line: str
    from_station: str
    to_station: str
    stops: tuple[str, ...]

    def __str__(self):
        return f"Take {self.line} from {self.from_station} to {self.to_station} ({len(self.stops)-1} stops)"


@dataclass(frozen=True)
class PathResult:
    """A route from origin to destination inclusive."""
    hops: tuple[Hop, ...]
    total_distance: int
    interchanges: int

    @property
    def stations(self) -> list[str]:
        return [hop.station for hop in self.hops]

    @property
    def lines_used(self) -> list[str]:
        lines: list[str] = []
        for hop in self.hops:
            if hop.line is not None and (not lines or lines[-1] != hop.line):
                lines.append(hop.line)
        return lines

    def same_route(self, other: Optional[PathResult]) -> bool:
        """True if ``other`` visits the same stations on the same lines in the same order."""
        return other is not None and self.hops == other.hops

    def segments(self) -> list[RouteSegment]:
        """Group the hops into one segment per line ridden."""
        segments: list[RouteSegment] = []
        current_line = None
        stops: list[str] = []
        for hop in self.hops:
            if current_line is not None and hop.line != current_line:
                segments.append(RouteSegment(current_line, stops[0], stops[-1], tuple(stops)))
                # The interchange station starts the next segment
                stops = [stops[-1]]
            current_line = hop.line
            stops.append(hop.station)
        if current_line is not None and len(stops) > 1:
            segments.append(RouteSegment(current_line, stops[0], stops[-1], tuple(stops)))
        return segments

    def to_dict(self) -> dict:
        return {
            "path": [{"station": hop.station, "line": hop.line} for hop in self.hops],
            "totalDistance": self.total_distance,
            "interchanges": self.interchanges,
        }

    def __str__(self):
        if len(self.hops) == 1:
            return f"You are already at {self.hops[0].station}."
        result = [f"{i}. {seg}" for i, seg in enumerate(self.segments(), 1)]
        result.append(f"\nTotal: {self.total_distance / 1000:.1f} km, {self.interchanges} interchange(s)")
        return "\n".join(result)


def _check_stations(graph: NetworkGraph, *station_ids: str) -> None:
    for station_id in station_ids:
        if station_id not in graph:
            raise StationNotFound(station_id)


def find_shortest_path(graph: NetworkGraph, source_id: str, target_id: str) -> Optional[PathResult]:
    """Minimum total distance route between two stations (Dijkstra).

    Returns None when the target cannot be reached from the source.
    """
    _check_stations(graph, source_id, target_id)

    nodes = {station_id: SearchNode(station_id) for station_id in graph.station_ids}
    nodes[source_id].distance = 0

    # Priority queue: (distance, push order, station_id); push order makes ties deterministic
    counter = itertools.count()
    pq = [(0, next(counter), source_id)]
    finalized: set[str] = set()

    while pq:
        _, _, current_id = heapq.heappop(pq)
        if current_id in finalized:
            continue
        finalized.add(current_id)

        if current_id == target_id:
            return _reconstruct_path(graph, nodes, target_id)

        current = nodes[current_id]
        for neighbor_id, edge_distance, line_id in graph.neighbors_of(current_id):
            if neighbor_id in finalized:
                continue
            candidate = current.distance + edge_distance
            neighbor = nodes[neighbor_id]
            if candidate < neighbor.distance:
                neighbor.distance = candidate
                neighbor.previous = current_id
                neighbor.line_id = line_id
                heapq.heappush(pq, (candidate, next(counter), neighbor_id))

    return None


def _reconstruct_path(graph: NetworkGraph, nodes: dict[str, SearchNode], target_id: str) -> PathResult:
    hops: list[Hop] = []
    interchanges = 0
    current: Optional[str] = target_id

    while current is not None:
        node = nodes[current]
        hops.append(Hop(graph.station_name(current), graph.line_name(node.line_id)))
        if node.previous is not None:
            previous = nodes[node.previous]
            if previous.line_id is not None and previous.line_id != node.line_id:
                interchanges += 1
        current = node.previous

    hops.reverse()
    return PathResult(
        hops=tuple(hops),
        total_distance=int(nodes[target_id].distance),
        interchanges=interchanges,
    )


def find_least_interchange_path(graph: NetworkGraph, source_id: str, target_id: str) -> Optional[PathResult]:
    """Route with the fewest line changes, ties broken by distance.

    Breadth-first search over (station, arriving line) states. A state is
    skipped when an earlier visit reached it with no more interchanges;
    distance does not take part in that check.
    """
    _check_stations(graph, source_id, target_id)

    # Queue entries: (station_id, arriving line_id, path so far, interchanges, distance)
    queue = deque([(source_id, None, (), 0, 0)])
    visited: dict[tuple[str, str], int] = {}
    best: Optional[PathResult] = None

    while queue:
        current_id, line_id, path, interchanges, distance = queue.popleft()
        path = path + (Hop(graph.station_name(current_id), graph.line_name(line_id)),)

        if current_id == target_id:
            if (
                best is None
                or interchanges < best.interchanges
                or (interchanges == best.interchanges and distance < best.total_distance)
            ):
                best = PathResult(hops=path, total_distance=distance, interchanges=interchanges)
            continue

        for neighbor_id, edge_distance, edge_line in graph.neighbors_of(current_id):
            next_interchanges = interchanges
            if line_id is not None and edge_line != line_id:
                next_interchanges += 1

            state = (neighbor_id, edge_line)
            if state in visited and visited[state] <= next_interchanges:
                continue
            visited[state] = next_interchanges
            queue.append((neighbor_id, edge_line, path, next_interchanges, distance + edge_distance))

    return best
