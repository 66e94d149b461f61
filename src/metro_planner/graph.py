"""In-memory graph of the metro network."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Station:
    """A metro station."""
    id: str
    name: str


@dataclass(frozen=True)
class Line:
    """A metro line, e.g. "Blue Line"."""
    id: str
    name: str
    color: Optional[str] = None


@dataclass(frozen=True)
class Edge:
    """A direct connection between two stations on one line (distance in metres)."""
    from_station_id: str
    to_station_id: str
    line_id: str
    distance: int


class Neighbor(NamedTuple):
    station_id: str
    distance: int
    line_id: str


class NetworkGraph:
    """Read-only adjacency view of the network, shared by all queries."""

    def __init__(
        self,
        adjacency: dict[str, tuple[Neighbor, ...]],
        stations: dict[str, Station],
        lines: dict[str, Line],
        edge_count: int = 0,
    ):
        self._adjacency = MappingProxyType(adjacency)
        self._stations = MappingProxyType(stations)
        self._lines = MappingProxyType(lines)
        self._name_index = MappingProxyType(_index_names(stations.values()))
        self.edge_count = edge_count

    @property
    def adjacency(self) -> Mapping[str, tuple[Neighbor, ...]]:
        return self._adjacency

    @property
    def stations(self) -> Mapping[str, Station]:
        return self._stations

    @property
    def lines(self) -> Mapping[str, Line]:
        return self._lines

    @property
    def station_ids(self) -> list[str]:
        return list(self._adjacency)

    def __contains__(self, station_id: object) -> bool:
        return station_id in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    def neighbors_of(self, station_id: str) -> tuple[Neighbor, ...]:
        """Neighbors of a station; empty for an isolated or unknown station."""
        return self._adjacency.get(station_id, ())

    def resolve_station_id(self, name: str) -> Optional[str]:
        """Exact, case-sensitive lookup of a station id by its stored name."""
        return self._name_index.get(name)

    def station_name(self, station_id: str) -> str:
        return self._stations[station_id].name

    def line_name(self, line_id: Optional[str]) -> Optional[str]:
        if line_id is None:
            return None
        line = self._lines.get(line_id)
        # Edges may reference lines that were not loaded; fall back to the id
        return line.name if line else line_id


def _index_names(stations: Iterable[Station]) -> dict[str, str]:
    index: dict[str, str] = {}
    for station in stations:
        if station.name in index and index[station.name] != station.id:
            logger.warning("Duplicate station name %r, keeping id %s", station.name, station.id)
        index[station.name] = station.id
    return index


def build_graph(
    stations: Iterable[Station],
    edges: Iterable[Edge],
    lines: Iterable[Line] = (),
) -> NetworkGraph:
    """Build the adjacency graph from full station and edge collections.

    Every station becomes a key, even without edges. Each edge is added to
    both endpoints, so neighbor order at a station follows the order of the
    edges in ``edges``.
    """
    station_map = {station.id: station for station in stations}
    line_map = {line.id: line for line in lines}
    adjacency: dict[str, list[Neighbor]] = {station_id: [] for station_id in station_map}

    edge_count = 0
    for edge in edges:
        if edge.distance < 0:
            raise ValueError(
                f"Negative distance {edge.distance} on edge "
                f"{edge.from_station_id} -> {edge.to_station_id}"
            )
        if edge.from_station_id not in station_map or edge.to_station_id not in station_map:
            logger.warning(
                "Skipping edge %s -> %s: unknown station",
                edge.from_station_id, edge.to_station_id,
            )
            continue

        # Add both directions
        adjacency[edge.from_station_id].append(
            Neighbor(edge.to_station_id, edge.distance, edge.line_id)
        )
        adjacency[edge.to_station_id].append(
            Neighbor(edge.from_station_id, edge.distance, edge.line_id)
        )
        edge_count += 1

    logger.info("Built network graph: %d stations, %d edges", len(adjacency), edge_count)
    return NetworkGraph(
        {station_id: tuple(neighbors) for station_id, neighbors in adjacency.items()},
        station_map,
        line_map,
        edge_count=edge_count,
    )


def neighbors_of(graph: NetworkGraph, station_id: str) -> tuple[Neighbor, ...]:
    """Neighbors of ``station_id`` in ``graph``."""
    return graph.neighbors_of(station_id)


def resolve_station_id(graph: NetworkGraph, name: str) -> Optional[str]:
    """Station id for ``name``, or None if no station has that exact name."""
    return graph.resolve_station_id(name)
