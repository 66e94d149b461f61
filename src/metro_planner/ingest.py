"""Load per-line text files into the network store.

Each ``<color>.txt`` file describes one line: one station per row, followed
by its cumulative distance from the start of the line in metres::

    Dwarka-Sector-21   0
    Dwarka-Sector-8    1,200
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .config import DEFAULT_BASE_FARE, DEFAULT_INTERCHANGE_FEE, DEFAULT_PER_KM_RATE
from .database import Database
from .exceptions import DatasetError
from .fare import FarePolicy

logger = logging.getLogger(__name__)

DEFAULT_FARE_POLICY = FarePolicy(
    base_fare=DEFAULT_BASE_FARE,
    per_km_rate=DEFAULT_PER_KM_RATE,
    interchange_fee=DEFAULT_INTERCHANGE_FEE,
)


@dataclass
class StationData:
    name: str
    distance: int


@dataclass
class LineData:
    name: str
    color: str
    stations: list[StationData] = field(default_factory=list)


@dataclass
class EdgeData:
    from_station: str
    to_station: str
    distance: int
    line_name: str


def normalize_station_name(name: str) -> str:
    """Canonical station key: alphanumerics only, lowercase."""
    return re.sub(r"[^a-zA-Z0-9]", "", name.strip()).lower()


def parse_line_file(path: Path) -> LineData:
    """Parse one line file. The file stem is the line color."""
    path = Path(path)
    color = path.stem
    stations = []

    for row_number, row in enumerate(path.read_text(encoding="utf-8").splitlines(), 1):
        if not row.strip():
            continue
        parts = row.split()
        if len(parts) < 2:
            raise DatasetError(f"{path.name}:{row_number}: expected '<station> <distance>', got {row!r}")
        try:
            distance = int(parts[1].replace(",", ""))
        except ValueError:
            raise DatasetError(f"{path.name}:{row_number}: invalid distance {parts[1]!r}") from None
        stations.append(StationData(name=normalize_station_name(parts[0]), distance=distance))

    return LineData(
        name=color[:1].upper() + color[1:] + " Line",
        color=color,
        stations=stations,
    )


def parse_all_lines(directory: Path) -> list[LineData]:
    """Parse every ``.txt`` file in ``directory``, in file name order."""
    files = sorted(Path(directory).glob("*.txt"))
    return [parse_line_file(path) for path in files]


def generate_edges(lines: list[LineData]) -> list[EdgeData]:
    """Edges between consecutive stations of each line."""
    edges = []
    for line in lines:
        for current, following in zip(line.stations, line.stations[1:]):
            edges.append(EdgeData(
                from_station=current.name,
                to_station=following.name,
                distance=following.distance - current.distance,
                line_name=line.name,
            ))
    return edges


def find_interchange_stations(lines: list[LineData]) -> list[str]:
    """Stations served by more than one line."""
    counts: dict[str, int] = {}
    for line in lines:
        for station in line.stations:
            counts[station.name] = counts.get(station.name, 0) + 1
    return [name for name, count in counts.items() if count > 1]


def seed_database(
    db: Database,
    lines: list[LineData],
    fare_policy: Optional[FarePolicy] = DEFAULT_FARE_POLICY,
) -> int:
    """Replace the store's contents with ``lines``. Returns the number of edges written."""
    edges = generate_edges(lines)
    for edge in edges:
        if edge.distance < 0:
            raise DatasetError(
                f"{edge.line_name}: distance decreases from {edge.from_station} to {edge.to_station}"
            )

    logger.info("Clearing existing data")
    db.clear_network()

    if fare_policy is not None:
        db.set_fare_policy(fare_policy)

    line_ids: dict[str, str] = {}
    station_ids: dict[str, str] = {}
    for line in lines:
        logger.info("Processing line: %s (%d stations)", line.name, len(line.stations))
        line_ids[line.name] = db.add_line(line.name, line.color)
        for order, station in enumerate(line.stations):
            if station.name not in station_ids:
                station_ids[station.name] = db.add_station(station.name)
            db.add_station_to_line(station_ids[station.name], line_ids[line.name], order, station.distance)

    for edge in edges:
        db.add_edge(
            station_ids[edge.from_station],
            station_ids[edge.to_station],
            line_ids[edge.line_name],
            edge.distance,
        )

    logger.info(
        "Seeded %d lines, %d stations (%d interchanges), %d edges",
        len(lines), len(station_ids), len(find_interchange_stations(lines)), len(edges),
    )
    return len(edges)
