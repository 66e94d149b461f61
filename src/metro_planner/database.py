"""SQLAlchemy store for stations, lines, edges and the fare policy."""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import create_engine, Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import sessionmaker, declarative_base

from . import graph
from .config import DATABASE_URL
from .fare import FarePolicy

Base = declarative_base()


def _new_id() -> str:
    return uuid.uuid4().hex


class StationRecord(Base):
    """Stations table."""
    __tablename__ = "stations"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(200), unique=True, nullable=False)
    display_name = Column(String(200))


class LineRecord(Base):
    """Lines table."""
    __tablename__ = "lines"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(100), unique=True, nullable=False)
    color = Column(String(50))


class StationLineRecord(Base):
    """Line membership with the station's position and cumulative distance on the line."""
    __tablename__ = "station_lines"
    __table_args__ = (UniqueConstraint("station_id", "line_id"),)

    id = Column(Integer, primary_key=True)
    station_id = Column(String(32), ForeignKey("stations.id"), nullable=False)
    line_id = Column(String(32), ForeignKey("lines.id"), nullable=False)
    order = Column(Integer, nullable=False)
    distance = Column(Integer, nullable=False, default=0)


class EdgeRecord(Base):
    """Edges table. Stored directed, traversed in both directions."""
    __tablename__ = "edges"

    id = Column(Integer, primary_key=True)
    from_station_id = Column(String(32), ForeignKey("stations.id"), nullable=False)
    to_station_id = Column(String(32), ForeignKey("stations.id"), nullable=False)
    line_id = Column(String(32), ForeignKey("lines.id"), nullable=False)
    distance = Column(Integer, nullable=False)


class FarePolicyRecord(Base):
    """Fare policy table; the first row is the active policy."""
    __tablename__ = "fare_policies"

    id = Column(Integer, primary_key=True)
    base_fare = Column(Integer, nullable=False)
    per_km_rate = Column(Integer, nullable=False)
    interchange_fee = Column(Integer, nullable=False)


class Database:
    """Database manager for the metro network."""

    def __init__(self, url: Optional[str] = None):
        self.url = url or DATABASE_URL
        self.engine = create_engine(self.url)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine)

    # Reads used to build the routing graph

    def load_stations(self) -> list[graph.Station]:
        session = self.Session()
        try:
            rows = session.query(StationRecord).order_by(StationRecord.name).all()
            return [graph.Station(id=r.id, name=r.name) for r in rows]
        finally:
            session.close()

    def load_lines(self) -> list[graph.Line]:
        session = self.Session()
        try:
            rows = session.query(LineRecord).order_by(LineRecord.name).all()
            return [graph.Line(id=r.id, name=r.name, color=r.color) for r in rows]
        finally:
            session.close()

    def load_edges(self) -> list[graph.Edge]:
        """All edges in insertion order."""
        session = self.Session()
        try:
            rows = session.query(EdgeRecord).order_by(EdgeRecord.id).all()
            return [
                graph.Edge(
                    from_station_id=r.from_station_id,
                    to_station_id=r.to_station_id,
                    line_id=r.line_id,
                    distance=r.distance,
                )
                for r in rows
            ]
        finally:
            session.close()

    def get_fare_policy(self) -> Optional[FarePolicy]:
        session = self.Session()
        try:
            row = session.query(FarePolicyRecord).order_by(FarePolicyRecord.id).first()
            if not row:
                return None
            return FarePolicy(
                base_fare=row.base_fare,
                per_km_rate=row.per_km_rate,
                interchange_fee=row.interchange_fee,
            )
        finally:
            session.close()

    # Reads used by the HTTP layer

    def list_stations(self) -> list[dict]:
        """All stations with the lines serving them."""
        session = self.Session()
        try:
            rows = session.query(StationRecord, LineRecord, StationLineRecord.order).select_from(
                StationRecord
            ).outerjoin(
                StationLineRecord, StationLineRecord.station_id == StationRecord.id
            ).outerjoin(
                LineRecord, LineRecord.id == StationLineRecord.line_id
            ).order_by(StationRecord.name, LineRecord.name).all()

            stations: dict[str, dict] = {}
            for station, line, order in rows:
                entry = stations.setdefault(station.id, {
                    "id": station.id,
                    "name": station.name,
                    "displayName": station.display_name or station.name,
                    "lines": [],
                })
                if line is not None:
                    entry["lines"].append({"id": line.id, "name": line.name, "color": line.color, "order": order})
            return list(stations.values())
        finally:
            session.close()

    def list_lines(self) -> list[dict]:
        """All lines with their stations in line order."""
        session = self.Session()
        try:
            rows = session.query(LineRecord, StationRecord, StationLineRecord).select_from(
                LineRecord
            ).outerjoin(
                StationLineRecord, StationLineRecord.line_id == LineRecord.id
            ).outerjoin(
                StationRecord, StationRecord.id == StationLineRecord.station_id
            ).order_by(LineRecord.name, StationLineRecord.order).all()

            lines: dict[str, dict] = {}
            for line, station, membership in rows:
                entry = lines.setdefault(line.id, {
                    "id": line.id,
                    "name": line.name,
                    "color": line.color,
                    "stations": [],
                })
                if station is not None:
                    entry["stations"].append({
                        "id": station.id,
                        "name": station.name,
                        "order": membership.order,
                        "distance": membership.distance,
                    })
            return list(lines.values())
        finally:
            session.close()

    # Writes used by ingestion

    def clear_network(self):
        """Delete all network data and fare policies."""
        session = self.Session()
        try:
            for model in (EdgeRecord, StationLineRecord, StationRecord, LineRecord, FarePolicyRecord):
                session.query(model).delete()
            session.commit()
        finally:
            session.close()

    def set_fare_policy(self, policy: FarePolicy):
        """Replace the active fare policy."""
        session = self.Session()
        try:
            session.query(FarePolicyRecord).delete()
            session.add(FarePolicyRecord(
                base_fare=policy.base_fare,
                per_km_rate=policy.per_km_rate,
                interchange_fee=policy.interchange_fee,
            ))
            session.commit()
        finally:
            session.close()

    def add_line(self, name: str, color: Optional[str] = None) -> str:
        session = self.Session()
        try:
            line = LineRecord(id=_new_id(), name=name, color=color)
            session.add(line)
            session.commit()
            return line.id
        finally:
            session.close()

    def add_station(self, name: str, display_name: Optional[str] = None) -> str:
        session = self.Session()
        try:
            station = StationRecord(id=_new_id(), name=name, display_name=display_name or name)
            session.add(station)
            session.commit()
            return station.id
        finally:
            session.close()

    def get_station_id(self, name: str) -> Optional[str]:
        session = self.Session()
        try:
            station = session.query(StationRecord).filter_by(name=name).first()
            return station.id if station else None
        finally:
            session.close()

    def get_line_id(self, name: str) -> Optional[str]:
        session = self.Session()
        try:
            line = session.query(LineRecord).filter_by(name=name).first()
            return line.id if line else None
        finally:
            session.close()

    def add_station_to_line(self, station_id: str, line_id: str, order: int, distance: int = 0):
        """Record or update a station's position on a line."""
        session = self.Session()
        try:
            membership = session.query(StationLineRecord).filter_by(
                station_id=station_id, line_id=line_id
            ).first()

            if membership:
                membership.order = order
                membership.distance = distance
            else:
                membership = StationLineRecord(
                    station_id=station_id, line_id=line_id, order=order, distance=distance
                )
                session.add(membership)

            session.commit()
        finally:
            session.close()

    def add_edge(self, from_station_id: str, to_station_id: str, line_id: str, distance: int):
        session = self.Session()
        try:
            session.add(EdgeRecord(
                from_station_id=from_station_id,
                to_station_id=to_station_id,
                line_id=line_id,
                distance=distance,
            ))
            session.commit()
        finally:
            session.close()
