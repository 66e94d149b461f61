"""FastAPI web interface for the metro planner."""

import logging
import threading
import time
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .config import PATH_CACHE_TTL_SECONDS
from .database import Database
from .exceptions import PolicyMissing, StationNotFound
from .planner import RoutePlanner, get_planner

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Metro Planner",
    description="Shortest and least-interchange metro routes with fares",
    version="0.1.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HopModel(BaseModel):
    station: str
    line: Optional[str] = None


class RouteOptionModel(BaseModel):
    path: list[HopModel]
    totalDistance: int
    interchanges: int
    fare: float


class PathResponse(BaseModel):
    shortest: Optional[RouteOptionModel] = None
    leastInterchange: Optional[RouteOptionModel] = None


class PathCache:
    """In-process cache of path responses keyed by (from, to)."""

    def __init__(self, ttl_seconds: float):
        self.ttl_seconds = ttl_seconds
        self._entries: dict[tuple[str, str], tuple[float, dict]] = {}
        self._lock = threading.Lock()

    def get(self, key: tuple[str, str]) -> Optional[dict]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, data = entry
            if time.monotonic() - stored_at >= self.ttl_seconds:
                del self._entries[key]
                return None
            return data

    def set(self, key: tuple[str, str], data: dict):
        with self._lock:
            self._entries[key] = (time.monotonic(), data)

    def clear(self):
        with self._lock:
            self._entries.clear()


path_cache = PathCache(PATH_CACHE_TTL_SECONDS)

_database: Optional[Database] = None


def get_database() -> Database:
    global _database
    if _database is None:
        _database = Database()
    return _database


def get_route_planner(db: Database = Depends(get_database)) -> RoutePlanner:
    return get_planner(db)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "Metro Planner"}


@app.get("/path", response_model=PathResponse)
def find_path(
    from_station: Optional[str] = Query(None, alias="from"),
    to_station: Optional[str] = Query(None, alias="to"),
    planner: RoutePlanner = Depends(get_route_planner),
):
    """Shortest and least-interchange routes between two stations."""
    if not from_station or not to_station:
        raise HTTPException(status_code=400, detail="Missing from or to station parameter")

    cache_key = (from_station, to_station)
    cached = path_cache.get(cache_key)
    if cached is not None:
        return cached

    try:
        plan = planner.plan(from_station, to_station)
    except StationNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    except PolicyMissing as e:
        logger.error("Cannot price route %s -> %s: %s", from_station, to_station, e.message)
        raise HTTPException(status_code=500, detail=e.message)

    if not plan.found:
        raise HTTPException(status_code=404, detail="No path found between stations")

    result = plan.to_dict()
    path_cache.set(cache_key, result)
    return result


@app.get("/stations")
def list_stations(db: Database = Depends(get_database)):
    """List all stations with the lines serving them."""
    stations = db.list_stations()
    return {"count": len(stations), "stations": stations}


@app.get("/lines")
def list_lines(db: Database = Depends(get_database)):
    """List all lines with their stations in order."""
    lines = db.list_lines()
    return {"count": len(lines), "lines": lines}


def run_server(host: str = "0.0.0.0", port: int = 8000):
    """Run the FastAPI server."""
    import uvicorn
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
