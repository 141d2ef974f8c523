from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import WorkStation
from .repository import WorkStationRepository


def _to_station(r) -> WorkStation:
    return WorkStation(
        station_id=int(r["station_id"]),
        name=r["name"],
        latitude=float(r["latitude"]),
        longitude=float(r["longitude"]),
        created_at=r.get("created_at"),
    )


class MySQLWorkStationRepository(WorkStationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[WorkStation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT station_id, name, latitude, longitude, created_at
                FROM work_stations
                ORDER BY name
                """
            )
            return [_to_station(r) for r in fetchall(cur)]

    def get_by_id(self, station_id: int) -> Optional[WorkStation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT station_id, name, latitude, longitude, created_at
                FROM work_stations
                WHERE station_id=%s
                """,
                (int(station_id),),
            )
            r = fetchone(cur)
            return _to_station(r) if r else None

    def create(self, *, name: str, latitude: float, longitude: float) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO work_stations(name, latitude, longitude) VALUES(%s,%s,%s)",
                (name, latitude, longitude),
            )
            return int(cur.lastrowid)

    def update(self, *, station_id: int, name: str, latitude: float, longitude: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE work_stations SET name=%s, latitude=%s, longitude=%s WHERE station_id=%s",
                (name, latitude, longitude, int(station_id)),
            )
            return cur.rowcount > 0

    def delete(self, station_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET work_station_id=NULL WHERE work_station_id=%s", (int(station_id),))
            cur.execute("DELETE FROM work_stations WHERE station_id=%s", (int(station_id),))
            return cur.rowcount > 0
