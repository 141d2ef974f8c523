from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from ..geo.model import GPSLocation, location_or_none
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection per unit of work: commit on success, roll back on any error."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def location_columns(location: Optional[GPSLocation]) -> tuple:
    """Flatten a fix into (latitude, longitude, accuracy) column values."""
    if location is None:
        return (None, None, None)
    return (location.latitude, location.longitude, location.accuracy)


def location_from_row(row: Dict[str, Any], prefix: str) -> Optional[GPSLocation]:
    return location_or_none(
        row.get(f"{prefix}_latitude"),
        row.get(f"{prefix}_longitude"),
        row.get(f"{prefix}_accuracy"),
    )
