from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..geo.model import location_or_none
from .model import Employee
from .repository import EmployeeRepository

# Station coordinates are joined on every read instead of being copied onto the employee.
_SELECT = """
    SELECT
        e.employee_id, e.employee_code, e.name, e.date_of_birth, e.phone, e.role,
        e.work_station_id, e.password_hash, e.created_at,
        ws.latitude AS station_latitude, ws.longitude AS station_longitude
    FROM employees e
    LEFT JOIN work_stations ws ON ws.station_id = e.work_station_id
"""


def _to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        employee_code=r["employee_code"],
        name=r["name"],
        date_of_birth=r.get("date_of_birth"),
        phone=r.get("phone"),
        role=Role(r["role"]),
        work_station_id=int(r["work_station_id"]) if r.get("work_station_id") is not None else None,
        work_location=location_or_none(r.get("station_latitude"), r.get("station_longitude")),
        created_at=r.get("created_at"),
        password_hash=r.get("password_hash"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.employee_code=%s", (employee_code,))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_all(self, *, role: Optional[Role] = None) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            if role is None:
                cur.execute(_SELECT + " ORDER BY e.name")
            else:
                cur.execute(_SELECT + " WHERE e.role=%s ORDER BY e.name", (role.value,))
            return [_to_employee(r) for r in fetchall(cur)]

    def count(self, *, role: Optional[Role] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            if role is None:
                cur.execute("SELECT COUNT(*) AS total FROM employees")
            else:
                cur.execute("SELECT COUNT(*) AS total FROM employees WHERE role=%s", (role.value,))
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def create(
        self,
        *,
        employee_code: str,
        name: str,
        date_of_birth: Optional[date],
        phone: Optional[str],
        role: Role,
        work_station_id: Optional[int],
        password_hash: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(employee_code, name, date_of_birth, phone, role, work_station_id, password_hash)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (employee_code, name, date_of_birth, phone, role.value, work_station_id, password_hash),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        employee_id: int,
        name: str,
        date_of_birth: Optional[date],
        phone: Optional[str],
        work_station_id: Optional[int],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, date_of_birth=%s, phone=%s, work_station_id=%s
                WHERE employee_id=%s
                """,
                (name, date_of_birth, phone, work_station_id, int(employee_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE employee_id=%s", (int(employee_id),))
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
