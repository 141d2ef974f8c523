from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.enums import SessionState
from ..core.exceptions import AlreadyCheckedIn
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, location_columns, location_from_row
from ..geo.model import GPSLocation, location_or_none
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_COLUMNS = """
    ar.attendance_id, ar.employee_id, ar.work_date, ar.state,
    ar.check_in_time, ar.check_in_latitude, ar.check_in_longitude, ar.check_in_accuracy, ar.check_in_photo_ref,
    ar.check_out_time, ar.check_out_latitude, ar.check_out_longitude, ar.check_out_accuracy, ar.check_out_photo_ref,
    ar.total_hours, ar.overtime_hours, ar.auto_checked_out, ar.created_at
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        state=SessionState(r["state"]),
        check_in_time=r.get("check_in_time"),
        check_in_location=location_from_row(r, "check_in"),
        check_in_photo_ref=r.get("check_in_photo_ref"),
        check_out_time=r.get("check_out_time"),
        check_out_location=location_from_row(r, "check_out"),
        check_out_photo_ref=r.get("check_out_photo_ref"),
        total_hours=float(r["total_hours"]) if r.get("total_hours") is not None else None,
        overtime_hours=float(r["overtime_hours"]) if r.get("overtime_hours") is not None else None,
        auto_checked_out=bool(r.get("auto_checked_out")),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_one(self, where: str, params: tuple) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records ar WHERE {where}", params)
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._select_one("ar.employee_id=%s AND ar.work_date=%s", (int(employee_id), work_date))

    def get_latest_open(self, employee_id: int) -> Optional[AttendanceRecord]:
        return self._select_one(
            "ar.employee_id=%s AND ar.state=%s ORDER BY ar.check_in_time DESC LIMIT 1",
            (int(employee_id), SessionState.CHECKED_IN.value),
        )

    def list_open(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records ar WHERE ar.state=%s ORDER BY ar.check_in_time",
                (SessionState.CHECKED_IN.value,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records ar
                WHERE ar.employee_id=%s
                ORDER BY ar.created_at DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in_time: datetime,
        location: GPSLocation,
        photo_ref: Optional[str],
    ) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        employee_id, work_date, state, check_in_time,
                        check_in_latitude, check_in_longitude, check_in_accuracy, check_in_photo_ref,
                        created_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(employee_id),
                        work_date,
                        SessionState.CHECKED_IN.value,
                        check_in_time,
                        *location_columns(location),
                        photo_ref,
                        check_in_time,
                    ),
                )
                attendance_id = int(cur.lastrowid)
        except IntegrityError as e:
            # UNIQUE(employee_id, work_date) backs the service-level check.
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise AlreadyCheckedIn() from e
            raise

        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=int(employee_id),
            work_date=work_date,
            state=SessionState.CHECKED_IN,
            check_in_time=check_in_time,
            check_in_location=location,
            check_in_photo_ref=photo_ref,
            created_at=check_in_time,
        )

    def save_checkout(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET state=%s, check_out_time=%s,
                    check_out_latitude=%s, check_out_longitude=%s, check_out_accuracy=%s,
                    check_out_photo_ref=%s, total_hours=%s, overtime_hours=%s, auto_checked_out=%s
                WHERE attendance_id=%s AND state=%s
                """,
                (
                    record.state.value,
                    record.check_out_time,
                    *location_columns(record.check_out_location),
                    record.check_out_photo_ref,
                    record.total_hours,
                    record.overtime_hours,
                    1 if record.auto_checked_out else 0,
                    record.attendance_id,
                    SessionState.CHECKED_IN.value,
                ),
            )
            return cur.rowcount > 0

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["ar.work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if employee_id is not None:
            clauses.append("ar.employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    {_COLUMNS},
                    e.name AS employee_name, e.employee_code,
                    ws.latitude AS station_latitude, ws.longitude AS station_longitude
                FROM attendance_records ar
                JOIN employees e ON e.employee_id = ar.employee_id
                LEFT JOIN work_stations ws ON ws.station_id = e.work_station_id
                WHERE {where}
                ORDER BY ar.created_at DESC, ar.attendance_id DESC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                AttendanceReportRow(
                    record=_to_record(r),
                    employee_name=r["employee_name"],
                    employee_code=r["employee_code"],
                    work_location=location_or_none(r.get("station_latitude"), r.get("station_longitude")),
                )
                for r in rows
            ]
