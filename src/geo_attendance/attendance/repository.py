from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..geo.model import GPSLocation
from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_latest_open(self, employee_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_open(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in_time: datetime,
        location: GPSLocation,
        photo_ref: Optional[str],
    ) -> AttendanceRecord:
        """Insert the day's record. Raises ``AlreadyCheckedIn`` if one exists."""

        raise NotImplementedError

    def save_checkout(self, record: AttendanceRecord) -> bool:
        """Persist a closed record; only succeeds while the stored row is still open."""

        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        """Rows in the date range, newest ``created_at`` first."""

        raise NotImplementedError
