from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import SessionState
from ..geo.model import GPSLocation


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    attendance_id: int
    employee_id: int
    work_date: date
    state: SessionState
    check_in_time: Optional[datetime]
    check_in_location: Optional[GPSLocation]
    check_in_photo_ref: Optional[str] = None
    check_out_time: Optional[datetime] = None
    check_out_location: Optional[GPSLocation] = None
    check_out_photo_ref: Optional[str] = None
    total_hours: Optional[float] = None
    overtime_hours: Optional[float] = None
    auto_checked_out: bool = False
    created_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.state == SessionState.CHECKED_IN


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reports/exports: record joined with its employee and station."""

    record: AttendanceRecord
    employee_name: str
    employee_code: str
    work_location: Optional[GPSLocation]
