"""Read-side rules: status classification, late flag and totals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord, AttendanceReportRow
from ..core.constants import LATE_HOUR, WORK_LOCATION_RADIUS_METERS
from ..core.enums import RecordStatus
from ..geo.geofence import is_present_at
from ..geo.model import GPSLocation


@dataclass(frozen=True)
class ReportSummary:
    total_hours: float
    total_overtime_hours: float
    present_count: int
    record_count: int
    unique_employees: int = 0


def classify(
    record: AttendanceRecord,
    reference: Optional[GPSLocation],
    *,
    radius_meters: float = WORK_LOCATION_RADIUS_METERS,
) -> RecordStatus:
    if record.check_in_time is None:
        return RecordStatus.ABSENT
    if record.check_out_time is None:
        return RecordStatus.WORKING
    if is_present_at(record.check_in_location, reference, radius_meters) and is_present_at(
        record.check_out_location, reference, radius_meters
    ):
        return RecordStatus.PRESENT
    return RecordStatus.AWAY


def is_late(record: AttendanceRecord, *, late_hour: int = LATE_HOUR) -> bool:
    """Checked in at or after ``late_hour`` o'clock local time (09:00 itself is late)."""
    if record.check_in_time is None:
        return False
    return record.check_in_time.hour >= late_hour


def summarize(
    rows: Iterable[AttendanceReportRow],
    *,
    radius_meters: float = WORK_LOCATION_RADIUS_METERS,
) -> ReportSummary:
    total_hours = 0.0
    total_overtime = 0.0
    present = 0
    count = 0
    employees: set[int] = set()

    for row in rows:
        r = row.record
        count += 1
        employees.add(r.employee_id)
        total_hours += r.total_hours or 0.0
        total_overtime += r.overtime_hours or 0.0
        if classify(r, row.work_location, radius_meters=radius_meters) == RecordStatus.PRESENT:
            present += 1

    return ReportSummary(
        total_hours=total_hours,
        total_overtime_hours=total_overtime,
        present_count=present,
        record_count=count,
        unique_employees=len(employees),
    )
