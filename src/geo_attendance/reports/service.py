from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.model import AttendanceReportRow
from ..attendance.policy import AttendancePolicy
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_clock, month_bounds
from ..core.constants import PLACEHOLDER
from ..core.enums import RecordStatus, Role
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from .rules import ReportSummary, classify, is_late, summarize


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: ReportSummary
    by_employee: list[dict]
    by_day: list[dict]


@dataclass(frozen=True)
class DashboardStats:
    total_employees: int
    present_today: int
    late_today: int
    missing_checkout: int


def _created_key(row: AttendanceReportRow) -> datetime:
    r = row.record
    return r.created_at or r.check_in_time or datetime.combine(r.work_date, datetime.min.time())


class ReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        policy: Optional[AttendancePolicy] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._policy = policy or AttendancePolicy()

    def daily_report(self, day: date, *, employee_id: Optional[int] = None) -> ReportData:
        return self.range_report(start=day, end=day, employee_id=employee_id)

    def monthly_report(self, year: int, month: int, *, employee_id: Optional[int] = None) -> ReportData:
        start, end = month_bounds(year, month)
        return self.range_report(start=start, end=end, employee_id=employee_id)

    def range_report(self, *, start: date, end: date, employee_id: Optional[int] = None) -> ReportData:
        if end < start:
            raise ValidationError("End date must not be before start date")

        query_rows = self._attendance.get_report_rows(start_date=start, end_date=end, employee_id=employee_id)
        # Newest first, same order as the live attendance list.
        ordered = sorted(query_rows, key=_created_key, reverse=True)

        return ReportData(
            rows=[self.project(r) for r in ordered],
            summary=summarize(ordered, radius_meters=self._policy.work_location_radius_meters),
            by_employee=self._by_employee(ordered),
            by_day=self._by_day(ordered),
        )

    def status_of(self, row: AttendanceReportRow) -> RecordStatus:
        return classify(row.record, row.work_location, radius_meters=self._policy.work_location_radius_meters)

    def project(self, row: AttendanceReportRow) -> dict:
        """One export row; missing values render as a placeholder, never dropped."""

        r = row.record
        return {
            "employee_name": row.employee_name or "Unknown",
            "employee_code": row.employee_code or "Unknown",
            "work_date": r.work_date.strftime("%Y-%m-%d"),
            "check_in": format_clock(r.check_in_time, PLACEHOLDER),
            "check_out": format_clock(r.check_out_time, PLACEHOLDER),
            "total_hours": f"{r.total_hours or 0:.2f}",
            "overtime_hours": f"{r.overtime_hours or 0:.2f}",
            "status": self.status_of(row).value,
            "late": "Yes" if is_late(r, late_hour=self._policy.late_hour) else "No",
            "check_in_location": r.check_in_location.as_text() if r.check_in_location else PLACEHOLDER,
            "check_out_location": r.check_out_location.as_text() if r.check_out_location else PLACEHOLDER,
            "check_in_photo": r.check_in_photo_ref or PLACEHOLDER,
            "check_out_photo": r.check_out_photo_ref or PLACEHOLDER,
        }

    def _by_employee(self, rows: Sequence[AttendanceReportRow]) -> list[dict]:
        summary_map: dict[int, dict] = {}
        for row in rows:
            r = row.record
            s = summary_map.get(r.employee_id)
            if not s:
                s = {
                    "employee_id": r.employee_id,
                    "employee_name": row.employee_name,
                    "employee_code": row.employee_code,
                    "days": 0,
                    "days_present": 0,
                    "late_count": 0,
                    "total_hours": 0.0,
                    "total_overtime_hours": 0.0,
                }
                summary_map[r.employee_id] = s
            s["days"] += 1
            s["total_hours"] += r.total_hours or 0.0
            s["total_overtime_hours"] += r.overtime_hours or 0.0
            if self.status_of(row) == RecordStatus.PRESENT:
                s["days_present"] += 1
            if is_late(r, late_hour=self._policy.late_hour):
                s["late_count"] += 1

        summary = list(summary_map.values())
        summary.sort(key=lambda x: x["total_hours"], reverse=True)
        return summary

    def _by_day(self, rows: Sequence[AttendanceReportRow]) -> list[dict]:
        grouped: dict[date, list[AttendanceReportRow]] = {}
        for row in rows:
            grouped.setdefault(row.record.work_date, []).append(row)

        out = []
        for day in sorted(grouped, reverse=True):
            s = summarize(grouped[day], radius_meters=self._policy.work_location_radius_meters)
            out.append(
                {
                    "work_date": day.strftime("%Y-%m-%d"),
                    "record_count": s.record_count,
                    "present_count": s.present_count,
                    "total_hours": s.total_hours,
                    "total_overtime_hours": s.total_overtime_hours,
                }
            )
        return out

    def dashboard_stats(self, today: date) -> DashboardStats:
        rows = self._attendance.get_report_rows(start_date=today, end_date=today)
        records = [row.record for row in rows]
        return DashboardStats(
            total_employees=self._employees.count(role=Role.EMPLOYEE),
            present_today=sum(1 for r in records if r.check_in_time),
            late_today=sum(1 for r in records if is_late(r, late_hour=self._policy.late_hour)),
            missing_checkout=sum(1 for r in records if r.check_in_time and not r.check_out_time),
        )
