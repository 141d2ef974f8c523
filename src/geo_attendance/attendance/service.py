from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import hours_between, now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import SessionState
from ..core.exceptions import AlreadyCheckedOut, LocationUnavailable, NotFound, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..geo.model import GPSLocation
from ..geo.provider import LocationProvider
from .factory import PresencePolicyFactory
from .model import AttendanceRecord
from .policy import AttendancePolicy
from .repository import AttendanceRepository
from .state import close, require_can_check_in, require_open, state_of

logger = logging.getLogger(__name__)


def _clock(now: datetime | None) -> datetime:
    # Stored timestamps have whole-second precision.
    return (now or now_local()).replace(microsecond=0)


class AttendanceService:
    """Check-in/check-out engine: state transitions, worked hours, overtime, auto-checkout."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        policy: AttendancePolicy | None = None,
        presence_factory: PresencePolicyFactory | None = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._policy = policy or AttendancePolicy()
        self._presence = presence_factory or PresencePolicyFactory(self._policy)

    @property
    def policy(self) -> AttendancePolicy:
        return self._policy

    def _get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFound("Employee not found")
        return employee

    def check_in(
        self,
        employee_id: int,
        *,
        location: Optional[GPSLocation],
        photo_ref: Optional[str] = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        now = _clock(now)
        today = now.date()

        employee = self._get_employee(employee_id)
        if location is None:
            raise LocationUnavailable()

        existing = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        require_can_check_in(existing)

        record = self._attendance.create_checkin(
            employee_id=employee.employee_id,
            work_date=today,
            check_in_time=now,
            location=location,
            photo_ref=photo_ref,
        )
        logger.info("Employee %s checked in at %s", employee.employee_id, now.isoformat())
        return record

    def check_out(
        self,
        employee_id: int,
        *,
        location: Optional[GPSLocation],
        photo_ref: Optional[str] = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        now = _clock(now)
        today = now.date()

        employee = self._get_employee(employee_id)
        if location is None:
            raise LocationUnavailable()

        record = require_open(self._attendance.get_for_employee_and_date(employee.employee_id, today))
        closed = self._close(record, employee, now=now, location=location, photo_ref=photo_ref, auto=False)
        if not self._attendance.save_checkout(closed):
            raise AlreadyCheckedOut()

        logger.info(
            "Employee %s checked out: %.2fh worked, %.2fh overtime",
            employee.employee_id,
            closed.total_hours,
            closed.overtime_hours,
        )
        return closed

    def auto_checkout(
        self,
        employee_id: int,
        *,
        now: datetime | None = None,
        locator: LocationProvider | None = None,
    ) -> Optional[AttendanceRecord]:
        """Close a session left open past the cap. Returns None when nothing was due."""

        now = _clock(now)
        record = self._attendance.get_latest_open(employee_id)
        if not record or not self.is_overdue(record, now=now):
            return None

        employee = self._get_employee(employee_id)
        location = self._current_or_last_known(record, locator)

        closed = self._close(record, employee, now=now, location=location, photo_ref=None, auto=True)
        if not self._attendance.save_checkout(closed):
            # Closed by another tick in the meantime.
            return None

        logger.info(
            "Auto checkout for employee %s after %.2fh (overtime %.2fh)",
            employee.employee_id,
            closed.total_hours,
            closed.overtime_hours,
        )
        return closed

    def auto_checkout_overdue(
        self,
        *,
        now: datetime | None = None,
        locator_for: Callable[[AttendanceRecord], LocationProvider | None] | None = None,
    ) -> list[AttendanceRecord]:
        """Sweep every open session and close the overdue ones."""

        now = _clock(now)
        closed: list[AttendanceRecord] = []
        for record in self._attendance.list_open():
            if not self.is_overdue(record, now=now):
                continue
            locator = locator_for(record) if locator_for else None
            try:
                result = self.auto_checkout(record.employee_id, now=now, locator=locator)
            except NotFound:
                logger.warning("Skipping auto checkout for missing employee %s", record.employee_id)
                continue
            if result:
                closed.append(result)
        return closed

    def is_overdue(self, record: AttendanceRecord, *, now: datetime) -> bool:
        if not record.is_open or record.check_in_time is None:
            return False
        return hours_between(record.check_in_time, now) > self._policy.auto_checkout_after_hours

    def get_today_record(self, employee_id: int, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_employee_and_date(employee_id, today)

    def session_state(self, employee_id: int, today: date) -> SessionState:
        return state_of(self._attendance.get_for_employee_and_date(employee_id, today))

    def get_history(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT):
        return list(self._attendance.get_recent_for_employee(employee_id, limit))

    def _current_or_last_known(
        self, record: AttendanceRecord, locator: LocationProvider | None
    ) -> Optional[GPSLocation]:
        if locator is None:
            return record.check_in_location
        try:
            return locator.get_current_location()
        except (LocationUnavailable, ValidationError) as e:
            logger.warning(
                "No usable GPS fix for auto checkout of employee %s (%s); using check-in location",
                record.employee_id,
                e,
            )
            return record.check_in_location

    def _close(
        self,
        record: AttendanceRecord,
        employee: Employee,
        *,
        now: datetime,
        location: Optional[GPSLocation],
        photo_ref: Optional[str],
        auto: bool,
    ) -> AttendanceRecord:
        hours = hours_between(record.check_in_time, now)
        presence = self._presence.for_reference(employee.work_location)
        present = presence.both_present(record.check_in_location, location)
        overtime = self._policy.overtime_hours(hours, present=present)

        return close(
            record,
            check_out_time=now,
            location=location,
            photo_ref=photo_ref,
            total_hours=hours,
            overtime_hours=overtime,
            auto=auto,
        )
