from __future__ import annotations

from datetime import date, datetime

import pytest

from geo_attendance.core.enums import LocationErrorKind, Role, SessionState
from geo_attendance.geo.model import GPSLocation
from geo_attendance.geo.provider import FixedLocationProvider, SubmittedLocationProvider

STATION = GPSLocation(28.6139, 77.2090)
FIVE_KM_NORTH = GPSLocation(28.6589, 77.2090)


def checked_in(container, employee_id, when=datetime(2026, 3, 2, 8, 0)):
    return container.attendance_service.check_in(employee_id, location=STATION, now=when)


def test_nothing_to_close(container, employee_id):
    assert container.attendance_service.auto_checkout(employee_id, now=datetime(2026, 3, 2, 20)) is None


def test_exactly_at_cap_is_not_closed(container, employee_id, attendance_repo):
    checked_in(container, employee_id)
    assert container.attendance_service.auto_checkout(employee_id, now=datetime(2026, 3, 2, 17, 0)) is None
    assert attendance_repo.checkout_writes == 0


def test_past_cap_closes_once(container, employee_id, attendance_repo):
    checked_in(container, employee_id)
    svc = container.attendance_service

    closed = svc.auto_checkout(employee_id, now=datetime(2026, 3, 2, 17, 1))
    assert closed is not None
    assert closed.auto_checked_out
    assert closed.state == SessionState.CHECKED_OUT
    assert closed.total_hours == pytest.approx(9 + 1 / 60)
    assert closed.overtime_hours == pytest.approx(1 + 1 / 60)
    assert closed.check_out_location == STATION

    assert svc.auto_checkout(employee_id, now=datetime(2026, 3, 2, 17, 2)) is None
    assert attendance_repo.checkout_writes == 1


def test_gps_failure_falls_back_to_check_in_fix(container, employee_id):
    checked_in(container, employee_id)
    locator = FixedLocationProvider(None, reason=LocationErrorKind.TIMEOUT)

    closed = container.attendance_service.auto_checkout(
        employee_id, now=datetime(2026, 3, 2, 18), locator=locator
    )
    assert closed.check_out_location == STATION
    assert closed.overtime_hours == pytest.approx(2.0)


def test_malformed_fix_falls_back_to_check_in_fix(container, employee_id, attendance_repo):
    checked_in(container, employee_id)
    locator = SubmittedLocationProvider({"latitude": "abc", "longitude": "77.2"})

    closed = container.attendance_service.auto_checkout(
        employee_id, now=datetime(2026, 3, 2, 18), locator=locator
    )
    assert closed.auto_checked_out
    assert closed.check_out_location == STATION
    assert attendance_repo.list_open() == []


def test_fix_away_from_station_gets_no_overtime(container, employee_id):
    checked_in(container, employee_id)
    closed = container.attendance_service.auto_checkout(
        employee_id, now=datetime(2026, 3, 2, 18), locator=FixedLocationProvider(FIVE_KM_NORTH)
    )
    assert closed.auto_checked_out
    assert closed.total_hours == pytest.approx(10.0)
    assert closed.overtime_hours == 0.0


def test_session_across_midnight(container, employee_id, attendance_repo):
    checked_in(container, employee_id, when=datetime(2026, 3, 2, 20, 0))
    closed = container.attendance_service.auto_checkout(employee_id, now=datetime(2026, 3, 3, 5, 30))

    assert closed.work_date == date(2026, 3, 2)
    assert closed.total_hours == pytest.approx(9.5)
    assert attendance_repo.get_for_employee_and_date(employee_id, date(2026, 3, 3)) is None


def test_manual_checkout_after_auto_checkout_is_rejected(container, employee_id):
    from geo_attendance.core.exceptions import AlreadyCheckedOut

    checked_in(container, employee_id)
    container.attendance_service.auto_checkout(employee_id, now=datetime(2026, 3, 2, 17, 30))
    with pytest.raises(AlreadyCheckedOut):
        container.attendance_service.check_out(employee_id, location=STATION, now=datetime(2026, 3, 2, 17, 31))


def test_sweep_closes_only_overdue_sessions(container, employees, station_id, employee_id):
    late_starter = employees.create(
        employee_code="EMP010",
        name="Meera",
        date_of_birth=None,
        phone=None,
        role=Role.EMPLOYEE,
        work_station_id=station_id,
        password_hash=None,
    )
    night_shift = employees.create(
        employee_code="EMP011",
        name="Kabir",
        date_of_birth=None,
        phone=None,
        role=Role.EMPLOYEE,
        work_station_id=None,
        password_hash=None,
    )
    checked_in(container, employee_id, when=datetime(2026, 3, 2, 7, 0))
    checked_in(container, night_shift, when=datetime(2026, 3, 2, 6, 0))
    checked_in(container, late_starter, when=datetime(2026, 3, 2, 11, 0))

    closed = container.attendance_service.auto_checkout_overdue(now=datetime(2026, 3, 2, 16, 30))

    assert sorted(r.employee_id for r in closed) == sorted([employee_id, night_shift])
    assert all(r.auto_checked_out for r in closed)
    assert [r.employee_id for r in container.attendance_repo.list_open()] == [late_starter]


def test_sweep_skips_deleted_employees(container, attendance_repo, employees, employee_id):
    checked_in(container, employee_id)
    employees._rows.pop(employee_id)

    assert container.attendance_service.auto_checkout_overdue(now=datetime(2026, 3, 2, 20)) == []
    assert len(attendance_repo.list_open()) == 1
