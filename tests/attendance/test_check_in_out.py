from __future__ import annotations

from datetime import date, datetime

import pytest

from geo_attendance.attendance.state import close
from geo_attendance.core.enums import SessionState
from geo_attendance.core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    LocationUnavailable,
    NoCheckInFound,
    NotFound,
    ValidationError,
)
from geo_attendance.geo.model import GPSLocation

AT_STATION = GPSLocation(28.6139, 77.2090)
NEAR_STATION = GPSLocation(28.6140, 77.2091)
FIVE_KM_NORTH = GPSLocation(28.6589, 77.2090)

DAY = date(2026, 3, 2)


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 3, 2, hour, minute)


def test_check_in_opens_the_day(container, employee_id):
    svc = container.attendance_service
    assert svc.session_state(employee_id, DAY) == SessionState.NOT_STARTED

    record = svc.check_in(employee_id, location=AT_STATION, photo_ref="in.jpg", now=at(8, 30))

    assert record.state == SessionState.CHECKED_IN
    assert record.work_date == DAY
    assert record.check_in_location == AT_STATION
    assert record.check_out_time is None
    assert svc.session_state(employee_id, DAY) == SessionState.CHECKED_IN


def test_immediate_checkout_has_no_hours(container, employee_id):
    svc = container.attendance_service
    svc.check_in(employee_id, location=AT_STATION, now=at(10))
    closed = svc.check_out(employee_id, location=AT_STATION, now=at(10))

    assert closed.total_hours == pytest.approx(0.0)
    assert closed.overtime_hours == 0.0
    assert closed.state == SessionState.CHECKED_OUT


def test_nine_hours_at_station_earns_one_hour_overtime(container, employee_id):
    svc = container.attendance_service
    svc.check_in(employee_id, location=AT_STATION, now=at(8))
    closed = svc.check_out(employee_id, location=AT_STATION, photo_ref="out.jpg", now=at(17))

    assert closed.total_hours == pytest.approx(9.0)
    assert closed.overtime_hours == pytest.approx(1.0)
    assert closed.check_out_photo_ref == "out.jpg"
    assert not closed.auto_checked_out


def test_checkout_far_from_station_earns_no_overtime(container, employee_id):
    svc = container.attendance_service
    svc.check_in(employee_id, location=AT_STATION, now=at(8))
    closed = svc.check_out(employee_id, location=FIVE_KM_NORTH, now=at(17))

    assert closed.total_hours == pytest.approx(9.0)
    assert closed.overtime_hours == 0.0

    row = container.report_service.daily_report(DAY).rows[0]
    assert row["status"] == "Away"


def test_short_day_has_no_overtime(container, employee_id):
    svc = container.attendance_service
    svc.check_in(employee_id, location=AT_STATION, now=at(9))
    closed = svc.check_out(employee_id, location=AT_STATION, now=at(16, 45))

    assert closed.total_hours == pytest.approx(7.75)
    assert closed.overtime_hours == 0.0


def test_second_check_in_is_rejected_and_state_kept(container, employee_id, attendance_repo):
    svc = container.attendance_service
    first = svc.check_in(employee_id, location=AT_STATION, now=at(8))

    with pytest.raises(AlreadyCheckedIn):
        svc.check_in(employee_id, location=AT_STATION, now=at(9))

    assert attendance_repo.get_for_employee_and_date(employee_id, DAY) == first
    assert len(attendance_repo.records) == 1


def test_check_in_after_checkout_same_day_is_rejected(container, employee_id):
    svc = container.attendance_service
    svc.check_in(employee_id, location=AT_STATION, now=at(8))
    svc.check_out(employee_id, location=AT_STATION, now=at(12))

    with pytest.raises(AlreadyCheckedIn):
        svc.check_in(employee_id, location=AT_STATION, now=at(13))


def test_checkout_without_check_in(container, employee_id):
    with pytest.raises(NoCheckInFound):
        container.attendance_service.check_out(employee_id, location=AT_STATION, now=at(17))


def test_second_checkout_is_rejected(container, employee_id, attendance_repo):
    svc = container.attendance_service
    svc.check_in(employee_id, location=AT_STATION, now=at(8))
    first = svc.check_out(employee_id, location=AT_STATION, now=at(17))

    with pytest.raises(AlreadyCheckedOut) as exc:
        svc.check_out(employee_id, location=AT_STATION, now=at(18))

    assert isinstance(exc.value, NoCheckInFound)
    assert attendance_repo.get_for_employee_and_date(employee_id, DAY) == first
    assert attendance_repo.checkout_writes == 1


def test_missing_gps_fix_blocks_both_actions(container, employee_id, attendance_repo):
    svc = container.attendance_service
    with pytest.raises(LocationUnavailable):
        svc.check_in(employee_id, location=None, now=at(8))
    assert not attendance_repo.records

    svc.check_in(employee_id, location=AT_STATION, now=at(8))
    with pytest.raises(LocationUnavailable):
        svc.check_out(employee_id, location=None, now=at(17))
    assert svc.session_state(employee_id, DAY) == SessionState.CHECKED_IN


def test_unknown_employee(container):
    with pytest.raises(NotFound):
        container.attendance_service.check_in(999, location=AT_STATION, now=at(8))


def test_checkout_before_check_in_time_is_rejected(container, employee_id, attendance_repo):
    svc = container.attendance_service
    svc.check_in(employee_id, location=AT_STATION, now=at(10))
    with pytest.raises(ValidationError):
        svc.check_out(employee_id, location=AT_STATION, now=at(9, 59))

    assert svc.session_state(employee_id, DAY) == SessionState.CHECKED_IN
    assert attendance_repo.checkout_writes == 0


def test_close_rejects_checkout_before_check_in(container, employee_id):
    record = container.attendance_service.check_in(employee_id, location=AT_STATION, now=at(10))
    with pytest.raises(ValidationError):
        close(
            record,
            check_out_time=at(9),
            location=AT_STATION,
            photo_ref=None,
            total_hours=0.0,
            overtime_hours=0.0,
        )


def test_timestamps_are_kept_to_whole_seconds(container, employee_id):
    svc = container.attendance_service
    record = svc.check_in(employee_id, location=AT_STATION, now=datetime(2026, 3, 2, 9, 0, 0, 700_000))
    assert record.check_in_time == at(9)

    closed = svc.check_out(employee_id, location=AT_STATION, now=datetime(2026, 3, 2, 9, 0, 0, 200_000))
    assert closed.check_out_time == at(9)
    assert closed.total_hours == 0.0


def test_full_day_with_late_arrival(container, employee_id):
    svc = container.attendance_service
    svc.check_in(employee_id, location=NEAR_STATION, now=at(9))
    closed = svc.check_out(employee_id, location=NEAR_STATION, now=at(18, 30))

    assert closed.total_hours == pytest.approx(9.5)
    assert closed.overtime_hours == pytest.approx(1.5)

    row = container.report_service.daily_report(DAY).rows[0]
    assert row["status"] == "Present"
    assert row["late"] == "Yes"
    assert row["total_hours"] == "9.50"
    assert row["overtime_hours"] == "1.50"
    assert row["check_in"] == "09:00"
    assert row["check_out"] == "18:30"


def test_new_day_starts_fresh(container, employee_id):
    svc = container.attendance_service
    svc.check_in(employee_id, location=AT_STATION, now=at(8))
    svc.check_out(employee_id, location=AT_STATION, now=at(17))

    record = svc.check_in(employee_id, location=AT_STATION, now=datetime(2026, 3, 3, 8, 0))
    assert record.work_date == date(2026, 3, 3)
    assert [r.work_date for r in svc.get_history(employee_id)] == [date(2026, 3, 3), DAY]
