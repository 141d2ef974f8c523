"""Check-in/check-out state machine.

``NOT_STARTED -> CHECKED_IN -> CHECKED_OUT``; the last state is terminal and a
new calendar day starts from ``NOT_STARTED`` again. Transition helpers reject
illegal calls before anything is written.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..core.enums import SessionState
from ..core.exceptions import AlreadyCheckedIn, AlreadyCheckedOut, NoCheckInFound, ValidationError
from ..geo.model import GPSLocation
from .model import AttendanceRecord


def state_of(record: Optional[AttendanceRecord]) -> SessionState:
    return record.state if record is not None else SessionState.NOT_STARTED


def require_can_check_in(record: Optional[AttendanceRecord]) -> None:
    if state_of(record) != SessionState.NOT_STARTED:
        raise AlreadyCheckedIn()


def require_open(record: Optional[AttendanceRecord]) -> AttendanceRecord:
    state = state_of(record)
    if state == SessionState.CHECKED_OUT:
        raise AlreadyCheckedOut()
    if state != SessionState.CHECKED_IN or record.check_in_time is None:
        raise NoCheckInFound()
    return record


def close(
    record: AttendanceRecord,
    *,
    check_out_time: datetime,
    location: Optional[GPSLocation],
    photo_ref: Optional[str],
    total_hours: float,
    overtime_hours: float,
    auto: bool = False,
) -> AttendanceRecord:
    """Return the terminal version of an open record."""

    record = require_open(record)
    if check_out_time < record.check_in_time:
        raise ValidationError("Check-out time cannot be earlier than check-in time")

    return replace(
        record,
        state=SessionState.CHECKED_OUT,
        check_out_time=check_out_time,
        check_out_location=location,
        check_out_photo_ref=photo_ref,
        total_hours=total_hours,
        overtime_hours=overtime_hours,
        auto_checked_out=auto,
    )
