from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for access control."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class SessionState(str, Enum):
    """Per employee-day attendance state, stored with the record."""

    NOT_STARTED = "NOT_STARTED"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"


class RecordStatus(str, Enum):
    """Read-side classification shown in reports and exports."""

    ABSENT = "Absent"
    WORKING = "Working"
    PRESENT = "Present"
    AWAY = "Away"


class CaptureAction(str, Enum):
    CHECK_IN = "checkin"
    CHECK_OUT = "checkout"


class LocationErrorKind(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
