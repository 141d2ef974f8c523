from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Any

from ..core import constants


@dataclass(frozen=True)
class AttendancePolicy:
    """Tunable thresholds for hours, overtime and geofencing."""

    standard_working_hours: float = constants.STANDARD_WORKING_HOURS
    auto_checkout_after_hours: float = constants.AUTO_CHECKOUT_AFTER_HOURS
    location_match_radius_meters: float = constants.LOCATION_MATCH_RADIUS_METERS
    work_location_radius_meters: float = constants.WORK_LOCATION_RADIUS_METERS
    late_hour: int = constants.LATE_HOUR

    @classmethod
    def from_settings(cls, settings: ModuleType | Any) -> "AttendancePolicy":
        defaults = cls()
        return cls(
            standard_working_hours=float(getattr(settings, "STANDARD_WORKING_HOURS", defaults.standard_working_hours)),
            auto_checkout_after_hours=float(
                getattr(settings, "AUTO_CHECKOUT_AFTER_HOURS", defaults.auto_checkout_after_hours)
            ),
            location_match_radius_meters=float(
                getattr(settings, "LOCATION_MATCH_RADIUS_METERS", defaults.location_match_radius_meters)
            ),
            work_location_radius_meters=float(
                getattr(settings, "WORK_LOCATION_RADIUS_METERS", defaults.work_location_radius_meters)
            ),
            late_hour=int(getattr(settings, "LATE_HOUR", defaults.late_hour)),
        )

    def overtime_hours(self, total_hours: float, *, present: bool) -> float:
        """Hours past the standard day, only when the presence gate passed."""
        if not present:
            return 0.0
        return max(0.0, total_hours - self.standard_working_hours)
