from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..geo.model import GPSLocation
from .policy import AttendancePolicy
from .presence.base import PresencePolicy
from .presence.location_match import LocationMatchPresence
from .presence.work_station import WorkStationPresence


@dataclass
class PresencePolicyFactory:
    """Factory Pattern: pick the presence rule for an employee.

    The work-station rule governs whenever a station is assigned; the
    check-in/check-out match is only the fallback for unassigned employees.
    """

    policy: AttendancePolicy = field(default_factory=AttendancePolicy)

    def for_reference(self, reference: Optional[GPSLocation]) -> PresencePolicy:
        if reference is None:
            return LocationMatchPresence(self.policy.location_match_radius_meters)
        return WorkStationPresence(reference, self.policy.work_location_radius_meters)
