from __future__ import annotations

from typing import Optional

from ...geo.geofence import is_present_at
from ...geo.model import GPSLocation
from .base import PresencePolicy


class WorkStationPresence(PresencePolicy):
    """Each fix must fall inside the radius around the assigned work station."""

    def __init__(self, reference: Optional[GPSLocation], radius_meters: float):
        self.reference = reference
        self.radius_meters = radius_meters

    def both_present(self, check_in: Optional[GPSLocation], check_out: Optional[GPSLocation]) -> bool:
        return is_present_at(check_in, self.reference, self.radius_meters) and is_present_at(
            check_out, self.reference, self.radius_meters
        )
