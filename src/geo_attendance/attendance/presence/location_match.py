from __future__ import annotations

from typing import Optional

from ...geo.geofence import is_present_at
from ...geo.model import GPSLocation
from .base import PresencePolicy


class LocationMatchPresence(PresencePolicy):
    """No work station assigned: the check-out fix must be near the check-in fix."""

    def __init__(self, radius_meters: float):
        self.radius_meters = radius_meters

    def both_present(self, check_in: Optional[GPSLocation], check_out: Optional[GPSLocation]) -> bool:
        return is_present_at(check_out, check_in, self.radius_meters)
