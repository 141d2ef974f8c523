from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

from ..core.constants import GPS_MAX_AGE_MS, GPS_TIMEOUT_MS
from ..core.enums import LocationErrorKind
from ..core.exceptions import LocationUnavailable
from .model import GPSLocation


@dataclass(frozen=True)
class LocationOptions:
    high_accuracy: bool = True
    timeout_ms: int = GPS_TIMEOUT_MS
    max_age_ms: int = GPS_MAX_AGE_MS


class LocationProvider(Protocol):
    """Source of the device's current GPS fix.

    Implementations raise ``LocationUnavailable`` for permission, availability
    and timeout failures alike.
    """

    def get_current_location(self, options: Optional[LocationOptions] = None) -> GPSLocation:
        raise NotImplementedError


class FixedLocationProvider:
    """Returns a known fix, or fails with a fixed reason when none is set."""

    def __init__(
        self,
        location: Optional[GPSLocation],
        *,
        reason: LocationErrorKind = LocationErrorKind.POSITION_UNAVAILABLE,
    ):
        self._location = location
        self._reason = reason

    def get_current_location(self, options: Optional[LocationOptions] = None) -> GPSLocation:
        if self._location is None:
            raise LocationUnavailable(self._reason)
        return self._location


class SubmittedLocationProvider:
    """Fix reported by the client along with a check-in/check-out form.

    The browser resolves the fix; a failure comes back as ``gps_error`` with one
    of the ``LocationErrorKind`` values.
    """

    def __init__(self, form: Mapping[str, Any]):
        self._form = form

    def get_current_location(self, options: Optional[LocationOptions] = None) -> GPSLocation:
        error = (self._form.get("gps_error") or "").strip().lower()
        if error:
            try:
                reason = LocationErrorKind(error)
            except ValueError:
                reason = LocationErrorKind.POSITION_UNAVAILABLE
            raise LocationUnavailable(reason)

        if not self._form.get("latitude") or not self._form.get("longitude"):
            raise LocationUnavailable(LocationErrorKind.POSITION_UNAVAILABLE)

        # Malformed coordinates surface as ValidationError.
        return GPSLocation.from_mapping(self._form)
