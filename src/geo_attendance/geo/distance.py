from __future__ import annotations

import math
from typing import Optional

from ..core.constants import EARTH_RADIUS_METERS
from .model import GPSLocation


def distance_meters(a: GPSLocation, b: GPSLocation) -> float:
    """Great-circle distance between two fixes (Haversine, spherical earth)."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_METERS * c


def within_radius(a: Optional[GPSLocation], b: Optional[GPSLocation], threshold_meters: float) -> bool:
    if a is None or b is None:
        return False
    return distance_meters(a, b) <= threshold_meters
