from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..geo.model import GPSLocation


@dataclass(frozen=True)
class WorkStation:
    """Domain entity: an admin-managed work site."""

    station_id: int
    name: str
    latitude: float
    longitude: float
    created_at: Optional[datetime] = None

    @property
    def location(self) -> GPSLocation:
        return GPSLocation(latitude=self.latitude, longitude=self.longitude)
