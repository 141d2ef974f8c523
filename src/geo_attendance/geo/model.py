from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.validators import require_float, require_latitude, require_longitude
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class GPSLocation:
    """A single GPS fix in decimal degrees. Accuracy is the reported radius in meters."""

    latitude: float
    longitude: float
    accuracy: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "latitude", require_latitude(self.latitude))
        object.__setattr__(self, "longitude", require_longitude(self.longitude))
        if self.accuracy is not None:
            accuracy = require_float(self.accuracy, "Accuracy")
            if accuracy < 0:
                raise ValidationError("Accuracy must not be negative")
            object.__setattr__(self, "accuracy", accuracy)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GPSLocation":
        accuracy = data.get("accuracy")
        if isinstance(accuracy, str) and not accuracy.strip():
            accuracy = None
        return cls(latitude=data.get("latitude"), longitude=data.get("longitude"), accuracy=accuracy)

    def as_text(self) -> str:
        return f"{self.latitude},{self.longitude}"

    def maps_link(self) -> str:
        return f"https://www.google.com/maps?q={self.latitude},{self.longitude}"

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude, "accuracy": self.accuracy}


def location_or_none(latitude: Any, longitude: Any, accuracy: Any = None) -> Optional[GPSLocation]:
    """Build a fix from nullable storage columns."""
    if latitude is None or longitude is None:
        return None
    return GPSLocation(
        latitude=float(latitude),
        longitude=float(longitude),
        accuracy=float(accuracy) if accuracy is not None else None,
    )
