from __future__ import annotations

from typing import Optional

from .distance import within_radius
from .model import GPSLocation


def is_present_at(
    observed: Optional[GPSLocation],
    reference: Optional[GPSLocation],
    threshold_meters: float,
) -> bool:
    """True when an observed fix lies inside the circle around ``reference``.

    Missing data on either side (no GPS fix, no work station) is never "present".
    """
    if observed is None or reference is None:
        return False
    return within_radius(observed, reference, threshold_meters)
