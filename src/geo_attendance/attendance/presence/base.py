from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...geo.model import GPSLocation


class PresencePolicy(ABC):
    """Strategy Pattern: decide whether both fixes of a day count as "at work"."""

    @abstractmethod
    def both_present(self, check_in: Optional[GPSLocation], check_out: Optional[GPSLocation]) -> bool:
        raise NotImplementedError
