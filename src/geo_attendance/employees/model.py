from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import Role
from ..geo.model import GPSLocation


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    ``work_location`` is resolved from the assigned work station when the row is
    read, so it always reflects the station's current coordinates.
    """

    employee_id: int
    employee_code: str
    name: str
    date_of_birth: Optional[date]
    phone: Optional[str]
    role: Role
    work_station_id: Optional[int] = None
    work_location: Optional[GPSLocation] = None
    created_at: Optional[datetime] = None
    password_hash: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
