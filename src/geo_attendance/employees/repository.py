from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self, *, role: Optional[Role] = None) -> Sequence[Employee]:
        raise NotImplementedError

    def count(self, *, role: Optional[Role] = None) -> int:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_code: str,
        name: str,
        date_of_birth: Optional[date],
        phone: Optional[str],
        role: Role,
        work_station_id: Optional[int],
        password_hash: Optional[str],
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        employee_id: int,
        name: str,
        date_of_birth: Optional[date],
        phone: Optional[str],
        work_station_id: Optional[int],
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        """Delete the employee and every attendance record it owns."""

        raise NotImplementedError
