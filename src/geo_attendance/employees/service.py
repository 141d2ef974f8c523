from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFound, ValidationError
from ..stations.repository import WorkStationRepository
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionContext:
    """Identity handed to services explicitly; what we store into the Flask session after login."""

    employee_id: int
    name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def require_admin(session: SessionContext) -> None:
    if not session.is_admin:
        raise AuthorizationError("You do not have permission for this action")


class AuthService:
    """Use case: authenticate an employee (login)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def authenticate(self, employee_code: str, password: str) -> SessionContext:
        employee = self._employees.get_by_code((employee_code or "").strip())
        if not employee or not employee.password_hash:
            raise AuthenticationError("Invalid employee ID or password")

        try:
            ok = check_password_hash(employee.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid employee ID or password")

        return SessionContext(employee_id=employee.employee_id, name=employee.name, role=employee.role)


class EmployeeService:
    """Use case: manage employees (admin)."""

    def __init__(self, employees: EmployeeRepository, stations: WorkStationRepository):
        self._employees = employees
        self._stations = stations

    def list_employees(self, *, role: Optional[Role] = None):
        return list(self._employees.list_all(role=role))

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFound("Employee not found")
        return employee

    def _check_station(self, work_station_id: Optional[int]) -> Optional[int]:
        if work_station_id is None:
            return None
        if not self._stations.get_by_id(int(work_station_id)):
            raise NotFound("Work station not found")
        return int(work_station_id)

    def create(
        self,
        session: SessionContext,
        *,
        employee_code: str,
        name: str,
        password: str,
        date_of_birth: Optional[date] = None,
        phone: Optional[str] = None,
        role: Role = Role.EMPLOYEE,
        work_station_id: Optional[int] = None,
    ) -> int:
        require_admin(session)
        employee_code = require_non_empty(employee_code, "Employee ID")
        name = require_non_empty(name, "Name")
        require_min_length(password, "Password", 6)

        if self._employees.get_by_code(employee_code):
            raise ValidationError("Employee ID already exists")

        station_id = self._check_station(work_station_id)
        employee_id = self._employees.create(
            employee_code=employee_code,
            name=name,
            date_of_birth=date_of_birth,
            phone=(phone or "").strip() or None,
            role=role,
            work_station_id=station_id,
            password_hash=generate_password_hash(password),
        )
        logger.info("Employee %s created by %s", employee_id, session.employee_id)
        return employee_id

    def update(
        self,
        session: SessionContext,
        *,
        employee_id: int,
        name: str,
        date_of_birth: Optional[date] = None,
        phone: Optional[str] = None,
        work_station_id: Optional[int] = None,
    ) -> Employee:
        require_admin(session)
        self.get(employee_id)
        name = require_non_empty(name, "Name")
        station_id = self._check_station(work_station_id)

        if not self._employees.update(
            employee_id=int(employee_id),
            name=name,
            date_of_birth=date_of_birth,
            phone=(phone or "").strip() or None,
            work_station_id=station_id,
        ):
            raise ValidationError("Updating employee failed")
        return self.get(employee_id)

    def assign_station(self, session: SessionContext, *, employee_id: int, work_station_id: Optional[int]) -> Employee:
        employee = self.get(employee_id)
        return self.update(
            session,
            employee_id=employee.employee_id,
            name=employee.name,
            date_of_birth=employee.date_of_birth,
            phone=employee.phone,
            work_station_id=work_station_id,
        )

    def delete(self, session: SessionContext, *, employee_id: int) -> None:
        """Remove an employee together with all attendance history. Irreversible."""

        require_admin(session)
        employee = self.get(employee_id)
        if employee.employee_id == session.employee_id:
            raise ValidationError("You cannot delete your own account")

        if not self._employees.delete_by_id(employee.employee_id):
            raise ValidationError("Deleting employee failed")
        logger.warning("Employee %s and their attendance deleted by %s", employee.employee_id, session.employee_id)
