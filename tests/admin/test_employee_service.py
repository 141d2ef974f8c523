from __future__ import annotations

from datetime import date, datetime

import pytest

from geo_attendance.core.enums import Role
from geo_attendance.core.exceptions import AuthorizationError, NotFound, ValidationError
from geo_attendance.employees.service import SessionContext
from geo_attendance.geo.model import GPSLocation


def test_create_employee_at_station(container, admin, station_id):
    svc = container.employee_service
    new_id = svc.create(
        admin,
        employee_code="EMP100",
        name="Neha",
        password="secret1",
        date_of_birth=date(1990, 1, 1),
        phone=" 98765 ",
        work_station_id=station_id,
    )

    employee = svc.get(new_id)
    assert employee.employee_code == "EMP100"
    assert employee.role == Role.EMPLOYEE
    assert employee.phone == "98765"
    assert employee.work_location == GPSLocation(28.6139, 77.2090)
    assert employee.password_hash and employee.password_hash != "secret1"


def test_duplicate_employee_code(container, admin, employee_id):
    with pytest.raises(ValidationError, match="already exists"):
        container.employee_service.create(admin, employee_code="EMP001", name="Other", password="secret1")


def test_short_password(container, admin):
    with pytest.raises(ValidationError):
        container.employee_service.create(admin, employee_code="EMP100", name="Neha", password="123")


def test_unknown_station(container, admin):
    with pytest.raises(NotFound):
        container.employee_service.create(
            admin, employee_code="EMP100", name="Neha", password="secret1", work_station_id=77
        )


def test_only_admins_manage_employees(container, employee_id):
    me = SessionContext(employee_id=employee_id, name="Asha", role=Role.EMPLOYEE)
    with pytest.raises(AuthorizationError):
        container.employee_service.create(me, employee_code="EMP100", name="Neha", password="secret1")


def test_assign_station(container, admin, station_id, roaming_employee_id):
    employee = container.employee_service.assign_station(
        admin, employee_id=roaming_employee_id, work_station_id=station_id
    )
    assert employee.work_station_id == station_id
    assert employee.work_location is not None

    employee = container.employee_service.assign_station(admin, employee_id=roaming_employee_id, work_station_id=None)
    assert employee.work_location is None


def test_delete_removes_attendance(container, admin, employee_id, attendance_repo):
    container.attendance_service.check_in(
        employee_id, location=GPSLocation(28.6139, 77.2090), now=datetime(2026, 3, 2, 8)
    )

    container.employee_service.delete(admin, employee_id=employee_id)

    assert attendance_repo.records == {}
    with pytest.raises(NotFound):
        container.employee_service.get(employee_id)


def test_admin_cannot_delete_self(container, admin):
    with pytest.raises(ValidationError):
        container.employee_service.delete(admin, employee_id=admin.employee_id)
