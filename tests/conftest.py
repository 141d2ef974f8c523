from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from geo_attendance.attendance.model import AttendanceRecord, AttendanceReportRow
from geo_attendance.container import wire
from geo_attendance.core.enums import Role, SessionState
from geo_attendance.core.exceptions import AlreadyCheckedIn, UploadFailed
from geo_attendance.employees.model import Employee
from geo_attendance.employees.service import SessionContext
from geo_attendance.geo.model import GPSLocation
from geo_attendance.stations.model import WorkStation

STATION = GPSLocation(28.6139, 77.2090)


class InMemoryStations:
    def __init__(self):
        self.stations: dict[int, WorkStation] = {}
        self._id = 0

    def list_all(self):
        return sorted(self.stations.values(), key=lambda s: s.name)

    def get_by_id(self, station_id: int) -> Optional[WorkStation]:
        return self.stations.get(station_id)

    def create(self, *, name: str, latitude: float, longitude: float) -> int:
        self._id += 1
        self.stations[self._id] = WorkStation(station_id=self._id, name=name, latitude=latitude, longitude=longitude)
        return self._id

    def update(self, *, station_id: int, name: str, latitude: float, longitude: float) -> bool:
        if station_id not in self.stations:
            return False
        self.stations[station_id] = replace(self.stations[station_id], name=name, latitude=latitude, longitude=longitude)
        return True

    def delete(self, station_id: int) -> bool:
        return self.stations.pop(station_id, None) is not None


class InMemoryEmployees:
    def __init__(self, stations: InMemoryStations):
        self._stations = stations
        self._rows: dict[int, Employee] = {}
        self._id = 0
        self.attendance: Optional["InMemoryAttendance"] = None

    def _resolve(self, e: Employee) -> Employee:
        station = self._stations.get_by_id(e.work_station_id) if e.work_station_id else None
        return replace(e, work_location=station.location if station else None)

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        e = self._rows.get(employee_id)
        return self._resolve(e) if e else None

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        for e in self._rows.values():
            if e.employee_code == employee_code:
                return self._resolve(e)
        return None

    def list_all(self, *, role=None):
        return [self._resolve(e) for e in self._rows.values() if role is None or e.role == role]

    def count(self, *, role=None) -> int:
        return len(self.list_all(role=role))

    def create(self, *, employee_code, name, date_of_birth, phone, role, work_station_id, password_hash) -> int:
        self._id += 1
        self._rows[self._id] = Employee(
            employee_id=self._id,
            employee_code=employee_code,
            name=name,
            date_of_birth=date_of_birth,
            phone=phone,
            role=role,
            work_station_id=work_station_id,
            password_hash=password_hash,
            created_at=datetime(2026, 1, 1, 8, 0),
        )
        return self._id

    def update(self, *, employee_id, name, date_of_birth, phone, work_station_id) -> bool:
        if employee_id not in self._rows:
            return False
        self._rows[employee_id] = replace(
            self._rows[employee_id],
            name=name,
            date_of_birth=date_of_birth,
            phone=phone,
            work_station_id=work_station_id,
        )
        return True

    def delete_by_id(self, employee_id: int) -> bool:
        if self.attendance is not None:
            self.attendance.delete_for_employee(employee_id)
        return self._rows.pop(employee_id, None) is not None


class InMemoryAttendance:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.records: dict[int, AttendanceRecord] = {}
        self._id = 0
        self.checkout_writes = 0

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        for r in self.records.values():
            if r.employee_id == employee_id and r.work_date == work_date:
                return r
        return None

    def get_latest_open(self, employee_id: int) -> Optional[AttendanceRecord]:
        open_ = [r for r in self.records.values() if r.employee_id == employee_id and r.is_open]
        return max(open_, key=lambda r: r.check_in_time, default=None)

    def list_open(self):
        return [r for r in self.records.values() if r.is_open]

    def get_recent_for_employee(self, employee_id: int, limit: int):
        items = [r for r in self.records.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.created_at, reverse=True)
        return items[:limit]

    def create_checkin(self, *, employee_id, work_date, check_in_time, location, photo_ref) -> AttendanceRecord:
        if self.get_for_employee_and_date(employee_id, work_date):
            raise AlreadyCheckedIn()
        self._id += 1
        rec = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            state=SessionState.CHECKED_IN,
            check_in_time=check_in_time,
            check_in_location=location,
            check_in_photo_ref=photo_ref,
            created_at=check_in_time,
        )
        self.records[self._id] = rec
        return rec

    def save_checkout(self, record: AttendanceRecord) -> bool:
        stored = self.records.get(record.attendance_id)
        if not stored or not stored.is_open:
            return False
        self.records[record.attendance_id] = record
        self.checkout_writes += 1
        return True

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        self.records[record.attendance_id] = record
        self._id = max(self._id, record.attendance_id)
        return record

    def delete_for_employee(self, employee_id: int) -> None:
        for k in [k for k, r in self.records.items() if r.employee_id == employee_id]:
            del self.records[k]

    def get_report_rows(self, *, start_date, end_date, employee_id=None):
        rows = []
        for r in self.records.values():
            if not start_date <= r.work_date <= end_date:
                continue
            if employee_id is not None and r.employee_id != employee_id:
                continue
            e = self._employees.get_by_id(r.employee_id)
            rows.append(
                AttendanceReportRow(
                    record=r,
                    employee_name=e.name if e else "Unknown",
                    employee_code=e.employee_code if e else "Unknown",
                    work_location=e.work_location if e else None,
                )
            )
        return rows


class FakePhotoStore:
    def __init__(self):
        self.uploads: dict[str, bytes] = {}
        self.fail = False

    def upload(self, path: str, blob: bytes) -> str:
        if self.fail:
            raise UploadFailed()
        self.uploads[path] = blob
        return f"https://cdn.test/selfies/{path}"


@pytest.fixture
def stations():
    return InMemoryStations()


@pytest.fixture
def employees(stations):
    return InMemoryEmployees(stations)


@pytest.fixture
def attendance_repo(employees):
    repo = InMemoryAttendance(employees)
    employees.attendance = repo
    return repo


@pytest.fixture
def photo_store():
    return FakePhotoStore()


@pytest.fixture
def container(stations, employees, attendance_repo, photo_store):
    return wire(
        employees_repo=employees,
        stations_repo=stations,
        attendance_repo=attendance_repo,
        photo_store=photo_store,
    )


@pytest.fixture
def station_id(stations):
    return stations.create(name="Head Office", latitude=STATION.latitude, longitude=STATION.longitude)


@pytest.fixture
def admin(employees):
    employee_id = employees.create(
        employee_code="ADM001",
        name="Admin",
        date_of_birth=None,
        phone=None,
        role=Role.ADMIN,
        work_station_id=None,
        password_hash=generate_password_hash("admin123"),
    )
    return SessionContext(employee_id=employee_id, name="Admin", role=Role.ADMIN)


@pytest.fixture
def employee_id(employees, station_id):
    return employees.create(
        employee_code="EMP001",
        name="Asha",
        date_of_birth=date(1995, 4, 12),
        phone="9999999999",
        role=Role.EMPLOYEE,
        work_station_id=station_id,
        password_hash=generate_password_hash("employee123"),
    )


@pytest.fixture
def roaming_employee_id(employees):
    """Employee without a work station."""
    return employees.create(
        employee_code="EMP002",
        name="Ravi",
        date_of_birth=None,
        phone=None,
        role=Role.EMPLOYEE,
        work_station_id=None,
        password_hash=generate_password_hash("employee123"),
    )
