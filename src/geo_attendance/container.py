from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.capture import CaptureService
from .attendance.factory import PresencePolicyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.policy import AttendancePolicy
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import AuthService, EmployeeService
from .reports.service import ReportService
from .stations.mysql_station_repository import MySQLWorkStationRepository
from .stations.repository import WorkStationRepository
from .stations.service import WorkStationService
from .storage.photo_store import LocalPhotoStore, PhotoStore


@dataclass(frozen=True)
class Container:
    policy: AttendancePolicy

    employees_repo: EmployeeRepository
    stations_repo: WorkStationRepository
    attendance_repo: AttendanceRepository
    photo_store: PhotoStore

    auth_service: AuthService
    employee_service: EmployeeService
    station_service: WorkStationService
    attendance_service: AttendanceService
    capture_service: CaptureService
    report_service: ReportService


def wire(
    *,
    employees_repo: EmployeeRepository,
    stations_repo: WorkStationRepository,
    attendance_repo: AttendanceRepository,
    photo_store: PhotoStore,
    policy: Optional[AttendancePolicy] = None,
) -> Container:
    """Assemble services over any repository implementation."""

    policy = policy or AttendancePolicy()
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        policy=policy,
        presence_factory=PresencePolicyFactory(policy),
    )

    return Container(
        policy=policy,
        employees_repo=employees_repo,
        stations_repo=stations_repo,
        attendance_repo=attendance_repo,
        photo_store=photo_store,
        auth_service=AuthService(employees_repo),
        employee_service=EmployeeService(employees_repo, stations_repo),
        station_service=WorkStationService(stations_repo),
        attendance_service=attendance_service,
        capture_service=CaptureService(attendance_service, photo_store),
        report_service=ReportService(attendance_repo, employees_repo, policy=policy),
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    policy = AttendancePolicy.from_settings(settings) if settings is not None else AttendancePolicy()

    return wire(
        employees_repo=MySQLEmployeeRepository(conn),
        stations_repo=MySQLWorkStationRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        photo_store=LocalPhotoStore(
            getattr(settings, "PHOTO_STORAGE_DIR", "static/selfies"),
            getattr(settings, "PHOTO_BASE_URL", "/static/selfies"),
        ),
        policy=policy,
    )
