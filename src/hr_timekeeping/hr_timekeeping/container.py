from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Optional

from .absences.detector import AbsenceDetector
from .absences.mysql_absence_repository import mysql_absence_unit_of_work
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import ClockingService
from .clock.service import SystemClockService
from .core.constants import (
    DEFAULT_ABSENCE_TIMEZONE,
    DEFAULT_LOCK_TIMEOUT_SECONDS,
    DEFAULT_LOOKBACK_DAYS,
    DEFAULT_RUN_TIMEOUT_SECONDS,
)
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    settings_repo: MySQLSettingsRepository
    employees_repo: MySQLEmployeeRepository
    attendance_repo: MySQLAttendanceRepository

    auth_service: AuthService
    clock_service: SystemClockService
    clocking_service: ClockingService
    absence_detector: AbsenceDetector


def build_container(*, db_config: dict, absence_config: Optional[dict] = None) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        connection_timeout=int(db_config.get("connection_timeout", 10)),
    )
    conn = DatabaseConnection.get_instance(config)
    absence_config = absence_config or {}

    users_repo = MySQLUserRepository(conn)
    settings_repo = MySQLSettingsRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    auth_service = AuthService(users_repo)
    clock_service = SystemClockService(settings_repo)
    clocking_service = ClockingService(attendance_repo, employees_repo, settings_repo, clock_service)
    absence_detector = AbsenceDetector(
        partial(
            mysql_absence_unit_of_work,
            conn,
            lock_timeout_seconds=int(absence_config.get("lock_timeout_seconds", DEFAULT_LOCK_TIMEOUT_SECONDS)),
        ),
        timezone=str(absence_config.get("timezone", DEFAULT_ABSENCE_TIMEZONE)),
        lookback_days=int(absence_config.get("lookback_days", DEFAULT_LOOKBACK_DAYS)),
        run_timeout_seconds=float(absence_config.get("run_timeout_seconds", DEFAULT_RUN_TIMEOUT_SECONDS)),
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        settings_repo=settings_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        auth_service=auth_service,
        clock_service=clock_service,
        clocking_service=clocking_service,
        absence_detector=absence_detector,
    )
