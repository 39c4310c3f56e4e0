from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, Iterator, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..attendance.mysql_attendance_repository import ON_DAY_CLAUSE
from ..common.datetime_utils import to_db_datetime
from ..core.constants import ABSENCE_LOCK_NAME
from ..core.enums import AnomalyType, AttendanceSource, AttendanceStatus
from ..core.exceptions import DetectionTransactionAbortedError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import advisory_lock, db_cursor, fetchall, fetchone, normalize_json_list
from ..employees.model import Employee
from ..employees.mysql_employee_repository import select_active_requiring_clocking
from ..schedules.model import RecoveryDeclaration, WorkSchedule
from .repository import AbsenceDetectionRepository

# Errors after which InnoDB has already rolled back the whole transaction.
TRANSACTION_ROLLBACK_ERRNOS = frozenset({errorcode.ER_LOCK_DEADLOCK})


def row_to_declaration(r: Dict[str, Any]) -> RecoveryDeclaration:
    return RecoveryDeclaration(
        declaration_id=int(r["declaration_id"]),
        recovery_period_id=int(r["recovery_period_id"]),
        recovery_date=r["recovery_date"],
        is_day_off=bool(r["is_day_off"]),
        status=r["status"],
        period_status=r["period_status"],
        applies_to_all=bool(r["applies_to_all"]),
        department_id=r.get("department_id"),
        segment_id=r.get("segment_id"),
        centre_id=r.get("centre_id"),
    )


class _RollbackAwareCursor:
    """Cursor proxy that reports a rolled-back transaction as a detection error."""

    def __init__(self, cur):
        self._cur = cur

    def execute(self, sql, params=None):
        try:
            if params is None:
                return self._cur.execute(sql)
            return self._cur.execute(sql, params)
        except mysql.connector.DatabaseError as e:
            if e.errno in TRANSACTION_ROLLBACK_ERRNOS:
                raise DetectionTransactionAbortedError(f"Detection transaction rolled back: {e}") from e
            raise

    def __getattr__(self, name):
        return getattr(self._cur, name)


class MySQLAbsenceRepository(AbsenceDetectionRepository):
    """Bound to one cursor, so every statement joins the caller's transaction."""

    def __init__(self, cur):
        self._cur = _RollbackAwareCursor(cur)

    def is_public_holiday(self, day: date) -> bool:
        self._cur.execute("SELECT holiday_id FROM hr_public_holidays WHERE holiday_date=%s LIMIT 1", (day,))
        return fetchone(self._cur) is not None

    def get_active_schedule(self) -> Optional[WorkSchedule]:
        self._cur.execute(
            """
            SELECT schedule_id, name, working_days, is_active
            FROM hr_work_schedules
            WHERE is_active=1
            ORDER BY schedule_id ASC
            LIMIT 1
            """
        )
        r = fetchone(self._cur)
        if not r:
            return None
        return WorkSchedule(
            schedule_id=int(r["schedule_id"]),
            name=r["name"],
            working_days=frozenset(int(d) for d in normalize_json_list(r.get("working_days"))),
            is_active=bool(r["is_active"]),
        )

    def list_clocking_employees(self) -> Sequence[Employee]:
        return select_active_requiring_clocking(self._cur)

    def list_recovery_declarations(self, day: date) -> Sequence[RecoveryDeclaration]:
        self._cur.execute(
            """
            SELECT
                rd.declaration_id, rd.recovery_period_id, rd.recovery_date, rd.is_day_off,
                rd.status, rp.status AS period_status, rp.applies_to_all,
                rd.department_id, rd.segment_id, rd.centre_id
            FROM hr_recovery_declarations rd
            JOIN hr_recovery_periods rp ON rp.period_id = rd.recovery_period_id
            WHERE rd.recovery_date=%s
            ORDER BY rd.declaration_id ASC
            """,
            (day,),
        )
        return [row_to_declaration(r) for r in fetchall(self._cur)]

    def has_attendance(self, employee_id: int, day: date) -> bool:
        self._cur.execute(
            f"""
            SELECT record_id
            FROM hr_attendance_records
            WHERE employee_id=%s AND {ON_DAY_CLAUSE}
            LIMIT 1
            """,
            (int(employee_id), day, day),
        )
        return fetchone(self._cur) is not None

    def insert_absence(self, *, employee_id: int, day: date, clock_time: datetime, notes: str) -> bool:
        try:
            self._cur.execute(
                """
                INSERT INTO hr_attendance_records(
                    employee_id, attendance_date, clock_time, status, source,
                    notes, is_anomaly, anomaly_type, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,1,%s,UTC_TIMESTAMP())
                """,
                (
                    int(employee_id),
                    day,
                    to_db_datetime(clock_time),
                    AttendanceStatus.ABSENT.value,
                    AttendanceSource.SYSTEM.value,
                    notes,
                    AnomalyType.MISSING_RECORD.value,
                ),
            )
        except mysql.connector.IntegrityError as e:
            # uq_system_absence: another run already recorded this absence.
            if e.errno == errorcode.ER_DUP_ENTRY:
                return False
            raise
        return True


@contextmanager
def mysql_absence_unit_of_work(
    conn_factory: DatabaseConnection,
    *,
    lock_timeout_seconds: int = 0,
) -> Iterator[MySQLAbsenceRepository]:
    """One connection, one transaction and the detection lock for a whole pass."""

    with db_cursor(conn_factory) as (_, cur):
        with advisory_lock(cur, ABSENCE_LOCK_NAME, timeout_seconds=lock_timeout_seconds):
            yield MySQLAbsenceRepository(cur)
