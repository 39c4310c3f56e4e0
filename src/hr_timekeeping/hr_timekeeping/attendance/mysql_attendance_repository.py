from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import ensure_utc, to_db_datetime
from ..core.enums import AnomalyType, AttendanceSource, AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository

ATTENDANCE_COLUMNS = """
    record_id, employee_id, attendance_date, clock_time, status, source,
    notes, is_anomaly, anomaly_type
"""

# Rows written before attendance_date existed only carry clock_time.
ON_DAY_CLAUSE = "(attendance_date=%s OR DATE(clock_time)=%s)"


def row_to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        attendance_date=r["attendance_date"],
        clock_time=ensure_utc(r["clock_time"]),
        status=AttendanceStatus(r["status"]),
        source=AttendanceSource(r["source"]),
        notes=r.get("notes"),
        is_anomaly=bool(r.get("is_anomaly")),
        anomaly_type=AnomalyType(r["anomaly_type"]) if r.get("anomaly_type") else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee_and_date(self, employee_id: int, attendance_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {ATTENDANCE_COLUMNS}
                FROM hr_attendance_records
                WHERE employee_id=%s AND {ON_DAY_CLAUSE}
                ORDER BY clock_time ASC, record_id ASC
                """,
                (int(employee_id), attendance_date, attendance_date),
            )
            return [row_to_record(r) for r in fetchall(cur)]

    def create_clock_event(
        self,
        *,
        employee_id: int,
        attendance_date: date,
        clock_time: datetime,
        status: AttendanceStatus,
        source: AttendanceSource,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO hr_attendance_records(
                    employee_id, attendance_date, clock_time, status, source, notes, is_anomaly, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,0,UTC_TIMESTAMP())
                """,
                (int(employee_id), attendance_date, to_db_datetime(clock_time), status.value, source.value, notes),
            )
            return AttendanceRecord(
                record_id=int(cur.lastrowid),
                employee_id=int(employee_id),
                attendance_date=attendance_date,
                clock_time=ensure_utc(clock_time),
                status=status,
                source=source,
                notes=notes,
            )
