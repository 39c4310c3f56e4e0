from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceSource, AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_employee_and_date(self, employee_id: int, attendance_date: date) -> Sequence[AttendanceRecord]:
        """All rows of the day, oldest clock time first."""

        raise NotImplementedError

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
        raise NotImplementedError
