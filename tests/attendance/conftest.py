from __future__ import annotations

from datetime import date
from typing import List, Optional

import pytest

from src.hr_timekeeping.hr_timekeeping.attendance.model import AttendanceRecord
from src.hr_timekeeping.hr_timekeeping.attendance.service import ClockingService
from src.hr_timekeeping.hr_timekeeping.clock.service import SystemClockService
from src.hr_timekeeping.hr_timekeeping.employees.model import Employee


class InMemoryEmployees:
    def __init__(self, employees: List[Employee]):
        self._by_profile = {e.profile_id: e for e in employees}

    def get_by_profile_id(self, profile_id: int) -> Optional[Employee]:
        return self._by_profile.get(profile_id)


class InMemoryAttendance:
    def __init__(self):
        self.records: List[AttendanceRecord] = []

    def list_for_employee_and_date(self, employee_id: int, attendance_date: date):
        rows = [r for r in self.records if r.employee_id == employee_id and r.attendance_date == attendance_date]
        return sorted(rows, key=lambda r: (r.clock_time, r.record_id))

    def create_clock_event(self, *, employee_id, attendance_date, clock_time, status, source, notes=None):
        record = AttendanceRecord(
            record_id=len(self.records) + 1,
            employee_id=employee_id,
            attendance_date=attendance_date,
            clock_time=clock_time,
            status=status,
            source=source,
            notes=notes,
        )
        self.records.append(record)
        return record


@pytest.fixture
def clock(settings_repo, real_clock):
    return SystemClockService(settings_repo, now_fn=real_clock)


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def svc(attendance_repo, settings_repo, clock):
    employees = InMemoryEmployees(
        [
            Employee(employee_id=1, employee_number="EMP-1", first_name="Sara", last_name="Alami", profile_id=10),
            Employee(
                employee_id=2,
                employee_number="EMP-2",
                first_name="Omar",
                last_name="Benali",
                profile_id=20,
                requires_clocking=False,
            ),
        ]
    )
    return ClockingService(attendance_repo, employees, settings_repo, clock)
