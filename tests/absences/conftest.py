from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Dict, List, Optional, Set, Tuple

import pytest

from src.hr_timekeeping.hr_timekeeping.core.exceptions import DetectionTransactionAbortedError
from src.hr_timekeeping.hr_timekeeping.employees.model import Employee
from src.hr_timekeeping.hr_timekeeping.schedules.model import RecoveryDeclaration, WorkSchedule


class InMemoryAbsenceStore:
    """Tables read and written by a detection pass."""

    def __init__(self):
        self.holidays: Set[date] = set()
        self.schedule: Optional[WorkSchedule] = WorkSchedule(
            schedule_id=1, name="Standard week", working_days=frozenset({1, 2, 3, 4, 5})
        )
        self.employees: List[Employee] = []
        self.declarations: List[RecoveryDeclaration] = []
        self.attendance: Set[Tuple[int, date]] = set()
        self.absences: Dict[Tuple[int, date], dict] = {}
        self.failing_employees: Set[int] = set()
        self.rolled_back_on_insert: Set[int] = set()
        self.commits = 0
        self.rollbacks = 0


class InMemoryAbsenceRepository:
    def __init__(self, store: InMemoryAbsenceStore):
        self._store = store
        self.inserted: Dict[Tuple[int, date], dict] = {}

    def is_public_holiday(self, day: date) -> bool:
        return day in self._store.holidays

    def get_active_schedule(self) -> Optional[WorkSchedule]:
        return self._store.schedule

    def list_clocking_employees(self):
        return [e for e in self._store.employees if e.employment_status.value == "active" and e.requires_clocking]

    def list_recovery_declarations(self, day: date) -> List[RecoveryDeclaration]:
        return [d for d in self._store.declarations if d.recovery_date == day]

    def has_attendance(self, employee_id: int, day: date) -> bool:
        if employee_id in self._store.failing_employees:
            raise RuntimeError("lookup failed")
        key = (employee_id, day)
        return key in self._store.attendance or key in self._store.absences or key in self.inserted

    def insert_absence(self, *, employee_id: int, day: date, clock_time: datetime, notes: str) -> bool:
        if employee_id in self._store.rolled_back_on_insert:
            raise DetectionTransactionAbortedError("Deadlock found when trying to get lock")
        key = (employee_id, day)
        if key in self._store.absences or key in self.inserted:
            return False
        self.inserted[key] = {"clock_time": clock_time, "notes": notes}
        return True


@pytest.fixture
def store() -> InMemoryAbsenceStore:
    return InMemoryAbsenceStore()


@pytest.fixture
def unit_of_work(store):
    @contextmanager
    def _uow():
        repo = InMemoryAbsenceRepository(store)
        try:
            yield repo
        except Exception:
            store.rollbacks += 1
            raise
        store.absences.update(repo.inserted)
        store.commits += 1

    return _uow

