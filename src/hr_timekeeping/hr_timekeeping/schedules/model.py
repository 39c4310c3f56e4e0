from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import FrozenSet, Optional

from ..employees.model import Employee


@dataclass(frozen=True)
class WorkSchedule:
    """Organisation-wide schedule; ``working_days`` holds ISO weekdays (1=Monday .. 7=Sunday)."""

    schedule_id: int
    name: str
    working_days: FrozenSet[int]
    is_active: bool = True

    def is_working_day(self, day: date) -> bool:
        return day.isoweekday() in self.working_days


@dataclass(frozen=True)
class RecoveryDeclaration:
    """A day declared off (or worked) inside a recovery period.

    The scope is the whole organisation when the parent period ``applies_to_all``,
    otherwise the department, segment or centre set on the declaration.
    """

    declaration_id: int
    recovery_period_id: int
    recovery_date: date
    is_day_off: bool
    status: str
    period_status: str
    applies_to_all: bool = False
    department_id: Optional[int] = None
    segment_id: Optional[int] = None
    centre_id: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.status == "active" and self.period_status == "active"

    def covers(self, employee: Employee) -> bool:
        if self.applies_to_all:
            return True
        return any(
            scope is not None and scope == mine
            for scope, mine in (
                (self.department_id, employee.department_id),
                (self.segment_id, employee.segment_id),
                (self.centre_id, employee.centre_id),
            )
        )

    def grants_day_off(self, employee: Employee, day: date) -> bool:
        return self.is_day_off and self.is_active and self.recovery_date == day and self.covers(employee)
