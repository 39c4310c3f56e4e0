from __future__ import annotations

from datetime import date, datetime
from typing import Callable, ContextManager, Optional, Protocol, Sequence

from ..employees.model import Employee
from ..schedules.model import RecoveryDeclaration, WorkSchedule


class AbsenceDetectionRepository(Protocol):
    """Reads and writes of one detection pass, all inside the same transaction.

    Any method raises ``DetectionTransactionAbortedError`` once the store has
    rolled that transaction back.
    """

    def is_public_holiday(self, day: date) -> bool:
        raise NotImplementedError

    def get_active_schedule(self) -> Optional[WorkSchedule]:
        raise NotImplementedError

    def list_clocking_employees(self) -> Sequence[Employee]:
        """Active employees with ``requires_clocking`` set."""

        raise NotImplementedError

    def list_recovery_declarations(self, day: date) -> Sequence[RecoveryDeclaration]:
        """Every declaration dated ``day`` with its period status, whatever its scope or state."""

        raise NotImplementedError

    def has_attendance(self, employee_id: int, day: date) -> bool:
        """Any row for the employee on ``day``, whatever its status."""

        raise NotImplementedError

    def insert_absence(self, *, employee_id: int, day: date, clock_time: datetime, notes: str) -> bool:
        """Insert the synthetic absence. Returns False if one already exists."""

        raise NotImplementedError


# Opens a transaction and yields a repository bound to it.
UnitOfWork = Callable[[], ContextManager[AbsenceDetectionRepository]]
