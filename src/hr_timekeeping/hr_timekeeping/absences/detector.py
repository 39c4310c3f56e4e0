from __future__ import annotations

import logging
import time
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional, Sequence
from zoneinfo import ZoneInfo

from ..common.datetime_utils import now_utc, start_of_day
from ..core.constants import (
    ABSENCE_NOTE,
    DEFAULT_ABSENCE_TIMEZONE,
    DEFAULT_LOOKBACK_DAYS,
    DEFAULT_RUN_TIMEOUT_SECONDS,
)
from ..core.exceptions import DetectionError, DetectionTimeoutError
from ..employees.model import Employee
from ..schedules.model import RecoveryDeclaration
from .model import DetectionSummary
from .repository import AbsenceDetectionRepository, UnitOfWork

logger = logging.getLogger(__name__)


class AbsenceDetector:
    """Marks clock-required employees absent on working days without any record.

    Target dates come from the real calendar in ``timezone``, never from the
    virtual system clock.
    """

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        *,
        timezone: str = DEFAULT_ABSENCE_TIMEZONE,
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
        run_timeout_seconds: float = DEFAULT_RUN_TIMEOUT_SECONDS,
        now_fn: Callable[[], datetime] = now_utc,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        if int(lookback_days) < 1:
            raise ValueError("lookback_days must be at least 1")
        self._unit_of_work = unit_of_work
        self._tz = ZoneInfo(timezone)
        self._lookback_days = int(lookback_days)
        self._run_timeout = float(run_timeout_seconds)
        self._now_fn = now_fn
        self._monotonic = monotonic

    def today(self) -> date:
        return self._now_fn().astimezone(self._tz).date()

    def target_dates(self, today: Optional[date] = None) -> List[date]:
        """The ``lookback_days`` days before ``today``, oldest first."""

        today = today or self.today()
        return [today - timedelta(days=n) for n in range(self._lookback_days, 0, -1)]

    def run(self) -> List[DetectionSummary]:
        return [self.detect_for_date(day) for day in self.target_dates()]

    def run_scheduled(self) -> Optional[List[DetectionSummary]]:
        """Entry point for the scheduler: failures are logged, the next trigger retries."""

        targets = self.target_dates()
        logger.info("[ABSENCE DETECTION] Scheduled run for %s", ", ".join(d.isoformat() for d in targets))
        try:
            return [self.detect_for_date(day) for day in targets]
        except Exception:
            logger.exception(
                "[ABSENCE DETECTION] Run aborted (targets=%s)",
                ", ".join(d.isoformat() for d in targets),
            )
            return None

    def detect_for_date(self, target_date: date) -> DetectionSummary:
        summary = DetectionSummary(target_date=target_date)
        deadline = self._monotonic() + self._run_timeout
        logger.info("[ABSENCE DETECTION] Checking %s...", target_date.isoformat())

        with self._unit_of_work() as repo:
            if repo.is_public_holiday(target_date):
                summary.skipped_reason = "public_holiday"
                logger.info("[ABSENCE DETECTION] %s is a public holiday - skipping", target_date.isoformat())
                return summary

            schedule = repo.get_active_schedule()
            if schedule is None or not schedule.is_working_day(target_date):
                summary.skipped_reason = "non_working_day"
                logger.info("[ABSENCE DETECTION] %s is not a working day - skipping", target_date.isoformat())
                return summary

            employees = repo.list_clocking_employees()
            summary.checked = len(employees)
            declarations = repo.list_recovery_declarations(target_date)
            logger.info("[ABSENCE DETECTION] Checking %d employees...", len(employees))

            for employee in employees:
                if self._monotonic() > deadline:
                    raise DetectionTimeoutError(
                        f"Absence detection for {target_date.isoformat()} exceeded {self._run_timeout:g}s"
                    )
                try:
                    self._detect_for_employee(repo, employee, target_date, declarations, summary)
                except DetectionError:
                    raise
                except Exception:
                    summary.failed += 1
                    logger.exception(
                        "[ABSENCE DETECTION] Failed for employee %s on %s",
                        employee.employee_number,
                        target_date.isoformat(),
                    )

        logger.info(
            "[ABSENCE DETECTION] Complete for %s - %d absences recorded (%d recovery, %d with records, %d failed)",
            target_date.isoformat(),
            summary.absences,
            summary.recovery_skips,
            summary.evidence_skips,
            summary.failed,
        )
        return summary

    def _detect_for_employee(
        self,
        repo: AbsenceDetectionRepository,
        employee: Employee,
        target_date: date,
        declarations: Sequence[RecoveryDeclaration],
        summary: DetectionSummary,
    ) -> None:
        if any(d.grants_day_off(employee, target_date) for d in declarations):
            summary.recovery_skips += 1
            return

        if repo.has_attendance(employee.employee_id, target_date):
            summary.evidence_skips += 1
            return

        inserted = repo.insert_absence(
            employee_id=employee.employee_id,
            day=target_date,
            clock_time=start_of_day(target_date),
            notes=ABSENCE_NOTE,
        )
        if inserted:
            summary.absences += 1
            logger.info(
                "  -> ABSENT: %s (%s)",
                employee.full_name,
                employee.employee_number,
            )
        else:
            summary.evidence_skips += 1
