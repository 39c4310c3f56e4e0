from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..clock.service import SystemClockService
from ..common.datetime_utils import utc_day
from ..core.constants import BREAK_RULES_SETTING_KEY
from ..core.enums import AttendanceSource, AttendanceStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..settings.repository import SettingsRepository
from .model import AttendanceRecord, BreakRules, ClockOutResult, DailyClockingStatus
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def calculate_worked_minutes(records: Sequence[AttendanceRecord], rules: BreakRules) -> Optional[int]:
    """Minutes between each check-in/check-out pair, minus the break.

    Returns ``None`` while a pair is open (odd number of events).
    """

    if not records:
        return 0
    if len(records) % 2 != 0:
        return None

    total = 0
    for check_in, check_out in zip(records[0::2], records[1::2]):
        total += int((check_out.clock_time - check_in.clock_time).total_seconds() // 60)

    if rules.deduct_break_automatically:
        total = max(0, total - rules.default_break_minutes)
    return total


class ClockingService:
    """Self-service check-in / check-out stamped with the virtual system clock."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        settings: SettingsRepository,
        clock: SystemClockService,
    ):
        self._attendance = attendance
        self._employees = employees
        self._settings = settings
        self._clock = clock

    def _get_employee(self, profile_id: int) -> Employee:
        employee = self._employees.get_by_profile_id(int(profile_id))
        if not employee:
            raise NotFoundError("No employee record for this user")
        return employee

    def _get_clocking_employee(self, profile_id: int) -> Employee:
        employee = self._get_employee(profile_id)
        if not employee.requires_clocking:
            raise AuthorizationError("This employee is not allowed to clock")
        return employee

    def _break_rules(self) -> BreakRules:
        setting = self._settings.get(BREAK_RULES_SETTING_KEY)
        return BreakRules.from_json(setting.setting_value if setting else None)

    def check_in(self, profile_id: int) -> AttendanceRecord:
        employee = self._get_clocking_employee(profile_id)
        now = self._clock.resolve_now()
        today = utc_day(now)

        records = self._attendance.list_for_employee_and_date(employee.employee_id, today)
        if records and records[-1].status == AttendanceStatus.CHECK_IN:
            raise ValidationError("Already checked in. Please check out first.")

        record = self._attendance.create_clock_event(
            employee_id=employee.employee_id,
            attendance_date=today,
            clock_time=now,
            status=AttendanceStatus.CHECK_IN,
            source=AttendanceSource.SELF_SERVICE,
        )
        logger.info("Check-in employee=%s at %s", employee.employee_number, now.isoformat())
        return record

    def check_out(self, profile_id: int) -> ClockOutResult:
        employee = self._get_clocking_employee(profile_id)
        now = self._clock.resolve_now()
        today = utc_day(now)

        records = self._attendance.list_for_employee_and_date(employee.employee_id, today)
        if not records:
            raise ValidationError("You must check in first")
        if records[-1].status == AttendanceStatus.CHECK_OUT:
            raise ValidationError("Already checked out. Check in again if you come back.")

        record = self._attendance.create_clock_event(
            employee_id=employee.employee_id,
            attendance_date=today,
            clock_time=now,
            status=AttendanceStatus.CHECK_OUT,
            source=AttendanceSource.SELF_SERVICE,
        )
        logger.info("Check-out employee=%s at %s", employee.employee_number, now.isoformat())

        worked = calculate_worked_minutes(
            self._attendance.list_for_employee_and_date(employee.employee_id, today),
            self._break_rules(),
        )
        return ClockOutResult(record=record, worked_minutes_today=worked)

    def today_status(self, profile_id: int) -> DailyClockingStatus:
        employee = self._get_employee(profile_id)
        today = self._clock.resolve_date()

        if not employee.requires_clocking:
            return DailyClockingStatus(
                employee_id=employee.employee_id,
                employee_name=employee.full_name,
                requires_clocking=False,
                day=today,
            )

        records = tuple(self._attendance.list_for_employee_and_date(employee.employee_id, today))
        return DailyClockingStatus(
            employee_id=employee.employee_id,
            employee_name=employee.full_name,
            requires_clocking=True,
            day=today,
            records=records,
            worked_minutes=calculate_worked_minutes(records, self._break_rules()),
        )
