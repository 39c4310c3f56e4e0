from __future__ import annotations

import json
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
import pytest

from src.hr_timekeeping.hr_timekeeping.attendance.model import AttendanceRecord, BreakRules
from src.hr_timekeeping.hr_timekeeping.attendance.service import calculate_worked_minutes
from src.hr_timekeeping.hr_timekeeping.core.constants import BREAK_RULES_SETTING_KEY
from src.hr_timekeeping.hr_timekeeping.core.enums import AttendanceSource, AttendanceStatus
from src.hr_timekeeping.hr_timekeeping.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def _event(minute_offset: int, status: AttendanceStatus, record_id: int = 1) -> AttendanceRecord:
    base = datetime(2026, 1, 17, 8, 0, tzinfo=timezone.utc)
    return AttendanceRecord(
        record_id=record_id,
        employee_id=1,
        attendance_date=date(2026, 1, 17),
        clock_time=base + timedelta(minutes=minute_offset),
        status=status,
        source=AttendanceSource.SELF_SERVICE,
    )


def test_worked_minutes_with_default_break():
    records = [_event(0, AttendanceStatus.CHECK_IN), _event(9 * 60, AttendanceStatus.CHECK_OUT)]

    assert calculate_worked_minutes(records, BreakRules()) == 8 * 60


def test_worked_minutes_sums_pairs_and_floors():
    records = [
        _event(0, AttendanceStatus.CHECK_IN),
        _event(180, AttendanceStatus.CHECK_OUT),
        _event(240, AttendanceStatus.CHECK_IN),
        _event(300, AttendanceStatus.CHECK_OUT),
    ]
    records[3] = replace(records[3], clock_time=records[3].clock_time + timedelta(seconds=59))

    rules = BreakRules(default_break_minutes=0, deduct_break_automatically=False)
    assert calculate_worked_minutes(records, rules) == 240


def test_worked_minutes_open_pair_and_clamp():
    assert calculate_worked_minutes([], BreakRules()) == 0
    assert calculate_worked_minutes([_event(0, AttendanceStatus.CHECK_IN)], BreakRules()) is None

    short = [_event(0, AttendanceStatus.CHECK_IN), _event(20, AttendanceStatus.CHECK_OUT)]
    assert calculate_worked_minutes(short, BreakRules()) == 0


def test_check_in_uses_virtual_clock(svc, clock, attendance_repo):
    clock.set_configuration(enabled=True, custom_datetime="2026-02-01T08:00:00", acting_user=1)

    record = svc.check_in(10)

    assert record.status == AttendanceStatus.CHECK_IN
    assert record.source == AttendanceSource.SELF_SERVICE
    assert record.attendance_date == date(2026, 2, 1)
    assert record.clock_time == datetime(2026, 2, 1, 8, 0, tzinfo=timezone.utc)


def test_check_in_twice_is_rejected(svc):
    svc.check_in(10)

    with pytest.raises(ValidationError):
        svc.check_in(10)


def test_check_out_requires_open_check_in(svc, real_clock):
    with pytest.raises(ValidationError):
        svc.check_out(10)

    svc.check_in(10)
    real_clock.advance(minutes=5)
    svc.check_out(10)

    with pytest.raises(ValidationError):
        svc.check_out(10)


def test_check_out_reports_worked_minutes(svc, settings_repo, real_clock):
    settings_repo.values[BREAK_RULES_SETTING_KEY] = json.dumps(
        {"default_break_minutes": 30, "deduct_break_automatically": True}
    )
    svc.check_in(10)
    real_clock.advance(hours=4, minutes=45)

    result = svc.check_out(10)

    assert result.record.status == AttendanceStatus.CHECK_OUT
    assert result.worked_minutes_today == 4 * 60 + 15


def test_unknown_user_and_non_clocking_employee(svc):
    with pytest.raises(NotFoundError):
        svc.check_in(999)
    with pytest.raises(AuthorizationError):
        svc.check_in(20)
    with pytest.raises(AuthorizationError):
        svc.check_out(20)


def test_today_status_tracks_alternation(svc, real_clock):
    status = svc.today_status(10)
    assert status.can_check_in and not status.can_check_out
    assert status.worked_minutes == 0
    assert status.is_complete

    svc.check_in(10)
    status = svc.today_status(10)
    assert status.can_check_out and not status.can_check_in
    assert status.worked_minutes is None
    assert status.to_dict()["today"]["last_action"]["status"] == "check_in"

    real_clock.advance(hours=2)
    svc.check_out(10)
    status = svc.today_status(10)
    assert status.is_complete
    assert status.worked_minutes == 60


def test_today_status_for_employee_without_clocking(svc):
    data = svc.today_status(20).to_dict()

    assert data == {"requires_clocking": False, "employee": {"id": 2, "name": "Omar Benali"}}
