from __future__ import annotations

from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest
from flask import Flask

from src.hr_timekeeping.hr_timekeeping.absences import cli as absences_cli
from src.hr_timekeeping.hr_timekeeping.absences.detector import AbsenceDetector
from src.hr_timekeeping.hr_timekeeping.employees.model import Employee


@pytest.fixture
def runner(store, unit_of_work):
    store.employees = [Employee(employee_id=1, employee_number="EMP-1", first_name="Sara", last_name="Alami")]
    store.holidays.add(date(2026, 1, 1))
    detector = AbsenceDetector(unit_of_work, lookback_days=2, now_fn=lambda: datetime(2026, 1, 17, 12, 0, tzinfo=timezone.utc))

    app = Flask(__name__)
    absences_cli.register(app, SimpleNamespace(absence_detector=detector))
    return app.test_cli_runner()


def test_explicit_date(runner, store):
    result = runner.invoke(args=["detect-absences", "--date", "2026-01-14"])

    assert result.exit_code == 0, result.output
    assert "2026-01-14: checked=1 absences=1" in result.output
    assert (1, date(2026, 1, 14)) in store.absences


def test_holiday_is_reported_as_skipped(runner):
    result = runner.invoke(args=["detect-absences", "--date", "2026-01-01"])

    assert result.exit_code == 0, result.output
    assert "skipped: public_holiday" in result.output


def test_default_uses_lookback(runner):
    result = runner.invoke(args=["detect-absences"])

    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert lines[0].startswith("2026-01-15:")
    assert lines[1].startswith("2026-01-16:")


def test_bad_date_is_rejected(runner):
    result = runner.invoke(args=["detect-absences", "--date", "16/01/2026"])

    assert result.exit_code != 0
    assert "YYYY-MM-DD" in result.output
