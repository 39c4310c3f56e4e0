from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from src.hr_timekeeping.hr_timekeeping.absences.detector import AbsenceDetector
from src.hr_timekeeping.hr_timekeeping.absences.scheduler import (
    ABSENCE_JOB_ID,
    build_absence_scheduler,
    start_absence_detection_job,
)


@pytest.fixture
def detector(unit_of_work):
    return AbsenceDetector(unit_of_work, now_fn=lambda: datetime(2026, 1, 17, 12, 0, tzinfo=timezone.utc))


def _fields(job) -> dict:
    return {f.name: str(f) for f in job.trigger.fields}


def test_default_trigger_is_daily_at_20_01_casablanca(detector):
    scheduler = build_absence_scheduler(detector)
    scheduler.start(paused=True)
    try:
        job = scheduler.get_job(ABSENCE_JOB_ID)

        assert job.func == detector.run_scheduled
        fields = _fields(job)
        assert fields["hour"] == "20"
        assert fields["minute"] == "1"
        assert str(job.trigger.timezone) == "Africa/Casablanca"
        assert job.max_instances == 1
        assert job.coalesce is True
        assert job.misfire_grace_time == 3600

        next_run = job.next_run_time.astimezone(ZoneInfo("Africa/Casablanca"))
        assert (next_run.hour, next_run.minute) == (20, 1)
    finally:
        scheduler.shutdown(wait=False)


def test_custom_time_and_grace(detector):
    scheduler = build_absence_scheduler(
        detector, hour=2, minute=30, timezone="UTC", misfire_grace_seconds=120
    )
    scheduler.start(paused=True)
    try:
        job = scheduler.get_job(ABSENCE_JOB_ID)

        assert _fields(job)["hour"] == "2"
        assert _fields(job)["minute"] == "30"
        assert str(job.trigger.timezone) == "UTC"
        assert job.misfire_grace_time == 120
    finally:
        scheduler.shutdown(wait=False)


def test_start_job_from_options(detector):
    scheduler = start_absence_detection_job(detector, {"hour": 21, "minute": 0, "timezone": "UTC"})
    try:
        assert scheduler.running
        assert _fields(scheduler.get_job(ABSENCE_JOB_ID))["hour"] == "21"
    finally:
        scheduler.shutdown(wait=False)
