from __future__ import annotations

import logging
from zoneinfo import ZoneInfo

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from ..core.constants import (
    DEFAULT_ABSENCE_HOUR,
    DEFAULT_ABSENCE_MINUTE,
    DEFAULT_ABSENCE_TIMEZONE,
    DEFAULT_MISFIRE_GRACE_SECONDS,
)
from .detector import AbsenceDetector

logger = logging.getLogger(__name__)

ABSENCE_JOB_ID = "absence-detection"


def build_absence_scheduler(
    detector: AbsenceDetector,
    *,
    hour: int = DEFAULT_ABSENCE_HOUR,
    minute: int = DEFAULT_ABSENCE_MINUTE,
    timezone: str = DEFAULT_ABSENCE_TIMEZONE,
    misfire_grace_seconds: int = DEFAULT_MISFIRE_GRACE_SECONDS,
) -> BackgroundScheduler:
    tz = ZoneInfo(timezone)
    scheduler = BackgroundScheduler(
        timezone=tz,
        job_defaults={
            "coalesce": True,
            "max_instances": 1,
            "misfire_grace_time": int(misfire_grace_seconds),
        },
    )
    scheduler.add_job(
        detector.run_scheduled,
        CronTrigger(hour=int(hour), minute=int(minute), timezone=tz),
        id=ABSENCE_JOB_ID,
        name="Absence detection",
        replace_existing=True,
    )
    return scheduler


def start_absence_detection_job(detector: AbsenceDetector, options: dict) -> BackgroundScheduler:
    hour = int(options.get("hour", DEFAULT_ABSENCE_HOUR))
    minute = int(options.get("minute", DEFAULT_ABSENCE_MINUTE))
    timezone = str(options.get("timezone", DEFAULT_ABSENCE_TIMEZONE))

    scheduler = build_absence_scheduler(
        detector,
        hour=hour,
        minute=minute,
        timezone=timezone,
        misfire_grace_seconds=int(options.get("misfire_grace_seconds", DEFAULT_MISFIRE_GRACE_SECONDS)),
    )
    scheduler.start()
    logger.info("Absence detection scheduled: daily at %02d:%02d (%s)", hour, minute, timezone)
    return scheduler
