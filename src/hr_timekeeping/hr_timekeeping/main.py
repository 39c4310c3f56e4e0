from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables

from .container import build_container
from .absences.cli import register as register_absence_cli
from .absences.scheduler import start_absence_detection_job
from .attendance.controller import register as register_attendance
from .clock.controller import register as register_clock
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    absence_config = dict(getattr(settings, "ABSENCE_DETECTION", {}))
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["ABSENCE_DETECTION"] = absence_config

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    auto_init_db = bool(getattr(settings, "AUTO_INIT_DB", False))
    auto_seed_db = bool(getattr(settings, "AUTO_SEED_DB", False))
    if auto_init_db:
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if auto_seed_db:
        seed_path = Path(__file__).resolve().parents[3] / "database" / "seed.sql"
        apply_seed_sql(db_config, seed_path=seed_path)
        ensure_demo_users(db_config)
        logger.info("demo seed ready")

    container = build_container(db_config=db_config, absence_config=absence_config)

    register_users(app, container)
    register_clock(app, container)
    register_attendance(app, container)
    register_absence_cli(app, container)
    app.extensions["hr_timekeeping"] = container

    return app


def start_background_jobs(app: Flask) -> Optional[BackgroundScheduler]:
    """Start the nightly absence job for a serving process.

    Only server entry points call this, so `flask` CLI commands never schedule jobs.
    """

    options = app.config.get("ABSENCE_DETECTION") or {}
    if not options.get("enabled"):
        logger.info("Absence detection scheduler disabled")
        return None
    if "absence_scheduler" in app.extensions:
        return app.extensions["absence_scheduler"]

    container = app.extensions["hr_timekeeping"]
    scheduler = start_absence_detection_job(container.absence_detector, options)
    app.extensions["absence_scheduler"] = scheduler
    return scheduler
