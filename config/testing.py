import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_timekeeping_test"),
    "connection_timeout": 5,
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

ABSENCE_DETECTION = {
    "enabled": False,
    "hour": 20,
    "minute": 1,
    "timezone": "Africa/Casablanca",
    "lookback_days": 1,
    "run_timeout_seconds": 60,
    "lock_timeout_seconds": 0,
    "misfire_grace_seconds": 3600,
}
