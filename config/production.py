import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "hr_timekeeping"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_timekeeping"),
    "connection_timeout": int(os.getenv("DB_CONNECTION_TIMEOUT", "10")),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

ABSENCE_DETECTION = {
    "enabled": bool(int(os.getenv("ABSENCE_DETECTION_ENABLED", "1"))),
    "hour": int(os.getenv("ABSENCE_DETECTION_HOUR", "20")),
    "minute": int(os.getenv("ABSENCE_DETECTION_MINUTE", "1")),
    "timezone": os.getenv("ABSENCE_DETECTION_TIMEZONE", "Africa/Casablanca"),
    "lookback_days": int(os.getenv("ABSENCE_DETECTION_LOOKBACK_DAYS", "1")),
    "run_timeout_seconds": int(os.getenv("ABSENCE_DETECTION_TIMEOUT", "600")),
    "lock_timeout_seconds": int(os.getenv("ABSENCE_DETECTION_LOCK_TIMEOUT", "0")),
    "misfire_grace_seconds": int(os.getenv("ABSENCE_DETECTION_MISFIRE_GRACE", "3600")),
}
