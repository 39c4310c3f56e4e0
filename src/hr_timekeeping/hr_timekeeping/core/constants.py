"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SYSTEM_CLOCK_SETTING_KEY = "system_clock"
SYSTEM_CLOCK_DESCRIPTION = "Virtual system clock used for attendance clocking"

BREAK_RULES_SETTING_KEY = "break_rules"
DEFAULT_BREAK_MINUTES = 60
DEFAULT_DEDUCT_BREAK = True

ABSENCE_NOTE = "Automatically detected - no clock record"
ABSENCE_LOCK_NAME = "hr_absence_detection"

DEFAULT_ABSENCE_HOUR = 20
DEFAULT_ABSENCE_MINUTE = 1
DEFAULT_ABSENCE_TIMEZONE = "Africa/Casablanca"
DEFAULT_LOOKBACK_DAYS = 1
DEFAULT_RUN_TIMEOUT_SECONDS = 600
DEFAULT_LOCK_TIMEOUT_SECONDS = 0
DEFAULT_MISFIRE_GRACE_SECONDS = 3600
