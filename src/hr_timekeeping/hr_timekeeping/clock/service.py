from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Callable, Union

from ..common.datetime_utils import ensure_utc, now_utc, parse_utc_datetime, to_utc_iso, utc_day
from ..core.constants import SYSTEM_CLOCK_DESCRIPTION, SYSTEM_CLOCK_SETTING_KEY
from ..core.exceptions import ValidationError
from ..settings.repository import SettingsRepository
from .model import ClockConfiguration, ClockConfigurationView

logger = logging.getLogger(__name__)

# Simulated instants must leave room for the offset to be applied to real time.
EARLIEST_CUSTOM_DATETIME = datetime(1900, 1, 1, tzinfo=timezone.utc)
LATEST_CUSTOM_DATETIME = datetime(9000, 1, 1, tzinfo=timezone.utc)


class SystemClockService:
    """Virtual clock shared by every attendance path.

    The configuration is read from the settings store on each call and never
    cached, so an operator change is visible to the next request.
    """

    def __init__(self, settings: SettingsRepository, *, now_fn: Callable[[], datetime] = now_utc):
        self._settings = settings
        self._now_fn = now_fn

    def _real_now(self) -> datetime:
        return ensure_utc(self._now_fn())

    def _load(self) -> ClockConfiguration:
        setting = self._settings.get(SYSTEM_CLOCK_SETTING_KEY)
        if not setting:
            return ClockConfiguration()
        return ClockConfiguration.from_json(setting.setting_value)

    def resolve_now(self) -> datetime:
        """Current system instant (aware UTC). Falls back to real time, never raises."""

        real_now = self._real_now()
        try:
            return real_now + self._load().offset
        except Exception:
            logger.warning("System clock configuration unavailable, using real time", exc_info=True)
            return real_now

    def resolve_date(self) -> date:
        return utc_day(self.resolve_now())

    def resolve_time_formatted(self) -> str:
        return self.resolve_now().strftime("%H:%M")

    def resolve_timestamp(self) -> str:
        return to_utc_iso(self.resolve_now())

    def is_enabled(self) -> bool:
        try:
            config = self._load()
        except Exception:
            logger.warning("System clock configuration unavailable", exc_info=True)
            return False
        return config.is_active and bool(config.offset)

    def get_configuration(self) -> ClockConfigurationView:
        return self._view(self._load(), self._real_now())

    def set_configuration(
        self,
        *,
        enabled: bool,
        custom_datetime: Union[str, datetime, None],
        acting_user: Any,
    ) -> ClockConfigurationView:
        real_now = self._real_now()

        if enabled:
            if custom_datetime is None or custom_datetime == "":
                raise ValidationError("customDatetime is required when the clock is enabled")
            custom = (
                ensure_utc(custom_datetime)
                if isinstance(custom_datetime, datetime)
                else parse_utc_datetime(custom_datetime)
            )
            if not EARLIEST_CUSTOM_DATETIME <= custom < LATEST_CUSTOM_DATETIME:
                raise ValidationError(
                    f"customDatetime must be between {EARLIEST_CUSTOM_DATETIME.year} and {LATEST_CUSTOM_DATETIME.year - 1}"
                )
            config = ClockConfiguration(
                enabled=True,
                custom_datetime=custom,
                server_ref_datetime=real_now,
                updated_at=real_now,
                updated_by=acting_user,
            )
        else:
            config = ClockConfiguration(enabled=False, updated_at=real_now, updated_by=acting_user)

        # The pair travels in one JSON document, so one upsert writes both.
        self._settings.upsert(SYSTEM_CLOCK_SETTING_KEY, config.to_json(), description=SYSTEM_CLOCK_DESCRIPTION)

        logger.info(
            "System clock updated: enabled=%s custom=%s ref=%s by=%s",
            config.enabled,
            to_utc_iso(config.custom_datetime),
            to_utc_iso(config.server_ref_datetime),
            acting_user,
        )
        return self.get_configuration()

    def reset(self, *, acting_user: Any) -> ClockConfigurationView:
        return self.set_configuration(enabled=False, custom_datetime=None, acting_user=acting_user)

    def _view(self, config: ClockConfiguration, real_now: datetime) -> ClockConfigurationView:
        if not config.is_active:
            return ClockConfigurationView(configuration=config, current_server_time=real_now)

        offset = config.offset
        try:
            system_now = real_now + offset
        except OverflowError:
            logger.warning("System clock offset %s is out of range, showing real time only", offset)
            return ClockConfigurationView(configuration=config, current_server_time=real_now)
        return ClockConfigurationView(
            configuration=config,
            current_server_time=real_now,
            current_system_time=system_now,
            offset_minutes=int(round(offset.total_seconds() / 60)),
        )

