from datetime import date, datetime, timedelta, timezone

import pytest

from src.hr_timekeeping.hr_timekeeping.common.datetime_utils import (
    parse_utc_datetime,
    to_db_datetime,
    to_utc_iso,
    utc_day,
)
from src.hr_timekeeping.hr_timekeeping.core.exceptions import ValidationError


def test_naive_minutes_value_is_utc_wall_clock():
    parsed = parse_utc_datetime("2026-02-01T08:00")
    assert parsed == datetime(2026, 2, 1, 8, 0, tzinfo=timezone.utc)


def test_naive_value_with_seconds_and_fraction():
    parsed = parse_utc_datetime("2026-02-01T23:59:59.5")
    assert parsed == datetime(2026, 2, 1, 23, 59, 59, 500000, tzinfo=timezone.utc)


def test_late_evening_naive_value_keeps_its_day():
    # A local-time parse east of UTC would move this to the next day.
    assert utc_day(parse_utc_datetime("2026-02-01T23:30")) == date(2026, 2, 1)


def test_explicit_offset_is_converted_to_utc():
    parsed = parse_utc_datetime("2026-02-01T08:00:00+01:00")
    assert parsed == datetime(2026, 2, 1, 7, 0, tzinfo=timezone.utc)


def test_z_suffix_is_utc():
    assert parse_utc_datetime("2026-02-01T08:00:00Z") == datetime(2026, 2, 1, 8, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", ["", "   ", "yesterday", "2026-13-01T08:00", "2026-02-30T10:00"])
def test_invalid_values_raise_validation_error(value):
    with pytest.raises(ValidationError):
        parse_utc_datetime(value)


def test_to_utc_iso_drops_microseconds_and_converts():
    value = datetime(2026, 2, 1, 9, 30, 15, 999, tzinfo=timezone(timedelta(hours=1)))
    assert to_utc_iso(value) == "2026-02-01T08:30:15+00:00"


def test_to_db_datetime_is_naive_utc():
    value = datetime(2026, 2, 1, 9, 30, tzinfo=timezone(timedelta(hours=1)))
    assert to_db_datetime(value) == datetime(2026, 2, 1, 8, 30)
