# SPDX-License-Identifier: MIT

import datetime
from typing import Optional

import pendulum


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def python_to_pendulum_utc(python_value: datetime.datetime) -> pendulum.DateTime:
    pendulum_value = pendulum.instance(python_value, tz="local")
    return pendulum_value.in_tz("UTC")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    parsed = pendulum.parse(datetime)
    if not isinstance(parsed, pendulum.DateTime):
        raise ValueError(f"not a datetime: {datetime}")
    return parsed


def datetime_to_display_date_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("MMM D, YYYY")


def datetime_to_display_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("MMM D, YYYY HH:mm")


def datetime_to_local_date_str(datetime: pendulum.DateTime) -> str:
    """Convert a pendulum.DateTime to a local date string in 'YYYY-MM-DD' format."""
    return datetime.in_tz("local").format("YYYY-MM-DD")


def datetime_from_local_date_str(date_str: str) -> pendulum.DateTime:
    """Parse a local date string in 'YYYY-MM-DD' format to midnight local time, expressed in UTC."""
    parsed = pendulum.parse(date_str, tz="local")
    if not isinstance(parsed, pendulum.DateTime):
        raise ValueError(f"not a date: {date_str}")
    return parsed.in_tz("UTC")


def to_epoch_milliseconds(datetime: pendulum.DateTime) -> int:
    return datetime.int_timestamp * 1000 + datetime.microsecond // 1000


def same_instant(a: Optional[pendulum.DateTime], b: Optional[pendulum.DateTime]) -> bool:
    """Two instants are equal when they agree to the millisecond, regardless of timezone."""
    if a is None or b is None:
        return a is b
    return to_epoch_milliseconds(a) == to_epoch_milliseconds(b)
