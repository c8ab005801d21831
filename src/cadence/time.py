# SPDX-License-Identifier: MIT

import datetime
from typing import Any, Optional, cast

import pendulum
from pendulum.parsing.exceptions import ParserError


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def datetime_to_timestamp(datetime: pendulum.DateTime) -> float:
    return datetime.timestamp()


def datetime_from_timestamp(timestamp: float) -> pendulum.DateTime:
    return pendulum.from_timestamp(timestamp, tz="UTC")


def datetime_from_value(value: Any) -> pendulum.DateTime:
    """
    Convert a serialized date of any supported form into a UTC DateTime.

    Accepts ISO-8601 strings, seconds since the epoch, and the date/datetime
    objects YAML produces for unquoted timestamps. Raises ValueError for
    anything else.
    """
    if isinstance(value, bool):
        raise ValueError(f"not a date: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime_from_timestamp(float(value))
        except (OverflowError, OSError) as e:
            raise ValueError(f"timestamp out of range: {value!r}") from e
    if isinstance(value, datetime.datetime):
        return pendulum.instance(value).in_tz("UTC")
    if isinstance(value, datetime.date):
        return pendulum.datetime(value.year, value.month, value.day, tz="local").in_tz(
            "UTC"
        )
    if isinstance(value, str):
        try:
            parsed = pendulum.parse(value)
        except ParserError as e:
            raise ValueError(f"not a date: {value!r}") from e
        if not isinstance(parsed, pendulum.DateTime):
            raise ValueError(f"not a date: {value!r}")
        return parsed.in_tz("UTC")
    raise ValueError(f"not a date: {value!r}")


def datetime_to_local_date(datetime: pendulum.DateTime) -> pendulum.Date:
    return datetime.in_tz("local").date()


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD HH:mm:ss")


def datetime_to_filename_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYYMMDD_HHmmss")


def datetime_to_backup_filename_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD_HHmmss")


def date_to_month_title(date: pendulum.Date) -> str:
    return date.format("MMMM YYYY")


def month_from_str(month: str) -> pendulum.Date:
    """Parse a 'YYYY-MM' string to the first day of that month."""
    year, month_number = map(int, month.split("-"))
    return pendulum.date(year, month_number, 1)
