# SPDX-License-Identifier: MIT

from typing import Any

import pendulum

from cadence.time import datetime_to_local_date

SUNDAY = 1
SATURDAY = 7


def weekday_number(date: pendulum.Date) -> int:
    """Weekday as 1 = Sunday, 2 = Monday ... 7 = Saturday."""
    return date.isoweekday() % 7 + 1


def should_perform(habit: dict[str, Any], date: pendulum.Date) -> bool:
    """Whether the habit's frequency rule expects it on the given local date."""
    weekday = weekday_number(date)
    frequency = habit.get("frequency")

    if frequency == "daily":
        return True
    elif frequency == "weekdays":
        return SUNDAY < weekday < SATURDAY
    elif frequency == "weekends":
        return weekday in (SUNDAY, SATURDAY)
    elif frequency == "weekly":
        start_date = habit.get("start_date")
        if start_date is None:
            return False
        return weekday == weekday_number(datetime_to_local_date(start_date))
    elif frequency == "custom":
        return weekday in (habit.get("custom_days") or [])

    return False


def expected_days(
    habit: dict[str, Any], start: pendulum.Date, end: pendulum.Date
) -> list[pendulum.Date]:
    """Every date in [start, end] on which the habit should be performed."""
    days = []
    current = start
    while current <= end:
        if should_perform(habit, current):
            days.append(current)
        current = current.add(days=1)
    return days


def frequency_description(habit: dict[str, Any]) -> str:
    frequency = habit.get("frequency") or ""

    if frequency == "daily":
        return "Daily"
    elif frequency == "weekdays":
        return "Weekdays (Mon-Fri)"
    elif frequency == "weekends":
        return "Weekends (Sat-Sun)"
    elif frequency == "weekly":
        return "Weekly"
    elif frequency == "custom":
        custom_days = habit.get("custom_days") or []
        if custom_days:
            return f"Custom ({','.join(str(day) for day in custom_days)})"
        return "Custom"

    return frequency.capitalize() if frequency else "Unknown"
