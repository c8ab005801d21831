# SPDX-License-Identifier: MIT

import csv
import io
import logging
from pathlib import Path
from typing import Any, Optional, TypedDict

import pendulum

from cadence import time
from cadence.model.habit_entry import (
    COMPLETION_STATE_FAILURE,
    COMPLETION_STATE_PARTIAL,
    COMPLETION_STATE_SUCCESS,
)
from cadence.repository.store import Store
from cadence.service.backup_error import BackupWriteError
from cadence.service.details import coerce_details, serialize_details
from cadence.service.frequency import expected_days, frequency_description

logger = logging.getLogger(__name__)

EXPORT_KINDS: list[str] = ["habits", "habits-stats", "habit-entries", "monthly-report"]

HABITS_HEADER = [
    "Name",
    "Icon",
    "Color",
    "Frequency",
    "CustomDays",
    "StartDate",
    "Notes",
    "MultiState",
    "TrackDetails",
    "DetailType",
    "Order",
]
HABIT_ENTRIES_HEADER = ["HabitName", "Date", "Completed", "CompletionState", "Details"]
MONTHLY_REPORT_HEADER = [
    "Habit Name",
    "Frequency",
    "Expected",
    "Completed",
    "Success",
    "Partial",
    "Failed",
    "Success Rate",
]


class HabitMonthStats(TypedDict):
    name: str
    frequency: str
    use_multiple_states: bool
    expected: int
    completed: int
    success: int
    partial: int
    failed: int
    success_rate: float


class MonthlyReport(TypedDict):
    month: pendulum.Date
    habits: list[HabitMonthStats]
    total_expected: int
    total_completed: int
    total_success: int
    overall_success_rate: float
    most_successful: Optional[HabitMonthStats]
    least_successful: Optional[HabitMonthStats]


def __writer(buffer: io.StringIO) -> Any:
    return csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")


def __format_bool(value: bool) -> str:
    return "true" if value else "false"


def __format_rate(rate: float) -> str:
    return f"{rate * 100:.1f}%"


def __sorted_habits(store: Store) -> list[dict[str, Any]]:
    return sorted(store.fetch_all("habits"), key=lambda habit: habit.get("order") or 0)


# ─────────────────────────────────────────────────────────────
# Habits
# ─────────────────────────────────────────────────────────────


def habits_csv(store: Store, with_stats: bool = False) -> str:
    habits = __sorted_habits(store)

    buffer = io.StringIO()
    writer = __writer(buffer)
    writer.writerow(HABITS_HEADER)
    for habit in habits:
        writer.writerow(
            [
                habit.get("name") or "",
                habit.get("icon") or "",
                habit.get("color") or "",
                habit.get("frequency") or "",
                ",".join(str(day) for day in habit.get("custom_days") or []),
                time.datetime_to_display_local_datetime_str(habit["start_date"]),
                habit.get("notes") or "",
                __format_bool(habit.get("use_multiple_states", False)),
                __format_bool(habit.get("track_details", False)),
                habit.get("detail_type") or "",
                habit.get("order") or 0,
            ]
        )

    if with_stats:
        frequencies = [habit.get("frequency") for habit in habits]
        writer.writerow([])
        writer.writerow(["# Summary Statistics"])
        writer.writerow(["Total Habits", len(habits)])
        writer.writerow(["Daily Habits", frequencies.count("daily")])
        writer.writerow(["Weekday Habits", frequencies.count("weekdays")])
        writer.writerow(["Weekend Habits", frequencies.count("weekends")])
        writer.writerow(["Weekly Habits", frequencies.count("weekly")])
        writer.writerow(["Custom Schedule Habits", frequencies.count("custom")])

    return buffer.getvalue()


# ─────────────────────────────────────────────────────────────
# Habit entries
# ─────────────────────────────────────────────────────────────


def habit_entries_csv(store: Store) -> str:
    habits_by_id = {habit["id"]: habit for habit in __sorted_habits(store)}
    entries = sorted(store.fetch_all("habit_entries"), key=lambda entry: entry["date"])

    buffer = io.StringIO()
    writer = __writer(buffer)
    writer.writerow(HABIT_ENTRIES_HEADER)
    for entry in entries:
        habit = habits_by_id.get(entry.get("habit_id"))
        if habit is None:
            logger.debug("habit entry %s has no habit, not exported", entry["id"])
            continue
        writer.writerow(
            [
                habit.get("name") or "",
                time.datetime_to_display_local_datetime_str(entry["date"]),
                __format_bool(entry.get("completed", False)),
                entry.get("completion_state") or 0,
                serialize_details(coerce_details(entry.get("details"))),
            ]
        )

    return buffer.getvalue()


# ─────────────────────────────────────────────────────────────
# Monthly report
# ─────────────────────────────────────────────────────────────


def monthly_report(store: Store, month: pendulum.Date) -> MonthlyReport:
    """
    Per habit statistics for the calendar month containing the given date.

    Expected days come from the habit's frequency rule. Several entries on the
    same day count once, the last one recorded wins.
    """
    start = month.start_of("month")
    end = month.end_of("month")

    entries_by_habit: dict[str, dict[pendulum.Date, dict[str, Any]]] = {}
    for entry in sorted(store.fetch_all("habit_entries"), key=lambda e: e["date"]):
        day = time.datetime_to_local_date(entry["date"])
        if start <= day <= end:
            entries_by_habit.setdefault(entry["habit_id"], {})[day] = entry

    habit_stats: list[HabitMonthStats] = []
    for habit in __sorted_habits(store):
        habit_stats.append(
            __habit_month_stats(
                habit, entries_by_habit.get(habit["id"], {}), start, end
            )
        )

    total_expected = sum(stats["expected"] for stats in habit_stats)
    total_success = sum(stats["success"] for stats in habit_stats)

    rated = sorted(
        [stats for stats in habit_stats if stats["expected"] > 0],
        key=lambda stats: stats["success_rate"],
        reverse=True,
    )

    return {
        "month": start,
        "habits": habit_stats,
        "total_expected": total_expected,
        "total_completed": sum(stats["completed"] for stats in habit_stats),
        "total_success": total_success,
        "overall_success_rate": (
            total_success / total_expected if total_expected > 0 else 0.0
        ),
        "most_successful": rated[0] if rated else None,
        "least_successful": rated[-1] if len(rated) > 1 else None,
    }


def __habit_month_stats(
    habit: dict[str, Any],
    entries_by_day: dict[pendulum.Date, dict[str, Any]],
    start: pendulum.Date,
    end: pendulum.Date,
) -> HabitMonthStats:
    use_multiple_states = bool(habit.get("use_multiple_states", False))
    expected = len(expected_days(habit, start, end))

    completed = success = partial = failed = 0
    for entry in entries_by_day.values():
        if entry.get("completed", False):
            completed += 1
        if use_multiple_states:
            state = entry.get("completion_state")
            if state == COMPLETION_STATE_SUCCESS:
                success += 1
            elif state == COMPLETION_STATE_PARTIAL:
                partial += 1
            elif state == COMPLETION_STATE_FAILURE:
                failed += 1
        elif entry.get("completed", False):
            success += 1

    return {
        "name": habit.get("name") or "",
        "frequency": frequency_description(habit),
        "use_multiple_states": use_multiple_states,
        "expected": expected,
        "completed": completed,
        "success": success,
        "partial": partial,
        "failed": failed,
        "success_rate": success / expected if expected > 0 else 0.0,
    }


def monthly_report_csv(store: Store, month: pendulum.Date) -> str:
    report = monthly_report(store, month)

    buffer = io.StringIO()
    writer = __writer(buffer)
    writer.writerow(MONTHLY_REPORT_HEADER)
    for stats in report["habits"]:
        writer.writerow(
            [
                stats["name"],
                stats["frequency"],
                stats["expected"],
                stats["completed"],
                f"{stats['success']}/{stats['expected']}",
                (
                    f"{stats['partial']}/{stats['expected']}"
                    if stats["use_multiple_states"]
                    else ""
                ),
                (
                    f"{stats['failed']}/{stats['expected']}"
                    if stats["use_multiple_states"]
                    else ""
                ),
                __format_rate(stats["success_rate"]),
            ]
        )

    writer.writerow([])
    writer.writerow(["# Month Summary"])
    writer.writerow(["Month", time.date_to_month_title(report["month"])])
    writer.writerow(["Total Expected Completions", report["total_expected"]])
    writer.writerow(["Total Actual Completions", report["total_completed"]])
    writer.writerow(
        ["Overall Success Rate", __format_rate(report["overall_success_rate"])]
    )
    writer.writerow(
        [
            "Overall Completion Fraction",
            f"{report['total_success']}/{report['total_expected']}",
        ]
    )
    if report["most_successful"] is not None:
        writer.writerow(["Most Successful Habit", report["most_successful"]["name"]])
        writer.writerow(
            [
                "Most Successful Habit Rate",
                __format_rate(report["most_successful"]["success_rate"]),
            ]
        )
    if report["least_successful"] is not None:
        writer.writerow(["Least Successful Habit", report["least_successful"]["name"]])
        writer.writerow(
            [
                "Least Successful Habit Rate",
                __format_rate(report["least_successful"]["success_rate"]),
            ]
        )

    return buffer.getvalue()


# ─────────────────────────────────────────────────────────────
# Files
# ─────────────────────────────────────────────────────────────

EXPORT_FILE_NAMES: dict[str, str] = {
    "habits": "Habits",
    "habits-stats": "HabitsWithStats",
    "habit-entries": "HabitEntries",
    "monthly-report": "MonthlyReport",
}


def render_csv(
    store: Store, kind: str, month: Optional[pendulum.Date] = None
) -> str:
    if kind == "habits":
        return habits_csv(store)
    elif kind == "habits-stats":
        return habits_csv(store, with_stats=True)
    elif kind == "habit-entries":
        return habit_entries_csv(store)
    elif kind == "monthly-report":
        if month is None:
            month = pendulum.today("local").date()
        return monthly_report_csv(store, month)
    raise ValueError(f"unknown export kind: {kind}")


def export_csv(
    store: Store,
    kind: str,
    export_dir: Path,
    month: Optional[pendulum.Date] = None,
) -> Path:
    contents = render_csv(store, kind, month)

    file_path = (
        export_dir
        / f"Cadence_{EXPORT_FILE_NAMES[kind]}_{time.datetime_to_filename_str(time.now_utc())}.csv"
    )
    try:
        export_dir.mkdir(parents=True, exist_ok=True)
        file_path.write_text(contents)
    except OSError as e:
        raise BackupWriteError(f"Failed to write export file: {e}") from e

    logger.info("exported %s to %s", kind, file_path)
    return file_path
