# SPDX-License-Identifier: MIT

import json
from typing import Any

from cadence.model.details import Details, PlainTextDetails, WorkoutDetails

WORKOUT_KEYS = ("types", "type", "duration")
DEFAULT_INTENSITY = 3
MIN_INTENSITY = 1
MAX_INTENSITY = 5


def plain_text(text: str) -> PlainTextDetails:
    return {"kind": "text", "text": text}


def workout(
    types: list[str],
    duration_minutes: int,
    intensity: int = DEFAULT_INTENSITY,
    notes: str = "",
) -> WorkoutDetails:
    return {
        "kind": "workout",
        "types": list(dict.fromkeys(types)),
        "duration_minutes": max(duration_minutes, 0),
        "intensity": min(max(intensity, MIN_INTENSITY), MAX_INTENSITY),
        "notes": notes,
    }


def parse_details(raw: str) -> Details:
    """
    Parse a habit entry's details string.

    Workout logs are stored as a JSON object with "types" (or the older single
    "type") and "duration" keys. A JSON object without those keys carries only
    its "notes". Everything else is plain text.
    """
    if raw == "" or not raw.lstrip().startswith("{"):
        return plain_text(raw)

    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return plain_text(raw)

    if not isinstance(data, dict):
        return plain_text(raw)

    if any(key in data for key in WORKOUT_KEYS):
        return __workout_from_dict(data)

    notes = data.get("notes")
    if isinstance(notes, str):
        return plain_text(notes)
    return plain_text(raw)


def __workout_from_dict(data: dict[str, Any]) -> WorkoutDetails:
    types: list[str] = []
    if isinstance(data.get("types"), list):
        types = [str(value) for value in data["types"] if value]
    elif isinstance(data.get("type"), str) and data["type"] != "":
        types = [data["type"]]

    duration_minutes = 0
    try:
        duration_minutes = int(data.get("duration") or 0)
    except (TypeError, ValueError, OverflowError):
        pass

    intensity = DEFAULT_INTENSITY
    if isinstance(data.get("intensity"), int) and not isinstance(
        data["intensity"], bool
    ):
        intensity = data["intensity"]

    notes = data.get("notes")
    return workout(
        types,
        duration_minutes,
        intensity,
        notes if isinstance(notes, str) else "",
    )


def serialize_details(details: Details) -> str:
    if details["kind"] == "text":
        return details["text"]

    return json.dumps(
        {
            "types": details["types"],
            "type": details["types"][0] if details["types"] else "",
            "duration": str(details["duration_minutes"]),
            "intensity": details["intensity"],
            "notes": details["notes"],
        }
    )


def coerce_details(value: Any) -> Details:
    """Accept either a parsed Details mapping or a raw details string."""
    if isinstance(value, dict) and value.get("kind") in ("text", "workout"):
        return value  # type: ignore[return-value]
    if value is None:
        return plain_text("")
    return parse_details(str(value))

