"""
Tests for parsing and serializing habit entry details.
"""
import json

from cadence.service.details import (
    coerce_details,
    parse_details,
    plain_text,
    serialize_details,
    workout,
)


class TestParseDetails:
    """Reading the details string of a habit entry"""

    def test_plain_text(self):
        assert parse_details("ten pages") == {"kind": "text", "text": "ten pages"}

    def test_empty(self):
        assert parse_details("") == {"kind": "text", "text": ""}

    def test_workout(self):
        details = parse_details(
            '{"types": ["run", "run", "swim"], "duration": "40", "intensity": 4, "notes": "hills"}'
        )

        assert details == {
            "kind": "workout",
            "types": ["run", "swim"],
            "duration_minutes": 40,
            "intensity": 4,
            "notes": "hills",
        }

    def test_legacy_single_type(self):
        details = parse_details('{"type": "yoga", "duration": 20}')

        assert details["kind"] == "workout"
        assert details["types"] == ["yoga"]
        assert details["intensity"] == 3

    def test_intensity_clamped(self):
        details = parse_details('{"types": ["run"], "duration": "10", "intensity": 9}')

        assert details["intensity"] == 5

    def test_bad_duration_is_zero(self):
        details = parse_details('{"types": ["run"], "duration": "a while"}')

        assert details["duration_minutes"] == 0

    def test_notes_only_object(self):
        assert parse_details('{"notes": "felt tired"}') == plain_text("felt tired")

    def test_invalid_json_kept_as_text(self):
        assert parse_details("{not json") == plain_text("{not json")

    def test_json_array_kept_as_text(self):
        assert parse_details('["a"]') == plain_text('["a"]')

    def test_infinite_duration_is_zero(self):
        details = parse_details('{"types": ["run"], "duration": Infinity}')

        assert details["kind"] == "workout"
        assert details["duration_minutes"] == 0


class TestSerializeDetails:
    """Writing details back to their string form"""

    def test_plain_text(self):
        assert serialize_details(plain_text("a, b")) == "a, b"

    def test_workout(self):
        data = json.loads(serialize_details(workout(["run", "swim"], 30, 2, "easy")))

        assert data == {
            "types": ["run", "swim"],
            "type": "run",
            "duration": "30",
            "intensity": 2,
            "notes": "easy",
        }

    def test_workout_reparses(self):
        details = workout(["bike"], 60, 5, "")

        assert parse_details(serialize_details(details)) == details


class TestCoerceDetails:
    """Accepting stored details in either form"""

    def test_mapping_passes_through(self):
        details = workout(["run"], 5)

        assert coerce_details(details) is details

    def test_none(self):
        assert coerce_details(None) == plain_text("")

    def test_raw_string(self):
        assert coerce_details("note") == plain_text("note")
