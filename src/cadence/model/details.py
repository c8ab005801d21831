# SPDX-License-Identifier: MIT

from typing import Literal, TypeAlias, TypedDict, Union


class PlainTextDetails(TypedDict):
    kind: Literal["text"]
    text: str


class WorkoutDetails(TypedDict):
    kind: Literal["workout"]
    types: list[str]  # e.g. ["Cardio", "Strength"]
    duration_minutes: int
    intensity: int  # 1 - 5
    notes: str


Details: TypeAlias = Union[PlainTextDetails, WorkoutDetails]
