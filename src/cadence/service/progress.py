# SPDX-License-Identifier: MIT

from typing import Callable, Optional, TypeAlias, Union

ProgressCallback: TypeAlias = Callable[[float], None]


class ProgressPublisher:
    """
    Forwards fractional progress (0.0 - 1.0) to a caller supplied callback.

    Values are clamped to [0, 1] and never move backwards, so subscribers
    always observe a non-decreasing sequence.
    """

    def __init__(self, callback: Optional[ProgressCallback] = None) -> None:
        self._callback = callback
        self.last_value = 0.0

    def publish(self, value: float) -> None:
        value = min(max(value, 0.0), 1.0)
        if value < self.last_value:
            return
        self.last_value = value
        if self._callback is not None:
            self._callback(value)


def as_publisher(
    progress: Optional[Union[ProgressCallback, ProgressPublisher]],
) -> ProgressPublisher:
    if isinstance(progress, ProgressPublisher):
        return progress
    return ProgressPublisher(progress)
