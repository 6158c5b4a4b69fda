from __future__ import annotations

from dataclasses import dataclass

from intervalio._internal.exceptions import (
    InvalidImmediateFirstRunError,
    InvalidIntervalError,
)

_MS_PER_SECOND = 1000


@dataclass(slots=True, kw_only=True, frozen=True)
class RecurringTaskOptions:
    """Immutable scheduling options.

    ``interval_ms`` is the time between the *start* times of consecutive
    attempts. With ``immediate_first_run`` the first attempt begins as
    soon as the task is started, otherwise one full interval passes first.
    """

    interval_ms: int
    immediate_first_run: bool

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / _MS_PER_SECOND


def validate_options(options: RecurringTaskOptions) -> None:
    interval_ms: object = options.interval_ms
    # bool is an int subclass, reject it explicitly
    if (
        isinstance(interval_ms, bool)
        or not isinstance(interval_ms, int)
        or interval_ms < 1
    ):
        raise InvalidIntervalError(interval_ms)

    immediate_first_run: object = options.immediate_first_run
    if not isinstance(immediate_first_run, bool):
        raise InvalidImmediateFirstRunError(immediate_first_run)
