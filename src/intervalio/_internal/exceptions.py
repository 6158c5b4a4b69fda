from typing import Any


class IntervalioBaseError(Exception):
    pass


class InvalidOptionsError(IntervalioBaseError, ValueError):
    """Raised when recurring task options fail validation."""

    def __init__(self, *, field: str, expected: str, received: Any) -> None:  # noqa: ANN401
        self.field: str = field
        self.received: Any = received  # pyright: ignore[reportExplicitAny]
        message = (
            f"RecurringTask expects {expected} for {field}, "
            f"received {received!r}"
        )
        super().__init__(message)


class InvalidIntervalError(InvalidOptionsError):
    def __init__(self, received: Any) -> None:  # noqa: ANN401
        super().__init__(
            field="interval_ms",
            expected="a positive integer",
            received=received,
        )


class InvalidImmediateFirstRunError(InvalidOptionsError):
    def __init__(self, received: Any) -> None:  # noqa: ANN401
        super().__init__(
            field="immediate_first_run",
            expected="a boolean",
            received=received,
        )


class TriggerAlreadyArmedError(IntervalioBaseError, RuntimeError):
    """Raised when arming a periodic trigger that is already armed.

    A trigger drives exactly one recurring task session at a time.
    Call ``disarm()`` before arming it again.
    """

    def __init__(
        self,
        message: str = (
            "Periodic trigger is already armed - "
            "disarm it before arming it again"
        ),
    ) -> None:
        super().__init__(message)


class AttemptInFlightError(IntervalioBaseError, RuntimeError):
    """Raised when an attempt is begun while another one is still in flight.

    The recurring task checks for an in-flight attempt before beginning
    a new one, so reaching this error indicates a library bug rather
    than a usage problem.
    """

    def __init__(
        self,
        message: str = (
            "An attempt is already in flight. "
            "Only one attempt may run at any time."
        ),
    ) -> None:
        super().__init__(message)
