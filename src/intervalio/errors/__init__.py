"""Custom exceptions for the intervalio library.

This module defines the exceptions that intervalio can raise. Option
validation errors are raised synchronously when a ``RecurringTask`` is
constructed; task failures are never raised, they are handed to the
optional error handler instead.
"""

__all__ = (
    "AttemptInFlightError",
    "IntervalioBaseError",
    "InvalidImmediateFirstRunError",
    "InvalidIntervalError",
    "InvalidOptionsError",
    "TriggerAlreadyArmedError",
)

from intervalio._internal.exceptions import (
    AttemptInFlightError,
    IntervalioBaseError,
    InvalidImmediateFirstRunError,
    InvalidIntervalError,
    InvalidOptionsError,
    TriggerAlreadyArmedError,
)
