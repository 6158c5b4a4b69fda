"""Non-overlapping recurring tasks for asyncio.

This module exposes ``RecurringTask``, a fixed-interval scheduler for
asynchronous tasks that never runs two executions at the same time and
stops gracefully, waiting for the last execution to settle. The timer
is pluggable through ``PeriodicTrigger``; ``LoopTrigger`` is the default
implementation built on the running event loop.
"""

from intervalio._internal.enums import Status
from intervalio._internal.options import RecurringTaskOptions
from intervalio._internal.recurring_task import RecurringTask
from intervalio._internal.trigger import LoopTrigger, PeriodicTrigger

__all__ = (
    "LoopTrigger",
    "PeriodicTrigger",
    "RecurringTask",
    "RecurringTaskOptions",
    "Status",
)
__version__ = "0.1.0"
