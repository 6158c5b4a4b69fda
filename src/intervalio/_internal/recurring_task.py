from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Final

from intervalio._internal.enums import Status
from intervalio._internal.options import validate_options
from intervalio._internal.tracker import ExecutionTracker
from intervalio._internal.trigger import LoopTrigger, PeriodicTrigger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from types import TracebackType

    from intervalio._internal.options import RecurringTaskOptions

logger = logging.getLogger(__name__)


class RecurringTask:
    """Runs an async task at a fixed interval without overlapping executions.

    Start times follow ``T + i * interval_ms`` for the instant ``T`` at
    which ``start()`` armed the trigger. A tick that arrives while an
    attempt is still running is skipped, never queued, so an attempt
    lasting 350ms on a 100ms interval is followed by the next one at
    ``T + 400ms``.

    ``stop()`` resolves only once the last attempt of the session has
    settled, which makes shutdown deterministic. Each ``start``/``stop``
    pair forms a session and the instance can be restarted any number
    of times.

    Task failures never reach the caller of ``start`` or ``stop``. They
    are passed to ``on_error`` if given and dropped otherwise. The error
    handler must not raise.
    """

    __slots__: tuple[str, ...] = (
        "_options",
        "_status",
        "_teardown",
        "_tracker",
        "_trigger",
    )

    def __init__(
        self,
        task: Callable[[], Awaitable[None]],
        options: RecurringTaskOptions,
        on_error: Callable[[Exception], None] | None = None,
        *,
        trigger: PeriodicTrigger | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        validate_options(options)
        self._options: Final = options
        self._status: Status = Status.INACTIVE
        self._tracker: Final = ExecutionTracker(task, on_error, loop=loop)
        self._trigger: Final = trigger or LoopTrigger(loop)
        self._teardown: asyncio.Task[None] | None = None

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}("
            f"status={self._status}, "
            f"interval_ms={self._options.interval_ms}, "
            f"immediate_first_run={self._options.immediate_first_run}, "
            f"attempts_started={self._tracker.attempts_started})"
        )

    @property
    def options(self) -> RecurringTaskOptions:
        return self._options

    @property
    def status(self) -> Status:
        return self._status

    @property
    def is_currently_executing(self) -> bool:
        return self._tracker.is_executing

    async def start(self) -> bool:
        """Activate recurring executions.

        Returns ``True`` if this call moved the instance from inactive to
        active, ``False`` if it was already active. A call made while a
        stop is in progress waits for it to finish and then re-evaluates.
        """
        while self._status is Status.TERMINATING:
            await self._wait_teardown()
        if self._status is Status.ACTIVE:
            return False

        # arm first: a trigger that refuses leaves this instance inactive
        self._trigger.arm(self._options.interval_seconds, self._on_tick)
        self._set_status(Status.ACTIVE)
        if self._options.immediate_first_run:
            _ = self._tracker.begin_attempt()
        return True

    async def stop(self, should_execute_final_run: bool = False) -> bool:  # noqa: FBT001, FBT002
        """Stop recurring executions and wait for the last attempt.

        With ``should_execute_final_run`` one more attempt runs after the
        in-flight one settles, e.g. to flush state accumulated by the task.

        Returns ``True`` only if this call initiated the stop. A call made
        while another stop is in progress still waits for it to complete,
        but returns ``False``.
        """
        if self._status is Status.INACTIVE:
            return False
        if self._status is Status.TERMINATING:
            await self._wait_teardown()
            return False

        self._set_status(Status.TERMINATING)
        self._trigger.disarm()
        self._teardown = asyncio.create_task(
            self._terminate(should_execute_final_run=should_execute_final_run),
        )
        await self._wait_teardown()
        return True

    async def wait_until_current_execution_completes(self) -> None:
        """Wait for the in-flight attempt, if any. Never raises."""
        await self._tracker.wait()

    async def __aenter__(self) -> RecurringTask:
        _ = await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc_val: BaseException | None = None,
        exc_tb: TracebackType | None = None,
    ) -> None:
        _ = await self.stop()

    def _on_tick(self) -> None:
        if self._status is not Status.ACTIVE:
            return
        if self._tracker.is_executing:
            logger.debug("Tick skipped, previous attempt still running")
            return
        _ = self._tracker.begin_attempt()

    async def _terminate(self, *, should_execute_final_run: bool) -> None:
        await self._tracker.wait()
        if should_execute_final_run:
            _ = self._tracker.begin_attempt()
            await self._tracker.wait()
        self._set_status(Status.INACTIVE)

    async def _wait_teardown(self) -> None:
        teardown = self._teardown
        if teardown is None:
            return
        # a cancelled caller must not cancel the teardown itself
        await asyncio.shield(teardown)

    def _set_status(self, status: Status) -> None:
        logger.debug("Status %s -> %s", self._status, status)
        self._status = status
