from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from intervalio._internal._types import EMPTY
from intervalio._internal.exceptions import AttemptInFlightError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class Attempt:
    number: int
    done: asyncio.Event = field(default_factory=asyncio.Event)
    task: asyncio.Task[None] = EMPTY


class ExecutionTracker:
    """Owns the single in-flight attempt of a recurring task.

    The attempt handle exists from ``begin_attempt()`` until the task's
    awaitable settles. Failures are contained here: they go to the error
    handler, or are dropped when there is none.
    """

    __slots__: tuple[str, ...] = (
        "_current",
        "_func",
        "_loop",
        "_on_error",
        "attempts_started",
    )

    def __init__(
        self,
        func: Callable[[], Awaitable[None]],
        on_error: Callable[[Exception], None] | None = None,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._func: Final = func
        self._on_error: Final = on_error
        self._loop: asyncio.AbstractEventLoop = loop or EMPTY
        self._current: Attempt | None = None
        self.attempts_started: int = 0

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is EMPTY:
            self._loop = asyncio.get_running_loop()
        return self._loop

    @property
    def is_executing(self) -> bool:
        return self._current is not None

    @property
    def current(self) -> Attempt | None:
        return self._current

    def begin_attempt(self) -> Attempt:
        if self._current is not None:
            raise AttemptInFlightError
        self.attempts_started += 1
        attempt = Attempt(number=self.attempts_started)
        self._current = attempt
        attempt.task = self.loop.create_task(
            self._run(attempt),
            name=f"intervalio-attempt-{attempt.number}",
        )
        attempt.task.add_done_callback(self._attempt_done)
        logger.debug("Attempt #%d began", attempt.number)
        return attempt

    async def wait(self) -> None:
        attempt = self._current
        if attempt is None:
            return
        _ = await attempt.done.wait()

    async def _run(self, attempt: Attempt) -> None:
        try:
            await self._func()
        except Exception as exc:  # noqa: BLE001
            self._handle_error(attempt, exc)
        else:
            logger.debug("Attempt #%d succeeded", attempt.number)
        finally:
            if self._current is attempt:
                self._current = None
            attempt.done.set()

    def _handle_error(self, attempt: Attempt, exc: Exception) -> None:
        if self._on_error is None:
            logger.debug(
                "Attempt #%d failed, no error handler set",
                attempt.number,
                exc_info=exc,
            )
            return
        logger.debug("Attempt #%d failed: %r", attempt.number, exc)
        # not guarded: a raising handler surfaces through _attempt_done
        self._on_error(exc)

    def _attempt_done(self, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        if (exc := task.exception()) is not None:
            self.loop.call_exception_handler(
                {
                    "message": "Error handler of a recurring task raised",
                    "exception": exc,
                    "task": task,
                },
            )
