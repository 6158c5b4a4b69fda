from __future__ import annotations

import asyncio
import logging
import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from typing_extensions import override

from intervalio._internal._types import EMPTY
from intervalio._internal.exceptions import TriggerAlreadyArmedError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class PeriodicTrigger(ABC):
    """Fires a callback every ``interval_seconds`` once armed.

    Implementations must guarantee that no callback runs after
    ``disarm()`` returns, even one already queued on the event loop.
    """

    @property
    @abstractmethod
    def armed(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def arm(
        self,
        interval_seconds: float,
        callback: Callable[[], None],
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def disarm(self) -> None:
        raise NotImplementedError


class LoopTrigger(PeriodicTrigger):
    """Periodic trigger backed by ``loop.call_at``.

    Tick ``i`` is scheduled at ``T + i * interval`` where ``T`` is the
    loop time at arming. A tick that runs late never causes a burst: the
    next tick goes to the first boundary after the current loop time.
    """

    __slots__: tuple[str, ...] = (
        "_armed_at",
        "_callback",
        "_cycle",
        "_generation",
        "_interval",
        "_loop",
        "_timer_handler",
    )

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop: asyncio.AbstractEventLoop = loop or EMPTY
        self._timer_handler: asyncio.TimerHandle = EMPTY
        self._callback: Callable[[], None] = EMPTY
        self._interval: float = 0
        self._armed_at: float = 0
        self._cycle: int = 0
        self._generation: int = 0

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is EMPTY:
            self._loop = asyncio.get_running_loop()
        return self._loop

    @property
    @override
    def armed(self) -> bool:
        return self._timer_handler is not EMPTY

    @property
    def armed_at(self) -> float:
        return self._armed_at

    @override
    def arm(
        self,
        interval_seconds: float,
        callback: Callable[[], None],
    ) -> None:
        if self.armed:
            raise TriggerAlreadyArmedError
        self._generation += 1
        self._interval = interval_seconds
        self._callback = callback
        self._armed_at = self.loop.time()
        self._cycle = 0
        self._schedule_next(self._generation)
        logger.debug(
            "Trigger armed at %.6f, interval=%ss",
            self._armed_at,
            interval_seconds,
        )

    @override
    def disarm(self) -> None:
        if not self.armed:
            return
        # stale handles compare against the generation and stay silent
        self._generation += 1
        self._timer_handler.cancel()
        self._timer_handler = EMPTY
        self._callback = EMPTY
        logger.debug("Trigger disarmed")

    def _schedule_next(self, generation: int) -> None:
        loop = self.loop
        elapsed = loop.time() - self._armed_at
        self._cycle = max(
            self._cycle + 1,
            math.floor(elapsed / self._interval) + 1,
        )
        when = self._armed_at + self._cycle * self._interval
        self._timer_handler = loop.call_at(when, self._fire, generation)

    def _fire(self, generation: int) -> None:
        if generation != self._generation:
            return
        callback = self._callback
        self._schedule_next(generation)
        callback()
