import inspect
from unittest.mock import AsyncMock

import pytest

from intervalio import RecurringTaskOptions
from tests.fakes import GatedTask, ManualTrigger, OptionsFactory


@pytest.fixture
def trigger() -> ManualTrigger:
    return ManualTrigger()


@pytest.fixture
def gated(trigger: ManualTrigger) -> GatedTask:
    return GatedTask(trigger)


@pytest.fixture
def make_options() -> OptionsFactory:
    def factory(
        interval_ms: int = 100,
        *,
        immediate_first_run: bool = False,
    ) -> RecurringTaskOptions:
        return RecurringTaskOptions(
            interval_ms=interval_ms,
            immediate_first_run=immediate_first_run,
        )

    return factory


@pytest.fixture
def amock() -> AsyncMock:
    mock = AsyncMock(return_value=None)
    mock.__signature__ = inspect.Signature()
    return mock
