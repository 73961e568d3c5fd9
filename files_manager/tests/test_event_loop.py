from __future__ import annotations

import asyncio
import threading

import pytest

from files_manager.infrastructure.event_loop import EventLoopError, EventLoopManager
from files_manager.shared.errors import StoreUnavailableError


@pytest.fixture()
def manager():
    manager = EventLoopManager(name="TestLoop")
    yield manager
    manager.stop()


def test_runs_coroutine_on_background_thread(manager: EventLoopManager) -> None:
    async def _thread_name() -> str:
        await asyncio.sleep(0)
        return threading.current_thread().name

    assert manager.run(_thread_name()) == "TestLoop"


def test_propagates_app_errors(manager: EventLoopManager) -> None:
    async def _fail() -> None:
        raise StoreUnavailableError("redis", "get")

    with pytest.raises(StoreUnavailableError):
        manager.run(_fail())


def test_run_after_stop_is_refused() -> None:
    manager = EventLoopManager()
    manager.stop()

    async def _noop() -> None:
        return None

    with pytest.raises(EventLoopError):
        manager.run(_noop())
