# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import asyncio
import threading
from collections.abc import Coroutine
from typing import Any, TypeVar

from files_manager.shared.errors import AppError
from files_manager.shared.logging import logger

T = TypeVar("T")


class EventLoopError(RuntimeError):
    pass


class EventLoopManager:
    """Runs one asyncio loop in a daemon thread for the synchronous Flask app.

    Store clients are created and used only on this loop; request threads hand
    coroutines over with ``run`` and block on the result.
    """

    def __init__(self, name: str = "StoreEventLoop") -> None:
        self._loop: asyncio.AbstractEventLoop = asyncio.new_event_loop()
        self._thread: threading.Thread = threading.Thread(
            target=self._run_loop,
            daemon=True,
            name=name,
        )
        self._started = False

        logger.debug(f"EventLoopManager: creating thread name={self._thread.name}")
        self._thread.start()
        self._started = True
        logger.debug(f"EventLoopManager: thread started name={self._thread.name}")

    def _run_loop(self) -> None:
        asyncio.set_event_loop(self._loop)
        thread_name = threading.current_thread().name
        logger.debug(f"EventLoopManager: loop runner start thread={thread_name}")

        try:
            self._loop.run_forever()
        except Exception:
            logger.exception(f"EventLoopManager: loop error thread={thread_name}")
        finally:
            logger.debug(f"EventLoopManager: loop runner stop thread={thread_name}")

    def run(self, coro: Coroutine[Any, Any, T]) -> T:
        if not self._started:
            coro.close()
            raise EventLoopError("Event loop not started")

        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        try:
            return future.result()
        except AppError:
            raise
        except Exception:
            logger.exception(f"EventLoopManager: execution failed thread={self._thread.name}")
            raise

    def stop(self) -> None:
        if not self._started:
            logger.debug("EventLoopManager: already stopped")
            return

        logger.debug(f"EventLoopManager: stopping thread={self._thread.name}")
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=2.0)
        self._started = False
        if not self._thread.is_alive():
            self._loop.close()
        logger.debug(f"EventLoopManager: stopped thread={self._thread.name}")


__all__ = ["EventLoopError", "EventLoopManager"]
