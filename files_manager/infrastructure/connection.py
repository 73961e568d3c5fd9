# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Connection state tracking shared by the backing store clients.

Every store starts in ``CONNECTING``. The handshake moves it to ``READY`` or
``FAILED``; afterwards each call reports its outcome, so a connectivity fault
flips the store to ``FAILED`` and the next successful round trip flips it
back. While ``FAILED`` a background task repeats the handshake with
exponential backoff, so the state recovers even when no request touches the
store. ``is_alive()`` only reads the current state and never touches the
network.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import ClassVar, TypeVar

from files_manager.infrastructure.observability import record_store_failure, track_store_call
from files_manager.shared.errors import StoreUnavailableError
from files_manager.shared.logging import logger

T = TypeVar("T")

DEFAULT_RECONNECT_DELAY = 0.5
MAX_RECONNECT_DELAY = 30.0


class ConnectionState(StrEnum):
    CONNECTING = "connecting"
    READY = "ready"
    FAILED = "failed"


class ManagedConnection:
    store_name: ClassVar[str] = "store"
    # Refuse calls up front while the connection is not ready.
    fail_fast: ClassVar[bool] = False
    connectivity_errors: ClassVar[tuple[type[BaseException], ...]] = (OSError,)
    handshake_errors: ClassVar[tuple[type[BaseException], ...]] = (OSError,)

    def __init__(
        self,
        *,
        op_timeout: float | None = None,
        reconnect_delay: float = DEFAULT_RECONNECT_DELAY,
        max_reconnect_delay: float = MAX_RECONNECT_DELAY,
        metrics_enabled: bool = True,
    ) -> None:
        self._state = ConnectionState.CONNECTING
        self._op_timeout = op_timeout
        self._reconnect_delay = reconnect_delay
        self._max_reconnect_delay = max(reconnect_delay, max_reconnect_delay)
        self._metrics_enabled = metrics_enabled
        self._connect_task: asyncio.Task[bool] | None = None
        self._reconnect_task: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def state(self) -> ConnectionState:
        return self._state

    def is_alive(self) -> bool:
        return self._state is ConnectionState.READY

    def _transition(self, new_state: ConnectionState, reason: str | None = None) -> None:
        previous = self._state
        if previous is new_state:
            return
        self._state = new_state
        if new_state is ConnectionState.FAILED:
            logger.warning(
                f"{self.store_name}: connection {previous} -> {new_state} reason={reason}"
            )
            self._schedule_reconnect()
        else:
            logger.info(f"{self.store_name}: connection {previous} -> {new_state}")

    async def _handshake(self) -> None:
        raise NotImplementedError

    async def connect(self) -> bool:
        self._transition(ConnectionState.CONNECTING)
        try:
            if self._op_timeout:
                await asyncio.wait_for(self._handshake(), timeout=self._op_timeout)
            else:
                await self._handshake()
        except (TimeoutError, *self.handshake_errors) as exc:
            self._transition(ConnectionState.FAILED, reason=f"{type(exc).__name__}: {exc}")
            return False
        self._transition(ConnectionState.READY)
        return True

    def start(self) -> asyncio.Task[bool]:
        """Schedule the handshake on the running loop unless one is in flight."""
        if self._connect_task is None or self._connect_task.done():
            self._connect_task = asyncio.ensure_future(self.connect())
        return self._connect_task

    async def wait_until_ready(self, timeout: float | None = None) -> bool:
        task = self._connect_task
        if task is None:
            if self.is_alive():
                return True
            task = self.start()
        await asyncio.wait({task}, timeout=timeout)
        return self.is_alive()

    def _schedule_reconnect(self) -> None:
        if self._closed:
            return
        if self._reconnect_task is not None and not self._reconnect_task.done():
            return
        try:
            self._reconnect_task = asyncio.get_running_loop().create_task(self._reconnect())
        except RuntimeError:
            logger.debug(f"{self.store_name}: no running loop, reconnect not scheduled")

    async def _reconnect(self) -> None:
        delay = self._reconnect_delay
        while not self._closed and self._state is ConnectionState.FAILED:
            await asyncio.sleep(delay)
            if self._closed or self._state is not ConnectionState.FAILED:
                return
            logger.debug(f"{self.store_name}: reconnect attempt after {delay:.2f}s")
            if await self.start():
                return
            delay = min(delay * 2, self._max_reconnect_delay)

    def _stop_reconnect(self) -> None:
        self._closed = True
        if self._reconnect_task is not None and not self._reconnect_task.done():
            self._reconnect_task.cancel()

    async def _call(self, operation: str, factory: Callable[[], Awaitable[T]]) -> T:
        if self.fail_fast and not self.is_alive():
            if self._state is ConnectionState.FAILED:
                self.start()
            if self._metrics_enabled:
                record_store_failure(self.store_name, operation)
            raise StoreUnavailableError(self.store_name, operation)

        with track_store_call(self.store_name, operation, enabled=self._metrics_enabled):
            try:
                if self._op_timeout:
                    result = await asyncio.wait_for(factory(), timeout=self._op_timeout)
                else:
                    result = await factory()
            except (TimeoutError, *self.connectivity_errors) as exc:
                if self._metrics_enabled:
                    record_store_failure(self.store_name, operation)
                self._transition(ConnectionState.FAILED, reason=f"{type(exc).__name__}: {exc}")
                raise StoreUnavailableError(self.store_name, operation) from exc

        self._transition(ConnectionState.READY)
        return result


__all__ = ["ConnectionState", "ManagedConnection"]
