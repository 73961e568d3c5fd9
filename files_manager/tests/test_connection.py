from __future__ import annotations

import asyncio

import pytest

from files_manager.infrastructure.connection import ConnectionState, ManagedConnection
from files_manager.shared.errors import StoreUnavailableError


class _SlowStore(ManagedConnection):
    store_name = "slow"

    def __init__(self, delay: float, *, fail: bool = False, reconnect_delay: float = 0.5) -> None:
        super().__init__(reconnect_delay=reconnect_delay, max_reconnect_delay=1.0)
        self.delay = delay
        self.fail = fail
        self.handshakes = 0

    async def _handshake(self) -> None:
        self.handshakes += 1
        await asyncio.sleep(self.delay)
        if self.fail:
            raise OSError("connection refused")

    async def echo(self, value: str) -> str:
        return await self._call("echo", self._echo_factory(value))

    def _echo_factory(self, value: str):
        async def _run() -> str:
            if self.fail:
                raise OSError("connection reset")
            return value

        return _run


class _FailFastStore(_SlowStore):
    store_name = "strict"
    fail_fast = True


@pytest.mark.asyncio
async def test_wait_until_ready_gives_up_after_timeout() -> None:
    store = _SlowStore(delay=1.0)

    assert await store.wait_until_ready(timeout=0.05) is False
    assert store.state is ConnectionState.CONNECTING

    assert await store.wait_until_ready(timeout=2) is True
    assert store.handshakes == 1


@pytest.mark.asyncio
async def test_is_alive_does_not_start_handshake() -> None:
    store = _SlowStore(delay=0)

    assert store.is_alive() is False
    assert store.is_alive() is False
    assert store.handshakes == 0


@pytest.mark.asyncio
async def test_failed_handshake() -> None:
    store = _SlowStore(delay=0, fail=True)

    assert await store.wait_until_ready(timeout=1) is False
    assert store.state is ConnectionState.FAILED


@pytest.mark.asyncio
async def test_handshake_timeout_counts_as_failure() -> None:
    store = _SlowStore(delay=1.0)
    store._op_timeout = 0.05

    assert await store.connect() is False
    assert store.state is ConnectionState.FAILED


@pytest.mark.asyncio
async def test_call_outcome_drives_state() -> None:
    store = _SlowStore(delay=0)
    await store.connect()

    store.fail = True
    with pytest.raises(StoreUnavailableError) as excinfo:
        await store.echo("ping")
    assert excinfo.value.context == {"store": "slow", "operation": "echo"}
    assert store.state is ConnectionState.FAILED

    store.fail = False
    assert await store.echo("ping") == "ping"
    assert store.state is ConnectionState.READY


@pytest.mark.asyncio
async def test_fail_fast_refuses_and_reconnects() -> None:
    store = _FailFastStore(delay=0, fail=True)
    await store.connect()
    assert store.handshakes == 1

    store.fail = False
    with pytest.raises(StoreUnavailableError):
        await store.echo("ping")

    assert await store.wait_until_ready(timeout=1) is True
    assert store.handshakes == 2
    assert await store.echo("ping") == "ping"


@pytest.mark.asyncio
async def test_failed_store_retries_with_backoff_until_ready() -> None:
    store = _SlowStore(delay=0, fail=True, reconnect_delay=0.05)
    await store.connect()

    await asyncio.sleep(0.3)

    # attempts at roughly 0.05s and 0.15s, the next one is not due before 0.35s
    assert 2 <= store.handshakes <= 4
    assert store.is_alive() is False

    store.fail = False
    await asyncio.sleep(0.6)

    assert store.is_alive() is True
    handshakes = store.handshakes
    await asyncio.sleep(0.2)
    assert store.handshakes == handshakes
