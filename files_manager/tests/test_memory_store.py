from __future__ import annotations

import asyncio

import pytest
from prometheus_client import REGISTRY

from files_manager.infrastructure.connection import ConnectionState
from files_manager.infrastructure.kv import InMemoryKeyValueStore


@pytest.mark.asyncio
async def test_alive_once_connected(kv_store: InMemoryKeyValueStore) -> None:
    assert kv_store.is_alive() is False
    assert kv_store.state is ConnectionState.CONNECTING

    assert await kv_store.wait_until_ready(timeout=1) is True
    assert kv_store.is_alive() is True


@pytest.mark.asyncio
async def test_missing_key_is_none(kv_store: InMemoryKeyValueStore) -> None:
    assert await kv_store.get("myKey") is None


@pytest.mark.asyncio
async def test_key_expires_after_ttl(kv_store: InMemoryKeyValueStore) -> None:
    await kv_store.set("myKey", 12, 1)

    assert await kv_store.get("myKey") == "12"

    await asyncio.sleep(1.1)

    assert await kv_store.get("myKey") is None


@pytest.mark.asyncio
async def test_set_overwrites(kv_store: InMemoryKeyValueStore) -> None:
    await kv_store.set("k", "first", 60)
    await kv_store.set("k", "second", 60)

    assert await kv_store.get("k") == "second"


@pytest.mark.asyncio
async def test_delete_missing_key_is_noop(kv_store: InMemoryKeyValueStore) -> None:
    await kv_store.delete("nothing-here")
    await kv_store.set("k", "v", 60)
    await kv_store.delete("k")
    await kv_store.delete("k")

    assert await kv_store.get("k") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("ttl", [0, -1, 1.5, True, "10"])
async def test_rejects_non_positive_integer_ttl(kv_store: InMemoryKeyValueStore, ttl) -> None:
    with pytest.raises(ValueError):
        await kv_store.set("k", "v", ttl)



@pytest.mark.asyncio
async def test_set_drops_expired_entries(kv_store: InMemoryKeyValueStore) -> None:
    await kv_store.set("short", "v", 1)
    await kv_store.set("long", "v", 60)

    await asyncio.sleep(1.1)
    await kv_store.set("fresh", "v", 60)

    assert set(kv_store._store) == {"long", "fresh"}
    assert await kv_store.get("long") == "v"


@pytest.mark.asyncio
async def test_successful_call_marks_store_ready(kv_store: InMemoryKeyValueStore) -> None:
    assert kv_store.state is ConnectionState.CONNECTING

    await kv_store.get("myKey")

    assert kv_store.is_alive() is True


def _latency_count(operation: str) -> float:
    value = REGISTRY.get_sample_value(
        "files_manager_store_call_seconds_count",
        {"store": "memory", "operation": operation},
    )
    return value or 0.0


@pytest.mark.asyncio
async def test_calls_are_timed_when_metrics_enabled() -> None:
    store = InMemoryKeyValueStore(metrics_enabled=True)
    before = _latency_count("delete")

    await store.delete("myKey")

    assert _latency_count("delete") == before + 1


@pytest.mark.asyncio
async def test_calls_are_not_timed_when_metrics_disabled() -> None:
    store = InMemoryKeyValueStore(metrics_enabled=False)
    before = _latency_count("get")

    await store.get("myKey")

    assert _latency_count("get") == before
