# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from dataclasses import dataclass
from threading import Lock
from typing import Any

from files_manager.infrastructure.connection import ManagedConnection
from files_manager.infrastructure.kv.redis_store import validate_ttl
from files_manager.shared.logging import logger


@dataclass(slots=True)
class _Entry:
    value: str
    expires_at: float

    def is_expired(self, now: float | None = None) -> bool:
        return (now if now is not None else time.monotonic()) >= self.expires_at


class InMemoryKeyValueStore(ManagedConnection):
    """Process-local store with the same TTL semantics as the Redis one.

    Calls go through the shared connection wrapper, so they are timed and
    update the connection state like the networked stores.
    """

    store_name = "memory"

    def __init__(self, *, metrics_enabled: bool = True) -> None:
        super().__init__(metrics_enabled=metrics_enabled)
        self._lock = Lock()
        self._store: dict[str, _Entry] = {}

    async def _handshake(self) -> None:
        return None

    def _get(self, key: str) -> str | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if entry.is_expired():
                logger.debug(f"memory: expired key={key}")
                self._store.pop(key, None)
                return None
            return entry.value

    def _set(self, key: str, value: str, ttl: int) -> None:
        now = time.monotonic()
        with self._lock:
            expired = [k for k, entry in self._store.items() if entry.is_expired(now)]
            for k in expired:
                del self._store[k]
            self._store[key] = _Entry(value=value, expires_at=now + ttl)
        if expired:
            logger.debug(f"memory: purged {len(expired)} expired keys")

    def _delete(self, key: str) -> bool:
        with self._lock:
            return self._store.pop(key, None) is not None

    async def get(self, key: str) -> str | None:
        return await self._call("get", self._deferred(self._get, key))

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        ttl = validate_ttl(ttl_seconds)
        await self._call("set", self._deferred(self._set, key, str(value), ttl))
        logger.debug(f"memory: set key={key} ttl={ttl}")

    async def delete(self, key: str) -> None:
        if await self._call("delete", self._deferred(self._delete, key)):
            logger.debug(f"memory: delete key={key}")

    @staticmethod
    def _deferred(func, *args):
        async def _run():
            return func(*args)

        return _run

    def clear(self) -> None:
        with self._lock:
            logger.debug("memory: clear all keys")
            self._store.clear()

    async def close(self) -> None:
        self._stop_reconnect()
        self.clear()


__all__ = ["InMemoryKeyValueStore"]
