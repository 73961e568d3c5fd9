# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from files_manager.infrastructure.connection import DEFAULT_RECONNECT_DELAY, ManagedConnection
from files_manager.shared.logging import logger


def validate_ttl(ttl_seconds: int) -> int:
    if isinstance(ttl_seconds, bool) or not isinstance(ttl_seconds, int) or ttl_seconds <= 0:
        raise ValueError(f"ttl_seconds must be a positive integer, got {ttl_seconds!r}")
    return ttl_seconds


class RedisKeyValueStore(ManagedConnection):
    """Key-value store backed by Redis.

    Every call is a round trip; nothing is cached in process. Connectivity
    faults and timeouts surface as ``StoreUnavailableError``.
    """

    store_name = "redis"
    connectivity_errors = (RedisConnectionError, RedisTimeoutError, OSError)
    handshake_errors = (RedisError, OSError)

    def __init__(
        self,
        client: redis.Redis,
        *,
        op_timeout: float | None = None,
        reconnect_delay: float = DEFAULT_RECONNECT_DELAY,
        metrics_enabled: bool = True,
    ) -> None:
        super().__init__(
            op_timeout=op_timeout,
            reconnect_delay=reconnect_delay,
            metrics_enabled=metrics_enabled,
        )
        self._client = client

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        op_timeout: float | None = None,
        connect_timeout: float = 5.0,
        reconnect_delay: float = DEFAULT_RECONNECT_DELAY,
        metrics_enabled: bool = True,
    ) -> RedisKeyValueStore:
        client = redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=connect_timeout,
            socket_timeout=op_timeout,
        )
        logger.info(f"redis: client created url={url}")
        return cls(
            client,
            op_timeout=op_timeout,
            reconnect_delay=reconnect_delay,
            metrics_enabled=metrics_enabled,
        )

    async def _handshake(self) -> None:
        await self._client.ping()

    async def get(self, key: str) -> str | None:
        value = await self._call("get", lambda: self._client.get(key))
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        ttl = validate_ttl(ttl_seconds)
        await self._call("set", lambda: self._client.setex(key, ttl, str(value)))
        logger.debug(f"redis: set key={key} ttl={ttl}")

    async def delete(self, key: str) -> None:
        removed = await self._call("delete", lambda: self._client.delete(key))
        logger.debug(f"redis: delete key={key} removed={removed}")

    async def close(self) -> None:
        self._stop_reconnect()
        await self._client.aclose()
        logger.info("redis: client closed")


__all__ = ["RedisKeyValueStore", "validate_ttl"]
