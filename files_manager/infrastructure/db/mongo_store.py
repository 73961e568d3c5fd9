# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pymongo import AsyncMongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

from files_manager.infrastructure.connection import DEFAULT_RECONNECT_DELAY, ManagedConnection
from files_manager.shared.config.settings import DatabaseConfig
from files_manager.shared.logging import logger


class MongoDocumentStore(ManagedConnection):
    """Document store backed by MongoDB.

    Calls issued before the ping handshake succeeds, or after a connectivity
    fault, are refused with ``StoreUnavailableError`` instead of waiting on
    server selection. A refused call schedules a fresh handshake.
    """

    store_name = "mongodb"
    fail_fast = True
    connectivity_errors = (ConnectionFailure, OSError)
    handshake_errors = (PyMongoError, OSError)

    def __init__(
        self,
        client: AsyncMongoClient,
        database: str,
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
        self._db = client[database]
        self._database_name = database

    @classmethod
    def from_config(
        cls, config: DatabaseConfig, *, metrics_enabled: bool = True
    ) -> MongoDocumentStore:
        timeout_ms = int(config.connect_timeout * 1000)
        client: AsyncMongoClient = AsyncMongoClient(
            config.url,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
            socketTimeoutMS=int(config.op_timeout * 1000),
        )
        logger.info(f"mongodb: client created host={config.host}:{config.port} db={config.database}")
        return cls(
            client,
            config.database,
            op_timeout=config.op_timeout,
            reconnect_delay=config.reconnect_delay,
            metrics_enabled=metrics_enabled,
        )

    async def _handshake(self) -> None:
        await self._client.admin.command("ping")

    async def count(self, collection: str) -> int:
        return int(
            await self._call("count", lambda: self._db[collection].count_documents({}))
        )

    async def find_one(
        self, collection: str, filter: Mapping[str, Any]
    ) -> dict[str, Any] | None:
        query = dict(filter)
        return await self._call("find_one", lambda: self._db[collection].find_one(query))

    async def insert_one(self, collection: str, document: Mapping[str, Any]) -> str:
        payload = dict(document)
        result = await self._call("insert_one", lambda: self._db[collection].insert_one(payload))
        logger.debug(f"mongodb: inserted collection={collection} id={result.inserted_id}")
        return str(result.inserted_id)

    async def close(self) -> None:
        self._stop_reconnect()
        await self._client.close()
        logger.info("mongodb: client closed")


__all__ = ["MongoDocumentStore"]
