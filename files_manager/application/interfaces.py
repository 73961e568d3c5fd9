# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class KeyValueStore(Protocol):
    def is_alive(self) -> bool: ...

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None: ...

    async def delete(self, key: str) -> None: ...


class DocumentStore(Protocol):
    def is_alive(self) -> bool: ...

    async def count(self, collection: str) -> int: ...

    async def find_one(
        self, collection: str, filter: Mapping[str, Any]
    ) -> dict[str, Any] | None: ...

    async def insert_one(self, collection: str, document: Mapping[str, Any]) -> str: ...


USERS_COLLECTION = "users"
FILES_COLLECTION = "files"
