# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import asyncio

from files_manager.application.interfaces import FILES_COLLECTION, DocumentStore
from files_manager.domain.users.repositories import UserRepository


class GetStatsUseCase:
    def __init__(self, *, users: UserRepository, document_store: DocumentStore) -> None:
        self._users = users
        self._documents = document_store

    async def execute(self) -> dict[str, int]:
        users, files = await asyncio.gather(
            self._users.count(),
            self._documents.count(FILES_COLLECTION),
        )
        return {"users": users, "files": files}


__all__ = ["GetStatsUseCase"]
