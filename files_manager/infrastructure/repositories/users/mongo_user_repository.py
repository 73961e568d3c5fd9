# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from bson import ObjectId
from bson.errors import InvalidId

from files_manager.application.interfaces import USERS_COLLECTION, DocumentStore
from files_manager.domain.users.entities import User as DomainUser
from files_manager.domain.users.repositories import UserRepository


def _to_domain(document: dict[str, Any]) -> DomainUser:
    return DomainUser(
        id=str(document["_id"]),
        email=document["email"],
        password_hash=document.get("password", ""),
    )


class MongoUserRepository(UserRepository):
    """Users live in the ``users`` collection as ``{_id, email, password}``."""

    def __init__(self, documents: DocumentStore) -> None:
        self._documents = documents

    async def find_by_email(self, email: str) -> DomainUser | None:
        document = await self._documents.find_one(USERS_COLLECTION, {"email": email})
        return _to_domain(document) if document else None

    async def find_by_id(self, user_id: str) -> DomainUser | None:
        try:
            object_id = ObjectId(user_id)
        except (InvalidId, TypeError):
            return None
        document = await self._documents.find_one(USERS_COLLECTION, {"_id": object_id})
        return _to_domain(document) if document else None

    async def find_by_credentials(self, email: str, password_hash: str) -> DomainUser | None:
        document = await self._documents.find_one(
            USERS_COLLECTION, {"email": email, "password": password_hash}
        )
        return _to_domain(document) if document else None

    async def add(self, email: str, password_hash: str) -> DomainUser:
        inserted_id = await self._documents.insert_one(
            USERS_COLLECTION, {"email": email, "password": password_hash}
        )
        return DomainUser(id=inserted_id, email=email, password_hash=password_hash)

    async def count(self) -> int:
        return await self._documents.count(USERS_COLLECTION)
