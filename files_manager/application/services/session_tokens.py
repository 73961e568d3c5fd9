# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid

from files_manager.application.interfaces import KeyValueStore
from files_manager.domain.users.exceptions import TokenNotFoundError
from files_manager.domain.users.repositories import TokenGenerator
from files_manager.shared.logging import logger, mask_token

DEFAULT_TOKEN_TTL = 24 * 3600
DEFAULT_KEY_PREFIX = "auth_"


def uuid_token() -> str:
    return str(uuid.uuid4())


class SessionTokenService:
    """Maps ``<prefix><token>`` keys to user ids in the key-value store.

    A token is active until its TTL elapses or it is revoked; neither an
    expired nor a revoked token can become active again. Every sign-in mints
    a new token, so one user may hold several at once.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        ttl_seconds: int = DEFAULT_TOKEN_TTL,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        token_generator: TokenGenerator = uuid_token,
    ) -> None:
        self._store = store
        self._ttl = ttl_seconds
        self._prefix = key_prefix
        self._generate = token_generator

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    def key_for(self, token: str) -> str:
        return f"{self._prefix}{token}"

    async def issue(self, user_id: str) -> str:
        token = self._generate()
        await self._store.set(self.key_for(token), str(user_id), self._ttl)
        logger.info(f"auth.token: issued user_id={user_id} token={mask_token(token)} ttl={self._ttl}")
        return token

    async def resolve(self, token: str | None) -> str | None:
        if not token:
            return None
        return await self._store.get(self.key_for(token))

    async def require(self, token: str | None) -> str:
        user_id = await self.resolve(token)
        if user_id is None:
            raise TokenNotFoundError()
        return user_id

    async def revoke(self, token: str) -> None:
        if not token:
            return
        await self._store.delete(self.key_for(token))
        logger.info(f"auth.token: revoked token={mask_token(token)}")


__all__ = ["DEFAULT_KEY_PREFIX", "DEFAULT_TOKEN_TTL", "SessionTokenService", "uuid_token"]
