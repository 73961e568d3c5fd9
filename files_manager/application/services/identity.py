# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from files_manager.application.services.session_tokens import SessionTokenService
from files_manager.domain.users.entities import User
from files_manager.domain.users.exceptions import TokenNotFoundError
from files_manager.domain.users.repositories import UserRepository
from files_manager.shared.logging import logger, mask_token


class UserIdentityResolver:
    def __init__(self, *, tokens: SessionTokenService, users: UserRepository) -> None:
        self._tokens = tokens
        self._users = users

    async def resolve_current_user(self, token: str | None) -> User | None:
        user_id = await self._tokens.resolve(token)
        if user_id is None:
            return None

        user = await self._users.find_by_id(user_id)
        if user is None:
            # Token outlived its user record.
            logger.warning(
                f"auth.identity: stale token={mask_token(token)} user_id={user_id}"
            )
        return user

    async def require_current_user(self, token: str | None) -> User:
        user = await self.resolve_current_user(token)
        if user is None:
            raise TokenNotFoundError()
        return user


__all__ = ["UserIdentityResolver"]
