# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from files_manager.application.services.identity import UserIdentityResolver
from files_manager.domain.users.entities import User


class GetCurrentUserUseCase:
    def __init__(self, *, resolver: UserIdentityResolver) -> None:
        self._resolver = resolver

    async def execute(self, token: str | None) -> User:
        return await self._resolver.require_current_user(token)


__all__ = ["GetCurrentUserUseCase"]
