# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import User


class UserRepository(Protocol):
    async def find_by_email(self, email: str) -> User | None: ...
    async def find_by_id(self, user_id: str) -> User | None: ...
    async def find_by_credentials(self, email: str, password_hash: str) -> User | None: ...
    async def add(self, email: str, password_hash: str) -> User: ...
    async def count(self) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...


class TokenGenerator(Protocol):
    def __call__(self) -> str: ...
