# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import base64
import binascii

from files_manager.domain.users.entities import User
from files_manager.domain.users.exceptions import InvalidCredentialError, MalformedCredentialError
from files_manager.domain.users.repositories import PasswordHasher, UserRepository
from files_manager.shared.logging import logger

BASIC_SCHEME = "basic"


def parse_basic_authorization(header: str | None) -> tuple[str, str]:
    """Split ``Basic base64(email:password)`` into its two parts.

    Raises ``MalformedCredentialError`` for anything that is not a Basic
    header carrying a non-empty email and password.
    """
    if not header:
        raise MalformedCredentialError()

    parts = header.strip().split(None, 1)
    if len(parts) != 2 or parts[0].lower() != BASIC_SCHEME or not parts[1].strip():
        raise MalformedCredentialError()

    try:
        decoded = base64.b64decode(parts[1].strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise MalformedCredentialError() from None

    email, separator, password = decoded.partition(":")
    if not separator or not email or not password:
        raise MalformedCredentialError()
    return email, password


class CredentialVerifier:
    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    async def verify(self, authorization: str | None) -> User:
        email, password = parse_basic_authorization(authorization)

        password_hash = self._password_hasher.hash(password)
        user = await self._users.find_by_credentials(email, password_hash)
        if user is None:
            logger.debug("auth.verify: no user matched credentials")
            raise InvalidCredentialError()
        return user


__all__ = ["CredentialVerifier", "parse_basic_authorization"]
