# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from files_manager.application.services.credentials import CredentialVerifier
from files_manager.application.services.session_tokens import SessionTokenService
from files_manager.domain.users.exceptions import (
    InvalidCredentialError,
    MalformedCredentialError,
)
from files_manager.infrastructure.observability import record_auth_event
from files_manager.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        verifier: CredentialVerifier,
        tokens: SessionTokenService,
    ) -> None:
        self._verifier = verifier
        self._tokens = tokens

    async def execute(self, authorization: str | None) -> str:
        try:
            user = await self._verifier.verify(authorization)
        except MalformedCredentialError:
            record_auth_event("sign_in", "malformed")
            raise
        except InvalidCredentialError:
            record_auth_event("sign_in", "invalid")
            raise

        token = await self._tokens.issue(user.id)
        record_auth_event("sign_in", "ok")
        logger.info(f"auth.connect: ok user_id={user.id}")
        return token
