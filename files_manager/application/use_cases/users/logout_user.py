"""Use-case for revoking session tokens."""

from __future__ import annotations

from files_manager.application.services.session_tokens import SessionTokenService
from files_manager.domain.users.exceptions import TokenNotFoundError
from files_manager.infrastructure.observability import record_auth_event


class LogoutUserUseCase:
    def __init__(self, *, tokens: SessionTokenService) -> None:
        self._tokens = tokens

    async def execute(self, token: str | None) -> None:
        if not token:
            record_auth_event("sign_out", "missing_token")
            raise TokenNotFoundError()
        await self._tokens.revoke(token)
        record_auth_event("sign_out", "ok")
