# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request

from files_manager.application.use_cases.users.login_user import LoginUserUseCase
from files_manager.application.use_cases.users.logout_user import LogoutUserUseCase
from files_manager.infrastructure.event_loop import EventLoopManager
from files_manager.interfaces.http.dto.auth import TokenDTO
from files_manager.shared.logging import logger

TOKEN_HEADER = "X-Token"


class AuthController:
    def __init__(
        self,
        *,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        event_loop: EventLoopManager,
    ) -> None:
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._loop = event_loop

    def connect(self) -> tuple[Response, int]:
        authorization = request.headers.get("Authorization")
        token = self._loop.run(self._login_use_case.execute(authorization))
        return jsonify(TokenDTO(token=token).model_dump()), 200

    def disconnect(self) -> tuple[str, int]:
        token = request.headers.get(TOKEN_HEADER)
        self._loop.run(self._logout_use_case.execute(token))
        logger.info("auth.disconnect: ok")
        return "", 204

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/connect", view_func=self.connect, methods=["GET"])
        bp.add_url_rule("/disconnect", view_func=self.disconnect, methods=["GET"])
        return bp
