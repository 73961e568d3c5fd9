# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request

from files_manager.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from files_manager.application.use_cases.users.register_user import RegisterUserUseCase
from files_manager.infrastructure.event_loop import EventLoopManager
from files_manager.interfaces.http.controllers.auth_controller import TOKEN_HEADER
from files_manager.interfaces.http.dto.users import RegisterRequestDTO, UserDTO
from files_manager.shared.errors.validation import validate_body


class UsersController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        current_user_use_case: GetCurrentUserUseCase,
        event_loop: EventLoopManager,
    ) -> None:
        self._register_use_case = register_use_case
        self._current_user_use_case = current_user_use_case
        self._loop = event_loop

    def create(self) -> tuple[Response, int]:
        dto = validate_body(RegisterRequestDTO, request.get_json(silent=True))

        user = self._loop.run(self._register_use_case.execute(dto.email, dto.password))
        return jsonify(UserDTO.from_domain(user).model_dump()), 201

    def me(self) -> tuple[Response, int]:
        token = request.headers.get(TOKEN_HEADER)
        user = self._loop.run(self._current_user_use_case.execute(token))
        g.user_id = user.id
        return jsonify(UserDTO.from_domain(user).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__)
        bp.add_url_rule("/users", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/users/me", view_func=self.me, methods=["GET"])
        return bp
