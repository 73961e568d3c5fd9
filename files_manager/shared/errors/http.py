# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from files_manager.shared.logging import logger

from .base import AppError, InfrastructureError, UnauthorizedError


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def _log_app_error(exc: AppError) -> None:
    where = f"{request.method} {request.path}"
    if isinstance(exc, UnauthorizedError):
        # The body is identical for every credential failure; the class name is not.
        logger.warning(f"auth.rejected: {type(exc).__name__} on {where}")
    elif isinstance(exc, InfrastructureError):
        logger.error(f"store.error: {exc.code} context={dict(exc.context or {})} on {where}")
    else:
        logger.info(f"request.rejected: {exc.code} on {where}")


def register_error_handler(
    app: Flask,
    *,
    debug_mode: bool = False,
    default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> None:
    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        _log_app_error(exc)
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if debug_mode:
            logger.exception(f"Unhandled exception: {request.method} {request.path}")
        else:
            logger.error(f"Error: {type(exc).__name__} on {request.method} {request.path}")
        return jsonify({"error": "internal_error"}), default_status
