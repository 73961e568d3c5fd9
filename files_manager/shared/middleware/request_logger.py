# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-request correlation ids and access logging.

The correlation id comes from ``X-Request-ID`` when the caller sends one and
is echoed back on the response. Credentials never reach the log: the session
token is reduced to its prefix and the Authorization header to its scheme.
"""

from __future__ import annotations

import secrets
import time

from flask import Flask, Response, g, request

from files_manager.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    mask_token,
    set_correlation_id,
)

REQUEST_ID_HEADER = "X-Request-ID"


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _auth_summary() -> str:
    token = request.headers.get("X-Token")
    if token:
        return f"token={mask_token(token)}"
    authorization = request.headers.get("Authorization")
    if authorization:
        return f"scheme={authorization.split(' ', 1)[0].lower()}"
    return "anonymous"


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    @app.before_request
    def _before_request() -> None:
        set_correlation_id(request.headers.get(REQUEST_ID_HEADER) or secrets.token_urlsafe(8))
        g.request_started = time.perf_counter()
        if debug_mode:
            logger.debug(
                f"http.request: {request.method} {request.path} from {_client_ip()} "
                f"{_auth_summary()} body_size={request.content_length or 0}"
            )

    @app.after_request
    def _after_request(response: Response) -> Response:
        elapsed = time.perf_counter() - getattr(g, "request_started", time.perf_counter())
        logger.info(
            f"http.response: {request.method} {request.path} status={response.status_code} "
            f"duration={elapsed:.3f}s user={getattr(g, 'user_id', None)}"
        )
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())
        return response

    @app.teardown_request
    def _teardown_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"http.error: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
