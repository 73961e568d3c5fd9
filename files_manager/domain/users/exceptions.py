# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from files_manager.shared.errors.base import DomainError, UnauthorizedError


class MalformedCredentialError(UnauthorizedError):
    pass


class InvalidCredentialError(UnauthorizedError):
    pass


class TokenNotFoundError(UnauthorizedError):
    pass


class MissingEmailError(DomainError):
    code = "Missing email"


class MissingPasswordError(DomainError):
    code = "Missing password"


class UserAlreadyExistsError(DomainError):
    code = "Already exist"
