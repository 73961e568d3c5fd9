# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import User
from .users.exceptions import (
    InvalidCredentialError,
    MalformedCredentialError,
    MissingEmailError,
    MissingPasswordError,
    TokenNotFoundError,
    UserAlreadyExistsError,
)

__all__ = [
    "InvalidCredentialError",
    "MalformedCredentialError",
    "MissingEmailError",
    "MissingPasswordError",
    "TokenNotFoundError",
    "User",
    "UserAlreadyExistsError",
]
