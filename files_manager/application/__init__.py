# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .interfaces import DocumentStore, KeyValueStore
from .services.credentials import CredentialVerifier
from .services.identity import UserIdentityResolver
from .services.session_tokens import SessionTokenService

__all__ = [
    "CredentialVerifier",
    "DocumentStore",
    "KeyValueStore",
    "SessionTokenService",
    "UserIdentityResolver",
]
