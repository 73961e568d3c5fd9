"""Password hashing strategies."""

from __future__ import annotations

import hashlib

from files_manager.domain.users.repositories import PasswordHasher


class Sha1PasswordHasher(PasswordHasher):
    """Unsalted SHA1 hex digest, matching records created at registration.

    The digest is deterministic so a user can be looked up by
    ``{email, password}`` directly in the document store.
    """

    def hash(self, password: str) -> str:
        return hashlib.sha1(password.encode("utf-8")).hexdigest()
