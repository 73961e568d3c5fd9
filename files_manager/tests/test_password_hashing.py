from __future__ import annotations

from files_manager.application.services.password_hashing import Sha1PasswordHasher


def test_hash_is_deterministic_hex_digest() -> None:
    hasher = Sha1PasswordHasher()

    digest = hasher.hash("toto1234!")

    assert digest == hasher.hash("toto1234!")
    assert len(digest) == 40
    assert digest != "toto1234!"

