from __future__ import annotations

import pytest
from bson import ObjectId

from files_manager.infrastructure.repositories.users.mongo_user_repository import (
    MongoUserRepository,
)


@pytest.fixture()
def repository(document_store) -> MongoUserRepository:
    return MongoUserRepository(document_store)


@pytest.mark.asyncio
async def test_add_stores_email_and_password(repository, document_store) -> None:
    user = await repository.add("bob@dylan.com", "digest")

    stored = document_store.collections["users"][0]
    assert set(stored) == {"_id", "email", "password"}
    assert stored["email"] == "bob@dylan.com"
    assert stored["password"] == "digest"
    assert user.id == str(stored["_id"])


@pytest.mark.asyncio
async def test_find_by_email_and_id(repository) -> None:
    created = await repository.add("bob@dylan.com", "digest")

    by_email = await repository.find_by_email("bob@dylan.com")
    by_id = await repository.find_by_id(created.id)

    assert by_email == created
    assert by_id == created
    assert await repository.find_by_email("alice@example.com") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", ["", "not-an-object-id", "123"])
async def test_find_by_id_with_malformed_id(repository, user_id) -> None:
    assert await repository.find_by_id(user_id) is None


@pytest.mark.asyncio
async def test_find_by_id_for_unknown_user(repository) -> None:
    assert await repository.find_by_id(str(ObjectId())) is None


@pytest.mark.asyncio
async def test_find_by_credentials_requires_both_fields(repository) -> None:
    created = await repository.add("bob@dylan.com", "digest")

    assert await repository.find_by_credentials("bob@dylan.com", "digest") == created
    assert await repository.find_by_credentials("bob@dylan.com", "other") is None
    assert await repository.find_by_credentials("alice@example.com", "digest") is None


@pytest.mark.asyncio
async def test_count(repository) -> None:
    assert await repository.count() == 0

    await repository.add("a@example.com", "x")
    await repository.add("b@example.com", "y")

    assert await repository.count() == 2
