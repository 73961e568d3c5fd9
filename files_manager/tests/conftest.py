from __future__ import annotations

import base64
from collections.abc import Iterator, Mapping
from typing import Any

import pytest
from bson import ObjectId
from flask import Flask
from flask.testing import FlaskClient

from files_manager.app import create_app
from files_manager.application.services.password_hashing import Sha1PasswordHasher
from files_manager.infrastructure.container import Container
from files_manager.infrastructure.kv import InMemoryKeyValueStore
from files_manager.shared.config import AppConfig
from files_manager.shared.errors import StoreUnavailableError


class InMemoryDocumentStore:
    def __init__(self) -> None:
        self.collections: dict[str, list[dict[str, Any]]] = {}
        self.alive = True

    def is_alive(self) -> bool:
        return self.alive

    def _ensure_alive(self, operation: str) -> None:
        if not self.alive:
            raise StoreUnavailableError("mongodb", operation)

    async def count(self, collection: str) -> int:
        self._ensure_alive("count")
        return len(self.collections.get(collection, []))

    async def find_one(
        self, collection: str, filter: Mapping[str, Any]
    ) -> dict[str, Any] | None:
        self._ensure_alive("find_one")
        for document in self.collections.get(collection, []):
            if all(document.get(key) == value for key, value in filter.items()):
                return dict(document)
        return None

    async def insert_one(self, collection: str, document: Mapping[str, Any]) -> str:
        self._ensure_alive("insert_one")
        stored = dict(document)
        stored.setdefault("_id", ObjectId())
        self.collections.setdefault(collection, []).append(stored)
        return str(stored["_id"])

    def delete_all(self, collection: str) -> None:
        self.collections.pop(collection, None)


def _basic_header(email: str, password: str) -> str:
    raw = f"{email}:{password}".encode()
    return "Basic " + base64.b64encode(raw).decode()


@pytest.fixture()
def basic_header():
    return _basic_header


@pytest.fixture()
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture()
def take_down(kv_store, document_store, monkeypatch):
    """Make one backing store (`"redis"` or `"db"`) fail every call."""

    def _take_down(store: str) -> None:
        if store == "db":
            document_store.alive = False
            return

        async def _unavailable(*_args, **_kwargs):
            raise StoreUnavailableError("redis")

        for name in ("get", "set", "delete"):
            monkeypatch.setattr(kv_store, name, _unavailable)

    return _take_down


@pytest.fixture()
def hasher() -> Sha1PasswordHasher:
    return Sha1PasswordHasher()


@pytest.fixture()
def container(
    kv_store: InMemoryKeyValueStore, document_store: InMemoryDocumentStore
) -> Iterator[Container]:
    container = Container(
        AppConfig(),
        key_value_store=kv_store,
        document_store=document_store,
    )
    yield container
    container.shutdown()


@pytest.fixture()
def flask_app(container: Container) -> Flask:
    app = create_app(container)
    app.config.update(TESTING=True)
    return app


@pytest.fixture()
def client(flask_app: Flask) -> Iterator[FlaskClient]:
    with flask_app.test_client() as test_client:
        yield test_client
