# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from files_manager.application.interfaces import DocumentStore, KeyValueStore
from files_manager.application.services.credentials import CredentialVerifier
from files_manager.application.services.identity import UserIdentityResolver
from files_manager.application.services.password_hashing import Sha1PasswordHasher
from files_manager.application.services.session_tokens import SessionTokenService
from files_manager.application.use_cases.app.get_stats import GetStatsUseCase
from files_manager.application.use_cases.app.get_status import GetStatusUseCase
from files_manager.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from files_manager.application.use_cases.users.login_user import LoginUserUseCase
from files_manager.application.use_cases.users.logout_user import LogoutUserUseCase
from files_manager.application.use_cases.users.register_user import RegisterUserUseCase
from files_manager.infrastructure.connection import ManagedConnection
from files_manager.infrastructure.db import MongoDocumentStore
from files_manager.infrastructure.event_loop import EventLoopManager
from files_manager.infrastructure.kv import InMemoryKeyValueStore, RedisKeyValueStore
from files_manager.infrastructure.repositories.users.mongo_user_repository import (
    MongoUserRepository,
)
from files_manager.interfaces.http.controllers.app_controller import AppController
from files_manager.interfaces.http.controllers.auth_controller import AuthController
from files_manager.interfaces.http.controllers.users_controller import UsersController
from files_manager.shared.config import AppConfig, load_config
from files_manager.shared.logging import logger


class Container:
    """Builds every component once; store handles are shared by all requests.

    Stores may be passed in (tests, embedding); otherwise they are created on
    the container's event loop from configuration.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        key_value_store: KeyValueStore | None = None,
        document_store: DocumentStore | None = None,
        event_loop: EventLoopManager | None = None,
    ) -> None:
        self.config = config or load_config()
        self._key_value_store = key_value_store
        self._document_store = document_store
        self._event_loop = event_loop

    @cached_property
    def event_loop(self) -> EventLoopManager:
        return self._event_loop or EventLoopManager()

    @cached_property
    def key_value_store(self) -> KeyValueStore:
        if self._key_value_store is not None:
            return self._key_value_store
        return self.event_loop.run(self._build_key_value_store())

    @cached_property
    def document_store(self) -> DocumentStore:
        if self._document_store is not None:
            return self._document_store
        return self.event_loop.run(self._build_document_store())

    async def _build_key_value_store(self) -> KeyValueStore:
        redis_config = self.config.redis
        metrics_enabled = self.config.observability.metrics_enabled
        if redis_config.backend == "memory":
            logger.warning("container: using in-memory key-value store")
            return InMemoryKeyValueStore(metrics_enabled=metrics_enabled)
        return RedisKeyValueStore.from_url(
            redis_config.url,
            op_timeout=redis_config.op_timeout,
            connect_timeout=redis_config.connect_timeout,
            reconnect_delay=redis_config.reconnect_delay,
            metrics_enabled=metrics_enabled,
        )

    async def _build_document_store(self) -> DocumentStore:
        return MongoDocumentStore.from_config(
            self.config.database,
            metrics_enabled=self.config.observability.metrics_enabled,
        )

    def _managed_stores(self) -> list[ManagedConnection]:
        return [
            store
            for store in (self.key_value_store, self.document_store)
            if isinstance(store, ManagedConnection)
        ]

    def start(self, timeout: float | None = None) -> dict[str, bool]:
        """Open store connections and wait up to ``timeout`` for the handshakes."""
        timeout = self.config.startup_timeout if timeout is None else timeout
        for store in self._managed_stores():
            ready = self.event_loop.run(store.wait_until_ready(timeout))
            if not ready:
                logger.warning(f"container: {store.store_name} not ready after {timeout:.1f}s")
        status = self.get_status_use_case.execute()
        logger.info(f"container: started redis={status['redis']} db={status['db']}")
        return status

    def shutdown(self) -> None:
        for store in self._managed_stores():
            close = getattr(store, "close", None)
            if close is not None:
                self.event_loop.run(close())
        self.event_loop.stop()
        logger.info("container: stopped")

    @cached_property
    def password_hasher(self) -> Sha1PasswordHasher:
        return Sha1PasswordHasher()

    @cached_property
    def user_repository(self) -> MongoUserRepository:
        return MongoUserRepository(self.document_store)

    @cached_property
    def session_token_service(self) -> SessionTokenService:
        return SessionTokenService(
            self.key_value_store,
            ttl_seconds=self.config.session.ttl_seconds,
            key_prefix=self.config.session.key_prefix,
        )

    @cached_property
    def credential_verifier(self) -> CredentialVerifier:
        return CredentialVerifier(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def identity_resolver(self) -> UserIdentityResolver:
        return UserIdentityResolver(
            tokens=self.session_token_service,
            users=self.user_repository,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            verifier=self.credential_verifier,
            tokens=self.session_token_service,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(tokens=self.session_token_service)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def get_current_user_use_case(self) -> GetCurrentUserUseCase:
        return GetCurrentUserUseCase(resolver=self.identity_resolver)

    @cached_property
    def get_status_use_case(self) -> GetStatusUseCase:
        return GetStatusUseCase(
            key_value_store=self.key_value_store,
            document_store=self.document_store,
        )

    @cached_property
    def get_stats_use_case(self) -> GetStatsUseCase:
        return GetStatsUseCase(
            users=self.user_repository,
            document_store=self.document_store,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            event_loop=self.event_loop,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            register_use_case=self.register_user_use_case,
            current_user_use_case=self.get_current_user_use_case,
            event_loop=self.event_loop,
        )

    @cached_property
    def app_controller(self) -> AppController:
        return AppController(
            status_use_case=self.get_status_use_case,
            stats_use_case=self.get_stats_use_case,
            event_loop=self.event_loop,
            metrics_enabled=self.config.observability.metrics_enabled,
        )
