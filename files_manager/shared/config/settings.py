# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    validate_by_name=True,
    extra="ignore",
)


class RedisConfig(BaseSettings):
    url: str = Field("redis://localhost:6379/0", alias="REDIS_URL")
    backend: Literal["redis", "memory"] = Field("redis", alias="KV_BACKEND")
    op_timeout: float = Field(5.0, ge=0.1, alias="REDIS_OP_TIMEOUT")
    connect_timeout: float = Field(5.0, ge=0.1, alias="REDIS_CONNECT_TIMEOUT")
    reconnect_delay: float = Field(0.5, gt=0, alias="REDIS_RECONNECT_DELAY")

    model_config = _SECTION_CONFIG


class DatabaseConfig(BaseSettings):
    host: str = Field("localhost", alias="DB_HOST")
    port: int = Field(27017, ge=1, le=65535, alias="DB_PORT")
    database: str = Field("files_manager", alias="DB_DATABASE")
    op_timeout: float = Field(5.0, ge=0.1, alias="DB_OP_TIMEOUT")
    connect_timeout: float = Field(5.0, ge=0.1, alias="DB_CONNECT_TIMEOUT")
    reconnect_delay: float = Field(0.5, gt=0, alias="DB_RECONNECT_DELAY")

    model_config = _SECTION_CONFIG

    @property
    def url(self) -> str:
        return f"mongodb://{self.host}:{self.port}"


class SessionConfig(BaseSettings):
    ttl_seconds: int = Field(24 * 3600, ge=1, alias="SESSION_TTL")
    key_prefix: str = Field("auth_", min_length=1, alias="SESSION_KEY_PREFIX")

    model_config = _SECTION_CONFIG


class ObservabilityConfig(BaseSettings):
    metrics_enabled: bool = Field(True, alias="METRICS_ENABLED")

    model_config = _SECTION_CONFIG


def _redis_config_factory() -> RedisConfig:
    return RedisConfig()  # type: ignore[call-arg]


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _session_config_factory() -> SessionConfig:
    return SessionConfig()  # type: ignore[call-arg]


def _observability_config_factory() -> ObservabilityConfig:
    return ObservabilityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    port: int = Field(5000, ge=1, le=65535, alias="PORT")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    startup_timeout: float = Field(5.0, ge=0.0, alias="STARTUP_TIMEOUT")

    redis: RedisConfig = Field(default_factory=_redis_config_factory)
    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    session: SessionConfig = Field(default_factory=_session_config_factory)
    observability: ObservabilityConfig = Field(default_factory=_observability_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "ObservabilityConfig",
    "RedisConfig",
    "SessionConfig",
    "load_config",
]
