# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .memory_store import InMemoryKeyValueStore
from .redis_store import RedisKeyValueStore

__all__ = ["InMemoryKeyValueStore", "RedisKeyValueStore"]
