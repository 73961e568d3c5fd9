# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from files_manager.application.interfaces import DocumentStore, KeyValueStore


class GetStatusUseCase:
    def __init__(self, *, key_value_store: KeyValueStore, document_store: DocumentStore) -> None:
        self._kv = key_value_store
        self._documents = document_store

    def execute(self) -> dict[str, bool]:
        return {"redis": self._kv.is_alive(), "db": self._documents.is_alive()}


__all__ = ["GetStatusUseCase"]
