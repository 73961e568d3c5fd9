# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .mongo_store import MongoDocumentStore

__all__ = ["MongoDocumentStore"]
