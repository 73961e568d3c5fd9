# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class User:

    id: str
    email: str
    password_hash: str

    def public_view(self) -> dict[str, str]:
        return {"id": self.id, "email": self.email}
