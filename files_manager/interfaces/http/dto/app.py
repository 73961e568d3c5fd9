from __future__ import annotations

from pydantic import BaseModel


class StatusDTO(BaseModel):
    redis: bool
    db: bool


class StatsDTO(BaseModel):
    users: int
    files: int
