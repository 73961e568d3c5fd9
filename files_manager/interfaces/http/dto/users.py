from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from files_manager.domain.users.entities import User


class RegisterRequestDTO(BaseModel):
    """Both fields are optional here; the use case reports which one is missing."""

    email: str | None = Field(default=None, max_length=254)
    password: str | None = Field(default=None, max_length=128)

    model_config = ConfigDict(extra="ignore")


class UserDTO(BaseModel):
    id: str
    email: str

    @classmethod
    def from_domain(cls, user: User) -> UserDTO:
        return cls(**user.public_view())
