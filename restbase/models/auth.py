"""Pydantic models for the sample authentication endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials posted to ``/login``."""

    email: str = ""
    password: str = ""


class UserDTO(BaseModel):
    """User profile as returned by the backend. Unknown fields are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str | None = None
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    avatar: str | None = None
    phone_no: str | None = None
    gender: int | None = None
    birthday: datetime | None = None
    created_at: datetime | None = None
    member_no: int | None = None
    membership_name: str | None = None
    point: int = Field(default=0, ge=0)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class LoginResponse(BaseModel):
    """Payload of a successful login."""

    model_config = ConfigDict(frozen=True)

    user: UserDTO = Field(default_factory=UserDTO)
    access_token: str = ""
