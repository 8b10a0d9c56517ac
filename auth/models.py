"""Request / response schemas for the auth and profile routes."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, EmailStr, Field, field_validator

from database.models import Account

# bcrypt ignores anything past 72 bytes, so longer passwords are refused.
MAX_PASSWORD_BYTES = 72


class RegisterRequest(BaseModel):
    email: EmailStr
    firstName: str = Field(..., min_length=1, max_length=100)
    lastName: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=6, max_length=MAX_PASSWORD_BYTES)

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
        return value

    @field_validator("firstName", "lastName")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserProfile(BaseModel):
    id: uuid.UUID
    firstName: str
    lastName: str
    email: str

    @classmethod
    def from_account(cls, account: Account) -> "UserProfile":
        return cls(
            id=account.id,
            firstName=account.first_name,
            lastName=account.last_name,
            email=account.email,
        )


class AuthResponse(BaseModel):
    token: str
    user: UserProfile
