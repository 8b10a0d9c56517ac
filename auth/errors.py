"""
Error kinds and result types for the credential and token operations.

Every ``AuthError`` is an expected, caller-recoverable condition. Each kind
carries one fixed message so responses never reveal which check failed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from fastapi import status

T = TypeVar("T")
E = TypeVar("E", bound="AuthError")


class AuthError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    detail: str = "Authentication error"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class DuplicateIdentity(AuthError):
    status_code = status.HTTP_409_CONFLICT
    detail = "User with this email already exists"


class InvalidCredentials(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid email or password"


class InvalidToken(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid or expired token"


class NotFound(AuthError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "User not found"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


Result = Union[Ok[T], Err[E]]
