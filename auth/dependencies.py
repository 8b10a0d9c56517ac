"""
FastAPI dependencies for authentication.

Provides ``db_session``, the service accessors and ``get_current_account_id``
used across all protected routes. Services live on ``app.state`` and are
built once in ``create_app``.
"""

from __future__ import annotations

import uuid
from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.credentials import CredentialManager
from auth.errors import InvalidToken
from auth.jwt import TokenService
from database.session import get_db_session

_bearer_scheme = HTTPBearer(auto_error=False)


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_credential_manager(request: Request) -> CredentialManager:
    return request.app.state.credential_manager


async def get_current_account_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> uuid.UUID:
    """
    Extract and verify the Bearer token, returning the authenticated
    account id.
    """
    if credentials is None:
        raise InvalidToken()
    claims = tokens.validate(credentials.credentials)
    return tokens.extract_identity(claims)
