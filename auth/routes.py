"""
Auth API routes — register, login.

Route prefix: /api/auth
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from auth.credentials import CredentialManager
from auth.dependencies import db_session, get_credential_manager, get_token_service
from auth.errors import Err
from auth.jwt import TokenService
from auth.models import AuthResponse, LoginRequest, RegisterRequest, UserProfile

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=AuthResponse)
async def register(
    req: RegisterRequest,
    session: AsyncSession = Depends(db_session),
    credentials: CredentialManager = Depends(get_credential_manager),
    tokens: TokenService = Depends(get_token_service),
) -> AuthResponse:
    """Register a new user and sign them in."""
    result = await credentials.register(
        session,
        email=req.email,
        first_name=req.firstName,
        last_name=req.lastName,
        password=req.password,
    )
    if isinstance(result, Err):
        raise result.error

    account = result.value
    return AuthResponse(token=tokens.issue(account), user=UserProfile.from_account(account))


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
    credentials: CredentialManager = Depends(get_credential_manager),
    tokens: TokenService = Depends(get_token_service),
) -> AuthResponse:
    """Login with email + password."""
    result = await credentials.authenticate(session, email=req.email, password=req.password)
    if isinstance(result, Err):
        raise result.error

    account = result.value
    return AuthResponse(token=tokens.issue(account), user=UserProfile.from_account(account))
