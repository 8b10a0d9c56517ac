"""
Credential manager — account registration and login checks.
"""

from __future__ import annotations

import logging
import uuid

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import DuplicateIdentity, Err, InvalidCredentials, Ok, Result
from auth.password import PasswordHasher
from database.helpers import get_account_by_email
from database.models import Account

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Canonical form used for storage, uniqueness and lookup."""
    return email.strip().lower()


class CredentialManager:
    def __init__(self, hasher: PasswordHasher) -> None:
        self.hasher = hasher
        # Verified against when the email is unknown so both failure paths cost the same.
        self._dummy_hash = hasher.hash(uuid.uuid4().hex)

    async def register(
        self,
        session: AsyncSession,
        *,
        email: str,
        first_name: str,
        last_name: str,
        password: str,
    ) -> Result[Account, DuplicateIdentity]:
        """
        Create a new account.

        The unique index on ``users.email`` decides collisions, so two
        concurrent registrations for one email yield exactly one row.
        """
        account = Account(
            id=uuid.uuid4(),
            email=normalize_email(email),
            first_name=first_name,
            last_name=last_name,
            password_hash=await run_in_threadpool(self.hasher.hash, password),
        )
        session.add(account)
        try:
            await session.flush()
        except IntegrityError:
            await session.rollback()
            logger.info("Registration rejected: email already in use")
            return Err(DuplicateIdentity())

        logger.info("Registered account %s", account.id)
        return Ok(account)

    async def authenticate(
        self,
        session: AsyncSession,
        *,
        email: str,
        password: str,
    ) -> Result[Account, InvalidCredentials]:
        """Check an email/password pair; unknown email and wrong password look the same."""
        account = await get_account_by_email(session, normalize_email(email))

        if account is None:
            await run_in_threadpool(self.hasher.verify, password, self._dummy_hash)
            logger.info("Login failed")
            return Err(InvalidCredentials())

        if not await run_in_threadpool(self.hasher.verify, password, account.password_hash):
            logger.info("Login failed")
            return Err(InvalidCredentials())

        logger.info("Login: %s", account.id)
        return Ok(account)
