"""
Database helper functions — schema bootstrap and account lookups.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from database.models import Account, Base

logger = logging.getLogger(__name__)


def _to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    return uuid.UUID(value) if isinstance(value, str) else value


async def create_tables(engine: AsyncEngine) -> None:
    """Create any missing tables (idempotent)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")


async def get_account_by_email(session: AsyncSession, email: str) -> Optional[Account]:
    """Look up an account by its already-normalized email."""
    result = await session.execute(select(Account).where(Account.email == email))
    return result.scalar_one_or_none()


async def get_account_by_id(
    session: AsyncSession, account_id: str | uuid.UUID
) -> Optional[Account]:
    return await session.get(Account, _to_uuid(account_id))
