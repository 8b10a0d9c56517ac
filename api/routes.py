"""
REST endpoints for signed-in users — profile and loan quotes.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_current_account_id
from auth.errors import NotFound
from auth.models import UserProfile
from database.helpers import get_account_by_id
from loans import calculator

logger = logging.getLogger(__name__)

router = APIRouter()


class LoanQuoteResponse(BaseModel):
    amount: Decimal
    days: int
    interest: Decimal
    fees: Decimal
    totalRepayment: Decimal
    repaymentDate: date


@router.get("/user/me", response_model=UserProfile, tags=["user"])
async def get_profile(
    account_id: uuid.UUID = Depends(get_current_account_id),
    session: AsyncSession = Depends(db_session),
) -> UserProfile:
    """Profile of the account the bearer token belongs to."""
    account = await get_account_by_id(session, account_id)
    if account is None:
        logger.warning("Valid token for missing account %s", account_id)
        raise NotFound()
    return UserProfile.from_account(account)


@router.get(
    "/loans/quote",
    response_model=LoanQuoteResponse,
    tags=["loans"],
    dependencies=[Depends(get_current_account_id)],
)
async def get_loan_quote(
    amount: int = Query(2500, ge=calculator.MIN_AMOUNT, le=calculator.MAX_AMOUNT),
    days: int = Query(26, ge=calculator.MIN_DAYS, le=calculator.MAX_DAYS),
) -> LoanQuoteResponse:
    q = calculator.quote(amount, days)
    return LoanQuoteResponse(
        amount=q.amount,
        days=q.days,
        interest=q.interest,
        fees=q.fees,
        totalRepayment=q.total_repayment,
        repaymentDate=q.repayment_date,
    )
