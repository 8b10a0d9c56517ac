"""
Loan quote arithmetic shown on the dashboard.

Flat 20% interest plus a fixed fee, repaid in one instalment after the
chosen number of days. Display helper only; nothing is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

INTEREST_RATE = Decimal("0.20")
FIXED_FEE = Decimal("57.26")

MIN_AMOUNT = 500
MAX_AMOUNT = 8000
MIN_DAYS = 7
MAX_DAYS = 180

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class LoanQuote:
    amount: Decimal
    days: int
    interest: Decimal
    fees: Decimal
    total_repayment: Decimal
    repayment_date: date


def _money(value: Decimal) -> Decimal:
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


def quote(amount: int | Decimal, days: int, today: Optional[date] = None) -> LoanQuote:
    """Price a loan of ``amount`` repaid after ``days`` days."""
    principal = Decimal(amount)
    if not MIN_AMOUNT <= principal <= MAX_AMOUNT:
        raise ValueError(f"amount must be between {MIN_AMOUNT} and {MAX_AMOUNT}")
    if not MIN_DAYS <= days <= MAX_DAYS:
        raise ValueError(f"days must be between {MIN_DAYS} and {MAX_DAYS}")

    interest = _money(principal * INTEREST_RATE)
    fees = _money(FIXED_FEE)
    start = today or date.today()
    return LoanQuote(
        amount=_money(principal),
        days=days,
        interest=interest,
        fees=fees,
        total_repayment=_money(principal + interest + fees),
        repayment_date=start + timedelta(days=days),
    )
