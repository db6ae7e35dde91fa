# backend/finance_tracker/schemas/ledger.py
"""
Pydantic schemas for wallets, ledger transactions, manual debts and salaries.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_tracker.schemas.validators import (
    normalize_person_name,
    validate_statement_month,
)
from finance_tracker.services.platforms import Currency
from finance_tracker.services.summaries.types import TransactionType


class WalletRecord(BaseModel):
    """A cash or bank account holding one currency."""

    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    name: str = Field(..., min_length=1)
    currency: Currency = Currency.ARS
    balance: Decimal = Field(
        default=Decimal("0"),
        description="Current balance (may be negative for overdrawn accounts)"
    )


class TransactionRecord(BaseModel):
    """
    One ledger entry.

    Amounts are always positive; the type decides whether it adds to or
    subtracts from the wallet balance.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    wallet_id: str | None = None
    date: dt.date
    description: str = ""
    amount: Decimal = Field(..., gt=0)
    currency: Currency = Currency.ARS
    type: TransactionType
    category: str | None = None


class ManualDebtRecord(BaseModel):
    """Money someone owes outside of a card purchase."""

    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    debtor_name: str
    description: str = ""
    amount: Decimal = Field(..., gt=0)
    currency: Currency = Currency.ARS
    date: dt.date | None = None
    is_paid: bool = False
    paid_date: dt.date | None = None

    @field_validator('debtor_name')
    @classmethod
    def normalize_debtor(cls, v: str) -> str:
        name = normalize_person_name(v)
        if not name:
            raise ValueError("debtor_name cannot be empty")
        return name


class SalaryRecord(BaseModel):
    """Monthly salary entry."""

    model_config = ConfigDict(from_attributes=True)

    month: str = Field(..., examples=["2024-03"])
    net_amount: Decimal = Field(..., ge=0)
    bonus: Decimal = Field(default=Decimal("0"), ge=0)
    currency: Currency = Currency.ARS

    @field_validator('month')
    @classmethod
    def check_month(cls, v: str) -> str:
        return validate_statement_month(v)
