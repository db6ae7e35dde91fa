# backend/finance_tracker/schemas/credit_cards.py
"""
Pydantic schemas for credit card purchases and their installments.

A purchase is split into `installments` equal parts; installment k is billed
in the statement given by finance_tracker.services.statements.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from finance_tracker.schemas.validators import (
    normalize_person_name,
    validate_statement_month,
)
from finance_tracker.services.platforms import Currency
from finance_tracker.services.statements import (
    InstallmentPlan,
    build_installment_schedule,
    statement_month,
)


# =============================================================================
# PURCHASE
# =============================================================================

class CreditCardPurchase(BaseModel):
    """
    A card purchase, optionally in installments.

    When is_own_expense is False the purchase was made on behalf of
    borrower_name, and every installment becomes a debt that person owes.
    """

    description: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="What was bought"
    )
    card_name: str = Field(
        ...,
        min_length=1,
        description="Card the purchase was charged to"
    )
    purchase_date: date = Field(
        ...,
        description="Calendar date of the purchase",
        examples=["2024-01-15"]
    )
    closing_day: int = Field(
        ...,
        ge=1,
        le=31,
        description="Day of month the card's statement closes"
    )
    total_amount: Decimal = Field(
        ...,
        gt=0,
        description="Total purchase amount"
    )
    installments: int = Field(
        default=1,
        ge=1,
        description="Number of monthly installments"
    )
    currency: Currency = Field(default=Currency.ARS)
    is_own_expense: bool = Field(
        default=True,
        description="False when the purchase is owed by someone else"
    )
    borrower_name: str | None = Field(
        default=None,
        description="Who owes the purchase (required when not an own expense)"
    )

    @field_validator('borrower_name')
    @classmethod
    def normalize_borrower(cls, v: str | None) -> str | None:
        return normalize_person_name(v)

    @model_validator(mode='after')
    def check_borrower(self) -> "CreditCardPurchase":
        if self.is_own_expense:
            self.borrower_name = None
        elif not self.borrower_name:
            raise ValueError("borrower_name is required when the purchase is not an own expense")
        return self

    def schedule(self) -> list[InstallmentPlan]:
        return build_installment_schedule(
            self.total_amount,
            self.installments,
            self.purchase_date,
            self.closing_day,
        )

    def first_statement_month(self) -> str:
        return statement_month(self.purchase_date, self.closing_day, 1)

    def to_installment_records(self, expense_id: str | None = None) -> list["CardInstallmentRecord"]:
        """Installment rows to persist for this purchase."""
        return [
            CardInstallmentRecord(
                expense_id=expense_id,
                card_name=self.card_name,
                description=self.description,
                installment_number=plan.installment_number,
                total_installments=self.installments,
                statement_month=plan.statement_month,
                installment_amount=plan.amount,
                currency=self.currency,
                is_paid=plan.is_paid,
                is_own_expense=self.is_own_expense,
                borrower_name=self.borrower_name,
            )
            for plan in self.schedule()
        ]


# =============================================================================
# INSTALLMENT
# =============================================================================

class CardInstallmentRecord(BaseModel):
    """One stored installment, joined with the fields of its purchase."""

    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    expense_id: str | None = None
    card_name: str
    description: str = ""
    installment_number: int = Field(..., ge=1)
    total_installments: int = Field(default=1, ge=1)
    statement_month: str = Field(..., examples=["2024-02"])
    installment_amount: Decimal = Field(..., ge=0)
    currency: Currency = Currency.ARS
    is_paid: bool = False
    paid_date: date | None = None
    is_own_expense: bool = True
    borrower_name: str | None = None

    @field_validator('statement_month')
    @classmethod
    def check_statement_month(cls, v: str) -> str:
        return validate_statement_month(v)

    @field_validator('borrower_name')
    @classmethod
    def normalize_borrower(cls, v: str | None) -> str | None:
        return normalize_person_name(v)
