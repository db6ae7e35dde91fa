# backend/finance_tracker/services/summaries/types.py
"""
Result types for the household summaries.

Amounts are kept per currency; ARS and USD are never added together.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from finance_tracker.services.platforms import Currency
from finance_tracker.utils.money import ZERO


class TransactionType(str, Enum):
    """Ledger entry kinds (values are the stored tags)."""
    INCOME = "ingreso"
    EXPENSE = "egreso"
    TRANSFER_IN = "traspaso_in"
    TRANSFER_OUT = "traspaso_out"

    @property
    def is_transfer(self) -> bool:
        return self in (TransactionType.TRANSFER_IN, TransactionType.TRANSFER_OUT)

    @property
    def adds_to_balance(self) -> bool:
        return self in (TransactionType.INCOME, TransactionType.TRANSFER_IN)


@dataclass
class CurrencyTotals:
    """Running totals kept separately per currency."""

    ars: Decimal = ZERO
    usd: Decimal = ZERO

    def add(self, currency: Currency, amount: Decimal) -> None:
        if currency == Currency.USD:
            self.usd += amount
        else:
            self.ars += amount

    def get(self, currency: Currency) -> Decimal:
        return self.usd if currency == Currency.USD else self.ars

    def __sub__(self, other: CurrencyTotals) -> CurrencyTotals:
        return CurrencyTotals(ars=self.ars - other.ars, usd=self.usd - other.usd)


@dataclass(frozen=True)
class MonthlySummary:
    month: str
    income: CurrencyTotals
    expenses: CurrencyTotals
    transaction_count: int

    @property
    def net(self) -> CurrencyTotals:
        return self.income - self.expenses


@dataclass(frozen=True)
class StatementTotal:
    """What one card bills in one currency for one statement month."""

    card_name: str
    currency: Currency
    statement_month: str
    total: Decimal
    paid: Decimal
    pending: Decimal
    installment_count: int


class DebtSource(str, Enum):
    CARD_INSTALLMENT = "installment"
    MANUAL = "manual"


@dataclass(frozen=True)
class DebtItem:
    """
    One amount someone owes the household.

    Attributes:
        source: Card installment or manual debt
        id: Row identifier of the installment or manual debt
        description: Purchase or debt description
        amount: Amount of this item
        currency: Currency of the amount
        is_paid: Whether it has been settled
        statement_month: Statement month (card installments only)
        installment_number: 1-based installment index (card installments only)
        total_installments: Installment count of the purchase (card installments only)
    """

    source: DebtSource
    id: str | None
    description: str
    amount: Decimal
    currency: Currency
    is_paid: bool
    statement_month: str | None = None
    installment_number: int | None = None
    total_installments: int | None = None


@dataclass
class PersonDebt:
    person_name: str
    items: list[DebtItem] = field(default_factory=list)
    pending: CurrencyTotals = field(default_factory=CurrencyTotals)
    paid: CurrencyTotals = field(default_factory=CurrencyTotals)

    def add(self, item: DebtItem) -> None:
        self.items.append(item)
        (self.paid if item.is_paid else self.pending).add(item.currency, item.amount)

    @property
    def has_pending(self) -> bool:
        return self.pending.ars > ZERO or self.pending.usd > ZERO


@dataclass(frozen=True)
class ApartmentShare:
    """
    One member's part of the shared apartment expenses.

    balance > 0 means the member paid more than their share.
    """

    person_name: str
    salary: Decimal
    share_percent: Decimal
    owes: Decimal
    paid: Decimal
    balance: Decimal


@dataclass(frozen=True)
class ApartmentSummary:
    total_expenses: Decimal
    total_salaries: Decimal
    salary_weighted: bool
    shares: list[ApartmentShare]
