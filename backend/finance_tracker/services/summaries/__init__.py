# backend/finance_tracker/services/summaries/__init__.py
"""
Household summaries: ledger totals, card statements, debts, apartment split.

Architecture:
    summaries/
    ├── types.py        # TransactionType and result data classes
    ├── ledger.py       # Wallet balances, monthly income/expenses, salary
    ├── cards.py        # Statement totals per card and currency
    ├── debts.py        # Debts by person, settlement transactions
    └── apartment.py    # Shared apartment expense split
"""

from finance_tracker.services.summaries.apartment import apartment_shares
from finance_tracker.services.summaries.cards import statement_totals
from finance_tracker.services.summaries.debts import (
    SETTLEMENT_DESCRIPTION,
    debts_by_person,
    settlement_transaction,
)
from finance_tracker.services.summaries.ledger import (
    apply_to_wallet,
    balance_delta,
    monthly_summary,
    salary_income,
    wallet_totals,
)
from finance_tracker.services.summaries.types import (
    ApartmentShare,
    ApartmentSummary,
    CurrencyTotals,
    DebtItem,
    DebtSource,
    MonthlySummary,
    PersonDebt,
    StatementTotal,
    TransactionType,
)

__all__ = [
    # Ledger
    "TransactionType",
    "balance_delta",
    "apply_to_wallet",
    "monthly_summary",
    "wallet_totals",
    "salary_income",
    # Cards
    "statement_totals",
    # Debts
    "debts_by_person",
    "settlement_transaction",
    "SETTLEMENT_DESCRIPTION",
    # Apartment
    "apartment_shares",
    # Types
    "CurrencyTotals",
    "MonthlySummary",
    "StatementTotal",
    "DebtItem",
    "DebtSource",
    "PersonDebt",
    "ApartmentShare",
    "ApartmentSummary",
]
