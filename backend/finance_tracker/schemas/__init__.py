# backend/finance_tracker/schemas/__init__.py
"""
Pydantic schemas for stored records and valuation output.

This package contains all Pydantic schemas organized by domain:
- investments: Investment lots and trade requests
- credit_cards: Card purchases and installments
- ledger: Wallets, transactions, manual debts, salaries
- apartment: Shared apartment members, salaries and expenses
- valuation: Portfolio valuation output (rounded for display)
- validators: Reusable validation functions (symbol, person name, month)

Usage:
    from finance_tracker.schemas import InvestmentRecord, TradeRequest
    from finance_tracker.schemas import CreditCardPurchase
    from finance_tracker.schemas import PortfolioValuationResponse
"""

from finance_tracker.schemas.apartment import (
    ApartmentExpense,
    ApartmentMember,
    ApartmentSalary,
)
from finance_tracker.schemas.credit_cards import (
    CardInstallmentRecord,
    CreditCardPurchase,
)
from finance_tracker.schemas.investments import InvestmentRecord, TradeRequest
from finance_tracker.schemas.ledger import (
    ManualDebtRecord,
    SalaryRecord,
    TransactionRecord,
    WalletRecord,
)
from finance_tracker.schemas.valuation import (
    AssetWeightResponse,
    CompositionSliceResponse,
    PortfolioValuationResponse,
    PositionValuationResponse,
)

__all__ = [
    # Investments
    "InvestmentRecord",
    "TradeRequest",
    # Credit cards
    "CreditCardPurchase",
    "CardInstallmentRecord",
    # Ledger
    "WalletRecord",
    "TransactionRecord",
    "ManualDebtRecord",
    "SalaryRecord",
    # Apartment
    "ApartmentMember",
    "ApartmentSalary",
    "ApartmentExpense",
    # Valuation
    "PortfolioValuationResponse",
    "PositionValuationResponse",
    "CompositionSliceResponse",
    "AssetWeightResponse",
]
