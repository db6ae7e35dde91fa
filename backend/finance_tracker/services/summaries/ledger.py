# backend/finance_tracker/services/summaries/ledger.py
"""
Wallet and ledger arithmetic.

Transfers between the household's own wallets (traspaso_in / traspaso_out)
move balances but are not income or expenses, so monthly summaries skip them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import TYPE_CHECKING

from finance_tracker.services.exceptions import ValidationError
from finance_tracker.services.summaries.types import (
    CurrencyTotals,
    MonthlySummary,
    TransactionType,
)
from finance_tracker.utils.date_utils import YearMonth

if TYPE_CHECKING:
    from finance_tracker.schemas.ledger import SalaryRecord, TransactionRecord, WalletRecord

logger = logging.getLogger(__name__)


def balance_delta(tx: TransactionRecord) -> Decimal:
    """Signed effect of a transaction on its wallet's balance."""
    return tx.amount if tx.type.adds_to_balance else -tx.amount


def apply_to_wallet(wallet: WalletRecord, tx: TransactionRecord) -> WalletRecord:
    """Return the wallet with the transaction's effect applied to its balance."""
    if tx.wallet_id is not None and wallet.id is not None and tx.wallet_id != wallet.id:
        raise ValidationError(f"Transaction for wallet {tx.wallet_id} applied to wallet {wallet.id}")
    return wallet.model_copy(update={"balance": wallet.balance + balance_delta(tx)})


def monthly_summary(
        transactions: Iterable[TransactionRecord],
        month: YearMonth | str,
) -> MonthlySummary:
    """
    Income and expenses per currency for the transactions dated in month.

    Args:
        transactions: Ledger entries (any months; others are ignored)
        month: YearMonth or "YYYY-MM"
    """
    if isinstance(month, str):
        month = YearMonth.parse(month)

    income = CurrencyTotals()
    expenses = CurrencyTotals()
    count = 0
    for tx in transactions:
        if not month.contains(tx.date) or tx.type.is_transfer:
            continue
        count += 1
        if tx.type == TransactionType.INCOME:
            income.add(tx.currency, tx.amount)
        else:
            expenses.add(tx.currency, tx.amount)

    logger.debug(f"Monthly summary {month}: {count} transactions")
    return MonthlySummary(
        month=str(month),
        income=income,
        expenses=expenses,
        transaction_count=count,
    )


def wallet_totals(wallets: Iterable[WalletRecord]) -> CurrencyTotals:
    totals = CurrencyTotals()
    for wallet in wallets:
        totals.add(wallet.currency, wallet.balance)
    return totals


def salary_income(record: SalaryRecord) -> Decimal:
    """Total salary income for the month: net pay plus bonus."""
    return record.net_amount + record.bonus
