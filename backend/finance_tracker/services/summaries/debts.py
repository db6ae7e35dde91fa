# backend/finance_tracker/services/summaries/debts.py
"""
Money other people owe the household.

Debts come from two places:
- Card installments of purchases made for someone else
  (is_own_expense=False, borrower_name set)
- Manual debts

Settling a debt into a wallet records an income transaction described as
"Pago deuda: <person> - <description>".
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from typing import TYPE_CHECKING

from finance_tracker.services.exceptions import ValidationError
from finance_tracker.services.summaries.types import (
    DebtItem,
    DebtSource,
    PersonDebt,
    TransactionType,
)

if TYPE_CHECKING:
    from finance_tracker.schemas.credit_cards import CardInstallmentRecord
    from finance_tracker.schemas.ledger import ManualDebtRecord, TransactionRecord

logger = logging.getLogger(__name__)

SETTLEMENT_DESCRIPTION = "Pago deuda: {person} - {description}"


def debts_by_person(
        card_installments: Iterable[CardInstallmentRecord],
        manual_debts: Iterable[ManualDebtRecord],
) -> list[PersonDebt]:
    """
    Group debts by the person who owes them.

    Own-expense installments and installments without a borrower are
    skipped. People are ordered by pending amount (ARS + USD nominal),
    highest first.
    """
    people: dict[str, PersonDebt] = {}

    for inst in card_installments:
        if inst.is_own_expense:
            continue
        if not inst.borrower_name:
            logger.debug(f"Skipping installment {inst.id} without borrower")
            continue
        people.setdefault(inst.borrower_name, PersonDebt(inst.borrower_name)).add(DebtItem(
            source=DebtSource.CARD_INSTALLMENT,
            id=inst.id,
            description=inst.description,
            amount=inst.installment_amount,
            currency=inst.currency,
            is_paid=inst.is_paid,
            statement_month=inst.statement_month,
            installment_number=inst.installment_number,
            total_installments=inst.total_installments,
        ))

    for debt in manual_debts:
        people.setdefault(debt.debtor_name, PersonDebt(debt.debtor_name)).add(DebtItem(
            source=DebtSource.MANUAL,
            id=debt.id,
            description=debt.description,
            amount=debt.amount,
            currency=debt.currency,
            is_paid=debt.is_paid,
        ))

    return sorted(
        people.values(),
        key=lambda p: p.pending.ars + p.pending.usd,
        reverse=True,
    )


def settlement_transaction(
        person_name: str,
        item: DebtItem,
        wallet_id: str,
        on_date: date | None = None,
) -> TransactionRecord:
    """
    Income entry to record when a debt item is paid into a wallet.

    Raises:
        ValidationError: If the item is already paid
    """
    from finance_tracker.schemas.ledger import TransactionRecord

    if item.is_paid:
        raise ValidationError(f"Debt '{item.description}' of {person_name} is already paid")

    return TransactionRecord(
        wallet_id=wallet_id,
        date=on_date or date.today(),
        description=SETTLEMENT_DESCRIPTION.format(
            person=person_name, description=item.description
        ),
        amount=item.amount,
        currency=item.currency,
        type=TransactionType.INCOME,
    )
