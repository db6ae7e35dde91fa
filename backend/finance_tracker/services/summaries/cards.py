# backend/finance_tracker/services/summaries/cards.py
"""
Credit card statement totals.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from finance_tracker.services.platforms import Currency
from finance_tracker.services.summaries.types import StatementTotal
from finance_tracker.utils.date_utils import YearMonth
from finance_tracker.utils.money import ZERO

if TYPE_CHECKING:
    from finance_tracker.schemas.credit_cards import CardInstallmentRecord


def statement_totals(
        installments: Iterable[CardInstallmentRecord],
        month: YearMonth | str,
) -> list[StatementTotal]:
    """
    What each card bills in the given statement month, per currency.

    Installments of other months are ignored. Results are ordered by card
    name, then currency.
    """
    month_key = str(YearMonth.parse(month)) if isinstance(month, str) else str(month)

    grouped: dict[tuple[str, Currency], list[CardInstallmentRecord]] = {}
    for inst in installments:
        if inst.statement_month != month_key:
            continue
        grouped.setdefault((inst.card_name, inst.currency), []).append(inst)

    totals = []
    for (card_name, currency), items in sorted(grouped.items(), key=lambda kv: (kv[0][0], kv[0][1].value)):
        paid = sum((i.installment_amount for i in items if i.is_paid), ZERO)
        pending = sum((i.installment_amount for i in items if not i.is_paid), ZERO)
        totals.append(StatementTotal(
            card_name=card_name,
            currency=currency,
            statement_month=month_key,
            total=paid + pending,
            paid=paid,
            pending=pending,
            installment_count=len(items),
        ))
    return totals
