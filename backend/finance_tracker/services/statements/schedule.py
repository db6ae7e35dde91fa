# backend/finance_tracker/services/statements/schedule.py
"""
Installment schedule materialization.

When a card purchase is created, the persistence layer stores one row per
installment. This module builds those rows: equal amounts rounded to cents,
with the last installment absorbing the rounding remainder so the rows
always add up to the purchase total.

    100.00 in 3 installments -> 33.33, 33.33, 33.34
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from finance_tracker.services.exceptions import ValidationError
from finance_tracker.services.statements.cycle import statement_month
from finance_tracker.utils.money import ZERO, round_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallmentPlan:
    """
    One scheduled installment of a card purchase.

    Attributes:
        installment_number: 1-based position in the schedule
        statement_month: "YYYY-MM" of the statement that bills it
        amount: Installment amount in the purchase currency
        is_paid: Always False when first materialized
    """

    installment_number: int
    statement_month: str
    amount: Decimal
    is_paid: bool = False


def split_amount(total_amount: Decimal, installment_count: int) -> list[Decimal]:
    """
    Split a total into equal cent-rounded parts, remainder on the last part.

    Raises:
        ValidationError: If installment_count is not positive
    """
    if installment_count < 1:
        raise ValidationError(
            f"installment_count must be at least 1, got {installment_count}",
            field="installment_count",
        )

    regular = round_money(total_amount / installment_count)
    parts = [regular] * (installment_count - 1)
    parts.append(total_amount - sum(parts, ZERO))
    return parts


def build_installment_schedule(
        total_amount: Decimal,
        installment_count: int,
        purchase_date: date | datetime | str,
        closing_day: int,
) -> list[InstallmentPlan]:
    """
    Build the installment rows for a card purchase.

    Args:
        total_amount: Purchase total
        installment_count: Number of installments (>= 1)
        purchase_date: Purchase date
        closing_day: Card's statement closing day

    Returns:
        Exactly installment_count plans, ordered by installment number

    Raises:
        ValidationError: If installment_count is not positive
    """
    amounts = split_amount(total_amount, installment_count)

    plans = [
        InstallmentPlan(
            installment_number=number,
            statement_month=statement_month(purchase_date, closing_day, number),
            amount=amount,
        )
        for number, amount in enumerate(amounts, start=1)
    ]

    logger.debug(
        f"Scheduled {installment_count} installments of {total_amount}: "
        f"{plans[0].statement_month} -> {plans[-1].statement_month}"
    )
    return plans
