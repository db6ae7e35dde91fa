# backend/finance_tracker/services/statements/cycle.py
"""
Statement-cycle calculator.

Maps a credit-card purchase to the monthly statement each of its
installments is billed on:

    1. Start from the purchase's own month.
    2. A purchase made AFTER the card's closing day missed that month's
       statement, so installment 1 moves to the next month. A purchase ON
       the closing day is still included in the closing cycle.
    3. Installment N lands N - 1 months after installment 1.

Example (closing day 15):
    2024-03-10, installment 1 -> 2024-03
    2024-03-20, installment 1 -> 2024-04
    2024-12-20, installment 3 -> 2025-03

The calculator assumes well-formed input: closing days outside 1-31 and
installment indexes below 1 are the caller's responsibility (see
CreditCardPurchase for validation at construction time). Malformed date
strings raise ValueError from parsing.
"""

from datetime import date, datetime

from finance_tracker.utils.date_utils import YearMonth, parse_calendar_date


def statement_period(
        purchase_date: date | datetime | str,
        closing_day: int,
        installment_index: int,
) -> YearMonth:
    """
    Year-month of the statement that bills the given installment.

    Args:
        purchase_date: Purchase date (date, datetime or "YYYY-MM-DD")
        closing_day: Day of month the card's statement closes (1-31)
        installment_index: 1-based installment number

    Returns:
        The statement YearMonth
    """
    purchase = parse_calendar_date(purchase_date)
    first_statement = YearMonth.from_date(purchase)

    if purchase.day > closing_day:
        first_statement = first_statement.add_months(1)

    return first_statement.add_months(installment_index - 1)


def statement_month(
        purchase_date: date | datetime | str,
        closing_day: int,
        installment_index: int,
) -> str:
    """
    Canonical "YYYY-MM" of the statement that bills the given installment.

    Example:
        >>> statement_month("2024-12-20", 15, 3)
        '2025-03'
    """
    return str(statement_period(purchase_date, closing_day, installment_index))
