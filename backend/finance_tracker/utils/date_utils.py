# backend/finance_tracker/utils/date_utils.py
"""
Date utility functions for the Household Finance Tracker.

Centralizes calendar handling shared by the statement-cycle calculator,
the ledger summaries and the salary / apartment records:
- Parsing collaborator dates ("YYYY-MM-DD") pinned to noon
- YearMonth, the "YYYY-MM" value used for statement and summary months

Usage:
    from finance_tracker.utils.date_utils import YearMonth, parse_calendar_date

    purchase = parse_calendar_date("2024-03-20")
    month = YearMonth.from_date(purchase).add_months(1)
    str(month)  # "2024-04"
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

# Date-only strings are anchored to midday so no timezone offset can move them
# to the neighbouring calendar day.
NOON_SUFFIX = "T12:00:00"


def parse_calendar_date(value: date | datetime | str) -> date:
    """
    Normalize a collaborator-supplied date to a calendar date.

    Args:
        value: A date, a datetime, or an ISO "YYYY-MM-DD" string

    Returns:
        The calendar date

    Raises:
        ValueError: If the string is not a valid ISO date
        TypeError: If value is of an unsupported type

    Example:
        >>> parse_calendar_date("2024-12-20")
        datetime.date(2024, 12, 20)
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value.strip() + NOON_SUFFIX, "%Y-%m-%dT%H:%M:%S").date()
    raise TypeError(f"Expected date, datetime or ISO string, got {type(value).__name__}")


@dataclass(frozen=True, order=True)
class YearMonth:
    """
    A calendar year-month (month is 1-based).

    Ordering follows the calendar, and str() yields the canonical "YYYY-MM".
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be between 1 and 12, got {self.month}")

    @classmethod
    def from_date(cls, d: date) -> YearMonth:
        return cls(d.year, d.month)

    @classmethod
    def parse(cls, value: str) -> YearMonth:
        """
        Parse "YYYY-MM" (a trailing "-DD", as stored for month rows, is ignored).

        Raises:
            ValueError: If the value is not a year-month
        """
        parts = value.strip().split("-")
        if len(parts) not in (2, 3) or len(parts[0]) != 4 or len(parts[1]) != 2:
            raise ValueError(f"Invalid year-month: '{value}', expected YYYY-MM")
        return cls(int(parts[0]), int(parts[1]))

    def add_months(self, months: int) -> YearMonth:
        """Shift by a number of months, carrying overflow into the year."""
        index = self.year * 12 + (self.month - 1) + months
        year, month0 = divmod(index, 12)
        return YearMonth(year, month0 + 1)

    def contains(self, d: date) -> bool:
        """True if the date falls inside this month."""
        return d.year == self.year and d.month == self.month

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
