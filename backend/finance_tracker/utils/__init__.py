# backend/finance_tracker/utils/__init__.py
"""
Utility modules for the Household Finance Tracker.

This package contains cross-cutting utilities used throughout the application:
- logging: Logging configuration and setup
- date_utils: Noon-pinned date parsing and the YearMonth value type
- money: Decimal coercion and boundary rounding

Usage:
    from finance_tracker.utils import setup_logging, get_logger
    from finance_tracker.utils import YearMonth, parse_calendar_date
    from finance_tracker.utils import round_money, round_percent
"""

from finance_tracker.utils.date_utils import YearMonth, parse_calendar_date
from finance_tracker.utils.logging import setup_logging, get_logger
from finance_tracker.utils.money import (
    to_decimal,
    round_money,
    round_percent,
    percent_of,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    # Dates
    "YearMonth",
    "parse_calendar_date",
    # Money
    "to_decimal",
    "round_money",
    "round_percent",
    "percent_of",
]
