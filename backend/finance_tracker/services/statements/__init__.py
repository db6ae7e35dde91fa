# backend/finance_tracker/services/statements/__init__.py
"""
Credit-card statement package.

Architecture:
    statements/
    ├── __init__.py      # This file - package exports
    ├── cycle.py         # statement_month / statement_period
    └── schedule.py      # Installment rows for a new purchase

Usage:
    from finance_tracker.services.statements import statement_month

    statement_month("2024-03-20", closing_day=15, installment_index=1)  # "2024-04"
"""

from finance_tracker.services.statements.cycle import statement_month, statement_period
from finance_tracker.services.statements.schedule import (
    InstallmentPlan,
    build_installment_schedule,
    split_amount,
)

__all__ = [
    "statement_month",
    "statement_period",
    "InstallmentPlan",
    "build_installment_schedule",
    "split_amount",
]
