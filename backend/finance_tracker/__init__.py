"""Household Finance Tracker: statement-cycle and portfolio valuation core."""

__version__ = "0.1.0"
