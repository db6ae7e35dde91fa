# backend/finance_tracker/schemas/validators.py
"""
Reusable validation functions for Pydantic schemas.

This module provides:
- Asset symbol validation and normalization
- Person name normalization
- Statement month ("YYYY-MM") validation
"""

import re

from finance_tracker.utils.date_utils import YearMonth

# =============================================================================
# CONSTANTS
# =============================================================================

# Symbol: 1-20 chars, alphanumeric plus dots and dashes (BRK.B, BTC-USD)
SYMBOL_PATTERN = re.compile(r'^[A-Z0-9][A-Z0-9.\-]{0,19}$')
SYMBOL_MAX_LENGTH = 20

PERSON_NAME_MAX_LENGTH = 100


# =============================================================================
# SYMBOL VALIDATION
# =============================================================================

def validate_symbol(value: str) -> str:
    """
    Validate and normalize an asset symbol.

    Args:
        value: Raw symbol input

    Returns:
        Normalized symbol (uppercase, trimmed)

    Raises:
        ValueError: If the symbol format is invalid
    """
    if not value:
        raise ValueError("Symbol cannot be empty")

    normalized = value.strip().upper()

    if len(normalized) > SYMBOL_MAX_LENGTH:
        raise ValueError(f"Symbol cannot exceed {SYMBOL_MAX_LENGTH} characters")

    if not SYMBOL_PATTERN.match(normalized):
        raise ValueError(
            f"Invalid symbol format: '{normalized}'. "
            "Symbol must be alphanumeric and may include dots (.) or dashes (-)"
        )

    return normalized


# =============================================================================
# OTHER FIELDS
# =============================================================================

def normalize_person_name(value: str | None) -> str | None:
    """Trim a person name; blank becomes None."""
    if value is None:
        return None
    value = " ".join(value.split())
    if len(value) > PERSON_NAME_MAX_LENGTH:
        raise ValueError(f"Name cannot exceed {PERSON_NAME_MAX_LENGTH} characters")
    return value or None


def validate_statement_month(value: str) -> str:
    """Validate a "YYYY-MM" month and return it in canonical form."""
    try:
        return str(YearMonth.parse(value))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid month '{value}', expected YYYY-MM") from e
