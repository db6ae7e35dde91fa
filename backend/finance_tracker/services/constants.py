# backend/finance_tracker/services/constants.py
"""
Centralized constants for the Household Finance Tracker services.

Single source of truth for business constants used across the services.
Values that operators may want to tune (fallback exchange rate, cache TTL,
request delay) live in finance_tracker.config instead.

Usage:
    from finance_tracker.services.constants import (
        POSITION_ZERO_TOLERANCE,
        COMPOSITION_PERCENT_PLACES,
    )
"""

from decimal import Decimal


# =============================================================================
# INVESTMENT LOTS
# =============================================================================

# A lot whose quantity falls to or below this after a sell is closed (deleted)
# instead of being kept as a near-zero residual.
POSITION_ZERO_TOLERANCE: Decimal = Decimal("0.0001")


# =============================================================================
# OUTPUT ROUNDING
# =============================================================================

# Decimal places for percentages in composition breakdowns (e.g. 42.7%)
COMPOSITION_PERCENT_PLACES: int = 1

# Decimal places for position / portfolio percentages in responses (e.g. 12.35%)
RESPONSE_PERCENT_PLACES: int = 2


# =============================================================================
# MARKET DATA
# =============================================================================

# Yahoo Finance suffix for local-market (Buenos Aires) listings
LOCAL_MARKET_SUFFIX: str = ".BA"

# Cache key under which the exchange rate quote is stored
FX_CACHE_KEY: str = "fx:blue"

# Circuit breaker settings shared by the price providers
PROVIDER_FAILURE_THRESHOLD: int = 3
PROVIDER_RECOVERY_TIMEOUT_SECONDS: float = 60.0
