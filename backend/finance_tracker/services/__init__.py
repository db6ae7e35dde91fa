# backend/finance_tracker/services/__init__.py
"""
Service layer for business logic.

Services have no knowledge of storage or HTTP: they take validated records
(finance_tracker.schemas) or internal data classes, and raise the
domain-specific exceptions in services/exceptions.py.

Usage:
    from finance_tracker.services import statement_month
    from finance_tracker.services import ValuationEngine, MarketDataService
    from finance_tracker.services import apply_trade
    from finance_tracker.services import (
        InsufficientHoldingsError,
        PositionNotFoundError,
        MarketDataError,
    )

Architecture:
    services/
    ├── __init__.py              # This file - main exports
    ├── exceptions.py            # Domain exceptions
    ├── constants.py             # Business constants
    ├── circuit_breaker.py       # Circuit breaker for external APIs
    ├── platforms.py             # Platform table, currencies, price keys
    ├── positions.py             # Lot mutation on buy/sell
    ├── statements/              # Statement cycle and installment schedule
    ├── valuation/               # Portfolio valuation engine
    ├── market_data/             # Quote providers and snapshot fetching
    └── summaries/               # Ledger, cards, debts, apartment
"""

from finance_tracker.services.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerOpen,
    CircuitState,
)
from finance_tracker.services.exceptions import (
    CurrencyMismatchError,
    FXProviderError,
    FXRateError,
    InsufficientHoldingsError,
    MarketDataError,
    NotFoundError,
    PositionNotFoundError,
    ProviderUnavailableError,
    RateLimitError,
    ServiceError,
    TickerNotFoundError,
    ValidationError,
)
from finance_tracker.services.market_data import MarketDataService, RatesCache
from finance_tracker.services.platforms import (
    PLATFORM_SPECS,
    Currency,
    Platform,
    PlatformSpec,
    price_key,
)
from finance_tracker.services.positions import (
    PositionAction,
    PositionChange,
    Trade,
    TradeType,
    apply_trade,
)
from finance_tracker.services.statements import (
    build_installment_schedule,
    statement_month,
    statement_period,
)
from finance_tracker.services.summaries import (
    apartment_shares,
    balance_delta,
    debts_by_person,
    monthly_summary,
    salary_income,
    settlement_transaction,
    statement_totals,
    wallet_totals,
)
from finance_tracker.services.valuation import (
    InvestmentPosition,
    MarketSnapshot,
    PortfolioValuation,
    PriceQuote,
    ValuationEngine,
    valuate,
)

__all__ = [
    # Statements
    "statement_month",
    "statement_period",
    "build_installment_schedule",
    # Valuation
    "ValuationEngine",
    "valuate",
    "InvestmentPosition",
    "PriceQuote",
    "MarketSnapshot",
    "PortfolioValuation",
    # Market data
    "MarketDataService",
    "RatesCache",
    # Positions
    "apply_trade",
    "Trade",
    "TradeType",
    "PositionAction",
    "PositionChange",
    # Platforms
    "Platform",
    "PlatformSpec",
    "PLATFORM_SPECS",
    "Currency",
    "price_key",
    # Summaries
    "balance_delta",
    "monthly_summary",
    "wallet_totals",
    "salary_income",
    "statement_totals",
    "debts_by_person",
    "settlement_transaction",
    "apartment_shares",
    # Circuit breaker
    "CircuitBreaker",
    "CircuitBreakerOpen",
    "CircuitState",
    # Exceptions
    "ServiceError",
    "ValidationError",
    "InsufficientHoldingsError",
    "CurrencyMismatchError",
    "NotFoundError",
    "PositionNotFoundError",
    "MarketDataError",
    "ProviderUnavailableError",
    "TickerNotFoundError",
    "RateLimitError",
    "FXRateError",
    "FXProviderError",
]
