# backend/finance_tracker/services/exceptions.py
"""
Service layer exceptions.

These exceptions represent domain-specific errors and contain NO presentation
knowledge. The calling layer (UI / orchestration) decides how to show them.

Missing market data is NOT an error: the valuation engine falls back to cost
basis and to the configured exchange rate. Exceptions here cover rejected
domain operations and provider failures inside the market data package.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    │   ├── InsufficientHoldingsError
    │   └── CurrencyMismatchError
    ├── NotFoundError
    │   └── PositionNotFoundError
    ├── MarketDataError
    │   ├── ProviderUnavailableError
    │   ├── TickerNotFoundError
    │   └── RateLimitError
    └── FXRateError
        └── FXProviderError

    CircuitBreakerOpen (from circuit_breaker module)
        - Raised when a provider's circuit breaker is blocking requests
"""

from decimal import Decimal


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ServiceError):
    """
    Raised when a domain operation receives values it must reject.

    This is for programmatic validation (non-positive quantities, zero
    installments, ...), NOT for structural validation of collaborator rows,
    which is handled by Pydantic.

    Attributes:
        field: The field that failed validation (optional)
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class InsufficientHoldingsError(ValidationError):
    """
    Raised when a sell would take a position's quantity below zero.

    Attributes:
        symbol: Asset symbol being sold
        held: Quantity currently held
        requested: Quantity the sell asked for
    """

    def __init__(self, symbol: str, held: Decimal, requested: Decimal) -> None:
        self.symbol = symbol
        self.held = held
        self.requested = requested
        super().__init__(
            f"Cannot sell {requested} {symbol}: only {held} held",
            field="quantity",
        )


class CurrencyMismatchError(ValidationError):
    """Raised when a buy is recorded in a currency different from the lot's."""

    def __init__(self, symbol: str, lot_currency: str, trade_currency: str) -> None:
        self.symbol = symbol
        self.lot_currency = lot_currency
        self.trade_currency = trade_currency
        super().__init__(
            f"{symbol} is held in {lot_currency}, cannot add a {trade_currency} buy",
            field="currency",
        )


# =============================================================================
# NOT FOUND ERRORS
# =============================================================================


class NotFoundError(ServiceError):
    """
    Base exception for resource not found errors.

    Attributes:
        resource_type: Type of resource (e.g., "Position")
        resource_id: Identifier of the resource
    """

    def __init__(
            self,
            message: str,
            resource_type: str | None = None,
            resource_id: int | str | None = None,
    ) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(message)


class PositionNotFoundError(NotFoundError):
    """
    Raised when selling an asset that has no open lot on the platform.

    Attributes:
        platform: Platform tag of the requested lot
        symbol: Asset symbol of the requested lot
    """

    def __init__(self, platform: str, symbol: str) -> None:
        self.platform = platform
        self.symbol = symbol
        super().__init__(
            f"No open position for {symbol} on '{platform}' to sell",
            resource_type="Position",
            resource_id=f"{platform}:{symbol}",
        )


# =============================================================================
# MARKET DATA PROVIDER ERRORS
# =============================================================================


class MarketDataError(ServiceError):
    """
    Base exception for market data provider failures.

    Attributes:
        provider: Name of the provider that failed
    """

    def __init__(self, message: str, provider: str | None = None) -> None:
        self.provider = provider
        super().__init__(message)


class ProviderUnavailableError(MarketDataError):
    """
    Raised when a provider is temporarily unavailable.

    Examples: network timeout, 5xx responses, malformed payloads.
    This is a retryable error.
    """

    def __init__(self, provider: str, reason: str) -> None:
        message = f"Provider '{provider}' is unavailable: {reason}"
        super().__init__(message, provider=provider)
        self.reason = reason


class TickerNotFoundError(MarketDataError):
    """
    Raised when a provider has no usable quote for a symbol.

    This is NOT a retryable error.
    """

    def __init__(self, symbol: str, provider: str) -> None:
        super().__init__(f"Symbol '{symbol}' not found by {provider}", provider=provider)
        self.symbol = symbol


class RateLimitError(MarketDataError):
    """
    Raised when the provider's rate limit has been exceeded.

    This is a retryable error (with backoff).

    Attributes:
        retry_after: Seconds to wait before retrying (if provided by API)
    """

    def __init__(self, provider: str, retry_after: int | None = None) -> None:
        message = f"Rate limit exceeded for provider '{provider}'"
        if retry_after:
            message += f" (retry after {retry_after}s)"
        super().__init__(message, provider=provider)
        self.retry_after = retry_after


# =============================================================================
# FX RATE ERRORS
# =============================================================================


class FXRateError(ServiceError):
    """Base exception for exchange rate errors."""
    pass


class FXProviderError(FXRateError):
    """
    Raised when the exchange rate provider fails or returns unusable data.

    Attributes:
        provider: Name of the FX data provider
        reason: Specific reason for failure
    """

    def __init__(self, provider: str, reason: str) -> None:
        self.provider = provider
        self.reason = reason
        super().__init__(f"FX provider '{provider}' error: {reason}")


# =============================================================================
# CIRCUIT BREAKER (re-exported for convenience)
# =============================================================================

from finance_tracker.services.circuit_breaker import CircuitBreakerOpen  # noqa: E402

__all__ = [
    # Base
    "ServiceError",
    # Validation
    "ValidationError",
    "InsufficientHoldingsError",
    "CurrencyMismatchError",
    # Not Found
    "NotFoundError",
    "PositionNotFoundError",
    # Market Data
    "MarketDataError",
    "ProviderUnavailableError",
    "TickerNotFoundError",
    "RateLimitError",
    # FX Rate
    "FXRateError",
    "FXProviderError",
    # Circuit Breaker
    "CircuitBreakerOpen",
]
