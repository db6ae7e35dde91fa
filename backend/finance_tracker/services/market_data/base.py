# backend/finance_tracker/services/market_data/base.py
"""
Abstract interface for price providers.

This module defines the contract every quote source follows (CoinGecko,
Yahoo Finance, Finnhub, ...). Using an abstract base class allows for:
- Provider fallback chains per platform
- Mock implementations for testing
- Consistent retry behavior across all providers

Retry Behavior:
    RetryingProvider._execute_with_retry applies exponential backoff to
    transient failures (ProviderUnavailableError, RateLimitError). A missing
    symbol (TickerNotFoundError) is permanent and never retried.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from finance_tracker.services.exceptions import (
    ProviderUnavailableError,
    RateLimitError,
    TickerNotFoundError,
)
from finance_tracker.services.valuation.types import PriceQuote

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class QuoteBatch:
    """
    Result of fetching quotes for several symbols.

    Tracks which lookups succeeded and which failed, allowing partial success.

    Attributes:
        successful: Symbol -> quote
        failed: Symbol -> the exception that occurred
    """

    successful: dict[str, PriceQuote] = field(default_factory=dict)
    failed: dict[str, Exception] = field(default_factory=dict)


# =============================================================================
# RETRY BASE
# =============================================================================

class RetryingProvider(ABC):
    """
    Shared retry configuration for external data sources.

    Subclasses (or tests, per instance) can override:
        - MAX_RETRY_ATTEMPTS: Total attempts (default: 3)
        - RETRY_MIN_WAIT / RETRY_MAX_WAIT: Backoff bounds in seconds
        - RETRY_MULTIPLIER: Exponential multiplier
    """

    MAX_RETRY_ATTEMPTS: int = 3
    RETRY_MIN_WAIT: int = 1
    RETRY_MAX_WAIT: int = 8
    RETRY_MULTIPLIER: int = 1

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier used in logs, errors and breaker names."""

    def _execute_with_retry(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """
        Execute func, retrying ProviderUnavailableError and RateLimitError
        with exponential backoff. The last exception is re-raised.
        """

        @retry(
            stop=stop_after_attempt(self.MAX_RETRY_ATTEMPTS),
            wait=wait_exponential(
                multiplier=self.RETRY_MULTIPLIER,
                min=self.RETRY_MIN_WAIT,
                max=self.RETRY_MAX_WAIT,
            ),
            retry=retry_if_exception_type((ProviderUnavailableError, RateLimitError)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        def _inner() -> T:
            return func(*args, **kwargs)

        return _inner()


# =============================================================================
# QUOTE PROVIDER
# =============================================================================

class QuoteProvider(RetryingProvider):
    """
    A source of current prices with 24h change.

    Providers that can price many symbols in one request set
    supports_batch = True and override get_quotes(); the market data service
    then skips the per-symbol request delay for them.
    """

    supports_batch: bool = False

    @abstractmethod
    def get_quote(self, symbol: str) -> PriceQuote:
        """
        Fetch the current quote for one symbol.

        Raises:
            TickerNotFoundError: No usable price for the symbol
            ProviderUnavailableError: Network or API error (retryable)
            RateLimitError: Rate limit exceeded (retryable)
        """

    def get_quotes(self, symbols: list[str]) -> QuoteBatch:
        """
        Fetch quotes for several symbols.

        Default implementation calls get_quote() for each symbol and records
        failures instead of raising.
        """
        batch = QuoteBatch()
        for symbol in symbols:
            try:
                batch.successful[symbol] = self.get_quote(symbol)
            except (TickerNotFoundError, ProviderUnavailableError, RateLimitError) as e:
                logger.warning(f"{self.name}: no quote for {symbol}: {e}")
                batch.failed[symbol] = e
        return batch
