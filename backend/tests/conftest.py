# backend/tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Position and snapshot factories
- Mock quote / exchange rate providers
- A controllable clock for cache and circuit breaker tests
"""

from decimal import Decimal

import pytest

from finance_tracker.services.exceptions import (
    FXProviderError,
    ProviderUnavailableError,
    TickerNotFoundError,
)
from finance_tracker.services.market_data.base import QuoteBatch, QuoteProvider
from finance_tracker.services.market_data.dolar_api import DolarApiProvider
from finance_tracker.services.platforms import Currency, Platform, price_key
from finance_tracker.services.valuation.types import (
    ExchangeRateQuote,
    InvestmentPosition,
    MarketSnapshot,
    PriceQuote,
)


# =============================================================================
# CLOCK
# =============================================================================

class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# MOCK PROVIDERS
# =============================================================================

class MockQuoteProvider(QuoteProvider):
    """
    Mock implementation of QuoteProvider for testing.

    Allows configuring quotes for specific symbols and simulating errors.
    """

    def __init__(self, name: str = "mock", supports_batch: bool = False) -> None:
        self._name = name
        self.supports_batch = supports_batch
        self._quotes: dict[str, PriceQuote] = {}
        self._errors: dict[str, Exception] = {}
        self._available = True
        self.calls: list[str] = []
        self.batch_calls: list[list[str]] = []

    @property
    def name(self) -> str:
        return self._name

    def add_quote(self, symbol: str, price: str, change: str = "0",
                  currency: Currency = Currency.USD) -> None:
        self._quotes[symbol] = PriceQuote(
            price=Decimal(price),
            change_24h_percent=Decimal(change),
            currency=currency,
            source=self._name,
        )

    def add_error(self, symbol: str, error: Exception) -> None:
        self._errors[symbol] = error

    def set_available(self, available: bool) -> None:
        self._available = available

    def get_quote(self, symbol: str) -> PriceQuote:
        self.calls.append(symbol)
        if not self._available:
            raise ProviderUnavailableError(self._name, "mock outage")
        if symbol in self._errors:
            raise self._errors[symbol]
        if symbol not in self._quotes:
            raise TickerNotFoundError(symbol=symbol, provider=self._name)
        return self._quotes[symbol]

    def get_quotes(self, symbols: list[str]) -> QuoteBatch:
        self.batch_calls.append(list(symbols))
        if not self._available:
            raise ProviderUnavailableError(self._name, "mock outage")
        batch = QuoteBatch()
        for symbol in symbols:
            if symbol in self._quotes:
                batch.successful[symbol] = self._quotes[symbol]
            else:
                batch.failed[symbol] = TickerNotFoundError(symbol=symbol, provider=self._name)
        return batch


class MockFXProvider(DolarApiProvider):
    """Exchange rate provider returning a fixed quote (or failing)."""

    def __init__(self, buy: str = "1180", sell: str = "1220") -> None:
        self.quote: ExchangeRateQuote | None = ExchangeRateQuote(
            buy=Decimal(buy), sell=Decimal(sell)
        )
        self.calls = 0

    @property
    def name(self) -> str:
        return "mock-fx"

    def get_rate(self) -> ExchangeRateQuote:
        self.calls += 1
        if self.quote is None:
            raise FXProviderError(self.name, "mock outage")
        return self.quote


@pytest.fixture
def mock_provider() -> MockQuoteProvider:
    return MockQuoteProvider()


@pytest.fixture
def mock_fx() -> MockFXProvider:
    return MockFXProvider()


# =============================================================================
# DATA FACTORIES
# =============================================================================

def make_position(
        platform: Platform = Platform.FOREIGN_EQUITY,
        symbol: str = "X",
        quantity: str = "10",
        avg_price: str = "100",
        total_invested: str | None = None,
        currency: Currency = Currency.USD,
) -> InvestmentPosition:
    """Build a lot; total_invested defaults to quantity × avg_price."""
    qty = Decimal(quantity)
    avg = Decimal(avg_price)
    return InvestmentPosition(
        platform=platform,
        symbol=symbol,
        quantity=qty,
        avg_price=avg,
        total_invested=Decimal(total_invested) if total_invested is not None else qty * avg,
        currency=currency,
    )


def make_snapshot(
        prices: dict[tuple[Platform, str], tuple[str, str]] | None = None,
        exchange_rate: str | None = "1000",
) -> MarketSnapshot:
    """Build a snapshot from {(platform, symbol): (price, change_pct)}."""
    quotes = {
        price_key(platform, symbol): PriceQuote(price=Decimal(p), change_24h_percent=Decimal(c))
        for (platform, symbol), (p, c) in (prices or {}).items()
    }
    return MarketSnapshot(
        prices_by_key=quotes,
        exchange_rate=Decimal(exchange_rate) if exchange_rate is not None else None,
    )


@pytest.fixture
def position_factory():
    return make_position


@pytest.fixture
def snapshot_factory():
    return make_snapshot
