# backend/finance_tracker/services/valuation/types.py
"""
Internal data types for the Portfolio Valuation Engine.

These dataclasses are used internally by the engine and by the market data
package. They are NOT Pydantic schemas: rows coming from the persistence
layer are validated by finance_tracker/schemas/investments.py and output is
serialized by finance_tracker/schemas/valuation.py.

Design Principles:
- Immutable value objects (frozen=True) for inputs
- Decimal for ALL financial values (never float)
- Full precision inside; rounding only at output boundaries
- Missing market data is represented explicitly (flags), never as errors

Type Hierarchy:
    InvestmentPosition   - Accumulated lot for one platform+symbol
    PriceQuote           - Market price + 24h change for one price key
    ExchangeRateQuote    - Buy/sell local-currency-per-USD quote
    MarketSnapshot       - Quotes + exchange rate fetched together
    PositionValuation    - Valuation of one position in USD
    CompositionSlice     - One labelled share of the portfolio
    AssetWeight          - One position's share of the portfolio
    PortfolioValuation   - Complete portfolio valuation
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from finance_tracker.services.platforms import (
    Currency,
    Platform,
    normalize_symbol,
    price_key,
)
from finance_tracker.utils.money import ZERO


# =============================================================================
# POSITIONS
# =============================================================================

@dataclass(frozen=True)
class InvestmentPosition:
    """
    Accumulated lot for one (platform, symbol) pair.

    Attributes:
        platform: Where the lot is held
        symbol: Upper-case ticker / asset identifier
        quantity: Units held (never negative)
        avg_price: Weighted-average cost per unit, native currency
        total_invested: Cost basis of the whole quantity, native currency
        currency: Native currency of the cost basis
        id: Persistence identifier (opaque, None before first save)

    Note:
        total_invested ≈ quantity × avg_price after every mutation
        (see finance_tracker.services.positions).
    """

    platform: Platform
    symbol: str
    quantity: Decimal
    avg_price: Decimal
    total_invested: Decimal
    currency: Currency
    id: str | None = None

    def __post_init__(self) -> None:
        if not self.symbol or not self.symbol.strip():
            raise ValueError("symbol is required")
        if self.quantity < ZERO:
            raise ValueError(f"quantity cannot be negative, got {self.quantity}")
        object.__setattr__(self, "symbol", normalize_symbol(self.symbol))

    @property
    def price_key(self) -> str:
        return price_key(self.platform, self.symbol)


# =============================================================================
# MARKET DATA
# =============================================================================

@dataclass(frozen=True)
class PriceQuote:
    """
    Market price for one price key.

    Attributes:
        price: Last price in `currency`
        change_24h_percent: Change vs. previous close, in percent (5 = +5%)
        currency: Currency the price is quoted in
        source: Provider that produced the quote (e.g. "coingecko")
    """

    price: Decimal
    change_24h_percent: Decimal = ZERO
    currency: Currency = Currency.USD
    source: str | None = None

    @property
    def is_usable(self) -> bool:
        """A quote only counts as a market signal if its price is positive."""
        return self.price > ZERO


@dataclass(frozen=True)
class ExchangeRateQuote:
    """
    Local-currency-per-USD quote (informal "blue" rate).

    Attributes:
        buy: Rate at which dealers buy USD
        sell: Rate at which dealers sell USD
    """

    buy: Decimal
    sell: Decimal

    @property
    def average(self) -> Decimal:
        return (self.buy + self.sell) / 2


@dataclass
class MarketSnapshot:
    """
    Quotes and exchange rate fetched together.

    Never persisted and carries no TTL: caching belongs to the fetching side.

    Attributes:
        prices_by_key: Quotes keyed by "<platform>:<SYMBOL>"
        exchange_rate: Local-currency-per-USD rate (None if unavailable)
        fetched_at: When the snapshot was assembled
        exchange_quote: Buy/sell detail behind exchange_rate, when known
    """

    prices_by_key: dict[str, PriceQuote] = field(default_factory=dict)
    exchange_rate: Decimal | None = None
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    exchange_quote: ExchangeRateQuote | None = None

    def quote_for(self, platform: Platform, symbol: str) -> PriceQuote | None:
        return self.prices_by_key.get(price_key(platform, symbol))


# =============================================================================
# VALUATION RESULTS
# =============================================================================

@dataclass(frozen=True)
class PositionValuation:
    """
    Valuation of one position, normalized to USD.

    Attributes:
        platform: Where the lot is held
        symbol: Asset symbol
        price_key: "<platform>:<SYMBOL>"
        quantity: Units held
        avg_price: Cost per unit, native currency
        current_price: Market price (native quote currency), or avg_price
            when no market price was usable
        current_value: Market value in USD
        cost_basis: Cost basis in USD
        profit_loss: current_value - cost_basis
        profit_loss_percent: profit_loss / cost_basis × 100 (0 if no cost)
        change_24h_percent: Quote's 24h change (0 without a market price)
        change_24h_value: USD contribution to the portfolio's 24h change
        has_market_price: False when the valuation is a cost-basis estimate
    """

    platform: Platform
    symbol: str
    price_key: str
    quantity: Decimal
    avg_price: Decimal
    current_price: Decimal
    current_value: Decimal
    cost_basis: Decimal
    profit_loss: Decimal
    profit_loss_percent: Decimal
    change_24h_percent: Decimal
    change_24h_value: Decimal
    has_market_price: bool


@dataclass(frozen=True)
class CompositionSlice:
    """
    One labelled group of the portfolio (rounded for display).

    Attributes:
        label: Group label (e.g. "CEDEARs")
        value: Group value in USD, 2 decimals
        percentage: Share of total value, 1 decimal
    """

    label: str
    value: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class AssetWeight:
    """One position's share of total portfolio value (1 decimal)."""

    symbol: str
    platform: Platform
    value: Decimal
    percentage: Decimal


@dataclass
class PortfolioValuation:
    """
    Complete portfolio valuation in USD.

    Totals are kept at full precision; PortfolioValuationResponse rounds
    them for display.

    Attributes:
        positions: Per-position valuations, highest current value first
        total_value: Sum of current values
        total_cost: Sum of cost bases
        total_profit_loss: total_value - total_cost
        total_profit_loss_percent: total_profit_loss / total_cost × 100
        change_24h_value: Sum of per-position 24h contributions
        change_24h_percent: change relative to the value before today's move
        by_platform: Composition by platform label
        by_asset: Composition by individual position
        exchange_rate: Rate actually used for local-currency conversion
        exchange_rate_is_fallback: True if the configured fallback rate was used
        warnings: Data quality notes for the caller
    """

    positions: list[PositionValuation]
    total_value: Decimal
    total_cost: Decimal
    total_profit_loss: Decimal
    total_profit_loss_percent: Decimal
    change_24h_value: Decimal
    change_24h_percent: Decimal
    by_platform: list[CompositionSlice]
    by_asset: list[AssetWeight]
    exchange_rate: Decimal
    exchange_rate_is_fallback: bool = False
    warnings: list[str] = field(default_factory=list)

    @property
    def missing_price_count(self) -> int:
        """Number of positions valued at cost because no price was usable."""
        return sum(1 for p in self.positions if not p.has_market_price)
