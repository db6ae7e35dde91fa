# backend/finance_tracker/services/valuation/calculators.py
"""
Point-in-time valuation calculators.

Each calculator does one thing:
- ExchangeRateResolver: Picks the local-currency rate (live or fallback)
- PositionValueCalculator: Values one lot in USD, with cost-basis fallback
- CompositionCalculator: Groups valued positions into labelled breakdowns

Design Principles:
- Stateless apart from configuration given at construction
- Receive all data explicitly, perform no I/O
- Decimal for ALL financial calculations, no intermediate rounding

Usage:
    resolver = ExchangeRateResolver(fallback_rate=Decimal("1500"))
    rate = resolver.resolve(snapshot)

    calc = PositionValueCalculator()
    valuation = calc.calculate(position, snapshot.quote_for(...), rate.rate)
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal

from finance_tracker.services.constants import COMPOSITION_PERCENT_PLACES
from finance_tracker.services.platforms import (
    LOCAL_CURRENCY,
    PLATFORM_SPECS,
    Platform,
    spec_for,
)
from finance_tracker.services.valuation.types import (
    AssetWeight,
    CompositionSlice,
    InvestmentPosition,
    MarketSnapshot,
    PositionValuation,
    PriceQuote,
)
from finance_tracker.utils.money import (
    HUNDRED,
    ZERO,
    percent_of,
    round_money,
    round_percent,
)

logger = logging.getLogger(__name__)


# =============================================================================
# EXCHANGE RATE RESOLVER
# =============================================================================

@dataclass(frozen=True)
class ResolvedRate:
    """Exchange rate chosen for a valuation run."""

    rate: Decimal
    is_fallback: bool


class ExchangeRateResolver:
    """
    Chooses the local-currency-per-USD rate for a valuation.

    A snapshot without a positive exchange rate (absent snapshot, failed FX
    fetch, zero from a bad payload) degrades to the configured fallback rate.
    The substitution is reported through ResolvedRate.is_fallback so callers
    can warn that FX data is unavailable.
    """

    def __init__(self, fallback_rate: Decimal) -> None:
        if fallback_rate <= ZERO:
            raise ValueError(f"fallback_rate must be positive, got {fallback_rate}")
        self._fallback_rate = fallback_rate

    @property
    def fallback_rate(self) -> Decimal:
        return self._fallback_rate

    def resolve(self, snapshot: MarketSnapshot | None) -> ResolvedRate:
        rate = snapshot.exchange_rate if snapshot is not None else None
        if rate is not None and rate > ZERO:
            return ResolvedRate(rate=rate, is_fallback=False)

        logger.warning(
            f"No usable exchange rate (got {rate}), "
            f"using fallback {self._fallback_rate}"
        )
        return ResolvedRate(rate=self._fallback_rate, is_fallback=True)


# =============================================================================
# POSITION VALUE CALCULATOR
# =============================================================================

class PositionValueCalculator:
    """
    Values a single lot in USD.

    With a usable quote (present, price > 0):
        - Platforms quoted in local currency:
            value = quantity × price / rate, cost = total_invested / rate
        - Platforms quoted in USD:
            value = quantity × price, cost = total_invested
        - 24h contribution = value × change% / 100

    Without a usable quote the lot is valued at cost:
        - current price reported as avg_price
        - value = cost = total_invested / rate when the platform is quoted in
          local currency or the lot's cost is in local currency,
          total_invested otherwise
        - 24h contribution = 0, has_market_price = False
    """

    def calculate(
            self,
            position: InvestmentPosition,
            quote: PriceQuote | None,
            exchange_rate: Decimal,
    ) -> PositionValuation:
        spec = spec_for(position.platform)

        if quote is not None and quote.is_usable:
            current_price = quote.price
            market_value = position.quantity * quote.price

            if spec.converts_from_local:
                current_value = market_value / exchange_rate
                cost_basis = position.total_invested / exchange_rate
            else:
                current_value = market_value
                cost_basis = position.total_invested

            change_24h_percent = quote.change_24h_percent
            change_24h_value = current_value * change_24h_percent / HUNDRED
            has_market_price = True
        else:
            logger.debug(
                f"No market price for {position.price_key}, valuing at cost"
            )
            current_price = position.avg_price

            if spec.converts_from_local or position.currency == LOCAL_CURRENCY:
                cost_basis = position.total_invested / exchange_rate
            else:
                cost_basis = position.total_invested

            current_value = cost_basis
            change_24h_percent = ZERO
            change_24h_value = ZERO
            has_market_price = False

        profit_loss = current_value - cost_basis

        return PositionValuation(
            platform=position.platform,
            symbol=position.symbol,
            price_key=position.price_key,
            quantity=position.quantity,
            avg_price=position.avg_price,
            current_price=current_price,
            current_value=current_value,
            cost_basis=cost_basis,
            profit_loss=profit_loss,
            profit_loss_percent=percent_of(profit_loss, cost_basis),
            change_24h_percent=change_24h_percent,
            change_24h_value=change_24h_value,
            has_market_price=has_market_price,
        )


def change_percent_vs_prior_value(total_value: Decimal, change_value: Decimal) -> Decimal:
    """
    Portfolio 24h change as a percentage of the value BEFORE today's move.

    prior = total_value - change_value
    percent = change_value / prior × 100   (0 when prior is not positive)
    """
    return percent_of(change_value, total_value - change_value)


# =============================================================================
# COMPOSITION CALCULATOR
# =============================================================================

class CompositionCalculator:
    """
    Builds display breakdowns of a valued portfolio.

    Values are rounded to 2 decimals and percentages to 1 decimal; percentages
    are computed from unrounded values. Groups with zero value are omitted and
    slices are sorted by value, largest first.
    """

    def by_platform(
            self,
            valuations: list[PositionValuation],
            total_value: Decimal,
    ) -> list[CompositionSlice]:
        totals: dict[Platform, Decimal] = defaultdict(lambda: ZERO)
        for valuation in valuations:
            totals[valuation.platform] += valuation.current_value

        # Iterate in table order so equal values keep a stable order
        groups = [
            (PLATFORM_SPECS[platform].label, totals[platform])
            for platform in PLATFORM_SPECS
            if totals[platform] > ZERO
        ]
        groups.sort(key=lambda group: group[1], reverse=True)

        return [
            CompositionSlice(
                label=label,
                value=round_money(value),
                percentage=round_percent(
                    percent_of(value, total_value), COMPOSITION_PERCENT_PLACES
                ),
            )
            for label, value in groups
        ]

    def by_asset(
            self,
            valuations: list[PositionValuation],
            total_value: Decimal,
    ) -> list[AssetWeight]:
        ordered = sorted(valuations, key=lambda v: v.current_value, reverse=True)
        return [
            AssetWeight(
                symbol=v.symbol,
                platform=v.platform,
                value=round_money(v.current_value),
                percentage=round_percent(
                    percent_of(v.current_value, total_value), COMPOSITION_PERCENT_PLACES
                ),
            )
            for v in ordered
            if v.current_value > ZERO
        ]
