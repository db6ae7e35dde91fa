# backend/finance_tracker/services/valuation/engine.py
"""
Portfolio Valuation Engine.

Orchestrates the calculators to turn investment lots plus a market snapshot
into a PortfolioValuation:

    1. Resolve the exchange rate (live or configured fallback)
    2. Value each lot (market price, or cost-basis fallback)
    3. Aggregate totals, P&L and the 24h change
    4. Build platform and asset breakdowns

The engine is pure: no I/O, no state carried between calls. A partially
populated or empty price map is the normal case, not an error.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from finance_tracker.config import settings
from finance_tracker.services.platforms import Platform
from finance_tracker.services.valuation.calculators import (
    CompositionCalculator,
    ExchangeRateResolver,
    PositionValueCalculator,
    change_percent_vs_prior_value,
)
from finance_tracker.services.valuation.types import (
    InvestmentPosition,
    MarketSnapshot,
    PortfolioValuation,
)
from finance_tracker.utils.money import ZERO, percent_of

logger = logging.getLogger(__name__)


class ValuationEngine:
    """
    Values a list of investment lots in USD.

    Example:
        engine = ValuationEngine()
        result = engine.valuate(positions, snapshot)
        print(result.total_value, result.change_24h_percent)
    """

    def __init__(
            self,
            fallback_exchange_rate: Decimal | None = None,
            position_calculator: PositionValueCalculator | None = None,
            composition_calculator: CompositionCalculator | None = None,
    ) -> None:
        self._rate_resolver = ExchangeRateResolver(
            settings.fallback_exchange_rate if fallback_exchange_rate is None
            else fallback_exchange_rate
        )
        self._position_calc = position_calculator or PositionValueCalculator()
        self._composition_calc = composition_calculator or CompositionCalculator()

    def valuate(
            self,
            positions: list[InvestmentPosition] | None,
            snapshot: MarketSnapshot | None,
            platform: Platform | None = None,
    ) -> PortfolioValuation:
        """
        Value a portfolio.

        Args:
            positions: Lots to value (None or empty yields a zero valuation)
            snapshot: Market data; None is treated as "no prices, no rate"
            platform: Only value lots held on this platform

        Returns:
            PortfolioValuation with per-position and aggregate figures

        Raises:
            TypeError: If an element of positions is not an InvestmentPosition
        """
        positions = list(positions or [])
        for position in positions:
            if not isinstance(position, InvestmentPosition):
                raise TypeError(
                    f"Expected InvestmentPosition, got {type(position).__name__}"
                )
        if platform is not None:
            positions = [p for p in positions if p.platform == platform]

        resolved = self._rate_resolver.resolve(snapshot)
        warnings: list[str] = []
        if resolved.is_fallback:
            warnings.append(
                f"Exchange rate unavailable, using fallback rate {resolved.rate}"
            )

        valuations = [
            self._position_calc.calculate(
                position,
                snapshot.quote_for(position.platform, position.symbol) if snapshot else None,
                resolved.rate,
            )
            for position in positions
        ]

        total_value = sum((v.current_value for v in valuations), ZERO)
        total_cost = sum((v.cost_basis for v in valuations), ZERO)
        change_24h_value = sum((v.change_24h_value for v in valuations), ZERO)
        total_profit_loss = total_value - total_cost

        missing = [v.price_key for v in valuations if not v.has_market_price]
        if missing:
            warnings.append(
                f"No market price for {', '.join(missing)}; valued at cost"
            )

        result = PortfolioValuation(
            positions=sorted(valuations, key=lambda v: v.current_value, reverse=True),
            total_value=total_value,
            total_cost=total_cost,
            total_profit_loss=total_profit_loss,
            total_profit_loss_percent=percent_of(total_profit_loss, total_cost),
            change_24h_value=change_24h_value,
            change_24h_percent=change_percent_vs_prior_value(total_value, change_24h_value),
            by_platform=self._composition_calc.by_platform(valuations, total_value),
            by_asset=self._composition_calc.by_asset(valuations, total_value),
            exchange_rate=resolved.rate,
            exchange_rate_is_fallback=resolved.is_fallback,
            warnings=warnings,
        )

        logger.debug(
            f"Valued {len(valuations)} positions: value={total_value}, "
            f"cost={total_cost}, missing_prices={len(missing)}"
        )
        return result


def valuate(
        positions: list[InvestmentPosition] | None,
        snapshot: MarketSnapshot | None,
        platform: Platform | None = None,
) -> PortfolioValuation:
    """Value a portfolio with the configured fallback exchange rate."""
    return ValuationEngine().valuate(positions, snapshot, platform=platform)
