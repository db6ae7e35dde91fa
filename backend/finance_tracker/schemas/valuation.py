# backend/finance_tracker/schemas/valuation.py
"""
Pydantic schemas for Portfolio Valuation output.

The engine works at full Decimal precision; these schemas are where values
are rounded for display: money to cents, percentages to 2 decimals.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from finance_tracker.services.constants import RESPONSE_PERCENT_PLACES
from finance_tracker.services.platforms import Platform
from finance_tracker.services.valuation.types import (
    PortfolioValuation,
    PositionValuation,
)
from finance_tracker.utils.money import round_money, round_percent


def _pct(value: Decimal) -> Decimal:
    return round_percent(value, RESPONSE_PERCENT_PLACES)


# =============================================================================
# POSITION
# =============================================================================

class PositionValuationResponse(BaseModel):
    """Valuation of one lot, in USD."""

    model_config = ConfigDict(from_attributes=True)

    platform: Platform
    symbol: str
    quantity: Decimal
    avg_price: Decimal = Field(..., description="Average cost per unit, native currency")
    current_price: Decimal = Field(..., description="Market price per unit, native currency")
    current_value: Decimal = Field(..., description="Market value in USD")
    cost_basis: Decimal = Field(..., description="Cost basis in USD")
    profit_loss: Decimal
    profit_loss_percent: Decimal
    change_24h_percent: Decimal
    change_24h_value: Decimal
    has_market_price: bool = Field(
        ...,
        description="False when valued at cost because no quote was available"
    )

    @classmethod
    def from_valuation(cls, v: PositionValuation) -> "PositionValuationResponse":
        return cls(
            platform=v.platform,
            symbol=v.symbol,
            quantity=v.quantity,
            avg_price=v.avg_price,
            current_price=v.current_price,
            current_value=round_money(v.current_value),
            cost_basis=round_money(v.cost_basis),
            profit_loss=round_money(v.profit_loss),
            profit_loss_percent=_pct(v.profit_loss_percent),
            change_24h_percent=_pct(v.change_24h_percent),
            change_24h_value=round_money(v.change_24h_value),
            has_market_price=v.has_market_price,
        )


# =============================================================================
# BREAKDOWNS
# =============================================================================

class CompositionSliceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    value: Decimal
    percentage: Decimal


class AssetWeightResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    symbol: str
    platform: Platform
    value: Decimal
    percentage: Decimal


# =============================================================================
# PORTFOLIO
# =============================================================================

class PortfolioValuationResponse(BaseModel):
    """
    Complete portfolio valuation in USD.

    exchange_rate_is_fallback and warnings tell the caller when figures rest
    on the configured fallback rate or on cost-basis prices.
    """

    model_config = ConfigDict(from_attributes=True)

    total_value: Decimal
    total_cost: Decimal
    total_profit_loss: Decimal
    total_profit_loss_percent: Decimal
    change_24h_value: Decimal
    change_24h_percent: Decimal
    positions: list[PositionValuationResponse]
    by_platform: list[CompositionSliceResponse]
    by_asset: list[AssetWeightResponse]
    exchange_rate: Decimal
    exchange_rate_is_fallback: bool
    missing_price_count: int
    warnings: list[str] = Field(default_factory=list)
    valued_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc)
    )

    @classmethod
    def from_valuation(cls, valuation: PortfolioValuation) -> "PortfolioValuationResponse":
        return cls(
            total_value=round_money(valuation.total_value),
            total_cost=round_money(valuation.total_cost),
            total_profit_loss=round_money(valuation.total_profit_loss),
            total_profit_loss_percent=_pct(valuation.total_profit_loss_percent),
            change_24h_value=round_money(valuation.change_24h_value),
            change_24h_percent=_pct(valuation.change_24h_percent),
            positions=[
                PositionValuationResponse.from_valuation(p) for p in valuation.positions
            ],
            by_platform=[
                CompositionSliceResponse.model_validate(s) for s in valuation.by_platform
            ],
            by_asset=[
                AssetWeightResponse.model_validate(a) for a in valuation.by_asset
            ],
            exchange_rate=valuation.exchange_rate,
            exchange_rate_is_fallback=valuation.exchange_rate_is_fallback,
            missing_price_count=valuation.missing_price_count,
            warnings=list(valuation.warnings),
        )
