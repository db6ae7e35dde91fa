# backend/finance_tracker/schemas/investments.py
"""
Pydantic schemas for investment lots and trades.

InvestmentRecord validates a stored lot row and converts it into the
InvestmentPosition the valuation engine consumes. TradeRequest validates a
buy/sell before it is applied with finance_tracker.services.positions.

IMPORTANT: All financial values use Decimal for precision.
Never use float for money!
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_tracker.schemas.validators import validate_symbol
from finance_tracker.services.platforms import Currency, Platform
from finance_tracker.services.positions import Trade, TradeType
from finance_tracker.services.valuation.types import InvestmentPosition


# =============================================================================
# LOT RECORD
# =============================================================================

class InvestmentRecord(BaseModel):
    """
    One stored investment lot.

    Field names follow the stored row (asset_symbol, total_invested, ...).
    """

    model_config = ConfigDict(from_attributes=True)

    id: str | None = Field(
        default=None,
        description="Row identifier"
    )
    platform: Platform = Field(
        ...,
        description="Platform tag",
        examples=["cripto", "iol", "usa"]
    )
    asset_symbol: str = Field(
        ...,
        description="Asset symbol (normalized to uppercase)",
        examples=["BTC", "AAPL"]
    )
    quantity: Decimal = Field(
        ...,
        ge=0,
        description="Units held"
    )
    avg_price: Decimal = Field(
        ...,
        ge=0,
        description="Weighted-average cost per unit, in currency"
    )
    total_invested: Decimal = Field(
        ...,
        ge=0,
        description="Cost basis of the whole lot, in currency"
    )
    currency: Currency = Field(
        default=Currency.USD,
        description="Currency of avg_price and total_invested"
    )

    @field_validator('asset_symbol')
    @classmethod
    def normalize_symbol(cls, v: str) -> str:
        return validate_symbol(v)

    def to_position(self) -> InvestmentPosition:
        return InvestmentPosition(
            platform=self.platform,
            symbol=self.asset_symbol,
            quantity=self.quantity,
            avg_price=self.avg_price,
            total_invested=self.total_invested,
            currency=self.currency,
            id=self.id,
        )

    @classmethod
    def from_position(cls, position: InvestmentPosition) -> "InvestmentRecord":
        """Build the row to persist after a trade was applied."""
        return cls(
            id=position.id,
            platform=position.platform,
            asset_symbol=position.symbol,
            quantity=position.quantity,
            avg_price=position.avg_price,
            total_invested=position.total_invested,
            currency=position.currency,
        )


# =============================================================================
# TRADE REQUEST
# =============================================================================

class TradeRequest(BaseModel):
    """A buy or sell to apply to a lot."""

    platform: Platform = Field(..., description="Platform tag")
    asset_symbol: str = Field(..., description="Asset symbol", examples=["ETH"])
    type: TradeType = Field(
        ...,
        description="Trade direction",
        examples=["compra", "venta"]
    )
    quantity: Decimal = Field(
        ...,
        gt=0,
        description="Units traded (must be positive)"
    )
    price: Decimal = Field(
        ...,
        ge=0,
        description="Price per unit, in currency"
    )
    currency: Currency = Field(
        default=Currency.USD,
        description="Currency of the price"
    )

    @field_validator('asset_symbol')
    @classmethod
    def normalize_symbol(cls, v: str) -> str:
        return validate_symbol(v)

    def to_trade(self) -> Trade:
        return Trade(
            platform=self.platform,
            symbol=self.asset_symbol,
            trade_type=self.type,
            quantity=self.quantity,
            price=self.price,
            currency=self.currency,
        )
