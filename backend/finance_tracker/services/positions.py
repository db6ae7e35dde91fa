# backend/finance_tracker/services/positions.py
"""
Investment lot mutation.

A lot is the accumulated holding of one symbol on one platform, tracked as
quantity + weighted-average cost. Trades change it as follows:

    BUY  (no lot)  -> CREATE  quantity=q, avg=price, total=q × price
    BUY  (lot)     -> UPDATE  total += q × price, avg = total / quantity
    SELL (lot)     -> UPDATE  quantity -= q, total scaled by the remaining
                              ratio, avg unchanged
                   -> DELETE  when 0 ≤ remaining quantity ≤ 0.0001
    SELL (no lot)  -> PositionNotFoundError

Selling more than held, by any amount, is rejected with
InsufficientHoldingsError; quantities are never clamped.

The functions are pure: the persistence layer applies the returned
PositionChange (insert, update or delete the row).
"""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum

from finance_tracker.services.constants import POSITION_ZERO_TOLERANCE
from finance_tracker.services.exceptions import (
    CurrencyMismatchError,
    InsufficientHoldingsError,
    PositionNotFoundError,
    ValidationError,
)
from finance_tracker.services.platforms import Currency, Platform, normalize_symbol
from finance_tracker.services.valuation.types import InvestmentPosition
from finance_tracker.utils.money import ZERO

logger = logging.getLogger(__name__)


class TradeType(str, Enum):
    """Trade direction (values are the stored tags)."""
    BUY = "compra"
    SELL = "venta"


class PositionAction(str, Enum):
    """What the persistence layer must do with the lot row."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class Trade:
    """
    A buy or sell of one asset on one platform.

    Attributes:
        platform: Platform of the lot
        symbol: Asset symbol (normalized to upper case)
        trade_type: BUY or SELL
        quantity: Units traded (> 0)
        price: Price per unit in `currency` (>= 0)
        currency: Currency of the price
    """

    platform: Platform
    symbol: str
    trade_type: TradeType
    quantity: Decimal
    price: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbol", normalize_symbol(self.symbol))
        if not self.symbol:
            raise ValidationError("symbol is required", field="symbol")
        if self.quantity <= ZERO:
            raise ValidationError(
                f"quantity must be positive, got {self.quantity}", field="quantity"
            )
        if self.price < ZERO:
            raise ValidationError(f"price cannot be negative, got {self.price}", field="price")

    @property
    def total(self) -> Decimal:
        return self.quantity * self.price


@dataclass(frozen=True)
class PositionChange:
    """
    Result of applying a trade.

    Attributes:
        action: CREATE, UPDATE or DELETE
        position: The new lot state (CREATE/UPDATE) or the lot being removed
            (DELETE)
    """

    action: PositionAction
    position: InvestmentPosition


def apply_trade(existing: InvestmentPosition | None, trade: Trade) -> PositionChange:
    """
    Apply a trade to the current lot for its platform+symbol.

    Args:
        existing: Current lot, or None if nothing is held
        trade: The trade to apply

    Returns:
        PositionChange describing the row operation

    Raises:
        PositionNotFoundError: Selling with no lot
        InsufficientHoldingsError: Selling more than held
        CurrencyMismatchError: Buying in a currency other than the lot's
        ValidationError: If existing does not match the trade's platform+symbol
    """
    if existing is not None and (
            existing.platform != trade.platform or existing.symbol != trade.symbol
    ):
        raise ValidationError(
            f"Trade for {trade.platform.value}:{trade.symbol} applied to "
            f"lot {existing.price_key}"
        )

    if trade.trade_type == TradeType.BUY:
        if existing is None:
            return _open_lot(trade)
        return _add_to_lot(existing, trade)

    if existing is None:
        raise PositionNotFoundError(trade.platform.value, trade.symbol)
    return _reduce_lot(existing, trade)


def _open_lot(trade: Trade) -> PositionChange:
    position = InvestmentPosition(
        platform=trade.platform,
        symbol=trade.symbol,
        quantity=trade.quantity,
        avg_price=trade.price,
        total_invested=trade.total,
        currency=trade.currency,
    )
    logger.info(f"Opening lot {position.price_key}: {trade.quantity} @ {trade.price}")
    return PositionChange(PositionAction.CREATE, position)


def _add_to_lot(existing: InvestmentPosition, trade: Trade) -> PositionChange:
    if existing.currency != trade.currency:
        raise CurrencyMismatchError(
            trade.symbol, existing.currency.value, trade.currency.value
        )

    quantity = existing.quantity + trade.quantity
    total = existing.total_invested + trade.total
    updated = replace(
        existing,
        quantity=quantity,
        total_invested=total,
        avg_price=total / quantity,
    )
    return PositionChange(PositionAction.UPDATE, updated)


def _reduce_lot(existing: InvestmentPosition, trade: Trade) -> PositionChange:
    remaining = existing.quantity - trade.quantity

    if remaining < ZERO:
        raise InsufficientHoldingsError(trade.symbol, existing.quantity, trade.quantity)

    if remaining <= POSITION_ZERO_TOLERANCE:
        logger.info(f"Closing lot {existing.price_key}: remaining {remaining}")
        return PositionChange(PositionAction.DELETE, existing)

    ratio = remaining / existing.quantity
    updated = replace(
        existing,
        quantity=remaining,
        total_invested=existing.total_invested * ratio,
    )
    return PositionChange(PositionAction.UPDATE, updated)
