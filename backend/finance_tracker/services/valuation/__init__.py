# backend/finance_tracker/services/valuation/__init__.py
"""
Valuation Service Package.

Values investment lots against a market snapshot, normalized to USD.

Usage:
    from finance_tracker.services.valuation import ValuationEngine

    engine = ValuationEngine()
    result = engine.valuate(positions, snapshot)

Architecture:
    valuation/
    ├── __init__.py              # This file - package exports
    ├── types.py                 # Internal data classes
    ├── calculators.py           # Rate resolver, position value, composition
    └── engine.py                # ValuationEngine (orchestrator)

Data Flow:
    MarketSnapshot → ExchangeRateResolver → ResolvedRate
    Position + Quote + Rate → PositionValueCalculator → PositionValuation
    PositionValuations → aggregation + CompositionCalculator → PortfolioValuation
"""

from finance_tracker.services.valuation.calculators import (
    CompositionCalculator,
    ExchangeRateResolver,
    PositionValueCalculator,
    ResolvedRate,
    change_percent_vs_prior_value,
)
from finance_tracker.services.valuation.engine import ValuationEngine, valuate
from finance_tracker.services.valuation.types import (
    AssetWeight,
    CompositionSlice,
    ExchangeRateQuote,
    InvestmentPosition,
    MarketSnapshot,
    PortfolioValuation,
    PositionValuation,
    PriceQuote,
)

__all__ = [
    # Engine
    "ValuationEngine",
    "valuate",
    # Data types
    "InvestmentPosition",
    "PriceQuote",
    "ExchangeRateQuote",
    "MarketSnapshot",
    "PositionValuation",
    "CompositionSlice",
    "AssetWeight",
    "PortfolioValuation",
    # Calculators (for testing)
    "ExchangeRateResolver",
    "ResolvedRate",
    "PositionValueCalculator",
    "CompositionCalculator",
    "change_percent_vs_prior_value",
]
