"""
Domain models and value objects.

Contains insurance domain entities: VolatilitySample, ClaimPriceRange, RiskState, InsurancePosition.
"""

from src.core.domain.insurance import (
    ClaimPriceRange,
    InsurancePosition,
    InsuranceQuote,
    InsuranceSide,
    PeriodUnit,
    QClaimTier,
    RiskState,
    TradeSignal,
    VolatilitySample,
    coerce_enum,
)

__all__ = [
    # Enums
    "InsuranceSide",
    "TradeSignal",
    "PeriodUnit",
    "coerce_enum",
    # Models
    "VolatilitySample",
    "ClaimPriceRange",
    "QClaimTier",
    "RiskState",
    "InsurancePosition",
    "InsuranceQuote",
]
