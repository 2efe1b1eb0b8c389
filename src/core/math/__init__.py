"""
Core math modules

Decimal-примитивы с гарантией воспроизводимости результатов.
"""

from src.core.math.numerical_safeguards import (
    # Context
    DECIMAL_PRECISION,
    DIVISION_PLACES,
    DIVISION_QUANTUM,
    ENGINE_CONTEXT,
    Numeric,
    # Conversion
    to_decimal,
    to_double_precision,
    # Safe division
    floor_to_int,
    safe_divide,
    # Validation
    validate_non_negative,
    validate_positive,
)

__all__ = [
    # Numerical Safeguards — Context
    "DECIMAL_PRECISION",
    "DIVISION_PLACES",
    "DIVISION_QUANTUM",
    "ENGINE_CONTEXT",
    "Numeric",
    # Numerical Safeguards — Conversion
    "to_decimal",
    "to_double_precision",
    # Numerical Safeguards — Safe division
    "floor_to_int",
    "safe_divide",
    # Numerical Safeguards — Validation
    "validate_non_negative",
    "validate_positive",
]
