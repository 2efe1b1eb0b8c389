"""
Contract Validation Module

Модуль для валидации JSON контрактов внешних данных движка.
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    VolatilityTableValidator,
    load_volatility_table,
    validate_volatility_table,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "VolatilityTableValidator",
    # Functions
    "validate_volatility_table",
    "load_volatility_table",
]
