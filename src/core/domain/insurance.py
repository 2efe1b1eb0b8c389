"""
Insurance — Доменные модели страхования цены

Immutable Pydantic модели и перечисления, которыми обмениваются
формулы движка: выборки волатильности, диапазон цены claim,
производное состояние риска и строки lookup-таблиц hedge.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional, Type, TypeVar

from pydantic import BaseModel, Field, model_validator

from src.core.errors import InvalidInputError


# =============================================================================
# ENUMS
# =============================================================================


class InsuranceSide(str, Enum):
    """Направление страхуемой экспозиции"""

    BULL = "BULL"
    BEAR = "BEAR"


class TradeSignal(str, Enum):
    """Торговое намерение, определяющее skew цены claim"""

    BUY = "BUY"
    SELL = "SELL"
    NONE = "NONE"


class PeriodUnit(str, Enum):
    """Единица длительности страхового периода"""

    HOUR = "hours"
    DAY = "days"


E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: Type[E], value: object, name: str) -> E:
    """
    Приведение значения к enum с типизированной ошибкой.

    Принимает как член enum, так и его строковое значение.

    Raises:
        InvalidInputError: Если значение не принадлежит enum
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(str(member.value) for member in enum_cls)
        raise InvalidInputError(
            f"{name} must be one of [{allowed}], got {value!r}"
        ) from None


# =============================================================================
# VOLATILITY
# =============================================================================


class VolatilitySample(BaseModel):
    """
    Историческое изменение цены актива за период.

    Упорядоченный список выборок образует таблицу волатильности актива.
    """

    period: int = Field(..., gt=0, description="Длительность периода")
    period_unit: PeriodUnit = Field(..., description="Единица периода (hours/days)")
    period_change_ratio: Decimal = Field(
        ..., ge=0, description="Доля изменения цены за период"
    )

    model_config = {"frozen": True}


class ClaimPriceRange(BaseModel):
    """
    Допустимый диапазон цены claim.

    Нулевая граница означает, что для неё не нашлось подходящей выборки.
    """

    claim_price_min: Decimal = Field(..., ge=0, description="Нижняя граница p_claim")
    claim_price_max: Decimal = Field(..., ge=0, description="Верхняя граница p_claim")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_bounds_order(self) -> "ClaimPriceRange":
        if self.claim_price_min and self.claim_price_max:
            if self.claim_price_min > self.claim_price_max:
                raise ValueError(
                    f"claim_price_min {self.claim_price_min} exceeds "
                    f"claim_price_max {self.claim_price_max}"
                )
        return self


# =============================================================================
# RISK
# =============================================================================


class QClaimTier(BaseModel):
    """Строка lookup-таблицы: hedge → поправка x к выплате"""

    hedge: Decimal = Field(..., gt=0, description="Значение hedge строки")
    x: Decimal = Field(..., ge=0, lt=1, description="Доля удержания из выплаты")

    model_config = {"frozen": True}


class RiskState(BaseModel):
    """
    Производное (не хранимое) состояние риска позиции.

    Собирает промежуточные величины цепочки
    ratio_profit → diff_stop → system_risk → system_capital → leverage.
    """

    ratio_profit: Decimal = Field(..., ge=0)
    diff_stop: Decimal = Field(..., gt=0)
    system_risk: Decimal = Field(...)
    system_capital: Decimal = Field(..., ge=0)
    leverage: int = Field(..., ge=0)

    model_config = {"frozen": True}


# =============================================================================
# POSITION
# =============================================================================


class InsurancePosition(BaseModel):
    """
    Параметры страхуемой позиции.

    Immutable модель (frozen=True): любые изменения создают новый экземпляр.
    """

    margin: Decimal = Field(..., gt=0, description="Залог пользователя")
    hedge: Decimal = Field(..., gt=0, description="Отношение двух количеств")
    period: int = Field(..., gt=0, description="Длительность страховки")
    period_unit: PeriodUnit = Field(..., description="Единица периода")
    side: InsuranceSide = Field(..., description="Направление экспозиции")
    signal: TradeSignal = Field(TradeSignal.NONE, description="Торговое намерение")

    model_config = {"frozen": True}


class InsuranceQuote(BaseModel):
    """Полный расчёт страховки для позиции"""

    p_open: Decimal = Field(..., gt=0)
    p_claim: Decimal = Field(..., gt=0)
    p_stop: Decimal
    p_refund: Decimal = Field(..., gt=0)
    q_claim: Decimal = Field(..., gt=0)
    risk_state: RiskState
    expired_ts_utc_ms: Optional[int] = Field(None, gt=0)

    model_config = {"frozen": True}
