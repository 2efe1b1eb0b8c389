"""
Конфигурация формул страхования цены.

Immutable набор именованных констант: потолок риска, доля возврата,
минимальный страхуемый разрыв цены, границы периода и lookup-таблицы
поправок выплаты по hedge для часовых и дневных периодов.
"""

from decimal import Decimal
from typing import Any, Final

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.domain.insurance import PeriodUnit, QClaimTier

# =============================================================================
# DEFAULTS
# =============================================================================

# Потолок системного риска
RISK_CONFIG: Final[Decimal] = Decimal("0.9")

# Доля отклонения цены возврата от p_open
REFUND_RATIO: Final[Decimal] = Decimal("0.005")

MIN_PERIOD: Final[int] = 1
MAX_PERIOD: Final[int] = 15

# Минимальная дистанция p_claim, которую проект может застраховать
RATIO_DIFFERENT_PRICE_CLAIM: Final[Decimal] = Decimal("0.022")

# База, относительно которой откладывается дистанция p_claim (1 ± gap)
CONSTANT_CLAIM: Final[Decimal] = Decimal(1)

# hedge 0.02 … 0.10 с шагом 0.01
_HEDGE_GRID: Final[tuple[str, ...]] = (
    "0.02", "0.03", "0.04", "0.05", "0.06", "0.07", "0.08", "0.09", "0.1",
)

Q_CLAIM_CONFIG_HOUR: Final[tuple[QClaimTier, ...]] = tuple(
    QClaimTier(hedge=Decimal(hedge), x=Decimal(0)) for hedge in _HEDGE_GRID
)

Q_CLAIM_CONFIG_DAY: Final[tuple[QClaimTier, ...]] = tuple(
    QClaimTier(hedge=Decimal(hedge), x=Decimal(0)) for hedge in _HEDGE_GRID
)


# =============================================================================
# CONFIG
# =============================================================================


class InsuranceConfig(BaseModel):
    """
    Конфигурация движка.

    Передаётся явно в каждую формулу; после создания не меняется.
    Для изменённой копии используйте with_overrides().
    """

    risk_config: Decimal = Field(RISK_CONFIG, gt=0, description="Потолок системного риска")
    refund_ratio: Decimal = Field(REFUND_RATIO, ge=0, lt=1, description="Доля возврата")
    min_period: int = Field(MIN_PERIOD, ge=1)
    max_period: int = Field(MAX_PERIOD, ge=1)
    ratio_different_price_claim: Decimal = Field(
        RATIO_DIFFERENT_PRICE_CLAIM,
        gt=0,
        description="Предел дистанции p_claim относительно рыночной цены",
    )
    constant_claim: Decimal = Field(CONSTANT_CLAIM, gt=0)
    q_claim_config_hour: tuple[QClaimTier, ...] = Field(Q_CLAIM_CONFIG_HOUR)
    q_claim_config_day: tuple[QClaimTier, ...] = Field(Q_CLAIM_CONFIG_DAY)

    model_config = {"frozen": True}

    @field_validator("q_claim_config_hour", "q_claim_config_day")
    @classmethod
    def validate_table_not_empty(
        cls, v: tuple[QClaimTier, ...]
    ) -> tuple[QClaimTier, ...]:
        if not v:
            raise ValueError("q_claim lookup table must not be empty")
        return v

    @model_validator(mode="after")
    def validate_period_bounds(self) -> "InsuranceConfig":
        if self.min_period > self.max_period:
            raise ValueError(
                f"min_period {self.min_period} exceeds max_period {self.max_period}"
            )
        return self

    def q_claim_table(self, period_unit: PeriodUnit) -> tuple[QClaimTier, ...]:
        """Lookup-таблица для единицы периода (HOUR → часовая, иначе дневная)"""
        if period_unit == PeriodUnit.HOUR:
            return self.q_claim_config_hour
        return self.q_claim_config_day

    def with_overrides(self, **changes: Any) -> "InsuranceConfig":
        """Новая провалидированная конфигурация с заменёнными полями"""
        data = self.model_dump()
        data.update(changes)
        return type(self).model_validate(data)


DEFAULT_CONFIG: Final[InsuranceConfig] = InsuranceConfig()
