"""
ClaimRange — допустимый диапазон цены claim по таблице волатильности.

Алгоритм getDistancePClaim:
1. period_change_ratio всех выборок сортируются по возрастанию (числовая сортировка)
2. Остаются значения >= порога period_change_ratio → sorted_list
3. Из sorted_list отбрасываются значения >= 1 → filtered_list
4. Источники границ:
       BULL: min ← sorted_list[0],   max ← sorted_list[-1]
       BEAR: min ← filtered_list[-1], max ← sorted_list[0]
5. Граница = (constant_claim ± gap) * p_market, где
       gap = min(ratio_different_price_claim, avg_change * multiplier)
   BULL использует "+", BEAR — "-"

Множитель (skew) задаётся парой (signal, side); при signal NONE он равен 1.
Граница с пустым списком-источником равна 0, ошибки нет.
"""

import logging
from decimal import Decimal, localcontext
from typing import Final, Optional, Sequence

from src.core.domain.insurance import (
    ClaimPriceRange,
    InsuranceSide,
    TradeSignal,
    VolatilitySample,
    coerce_enum,
)
from src.core.errors import InvalidInputError
from src.core.math.numerical_safeguards import (
    ENGINE_CONTEXT,
    Numeric,
    to_double_precision,
    validate_non_negative,
    validate_positive,
)
from src.insurance.config import DEFAULT_CONFIG, InsuranceConfig

logger = logging.getLogger(__name__)

# Выборки с изменением >= 1 не ограничивают цену claim на стороне BEAR
MAX_BEAR_CHANGE_RATIO: Final[Decimal] = Decimal(1)

UNSKEWED_MULTIPLIER: Final[Decimal] = Decimal(1)

# (signal, side) → множитель avg_change
CLAIM_SKEW: Final[dict[tuple[TradeSignal, InsuranceSide], Decimal]] = {
    (TradeSignal.BUY, InsuranceSide.BULL): Decimal("0.5"),
    (TradeSignal.BUY, InsuranceSide.BEAR): Decimal("0.75"),
    (TradeSignal.SELL, InsuranceSide.BULL): Decimal("0.75"),
    (TradeSignal.SELL, InsuranceSide.BEAR): Decimal("0.5"),
}


def _require_table(table: Optional[Sequence[VolatilitySample]]) -> Sequence[VolatilitySample]:
    if table is None:
        raise InvalidInputError("volatility table is required")
    return table


def get_available_period(
    side: InsuranceSide | str,
    table: Sequence[VolatilitySample],
) -> list[VolatilitySample]:
    """
    Выборки, пригодные для страхования на стороне side.

    BEAR: только выборки с period_change_ratio < 1. Иначе таблица без изменений.

    Raises:
        InvalidInputError: Если таблица отсутствует или side неизвестен
    """
    samples = _require_table(table)
    insurance_side = coerce_enum(InsuranceSide, side, "side")

    if insurance_side == InsuranceSide.BEAR:
        return [s for s in samples if s.period_change_ratio < MAX_BEAR_CHANGE_RATIO]

    return list(samples)


def _cap_price_gap(
    avg_change: Decimal,
    multiplier: Decimal,
    config: InsuranceConfig,
) -> Decimal:
    """Меньшее из ratio_different_price_claim и avg_change * multiplier."""
    with localcontext(ENGINE_CONTEXT):
        gap = avg_change * multiplier
    return min(config.ratio_different_price_claim, gap)


def _claim_bound(
    avg_change: Optional[Decimal],
    multiplier: Decimal,
    side: InsuranceSide,
    p_market: Decimal,
    config: InsuranceConfig,
) -> Decimal:
    if avg_change is None:
        return Decimal(0)

    gap = _cap_price_gap(avg_change, multiplier, config)
    with localcontext(ENGINE_CONTEXT):
        if side == InsuranceSide.BULL:
            bound = (config.constant_claim + gap) * p_market
        else:
            bound = (config.constant_claim - gap) * p_market

    return to_double_precision(bound)


def get_distance_p_claim(
    p_market: Numeric,
    table: Sequence[VolatilitySample],
    side: InsuranceSide | str,
    signal: TradeSignal | str,
    period_change_ratio: Numeric,
    config: InsuranceConfig = DEFAULT_CONFIG,
) -> ClaimPriceRange:
    """
    Диапазон [min, max] цены claim, допустимой для страхования.

    Args:
        p_market: Текущая рыночная цена (> 0)
        table: Таблица волатильности актива
        side: BULL или BEAR
        signal: BUY, SELL или NONE
        period_change_ratio: Нижний порог изменения цены
        config: Конфигурация движка

    Returns:
        ClaimPriceRange; граница с пустым источником равна 0

    Raises:
        InvalidInputError: Некорректные p_market, порог, side/signal или отсутствие таблицы
    """
    market_price = validate_positive(p_market, "p_market")
    threshold = validate_non_negative(period_change_ratio, "period_change_ratio")
    samples = _require_table(table)
    insurance_side = coerce_enum(InsuranceSide, side, "side")
    trade_signal = coerce_enum(TradeSignal, signal, "signal")

    sorted_list = sorted(
        s.period_change_ratio for s in samples if s.period_change_ratio >= threshold
    )
    filtered_list = [v for v in sorted_list if v < MAX_BEAR_CHANGE_RATIO]

    multiplier = CLAIM_SKEW.get((trade_signal, insurance_side), UNSKEWED_MULTIPLIER)

    if insurance_side == InsuranceSide.BULL:
        min_source = sorted_list[0] if sorted_list else None
        max_source = sorted_list[-1] if sorted_list else None
    else:
        min_source = filtered_list[-1] if filtered_list else None
        max_source = sorted_list[0] if sorted_list else None

    claim_range = ClaimPriceRange(
        claim_price_min=_claim_bound(min_source, multiplier, insurance_side, market_price, config),
        claim_price_max=_claim_bound(max_source, multiplier, insurance_side, market_price, config),
    )
    logger.debug(
        "claim range %s..%s (side=%s, signal=%s, samples=%d, eligible=%d)",
        claim_range.claim_price_min,
        claim_range.claim_price_max,
        insurance_side.value,
        trade_signal.value,
        len(samples),
        len(sorted_list),
    )
    return claim_range
