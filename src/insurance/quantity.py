"""
Quantity — страхуемое количество, выплата claim и сопутствующие цены.

q_claim:
    hedge_capital = margin + system_capital
    profit        = ratio_profit * hedge_capital * leverage
    q_claim       = profit * (1 - diff_claim) * (1 - tier.x) + margin

quantity_future:
    qty = (margin + system_capital) * stop_leverage / p_open
"""

import logging
from decimal import Decimal, localcontext

from src.core.domain.insurance import PeriodUnit, QClaimTier, coerce_enum
from src.core.math.numerical_safeguards import (
    ENGINE_CONTEXT,
    Numeric,
    safe_divide,
    to_decimal,
    to_double_precision,
    validate_positive,
)
from src.insurance.config import DEFAULT_CONFIG, InsuranceConfig
from src.insurance.leverage import calculate_leverage, calculate_stop_leverage
from src.insurance.ratio import calculate_diff_claim, calculate_ratio_profit
from src.insurance.stop_price import calculate_p_stop
from src.insurance.system_risk import calculate_system_capital

logger = logging.getLogger(__name__)


def select_q_claim_tier(
    hedge: Numeric,
    period_unit: PeriodUnit | str,
    config: InsuranceConfig = DEFAULT_CONFIG,
) -> QClaimTier:
    """
    Строка lookup-таблицы с ближайшим к hedge значением.

    При равной дистанции побеждает строка, встретившаяся раньше.
    """
    hedge_value = to_decimal(hedge, "hedge")
    unit = coerce_enum(PeriodUnit, period_unit, "period_unit")
    table = config.q_claim_table(unit)

    selected = table[0]
    for tier in table[1:]:
        if abs(tier.hedge - hedge_value) < abs(selected.hedge - hedge_value):
            selected = tier

    logger.debug("hedge=%s matched q_claim tier %s (%s)", hedge_value, selected, unit.value)
    return selected


def calculate_q_claim(
    margin: Numeric,
    p_open: Numeric,
    p_claim: Numeric,
    hedge: Numeric,
    day_change_token: Numeric,
    period_unit: PeriodUnit | str,
    config: InsuranceConfig = DEFAULT_CONFIG,
) -> Decimal:
    """
    Выплата claim для позиции.

    Args:
        margin: Залог пользователя (> 0)
        p_open: Цена открытия (> 0)
        p_claim: Цена claim (> 0, != p_open)
        hedge: Отношение количеств для выбора строки lookup-таблицы
        day_change_token: Дневное изменение цены токена
        period_unit: Единица периода (выбирает часовую или дневную таблицу)
        config: Конфигурация движка

    Returns:
        Размер выплаты claim

    Raises:
        InvalidInputError: Некорректные цены, margin или period_unit
        ZeroDenominatorError: Если p_claim == p_open
    """
    margin_value = validate_positive(margin, "margin")
    tier = select_q_claim_tier(hedge, period_unit, config)

    p_stop = calculate_p_stop(p_open, p_claim, hedge)
    ratio_profit = calculate_ratio_profit(p_open, p_claim)
    system_capital = calculate_system_capital(
        margin_value,
        ratio_profit,
        day_change_token,
        p_stop=p_stop,
        p_open=p_open,
        config=config,
    )

    with localcontext(ENGINE_CONTEXT):
        hedge_capital = to_double_precision(margin_value + system_capital)
    leverage = calculate_leverage(ratio_profit)

    with localcontext(ENGINE_CONTEXT):
        profit = to_double_precision(ratio_profit * hedge_capital * leverage)

    diff_claim = calculate_diff_claim(ratio_profit)

    with localcontext(ENGINE_CONTEXT):
        q_claim = profit * (1 - diff_claim) * (1 - tier.x) + margin_value

    logger.debug(
        "q_claim=%s (hedge_capital=%s, leverage=%s, profit=%s, diff_claim=%s, x=%s)",
        q_claim, hedge_capital, leverage, profit, diff_claim, tier.x,
    )
    return to_double_precision(q_claim)


def calculate_quantity_future(
    p_open: Numeric,
    p_claim: Numeric,
    hedge: Numeric,
    margin: Numeric,
    day_change_token: Numeric,
    config: InsuranceConfig = DEFAULT_CONFIG,
) -> Decimal:
    """
    Количество фьючерса, покрываемое капиталом позиции.

    Использует плечо по дистанции до стопа, а не по ступени риска.
    """
    margin_value = validate_positive(margin, "margin")
    open_price = validate_positive(p_open, "p_open")

    p_stop = calculate_p_stop(open_price, p_claim, hedge)
    leverage = calculate_stop_leverage(open_price, p_stop)
    ratio_profit = calculate_ratio_profit(open_price, p_claim)
    system_capital = calculate_system_capital(
        margin_value,
        ratio_profit,
        day_change_token,
        p_stop=p_stop,
        p_open=open_price,
        config=config,
    )

    with localcontext(ENGINE_CONTEXT):
        hedge_capital = (margin_value + system_capital) * leverage

    return to_double_precision(safe_divide(hedge_capital, open_price, "p_open"))


def calculate_p_refund(
    p_open: Numeric,
    p_claim: Numeric,
    config: InsuranceConfig = DEFAULT_CONFIG,
) -> Decimal:
    """Цена возврата: p_open, сдвинутая на refund_ratio по направлению движения."""
    open_price = validate_positive(p_open, "p_open")
    claim_price = validate_positive(p_claim, "p_claim")

    with localcontext(ENGINE_CONTEXT):
        if claim_price > open_price:
            p_refund = open_price * (1 + config.refund_ratio)
        else:
            p_refund = open_price * (1 - config.refund_ratio)

    return to_double_precision(p_refund)


def calculate_hedge(quantity_a: Numeric, quantity_b: Numeric) -> Decimal:
    """
    Отношение двух количеств.

    Raises:
        ZeroDenominatorError: Если quantity_b == 0
    """
    return to_double_precision(safe_divide(quantity_a, quantity_b, "quantity_b"))
