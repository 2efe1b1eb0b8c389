"""
SystemRisk — риск страховщика и требуемый системный капитал.

ФОРМУЛЫ:
    percent_p_expired = ratio_profit * diff_stop
    system_risk       = day_change_token / percent_p_expired

    system_risk >  risk_config: capital = margin * risk_config / system_risk
    system_risk <= risk_config: capital = margin + (risk_config - system_risk) * margin

Функция капитала разрывна в точке system_risk == risk_config; предикат
ветвления строгий (>).
"""

import logging
from decimal import Decimal, localcontext
from typing import Optional

from src.core.domain.insurance import RiskState
from src.core.errors import ZeroDenominatorError
from src.core.math.numerical_safeguards import (
    ENGINE_CONTEXT,
    Numeric,
    safe_divide,
    to_decimal,
    to_double_precision,
    validate_positive,
)
from src.insurance.config import DEFAULT_CONFIG, InsuranceConfig
from src.insurance.leverage import calculate_leverage
from src.insurance.ratio import calculate_ratio_profit, get_diff_stop

logger = logging.getLogger(__name__)


def calculate_system_risk(
    day_change_token: Numeric,
    ratio_profit: Numeric,
    p_stop: Optional[Numeric] = None,
    p_open: Optional[Numeric] = None,
) -> Decimal:
    """
    Подразумеваемая экспозиция страховщика.

    Args:
        day_change_token: Дневное изменение цены токена (proxy funding-rate)
        ratio_profit: Доля движения цены
        p_stop: Не участвует в формуле, сохранён для совместимости контракта
        p_open: Не участвует в формуле, сохранён для совместимости контракта

    Raises:
        ZeroDenominatorError: Если ratio_profit == 0
    """
    token = to_decimal(day_change_token, "day_change_token")
    ratio = to_decimal(ratio_profit, "ratio_profit")
    diff_stop = get_diff_stop(ratio)

    with localcontext(ENGINE_CONTEXT):
        percent_p_expired = ratio * diff_stop

    if percent_p_expired == 0:
        raise ZeroDenominatorError(
            "System risk is undefined for zero ratio_profit; guard zero-move inputs"
        )

    system_risk = to_double_precision(
        safe_divide(token, percent_p_expired, "percent_p_expired")
    )
    logger.debug(
        "system_risk=%s (day_change_token=%s, ratio_profit=%s, diff_stop=%s)",
        system_risk, token, ratio, diff_stop,
    )
    return system_risk


def calculate_system_capital(
    margin: Numeric,
    ratio_profit: Numeric,
    day_change_token: Numeric,
    p_stop: Optional[Numeric] = None,
    p_open: Optional[Numeric] = None,
    config: InsuranceConfig = DEFAULT_CONFIG,
) -> Decimal:
    """
    Системный капитал, подкрепляющий позицию.

    При превышении потолка капитал сжимается пропорционально риску,
    иначе растёт на неиспользованный запас риска.

    Raises:
        InvalidInputError: Если margin <= 0
        ZeroDenominatorError: Если ratio_profit == 0
    """
    margin_value = validate_positive(margin, "margin")
    system_risk = calculate_system_risk(
        day_change_token, ratio_profit, p_stop=p_stop, p_open=p_open
    )
    risk_ceiling = config.risk_config

    if system_risk > risk_ceiling:
        with localcontext(ENGINE_CONTEXT):
            scaled_margin = margin_value * risk_ceiling
        capital = safe_divide(scaled_margin, system_risk, "system_risk")
    else:
        with localcontext(ENGINE_CONTEXT):
            capital = margin_value + (risk_ceiling - system_risk) * margin_value

    return to_double_precision(capital)


def calculate_risk_state(
    p_open: Numeric,
    p_claim: Numeric,
    margin: Numeric,
    day_change_token: Numeric,
    config: InsuranceConfig = DEFAULT_CONFIG,
) -> RiskState:
    """
    Производное состояние риска позиции.

    Последовательность: ratio_profit → diff_stop → system_risk →
    system_capital → leverage.
    """
    ratio_profit = calculate_ratio_profit(p_open, p_claim)
    system_risk = calculate_system_risk(day_change_token, ratio_profit)

    return RiskState(
        ratio_profit=ratio_profit,
        diff_stop=get_diff_stop(ratio_profit),
        system_risk=system_risk,
        system_capital=calculate_system_capital(
            margin, ratio_profit, day_change_token, config=config
        ),
        leverage=calculate_leverage(ratio_profit),
    )
