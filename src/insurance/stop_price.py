"""
StopPrice — цена stop-loss страхуемой позиции.

Бычье движение (p_claim > p_open):
    p_stop = p_open - p_open * ratio_profit * diff_stop
Иначе:
    p_stop = p_open + p_open * ratio_profit * diff_stop
"""

import logging
from decimal import Decimal, localcontext
from typing import Optional

from src.core.math.numerical_safeguards import (
    ENGINE_CONTEXT,
    Numeric,
    to_double_precision,
    validate_positive,
)
from src.insurance.ratio import calculate_ratio_profit, get_diff_stop

logger = logging.getLogger(__name__)


def calculate_p_stop(
    p_open: Numeric,
    p_claim: Numeric,
    hedge: Optional[Numeric] = None,
) -> Decimal:
    """
    Цена stop-loss, направленная по стороне движения.

    Args:
        p_open: Цена открытия (> 0)
        p_claim: Цена claim (> 0)
        hedge: Принимается для совместимости контракта, в формуле не участвует

    Returns:
        p_stop

    Raises:
        InvalidInputError: Если p_open или p_claim <= 0
    """
    open_price = validate_positive(p_open, "p_open")
    claim_price = validate_positive(p_claim, "p_claim")

    ratio_profit = calculate_ratio_profit(open_price, claim_price)
    diff_stop = get_diff_stop(ratio_profit)

    with localcontext(ENGINE_CONTEXT):
        distance = open_price * ratio_profit * diff_stop
        if claim_price > open_price:
            p_stop = open_price - distance
        else:
            p_stop = open_price + distance

    logger.debug(
        "p_stop=%s (p_open=%s, p_claim=%s, ratio_profit=%s, diff_stop=%s)",
        p_stop, open_price, claim_price, ratio_profit, diff_stop,
    )
    return to_double_precision(p_stop)
