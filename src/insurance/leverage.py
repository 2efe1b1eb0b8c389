"""
Leverage — два независимых расчёта максимального плеча.

- calculate_leverage: floor(1 / (ratio_profit * diff_stop)), путь q_claim
- calculate_stop_leverage: floor(p_open / |p_open - p_stop|), путь quantity_future

Формулы намеренно не объединены: у них разные потребители.
Floor берётся от частного, уже округлённого до double: 1 / (1/66 * 1.5) == 44.
"""

from decimal import localcontext

from src.core.errors import ZeroDenominatorError
from src.core.math.numerical_safeguards import (
    ENGINE_CONTEXT,
    Numeric,
    floor_to_int,
    safe_divide,
    to_decimal,
    to_double_precision,
    validate_positive,
)
from src.insurance.ratio import get_diff_stop


def calculate_leverage(ratio_profit: Numeric) -> int:
    """
    Плечо по доле движения и ступени риска.

    Raises:
        ZeroDenominatorError: Если ratio_profit == 0
    """
    ratio = to_decimal(ratio_profit, "ratio_profit")
    diff_stop = get_diff_stop(ratio)

    with localcontext(ENGINE_CONTEXT):
        percent_p_expired = to_double_precision(ratio * diff_stop)

    if percent_p_expired == 0:
        raise ZeroDenominatorError("Leverage is undefined for zero ratio_profit")

    quotient = to_double_precision(safe_divide(1, percent_p_expired, "percent_p_expired"))
    return floor_to_int(quotient)


def calculate_stop_leverage(p_open: Numeric, p_stop: Numeric) -> int:
    """
    Плечо по дистанции до стопа.

    Raises:
        InvalidInputError: Если p_open <= 0
        ZeroDenominatorError: Если p_stop == p_open
    """
    open_price = validate_positive(p_open, "p_open")
    stop_price = to_decimal(p_stop, "p_stop")

    with localcontext(ENGINE_CONTEXT):
        distance = abs(open_price - stop_price)

    if distance == 0:
        raise ZeroDenominatorError(
            f"Stop distance is zero (p_open={open_price}, p_stop={stop_price})"
        )

    return floor_to_int(to_double_precision(safe_divide(open_price, distance, "stop_distance")))
