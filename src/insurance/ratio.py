"""
Ratio — доля движения цены, ступень риска и дисконт выплаты.

ratio_profit = |p_claim - p_open| / p_open

Ступени diff_stop (порядок проверки фиксирован, границы несущие):
    r <= 0.04        → 1.5
    0.04 < r <= 0.1  → 1.48
    0.1 < r < 0.5    → 1.45
    иначе            → 1

diff_claim = 0.25 при r <= 0.04, иначе 0.2
"""

import logging
from decimal import Decimal, localcontext
from typing import Final

from src.core.math.numerical_safeguards import (
    ENGINE_CONTEXT,
    Numeric,
    safe_divide,
    to_decimal,
    to_double_precision,
    validate_positive,
)

logger = logging.getLogger(__name__)

# =============================================================================
# ГРАНИЦЫ СТУПЕНЕЙ
# =============================================================================

LOW_BAND_CEILING: Final[Decimal] = Decimal("0.04")
MID_BAND_CEILING: Final[Decimal] = Decimal("0.1")
HIGH_BAND_CEILING: Final[Decimal] = Decimal("0.5")

DIFF_STOP_LOW: Final[Decimal] = Decimal("1.5")
DIFF_STOP_MID: Final[Decimal] = Decimal("1.48")
DIFF_STOP_HIGH: Final[Decimal] = Decimal("1.45")
DIFF_STOP_DEFAULT: Final[Decimal] = Decimal(1)

DIFF_CLAIM_LOW: Final[Decimal] = Decimal("0.25")
DIFF_CLAIM_DEFAULT: Final[Decimal] = Decimal("0.2")


def calculate_ratio_profit(p_open: Numeric, p_claim: Numeric) -> Decimal:
    """
    Доля движения цены между открытием и claim.

    Всегда неотрицательна; направление движения определяется
    отдельно сравнением p_claim > p_open.

    Raises:
        InvalidInputError: Если p_open или p_claim <= 0
    """
    open_price = validate_positive(p_open, "p_open")
    claim_price = validate_positive(p_claim, "p_claim")

    with localcontext(ENGINE_CONTEXT):
        move = abs(claim_price - open_price)

    return to_double_precision(safe_divide(move, open_price, "p_open"))


def get_diff_stop(ratio_profit: Numeric) -> Decimal:
    """Ступень множителя риска для ratio_profit."""
    ratio = to_decimal(ratio_profit, "ratio_profit")

    if ratio <= LOW_BAND_CEILING:
        return DIFF_STOP_LOW
    elif MID_BAND_CEILING >= ratio > LOW_BAND_CEILING:
        return DIFF_STOP_MID
    elif HIGH_BAND_CEILING > ratio > MID_BAND_CEILING:
        return DIFF_STOP_HIGH

    logger.debug("ratio_profit %s falls into catch-all diff_stop tier", ratio)
    return DIFF_STOP_DEFAULT


def calculate_diff_claim(ratio_profit: Numeric) -> Decimal:
    """Доля дисконта выплаты."""
    ratio = to_decimal(ratio_profit, "ratio_profit")
    return DIFF_CLAIM_LOW if ratio <= LOW_BAND_CEILING else DIFF_CLAIM_DEFAULT
