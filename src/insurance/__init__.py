"""
Insurance — формульный движок страхования цены.

Цепочка расчёта:
    p_open/p_claim → ratio_profit → diff_stop → p_stop
    (ratio_profit, day_change_token) → system_risk → system_capital
    (capital, leverage, ratio_profit) → q_claim / quantity_future

Диапазон цены claim и момент окончания — независимые ветви.
"""

from src.insurance.claim_range import get_available_period, get_distance_p_claim
from src.insurance.config import DEFAULT_CONFIG, InsuranceConfig
from src.insurance.expiration import calculate_expired, parse_period, validate_period
from src.insurance.formula import InsuranceFormula
from src.insurance.leverage import calculate_leverage, calculate_stop_leverage
from src.insurance.quantity import (
    calculate_hedge,
    calculate_p_refund,
    calculate_q_claim,
    calculate_quantity_future,
    select_q_claim_tier,
)
from src.insurance.ratio import calculate_diff_claim, calculate_ratio_profit, get_diff_stop
from src.insurance.stop_price import calculate_p_stop
from src.insurance.system_risk import (
    calculate_risk_state,
    calculate_system_capital,
    calculate_system_risk,
)

__all__ = [
    # Config
    "DEFAULT_CONFIG",
    "InsuranceConfig",
    # Facade
    "InsuranceFormula",
    # Ratio / tiers
    "calculate_ratio_profit",
    "get_diff_stop",
    "calculate_diff_claim",
    # Stop price
    "calculate_p_stop",
    # System risk / capital
    "calculate_system_risk",
    "calculate_system_capital",
    "calculate_risk_state",
    # Leverage
    "calculate_leverage",
    "calculate_stop_leverage",
    # Quantity
    "select_q_claim_tier",
    "calculate_q_claim",
    "calculate_quantity_future",
    "calculate_p_refund",
    "calculate_hedge",
    # Claim range
    "get_available_period",
    "get_distance_p_claim",
    # Expiration
    "parse_period",
    "validate_period",
    "calculate_expired",
]
