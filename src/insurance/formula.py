"""
InsuranceFormula — фасад движка, привязанный к одной конфигурации.

Экземпляр immutable: все методы — чистые функции входов и config.
Безопасен для одновременного использования из любого числа потоков.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Sequence, Union

from src.core.domain.insurance import (
    ClaimPriceRange,
    InsurancePosition,
    InsuranceQuote,
    InsuranceSide,
    PeriodUnit,
    QClaimTier,
    RiskState,
    TradeSignal,
    VolatilitySample,
)
from src.core.math.numerical_safeguards import Numeric
from src.insurance import claim_range, expiration, leverage, quantity, ratio, stop_price, system_risk
from src.insurance.config import DEFAULT_CONFIG, InsuranceConfig


@dataclass(frozen=True)
class InsuranceFormula:
    """Формулы страхования цены с явной конфигурацией."""

    config: InsuranceConfig = field(default_factory=lambda: DEFAULT_CONFIG)

    # --- ratio / tiers -------------------------------------------------------

    def calculate_ratio_profit(self, p_open: Numeric, p_claim: Numeric) -> Decimal:
        return ratio.calculate_ratio_profit(p_open, p_claim)

    def get_diff_stop(self, ratio_profit: Numeric) -> Decimal:
        return ratio.get_diff_stop(ratio_profit)

    def calculate_diff_claim(self, ratio_profit: Numeric) -> Decimal:
        return ratio.calculate_diff_claim(ratio_profit)

    # --- stop / risk / capital ----------------------------------------------

    def calculate_p_stop(
        self, p_open: Numeric, p_claim: Numeric, hedge: Optional[Numeric] = None
    ) -> Decimal:
        return stop_price.calculate_p_stop(p_open, p_claim, hedge)

    def calculate_system_risk(
        self,
        day_change_token: Numeric,
        ratio_profit: Numeric,
        p_stop: Optional[Numeric] = None,
        p_open: Optional[Numeric] = None,
    ) -> Decimal:
        return system_risk.calculate_system_risk(
            day_change_token, ratio_profit, p_stop=p_stop, p_open=p_open
        )

    def calculate_system_capital(
        self,
        margin: Numeric,
        ratio_profit: Numeric,
        day_change_token: Numeric,
        p_stop: Optional[Numeric] = None,
        p_open: Optional[Numeric] = None,
    ) -> Decimal:
        return system_risk.calculate_system_capital(
            margin,
            ratio_profit,
            day_change_token,
            p_stop=p_stop,
            p_open=p_open,
            config=self.config,
        )

    def calculate_risk_state(
        self,
        p_open: Numeric,
        p_claim: Numeric,
        margin: Numeric,
        day_change_token: Numeric,
    ) -> RiskState:
        return system_risk.calculate_risk_state(
            p_open, p_claim, margin, day_change_token, config=self.config
        )

    # --- leverage / quantity -------------------------------------------------

    def calculate_leverage(self, ratio_profit: Numeric) -> int:
        return leverage.calculate_leverage(ratio_profit)

    def calculate_stop_leverage(self, p_open: Numeric, p_stop: Numeric) -> int:
        return leverage.calculate_stop_leverage(p_open, p_stop)

    def select_q_claim_tier(self, hedge: Numeric, period_unit: PeriodUnit | str) -> QClaimTier:
        return quantity.select_q_claim_tier(hedge, period_unit, config=self.config)

    def calculate_q_claim(
        self,
        margin: Numeric,
        p_open: Numeric,
        p_claim: Numeric,
        hedge: Numeric,
        day_change_token: Numeric,
        period_unit: PeriodUnit | str,
    ) -> Decimal:
        return quantity.calculate_q_claim(
            margin, p_open, p_claim, hedge, day_change_token, period_unit, config=self.config
        )

    def calculate_quantity_future(
        self,
        p_open: Numeric,
        p_claim: Numeric,
        hedge: Numeric,
        margin: Numeric,
        day_change_token: Numeric,
    ) -> Decimal:
        return quantity.calculate_quantity_future(
            p_open, p_claim, hedge, margin, day_change_token, config=self.config
        )

    def calculate_p_refund(self, p_open: Numeric, p_claim: Numeric) -> Decimal:
        return quantity.calculate_p_refund(p_open, p_claim, config=self.config)

    def calculate_hedge(self, quantity_a: Numeric, quantity_b: Numeric) -> Decimal:
        return quantity.calculate_hedge(quantity_a, quantity_b)

    # --- claim range / expiration -------------------------------------------

    def get_available_period(
        self, side: InsuranceSide | str, table: Sequence[VolatilitySample]
    ) -> list[VolatilitySample]:
        return claim_range.get_available_period(side, table)

    def get_distance_p_claim(
        self,
        p_market: Numeric,
        table: Sequence[VolatilitySample],
        side: InsuranceSide | str,
        signal: TradeSignal | str,
        period_change_ratio: Numeric,
    ) -> ClaimPriceRange:
        return claim_range.get_distance_p_claim(
            p_market, table, side, signal, period_change_ratio, config=self.config
        )

    def validate_period(self, period: Union[int, str, Decimal]) -> int:
        return expiration.validate_period(period, config=self.config)

    def calculate_expired(
        self,
        period: Union[int, str, Decimal],
        period_unit: PeriodUnit | str,
        now_ts_utc_ms: Optional[int] = None,
    ) -> int:
        return expiration.calculate_expired(period, period_unit, now_ts_utc_ms)

    # --- composite -----------------------------------------------------------

    def quote_position(
        self,
        position: InsurancePosition,
        p_open: Numeric,
        p_claim: Numeric,
        day_change_token: Numeric,
        now_ts_utc_ms: Optional[int] = None,
    ) -> InsuranceQuote:
        """
        Полный расчёт страховки позиции.

        Период проверяется на границы config до любых вычислений.
        """
        period = self.validate_period(position.period)

        return InsuranceQuote(
            p_open=p_open,
            p_claim=p_claim,
            p_stop=self.calculate_p_stop(p_open, p_claim, position.hedge),
            p_refund=self.calculate_p_refund(p_open, p_claim),
            q_claim=self.calculate_q_claim(
                position.margin,
                p_open,
                p_claim,
                position.hedge,
                day_change_token,
                position.period_unit,
            ),
            risk_state=self.calculate_risk_state(
                p_open, p_claim, position.margin, day_change_token
            ),
            expired_ts_utc_ms=self.calculate_expired(
                period, position.period_unit, now_ts_utc_ms
            ),
        )
