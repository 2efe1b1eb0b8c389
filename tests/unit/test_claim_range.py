"""
Юнит-тесты для ClaimRange

Проверяет:
1. Фильтрацию периодов для BEAR (< 1)
2. Числовую (не лексикографическую) сортировку
3. Skew множителей по (signal, side)
4. Ограничение дистанции сверху ratio_different_price_claim
5. Нулевые границы при пустых источниках
"""

from decimal import Decimal

import pytest

from src.core.domain import ClaimPriceRange, InsuranceSide, PeriodUnit, TradeSignal, VolatilitySample
from src.core.errors import InvalidInputError
from src.insurance.claim_range import get_available_period, get_distance_p_claim
from src.insurance.config import DEFAULT_CONFIG


def _sample(ratio: str, period: int = 1) -> VolatilitySample:
    return VolatilitySample(
        period=period, period_unit=PeriodUnit.DAY, period_change_ratio=Decimal(ratio)
    )


class TestGetAvailablePeriod:
    """Тесты get_available_period"""

    def test_bear_drops_ratios_at_or_above_one(self, volatility_table) -> None:
        available = get_available_period(InsuranceSide.BEAR, volatility_table)

        assert len(available) == 15
        assert all(s.period_change_ratio < 1 for s in available)
        assert available[-1].period == 12

    def test_bull_returns_table_unchanged(self, volatility_table) -> None:
        assert get_available_period("BULL", volatility_table) == volatility_table

    def test_boundary_ratio_one_excluded(self) -> None:
        table = [_sample("0.99"), _sample("1"), _sample("1.01")]
        assert [s.period_change_ratio for s in get_available_period("BEAR", table)] == [
            Decimal("0.99")
        ]

    def test_missing_table_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            get_available_period(InsuranceSide.BEAR, None)

    def test_unknown_side_rejected(self, volatility_table) -> None:
        with pytest.raises(InvalidInputError, match="side"):
            get_available_period("SIDEWAYS", volatility_table)


class TestDistancePClaimBull:
    """BULL: (1 + gap) * p_market"""

    def test_buy_uses_half_multiplier(self, volatility_table) -> None:
        """min: 0.03 * 0.5 = 0.015; max: 1.17648 * 0.5 ограничено 0.022"""
        claim_range = get_distance_p_claim(100, volatility_table, "BULL", "BUY", 0)

        assert claim_range == ClaimPriceRange(
            claim_price_min=Decimal("101.5"), claim_price_max=Decimal("102.2")
        )

    def test_sell_uses_three_quarter_multiplier(self) -> None:
        table = [_sample("0.02"), _sample("0.028")]
        claim_range = get_distance_p_claim(100, table, InsuranceSide.BULL, TradeSignal.SELL, 0)

        assert claim_range.claim_price_min == Decimal("101.5")  # 0.02 * 0.75
        assert claim_range.claim_price_max == Decimal("102.1")  # 0.028 * 0.75

    def test_none_signal_is_unskewed(self) -> None:
        table = [_sample("0.01"), _sample("0.05")]
        claim_range = get_distance_p_claim(100, table, "BULL", "NONE", 0)

        assert claim_range.claim_price_min == Decimal("101")
        assert claim_range.claim_price_max == Decimal("102.2")

    def test_threshold_filters_samples(self, volatility_table) -> None:
        claim_range = get_distance_p_claim(0.3369, volatility_table, "BULL", "BUY", 1.09896)

        assert claim_range.claim_price_min == Decimal("0.3443118")
        assert claim_range.claim_price_max == Decimal("0.3443118")

    def test_gap_never_exceeds_configured_limit(self, volatility_table) -> None:
        """Дистанция ограничена сверху ratio_different_price_claim"""
        claim_range = get_distance_p_claim(100, volatility_table, "BULL", "NONE", 0)
        limit = (1 + DEFAULT_CONFIG.ratio_different_price_claim) * 100

        assert claim_range.claim_price_max <= limit
        assert claim_range.claim_price_min <= claim_range.claim_price_max

    def test_empty_source_gives_zero(self, volatility_table) -> None:
        """Порог выше всех выборок: обе границы 0, без ошибки"""
        claim_range = get_distance_p_claim(100, volatility_table, "BULL", "BUY", 5)

        assert claim_range.claim_price_min == 0
        assert claim_range.claim_price_max == 0


class TestDistancePClaimBear:
    """BEAR: (1 - gap) * p_market"""

    def test_sell_uses_half_multiplier(self, volatility_table) -> None:
        """min ← последний < 1 (0.94392, ограничено); max ← 0.03 * 0.5"""
        claim_range = get_distance_p_claim(100, volatility_table, "BEAR", "SELL", 0)

        assert claim_range.claim_price_min == Decimal("97.8")
        assert claim_range.claim_price_max == Decimal("98.5")

    def test_buy_uses_three_quarter_multiplier(self) -> None:
        table = [_sample("0.02"), _sample("0.028"), _sample("1.5")]
        claim_range = get_distance_p_claim(100, table, "BEAR", "BUY", 0)

        assert claim_range.claim_price_min == Decimal("97.9")  # 0.028 * 0.75
        assert claim_range.claim_price_max == Decimal("98.5")  # 0.02 * 0.75

    def test_empty_filtered_list_gives_zero_min(self, volatility_table) -> None:
        """Все выборки >= 1: claim_price_min = 0, max считается по sorted_list"""
        claim_range = get_distance_p_claim(0.3369, volatility_table, "BEAR", "BUY", 1.09896)

        assert claim_range.claim_price_min == 0
        assert claim_range.claim_price_max == Decimal("0.3294882")

    def test_empty_table_gives_zero_range(self) -> None:
        claim_range = get_distance_p_claim(100, [], "BEAR", "NONE", 0)
        assert claim_range.claim_price_min == claim_range.claim_price_max == 0


class TestDistancePClaimValidation:
    """Сортировка и валидация входов"""

    def test_numeric_sort(self) -> None:
        """'10' < '9' лексикографически, но не численно"""
        table = [_sample("0.9"), _sample("0.010"), _sample("0.1")]
        claim_range = get_distance_p_claim(100, table, "BULL", "NONE", 0)

        assert claim_range.claim_price_min == Decimal("101")  # 0.010
        assert claim_range.claim_price_max == Decimal("102.2")

    def test_unsorted_input_order_irrelevant(self, volatility_table) -> None:
        forward = get_distance_p_claim(100, volatility_table, "BEAR", "SELL", 0)
        backward = get_distance_p_claim(100, list(reversed(volatility_table)), "BEAR", "SELL", 0)
        assert forward == backward

    def test_non_positive_market_price_rejected(self, volatility_table) -> None:
        with pytest.raises(InvalidInputError):
            get_distance_p_claim(0, volatility_table, "BULL", "BUY", 0)

    def test_missing_table_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            get_distance_p_claim(100, None, "BULL", "BUY", 0)

    def test_unknown_signal_rejected(self, volatility_table) -> None:
        with pytest.raises(InvalidInputError, match="signal"):
            get_distance_p_claim(100, volatility_table, "BULL", "HOLD", 0)
