"""Юнит-тесты для Expiration"""

from decimal import Decimal

import pytest

from src.core.domain import PeriodUnit
from src.core.errors import InvalidInputError
from src.insurance.config import DEFAULT_CONFIG
from src.insurance.expiration import (
    MS_PER_DAY,
    MS_PER_HOUR,
    calculate_expired,
    current_ts_utc_ms,
    parse_period,
    validate_period,
)

NOW_MS = 1700000000000


class TestCalculateExpired:
    """Тесты calculate_expired"""

    def test_hours(self) -> None:
        assert calculate_expired(4, PeriodUnit.HOUR, NOW_MS) == NOW_MS + 4 * 3_600_000

    def test_days(self) -> None:
        assert calculate_expired(2, "days", NOW_MS) == NOW_MS + 2 * 86_400_000

    def test_string_period(self) -> None:
        """Период из внешнего строкового представления"""
        assert calculate_expired("12", "hours", NOW_MS) == NOW_MS + 12 * MS_PER_HOUR

    def test_defaults_to_current_time(self) -> None:
        before = current_ts_utc_ms()
        expired = calculate_expired(1, "days")
        after = current_ts_utc_ms()

        assert before + MS_PER_DAY <= expired <= after + MS_PER_DAY

    @pytest.mark.parametrize("period", ["abc", "", "1.5", 1.5, None, True])
    def test_non_numeric_period_rejected(self, period) -> None:
        with pytest.raises(InvalidInputError):
            calculate_expired(period, "hours", NOW_MS)

    @pytest.mark.parametrize("period", [0, -3, "0"])
    def test_non_positive_period_rejected(self, period) -> None:
        with pytest.raises(InvalidInputError, match="positive"):
            calculate_expired(period, "hours", NOW_MS)

    def test_unknown_unit_rejected(self) -> None:
        with pytest.raises(InvalidInputError, match="period_unit"):
            calculate_expired(1, "minutes", NOW_MS)


class TestPeriodValidation:
    """Тесты parse_period и validate_period"""

    def test_parse_integral_decimal(self) -> None:
        assert parse_period(Decimal("7")) == 7
        assert parse_period(" 15 ") == 15

    def test_bounds(self) -> None:
        assert validate_period(DEFAULT_CONFIG.min_period) == 1
        assert validate_period("15") == 15

        with pytest.raises(InvalidInputError, match="outside"):
            validate_period(16)

    def test_custom_bounds(self) -> None:
        config = DEFAULT_CONFIG.with_overrides(min_period=2, max_period=4)

        assert validate_period(3, config=config) == 3
        with pytest.raises(InvalidInputError):
            validate_period(1, config=config)
