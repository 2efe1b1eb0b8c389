"""
Expiration — абсолютный момент окончания страховки.

expired = now + period * 1h   (HOUR)
expired = now + period * 24h  (DAY)

Время — UTC epoch в миллисекундах.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Final, Optional, Union

from src.core.domain.insurance import PeriodUnit, coerce_enum
from src.core.errors import InvalidInputError
from src.insurance.config import DEFAULT_CONFIG, InsuranceConfig

MS_PER_HOUR: Final[int] = 60 * 60 * 1000
MS_PER_DAY: Final[int] = 24 * MS_PER_HOUR

_UNIT_DURATION_MS: Final[dict[PeriodUnit, int]] = {
    PeriodUnit.HOUR: MS_PER_HOUR,
    PeriodUnit.DAY: MS_PER_DAY,
}


def parse_period(period: Union[int, str, Decimal]) -> int:
    """
    Приведение внешнего представления периода к положительному int.

    Raises:
        InvalidInputError: Если период нечисловой, дробный или <= 0
    """
    if isinstance(period, bool):
        raise InvalidInputError(f"period must be an integer, got bool {period!r}")

    if isinstance(period, int):
        value = period
    elif isinstance(period, str) and period.strip().isdecimal():
        value = int(period.strip())
    elif isinstance(period, Decimal) and period.is_finite() and period == period.to_integral_value():
        value = int(period)
    else:
        raise InvalidInputError(f"period must be an integer, got {period!r}")

    if value <= 0:
        raise InvalidInputError(f"period must be positive, got {value}")

    return value


def validate_period(
    period: Union[int, str, Decimal],
    config: InsuranceConfig = DEFAULT_CONFIG,
) -> int:
    """
    Проверка периода на вхождение в [min_period, max_period].

    Raises:
        InvalidInputError: Если период некорректен или вне границ
    """
    value = parse_period(period)
    if not config.min_period <= value <= config.max_period:
        raise InvalidInputError(
            f"period {value} outside [{config.min_period}, {config.max_period}]"
        )
    return value


def current_ts_utc_ms() -> int:
    """Текущее время UTC в миллисекундах."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def calculate_expired(
    period: Union[int, str, Decimal],
    period_unit: PeriodUnit | str,
    now_ts_utc_ms: Optional[int] = None,
) -> int:
    """
    Момент окончания страховки (UTC, миллисекунды).

    Args:
        period: Длительность (int или числовая строка)
        period_unit: hours или days
        now_ts_utc_ms: Точка отсчёта; по умолчанию текущее время

    Raises:
        InvalidInputError: Нечисловой период или неизвестная единица
    """
    value = parse_period(period)
    unit = coerce_enum(PeriodUnit, period_unit, "period_unit")
    start = current_ts_utc_ms() if now_ts_utc_ms is None else now_ts_utc_ms

    return start + value * _UNIT_DURATION_MS[unit]
