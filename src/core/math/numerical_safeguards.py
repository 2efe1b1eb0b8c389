"""
Numerical Safeguards — Decimal-примитивы для ценовых формул

Модуль обеспечивает воспроизводимость всех денежных вычислений:
- Конверсия входов в Decimal (float через кратчайший repr, не через бинарное значение)
- Точные умножение/сложение/вычитание в локальном контексте (50 значащих цифр)
- Деление с округлением ROUND_HALF_UP до 20 знаков после запятой
- Типизированная ошибка вместо деления на ноль
- Публикация результата с точностью IEEE-754 double

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль никогда не происходит (ZeroDenominatorError)
2. NaN/Inf никогда не попадают в вычисления (InvalidInputError)
3. Float не используется для арифметики цен и коэффициентов
4. Все операции детерминированы: одинаковые входы дают одинаковые Decimal
"""

import math
from decimal import (
    ROUND_FLOOR,
    ROUND_HALF_UP,
    Context,
    Decimal,
    InvalidOperation,
    localcontext,
)
from typing import Final, Union

from src.core.errors import InvalidInputError, ZeroDenominatorError

Numeric = Union[Decimal, int, float, str]

# =============================================================================
# ПАРАМЕТРЫ КОНТЕКСТА
# =============================================================================

# Точность достаточна, чтобы умножение и сложение цен оставались точными
DECIMAL_PRECISION: Final[int] = 50

# Количество знаков после запятой при делении
DIVISION_PLACES: Final[int] = 20

DIVISION_QUANTUM: Final[Decimal] = Decimal(1).scaleb(-DIVISION_PLACES)

ENGINE_CONTEXT: Final[Context] = Context(prec=DECIMAL_PRECISION, rounding=ROUND_HALF_UP)


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


def to_decimal(value: Numeric, name: str = "value") -> Decimal:
    """
    Конверсия входного значения в конечный Decimal.

    float конвертируется через repr (0.05 → Decimal("0.05")), чтобы
    не протаскивать в расчёт двоичную погрешность.

    Args:
        value: Decimal, int, float или числовая строка
        name: Имя параметра для сообщения об ошибке

    Returns:
        Конечный Decimal

    Raises:
        InvalidInputError: Если значение нечисловое, NaN или Inf
    """
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be numeric, got bool {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidInputError(f"{name} must be numeric, got {value!r}") from None
    else:
        raise InvalidInputError(
            f"{name} must be numeric, got {type(value).__name__}"
        )

    if not result.is_finite():
        raise InvalidInputError(f"{name} must be finite, got {value!r}")

    return result


def to_double_precision(value: Decimal) -> Decimal:
    """
    Округление результата до ближайшего IEEE-754 double.

    Возвращает Decimal с кратчайшим десятичным представлением этого double,
    например Decimal("56344.872"). С этой точностью публикуется результат
    каждой операции движка, и именно её потребляют составные формулы.

    Raises:
        InvalidInputError: Если значение не представимо конечным double

    Examples:
        >>> to_double_precision(Decimal("0.03202846975088967972"))
        Decimal('0.03202846975088968')
    """
    as_double = float(value)
    if not math.isfinite(as_double):
        raise InvalidInputError(f"Result {value} exceeds double range")
    return Decimal(repr(as_double))


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def safe_divide(numerator: Numeric, denominator: Numeric, name: str = "denominator") -> Decimal:
    """
    Деление с округлением ROUND_HALF_UP до DIVISION_PLACES знаков.

    Args:
        numerator: Числитель
        denominator: Знаменатель
        name: Имя знаменателя для сообщения об ошибке

    Returns:
        Частное, квантованное до 1e-20

    Raises:
        ZeroDenominatorError: Если знаменатель равен нулю
        InvalidInputError: Если частное не помещается в DECIMAL_PRECISION цифр
    """
    num = to_decimal(numerator, "numerator")
    denom = to_decimal(denominator, name)

    if denom == 0:
        raise ZeroDenominatorError(f"Division by zero: {name} is 0")

    with localcontext(ENGINE_CONTEXT):
        try:
            return (num / denom).quantize(DIVISION_QUANTUM, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            raise InvalidInputError(
                f"Quotient {num} / {denom} is out of range"
            ) from None


def floor_to_int(value: Decimal) -> int:
    """Округление вниз до целого (Math.floor)."""
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_positive(value: Numeric, name: str) -> Decimal:
    """
    Проверка, что значение строго положительно.

    Returns:
        Значение в виде Decimal

    Raises:
        InvalidInputError: Если значение нечисловое или <= 0
    """
    result = to_decimal(value, name)
    if result <= 0:
        raise InvalidInputError(f"{name} must be positive, got {value}")
    return result


def validate_non_negative(value: Numeric, name: str) -> Decimal:
    """
    Проверка, что значение неотрицательно.

    Raises:
        InvalidInputError: Если значение нечисловое или < 0
    """
    result = to_decimal(value, name)
    if result < 0:
        raise InvalidInputError(f"{name} must be non-negative, got {value}")
    return result
