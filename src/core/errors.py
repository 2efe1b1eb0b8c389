"""
Типизированные ошибки формульного движка.

Каждая формула проверяет собственные предусловия и падает сразу,
не возвращая NaN/Infinity и не подставляя значения по умолчанию.
"""


class InsuranceFormulaError(Exception):
    """Базовая ошибка движка страховых формул."""


class InvalidInputError(InsuranceFormulaError, ValueError):
    """
    Некорректный вход: неположительная цена, нечисловой период,
    отсутствующая таблица волатильности, неизвестное значение enum.
    """


class ZeroDenominatorError(InsuranceFormulaError, ArithmeticError):
    """
    Деление на вычисленный нулевой знаменатель.

    Возникает при нулевом ratio_profit, нулевой дистанции до стопа
    или нулевом делителе hedge.
    """
