"""Общие fixtures: таблица волатильности актива (1h … 15d)."""

import pytest

from src.core.contracts import load_volatility_table


@pytest.fixture
def volatility_rows() -> list[dict]:
    """Сырые строки таблицы волатильности в формате market-data feed."""
    return [
        {"period": 1, "periodUnit": "hours", "periodChangeRatio": 0.03},
        {"period": 4, "periodUnit": "hours", "periodChangeRatio": 0.0409},
        {"period": 12, "periodUnit": "hours", "periodChangeRatio": 0.1823},
        {"period": 1, "periodUnit": "days", "periodChangeRatio": 0.0912},
        {"period": 2, "periodUnit": "days", "periodChangeRatio": 0.16872},
        {"period": 3, "periodUnit": "days", "periodChangeRatio": 0.24624},
        {"period": 4, "periodUnit": "days", "periodChangeRatio": 0.32376},
        {"period": 5, "periodUnit": "days", "periodChangeRatio": 0.40128},
        {"period": 6, "periodUnit": "days", "periodChangeRatio": 0.4788},
        {"period": 7, "periodUnit": "days", "periodChangeRatio": 0.55632},
        {"period": 8, "periodUnit": "days", "periodChangeRatio": 0.63384},
        {"period": 9, "periodUnit": "days", "periodChangeRatio": 0.71136},
        {"period": 10, "periodUnit": "days", "periodChangeRatio": 0.78888},
        {"period": 11, "periodUnit": "days", "periodChangeRatio": 0.8664},
        {"period": 12, "periodUnit": "days", "periodChangeRatio": 0.94392},
        {"period": 13, "periodUnit": "days", "periodChangeRatio": 1.02144},
        {"period": 14, "periodUnit": "days", "periodChangeRatio": 1.09896},
        {"period": 15, "periodUnit": "days", "periodChangeRatio": 1.17648},
    ]


@pytest.fixture
def volatility_table(volatility_rows):
    """Таблица волатильности как список VolatilitySample."""
    return load_volatility_table(volatility_rows)
