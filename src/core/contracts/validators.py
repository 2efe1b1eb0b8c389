"""
JSON Schema Contract Validators

Модуль для валидации внешних payload согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- volatility_table.json (таблица волатильности актива от market-data feed)
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from src.core.domain.insurance import VolatilitySample
from src.core.errors import InvalidInputError
from src.core.math.numerical_safeguards import to_decimal


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'volatility_table')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class VolatilityTableValidator(ContractValidator):
    """Валидатор для volatility_table контракта."""

    def __init__(self):
        super().__init__("volatility_table")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_volatility_table(data: Any) -> None:
    """
    Валидация сырой таблицы волатильности.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    VolatilityTableValidator().validate(data)


def load_volatility_table(rows: Iterable[Dict[str, Any]]) -> List[VolatilitySample]:
    """
    Конверсия сырых строк feed в VolatilitySample.

    Строки сначала проверяются по контракту volatility_table;
    periodChangeRatio переводится в Decimal без потери точности.

    Args:
        rows: Строки вида {"period": 1, "periodUnit": "hours", "periodChangeRatio": 0.03}

    Returns:
        Список выборок в исходном порядке

    Raises:
        InvalidInputError: Если таблица отсутствует или нарушает контракт
    """
    if rows is None:
        raise InvalidInputError("volatility table is required")

    data = list(rows)
    try:
        validate_volatility_table(data)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid volatility table: {e.message}") from e

    return [
        VolatilitySample(
            period=row["period"],
            period_unit=row["periodUnit"],
            period_change_ratio=to_decimal(row["periodChangeRatio"], "periodChangeRatio"),
        )
        for row in data
    ]
