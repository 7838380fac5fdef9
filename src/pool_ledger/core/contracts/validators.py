"""
JSON Schema Contract Validators

Модуль для валидации сырых JSON payload, приходящих от вызывающего слоя
(HTTP handlers, файлы резервных копий), до построения Pydantic моделей.
Использует библиотеку jsonschema.

Схемы (schema/ рядом с модулем):
- pool_state.json
- investor.json
- reinvestment_request.json
- commission_batch.json
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются как package data в каталоге schema/ рядом с модулем.
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
            schema_name: Имя схемы без расширения (например, 'pool_state')

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

        # meta-validation
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

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
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class PoolStateValidator(ContractValidator):
    """Валидатор для pool_state контракта."""

    def __init__(self):
        super().__init__("pool_state")


class InvestorValidator(ContractValidator):
    """Валидатор для investor контракта."""

    def __init__(self):
        super().__init__("investor")


class ReinvestmentRequestValidator(ContractValidator):
    """Валидатор для reinvestment_request контракта."""

    def __init__(self):
        super().__init__("reinvestment_request")


class CommissionBatchValidator(ContractValidator):
    """Валидатор для commission_batch контракта."""

    def __init__(self):
        super().__init__("commission_batch")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_pool_state(data: Dict[str, Any]) -> None:
    """
    Валидация pool_state данных.

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    PoolStateValidator().validate(data)


def validate_investor(data: Dict[str, Any]) -> None:
    """
    Валидация investor данных.

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    InvestorValidator().validate(data)


def validate_reinvestment_request(data: Dict[str, Any]) -> None:
    """
    Валидация reinvestment_request данных.

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    ReinvestmentRequestValidator().validate(data)


def validate_commission_batch(data: Dict[str, Any]) -> None:
    """
    Валидация commission_batch данных.

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    CommissionBatchValidator().validate(data)
