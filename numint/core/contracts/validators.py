"""
JSON Schema Contract Validators

Модуль для валидации batch-запросов на интегрирование согласно формальным
JSON Schema контрактам. Использует библиотеку jsonschema.

Схемы:
- integration_request.json (функция, интервалы, стратегия, throttle)
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем (устанавливаются
    вместе с пакетом как package data).
    """

    def __init__(self, schema_dir: Union[Path, str, None] = None):
        self._schema_dir = Path(schema_dir) if schema_dir else Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'integration_request')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

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

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """True если данные валидны (без exception)."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class IntegrationRequestValidator(ContractValidator):
    """Валидатор для integration_request контракта."""

    def __init__(self):
        super().__init__("integration_request")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_integration_request(data: Dict[str, Any]) -> None:
    """
    Валидация integration_request данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    IntegrationRequestValidator().validate(data)


def load_integration_request(path: Union[Path, str]) -> Dict[str, Any]:
    """
    Чтение и валидация batch-запроса из JSON файла.

    Raises:
        FileNotFoundError: Если файл не найден
        json.JSONDecodeError: Если файл не является валидным JSON
        ValidationError: Если данные не соответствуют схеме
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    validate_integration_request(data)
    return data

