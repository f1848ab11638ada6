"""
JSON Schema Contract Validators

Модуль для валидации dict-payload'ов, которыми vault обменивается
с оркестрирующим кодом. Использует библиотеку jsonschema.

Схемы (contracts/schema/):
- asset.json — количество ресурса (amount строкой)
- claim_request.json — запрос на вывод
- vault_state.json — снапшот состояния vault
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        # Корень проекта: 4 уровня вверх от этого файла
        self._schema_dir = schema_dir or (
            Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        )
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
            schema_name: Имя схемы без расширения (например, 'asset')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-валидацию
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


_SCHEMA_LOADER: Optional[SchemaLoader] = None


def get_schema_loader() -> SchemaLoader:
    """Глобальный загрузчик (создаётся при первом обращении)."""
    global _SCHEMA_LOADER
    if _SCHEMA_LOADER is None:
        _SCHEMA_LOADER = SchemaLoader()
    return _SCHEMA_LOADER


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
        self.schema = get_schema_loader().load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class AssetValidator(ContractValidator):
    def __init__(self):
        super().__init__("asset")


class ClaimRequestValidator(ContractValidator):
    def __init__(self):
        super().__init__("claim_request")


class VaultStateValidator(ContractValidator):
    def __init__(self):
        super().__init__("vault_state")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_asset(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют схеме asset
    """
    AssetValidator().validate(data)


def validate_claim_request(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют схеме claim_request
    """
    ClaimRequestValidator().validate(data)


def validate_vault_state(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют схеме vault_state
    """
    VaultStateValidator().validate(data)
