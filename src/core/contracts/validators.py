"""
JSON Schema Contract Validators

Проверка экспортируемых данных swap coordinator по JSON Schema контрактам
(jsonschema, Draft 2020-12). Схемы поставляются вместе с пакетом:

- schema/swap_snapshot.json (SwapSnapshot)
- schema/swap_event.json (NewOffer, OfferDeclined, OfferAccepted, PaymentSettled, SwapSettled)
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import jsonschema
from jsonschema import Draft202012Validator
from pydantic import BaseModel


SCHEMA_DIR = Path(__file__).parent / "schema"


class SchemaLoader:
    """Загрузчик и кэш контрактов из каталога схем (по умолчанию SCHEMA_DIR)."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = Path(schema_dir) if schema_dir is not None else SCHEMA_DIR
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def available(self) -> List[str]:
        """Имена контрактов без расширения."""
        return sorted(path.stem for path in self._schema_dir.glob("*.json"))

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Raises:
            FileNotFoundError: контракта schema_name нет в каталоге
            ValueError: файл не является валидной JSON Schema
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_path.name}: {e.message}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


class ContractValidator:
    """Контракт swap coordinator: dict-данные или pydantic модель против схемы."""

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self.schema = (loader or _SCHEMA_LOADER).load_schema(schema_name)
        self._validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: первое найденное нарушение контракта
        """
        self._validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self._validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[jsonschema.ValidationError]:
        return self._validator.iter_errors(data)

    def validate_model(self, model: BaseModel) -> Dict[str, Any]:
        """JSON-представление модели (model_dump(mode="json")) после проверки."""
        data = model.model_dump(mode="json")
        self._validator.validate(data)
        return data


class SwapSnapshotValidator(ContractValidator):
    def __init__(self, loader: Optional[SchemaLoader] = None):
        super().__init__("swap_snapshot", loader)


class SwapEventValidator(ContractValidator):
    def __init__(self, loader: Optional[SchemaLoader] = None):
        super().__init__("swap_event", loader)


SNAPSHOT_CONTRACT = SwapSnapshotValidator()
EVENT_CONTRACT = SwapEventValidator()


def validate_swap_snapshot(data: Dict[str, Any]) -> None:
    """
    Args:
        data: например, coordinator.snapshot().model_dump(mode="json")

    Raises:
        ValidationError: данные не соответствуют swap_snapshot
    """
    SNAPSHOT_CONTRACT.validate(data)


def validate_swap_event(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: данные не соответствуют swap_event
    """
    EVENT_CONTRACT.validate(data)
