"""
Контракты документов калькулятора (JSON Schema, Draft 2020-12)

Документы, которые уходят во внешние системы, проверяются по схемам
из src/core/contracts/schema/:
- saved_calculation.json: сохранённый расчёт (хранилище документов)
- report_row.json: строка результата (отчёт / PDF)

Схема читается с диска один раз на процесс; валидатор каждого контракта
создаётся один раз на класс.
"""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any, ClassVar, Dict, Final

import jsonschema
import structlog
from jsonschema import Draft202012Validator, ValidationError

logger = structlog.get_logger(__name__)

SCHEMA_DIR: Final[Path] = Path(__file__).parent / "schema"

ROOT_PATH: Final[str] = "<root>"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Кэширующее чтение схем из каталога.

    Каждая схема при первом чтении проходит meta-validation.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._cache: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def available(self) -> list[str]:
        """Имена схем в каталоге (без .json)."""
        return sorted(path.stem for path in self._schema_dir.glob("*.json"))

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени без расширения ('saved_calculation', 'report_row').

        Raises:
            FileNotFoundError: файла схемы нет
            ValueError: файл не является корректной JSON Schema
        """
        cached = self._cache.get(schema_name)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}") from e

        self._cache[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


def _error_path(error: ValidationError) -> str:
    return "/".join(str(part) for part in error.absolute_path) or ROOT_PATH


# =============================================================================
# DOCUMENT CONTRACTS
# =============================================================================


class DocumentContract:
    """
    Контракт одного типа документа.

    Подклассы задают только ``schema_name``.
    """

    schema_name: ClassVar[str]
    _validators: ClassVar[Dict[str, Draft202012Validator]] = {}

    def __init__(self) -> None:
        validator = self._validators.get(self.schema_name)
        if validator is None:
            validator = Draft202012Validator(_SCHEMA_LOADER.load_schema(self.schema_name))
            self._validators[self.schema_name] = validator
        self.validator = validator

    @property
    def schema(self) -> Dict[str, Any]:
        return self.validator.schema

    def validate(self, document: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: первая найденная ошибка (по правилам jsonschema)
        """
        try:
            self.validator.validate(document)
        except ValidationError as e:
            logger.debug(
                "contract_violation",
                schema=self.schema_name,
                path=_error_path(e),
                error=e.message,
            )
            raise

    def is_valid(self, document: Dict[str, Any]) -> bool:
        return self.validator.is_valid(document)

    def error_messages(self, document: Dict[str, Any]) -> list[str]:
        """Все ошибки как "path: message", по возрастанию пути."""
        return sorted(
            f"{_error_path(error)}: {error.message}"
            for error in self.validator.iter_errors(document)
        )


class SavedCalculationValidator(DocumentContract):
    """Документ сохранённого расчёта."""

    schema_name = "saved_calculation"


class ReportRowValidator(DocumentContract):
    """Строка результата для отчёта."""

    schema_name = "report_row"

    def validate_rows(self, rows: Iterable[Dict[str, Any]]) -> None:
        for row in rows:
            self.validate(row)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_saved_calculation(document: Dict[str, Any]) -> None:
    """
    Валидация документа сохранённого расчёта.

    Raises:
        ValidationError: документ не соответствует saved_calculation.json
    """
    SavedCalculationValidator().validate(document)


def validate_report_row(row: Dict[str, Any]) -> None:
    """
    Валидация строки отчёта.

    Raises:
        ValidationError: строка не соответствует report_row.json
    """
    ReportRowValidator().validate(row)


__all__ = [
    "DocumentContract",
    "ReportRowValidator",
    "SCHEMA_DIR",
    "SavedCalculationValidator",
    "SchemaLoader",
    "ValidationError",
    "validate_report_row",
    "validate_saved_calculation",
]
