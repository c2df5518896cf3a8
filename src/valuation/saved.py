"""
Saved calculations: документы расчётов пользователя с квотой

In-process реализация контракта внешнего хранилища документов.

ИНВАРИАНТЫ:
1. Каждый сохранённый документ проходит saved_calculation.json
2. У пользователя не больше ValuationConfig.max_saved_calculations документов
3. Хранилище и вызывающий код не делят вложенные объекты (deepcopy на входе и выходе)
4. list_for_user: новые первыми
"""

from __future__ import annotations

import copy
import itertools
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Any

import structlog

from src.core.config.settings import ValuationConfig
from src.core.contracts.validators import SavedCalculationValidator
from src.core.domain.area import CompositeArea
from src.core.domain.price import PriceSpec
from src.core.errors import SavedCalculationLimitError, SavedCalculationNotFoundError
from src.valuation.property import PropertyInput
from src.valuation.report import ResultRow, export_rows

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _area_document(area: CompositeArea) -> dict[str, Any]:
    return {
        f"column{i}": {"value": slot.value, "unit": slot.unit}
        for i, slot in enumerate(area.slots(), start=1)
    }


def _price_document(price_spec: PriceSpec) -> dict[str, Any]:
    return {
        "value": max(price_spec.value, 0.0),
        "currency": price_spec.currency,
        "priceType": price_spec.price_type.value,
        "selectedUnit": price_spec.selected_unit,
    }


def build_document(
    property_input: PropertyInput,
    rows: Sequence[ResultRow],
    property_number: int = 1,
) -> dict[str, Any]:
    """
    Документ расчёта для сохранения (без userId).

    Площади, не относящиеся к типу объекта, и незаданная оценка
    сохраняются как null.
    """
    kind = property_input.kind.value
    land = _area_document(property_input.land_area) if kind in ("land", "both") else None
    building = (
        _area_document(property_input.building_area) if kind in ("building", "both") else None
    )
    valuation = property_input.valuation
    return {
        "propertyType": kind,
        "propertyNumber": property_number,
        "transactionType": property_input.transaction_type.value,
        "landArea": land,
        "buildingArea": building,
        "price": _price_document(property_input.price),
        "valuation": _price_document(valuation) if valuation and valuation.is_set() else None,
        "results": export_rows(list(rows)),
    }


class SavedCalculationStore:
    """Сохранённые расчёты по пользователям с фиксированной квотой."""

    def __init__(
        self,
        config: ValuationConfig | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.config = config or ValuationConfig()
        self._clock = clock
        self._validator = SavedCalculationValidator()
        self._documents: dict[str, dict[str, Any]] = {}
        # Порядок вставки для документов с одинаковым createdAt
        self._sequence = itertools.count()
        self._order: dict[str, int] = {}

    @property
    def limit(self) -> int:
        return self.config.max_saved_calculations

    def count(self, user_id: str) -> int:
        return sum(1 for doc in self._documents.values() if doc["userId"] == user_id)

    def save(self, user_id: str, document: dict[str, Any]) -> str:
        """
        Валидация и сохранение документа.

        Returns:
            id сохранённого расчёта

        Raises:
            SavedCalculationLimitError: у пользователя уже limit документов
            jsonschema.ValidationError: документ нарушает контракт
        """
        if self.count(user_id) >= self.limit:
            logger.info("saved_calculation_limit_reached", user_id=user_id, limit=self.limit)
            raise SavedCalculationLimitError(user_id, self.limit)

        timestamp = self._clock().isoformat()
        calculation_id = uuid.uuid4().hex
        stored = {
            **copy.deepcopy(document),
            "id": calculation_id,
            "userId": user_id,
            "createdAt": timestamp,
            "updatedAt": timestamp,
        }
        self._validator.validate(stored)

        self._documents[calculation_id] = stored
        self._order[calculation_id] = next(self._sequence)
        logger.info("calculation_saved", user_id=user_id, calculation_id=calculation_id)
        return calculation_id

    def get(self, calculation_id: str) -> dict[str, Any]:
        try:
            return copy.deepcopy(self._documents[calculation_id])
        except KeyError:
            raise SavedCalculationNotFoundError(calculation_id) from None

    def list_for_user(self, user_id: str) -> list[dict[str, Any]]:
        """Документы user_id, новые первыми, не больше limit."""
        docs = [doc for doc in self._documents.values() if doc["userId"] == user_id]
        docs.sort(key=lambda d: (d["createdAt"], self._order[d["id"]]), reverse=True)
        return [copy.deepcopy(doc) for doc in docs[: self.limit]]

    def delete(self, calculation_id: str) -> None:
        """
        Raises:
            SavedCalculationNotFoundError: неизвестный id
        """
        if calculation_id not in self._documents:
            raise SavedCalculationNotFoundError(calculation_id)
        del self._documents[calculation_id]
        del self._order[calculation_id]
        logger.info("calculation_deleted", calculation_id=calculation_id)
