"""
Price: Модель цены объекта

Цена вводится либо как полная стоимость объекта (TOTAL), либо как ставка
за одну выбранную единицу площади (PER_UNIT). Нормализация в цену за m²
и полную цену выполняется в src.core.math.pricing.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.core.math.numerical_safeguards import coerce_float


class PriceType(str, Enum):
    """Режим ввода цены."""

    TOTAL = "total"
    PER_UNIT = "per-unit"


class PriceSpec(BaseModel):
    """
    Цена объекта.

    При price_type=PER_UNIT selected_unit должен ссылаться на единицу из
    реестра площадей; неизвестная единица обрабатывается нормализатором
    с коэффициентом 1.0.
    """

    value: float = Field(0.0, description="Сумма (полная или за единицу)")
    currency: str = Field("USD", min_length=3, max_length=3, description="Код валюты")
    price_type: PriceType = Field(PriceType.TOTAL, description="total / per-unit")
    selected_unit: str = Field("sqm", min_length=1, description="Единица для per-unit")

    model_config = {"frozen": True}

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> float:
        """Незаполненное поле формы → 0.0."""
        return coerce_float(v, fallback=0.0)

    def is_set(self) -> bool:
        """True если цена указана (value > 0)."""
        return self.value > 0
