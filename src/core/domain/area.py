"""
Area: Модели измерения площади

AreaMeasurement: одно измерение (значение + единица).
CompositeArea: ровно три слота, которые суммируются после пересчёта в m²
(тайская запись площади земли: Rai + Ngan + Wah). Это не список
переменной длины.

Модели immutable (frozen=True). Модель не отвергает неизвестные единицы
и отрицательные значения: эти случаи обрабатывает нормализатор
(to_square_meters) по lenient-политике.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.core.domain.units import is_known_unit, to_square_meters
from src.core.math.numerical_safeguards import coerce_float

DEFAULT_UNIT = "sqm"


# =============================================================================
# ENUMS
# =============================================================================


class PropertyKind(str, Enum):
    """Тип объекта недвижимости."""

    LAND = "land"
    BUILDING = "building"
    LAND_AND_BUILDING = "both"


# =============================================================================
# MODELS
# =============================================================================


class AreaMeasurement(BaseModel):
    """Одно измерение площади."""

    value: float = Field(0.0, description="Значение в единицах unit")
    unit: str = Field(DEFAULT_UNIT, min_length=1, description="Идентификатор единицы")

    model_config = {"frozen": True}

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> float:
        """Незаполненное поле формы (None, "") → 0.0."""
        return coerce_float(v, fallback=0.0)

    def is_known_unit(self) -> bool:
        """True если единица есть в реестре."""
        return is_known_unit(self.unit)

    def to_sqm(self) -> float:
        """Площадь этого измерения в m²."""
        return to_square_meters(self)


class CompositeArea(BaseModel):
    """
    Составная площадь из трёх слотов.

    Сумма инвариантна к перестановке слотов: total_sqm() - чистая сумма.
    """

    primary: AreaMeasurement = Field(default_factory=AreaMeasurement)
    secondary: AreaMeasurement = Field(default_factory=AreaMeasurement)
    tertiary: AreaMeasurement = Field(default_factory=AreaMeasurement)

    model_config = {"frozen": True}

    @classmethod
    def of(
        cls,
        primary: tuple[float, str],
        secondary: tuple[float, str] | None = None,
        tertiary: tuple[float, str] | None = None,
    ) -> "CompositeArea":
        """
        Сборка из пар (value, unit).

        Examples:
            >>> CompositeArea.of((2, "rai"), (1, "ngan"), (50, "wah")).total_sqm()
            3800.0
        """
        slots = [
            AreaMeasurement(value=pair[0], unit=pair[1]) if pair else AreaMeasurement()
            for pair in (primary, secondary, tertiary)
        ]
        return cls(primary=slots[0], secondary=slots[1], tertiary=slots[2])

    @classmethod
    def with_units(cls, primary: str, secondary: str, tertiary: str) -> "CompositeArea":
        """Пустая площадь с заданными единицами слотов (default units формы)."""
        return cls(
            primary=AreaMeasurement(unit=primary),
            secondary=AreaMeasurement(unit=secondary),
            tertiary=AreaMeasurement(unit=tertiary),
        )

    def slots(self) -> tuple[AreaMeasurement, AreaMeasurement, AreaMeasurement]:
        return (self.primary, self.secondary, self.tertiary)

    def total_sqm(self) -> float:
        """Общая площадь в m²."""
        return to_square_meters(self.primary, self.secondary, self.tertiary)

    def is_empty(self) -> bool:
        """True если ни один слот не даёт положительной площади."""
        return self.total_sqm() <= 0.0
