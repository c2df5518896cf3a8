"""
AreaUnits: Централизованный реестр единиц площади и нормализатор площади

Единственный допустимый способ преобразований между единицами площади:
- метрические (m², km², ha, cm², mm²)
- имперские (sq ft, sq yd, sq in, sq mi, acre)
- тайские земельные (Rai, Ngan, Square Wah)

Все преобразования идут через опорную единицу - квадратный метр.

Политика lenient (по умолчанию):
- неизвестная единица → коэффициент 1.0 + warning в лог
- отсутствующее / отрицательное / NaN значение → 0.0

Strict-варианты (get_area_unit, resolve_conversion_factor,
convert_area_checked) позволяют отличить намеренный default от реального
значения.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Final, NamedTuple

import structlog
from pydantic import BaseModel, Field

from src.core.errors import UnknownAreaUnitError
from src.core.math.numerical_safeguards import coerce_float, non_negative_or_zero

logger = structlog.get_logger(__name__)

# Коэффициент для неизвестной единицы (lenient-режим)
FALLBACK_CONVERSION_FACTOR: Final[float] = 1.0


# =============================================================================
# МОДЕЛИ
# =============================================================================


class UnitFamily(str, Enum):
    """Набор единиц, доступных для типа площади."""

    LAND = "land"
    BUILDING = "building"


class AreaUnit(BaseModel):
    """
    Единица площади.

    Immutable: реестр создаётся один раз при импорте модуля.
    """

    id: str = Field(..., min_length=1, description="Идентификатор ('sqm', 'rai', ...)")
    name: str = Field(..., min_length=1, description="Полное название")
    short_name: str = Field(..., min_length=1, description="Короткое обозначение")
    conversion_to_sqm: float = Field(..., gt=0, description="Сколько m² в одной единице")

    model_config = {"frozen": True}


class ConversionOutcome(NamedTuple):
    """
    Результат преобразования с признаком подстановки default.

    defaulted=True означает, что value получено по lenient-политике,
    а не реальным пересчётом.
    """

    value: float
    defaulted: bool
    reason: str


# =============================================================================
# РЕЕСТР
# =============================================================================

_LAND_UNITS: Final[tuple[AreaUnit, ...]] = (
    AreaUnit(id="sqm", name="Square Meters", short_name="m²", conversion_to_sqm=1.0),
    AreaUnit(id="sqkm", name="Square Kilometers", short_name="km²", conversion_to_sqm=1_000_000.0),
    AreaUnit(id="sqmi", name="Square Miles", short_name="sq mi", conversion_to_sqm=2_589_988.11),
    AreaUnit(id="hectare", name="Hectares", short_name="ha", conversion_to_sqm=10_000.0),
    AreaUnit(id="acre", name="Acres", short_name="ac", conversion_to_sqm=4_046.856422),
    AreaUnit(id="sqft", name="Square Feet", short_name="sq ft", conversion_to_sqm=0.092903),
    AreaUnit(id="sqyd", name="Square Yards", short_name="sq yd", conversion_to_sqm=0.836127),
    AreaUnit(id="sqin", name="Square Inches", short_name="sq in", conversion_to_sqm=0.00064516),
    AreaUnit(id="sqcm", name="Square Centimeters", short_name="cm²", conversion_to_sqm=0.0001),
    AreaUnit(id="sqmm", name="Square Millimeters", short_name="mm²", conversion_to_sqm=0.000001),
    AreaUnit(id="rai", name="Rai", short_name="Rai", conversion_to_sqm=1600.0),
    AreaUnit(id="ngan", name="Ngan", short_name="Ngan", conversion_to_sqm=400.0),
    AreaUnit(id="wah", name="Square Wah", short_name="Sq.wah", conversion_to_sqm=4.0),
)

AREA_UNITS: Final[Mapping[str, AreaUnit]] = {unit.id: unit for unit in _LAND_UNITS}

LAND_UNIT_IDS: Final[tuple[str, ...]] = tuple(unit.id for unit in _LAND_UNITS)

# Площадь здания вводится только в m² и sq ft
BUILDING_UNIT_IDS: Final[tuple[str, ...]] = ("sqm", "sqft")


def units_for(family: UnitFamily) -> tuple[AreaUnit, ...]:
    """
    Единицы, доступные для типа площади (порядок как в форме ввода).

    Args:
        family: LAND или BUILDING

    Returns:
        Кортеж AreaUnit
    """
    ids = LAND_UNIT_IDS if family == UnitFamily.LAND else BUILDING_UNIT_IDS
    return tuple(AREA_UNITS[unit_id] for unit_id in ids)


# =============================================================================
# STRICT LOOKUP
# =============================================================================


def get_area_unit(unit_id: str) -> AreaUnit:
    """
    Строгий поиск единицы в реестре.

    Raises:
        UnknownAreaUnitError: если единица не зарегистрирована
    """
    try:
        return AREA_UNITS[unit_id]
    except (KeyError, TypeError):
        raise UnknownAreaUnitError(str(unit_id)) from None


def is_known_unit(unit_id: str) -> bool:
    """True если единица есть в реестре."""
    return isinstance(unit_id, str) and unit_id in AREA_UNITS


def resolve_conversion_factor(unit_id: str) -> tuple[float, bool]:
    """
    Коэффициент пересчёта в m² с признаком подстановки.

    Returns:
        (factor, defaulted):
            - factor: conversion_to_sqm или FALLBACK_CONVERSION_FACTOR
            - defaulted: True если единица неизвестна

    Examples:
        >>> resolve_conversion_factor("rai")
        (1600.0, False)
        >>> resolve_conversion_factor("cubit")
        (1.0, True)
    """
    if is_known_unit(unit_id):
        return (AREA_UNITS[unit_id].conversion_to_sqm, False)
    return (FALLBACK_CONVERSION_FACTOR, True)


def conversion_factor(unit_id: str) -> float:
    """
    Lenient-коэффициент пересчёта в m².

    Неизвестная единица → 1.0 и warning area_unit_unknown.
    """
    factor, defaulted = resolve_conversion_factor(unit_id)
    if defaulted:
        logger.warning(
            "area_unit_unknown",
            unit=unit_id,
            fallback_factor=FALLBACK_CONVERSION_FACTOR,
        )
    return factor


# =============================================================================
# AREA NORMALIZER
# =============================================================================


def _slot_fields(slot: Any) -> tuple[Any, Any]:
    """Извлечение (value, unit) из AreaMeasurement, dict или None."""
    if slot is None:
        return (None, None)
    if isinstance(slot, Mapping):
        return (slot.get("value"), slot.get("unit"))
    return (getattr(slot, "value", None), getattr(slot, "unit", None))


def measurement_to_sqm(value: Any, unit: str) -> float:
    """
    Пересчёт одного измерения в m².

    Отсутствующее, отрицательное или нечисловое значение → 0.0.
    Неизвестная единица → коэффициент 1.0 (lenient).

    Examples:
        >>> measurement_to_sqm(2, "rai")
        3200.0
        >>> measurement_to_sqm(-5, "rai")
        0.0
    """
    clean_value = non_negative_or_zero(value)
    if clean_value == 0.0:
        return 0.0
    return clean_value * conversion_factor(unit)


def to_square_meters(primary: Any, secondary: Any = None, tertiary: Any = None) -> float:
    """
    Сумма трёх измерений площади в m².

    Три слота соответствуют тайской записи площади земли
    (Rai + Ngan + Wah), но единица каждого слота произвольна.
    Сумма не зависит от того, в каком слоте стоит какая единица.

    Args:
        primary: AreaMeasurement / {"value", "unit"} / None
        secondary: то же
        tertiary: то же

    Returns:
        Общая площадь в m² (>= 0)

    Examples:
        >>> to_square_meters(
        ...     {"value": 2, "unit": "rai"},
        ...     {"value": 1, "unit": "ngan"},
        ...     {"value": 50, "unit": "wah"},
        ... )
        3800.0
    """
    total = 0.0
    for slot in (primary, secondary, tertiary):
        value, unit = _slot_fields(slot)
        total += measurement_to_sqm(value, unit)
    return total


# =============================================================================
# UNIT-TO-UNIT CONVERSION
# =============================================================================


def convert_area_checked(value: float, from_unit: str, to_unit: str) -> ConversionOutcome:
    """
    Пересчёт площади между произвольными единицами через m².

    ФОРМУЛА: value * factor(from_unit) / factor(to_unit)

    Returns:
        ConversionOutcome; при неизвестной единице value не изменяется,
        defaulted=True
    """
    value = coerce_float(value)
    if from_unit == to_unit:
        return ConversionOutcome(value, False, "")

    if not is_known_unit(from_unit) or not is_known_unit(to_unit):
        return ConversionOutcome(
            value,
            True,
            f"Unit conversion failed: {from_unit} to {to_unit}",
        )

    value_in_sqm = value * AREA_UNITS[from_unit].conversion_to_sqm
    return ConversionOutcome(value_in_sqm / AREA_UNITS[to_unit].conversion_to_sqm, False, "")


def convert_area(value: float, from_unit: str, to_unit: str) -> float:
    """
    Lenient-пересчёт площади между единицами.

    Неизвестная единица → value без изменений и warning area_conversion_failed.
    None, NaN и Inf дают 0.0.

    Examples:
        >>> convert_area(1, "rai", "wah")
        400.0
        >>> convert_area(10, "sqm", "cubit")
        10.0
    """
    outcome = convert_area_checked(value, from_unit, to_unit)
    if outcome.defaulted:
        logger.warning(
            "area_conversion_failed",
            from_unit=from_unit,
            to_unit=to_unit,
            reason=outcome.reason,
        )
    return outcome.value


def convert_area_strict(value: float, from_unit: str, to_unit: str) -> float:
    """
    Strict-пересчёт площади.

    Raises:
        UnknownAreaUnitError: если любая из единиц неизвестна
    """
    from_factor = get_area_unit(from_unit).conversion_to_sqm
    to_factor = get_area_unit(to_unit).conversion_to_sqm
    if from_unit == to_unit:
        return value
    return value * from_factor / to_factor
