"""
Pricing: Нормализация цены объекта

Цена вводится в одном из режимов:
- TOTAL: value - полная стоимость объекта
- PER_UNIT: value - ставка за одну selected_unit

Из любого режима выводятся обе величины: цена за m² и полная цена.

ФОРМУЛЫ:
    PER_UNIT: price_per_sqm = value / factor(unit)
              total_price   = price_per_sqm * total_area_sqm
    TOTAL:    price_per_sqm = value / total_area_sqm  (0 если площадь = 0)
              total_price   = value

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. value <= 0 (или NaN/Inf) → 0.0 для обеих величин
2. Нулевая площадь никогда не даёт Inf/NaN
"""

from src.core.domain.price import PriceSpec, PriceType
from src.core.domain.units import conversion_factor
from src.core.math.numerical_safeguards import (
    EPS_AREA_SQM,
    non_negative_or_zero,
    safe_divide,
    sanitize_float,
)


def _price_type(price_type: PriceType | str) -> PriceType:
    # Неизвестный режим трактуется как TOTAL
    try:
        return PriceType(price_type)
    except ValueError:
        return PriceType.TOTAL


def price_per_sqm(
    value: float,
    price_type: PriceType | str,
    unit: str,
    total_area_sqm: float,
) -> float:
    """
    Цена за m².

    Args:
        value: Введённая сумма
        price_type: "total" / "per-unit"
        unit: Единица для per-unit (неизвестная → коэффициент 1.0)
        total_area_sqm: Общая площадь объекта в m²

    Returns:
        Цена за m² (>= 0)

    Examples:
        >>> round(price_per_sqm(5_000_000, "total", "sqm", 3800.0), 2)
        1315.79
        >>> price_per_sqm(1600, "per-unit", "rai", 0.0)
        1.0
        >>> price_per_sqm(5_000_000, "total", "sqm", 0.0)
        0.0
    """
    amount = non_negative_or_zero(value)
    if amount <= 0:
        return 0.0

    if _price_type(price_type) == PriceType.PER_UNIT:
        return sanitize_float(amount / conversion_factor(unit))

    area = non_negative_or_zero(total_area_sqm)
    return safe_divide(amount, area, eps=EPS_AREA_SQM, fallback=0.0)


def total_price(
    value: float,
    price_type: PriceType | str,
    unit: str,
    total_area_sqm: float,
) -> float:
    """
    Полная цена объекта.

    Examples:
        >>> total_price(5_000_000, "total", "sqm", 0.0)
        5000000.0
        >>> total_price(1000, "per-unit", "rai", 3200.0)
        2000.0
    """
    amount = non_negative_or_zero(value)
    if amount <= 0:
        return 0.0

    if _price_type(price_type) == PriceType.PER_UNIT:
        per_sqm = amount / conversion_factor(unit)
        return total_value(total_area_sqm, per_sqm)

    return amount


def total_value(total_area_sqm: float, price_per_sqm_value: float) -> float:
    """
    Стоимость по площади и цене за m²; 0.0 если любая из величин <= 0.

    Examples:
        >>> total_value(100.0, 25.0)
        2500.0
        >>> total_value(0.0, 25.0)
        0.0
    """
    area = non_negative_or_zero(total_area_sqm)
    rate = non_negative_or_zero(price_per_sqm_value)
    if area <= 0 or rate <= 0:
        return 0.0
    return sanitize_float(area * rate)


# =============================================================================
# PRICESPEC HELPERS
# =============================================================================


def price_per_sqm_of(price_spec: PriceSpec, total_area_sqm: float) -> float:
    """price_per_sqm для PriceSpec."""
    return price_per_sqm(
        price_spec.value, price_spec.price_type, price_spec.selected_unit, total_area_sqm
    )


def total_price_of(price_spec: PriceSpec, total_area_sqm: float) -> float:
    """total_price для PriceSpec."""
    return total_price(
        price_spec.value, price_spec.price_type, price_spec.selected_unit, total_area_sqm
    )
