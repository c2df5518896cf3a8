"""Общие хелперы сервисов оценки: конвертер валют и strict-проверки единиц."""

from __future__ import annotations

from collections.abc import Callable, Iterable

import structlog

from src.core.domain.area import CompositeArea
from src.core.domain.currency import get_rate, resolve_rate
from src.core.domain.units import get_area_unit, is_known_unit
from src.core.math.numerical_safeguards import sanitize_float

logger = structlog.get_logger(__name__)

Converter = Callable[[float], float]


def make_converter(
    from_code: str,
    to_code: str,
    *,
    lenient: bool = True,
    fallbacks: list[str] | None = None,
) -> Converter:
    """
    Функция пересчёта сумм из from_code в to_code.

    Курс определяется один раз. Lenient: неизвестная пара даёт множитель 1,
    один warning и запись ``currency:<from>-><to>`` в fallbacks.
    Strict: UnknownCurrencyError.
    """
    if lenient:
        rate, defaulted = resolve_rate(from_code, to_code)
        if defaulted:
            logger.warning(
                "currency_pair_unknown",
                from_currency=from_code,
                to_currency=to_code,
                fallback_rate=rate,
            )
            if fallbacks is not None:
                fallbacks.append(f"currency:{from_code}->{to_code}")
    else:
        rate = get_rate(from_code, to_code)

    def convert(amount: float) -> float:
        return sanitize_float(amount * rate)

    return convert


def check_area_units(
    areas: Iterable[CompositeArea],
    *,
    lenient: bool = True,
    fallbacks: list[str] | None = None,
) -> None:
    """
    Проверка единиц всех заполненных слотов.

    Strict: UnknownAreaUnitError для первой неизвестной единицы.
    Lenient: запись ``area_unit:<id>`` в fallbacks.
    """
    for area in areas:
        for slot in area.slots():
            if slot.value <= 0:
                continue
            if not lenient:
                get_area_unit(slot.unit)
            elif not is_known_unit(slot.unit) and fallbacks is not None:
                fallbacks.append(f"area_unit:{slot.unit}")


def check_price_unit(
    unit: str,
    *,
    lenient: bool = True,
    fallbacks: list[str] | None = None,
) -> None:
    """check_area_units для единицы per-unit цены."""
    if not lenient:
        get_area_unit(unit)
    elif not is_known_unit(unit) and fallbacks is not None:
        fallbacks.append(f"area_unit:{unit}")
