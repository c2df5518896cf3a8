"""
Comparison: сравнение до четырёх объектов

Все объекты оцениваются в одной валюте, затем каждый сравнивается
с первым (базовым) объектом.

ФОРМУЛЫ:
    difference = other - base
    percentage = difference / base * 100
    is_positive = difference >= 0

ИНВАРИАНТЫ:
1. Нулевая база даёт (0, 0%, positive), деления на ноль нет
2. Объектов не больше ValuationConfig.max_compared_properties
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import NamedTuple

import structlog

from src.core.config.settings import ValuationConfig
from src.core.errors import ComparisonLimitError
from src.core.math.numerical_safeguards import is_zero
from src.valuation.property import PropertyInput, PropertyValuation, PropertyValuator

logger = structlog.get_logger(__name__)


class Difference(NamedTuple):
    """Разница показателя относительно базового объекта."""

    amount: float
    percentage: float
    is_positive: bool


def difference(base: float, other: float) -> Difference:
    """
    Разница other относительно base.

    Examples:
        >>> difference(100.0, 150.0)
        Difference(amount=50.0, percentage=50.0, is_positive=True)
        >>> difference(0.0, 150.0)
        Difference(amount=0.0, percentage=0.0, is_positive=True)
    """
    if is_zero(base):
        return Difference(0.0, 0.0, True)
    amount = other - base
    return Difference(amount, amount / base * 100.0, amount >= 0)


@dataclass(frozen=True)
class ComparisonEntry:
    """Объект сравнения и его разница с базовым объектом."""

    number: int  # 1-based, как в интерфейсе ("Property 1")
    valuation: PropertyValuation
    area: Difference
    price: Difference
    price_per_sqm: Difference
    appraisal: Difference | None


@dataclass(frozen=True)
class ComparisonResult:
    """Результат сравнения объектов."""

    currency: str
    entries: tuple[ComparisonEntry, ...]

    @property
    def baseline(self) -> ComparisonEntry:
        return self.entries[0]

    def cheapest_per_sqm(self) -> ComparisonEntry | None:
        """Объект с минимальной положительной ценой за m²."""
        priced = [e for e in self.entries if e.valuation.price_per_sqm > 0]
        if not priced:
            return None
        return min(priced, key=lambda e: e.valuation.price_per_sqm)


class PropertyComparator:
    """Сравнение нескольких объектов (не более max_compared_properties)."""

    def __init__(
        self,
        config: ValuationConfig | None = None,
        valuator: PropertyValuator | None = None,
    ):
        self.config = config or ValuationConfig()
        self.valuator = valuator or PropertyValuator(self.config)

    def compare(
        self,
        properties: Sequence[PropertyInput],
        currency: str | None = None,
    ) -> ComparisonResult:
        """Сравнение объектов с первым объектом.

        Args:
            properties: от 1 до max_compared_properties объектов
            currency: общая валюта (default: валюта цены первого объекта)

        Raises:
            ValueError: если список пуст
            ComparisonLimitError: если объектов больше лимита
        """
        if not properties:
            raise ValueError("at least one property is required for comparison")

        limit = self.config.max_compared_properties
        if len(properties) > limit:
            raise ComparisonLimitError(
                f"Cannot compare {len(properties)} properties, maximum is {limit}"
            )

        common_currency = currency or properties[0].price.currency
        valuations = [self.valuator.evaluate(p, common_currency) for p in properties]
        base = valuations[0]

        entries = []
        for number, valuation in enumerate(valuations, start=1):
            appraisal = None
            if base.valuation_total is not None and valuation.valuation_total is not None:
                appraisal = difference(base.valuation_total, valuation.valuation_total)
            entries.append(
                ComparisonEntry(
                    number=number,
                    valuation=valuation,
                    area=difference(base.total_area_sqm, valuation.total_area_sqm),
                    price=difference(base.total_price, valuation.total_price),
                    price_per_sqm=difference(base.price_per_sqm, valuation.price_per_sqm),
                    appraisal=appraisal,
                )
            )

        logger.debug("properties_compared", count=len(entries), currency=common_currency)
        return ComparisonResult(currency=common_currency, entries=tuple(entries))
