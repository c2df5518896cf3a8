"""
PropertyValuator: оценка объекта в режиме купли-продажи

Объединяет нормализатор площади, нормализатор цены и конвертер валют:

1. Площади земли и здания приводятся к m² (по три слота)
2. Общая площадь выбирается по типу объекта
3. Цена предложения приводится к цене за m² и полной цене
4. Все суммы переводятся в валюту отображения
5. Оценочная стоимость (если задана) нормализуется так же и
   сравнивается с ценой предложения

ФОРМУЛЫ:
    land_value = total_price * land_price_share  (LAND_AND_BUILDING)
    building_value = total_price - land_value
    valuation_difference = valuation - price
    valuation_difference_pct = valuation_difference / price * 100
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import structlog
from pydantic import BaseModel, Field

from src.core.config.settings import ValuationConfig
from src.core.domain.area import CompositeArea, PropertyKind
from src.core.domain.price import PriceSpec, PriceType
from src.core.domain.units import UnitFamily, units_for
from src.core.math.numerical_safeguards import EPS_AREA_SQM, safe_divide, safe_percentage
from src.core.math.pricing import price_per_sqm_of, total_price_of
from src.valuation._helpers import check_area_units, check_price_unit, make_converter

logger = structlog.get_logger(__name__)


# =============================================================================
# INPUT
# =============================================================================


class TransactionType(str, Enum):
    """Тип сделки."""

    BUY_SELL = "buy-sell"
    LEASE = "lease"
    MORTGAGE = "mortgage"


class PropertyInput(BaseModel):
    """Снимок формы ввода одного объекта."""

    kind: PropertyKind = Field(PropertyKind.LAND, description="land / building / both")
    transaction_type: TransactionType = Field(TransactionType.BUY_SELL)
    land_area: CompositeArea = Field(default_factory=CompositeArea)
    building_area: CompositeArea = Field(default_factory=CompositeArea)
    price: PriceSpec = Field(default_factory=PriceSpec, description="Цена предложения")
    valuation: PriceSpec | None = Field(None, description="Оценочная стоимость")

    model_config = {"frozen": True}

    @classmethod
    def blank(
        cls,
        config: ValuationConfig | None = None,
        kind: PropertyKind = PropertyKind.LAND,
        transaction_type: TransactionType = TransactionType.BUY_SELL,
    ) -> "PropertyInput":
        """Пустая форма с единицами и валютой по умолчанию из config."""
        config = config or ValuationConfig()
        unit = config.default_area_unit
        building_units = [item.id for item in units_for(UnitFamily.BUILDING)]
        building_unit = unit if unit in building_units else building_units[0]
        return cls(
            kind=kind,
            transaction_type=transaction_type,
            land_area=CompositeArea.with_units(unit, unit, unit),
            building_area=CompositeArea.with_units(building_unit, building_unit, building_unit),
            price=PriceSpec(currency=config.default_currency, selected_unit=unit),
        )

    def relevant_areas(self) -> tuple[CompositeArea, ...]:
        if self.kind == PropertyKind.LAND:
            return (self.land_area,)
        if self.kind == PropertyKind.BUILDING:
            return (self.building_area,)
        return (self.land_area, self.building_area)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class PropertyValuation:
    """Результат оценки объекта (все суммы в ``currency``)."""

    kind: PropertyKind
    currency: str

    # Площади (m²)
    land_area_sqm: float
    building_area_sqm: float
    total_area_sqm: float

    # Цена предложения
    price_per_sqm: float
    total_price: float
    land_value: float
    building_value: float
    land_price_per_sqm: float
    building_price_per_sqm: float

    # Оценка (None если не задана)
    valuation_total: float | None
    valuation_per_sqm: float | None
    valuation_difference: float | None  # valuation - price
    valuation_difference_pct: float | None

    # Коды, для которых сработала lenient-подстановка
    fallbacks: tuple[str, ...] = ()

    @property
    def has_fallbacks(self) -> bool:
        return bool(self.fallbacks)


# =============================================================================
# VALUATOR
# =============================================================================


class PropertyValuator:
    """Оценка объекта в режиме купли-продажи."""

    def __init__(self, config: ValuationConfig | None = None):
        self.config = config or ValuationConfig()

    def evaluate(
        self,
        property_input: PropertyInput,
        display_currency: str | None = None,
    ) -> PropertyValuation:
        """Оценка объекта.

        Args:
            property_input: снимок формы
            display_currency: валюта результата (default: валюта цены)

        Returns:
            PropertyValuation

        Raises:
            UnknownAreaUnitError, UnknownCurrencyError: только при lenient=False
        """
        lenient = self.config.lenient
        currency = display_currency or property_input.price.currency
        fallbacks: list[str] = []

        check_area_units(property_input.relevant_areas(), lenient=lenient, fallbacks=fallbacks)

        land_sqm = property_input.land_area.total_sqm()
        building_sqm = property_input.building_area.total_sqm()
        total_sqm = self._total_area(property_input.kind, land_sqm, building_sqm)

        price_total, price_per_sqm = self._normalize(
            property_input.price, total_sqm, currency, lenient, fallbacks
        )
        land_value, building_value = self._split(property_input.kind, price_total)

        valuation_total = None
        valuation_per_sqm = None
        valuation_difference = None
        valuation_difference_pct = None
        if property_input.valuation is not None and property_input.valuation.is_set():
            valuation_total, valuation_per_sqm = self._normalize(
                property_input.valuation, total_sqm, currency, lenient, fallbacks
            )
            valuation_difference = valuation_total - price_total
            valuation_difference_pct = safe_percentage(valuation_difference, price_total)

        if fallbacks:
            logger.warning(
                "property_valuation_defaulted",
                kind=property_input.kind.value,
                fallbacks=fallbacks,
            )

        return PropertyValuation(
            kind=property_input.kind,
            currency=currency,
            land_area_sqm=land_sqm,
            building_area_sqm=building_sqm,
            total_area_sqm=total_sqm,
            price_per_sqm=price_per_sqm,
            total_price=price_total,
            land_value=land_value,
            building_value=building_value,
            land_price_per_sqm=self._per_sqm(land_value, land_sqm),
            building_price_per_sqm=self._per_sqm(building_value, building_sqm),
            valuation_total=valuation_total,
            valuation_per_sqm=valuation_per_sqm,
            valuation_difference=valuation_difference,
            valuation_difference_pct=valuation_difference_pct,
            fallbacks=tuple(dict.fromkeys(fallbacks)),
        )

    # -------------------------------------------------------------------------

    @staticmethod
    def _total_area(kind: PropertyKind, land_sqm: float, building_sqm: float) -> float:
        if kind == PropertyKind.LAND:
            return land_sqm
        if kind == PropertyKind.BUILDING:
            return building_sqm
        return land_sqm + building_sqm

    @staticmethod
    def _per_sqm(amount: float, area_sqm: float) -> float:
        return safe_divide(amount, area_sqm, eps=EPS_AREA_SQM, fallback=0.0)

    def _normalize(
        self,
        price_spec: PriceSpec,
        total_sqm: float,
        currency: str,
        lenient: bool,
        fallbacks: list[str],
    ) -> tuple[float, float]:
        """(total, per_sqm) цены в валюте отображения."""
        if price_spec.price_type == PriceType.PER_UNIT:
            check_price_unit(price_spec.selected_unit, lenient=lenient, fallbacks=fallbacks)
        convert = make_converter(
            price_spec.currency, currency, lenient=lenient, fallbacks=fallbacks
        )
        return (
            convert(total_price_of(price_spec, total_sqm)),
            convert(price_per_sqm_of(price_spec, total_sqm)),
        )

    def _split(self, kind: PropertyKind, price_total: float) -> tuple[float, float]:
        if kind == PropertyKind.LAND:
            return (price_total, 0.0)
        if kind == PropertyKind.BUILDING:
            return (0.0, price_total)
        land_value = price_total * self.config.land_price_share
        return (land_value, price_total - land_value)
