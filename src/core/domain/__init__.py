"""
Domain models and value objects.

Contains the area unit registry, the currency table and the input models
for areas, prices, mortgages and leases.
"""

from src.core.domain.area import AreaMeasurement, CompositeArea, PropertyKind
from src.core.domain.currency import (
    BASE_CURRENCY,
    CURRENCIES,
    CURRENCY_CODES,
    FALLBACK_RATE,
    Currency,
    convert_currency,
    convert_currency_strict,
    currency_symbol,
    get_currency,
    get_rate,
    is_known_currency,
    resolve_rate,
)
from src.core.domain.lease import DEFAULT_LEASE_DURATION_YEARS, LeaseParams, LeasePeriod
from src.core.domain.mortgage import MONTHS_PER_YEAR, MortgageParams
from src.core.domain.price import PriceSpec, PriceType
from src.core.domain.units import (
    AREA_UNITS,
    BUILDING_UNIT_IDS,
    FALLBACK_CONVERSION_FACTOR,
    LAND_UNIT_IDS,
    AreaUnit,
    ConversionOutcome,
    UnitFamily,
    conversion_factor,
    convert_area,
    convert_area_checked,
    convert_area_strict,
    get_area_unit,
    is_known_unit,
    measurement_to_sqm,
    resolve_conversion_factor,
    to_square_meters,
    units_for,
)

__all__ = [
    # Units module
    "AREA_UNITS",
    "BUILDING_UNIT_IDS",
    "FALLBACK_CONVERSION_FACTOR",
    "LAND_UNIT_IDS",
    "AreaUnit",
    "ConversionOutcome",
    "UnitFamily",
    "conversion_factor",
    "convert_area",
    "convert_area_checked",
    "convert_area_strict",
    "get_area_unit",
    "is_known_unit",
    "measurement_to_sqm",
    "resolve_conversion_factor",
    "to_square_meters",
    "units_for",
    # Area model
    "AreaMeasurement",
    "CompositeArea",
    "PropertyKind",
    # Currency module
    "BASE_CURRENCY",
    "CURRENCIES",
    "CURRENCY_CODES",
    "FALLBACK_RATE",
    "Currency",
    "convert_currency",
    "convert_currency_strict",
    "currency_symbol",
    "get_currency",
    "get_rate",
    "is_known_currency",
    "resolve_rate",
    # Price model
    "PriceSpec",
    "PriceType",
    # Mortgage model
    "MONTHS_PER_YEAR",
    "MortgageParams",
    # Lease model
    "DEFAULT_LEASE_DURATION_YEARS",
    "LeaseParams",
    "LeasePeriod",
]
