"""
Configuration: ValuationConfig defaults and structlog setup.
"""

from src.core.config.logging import configure_logging, configure_logging_from
from src.core.config.settings import (
    DEFAULT_AREA_UNIT,
    DEFAULT_CURRENCY,
    LAND_PRICE_SHARE_DEFAULT,
    MAX_COMPARED_PROPERTIES,
    MAX_SAVED_CALCULATIONS,
    ValuationConfig,
)

__all__ = [
    "DEFAULT_AREA_UNIT",
    "DEFAULT_CURRENCY",
    "LAND_PRICE_SHARE_DEFAULT",
    "MAX_COMPARED_PROPERTIES",
    "MAX_SAVED_CALCULATIONS",
    "ValuationConfig",
    "configure_logging",
    "configure_logging_from",
]
