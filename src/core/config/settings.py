"""
ValuationConfig: параметры прикладного слоя калькулятора.

Immutable конфигурация (frozen dataclass). Ядро расчётов (math/, domain/)
конфигурации не читает: все его функции чистые и параметризуются явно.
"""

from dataclasses import dataclass
from typing import Final

# Значения по умолчанию формы ввода
DEFAULT_CURRENCY: Final[str] = "USD"
DEFAULT_AREA_UNIT: Final[str] = "sqm"

# Доля цены, относимая на землю для объекта "земля + здание"
LAND_PRICE_SHARE_DEFAULT: Final[float] = 0.5

# Максимум одновременно сравниваемых объектов
MAX_COMPARED_PROPERTIES: Final[int] = 4

# Квота внешнего хранилища расчётов на пользователя
MAX_SAVED_CALCULATIONS: Final[int] = 10


@dataclass(frozen=True)
class ValuationConfig:
    """Конфигурация прикладного слоя.

    lenient=True (default): неизвестные единицы/валюты подставляют
    коэффициент 1 и пишут warning. lenient=False: UnknownAreaUnitError /
    UnknownCurrencyError пробрасываются вызывающему коду.
    """

    default_currency: str = DEFAULT_CURRENCY
    default_area_unit: str = DEFAULT_AREA_UNIT
    land_price_share: float = LAND_PRICE_SHARE_DEFAULT
    max_compared_properties: int = MAX_COMPARED_PROPERTIES
    max_saved_calculations: int = MAX_SAVED_CALCULATIONS
    lenient: bool = True
    # Логирование встраивающего приложения (configure_logging_from)
    verbose: bool = False
    log_json: bool = False

    def __post_init__(self) -> None:
        if not 0.0 <= self.land_price_share <= 1.0:
            raise ValueError(
                f"land_price_share must be within [0, 1], got {self.land_price_share}"
            )
        if self.max_compared_properties < 1:
            raise ValueError(
                f"max_compared_properties must be >= 1, got {self.max_compared_properties}"
            )
        if self.max_saved_calculations < 1:
            raise ValueError(
                f"max_saved_calculations must be >= 1, got {self.max_saved_calculations}"
            )
