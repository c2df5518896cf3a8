"""
Currency: Статическая таблица валют и конвертер

Курсы заданы относительно USD (USD = 1.0). Для каждой упорядоченной пары
кодов курс вычисляется один раз при импорте:

    rate(from, to) = base[to] / base[from]

Таблица read-only и не обновляется во время работы процесса.

Политика lenient: неизвестная пара → множитель 1.0 + warning в лог.
Конвертация синхронная: никаких await внутри ядра.
"""

from collections.abc import Mapping
from typing import Final

import structlog
from pydantic import BaseModel, Field

from src.core.errors import UnknownCurrencyError
from src.core.math.numerical_safeguards import coerce_float

logger = structlog.get_logger(__name__)

# Множитель для неизвестной пары (lenient-режим)
FALLBACK_RATE: Final[float] = 1.0

BASE_CURRENCY: Final[str] = "USD"


# =============================================================================
# МОДЕЛЬ
# =============================================================================


class Currency(BaseModel):
    """Валюта из справочника."""

    code: str = Field(..., min_length=3, max_length=3, description="ISO 4217 код")
    symbol: str = Field(..., min_length=1, description="Узкий символ для отображения")
    name: str = Field(..., min_length=1, description="Название")
    usd_rate: float = Field(..., gt=0, description="Единиц валюты за 1 USD")

    model_config = {"frozen": True}


# =============================================================================
# ТАБЛИЦА ВАЛЮТ
# =============================================================================

_CURRENCIES: Final[tuple[Currency, ...]] = (
    Currency(code="USD", symbol="$", name="US Dollar", usd_rate=1.0),
    Currency(code="EUR", symbol="€", name="Euro", usd_rate=0.85),
    Currency(code="GBP", symbol="£", name="British Pound", usd_rate=0.73),
    Currency(code="JPY", symbol="¥", name="Japanese Yen", usd_rate=110.0),
    Currency(code="CNY", symbol="¥", name="Chinese Yuan", usd_rate=6.45),
    Currency(code="SGD", symbol="S$", name="Singapore Dollar", usd_rate=1.35),
    Currency(code="HKD", symbol="HK$", name="Hong Kong Dollar", usd_rate=7.78),
    Currency(code="AUD", symbol="A$", name="Australian Dollar", usd_rate=1.36),
    Currency(code="KRW", symbol="₩", name="South Korean Won", usd_rate=1175.0),
    Currency(code="THB", symbol="฿", name="Thai Baht", usd_rate=35.0),
    Currency(code="CAD", symbol="C$", name="Canadian Dollar", usd_rate=1.25),
    Currency(code="CHF", symbol="Fr", name="Swiss Franc", usd_rate=0.92),
    Currency(code="NZD", symbol="NZ$", name="New Zealand Dollar", usd_rate=1.44),
    Currency(code="INR", symbol="₹", name="Indian Rupee", usd_rate=74.5),
    Currency(code="MYR", symbol="RM", name="Malaysian Ringgit", usd_rate=4.2),
    Currency(code="AED", symbol="د.إ", name="UAE Dirham", usd_rate=3.67),
    Currency(code="SAR", symbol="﷼", name="Saudi Riyal", usd_rate=3.75),
    Currency(code="BRL", symbol="R$", name="Brazilian Real", usd_rate=5.2),
    Currency(code="MXN", symbol="$", name="Mexican Peso", usd_rate=20.0),
    Currency(code="PHP", symbol="₱", name="Philippine Peso", usd_rate=50.0),
)

CURRENCIES: Final[Mapping[str, Currency]] = {c.code: c for c in _CURRENCIES}

CURRENCY_CODES: Final[tuple[str, ...]] = tuple(c.code for c in _CURRENCIES)


def _build_rate_table(currencies: tuple[Currency, ...]) -> dict[tuple[str, str], float]:
    """Курсы для всех упорядоченных пар через USD."""
    return {
        (base.code, quote.code): quote.usd_rate / base.usd_rate
        for base in currencies
        for quote in currencies
    }


RATE_TABLE: Final[Mapping[tuple[str, str], float]] = _build_rate_table(_CURRENCIES)


# =============================================================================
# LOOKUP
# =============================================================================


def get_currency(code: str) -> Currency:
    """
    Строгий поиск валюты.

    Raises:
        UnknownCurrencyError: если код не поддерживается
    """
    try:
        return CURRENCIES[code]
    except (KeyError, TypeError):
        raise UnknownCurrencyError(str(code)) from None


def is_known_currency(code: str) -> bool:
    """True если код есть в справочнике."""
    return isinstance(code, str) and code in CURRENCIES


def currency_symbol(code: str) -> str:
    """
    Узкий символ валюты; для неизвестного кода возвращается сам код.

    Examples:
        >>> currency_symbol("THB")
        '฿'
        >>> currency_symbol("XYZ")
        'XYZ'
    """
    if is_known_currency(code):
        return CURRENCIES[code].symbol
    return str(code)


def get_rate(from_code: str, to_code: str) -> float:
    """
    Строгий курс пары.

    Raises:
        UnknownCurrencyError: если любой из кодов неизвестен
    """
    get_currency(from_code)
    get_currency(to_code)
    return RATE_TABLE[(from_code, to_code)]


def resolve_rate(from_code: str, to_code: str) -> tuple[float, bool]:
    """
    Курс пары с признаком подстановки.

    Returns:
        (rate, defaulted): defaulted=True если пара неизвестна и
        подставлен FALLBACK_RATE

    Examples:
        >>> resolve_rate("USD", "THB")
        (35.0, False)
        >>> resolve_rate("USD", "XYZ")
        (1.0, True)
    """
    if from_code == to_code:
        return (1.0, False)
    rate = RATE_TABLE.get((from_code, to_code))
    if rate is None:
        return (FALLBACK_RATE, True)
    return (rate, False)


# =============================================================================
# CONVERTER
# =============================================================================


def convert_currency(amount: float, from_code: str, to_code: str) -> float:
    """
    Конвертация суммы по статической таблице курсов.

    - from_code == to_code → amount без изменений (identity)
    - иначе amount * rate(from_code, to_code)
    - неизвестная пара → amount * 1.0 и warning currency_pair_unknown
    - None, NaN, Inf и нечисловой ввод → 0.0

    Examples:
        >>> convert_currency(100.0, "USD", "USD")
        100.0
        >>> convert_currency(100.0, "USD", "THB")
        3500.0
    """
    amount = coerce_float(amount)
    if from_code == to_code:
        return amount

    rate, defaulted = resolve_rate(from_code, to_code)
    if defaulted:
        logger.warning(
            "currency_pair_unknown",
            from_currency=from_code,
            to_currency=to_code,
            fallback_rate=FALLBACK_RATE,
        )
    return amount * rate


def convert_currency_strict(amount: float, from_code: str, to_code: str) -> float:
    """
    Strict-конвертация.

    Raises:
        UnknownCurrencyError: если любой из кодов неизвестен
    """
    return amount * get_rate(from_code, to_code)
