"""
Lease: Проекция стоимости аренды и сравнение с рыночной ставкой

Пересчёт периодической суммы аренды в месячный и годовой эквиваленты,
полная стоимость за срок и сравнение с рыночной ставкой.

ФОРМУЛЫ:
    to_monthly: yearly → amount / 12, quarterly → amount / 3, monthly → amount
    to_yearly:  monthly → amount * 12, quarterly → amount * 4, yearly → amount
    total_cost = to_yearly(amount, period) * duration_years

    difference     = lease_cost - market_cost
    difference_pct = difference / market_cost * 100  (0 если market_cost <= 0)

Знак difference: положительная разница означает аренду ДОРОЖЕ рынка.
Как это показывать (зелёным/красным) решает слой отображения, но знак
сохраняется везде.
"""

from typing import Final, NamedTuple

from src.core.domain.lease import LeaseParams, LeasePeriod
from src.core.math.numerical_safeguards import (
    EPS_AREA_SQM,
    is_close,
    non_negative_or_zero,
    safe_divide,
    safe_percentage,
)

_PERIODS_PER_YEAR: Final[dict[LeasePeriod, int]] = {
    LeasePeriod.MONTHLY: 12,
    LeasePeriod.QUARTERLY: 4,
    LeasePeriod.YEARLY: 1,
}


class MarketComparison(NamedTuple):
    """Сравнение стоимости аренды с рынком."""

    lease_cost: float
    market_cost: float
    difference: float  # lease - market; > 0 → дороже рынка
    difference_pct: float
    above_market: bool


class LeaseProjection(NamedTuple):
    """Эквиваленты аренды и рынка за месяц, год и весь срок."""

    monthly: float
    yearly: float
    total: float
    market_monthly: float
    market_yearly: float
    market_total: float
    price_per_sqm_per_month: float
    duration_years: float
    comparison: MarketComparison


def _period(period: LeasePeriod | str) -> LeasePeriod:
    # Неизвестный период трактуется как месячный
    try:
        return LeasePeriod(period)
    except ValueError:
        return LeasePeriod.MONTHLY


# =============================================================================
# EQUIVALENTS
# =============================================================================


def to_monthly(amount: float, period: LeasePeriod | str) -> float:
    """
    Месячный эквивалент суммы.

    Examples:
        >>> to_monthly(1200, "yearly")
        100.0
        >>> to_monthly(100, "monthly")
        100.0
    """
    periods = _PERIODS_PER_YEAR[_period(period)]
    return non_negative_or_zero(amount) * periods / 12


def to_yearly(amount: float, period: LeasePeriod | str) -> float:
    """
    Годовой эквивалент суммы.

    Examples:
        >>> to_yearly(100, "monthly")
        1200.0
        >>> to_yearly(300, "quarterly")
        1200.0
    """
    return non_negative_or_zero(amount) * _PERIODS_PER_YEAR[_period(period)]


def lease_total_cost(amount: float, period: LeasePeriod | str, duration_years: float) -> float:
    """
    Полная стоимость аренды за срок.

    Examples:
        >>> lease_total_cost(100, "monthly", 10)
        12000.0
    """
    return to_yearly(amount, period) * non_negative_or_zero(duration_years)


def price_per_sqm_per_month(
    amount: float, period: LeasePeriod | str, total_area_sqm: float
) -> float:
    """
    Месячная аренда за m²; 0.0 при нулевой площади.

    Examples:
        >>> price_per_sqm_per_month(1200, "yearly", 50)
        2.0
        >>> price_per_sqm_per_month(1200, "yearly", 0)
        0.0
    """
    area = non_negative_or_zero(total_area_sqm)
    return safe_divide(to_monthly(amount, period), area, eps=EPS_AREA_SQM, fallback=0.0)


# =============================================================================
# MARKET COMPARISON
# =============================================================================


def compare_to_market(lease_cost: float, market_cost: float) -> MarketComparison:
    """
    Сравнение стоимости аренды с рыночной.

    Examples:
        >>> c = compare_to_market(12_000, 10_000)
        >>> c.difference, c.difference_pct, c.above_market
        (2000.0, 20.0, True)
        >>> compare_to_market(12_000, 0).difference_pct
        0.0
    """
    lease = non_negative_or_zero(lease_cost)
    market = non_negative_or_zero(market_cost)
    difference = lease - market
    return MarketComparison(
        lease_cost=lease,
        market_cost=market,
        difference=difference,
        difference_pct=safe_percentage(difference, market),
        above_market=difference > 0 and not is_close(lease, market),
    )


def lease_return_pct(total_lease_cost: float, total_price_value: float) -> float:
    """
    Доходность аренды относительно цены объекта, %.

    Examples:
        >>> lease_return_pct(12_000, 240_000)
        5.0
        >>> lease_return_pct(12_000, 0)
        0.0
    """
    return safe_percentage(
        non_negative_or_zero(total_lease_cost), non_negative_or_zero(total_price_value)
    )


def project_lease(
    lease: LeaseParams,
    market: LeaseParams | None = None,
    total_area_sqm: float = 0.0,
) -> LeaseProjection:
    """
    Полная проекция аренды и сравнение с рынком.

    Рыночная ставка берётся за тот же срок, что и аренда (lease.duration_years).
    Валюты lease и market должны совпадать: конвертацию выполняет вызывающий код.

    Args:
        lease: Параметры аренды
        market: Рыночная ставка (None → сравнение с нулём)
        total_area_sqm: Площадь объекта для ставки за m²

    Returns:
        LeaseProjection
    """
    years = lease.duration_years
    total = lease_total_cost(lease.periodic_amount, lease.period, years)

    if market is None:
        market_monthly = market_yearly = market_total = 0.0
    else:
        market_monthly = to_monthly(market.periodic_amount, market.period)
        market_yearly = to_yearly(market.periodic_amount, market.period)
        market_total = lease_total_cost(market.periodic_amount, market.period, years)

    return LeaseProjection(
        monthly=to_monthly(lease.periodic_amount, lease.period),
        yearly=to_yearly(lease.periodic_amount, lease.period),
        total=total,
        market_monthly=market_monthly,
        market_yearly=market_yearly,
        market_total=market_total,
        price_per_sqm_per_month=price_per_sqm_per_month(
            lease.periodic_amount, lease.period, total_area_sqm
        ),
        duration_years=years,
        comparison=compare_to_market(total, market_total),
    )
