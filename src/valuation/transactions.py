"""
Transactions: расчёт ипотеки и аренды объекта

Оба расчёта берут уже нормализованную цену объекта, вызывают чистый
калькулятор из src.core.math и переводят все суммы в валюту отображения.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from src.core.config.settings import ValuationConfig
from src.core.domain.lease import LeaseParams
from src.core.domain.mortgage import MortgageParams
from src.core.math.amortization import (
    MortgageSummary,
    ScheduleYear,
    amortization_schedule,
    summarize_mortgage,
)
from src.core.math.lease import (
    LeaseProjection,
    MarketComparison,
    lease_return_pct,
    project_lease,
)
from src.valuation._helpers import make_converter

logger = structlog.get_logger(__name__)


# =============================================================================
# MORTGAGE
# =============================================================================


@dataclass(frozen=True)
class MortgageEvaluation:
    """Результат расчёта ипотеки (суммы в ``currency``)."""

    currency: str
    purchase_price: float
    down_payment: float
    principal: float
    annual_rate_percent: float
    term_years: float
    compound: bool
    monthly_payment: float
    total_interest: float
    total_paid: float
    schedule: tuple[ScheduleYear, ...]
    fallbacks: tuple[str, ...] = ()


def evaluate_mortgage(
    purchase_price: float,
    down_payment: float,
    annual_rate_percent: float,
    term_years: float,
    *,
    compound: bool = True,
    currency: str = "USD",
    down_payment_currency: str | None = None,
    display_currency: str | None = None,
    config: ValuationConfig | None = None,
) -> MortgageEvaluation:
    """Расчёт ипотеки по цене покупки и первоначальному взносу.

    Первоначальный взнос может быть указан в своей валюте: он
    конвертируется в валюту цены до вычисления суммы кредита.

    Raises:
        pydantic.ValidationError: если ставка < 0 или срок < 1 года
        UnknownCurrencyError: только при config.lenient=False
    """
    config = config or ValuationConfig()
    display = display_currency or currency
    fallbacks: list[str] = []

    to_price_currency = make_converter(
        down_payment_currency or currency, currency, lenient=config.lenient, fallbacks=fallbacks
    )
    down_payment_in_price = to_price_currency(down_payment)

    params = MortgageParams.from_purchase(
        purchase_price,
        down_payment_in_price,
        annual_rate_percent,
        term_years,
        compound=compound,
    )
    summary: MortgageSummary = summarize_mortgage(params)
    schedule = amortization_schedule(params)

    convert = make_converter(currency, display, lenient=config.lenient, fallbacks=fallbacks)

    logger.debug(
        "mortgage_evaluated",
        principal=params.principal,
        rate=annual_rate_percent,
        term_years=term_years,
        compound=compound,
    )

    return MortgageEvaluation(
        currency=display,
        purchase_price=convert(purchase_price),
        down_payment=convert(down_payment_in_price),
        principal=convert(summary.principal),
        annual_rate_percent=params.annual_rate_percent,
        term_years=params.term_years,
        compound=params.compound,
        monthly_payment=convert(summary.monthly_payment),
        total_interest=convert(summary.total_interest),
        total_paid=convert(summary.total_paid),
        schedule=tuple(
            ScheduleYear(
                year=row.year,
                interest_paid=convert(row.interest_paid),
                principal_paid=convert(row.principal_paid),
                closing_balance=convert(row.closing_balance),
            )
            for row in schedule
        ),
        fallbacks=tuple(dict.fromkeys(fallbacks)),
    )


# =============================================================================
# LEASE
# =============================================================================


@dataclass(frozen=True)
class LeaseEvaluation:
    """Результат расчёта аренды (суммы в ``currency``)."""

    currency: str
    total_price: float
    projection: LeaseProjection
    lease_return_pct: float
    fallbacks: tuple[str, ...] = ()

    @property
    def comparison(self) -> MarketComparison:
        return self.projection.comparison


def evaluate_lease(
    lease: LeaseParams,
    market: LeaseParams | None = None,
    *,
    total_area_sqm: float = 0.0,
    total_price: float = 0.0,
    price_currency: str | None = None,
    display_currency: str | None = None,
    config: ValuationConfig | None = None,
) -> LeaseEvaluation:
    """Расчёт аренды и сравнение с рыночной ставкой.

    Рыночная ставка конвертируется в валюту аренды, затем вся проекция
    переводится в валюту отображения. Доходность аренды считается как
    полная стоимость аренды / цена объекта * 100.

    Args:
        lease: параметры аренды
        market: рыночная ставка (None: сравнение с нулём)
        total_area_sqm: площадь для ставки за m²
        total_price: цена объекта
        price_currency: валюта цены (default: валюта аренды)
        display_currency: валюта результата (default: валюта аренды)
    """
    config = config or ValuationConfig()
    display = display_currency or lease.currency
    fallbacks: list[str] = []

    if market is not None and market.currency != lease.currency:
        to_lease = make_converter(
            market.currency, lease.currency, lenient=config.lenient, fallbacks=fallbacks
        )
        market = market.model_copy(
            update={
                "periodic_amount": to_lease(market.periodic_amount),
                "currency": lease.currency,
            }
        )

    projection = project_lease(lease, market, total_area_sqm)

    convert = make_converter(lease.currency, display, lenient=config.lenient, fallbacks=fallbacks)
    price_convert = make_converter(
        price_currency or lease.currency, display, lenient=config.lenient, fallbacks=fallbacks
    )
    price_in_display = price_convert(total_price)

    comparison = projection.comparison
    converted = LeaseProjection(
        monthly=convert(projection.monthly),
        yearly=convert(projection.yearly),
        total=convert(projection.total),
        market_monthly=convert(projection.market_monthly),
        market_yearly=convert(projection.market_yearly),
        market_total=convert(projection.market_total),
        price_per_sqm_per_month=convert(projection.price_per_sqm_per_month),
        duration_years=projection.duration_years,
        comparison=MarketComparison(
            lease_cost=convert(comparison.lease_cost),
            market_cost=convert(comparison.market_cost),
            difference=convert(comparison.difference),
            difference_pct=comparison.difference_pct,
            above_market=comparison.above_market,
        ),
    )

    return LeaseEvaluation(
        currency=display,
        total_price=price_in_display,
        projection=converted,
        lease_return_pct=lease_return_pct(converted.total, price_in_display),
        fallbacks=tuple(dict.fromkeys(fallbacks)),
    )
