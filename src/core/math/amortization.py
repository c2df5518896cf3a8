"""
Amortization: Ежемесячный платёж, переплата и график погашения кредита

Две политики начисления процентов:
- compound (аннуитет): стандартная формула амортизирующего кредита
- simple: проценты начисляются на исходную сумму за весь срок и
  распределяются равными долями по месяцам

ФОРМУЛЫ:
    r = annual_rate_percent / 100 / 12
    n = term_years * 12

    compound: payment = P * r * (1+r)^n / ((1+r)^n - 1)
    simple:   payment = (P + P * annual_rate_percent/100 * term_years) / n

    total_interest = payment * n - P
    total_paid     = P + total_interest

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Незаполненная форма (P, ставка или срок равны 0 / NaN) → платёж 0.0,
   а не исключение
2. Нулевая ставка в формуле аннуитета не делит на ноль: ядро
   amortized_payment возвращает P / n (линейное погашение)
3. NaN/Inf не распространяются в отчёты
"""

import math
from typing import Final, NamedTuple

from src.core.domain.mortgage import MONTHS_PER_YEAR, MortgageParams
from src.core.math.numerical_safeguards import (
    EPS_CALC,
    clamp,
    coerce_float,
    safe_divide,
    sanitize_float,
    validate_non_negative,
    validate_positive,
)

# Порог, ниже которого (1+r)^n - 1 считается нулём
ANNUITY_DENOM_EPS: Final[float] = 1e-12


class MortgageSummary(NamedTuple):
    """Итоги по кредиту."""

    principal: float
    monthly_payment: float
    total_interest: float
    total_paid: float
    number_of_payments: float
    compound: bool


class ScheduleYear(NamedTuple):
    """Строка годового графика погашения."""

    year: int
    interest_paid: float
    principal_paid: float
    closing_balance: float


# =============================================================================
# ANNUITY KERNEL
# =============================================================================


def amortized_payment(principal: float, monthly_rate: float, number_of_payments: float) -> float:
    """
    Аннуитетный платёж.

    При monthly_rate == 0 (или когда (1+r)^n - 1 неотличимо от нуля)
    формула вырождается; в этом случае возвращается P / n.

    Args:
        principal: Сумма кредита
        monthly_rate: Месячная ставка (доля, не проценты)
        number_of_payments: Количество платежей

    Returns:
        Ежемесячный платёж

    Raises:
        ValueError: если number_of_payments <= 0 или principal < 0 / NaN

    Examples:
        >>> amortized_payment(1200.0, 0.0, 12)
        100.0
        >>> round(amortized_payment(1_000_000, 0.05 / 12, 360), 2)
        5368.22
    """
    validate_positive(number_of_payments, "number_of_payments")
    validate_non_negative(principal, "principal")

    growth = math.pow(1.0 + monthly_rate, number_of_payments)
    denominator = growth - 1.0

    if abs(denominator) < ANNUITY_DENOM_EPS:
        return principal / number_of_payments

    payment = principal * monthly_rate * growth / denominator
    return sanitize_float(payment, fallback=principal / number_of_payments)


def simple_interest_payment(
    principal: float, annual_rate_percent: float, term_years: float
) -> float:
    """
    Платёж при простых процентах.

    Examples:
        >>> round(simple_interest_payment(1_000_000, 5, 30), 2)
        6944.44
    """
    total_interest_amount = principal * (annual_rate_percent / 100.0) * term_years
    return safe_divide(
        principal + total_interest_amount,
        term_years * MONTHS_PER_YEAR,
        eps=EPS_CALC,
    )


# =============================================================================
# LENIENT ENTRY POINTS
# =============================================================================


def monthly_payment(
    principal: float,
    annual_rate_percent: float,
    term_years: float,
    compound: bool = True,
) -> float:
    """
    Ежемесячный платёж по кредиту.

    Если principal, ставка или срок равны нулю / не заданы / не конечны,
    возвращается 0.0 (неполная форма).

    Examples:
        >>> round(monthly_payment(1_000_000, 5, 30, compound=True), 2)
        5368.22
        >>> round(monthly_payment(1_000_000, 5, 30, compound=False), 2)
        6944.44
        >>> monthly_payment(1_000_000, 0, 30)
        0.0
    """
    p = coerce_float(principal)
    rate = coerce_float(annual_rate_percent)
    years = coerce_float(term_years)

    if p <= 0 or rate <= 0 or years <= 0:
        return 0.0

    if compound:
        monthly_rate = rate / 100.0 / MONTHS_PER_YEAR
        return amortized_payment(p, monthly_rate, years * MONTHS_PER_YEAR)

    return simple_interest_payment(p, rate, years)


def total_interest(principal: float, monthly_payment_value: float, term_years: float) -> float:
    """
    Переплата за весь срок: monthly_payment * term_years * 12 - principal.

    Выводится из уже посчитанного платежа, поэтому согласована с ним для
    обеих политик. Если любая величина равна нулю → 0.0.

    Examples:
        >>> round(total_interest(1_000_000, 6944.444444444444, 30), 2)
        1500000.0
    """
    p = coerce_float(principal)
    payment = coerce_float(monthly_payment_value)
    years = coerce_float(term_years)

    if p <= 0 or payment <= 0 or years <= 0:
        return 0.0

    return sanitize_float(payment * years * MONTHS_PER_YEAR - p)


def params_monthly_payment(params: MortgageParams) -> float:
    """monthly_payment для MortgageParams."""
    return monthly_payment(
        params.principal, params.annual_rate_percent, params.term_years, params.compound
    )


def summarize_mortgage(params: MortgageParams) -> MortgageSummary:
    """
    Итоги по кредиту: платёж, переплата, общая сумма выплат.

    Args:
        params: Параметры кредита

    Returns:
        MortgageSummary
    """
    payment = params_monthly_payment(params)
    interest = total_interest(params.principal, payment, params.term_years)
    return MortgageSummary(
        principal=params.principal,
        monthly_payment=payment,
        total_interest=interest,
        total_paid=params.principal + interest,
        number_of_payments=params.number_of_payments,
        compound=params.compound,
    )


# =============================================================================
# SCHEDULE
# =============================================================================


def amortization_schedule(params: MortgageParams) -> list[ScheduleYear]:
    """
    Годовой график погашения.

    compound: проценты каждого месяца начисляются на остаток долга,
    остаток тела уменьшается на (платёж - проценты).
    simple: проценты постоянны (P * rate * 1 год), тело гасится линейно.

    Для неполной формы (платёж = 0) возвращается пустой список.

    Число месяцев графика: round(term_years * 12); последний платёж
    закрывает остаток долга.

    Returns:
        Список ScheduleYear длины ceil(months / 12)
    """
    payment = params_monthly_payment(params)
    if payment <= 0:
        return []

    total_months = int(round(params.number_of_payments))
    balance = params.principal
    schedule: list[ScheduleYear] = []

    if params.compound:
        monthly_rate = params.monthly_rate
        # Платёж по round(term_years * 12) месяцам
        payment = amortized_payment(params.principal, monthly_rate, total_months)
        year_interest = 0.0
        year_principal = 0.0
        for month in range(1, total_months + 1):
            interest = balance * monthly_rate
            if month == total_months:
                principal_part = balance
            else:
                principal_part = min(payment - interest, balance)
            balance -= principal_part
            year_interest += interest
            year_principal += principal_part
            if month % MONTHS_PER_YEAR == 0 or month == total_months:
                schedule.append(
                    ScheduleYear(
                        year=len(schedule) + 1,
                        interest_paid=year_interest,
                        principal_paid=year_principal,
                        closing_balance=clamp(balance, min_value=0.0),
                    )
                )
                year_interest = 0.0
                year_principal = 0.0
        return schedule

    monthly_interest = params.principal * params.annual_rate_percent / 100.0 / MONTHS_PER_YEAR
    monthly_principal = params.principal / total_months
    for start in range(0, total_months, MONTHS_PER_YEAR):
        months = min(MONTHS_PER_YEAR, total_months - start)
        balance -= monthly_principal * months
        schedule.append(
            ScheduleYear(
                year=len(schedule) + 1,
                interest_paid=monthly_interest * months,
                principal_paid=monthly_principal * months,
                closing_balance=clamp(balance, min_value=0.0),
            )
        )
    return schedule
