"""
Тесты для ипотечного калькулятора

Проверяет:
1. Аннуитетный платёж (compound) и простые проценты (simple)
2. Переплату, согласованную с платежом
3. Вырожденную нулевую ставку (ядро → P / n)
4. Неполную форму (0 / NaN → 0.0)
5. Годовой график погашения
"""

import math

import pytest
from pydantic import ValidationError

from src.core.domain.mortgage import MortgageParams
from src.core.math.amortization import (
    amortization_schedule,
    amortized_payment,
    monthly_payment,
    simple_interest_payment,
    summarize_mortgage,
    total_interest,
)


def _annuity(p: float, annual_rate_percent: float, years: float) -> float:
    """Независимое вычисление аннуитета для сверки."""
    r = annual_rate_percent / 1200
    n = years * 12
    return p * r / (1 - (1 + r) ** -n)


# =============================================================================
# ПЛАТЁЖ
# =============================================================================


class TestMonthlyPayment:
    """Тесты monthly_payment"""

    def test_compound_reference(self) -> None:
        """1 000 000 под 5% на 30 лет ≈ 5368.22"""
        assert monthly_payment(1_000_000, 5, 30) == pytest.approx(5368.22, abs=0.01)

    def test_simple_reference(self) -> None:
        """(1 000 000 + 1 500 000) / 360 ≈ 6944.44"""
        assert monthly_payment(1_000_000, 5, 30, compound=False) == pytest.approx(
            6944.44, abs=0.01
        )

    @pytest.mark.parametrize(
        ("principal", "rate", "years"),
        [(250_000, 3.5, 15), (4_000_000, 7.25, 25), (10_000, 12, 1)],
    )
    def test_compound_matches_independent_formula(
        self, principal: float, rate: float, years: float
    ) -> None:
        assert monthly_payment(principal, rate, years) == pytest.approx(
            _annuity(principal, rate, years), rel=1e-9
        )

    def test_simple_interest_payment(self) -> None:
        assert simple_interest_payment(1_000_000, 5, 30) == pytest.approx(6944.444, abs=1e-3)

    def test_simple_costs_more_than_compound_over_long_term(self) -> None:
        assert monthly_payment(1_000_000, 5, 30, compound=False) > monthly_payment(
            1_000_000, 5, 30
        )

    @pytest.mark.parametrize(
        ("principal", "rate", "years"),
        [
            (0, 5, 30),
            (1_000_000, 0, 30),
            (1_000_000, 5, 0),
            (-1, 5, 30),
            (math.nan, 5, 30),
            (None, 5, 30),
            ("", 5, 30),
        ],
    )
    def test_incomplete_form_returns_zero(self, principal, rate, years) -> None:
        """Неполная форма → 0.0 для обеих политик"""
        assert monthly_payment(principal, rate, years) == 0.0
        assert monthly_payment(principal, rate, years, compound=False) == 0.0


class TestAmortizedPayment:
    """Тесты ядра amortized_payment"""

    def test_zero_rate_is_linear(self) -> None:
        """r = 0: платёж = P / n, без деления на ноль"""
        assert amortized_payment(1200.0, 0.0, 12) == 100.0

    def test_tiny_rate_close_to_linear(self) -> None:
        assert amortized_payment(1200.0, 1e-15, 12) == pytest.approx(100.0)

    def test_reference(self) -> None:
        assert amortized_payment(1_000_000, 0.05 / 12, 360) == pytest.approx(5368.22, abs=0.01)

    def test_non_positive_payments_raise(self) -> None:
        with pytest.raises(ValueError, match="number_of_payments must be positive"):
            amortized_payment(1000.0, 0.01, 0)

    def test_negative_principal_raises(self) -> None:
        with pytest.raises(ValueError, match="principal"):
            amortized_payment(-1000.0, 0.01, 12)


# =============================================================================
# ПЕРЕПЛАТА
# =============================================================================


class TestTotalInterest:
    """Тесты total_interest"""

    def test_compound_reference(self) -> None:
        payment = monthly_payment(1_000_000, 5, 30)
        expected = _annuity(1_000_000, 5, 30) * 360 - 1_000_000
        assert total_interest(1_000_000, payment, 30) == pytest.approx(expected, rel=1e-9)
        assert total_interest(1_000_000, payment, 30) == pytest.approx(932_557.84, abs=1.0)

    def test_simple_reference(self) -> None:
        payment = monthly_payment(1_000_000, 5, 30, compound=False)
        assert total_interest(1_000_000, payment, 30) == pytest.approx(1_500_000.0)

    def test_zero_inputs(self) -> None:
        assert total_interest(0, 5000, 30) == 0.0
        assert total_interest(1_000_000, 0, 30) == 0.0
        assert total_interest(1_000_000, 5000, 0) == 0.0


class TestSummary:
    """Тесты summarize_mortgage"""

    def test_summary_consistent(self) -> None:
        params = MortgageParams(principal=1_000_000, annual_rate_percent=5, term_years=30)
        summary = summarize_mortgage(params)

        assert summary.number_of_payments == 360
        assert summary.compound is True
        assert summary.total_paid == pytest.approx(summary.monthly_payment * 360)
        assert summary.total_paid == pytest.approx(summary.principal + summary.total_interest)

    def test_zero_rate_summary(self) -> None:
        """Ставка 0 в форме трактуется как незаполненная"""
        params = MortgageParams(principal=1_000_000, annual_rate_percent=0, term_years=30)
        summary = summarize_mortgage(params)
        assert summary.monthly_payment == 0.0
        assert summary.total_interest == 0.0
        assert summary.total_paid == 1_000_000


class TestMortgageParams:
    """Тесты MortgageParams"""

    def test_from_purchase(self) -> None:
        params = MortgageParams.from_purchase(5_000_000, 1_000_000, 4.5, 20)
        assert params.principal == 4_000_000
        assert params.number_of_payments == 240
        assert params.monthly_rate == pytest.approx(0.045 / 12)

    def test_down_payment_exceeds_price(self) -> None:
        params = MortgageParams.from_purchase(100_000, 150_000, 5, 10)
        assert params.principal == 0.0

    def test_term_below_one_year_rejected(self) -> None:
        with pytest.raises(ValidationError, match="greater than or equal to 1"):
            MortgageParams(principal=1000, annual_rate_percent=5, term_years=0.5)

    def test_negative_rate_rejected(self) -> None:
        with pytest.raises(ValidationError, match="greater than or equal to 0"):
            MortgageParams.from_purchase(100_000, 0, -1, 10)


# =============================================================================
# ГРАФИК
# =============================================================================


class TestSchedule:
    """Тесты amortization_schedule"""

    def test_compound_schedule(self) -> None:
        params = MortgageParams(principal=1_000_000, annual_rate_percent=5, term_years=30)
        schedule = amortization_schedule(params)
        summary = summarize_mortgage(params)

        assert len(schedule) == 30
        assert [row.year for row in schedule] == list(range(1, 31))
        assert schedule[-1].closing_balance == pytest.approx(0.0, abs=1e-4)
        assert sum(row.principal_paid for row in schedule) == pytest.approx(1_000_000, abs=1e-3)
        assert sum(row.interest_paid for row in schedule) == pytest.approx(
            summary.total_interest, abs=1e-3
        )

    def test_compound_interest_decreases(self) -> None:
        params = MortgageParams(principal=500_000, annual_rate_percent=6, term_years=10)
        schedule = amortization_schedule(params)
        interests = [row.interest_paid for row in schedule]
        assert interests == sorted(interests, reverse=True)

    def test_simple_schedule(self) -> None:
        params = MortgageParams(
            principal=1_200_000, annual_rate_percent=5, term_years=10, compound=False
        )
        schedule = amortization_schedule(params)

        assert len(schedule) == 10
        for row in schedule:
            assert row.interest_paid == pytest.approx(60_000.0)
            assert row.principal_paid == pytest.approx(120_000.0)
        assert schedule[-1].closing_balance == pytest.approx(0.0, abs=1e-6)

    def test_partial_last_year(self) -> None:
        params = MortgageParams(principal=100_000, annual_rate_percent=5, term_years=2.5)
        schedule = amortization_schedule(params)
        assert len(schedule) == 3
        assert schedule[-1].closing_balance == pytest.approx(0.0, abs=1e-6)

    def test_fractional_term_paid_off(self) -> None:
        """1.04 года = 12.48 платежа: график из 12 месяцев закрывает долг"""
        params = MortgageParams(principal=120_000, annual_rate_percent=6, term_years=1.04)
        schedule = amortization_schedule(params)

        assert len(schedule) == 1
        assert schedule[-1].closing_balance == 0.0
        assert schedule[-1].principal_paid == pytest.approx(120_000.0)

    def test_fractional_term_simple(self) -> None:
        params = MortgageParams(
            principal=120_000, annual_rate_percent=6, term_years=1.04, compound=False
        )
        schedule = amortization_schedule(params)
        assert schedule[-1].closing_balance == pytest.approx(0.0, abs=1e-6)

    def test_empty_form(self) -> None:
        params = MortgageParams(principal=0, annual_rate_percent=5, term_years=30)
        assert amortization_schedule(params) == []
