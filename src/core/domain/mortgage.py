"""
Mortgage: Параметры ипотечного кредита

Immutable Pydantic модель. Сумма кредита (principal) - это цена покупки
минус первоначальный взнос; см. MortgageParams.from_purchase.
"""

from pydantic import BaseModel, Field

from src.core.math.numerical_safeguards import non_negative_or_zero

MONTHS_PER_YEAR = 12


class MortgageParams(BaseModel):
    """Параметры кредита."""

    principal: float = Field(..., ge=0, description="Сумма кредита")
    annual_rate_percent: float = Field(..., ge=0, description="Годовая ставка, % (5 = 5%)")
    term_years: float = Field(..., ge=1, description="Срок кредита в годах")
    compound: bool = Field(True, description="True: аннуитет, False: простые проценты")

    model_config = {"frozen": True}

    @classmethod
    def from_purchase(
        cls,
        purchase_price: float,
        down_payment: float,
        annual_rate_percent: float,
        term_years: float,
        compound: bool = True,
    ) -> "MortgageParams":
        """
        Параметры кредита из цены покупки и первоначального взноса.

        principal = max(purchase_price - down_payment, 0)
        """
        principal = non_negative_or_zero(purchase_price) - non_negative_or_zero(down_payment)
        return cls(
            principal=max(principal, 0.0),
            annual_rate_percent=annual_rate_percent,
            term_years=term_years,
            compound=compound,
        )

    @property
    def number_of_payments(self) -> float:
        """Количество ежемесячных платежей: term_years * 12."""
        return self.term_years * MONTHS_PER_YEAR

    @property
    def monthly_rate(self) -> float:
        """Месячная ставка (доля): annual_rate_percent / 100 / 12."""
        return self.annual_rate_percent / 100.0 / MONTHS_PER_YEAR
