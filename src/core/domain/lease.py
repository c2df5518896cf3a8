"""
Lease: Параметры аренды

Сумма аренды задаётся за период (месяц, квартал, год) и длительность
договора в годах. Пересчёт в эквиваленты выполняется в src.core.math.lease.
"""

from enum import Enum

from pydantic import BaseModel, Field

DEFAULT_LEASE_DURATION_YEARS = 10.0


class LeasePeriod(str, Enum):
    """Период, за который указана сумма аренды."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class LeaseParams(BaseModel):
    """Параметры аренды."""

    periodic_amount: float = Field(0.0, ge=0, description="Сумма за период")
    period: LeasePeriod = Field(LeasePeriod.MONTHLY, description="Период суммы")
    duration_years: float = Field(
        DEFAULT_LEASE_DURATION_YEARS, ge=0, description="Длительность аренды, лет"
    )
    currency: str = Field("USD", min_length=3, max_length=3, description="Код валюты")

    model_config = {"frozen": True}
