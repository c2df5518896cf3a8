"""
Report: строки результата и форматирование для отчётов

Отчёт: плоский список ResultRow (заголовок, значение, валюта, пояснение,
знак). Те же строки сохраняются в документах расчётов и передаются
внешнему генератору PDF, поэтому их dict-форма следует report_row.json.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from src.core.contracts.validators import ReportRowValidator
from src.core.domain.area import PropertyKind
from src.core.domain.currency import currency_symbol
from src.core.domain.units import AREA_UNITS, convert_area, is_known_unit
from src.valuation.property import PropertyValuation
from src.valuation.transactions import LeaseEvaluation, MortgageEvaluation


class RowKind(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class ResultRow:
    title: str
    value: float | str
    info: str
    currency: str | None = None
    kind: RowKind | None = None
    percentage: float | None = None
    unit: str | None = None

    def to_document(self) -> dict[str, Any]:
        """Dict-форма по report_row.json."""
        value = self.value
        if isinstance(value, float) and not math.isfinite(value):
            value = 0.0
        return {
            "title": self.title,
            "value": value,
            "currency": self.currency,
            "info": self.info,
            "type": self.kind.value if self.kind else None,
            "percentage": self.percentage,
            "unit": self.unit,
        }

    def formatted_value(self) -> str:
        if isinstance(self.value, str):
            return self.value
        if self.currency:
            text = format_currency(self.value, self.currency)
        elif self.unit == "%":
            text = format_percentage(self.value)
        elif self.unit:
            text = format_area(self.value, self.unit)
        else:
            text = format_number(self.value)
        if self.percentage is not None:
            text = f"{text} ({format_percentage(self.percentage)})"
        return text


# =============================================================================
# FORMATTING
# =============================================================================


def _finite(value: float) -> float:
    if value is None or not math.isfinite(value):
        return 0.0
    return value


def format_number(value: float, decimals: int = 2) -> str:
    """
    Число с разделителем тысяч и фиксированным числом знаков.

    Examples:
        >>> format_number(1234567.891)
        '1,234,567.89'
    """
    return f"{_finite(value):,.{decimals}f}"


def format_currency(value: float, currency: str = "USD") -> str:
    """
    Денежная сумма с узким символом валюты; NaN/Inf отображаются как 0.

    Examples:
        >>> format_currency(1315.789, "THB")
        '฿1,315.79'
        >>> format_currency(-50, "USD")
        '-$50.00'
        >>> format_currency(float("nan"), "EUR")
        '€0.00'
    """
    amount = _finite(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol(currency)}{abs(amount):,.2f}"


def format_percentage(value: float) -> str:
    """
    Examples:
        >>> format_percentage(-12.345)
        '-12.35%'
    """
    return f"{_finite(value):.2f}%"


def format_area(value_sqm: float, unit: str = "sqm") -> str:
    """
    Площадь (в m²) в выбранной единице с её коротким обозначением.

    Examples:
        >>> format_area(3200, "rai")
        '2.00 Rai'
    """
    if not is_known_unit(unit):
        return f"{format_number(value_sqm)} m²"
    converted = convert_area(_finite(value_sqm), "sqm", unit)
    return f"{format_number(converted)} {AREA_UNITS[unit].short_name}"


def render_text(rows: list[ResultRow]) -> list[str]:
    """Строки "Title: value" для текстового или PDF отчёта."""
    return [f"{row.title}: {row.formatted_value()}" for row in rows]


def export_rows(rows: list[ResultRow]) -> list[dict[str, Any]]:
    """Документы строк для генератора отчёта, проверенные по report_row.json."""
    documents = [row.to_document() for row in rows]
    ReportRowValidator().validate_rows(documents)
    return documents


# =============================================================================
# ROW BUILDERS
# =============================================================================


def _signed(amount: float) -> RowKind:
    return RowKind.POSITIVE if amount >= 0 else RowKind.NEGATIVE


def property_rows(valuation: PropertyValuation) -> list[ResultRow]:
    """Строки результата купли-продажи."""
    c = valuation.currency
    rows = [
        ResultRow("Total Area", valuation.total_area_sqm, "Total area in square meters", unit="sqm"),
        ResultRow("Price per m²", valuation.price_per_sqm, "Price per square meter", currency=c),
        ResultRow("Total Price", valuation.total_price, "Total property price", currency=c),
    ]
    if valuation.kind == PropertyKind.LAND_AND_BUILDING:
        rows.extend(
            [
                ResultRow("Land Area", valuation.land_area_sqm, "Total land area", unit="sqm"),
                ResultRow("Land Value", valuation.land_value, "Total land value", currency=c),
                ResultRow(
                    "Building Area", valuation.building_area_sqm, "Total building area", unit="sqm"
                ),
                ResultRow(
                    "Building Value", valuation.building_value, "Total building value", currency=c
                ),
            ]
        )
    if valuation.valuation_total is not None:
        diff = valuation.valuation_difference or 0.0
        rows.extend(
            [
                ResultRow("Valuation", valuation.valuation_total, "Appraised property value", currency=c),
                ResultRow(
                    "Valuation Difference",
                    diff,
                    "Valuation minus asking price",
                    currency=c,
                    kind=_signed(diff),
                    percentage=valuation.valuation_difference_pct,
                ),
            ]
        )
    return rows


def mortgage_rows(evaluation: MortgageEvaluation) -> list[ResultRow]:
    """Строки результата ипотеки."""
    c = evaluation.currency
    policy = "compound" if evaluation.compound else "simple"
    return [
        ResultRow("Purchase Price", evaluation.purchase_price, "Total property purchase price", currency=c),
        ResultRow("Down Payment", evaluation.down_payment, "Initial payment amount", currency=c),
        ResultRow(
            "Principal Loan Amount",
            evaluation.principal,
            "Purchase price minus down payment",
            currency=c,
        ),
        ResultRow("Monthly Payment", evaluation.monthly_payment, f"Based on {policy} interest", currency=c),
        ResultRow(
            "Total Interest",
            evaluation.total_interest,
            "Total interest over loan term",
            currency=c,
            kind=RowKind.NEGATIVE,
        ),
        ResultRow(
            "Total Amount Paid",
            evaluation.total_paid,
            "Principal plus total interest",
            currency=c,
        ),
    ]


def lease_rows(evaluation: LeaseEvaluation) -> list[ResultRow]:
    """Строки результата аренды.

    Аренда дороже рынка (difference > 0) помечается как NEGATIVE.
    """
    c = evaluation.currency
    p = evaluation.projection
    cmp = p.comparison
    years = f"{p.duration_years:g}"
    return [
        ResultRow("Total Price", evaluation.total_price, "Total property price", currency=c),
        ResultRow("Monthly Payment", p.monthly, "Your monthly lease payment", currency=c),
        ResultRow("Total Lease Cost", p.total, f"Total cost over {years} years", currency=c),
        ResultRow("Market Monthly Rate", p.market_monthly, "Current market monthly rate", currency=c),
        ResultRow(
            "Total Market Value", p.market_total, "Total market value over lease period", currency=c
        ),
        ResultRow(
            "Value Difference",
            cmp.difference,
            "Above market rate" if cmp.above_market else "Below market rate",
            currency=c,
            kind=RowKind.NEGATIVE if cmp.above_market else RowKind.POSITIVE,
            percentage=cmp.difference_pct,
        ),
        ResultRow(
            "Lease Return",
            evaluation.lease_return_pct,
            "Total lease cost as a share of the property price",
            unit="%",
        ),
    ]
