"""
Valuation services: buy/sell, mortgage, lease, comparison, reports and
saved calculations built on top of ``src.core``.
"""

from src.valuation.comparison import (
    ComparisonEntry,
    ComparisonResult,
    Difference,
    PropertyComparator,
    difference,
)
from src.valuation.property import (
    PropertyInput,
    PropertyValuation,
    PropertyValuator,
    TransactionType,
)
from src.valuation.report import (
    ResultRow,
    RowKind,
    export_rows,
    format_area,
    format_currency,
    format_number,
    format_percentage,
    lease_rows,
    mortgage_rows,
    property_rows,
    render_text,
)
from src.valuation.saved import SavedCalculationStore, build_document
from src.valuation.transactions import (
    LeaseEvaluation,
    MortgageEvaluation,
    evaluate_lease,
    evaluate_mortgage,
)

__all__ = [
    # Buy/sell
    "PropertyInput",
    "PropertyValuation",
    "PropertyValuator",
    "TransactionType",
    # Mortgage / lease
    "LeaseEvaluation",
    "MortgageEvaluation",
    "evaluate_lease",
    "evaluate_mortgage",
    # Comparison
    "ComparisonEntry",
    "ComparisonResult",
    "Difference",
    "PropertyComparator",
    "difference",
    # Reports
    "ResultRow",
    "RowKind",
    "export_rows",
    "format_area",
    "format_currency",
    "format_number",
    "format_percentage",
    "lease_rows",
    "mortgage_rows",
    "property_rows",
    "render_text",
    # Saved calculations
    "SavedCalculationStore",
    "build_document",
]
