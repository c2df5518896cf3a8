"""
Contracts: JSON Schema документов, которые калькулятор отдаёт наружу
(хранилище сохранённых расчётов, генератор отчётов).
"""

from .validators import (
    SCHEMA_DIR,
    DocumentContract,
    ReportRowValidator,
    SavedCalculationValidator,
    SchemaLoader,
    validate_report_row,
    validate_saved_calculation,
)

__all__ = [
    # Loader
    "SCHEMA_DIR",
    "SchemaLoader",
    # Contracts
    "DocumentContract",
    "SavedCalculationValidator",
    "ReportRowValidator",
    # Functions
    "validate_saved_calculation",
    "validate_report_row",
]
