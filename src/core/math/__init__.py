"""
Core math modules для калькулятора оценки недвижимости

Численные примитивы с гарантией стабильности. Калькуляторы
(pricing, amortization, lease) зависят от domain-моделей и
импортируются из своих модулей напрямую.
"""

from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_AREA_SQM,
    EPS_CALC,
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_MONEY,
    # Safe division
    safe_divide,
    safe_percentage,
    # NaN/Inf sanitization
    coerce_float,
    is_valid_float,
    non_negative_or_zero,
    sanitize_float,
    # Epsilon comparisons
    is_close,
    is_zero,
    # Utilities
    clamp,
    # Validation
    validate_non_negative,
    validate_positive,
)

__all__ = [
    # Epsilon constants
    "EPS_AREA_SQM",
    "EPS_CALC",
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "EPS_MONEY",
    # Safe division
    "safe_divide",
    "safe_percentage",
    # NaN/Inf sanitization
    "coerce_float",
    "is_valid_float",
    "non_negative_or_zero",
    "sanitize_float",
    # Epsilon comparisons
    "is_close",
    "is_zero",
    # Utilities
    "clamp",
    # Validation
    "validate_non_negative",
    "validate_positive",
]
