"""
Numerical Safeguards: числовые примитивы для денежных сумм и площадей

Калькулятор получает числа прямо из формы ввода: пустые поля, строки,
отрицательные значения, NaN после деления на пустую площадь. Все расчёты
проходят через функции этого модуля:
- coerce_float / non_negative_or_zero: ввод формы → конечный float
- safe_divide / safe_percentage: деление на площадь, цену, срок
- is_close / is_zero / clamp: сравнения и ограничения сумм
- validate_*: проверки для strict-ядер (amortized_payment и т.п.)

ИНВАРИАНТЫ:
1. Результат любой функции конечен (NaN/Inf заменяются fallback)
2. Знаменатель меньше eps не подменяется: результат = fallback
3. Отрицательная площадь или цена трактуется как 0, а не как ошибка
"""

import math
from typing import Any, Final

# =============================================================================
# ПОРОГИ
# =============================================================================

# Денежные суммы (любая валюта)
EPS_MONEY: Final[float] = 1e-9

# Площади в m²; наименьшая единица реестра (mm²) = 1e-6 m²
EPS_AREA_SQM: Final[float] = 1e-12

# Ставки, коэффициенты, знаменатель аннуитета
EPS_CALC: Final[float] = 1e-12

# is_close
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12


# =============================================================================
# ВВОД ФОРМЫ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """False для NaN и ±Inf."""
    return math.isfinite(value)


def sanitize_float(value: float, fallback: float = 0.0) -> float:
    """
    value, если оно конечно, иначе fallback.

    Examples:
        >>> sanitize_float(1315.79)
        1315.79
        >>> sanitize_float(float('nan'))
        0.0
    """
    return value if is_valid_float(value) else fallback


def coerce_float(value: Any, fallback: float = 0.0) -> float:
    """
    Значение поля формы как конечный float.

    Числовые строки ("1200", "3.5") разбираются; None, "", bool,
    нечисловые строки и NaN/Inf дают fallback.

    Examples:
        >>> coerce_float("1200")
        1200.0
        >>> coerce_float("")
        0.0
    """
    if value is None or isinstance(value, bool):
        return fallback
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    return sanitize_float(number, fallback=fallback)


def non_negative_or_zero(value: Any) -> float:
    """
    Площадь или сумма из формы: всё невалидное или отрицательное → 0.0.

    Examples:
        >>> non_negative_or_zero(-3.0)
        0.0
        >>> non_negative_or_zero("12.5")
        12.5
    """
    return max(coerce_float(value, fallback=0.0), 0.0)


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def safe_divide(
    numerator: float,
    denominator: float,
    eps: float = EPS_CALC,
    fallback: float = 0.0,
) -> float:
    """
    numerator / denominator для цены за m², доли цены, платежа.

    Знаменатель |d| < eps (пустая площадь, нулевая цена) даёт fallback:
    цена за почти нулевую площадь не имеет смысла в отчёте.

    Args:
        numerator: сумма или площадь (NaN/Inf считаются 0)
        denominator: площадь, цена или число периодов
        eps: порог знаменателя, > 0
        fallback: результат при нулевом знаменателе или переполнении

    Raises:
        ValueError: eps <= 0

    Examples:
        >>> safe_divide(5_000_000.0, 3800.0) == 5_000_000.0 / 3800.0
        True
        >>> safe_divide(5_000_000.0, 0.0)
        0.0
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")

    top = sanitize_float(numerator, fallback=0.0)
    bottom = sanitize_float(denominator, fallback=0.0)
    if abs(bottom) < eps:
        return fallback

    try:
        quotient = top / bottom
    except (ZeroDivisionError, OverflowError):
        return fallback
    return sanitize_float(quotient, fallback=fallback)


def safe_percentage(part: float, whole: float, eps: float = EPS_MONEY) -> float:
    """
    part / whole * 100; 0.0 если whole ≤ eps (нет базы для процента).

    Examples:
        >>> safe_percentage(-200_000.0, 2_000_000.0)
        -10.0
        >>> safe_percentage(50.0, 0.0)
        0.0
    """
    if whole <= eps:
        return 0.0
    return safe_divide(part, whole, eps=eps) * 100.0


# =============================================================================
# СРАВНЕНИЯ
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_zero(value: float, tol: float = EPS_FLOAT_COMPARE_ABS) -> bool:
    return abs(value) <= tol


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    value в пределах [min_value, max_value]; None снимает границу.

    Examples:
        >>> clamp(-0.004, min_value=0.0)
        0.0
        >>> clamp(1.2, 0.0, 1.0)
        1.0
    """
    if min_value is not None and value < min_value:
        return min_value
    if max_value is not None and value > max_value:
        return max_value
    return value


# =============================================================================
# STRICT-ПРОВЕРКИ
# =============================================================================


def _require_finite(value: float, name: str) -> None:
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")


def validate_non_negative(value: float, name: str) -> None:
    """
    Raises:
        ValueError: value < 0 или NaN/Inf
    """
    _require_finite(value, name)
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_positive(value: float, name: str, eps: float = EPS_CALC) -> None:
    """
    Raises:
        ValueError: value <= eps или NaN/Inf
    """
    _require_finite(value, name)
    if value <= eps:
        raise ValueError(f"{name} must be positive (> {eps}), got {value}")
