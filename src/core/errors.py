"""
Исключения ядра расчётов стоимости.

Lenient-API (to_square_meters, convert_currency, ...) эти исключения
не выбрасывают: они подставляют нейтральное значение и пишут warning.
Исключения используются strict-вариантами и прикладным слоем.
"""


class ValuationError(Exception):
    """Базовое исключение для всех доменных ошибок калькулятора."""

    pass


# =============================================================================
# РЕЕСТРЫ
# =============================================================================


class UnknownAreaUnitError(ValuationError, KeyError):
    """Идентификатор единицы площади отсутствует в реестре."""

    def __init__(self, unit_id: str):
        self.unit_id = unit_id
        super().__init__(f"Unknown area unit: {unit_id!r}")

    def __str__(self) -> str:
        return f"Unknown area unit: {self.unit_id!r}"


class UnknownCurrencyError(ValuationError, KeyError):
    """Код валюты (или пара) отсутствует в таблице курсов."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown currency code: {code!r}")

    def __str__(self) -> str:
        return f"Unknown currency code: {self.code!r}"


# =============================================================================
# ПРИКЛАДНОЙ СЛОЙ
# =============================================================================


class ComparisonLimitError(ValuationError):
    """Превышено максимальное число сравниваемых объектов."""

    pass


class SavedCalculationLimitError(ValuationError):
    """
    Пользователь достиг квоты сохранённых расчётов.

    Квота принадлежит внешнему хранилищу документов; ядро расчётов её
    не проверяет, это делает SavedCalculationStore.
    """

    def __init__(self, user_id: str, limit: int):
        self.user_id = user_id
        self.limit = limit
        super().__init__(f"You can only save up to {limit} calculations")


class SavedCalculationNotFoundError(ValuationError, KeyError):
    """Сохранённый расчёт с указанным id не найден."""

    def __init__(self, calculation_id: str):
        self.calculation_id = calculation_id
        super().__init__(f"Saved calculation not found: {calculation_id!r}")

    def __str__(self) -> str:
        return f"Saved calculation not found: {self.calculation_id!r}"
