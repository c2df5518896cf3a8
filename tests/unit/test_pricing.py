"""
Тесты для нормализации цены (price_per_sqm / total_price)

Проверяет:
1. Режим TOTAL: деление на площадь, нулевая площадь
2. Режим PER_UNIT: пересчёт ставки в цену за m²
3. Согласованность двух режимов
4. Нулевые / отрицательные / NaN значения
"""

import math

import pytest
from structlog.testing import capture_logs

from src.core.domain.price import PriceSpec, PriceType
from src.core.math.pricing import (
    price_per_sqm,
    price_per_sqm_of,
    total_price_of,
    total_price,
    total_value,
)

THAI_PLOT_SQM = 3800.0  # 2 Rai + 1 Ngan + 50 Wah


class TestTotalPriceMode:
    """Режим TOTAL"""

    def test_price_per_sqm(self) -> None:
        """5 000 000 THB / 3800 m² ≈ 1315.79"""
        assert price_per_sqm(5_000_000, PriceType.TOTAL, "sqm", THAI_PLOT_SQM) == pytest.approx(
            1315.789, abs=1e-3
        )

    def test_total_is_value(self) -> None:
        assert total_price(5_000_000, PriceType.TOTAL, "sqm", THAI_PLOT_SQM) == 5_000_000

    def test_zero_area(self) -> None:
        """Площадь 0: цена за m² = 0, полная цена сохраняется"""
        assert price_per_sqm(5_000_000, "total", "sqm", 0.0) == 0.0
        assert total_price(5_000_000, "total", "sqm", 0.0) == 5_000_000

    def test_unit_ignored(self) -> None:
        """В режиме TOTAL единица не используется"""
        with capture_logs() as logs:
            value = price_per_sqm(1000, "total", "cubit", 10.0)
        assert value == 100.0
        assert logs == []


class TestPerUnitMode:
    """Режим PER_UNIT"""

    def test_per_rai(self) -> None:
        """1 600 000 за Rai = 1000 за m²"""
        assert price_per_sqm(1_600_000, PriceType.PER_UNIT, "rai", 0.0) == pytest.approx(1000.0)

    def test_total_from_per_unit(self) -> None:
        """1000 за Rai, площадь 2 Rai → 2000"""
        assert total_price(1000, "per-unit", "rai", 3200.0) == pytest.approx(2000.0)

    def test_per_unit_total_zero_area(self) -> None:
        assert total_price(1000, "per-unit", "rai", 0.0) == 0.0

    def test_per_sqft(self) -> None:
        assert price_per_sqm(10, "per-unit", "sqft", 0.0) == pytest.approx(10 / 0.092903)

    def test_unknown_unit_rate_one(self) -> None:
        with capture_logs() as logs:
            assert price_per_sqm(500, "per-unit", "cubit", 0.0) == 500.0
        assert logs[0]["event"] == "area_unit_unknown"

    @pytest.mark.parametrize("unit", ["sqm", "sqft", "acre", "rai", "wah", "hectare"])
    def test_consistency_with_total_mode(self, unit: str) -> None:
        """total = per_sqm * area для per-unit цены"""
        area = 3800.0
        per_sqm = price_per_sqm(250, "per-unit", unit, area)
        total = total_price(250, "per-unit", unit, area)
        assert total == pytest.approx(per_sqm * area)
        # Та же полная цена в режиме TOTAL даёт ту же цену за m²
        assert price_per_sqm(total, "total", "sqm", area) == pytest.approx(per_sqm)


class TestGuards:
    """Нулевые и невалидные значения"""

    @pytest.mark.parametrize("value", [0, -100, math.nan, math.inf, None, ""])
    def test_non_positive_value(self, value) -> None:
        for mode in ("total", "per-unit"):
            assert price_per_sqm(value, mode, "rai", 100.0) == 0.0
            assert total_price(value, mode, "rai", 100.0) == 0.0

    def test_unknown_price_type_is_total(self) -> None:
        assert price_per_sqm(1000, "per-banana", "rai", 10.0) == 100.0
        assert total_price(1000, "per-banana", "rai", 10.0) == 1000.0

    def test_total_value(self) -> None:
        assert total_value(100.0, 25.0) == 2500.0
        assert total_value(0.0, 25.0) == 0.0
        assert total_value(100.0, -1.0) == 0.0
        assert total_value(math.nan, 25.0) == 0.0


class TestPriceSpec:
    """Хелперы для PriceSpec"""

    def test_total_price_of(self) -> None:
        price_spec = PriceSpec(value=5_000_000, currency="THB")
        assert total_price_of(price_spec, THAI_PLOT_SQM) == 5_000_000
        assert price_per_sqm_of(price_spec, THAI_PLOT_SQM) == pytest.approx(1315.789, abs=1e-3)

    def test_per_unit_price_of(self) -> None:
        price_spec = PriceSpec(value=400, price_type=PriceType.PER_UNIT, selected_unit="ngan")
        assert price_per_sqm_of(price_spec, 800.0) == pytest.approx(1.0)
        assert total_price_of(price_spec, 800.0) == pytest.approx(800.0)

    def test_empty_price(self) -> None:
        price_spec = PriceSpec(value=None)
        assert not price_spec.is_set()
        assert total_price_of(price_spec, 100.0) == 0.0
