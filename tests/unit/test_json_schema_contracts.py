"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных документов
- Детекция нарушений required полей
- Детекция нарушений типов и constraints (enum/pattern/minimum)
- Интеграция с Pydantic моделями и строками отчёта
"""

import json

import pytest
from jsonschema import ValidationError
from structlog.testing import capture_logs

from src.core.contracts import (
    ReportRowValidator,
    SavedCalculationValidator,
    SchemaLoader,
    validate_report_row,
    validate_saved_calculation,
)
from src.core.domain import CompositeArea, PriceSpec, PriceType
from src.valuation.property import PropertyInput, PropertyValuator
from src.valuation.report import property_rows
from src.valuation.saved import build_document

# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_row():
    """Валидная строка отчёта."""
    return {
        "title": "Total Price",
        "value": 5000000.0,
        "currency": "THB",
        "info": "Total property price",
        "type": None,
        "percentage": None,
        "unit": None,
    }


@pytest.fixture
def valid_calculation(valid_row):
    """Валидный документ сохранённого расчёта."""
    return {
        "userId": "user-42",
        "propertyType": "land",
        "propertyNumber": 1,
        "transactionType": "buy-sell",
        "landArea": {
            "column1": {"value": 2, "unit": "rai"},
            "column2": {"value": 1, "unit": "ngan"},
            "column3": {"value": 50, "unit": "wah"},
        },
        "buildingArea": None,
        "price": {
            "value": 5000000,
            "currency": "THB",
            "priceType": "total",
            "selectedUnit": "sqm",
        },
        "valuation": None,
        "results": [valid_row],
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты SchemaLoader"""

    def test_schemas_are_valid(self):
        """Обе схемы проходят meta-validation."""
        loader = SchemaLoader()
        for name in ("saved_calculation", "report_row"):
            schema = loader.load_schema(name)
            assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("report_row") is loader.load_schema("report_row")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError, match="Schema not found"):
            SchemaLoader().load_schema("no_such_schema")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "absent")

    def test_invalid_schema_rejected(self, tmp_path):
        (tmp_path / "broken.json").write_text(json.dumps({"type": 42}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema in broken.json"):
            SchemaLoader(tmp_path).load_schema("broken")

    def test_available(self):
        assert SchemaLoader().available() == ["report_row", "saved_calculation"]

    def test_available_in_custom_dir(self, tmp_path):
        (tmp_path / "custom.json").write_text("{}", encoding="utf-8")
        assert SchemaLoader(tmp_path).available() == ["custom"]


# =============================================================================
# REPORT ROW
# =============================================================================


class TestReportRowContract:
    """Тесты контракта строки отчёта"""

    def test_valid(self, valid_row):
        validate_report_row(valid_row)

    def test_minimal(self):
        validate_report_row({"title": "Note", "value": "n/a", "info": ""})

    def test_missing_title(self, valid_row):
        del valid_row["title"]
        with pytest.raises(ValidationError, match="'title' is a required property"):
            validate_report_row(valid_row)

    def test_invalid_type(self, valid_row):
        valid_row["type"] = "neutral"
        assert not ReportRowValidator().is_valid(valid_row)

    def test_invalid_currency(self, valid_row):
        valid_row["currency"] = "baht"
        with pytest.raises(ValidationError, match="does not match"):
            validate_report_row(valid_row)

    def test_extra_field(self, valid_row):
        valid_row["color"] = "green"
        with pytest.raises(ValidationError, match="Additional properties"):
            validate_report_row(valid_row)

    def test_validate_rows_stops_at_first_bad_row(self, valid_row):
        bad = {**valid_row, "title": ""}
        with pytest.raises(ValidationError):
            ReportRowValidator().validate_rows([valid_row, bad])

    def test_violation_logged(self, valid_row):
        valid_row["type"] = "neutral"
        with capture_logs() as logs, pytest.raises(ValidationError):
            validate_report_row(valid_row)

        assert len(logs) == 1
        assert logs[0]["event"] == "contract_violation"
        assert logs[0]["log_level"] == "debug"
        assert logs[0]["schema"] == "report_row"
        assert logs[0]["path"] == "type"

    def test_validator_shared_per_contract(self):
        assert ReportRowValidator().validator is ReportRowValidator().validator
        assert ReportRowValidator().validator is not SavedCalculationValidator().validator


# =============================================================================
# SAVED CALCULATION
# =============================================================================


class TestSavedCalculationContract:
    """Тесты контракта сохранённого расчёта"""

    def test_valid(self, valid_calculation):
        validate_saved_calculation(valid_calculation)

    @pytest.mark.parametrize(
        "field",
        ["userId", "propertyType", "propertyNumber", "transactionType", "price", "results"],
    )
    def test_required_fields(self, valid_calculation, field):
        del valid_calculation[field]
        with pytest.raises(ValidationError, match=f"'{field}' is a required property"):
            validate_saved_calculation(valid_calculation)

    def test_invalid_property_type(self, valid_calculation):
        valid_calculation["propertyType"] = "castle"
        with pytest.raises(ValidationError, match="is not one of"):
            validate_saved_calculation(valid_calculation)

    def test_property_number_minimum(self, valid_calculation):
        valid_calculation["propertyNumber"] = 0
        with pytest.raises(ValidationError, match="less than the minimum"):
            validate_saved_calculation(valid_calculation)

    def test_negative_price(self, valid_calculation):
        valid_calculation["price"]["value"] = -1
        with pytest.raises(ValidationError, match="less than the minimum"):
            validate_saved_calculation(valid_calculation)

    def test_area_needs_three_columns(self, valid_calculation):
        del valid_calculation["landArea"]["column3"]
        with pytest.raises(ValidationError, match="'column3' is a required property"):
            validate_saved_calculation(valid_calculation)

    def test_valuation_price_or_null(self, valid_calculation):
        valid_calculation["valuation"] = {
            "value": 4500000,
            "currency": "THB",
            "priceType": "total",
            "selectedUnit": "sqm",
        }
        validate_saved_calculation(valid_calculation)

        valid_calculation["valuation"] = {"value": 1}
        assert not SavedCalculationValidator().is_valid(valid_calculation)

    def test_invalid_result_row(self, valid_calculation):
        valid_calculation["results"][0]["type"] = "neutral"
        with pytest.raises(ValidationError):
            validate_saved_calculation(valid_calculation)

    def test_error_messages_sorted_with_paths(self, valid_calculation):
        valid_calculation["propertyNumber"] = 0
        valid_calculation["price"]["currency"] = "thb"
        messages = SavedCalculationValidator().error_messages(valid_calculation)

        assert len(messages) == 2
        assert messages[0].startswith("price/currency: ")
        assert messages[1].startswith("propertyNumber: ")

    def test_root_error_path(self, valid_calculation):
        del valid_calculation["userId"]
        messages = SavedCalculationValidator().error_messages(valid_calculation)
        assert messages == ["<root>: 'userId' is a required property"]


# =============================================================================
# ИНТЕГРАЦИЯ С PYDANTIC МОДЕЛЯМИ
# =============================================================================


class TestModelIntegration:
    """Документы, собранные из моделей, соответствуют контрактам"""

    def test_built_document_valid(self):
        property_input = PropertyInput(
            kind="both",
            land_area=CompositeArea.of((2, "rai"), (1, "ngan"), (50, "wah")),
            building_area=CompositeArea.of((250, "sqm")),
            price=PriceSpec(value=5_000_000, currency="THB"),
            valuation=PriceSpec(
                value=1500, currency="THB", price_type=PriceType.PER_UNIT, selected_unit="sqm"
            ),
        )
        rows = property_rows(PropertyValuator().evaluate(property_input))
        document = build_document(property_input, rows)
        document["userId"] = "user-42"

        validate_saved_calculation(document)
        for row in document["results"]:
            validate_report_row(row)
