"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from src.core.config.logging import (
    PACKAGE_LOGGER,
    QUIET_LOGGERS,
    configure_logging,
    configure_logging_from,
)
from src.core.config.settings import ValuationConfig
from src.core.domain.units import convert_area


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None, None, None]:
    """Restore root logger and structlog state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    package = logging.getLogger(PACKAGE_LOGGER)
    package_level = package.level
    quiet_levels = {name: logging.getLogger(name).level for name in QUIET_LOGGERS}
    yield
    for name, level in quiet_levels.items():
        logging.getLogger(name).setLevel(level)
    root.handlers = original_handlers
    root.setLevel(original_level)
    package.setLevel(package_level)
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING

    def test_human_mode_output(self) -> None:
        configure_logging(verbose=True, log_json=False)
        log = structlog.get_logger("src.test")
        log.warning("hello world", key="val")

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("src.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "src.test"
        assert "timestamp" in parsed

    def test_fallback_warning_is_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        """Lenient-подстановка видна в JSON-логе без verbose."""
        configure_logging(verbose=False, log_json=True)

        assert convert_area(10.0, "sqm", "cubit") == 10.0

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "area_conversion_failed"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "src.core.domain.units"
        assert parsed["to_unit"] == "cubit"

    def test_debug_suppressed_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        structlog.get_logger("src.valuation.property").debug("noise")
        assert capfd.readouterr().err == ""

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("jsonschema").debug("schema noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=True, log_json=True)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_cyrillic_kept_in_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        structlog.get_logger("src.test").warning("fallback", unit="ва")
        err = capfd.readouterr().err
        assert "ва" in err
        assert json.loads(err.strip())["unit"] == "ва"


class TestConfigureLoggingFromConfig:
    def test_defaults_are_quiet_console(self) -> None:
        configure_logging_from(ValuationConfig())
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING

    def test_verbose_config_enables_debug(self) -> None:
        configure_logging_from(ValuationConfig(verbose=True))
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG
        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_json_config_renders_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging_from(ValuationConfig(log_json=True))

        assert convert_area(5.0, "cubit", "sqm") == 5.0

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "area_conversion_failed"
        assert parsed["from_unit"] == "cubit"
