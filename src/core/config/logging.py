"""
Logging: настройка structlog для калькулятора

Модули пишут через structlog.get_logger(__name__) и сами вывод не
настраивают. Встраивающее приложение (форма ввода, генератор отчётов)
один раз при старте вызывает configure_logging_from(config) или
configure_logging(...) напрямую.

Режимы вывода (stderr):
- console (default): человекочитаемые строки, цвет только для TTY
- JSON (log_json=True): одна JSON-строка на событие

ИНВАРИАНТЫ:
1. Повторный вызов заменяет handler, а не добавляет второй
2. Lenient-подстановки (area_conversion_failed, currency_pair_unknown)
   пишутся на WARNING и видны без verbose
3. Сторонние логгеры (jsonschema и др.) не опускаются ниже WARNING
"""

from __future__ import annotations

import logging
import sys
from typing import Final

import structlog

from src.core.config.settings import ValuationConfig

# Корневой logger пакета: имена модулей начинаются с "src."
PACKAGE_LOGGER: Final[str] = "src"

# Сторонние логгеры, которые не поднимаются до DEBUG вместе с пакетом
QUIET_LOGGERS: Final[tuple[str, ...]] = ("jsonschema", "referencing")


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """
    Процессоры structlog и маршрутизация через stdlib logging.

    Args:
        verbose: DEBUG для логгеров пакета; иначе только WARNING+
        log_json: JSONRenderer вместо ConsoleRenderer
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging_from(config: ValuationConfig) -> None:
    """Настройка логирования по полям verbose / log_json конфигурации."""
    configure_logging(verbose=config.verbose, log_json=config.log_json)
