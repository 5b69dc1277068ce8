"""structlog setup for applications embedding i18n-light.

The library only ever calls get_logger(); setup_logging() is for the
hosting application (see example/server.py).
"""

import logging
import sys
from typing import Any

import structlog

from i18n_light.core.config import Settings, settings as default_settings

LIBRARY_LOGGER = "i18n_light"


def resolve_log_level(settings: Settings) -> int:
    if settings.LOG_LEVEL:
        return logging.getLevelNamesMapping()[settings.LOG_LEVEL]
    return logging.DEBUG if settings.DEBUG else logging.INFO


def setup_logging(settings: Settings | None = None) -> None:
    settings = settings or default_settings
    log_level = resolve_log_level(settings)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    logging.getLogger(LIBRARY_LOGGER).setLevel(log_level)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    processors: list[Any]
    if settings.ENVIRONMENT == "local":
        processors = [*shared_processors, structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
