"""Structured logging for the catalogue service.

structlog renders every record, including those emitted through the standard
library by uvicorn, FastAPI and Protean, so console and file output share one
format: JSON in production and staging, key/value console lines elsewhere.
Request-scoped values bound with ``add_context`` appear on every line logged
while handling that request.
"""

import logging
import logging.handlers
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
JSON_ENVS = frozenset({"production", "staging"})
NOISY_LOGGERS = ("uvicorn.access", "asyncio", "sqlalchemy.engine")

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


@dataclass(frozen=True)
class LogSettings:
    level: str
    json: bool
    log_dir: Path
    log_file_prefix: str


def _environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """``LOG_LEVEL`` if set, else the default for the current environment."""
    return os.getenv("LOG_LEVEL", LEVELS_BY_ENV.get(_environment(), "INFO")).upper()


def resolve_settings(
    level: str | None = None, log_dir: str = "logs", log_file_prefix: str = "catalogue"
) -> LogSettings:
    return LogSettings(
        level=(level or get_log_level()).upper(),
        json=_environment() in JSON_ENVS,
        log_dir=Path(os.getenv("LOG_DIR", log_dir)),
        log_file_prefix=log_file_prefix,
    )


_shared_processors = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
]


def _formatter(settings: LogSettings, colors: bool) -> structlog.stdlib.ProcessorFormatter:
    if settings.json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors)

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )


def _handlers(settings: LogSettings) -> list[logging.Handler]:
    settings.log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(_formatter(settings, colors=sys.stdout.isatty()))

    log_file = logging.handlers.RotatingFileHandler(
        filename=settings.log_dir / f"{settings.log_file_prefix}.log",
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    log_file.setFormatter(_formatter(settings, colors=False))

    return [console, log_file]


def configure_logging(
    level: str | None = None, log_dir: str = "logs", log_file_prefix: str = "catalogue"
) -> LogSettings:
    """Route structlog and standard library logging through shared handlers."""
    settings = resolve_settings(level, log_dir, log_file_prefix)

    root = logging.getLogger()
    root.handlers = _handlers(settings)
    root.setLevel(settings.level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return settings


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind values to every log line of the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
