"""Logging configuration for the Shop Orders domain.

Stdlib logging owns the handlers (console plus rotating files); structlog
renders on top of it. Settings come from the environment:

    LOG_LEVEL       explicit level, overrides the environment default
    LOG_DIR         directory for the rotating log files (default ``logs``)
    ENVIRONMENT     production/staging render JSON, anything else the console
    ENV, PROTEAN_ENV  also consulted when picking the default level
"""

import logging
import logging.handlers
import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

SERVICE_NAME = "shoporders"

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
_JSON_ENVIRONMENTS = ("production", "staging")
_NOISY_LOGGERS = ("protean", "asyncio", "uvicorn.access")
_MAX_LOG_BYTES = 10 * 1024 * 1024
_LOG_BACKUPS = 5


@dataclass(frozen=True)
class LoggingSettings:
    level: str
    log_dir: Path
    json_output: bool

    @classmethod
    def from_env(cls) -> "LoggingSettings":
        return cls(
            level=get_log_level(),
            log_dir=Path(os.getenv("LOG_DIR", "logs")),
            json_output=os.getenv("ENVIRONMENT", "development").lower() in _JSON_ENVIRONMENTS,
        )


def get_log_level() -> str:
    """Get log level based on environment."""
    env = (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()
    return os.getenv("LOG_LEVEL", _LEVELS_BY_ENV.get(env, "INFO")).upper()


def _rotating_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(settings: LoggingSettings) -> None:
    """Route the root logger to stdout and the rotating files."""
    settings.log_dir.mkdir(parents=True, exist_ok=True)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(settings.level)

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.level)
    root_logger.handlers = [
        console_handler,
        _rotating_handler(settings.log_dir / f"{SERVICE_NAME}.log", settings.level),
        _rotating_handler(settings.log_dir / f"{SERVICE_NAME}_error.log", logging.ERROR),
    ]

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def add_service_name(logger, method_name, event_dict):
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def setup_structlog(settings: LoggingSettings) -> None:
    """Configure structlog for structured logging."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_service_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
    ]

    if settings.json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.RichTracebackFormatter(
                    show_locals=True,
                    max_frames=2,
                ),
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure all logging for the application."""
    settings = settings or LoggingSettings.from_env()
    setup_stdlib_logging(settings)
    setup_structlog(settings)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Add context variables that will be included in all subsequent log messages."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def request_context(**kwargs: Any):
    """Bind ``kwargs`` for the duration of one request, then drop every binding."""
    add_context(**kwargs)
    try:
        yield
    finally:
        clear_context()
