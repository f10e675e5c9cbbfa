"""Logging for the marketplace.

structlog produces the events; stdlib logging owns where they go. Records
from libraries (protean, uvicorn) pass through the same ``ProcessorFormatter``
so every line on a handler renders alike.

Environment:
    PROTEAN_ENV / ENVIRONMENT   picks the renderer and default level
    LOG_LEVEL                   overrides the level
    LOG_DIR                     directory for the rotating files (``logs``)
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_DEFAULT_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_QUIET_LIBRARIES = ("protean", "asyncio", "httpx", "urllib3")

_MAX_LOG_BYTES = 10 * 1024 * 1024


def current_env() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def _level() -> str:
    return os.getenv("LOG_LEVEL", _DEFAULT_LEVELS.get(current_env(), "INFO")).upper()


def _renderer():
    if current_env() in ("production", "staging"):
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


_shared_processors = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _handlers(level: str) -> list[logging.Handler]:
    """Console always; the general and error-only files outside of tests."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if current_env() == "test":
        return handlers

    log_dir = Path(os.getenv("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    for filename, file_level in (("agrigo.log", level), ("agrigo_error.log", "ERROR")):
        handler = logging.handlers.RotatingFileHandler(
            log_dir / filename, maxBytes=_MAX_LOG_BYTES, backupCount=5, encoding="utf-8"
        )
        handler.setLevel(file_level)
        handlers.append(handler)
    return handlers


def configure_logging() -> None:
    """Install handlers on the root logger and point structlog at them."""
    level = _level()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            _renderer(),
        ],
    )

    root = logging.getLogger()
    root.handlers = []
    root.setLevel(level)
    for handler in _handlers(level):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in _QUIET_LIBRARIES:
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


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind values onto every later log line of the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
