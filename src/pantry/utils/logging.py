"""Logging for the pantry service.

Stdlib ``logging`` owns the handlers (stdout, plus rotating files when a log
directory is configured); structlog builds key/value events on top of it.

Environment knobs:
    LOG_LEVEL   explicit level, overrides the per-environment default
    LOG_DIR     directory for ``<prefix>.log`` and ``<prefix>_error.log``
    PROTEAN_ENV selects the default level and the renderer
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

_DEFAULT_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_JSON_ENVIRONMENTS = ("production", "staging")

_MAX_LOG_BYTES = 10 * 1024 * 1024
_LOG_BACKUPS = 5


def current_environment() -> str:
    return os.getenv("PROTEAN_ENV", "development").lower()


def resolve_level(level: str | None = None) -> str:
    if level:
        return level.upper()
    return os.getenv("LOG_LEVEL", _DEFAULT_LEVELS.get(current_environment(), "INFO")).upper()


def _rotating_file(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def _install_handlers(level: str, log_dir: str | None, prefix: str) -> None:
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [logging.StreamHandler(sys.stdout)]

    log_dir = log_dir or os.getenv("LOG_DIR")
    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        root.addHandler(_rotating_file(directory / f"{prefix}.log", level))
        root.addHandler(_rotating_file(directory / f"{prefix}_error.log", logging.ERROR))

    # Framework chatter stays at WARNING whatever the service level is
    for noisy in ("protean", "asyncio", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _renderer():
    if current_environment() in _JSON_ENVIRONMENTS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(level: str | None = None, log_dir: str | None = None, prefix: str = "pantry") -> None:
    """Wire stdlib handlers and the structlog pipeline. Safe to call again."""
    _install_handlers(resolve_level(level), log_dir, prefix)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request(**values) -> None:
    """Attach request-scoped values (user id, path) to every event logged until unbound."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**{k: v for k, v in values.items() if v is not None})


def unbind_request() -> None:
    structlog.contextvars.clear_contextvars()
