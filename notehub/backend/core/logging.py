"""
Centralized Logging Configuration.

structlog over the stdlib ``logging`` module, configured from
config/settings/logging.yaml. Every module gets its logger from
``get_logger(__name__)``.

Fields in every JSON record:
    timestamp, level, logger, event, func_name, lineno

Bound per HTTP request by RequestContextMiddleware:
    request_id, frontend, area, method, path

Bound once the bearer token resolves to a user:
    user_id

Values under credential-like keys (password, token, authorization ...)
are replaced before rendering, at the top level and inside ``extra``.

Usage:
    from notehub.backend.core.logging import get_logger, setup_logging

    setup_logging()
    logger = get_logger(__name__)
    logger.info("Note uploaded", extra={"note_id": note.id})
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from notehub.backend.core.config import find_project_root, get_app_config

LOG_SOURCES = frozenset({
    "api",         # HTTP request handling
    "cli",         # the notehub command-line client
    "operator",    # notehub db and server commands
    "unknown",
})

REDACTED = "[redacted]"

SENSITIVE_KEYS = frozenset({
    "password",
    "hashed_password",
    "token",
    "access_token",
    "authorization",
    "jwt_secret",
    "db_password",
})


def _redact(values: dict[str, Any]) -> dict[str, Any]:
    return {
        key: REDACTED if key.lower() in SENSITIVE_KEYS else value
        for key, value in values.items()
    }


def redact_credentials(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """structlog processor that masks credential values."""
    event_dict = _redact(event_dict)
    extra = event_dict.get("extra")
    if isinstance(extra, dict):
        event_dict["extra"] = _redact(extra)
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
        redact_credentials,
    ]


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structured logging for the API server or the CLI.

    Values default to logging.yaml; arguments override them.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_type: ``json`` or ``console``
        enable_console: Write to stdout
        enable_file_logging: Also write JSONL to the rotating file from logging.yaml
    """
    config = get_app_config().logging
    handlers = config.handlers

    level = level or config.level
    format_type = format_type or config.format
    if enable_console is None:
        enable_console = handlers.console.enabled
    if enable_file_logging is None:
        enable_file_logging = handlers.file.enabled

    shared = _shared_processors()
    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=shared,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        if format_type == "console":
            console_handler.setFormatter(
                structlog.stdlib.ProcessorFormatter(
                    processor=structlog.dev.ConsoleRenderer(colors=True),
                    foreign_pre_chain=shared,
                )
            )
        else:
            console_handler.setFormatter(json_formatter)
        root_logger.addHandler(console_handler)

    if enable_file_logging:
        log_path = find_project_root() / handlers.file.path
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=str(log_path),
            maxBytes=handlers.file.max_bytes,
            backupCount=handlers.file.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(json_formatter)
        root_logger.addHandler(file_handler)

    # per-request access lines come from RequestContextMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Get a structlog logger, typically ``get_logger(__name__)``."""
    return structlog.get_logger(name)


def bind_actor(user_id: str) -> None:
    """Tag the remaining log records of this request with the caller's id."""
    structlog.contextvars.bind_contextvars(user_id=user_id)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log with an explicit ``source`` outside HTTP request context.

    Unrecognised sources are logged as ``unknown``.

    Example:
        log_with_source(logger, "cli", "debug", "API request", path="/api/notes")
    """
    if source not in LOG_SOURCES:
        source = "unknown"
    getattr(logger, level.lower())(message, source=source, **kwargs)
