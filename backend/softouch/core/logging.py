"""
Structured logging configuration using structlog.

JSON lines in production, console output everywhere else. Request context
(request id, method, path) is carried through contextvars, so every line
logged while serving a request can be correlated without passing loggers
around. Records from stdlib loggers (uvicorn, sqlalchemy) go through the
same renderer.
"""

import logging
import sys

import structlog

from softouch.core.config import get_settings

_HANDLER_NAME = "softouch"

_NOISY_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.WARNING,
    "passlib": logging.ERROR,
}


def _add_app_info(logger, method_name, event_dict):
    settings = get_settings()
    event_dict.setdefault("app", settings.APP_NAME)
    event_dict.setdefault("env", settings.ENVIRONMENT)
    return event_dict


def _build_chain(production: bool):
    chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if production:
        chain += [_add_app_info, structlog.processors.format_exc_info]
        return chain, structlog.processors.JSONRenderer()
    return chain, structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def _install_handler(formatter: logging.Formatter, level: int) -> None:
    root_logger = logging.getLogger()
    # The app may start several times in one process (tests, reloads)
    for existing in list(root_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def setup_logging() -> None:
    settings = get_settings()
    chain, renderer = _build_chain(settings.ENVIRONMENT == "production")

    structlog.configure(
        processors=[*chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=chain,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )
    _install_handler(formatter, getattr(logging, settings.LOG_LEVEL, logging.INFO))

    for name, level in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(level)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
