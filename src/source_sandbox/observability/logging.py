"""Structured logging setup: structlog over stdlib ``logging`` with JSON-lines output."""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import IO, Final

import structlog

_DEFAULT_LOGGER_NAME: Final[str] = "source_sandbox"
_LOG_FORMATS: Final[frozenset[str]] = frozenset({"json", "console"})

_ACTIVE_LOCK = threading.Lock()
_ACTIVE_HANDLER: logging.Handler | None = None
_ACTIVE_LOGGER_NAME: str | None = None


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Configuration for structured logging of reader decisions."""

    level: int | str = "INFO"
    log_format: str = "json"
    logger_name: str = _DEFAULT_LOGGER_NAME
    stream: IO[str] | None = None


def logging_config_from(
    observability_config: Mapping[str, object] | None,
    *,
    stream: IO[str] | None = None,
) -> LoggingConfig:
    """Build a :class:`LoggingConfig` from an ``[observability]`` config section."""

    cfg = dict(observability_config or {})
    raw_level = cfg.get("log_level", "INFO")
    raw_format = cfg.get("log_format", "json")
    return LoggingConfig(
        level=raw_level if isinstance(raw_level, (int, str)) else "INFO",
        log_format=raw_format if isinstance(raw_format, str) else "json",
        stream=stream,
    )


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """
    Configure structlog to render through a stdlib handler and return the package logger.

    Calling this again replaces the previously installed handler.
    """

    resolved = config or LoggingConfig()
    if resolved.log_format not in _LOG_FORMATS:
        expected = ", ".join(sorted(_LOG_FORMATS))
        raise ValueError(f"log_format must be one of: {expected}")
    level = _parse_log_level(resolved.level)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if resolved.log_format == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    handler = logging.StreamHandler(resolved.stream if resolved.stream is not None else sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                renderer,
            ],
        )
    )

    shutdown_logging()

    logger = logging.getLogger(resolved.logger_name)
    logger.setLevel(level)
    logger.propagate = False
    logger.addHandler(handler)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    with _ACTIVE_LOCK:
        global _ACTIVE_HANDLER, _ACTIVE_LOGGER_NAME
        _ACTIVE_HANDLER = handler
        _ACTIVE_LOGGER_NAME = resolved.logger_name

    return logger


def shutdown_logging() -> None:
    """Detach the installed handler and restore structlog defaults."""

    with _ACTIVE_LOCK:
        global _ACTIVE_HANDLER, _ACTIVE_LOGGER_NAME
        handler = _ACTIVE_HANDLER
        logger_name = _ACTIVE_LOGGER_NAME
        _ACTIVE_HANDLER = None
        _ACTIVE_LOGGER_NAME = None

    if handler is not None and logger_name is not None:
        logger = logging.getLogger(logger_name)
        logger.removeHandler(handler)
        handler.flush()
        handler.close()
    structlog.reset_defaults()


@contextmanager
def request_scope(**fields: str) -> Iterator[None]:
    """Bind fields (for example a compilation run id) to every log event in scope."""

    with structlog.contextvars.bound_contextvars(**fields):
        yield


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, bool):
        raise ValueError("log level must be a string or integer")
    if isinstance(value, int):
        return value
    normalized = value.strip().upper()
    parsed = logging.getLevelName(normalized)
    if not isinstance(parsed, int):
        raise ValueError(f"unknown log level {value!r}")
    return parsed


__all__ = [
    "LoggingConfig",
    "logging_config_from",
    "request_scope",
    "setup_logging",
    "shutdown_logging",
]
