"""Public observability primitives: structured logging setup and request scoping."""

from source_sandbox.observability.logging import (
    LoggingConfig,
    logging_config_from,
    request_scope,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    "LoggingConfig",
    "logging_config_from",
    "request_scope",
    "setup_logging",
    "shutdown_logging",
]
