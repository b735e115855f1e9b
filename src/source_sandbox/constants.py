"""Stable constants shared by the registry, the sandboxed reader, and the CLI."""

from __future__ import annotations

from typing import Final

# Request path syntax.
FILE_URI_PREFIX: Final[str] = "file://"

# Soft-failure diagnostics returned by the read callback.
MSG_OUTSIDE_ALLOWED_DIRECTORIES: Final[str] = "File outside of allowed directories."
MSG_FILE_NOT_FOUND: Final[str] = "File not found."
MSG_NOT_A_VALID_FILE: Final[str] = "Not a valid file."
MSG_READ_EXCEPTION_PREFIX: Final[str] = "Exception in read callback: "
MSG_UNKNOWN_EXCEPTION: Final[str] = "Unknown exception in read callback."

# Source files are read as text.
SOURCE_ENCODING: Final[str] = "utf-8"

# Schema versions for persisted contracts.
CONFIG_SCHEMA_VERSION: Final[int] = 1

__all__ = [
    "CONFIG_SCHEMA_VERSION",
    "FILE_URI_PREFIX",
    "MSG_FILE_NOT_FOUND",
    "MSG_NOT_A_VALID_FILE",
    "MSG_OUTSIDE_ALLOWED_DIRECTORIES",
    "MSG_READ_EXCEPTION_PREFIX",
    "MSG_UNKNOWN_EXCEPTION",
    "SOURCE_ENCODING",
]
