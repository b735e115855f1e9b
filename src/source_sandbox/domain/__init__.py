"""Domain types shared by the registry, the sandboxed reader, and the CLI."""

from source_sandbox.domain.results import (
    InternalReaderError,
    ReadCallback,
    ReadCallbackKind,
    ReadErrorKind,
    ReadResult,
    kind_string,
)

__all__ = [
    "InternalReaderError",
    "ReadCallback",
    "ReadCallbackKind",
    "ReadErrorKind",
    "ReadResult",
    "kind_string",
]
