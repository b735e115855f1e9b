"""
source-sandbox

File: src/source_sandbox/__init__.py

Purpose
- Package root. A sandboxed source-file resolver for compiler read callbacks:
  an in-memory source registry plus a reader that refuses any access outside
  an allow-list of directories.

Functional requirements
- Must not have side effects at import time (no config loading, no logging init).
"""

from source_sandbox.domain.results import (
    InternalReaderError,
    ReadCallback,
    ReadCallbackKind,
    ReadErrorKind,
    ReadResult,
    kind_string,
)
from source_sandbox.sandbox.file_reader import SandboxedReader
from source_sandbox.sources.registry import SourceRegistry

__version__ = "0.1.0"

__all__ = [
    "InternalReaderError",
    "ReadCallback",
    "ReadCallbackKind",
    "ReadErrorKind",
    "ReadResult",
    "SandboxedReader",
    "SourceRegistry",
    "kind_string",
]
