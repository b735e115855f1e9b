"""
source-sandbox — sandboxed file access.

File: src/source_sandbox/sandbox/__init__.py

Purpose
- Read-callback implementation that confines file reads to an allow-list of
  directories, plus the path helpers it is built on.

Functional requirements
- Must refuse any read whose canonical path escapes the allowed directories.
"""

from source_sandbox.sandbox.file_reader import SandboxedReader
from source_sandbox.sandbox.paths import (
    is_path_prefix,
    is_within_any,
    strip_file_scheme,
    weakly_canonical,
)

__all__ = [
    "SandboxedReader",
    "is_path_prefix",
    "is_within_any",
    "strip_file_scheme",
    "weakly_canonical",
]
