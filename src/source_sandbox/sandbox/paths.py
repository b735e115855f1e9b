"""
source-sandbox — path helpers for sandboxed reads.

File: src/source_sandbox/sandbox/paths.py

Purpose
- Normalize request paths, compute weakly canonical forms, and answer
  containment questions for the sandboxed reader.

Functional requirements
- Only one leading ``file://`` is stripped; no other scheme is recognized.
- Weak canonicalization resolves symlinks and ``.``/``..`` for components that
  exist and never requires the final component to exist.
- Containment compares path segments in order. A raw string prefix check would
  accept ``/allowed2`` for ``/allowed`` and must never be used.

Non-functional requirements
- Standard library only.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePath
from typing import TYPE_CHECKING

from source_sandbox.constants import FILE_URI_PREFIX

if TYPE_CHECKING:
    from collections.abc import Iterable

PathLike = str | os.PathLike[str]

__all__ = [
    "is_path_prefix",
    "is_within_any",
    "strip_file_scheme",
    "weakly_canonical",
]


def strip_file_scheme(path: str) -> str:
    """Remove exactly one leading ``file://`` from ``path``."""

    if path.startswith(FILE_URI_PREFIX):
        return path[len(FILE_URI_PREFIX) :]
    return path


def weakly_canonical(path: PathLike) -> Path:
    """
    Return the weakly canonical absolute form of ``path``.

    Existing leading components have their symlinks resolved; the non-existing
    remainder is normalized lexically.
    """

    return Path(path).resolve(strict=False)


def is_path_prefix(prefix: PathLike, candidate: PathLike) -> bool:
    """Return ``True`` when every segment of ``prefix`` matches the leading segments of ``candidate``."""

    prefix_parts = PurePath(prefix).parts
    candidate_parts = PurePath(candidate).parts
    if len(prefix_parts) > len(candidate_parts):
        return False
    return candidate_parts[: len(prefix_parts)] == prefix_parts


def is_within_any(candidate: PathLike, directories: Iterable[PathLike]) -> bool:
    return any(is_path_prefix(directory, candidate) for directory in directories)
