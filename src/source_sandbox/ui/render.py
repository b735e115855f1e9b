"""Output rendering abstraction for the source-sandbox CLI.

File: src/source_sandbox/ui/render.py

Purpose
- Provide a thin rendering layer for CLI output.
- Keep file content on stdout byte-for-byte and diagnostics on stderr.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class CLIRenderer:
    """Thin CLI output renderer producing deterministic plain text."""

    def __init__(self, *, verbose: bool = False) -> None:
        self.verbose = verbose

    def heading(self, text: str) -> None:
        print(text)

    def kv(self, key: str, value: object) -> None:
        """Print a key: value pair."""

        print(f"{key}: {value}")

    def text(self, line: str) -> None:
        print(line)

    def content(self, text: str) -> None:
        """Write source content unchanged, without adding a trailing newline."""

        sys.stdout.write(text)
        sys.stdout.flush()

    def section(self, title: str) -> None:
        """Print a section header with a preceding blank line."""

        print(f"\n{title}")

    def items(self, entries: Sequence[str], *, prefix: str = "- ") -> None:
        for entry in entries:
            print(f"  {prefix}{entry}")

    def fail(self, label: str) -> None:
        """Print a refused or failed read to stderr."""

        print(f"  FAIL  {label}", file=sys.stderr)


def create_renderer(*, verbose: bool = False) -> CLIRenderer:
    return CLIRenderer(verbose=verbose)


__all__ = ["CLIRenderer", "create_renderer"]
