"""Read-callback kinds, outcome types, and the fatal integration error.

The read path has two distinct outcomes:
- a structured :class:`ReadResult` for every user-triggerable condition
  (sandbox violation, missing file, wrong file type, read failures), and
- :class:`InternalReaderError`, raised when the callback is wired to the wrong
  request kind. That one is an integration bug and aborts the enclosing call.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum


class ReadCallbackKind(StrEnum):
    """Request kinds a compilation driver can route through a read callback."""

    READ_FILE = "source"
    SMT_QUERY = "smt-query"


def kind_string(kind: ReadCallbackKind) -> str:
    """Return the wire tag for ``kind``."""

    return kind.value


class ReadErrorKind(StrEnum):
    """Classification attached to every soft read failure."""

    OUTSIDE_ALLOWED_DIRECTORIES = "outside_allowed_directories"
    NOT_FOUND = "not_found"
    NOT_A_FILE = "not_a_file"
    READ_ERROR = "read_error"
    UNKNOWN = "unknown"


class InternalReaderError(RuntimeError):
    """Raised when a read callback receives a request kind it does not serve."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"ReadFile callback used as callback kind {kind}")
        self.kind = kind


@dataclass(frozen=True, slots=True)
class ReadResult:
    """Outcome of one read request.

    ``content_or_error`` holds the file text on success and a human-readable
    diagnostic on failure. Callers must branch on ``success``.
    """

    success: bool
    content_or_error: str
    error_kind: ReadErrorKind | None = None

    @classmethod
    def ok(cls, content: str) -> ReadResult:
        return cls(success=True, content_or_error=content)

    @classmethod
    def failure(cls, error_kind: ReadErrorKind, message: str) -> ReadResult:
        return cls(success=False, content_or_error=message, error_kind=error_kind)

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "content_or_error": self.content_or_error,
            "error_kind": None if self.error_kind is None else self.error_kind.value,
        }


ReadCallback = Callable[[str, str], ReadResult]


__all__ = [
    "InternalReaderError",
    "ReadCallback",
    "ReadCallbackKind",
    "ReadErrorKind",
    "ReadResult",
    "kind_string",
]
