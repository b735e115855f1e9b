"""
Sandboxed read callback for compilation drivers.

A request is validated and resolved in a fixed order, each step
short-circuiting the next:

1. kind check (fatal :class:`InternalReaderError` on mismatch)
2. ``file://`` stripping
3. resolution against the base path
4. weak canonicalization
5. containment in the allowed directories
6. existence
7. regular-file check
8. full text read
9. commit into the :class:`SourceRegistry`

Only step 9 mutates the registry, and only on success. Decisions are logged
through ``structlog`` so refusals can be audited.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from source_sandbox.constants import (
    MSG_FILE_NOT_FOUND,
    MSG_NOT_A_VALID_FILE,
    MSG_OUTSIDE_ALLOWED_DIRECTORIES,
    MSG_READ_EXCEPTION_PREFIX,
    MSG_UNKNOWN_EXCEPTION,
    SOURCE_ENCODING,
)
from source_sandbox.domain.results import (
    InternalReaderError,
    ReadCallback,
    ReadCallbackKind,
    ReadErrorKind,
    ReadResult,
    kind_string,
)
from source_sandbox.sandbox.paths import is_within_any, strip_file_scheme, weakly_canonical
from source_sandbox.sources.registry import SourceRegistry

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

PathLike = str | os.PathLike[str]


class SandboxedReader:
    """
    Resolve read requests against a base path and an allow-list of directories.

    Allowed directories are stored in weakly canonical form so they compare
    against canonical request paths segment by segment.
    """

    def __init__(
        self,
        base_path: PathLike | None = None,
        allowed_directories: Iterable[PathLike] = (),
        *,
        registry: SourceRegistry | None = None,
        logger: Any | None = None,
    ) -> None:
        self._registry = registry if registry is not None else SourceRegistry()
        self._logger = logger if logger is not None else structlog.get_logger(__name__)
        self._base_path = _absolute_base(base_path)
        self._allowed_directories: set[Path] = set()
        for directory in allowed_directories:
            self.allow_directory(directory)

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any],
        *,
        registry: SourceRegistry | None = None,
        logger: Any | None = None,
    ) -> SandboxedReader:
        """Build a reader from the ``[sandbox]`` section of an effective config."""

        sandbox = config["sandbox"]
        return cls(
            sandbox["base_path"],
            sandbox["allowed_directories"],
            registry=registry,
            logger=logger,
        )

    @property
    def registry(self) -> SourceRegistry:
        return self._registry

    @property
    def base_path(self) -> Path:
        return self._base_path

    @property
    def allowed_directories(self) -> frozenset[Path]:
        return frozenset(self._allowed_directories)

    def set_base_path(self, path: PathLike | None) -> None:
        """Set the directory relative requests are resolved against; empty means cwd."""

        self._base_path = _absolute_base(path)

    def allow_directory(self, path: PathLike) -> None:
        self._allowed_directories.add(weakly_canonical(path))

    def reader(self) -> ReadCallback:
        """Return a callback bound to :meth:`read_file` for a compilation driver."""

        def callback(kind: str, path: str) -> ReadResult:
            return self.read_file(kind, path)

        return callback

    def read_file(self, kind: str, path: str) -> ReadResult:
        """
        Service one read request.

        Raises :class:`InternalReaderError` when ``kind`` is not the read-file
        tag. Every other failure is returned as an unsuccessful ``ReadResult``
        and leaves the registry unchanged.
        """

        if kind != kind_string(ReadCallbackKind.READ_FILE):
            self._logger.error("read_file.wrong_kind", kind=kind, requested_path=path)
            raise InternalReaderError(kind)

        try:
            return self._read_sandboxed(path)
        except (OSError, UnicodeError, ValueError) as exc:
            diagnostic = f"{type(exc).__name__}: {exc}"
            self._logger.warning(
                "read_file.failed",
                requested_path=path,
                error_kind=ReadErrorKind.READ_ERROR.value,
                error=diagnostic,
            )
            return ReadResult.failure(
                ReadErrorKind.READ_ERROR, MSG_READ_EXCEPTION_PREFIX + diagnostic
            )
        except Exception:  # noqa: BLE001 - read callback boundary returns a soft failure.
            self._logger.exception(
                "read_file.failed",
                requested_path=path,
                error_kind=ReadErrorKind.UNKNOWN.value,
            )
            return ReadResult.failure(ReadErrorKind.UNKNOWN, MSG_UNKNOWN_EXCEPTION)

    def _read_sandboxed(self, path: str) -> ReadResult:
        stripped = strip_file_scheme(path)
        if not stripped:
            return self._refuse(path, ReadErrorKind.NOT_FOUND, MSG_FILE_NOT_FOUND)

        canonical = weakly_canonical(self._base_path / stripped)
        if not is_within_any(canonical, self._allowed_directories):
            return self._refuse(
                path, ReadErrorKind.OUTSIDE_ALLOWED_DIRECTORIES, MSG_OUTSIDE_ALLOWED_DIRECTORIES
            )
        if not canonical.exists():
            return self._refuse(path, ReadErrorKind.NOT_FOUND, MSG_FILE_NOT_FOUND)
        if not canonical.is_file():
            return self._refuse(path, ReadErrorKind.NOT_A_FILE, MSG_NOT_A_VALID_FILE)

        # newline="" keeps the file's line endings byte-for-byte.
        with canonical.open("r", encoding=SOURCE_ENCODING, newline="") as handle:
            content = handle.read()

        source_unit_id = canonical.as_posix()
        self._registry.set_source(source_unit_id, content)
        self._registry.set_path_mapping(path, canonical)
        self._logger.debug(
            "read_file.committed",
            requested_path=path,
            source_unit_id=source_unit_id,
            size=len(content),
        )
        return ReadResult.ok(content)

    def _refuse(self, path: str, error_kind: ReadErrorKind, message: str) -> ReadResult:
        self._logger.info("read_file.refused", requested_path=path, error_kind=error_kind.value)
        return ReadResult.failure(error_kind, message)


def _absolute_base(path: PathLike | None) -> Path:
    if path is None or not os.fspath(path):
        return Path.cwd()
    return Path(path).absolute()


__all__ = ["SandboxedReader"]
