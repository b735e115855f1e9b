"""
source-sandbox — in-memory source registry.

File: src/source_sandbox/sources/registry.py

Purpose
- Hold source text keyed by source-unit ID, plus the on-disk path each ID was
  loaded from when one is known.

Functional requirements
- IDs are reported in insertion order; setting an existing ID overwrites it.
- Content keys need not have a path mapping; synthetic sources carry none.
  Sandboxed reads also map the caller's original request spelling to the
  resolved location.
- A wholesale replace of content clears every path mapping.

Non-functional requirements
- No I/O. All operations are total and synchronous.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePath
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

PathLike = str | os.PathLike[str]


class SourceRegistry:
    """Mapping of source-unit IDs to source text and resolved filesystem paths."""

    __slots__ = ("_path_mappings", "_source_codes")

    def __init__(self) -> None:
        self._source_codes: dict[str, str] = {}
        self._path_mappings: dict[str, Path] = {}

    def __contains__(self, source_unit_id: object) -> bool:
        return source_unit_id in self._source_codes

    def __len__(self) -> int:
        return len(self._source_codes)

    @property
    def source_codes(self) -> Mapping[str, str]:
        return MappingProxyType(self._source_codes)

    @property
    def path_mappings(self) -> Mapping[str, Path]:
        return MappingProxyType(self._path_mappings)

    def source_unit_ids(self) -> list[str]:
        """Return every known source-unit ID in insertion order."""

        return list(self._source_codes)

    def source_code(self, source_unit_id: str) -> str:
        """Return the content for ``source_unit_id``; raises ``KeyError`` if unknown."""

        return self._source_codes[source_unit_id]

    def source_path(self, source_unit_id: str) -> Path | None:
        return self._path_mappings.get(source_unit_id)

    def set_source(
        self,
        source_unit_id: str,
        content: str,
        *,
        path: PathLike | None = None,
    ) -> None:
        """
        Insert or overwrite the content for ``source_unit_id``.

        When ``path`` is given it is recorded as the ID's path mapping. When it
        is omitted, any existing path mapping for the ID is left untouched.
        """

        if path is not None:
            self._path_mappings[source_unit_id] = Path(path)
        self._source_codes[source_unit_id] = content

    def set_path_mapping(self, key: str, path: PathLike) -> None:
        """Record ``path`` under ``key`` without touching any content."""

        self._path_mappings[key] = Path(path)

    def set_source_from_path(self, fs_path: PathLike, content: str) -> str:
        """Store ``content`` under the generic string form of ``fs_path`` and return that ID."""

        source_unit_id = PurePath(fs_path).as_posix()
        self.set_source(source_unit_id, content, path=source_unit_id)
        return source_unit_id

    def set_sources(self, sources: Mapping[str, str]) -> None:
        """Replace all content wholesale; path mappings are cleared unconditionally."""

        self._path_mappings.clear()
        self._source_codes = dict(sources)


__all__ = ["SourceRegistry"]
