"""
source-sandbox — configuration schema and validation.

File: src/source_sandbox/config/schema.py

Purpose
- Define configuration defaults and strict validation rules for the reader's
  base path, allowed directories, and logging.

Functional requirements
- Validate config payloads and return structured errors (field path + message).
- Deep-merge overlays deterministically.

Non-functional requirements
- Keep rules deterministic and easy to audit.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final, Literal, TypedDict

from source_sandbox.constants import CONFIG_SCHEMA_VERSION

ConfigSchemaVersion: Final[int] = CONFIG_SCHEMA_VERSION

LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMATS: Final[tuple[str, ...]] = ("json", "console")

# Config paths that should be normalized relative to config file location.
PATH_FIELDS: Final[tuple[tuple[str, ...], ...]] = (("sandbox", "base_path"),)
PATH_LIST_FIELDS: Final[tuple[tuple[str, ...], ...]] = (("sandbox", "allowed_directories"),)


class MetaConfig(TypedDict):
    schema_version: int


class SandboxConfig(TypedDict):
    base_path: str
    allowed_directories: list[str]


class ObservabilityConfig(TypedDict):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"]
    log_format: Literal["json", "console"]


class SourceSandboxConfig(TypedDict):
    meta: MetaConfig
    sandbox: SandboxConfig
    observability: ObservabilityConfig


DEFAULT_CONFIG: Final[SourceSandboxConfig] = {
    "meta": {"schema_version": CONFIG_SCHEMA_VERSION},
    "sandbox": {
        "base_path": ".",
        "allowed_directories": ["."],
    },
    "observability": {
        "log_level": "INFO",
        "log_format": "json",
    },
}


@dataclass(frozen=True, slots=True)
class ConfigValidationIssue:
    """Single structured validation failure."""

    path: str
    message: str


@dataclass(frozen=True, slots=True)
class ConfigValidationResult:
    """Validation result with normalized config when no issues were found."""

    config: dict[str, Any] | None
    issues: tuple[ConfigValidationIssue, ...]

    @property
    def is_valid(self) -> bool:
        return self.config is not None and not self.issues


class ConfigValidationError(ValueError):
    """Raised when strict config validation fails."""

    def __init__(self, issues: Sequence[ConfigValidationIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(f"invalid config:\n{rendered}")


class _IssueCollector:
    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[ConfigValidationIssue] = []

    def add(self, path: str, message: str) -> None:
        self._items.append(ConfigValidationIssue(path=path, message=message))

    def items(self) -> tuple[ConfigValidationIssue, ...]:
        return tuple(self._items)

    @property
    def has_issues(self) -> bool:
        return bool(self._items)


def default_config() -> SourceSandboxConfig:
    """Return a deep copy of the built-in defaults."""

    return copy.deepcopy(DEFAULT_CONFIG)


def migration_guidance(found_version: int) -> str:
    if found_version < ConfigSchemaVersion:
        return (
            f"schema version {found_version} is older than supported {ConfigSchemaVersion}; "
            "upgrade source_sandbox.toml to the current schema"
        )
    if found_version > ConfigSchemaVersion:
        return (
            f"schema version {found_version} is newer than supported {ConfigSchemaVersion}; "
            "upgrade the source-sandbox runtime"
        )
    return "schema version is current"


def merge_config(base: Mapping[str, object], overlay: Mapping[str, object]) -> dict[str, Any]:
    """Deterministically deep-merge ``overlay`` onto ``base``; lists are replaced, not merged."""

    merged = copy.deepcopy(dict(base))
    _merge_into(merged, overlay)
    return merged


def validate_config(config: Mapping[str, object] | object) -> ConfigValidationResult:
    """Validate config and return structured issues with deterministic paths."""

    issues = _IssueCollector()
    root = _as_object(config, "<root>", issues)
    if root is None:
        return ConfigValidationResult(config=None, issues=issues.items())

    _reject_unknown_keys(root, {"meta", "sandbox", "observability"}, "", issues)
    _require_keys(root, {"meta", "sandbox", "observability"}, "", issues)

    normalized: dict[str, Any] = {}
    for key, validator in (
        ("meta", _validate_meta),
        ("sandbox", _validate_sandbox),
        ("observability", _validate_observability),
    ):
        raw = root.get(key)
        if raw is None:
            continue
        section = _as_object(raw, key, issues)
        if section is not None:
            normalized[key] = validator(section, key, issues)

    if issues.has_issues:
        return ConfigValidationResult(config=None, issues=issues.items())
    return ConfigValidationResult(config=normalized, issues=())


def assert_valid_config(config: Mapping[str, object] | object) -> dict[str, Any]:
    """Validate config and raise ``ConfigValidationError`` on failure."""

    result = validate_config(config)
    if result.config is None:
        raise ConfigValidationError(result.issues)
    return result.config


def _validate_meta(
    payload: Mapping[str, object], path: str, issues: _IssueCollector
) -> dict[str, Any]:
    _reject_unknown_keys(payload, {"schema_version"}, path, issues)
    _require_keys(payload, {"schema_version"}, path, issues)

    out: dict[str, Any] = {}
    if "schema_version" in payload:
        parsed = _as_int(payload["schema_version"], _join(path, "schema_version"), issues, minimum=1)
        if parsed is not None:
            out["schema_version"] = parsed
            if parsed != ConfigSchemaVersion:
                issues.add(_join(path, "schema_version"), migration_guidance(parsed))
    return out


def _validate_sandbox(
    payload: Mapping[str, object], path: str, issues: _IssueCollector
) -> dict[str, Any]:
    allowed = {"base_path", "allowed_directories"}
    _reject_unknown_keys(payload, allowed, path, issues)
    _require_keys(payload, allowed, path, issues)

    out: dict[str, Any] = {}
    if "base_path" in payload:
        parsed_base = _as_path_text(payload["base_path"], _join(path, "base_path"), issues)
        if parsed_base is not None:
            out["base_path"] = parsed_base

    if "allowed_directories" in payload:
        field_path = _join(path, "allowed_directories")
        raw = payload["allowed_directories"]
        if isinstance(raw, str) or not isinstance(raw, Sequence):
            issues.add(field_path, f"expected list of paths, got {type(raw).__name__}")
        else:
            directories: list[str] = []
            for index, item in enumerate(raw):
                parsed_dir = _as_path_text(item, f"{field_path}[{index}]", issues)
                if parsed_dir is not None:
                    directories.append(parsed_dir)
            out["allowed_directories"] = directories
    return out


def _validate_observability(
    payload: Mapping[str, object], path: str, issues: _IssueCollector
) -> dict[str, Any]:
    allowed = {"log_level", "log_format"}
    _reject_unknown_keys(payload, allowed, path, issues)
    _require_keys(payload, allowed, path, issues)

    out: dict[str, Any] = {}
    if "log_level" in payload:
        raw_level = payload["log_level"]
        if isinstance(raw_level, str):
            raw_level = raw_level.strip().upper()
        parsed_level = _as_enum(
            raw_level, _join(path, "log_level"), issues, allowed_values=LOG_LEVELS
        )
        if parsed_level is not None:
            out["log_level"] = parsed_level

    if "log_format" in payload:
        parsed_format = _as_enum(
            payload["log_format"], _join(path, "log_format"), issues, allowed_values=LOG_FORMATS
        )
        if parsed_format is not None:
            out["log_format"] = parsed_format
    return out


def _as_object(value: object, path: str, issues: _IssueCollector) -> dict[str, object] | None:
    if not isinstance(value, Mapping):
        issues.add(path, f"expected object, got {type(value).__name__}")
        return None
    out: dict[str, object] = {}
    for key, item in value.items():
        if not isinstance(key, str):
            issues.add(path, f"object key must be string, got {type(key).__name__}")
            continue
        out[key] = item
    return out


def _as_str(value: object, path: str, issues: _IssueCollector) -> str | None:
    if not isinstance(value, str):
        issues.add(path, f"expected string, got {type(value).__name__}")
        return None
    parsed = value.strip()
    if not parsed:
        issues.add(path, "must not be empty")
        return None
    return parsed


def _as_path_text(value: object, path: str, issues: _IssueCollector) -> str | None:
    parsed = _as_str(value, path, issues)
    if parsed is None:
        return None
    if "\x00" in parsed:
        issues.add(path, "must not contain NUL bytes")
        return None
    return parsed


def _as_int(
    value: object,
    path: str,
    issues: _IssueCollector,
    *,
    minimum: int | None = None,
) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        issues.add(path, f"expected integer, got {type(value).__name__}")
        return None
    if minimum is not None and value < minimum:
        issues.add(path, f"must be >= {minimum}")
        return None
    return value


def _as_enum(
    value: object,
    path: str,
    issues: _IssueCollector,
    *,
    allowed_values: tuple[str, ...],
) -> str | None:
    parsed = _as_str(value, path, issues)
    if parsed is None:
        return None
    if parsed not in allowed_values:
        expected = ", ".join(sorted(allowed_values))
        issues.add(path, f"invalid value {parsed!r}; expected one of: {expected}")
        return None
    return parsed


def _reject_unknown_keys(
    payload: Mapping[str, object],
    allowed: set[str],
    path: str,
    issues: _IssueCollector,
) -> None:
    for key in sorted(payload):
        if key not in allowed:
            issues.add(_join(path, key), "unknown field")


def _require_keys(
    payload: Mapping[str, object],
    required: set[str],
    path: str,
    issues: _IssueCollector,
) -> None:
    for key in sorted(required):
        if key not in payload:
            issues.add(_join(path, key), "missing required field")


def _join(path: str, key: str) -> str:
    if not path:
        return key
    return f"{path}.{key}"


def _merge_into(target: dict[str, Any], overlay: Mapping[str, object]) -> None:
    for key in sorted(overlay):
        value = overlay[key]
        if isinstance(value, Mapping):
            existing = target.get(key)
            if not isinstance(existing, dict):
                existing = {}
                target[key] = existing
            _merge_into(existing, value)
        else:
            target[key] = copy.deepcopy(value)


__all__ = [
    "DEFAULT_CONFIG",
    "LOG_FORMATS",
    "LOG_LEVELS",
    "PATH_FIELDS",
    "PATH_LIST_FIELDS",
    "ConfigSchemaVersion",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "SourceSandboxConfig",
    "assert_valid_config",
    "default_config",
    "merge_config",
    "migration_guidance",
    "validate_config",
]
