"""
source-sandbox config package public API.

File: src/source_sandbox/config/__init__.py

Purpose
- Export config loading/validation entrypoints and public error types.

Functional requirements
- Support loading from ``source_sandbox.toml`` + ``SOURCE_SANDBOX_`` env overrides.
- Fail fast with clear structured validation/load errors.
"""

from source_sandbox.config.loader import (
    DEFAULT_CONFIG_FILE,
    ENV_PREFIX,
    ConfigLoadError,
    dump_effective_config,
    load_config,
    normalize_paths,
)
from source_sandbox.config.schema import (
    DEFAULT_CONFIG,
    PATH_FIELDS,
    PATH_LIST_FIELDS,
    ConfigSchemaVersion,
    ConfigValidationError,
    ConfigValidationIssue,
    ConfigValidationResult,
    SourceSandboxConfig,
    assert_valid_config,
    default_config,
    merge_config,
    migration_guidance,
    validate_config,
)

__all__ = [
    "ConfigLoadError",
    "ConfigSchemaVersion",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_FILE",
    "ENV_PREFIX",
    "PATH_FIELDS",
    "PATH_LIST_FIELDS",
    "SourceSandboxConfig",
    "assert_valid_config",
    "default_config",
    "dump_effective_config",
    "load_config",
    "merge_config",
    "migration_guidance",
    "normalize_paths",
    "validate_config",
]
