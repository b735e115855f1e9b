"""Unit tests for config schema validation and merging."""

from __future__ import annotations

import pytest

from source_sandbox.config import (
    ConfigValidationError,
    assert_valid_config,
    default_config,
    merge_config,
    validate_config,
)


@pytest.mark.unit
def test_default_config_is_valid_and_independent() -> None:
    first = default_config()
    first["sandbox"]["allowed_directories"].append("/tmp")

    assert assert_valid_config(default_config()) == default_config()
    assert default_config()["sandbox"]["allowed_directories"] == ["."]


@pytest.mark.unit
def test_non_mapping_root_is_rejected() -> None:
    result = validate_config(["not", "a", "mapping"])

    assert not result.is_valid
    assert result.issues[0].path == "<root>"


@pytest.mark.unit
def test_missing_sections_are_reported() -> None:
    result = validate_config({"meta": {"schema_version": 1}})

    assert {issue.path for issue in result.issues} == {"observability", "sandbox"}


@pytest.mark.unit
@pytest.mark.parametrize(
    ("section", "value", "expected_path"),
    [
        ("sandbox", {"base_path": "", "allowed_directories": []}, "sandbox.base_path"),
        (
            "sandbox",
            {"base_path": ".", "allowed_directories": ["ok", 3]},
            "sandbox.allowed_directories[1]",
        ),
        ("observability", {"log_level": "LOUD", "log_format": "json"}, "observability.log_level"),
        ("observability", {"log_level": "INFO", "log_format": "xml"}, "observability.log_format"),
    ],
)
def test_invalid_fields_carry_their_path(
    section: str, value: dict[str, object], expected_path: str
) -> None:
    config = merge_config(default_config(), {})
    config[section] = value

    with pytest.raises(ConfigValidationError) as excinfo:
        assert_valid_config(config)

    assert [issue.path for issue in excinfo.value.issues] == [expected_path]


@pytest.mark.unit
def test_schema_version_mismatch_includes_migration_guidance() -> None:
    config = merge_config(default_config(), {"meta": {"schema_version": 2}})

    with pytest.raises(ConfigValidationError, match="newer than supported"):
        assert_valid_config(config)


@pytest.mark.unit
def test_merge_config_replaces_lists_and_merges_tables() -> None:
    merged = merge_config(
        default_config(),
        {"sandbox": {"allowed_directories": ["/a"]}, "observability": {"log_format": "console"}},
    )

    assert merged["sandbox"] == {"base_path": ".", "allowed_directories": ["/a"]}
    assert merged["observability"] == {"log_level": "INFO", "log_format": "console"}
