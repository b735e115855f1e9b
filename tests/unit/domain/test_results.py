"""Unit tests for read-callback kinds and result types."""

from __future__ import annotations

import dataclasses

import pytest

from source_sandbox.domain import (
    InternalReaderError,
    ReadCallbackKind,
    ReadErrorKind,
    ReadResult,
    kind_string,
)


@pytest.mark.unit
def test_kind_strings_match_wire_tags() -> None:
    assert kind_string(ReadCallbackKind.READ_FILE) == "source"
    assert kind_string(ReadCallbackKind.SMT_QUERY) == "smt-query"


@pytest.mark.unit
def test_result_constructors_and_serialization() -> None:
    ok = ReadResult.ok("contract A {}")
    refused = ReadResult.failure(ReadErrorKind.NOT_FOUND, "File not found.")

    assert ok.to_dict() == {"success": True, "content_or_error": "contract A {}", "error_kind": None}
    assert refused.to_dict() == {
        "success": False,
        "content_or_error": "File not found.",
        "error_kind": "not_found",
    }
    with pytest.raises(dataclasses.FrozenInstanceError):
        ok.success = False  # type: ignore[misc]


@pytest.mark.unit
def test_internal_reader_error_names_the_offending_kind() -> None:
    error = InternalReaderError("smt-query")

    assert error.kind == "smt-query"
    assert str(error) == "ReadFile callback used as callback kind smt-query"
