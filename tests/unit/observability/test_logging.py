"""
source-sandbox — unit tests for structured logging

File: tests/unit/observability/test_logging.py

Purpose
- Validate JSON-lines output for structlog events and stdlib records, request
  scoping, and handler teardown.

Functional requirements
- Offline operation.
"""

from __future__ import annotations

import io
import json
import logging
from typing import TYPE_CHECKING

import pytest
import structlog

from source_sandbox import ReadCallbackKind, SandboxedReader, kind_string
from source_sandbox.observability.logging import (
    LoggingConfig,
    logging_config_from,
    request_scope,
    setup_logging,
    shutdown_logging,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _cleanup_logging() -> Iterator[None]:
    yield
    shutdown_logging()


def _json_lines(stream: io.StringIO) -> list[dict[str, object]]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


@pytest.mark.unit
def test_structlog_events_render_as_json_lines() -> None:
    stream = io.StringIO()
    setup_logging(LoggingConfig(level="DEBUG", stream=stream))

    structlog.get_logger("source_sandbox.tests").info("probe", requested_path="src/a.sol")

    (record,) = _json_lines(stream)
    assert record["event"] == "probe"
    assert record["requested_path"] == "src/a.sol"
    assert record["level"] == "info"
    assert record["logger"] == "source_sandbox.tests"
    assert "timestamp" in record


@pytest.mark.unit
def test_stdlib_records_share_the_json_format() -> None:
    stream = io.StringIO()
    setup_logging(LoggingConfig(stream=stream))

    logging.getLogger("source_sandbox.tests.stdlib").warning("plain %s", "record")

    (record,) = _json_lines(stream)
    assert record["event"] == "plain record"
    assert record["level"] == "warning"


@pytest.mark.unit
def test_level_filters_debug_events() -> None:
    stream = io.StringIO()
    setup_logging(LoggingConfig(level="WARNING", stream=stream))

    logger = structlog.get_logger("source_sandbox.tests")
    logger.info("hidden")
    logger.error("shown")

    assert [record["event"] for record in _json_lines(stream)] == ["shown"]


@pytest.mark.unit
def test_request_scope_binds_fields() -> None:
    stream = io.StringIO()
    setup_logging(LoggingConfig(stream=stream))

    with request_scope(run_id="run-42"):
        structlog.get_logger("source_sandbox.tests").info("inside")
    structlog.get_logger("source_sandbox.tests").info("outside")

    inside, outside = _json_lines(stream)
    assert inside["run_id"] == "run-42"
    assert "run_id" not in outside


@pytest.mark.unit
def test_reader_decisions_reach_the_configured_sink(tmp_path: Path) -> None:
    stream = io.StringIO()
    setup_logging(logging_config_from({"log_level": "INFO", "log_format": "json"}, stream=stream))
    root = tmp_path.resolve()
    reader = SandboxedReader(root, [root / "src"])

    reader.read_file(kind_string(ReadCallbackKind.READ_FILE), "../outside.sol")

    (record,) = _json_lines(stream)
    assert record["event"] == "read_file.refused"
    assert record["requested_path"] == "../outside.sol"
    assert record["logger"] == "source_sandbox.sandbox.file_reader"


@pytest.mark.unit
def test_console_format_is_not_json() -> None:
    stream = io.StringIO()
    setup_logging(LoggingConfig(log_format="console", stream=stream))

    structlog.get_logger("source_sandbox.tests").info("console-event")

    output = stream.getvalue()
    assert "console-event" in output
    with pytest.raises(json.JSONDecodeError):
        json.loads(output.splitlines()[0])


@pytest.mark.unit
def test_shutdown_detaches_handler() -> None:
    stream = io.StringIO()
    logger = setup_logging(LoggingConfig(stream=stream))
    assert len(logger.handlers) == 1

    shutdown_logging()

    assert logger.handlers == []


@pytest.mark.unit
@pytest.mark.parametrize(
    "config",
    [LoggingConfig(log_format="xml"), LoggingConfig(level="LOUD")],
)
def test_invalid_settings_raise_value_error(config: LoggingConfig) -> None:
    with pytest.raises(ValueError):
        setup_logging(config)
