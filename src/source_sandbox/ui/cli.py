"""Command-line interface router for source-sandbox."""

from __future__ import annotations

import argparse
import json
import sys
import uuid
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from source_sandbox.config import (
    ConfigLoadError,
    ConfigValidationError,
    load_config,
)
from source_sandbox.domain.results import ReadCallbackKind, ReadResult, kind_string
from source_sandbox.main import ExitCode
from source_sandbox.observability.logging import (
    logging_config_from,
    request_scope,
    setup_logging,
    shutdown_logging,
)
from source_sandbox.sandbox.file_reader import SandboxedReader
from source_sandbox.ui.render import CLIRenderer, create_renderer


@dataclass(frozen=True, slots=True)
class CLIError(RuntimeError):
    """Typed CLI failure with an explicit process exit code."""

    message: str
    exit_code: int = int(ExitCode.INTERNAL_ERROR)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse command router for all supported CLI workflows."""

    parser = argparse.ArgumentParser(
        prog="source-sandbox",
        description=(
            "source-sandbox — sandboxed source-file resolver.\n\n"
            "Common workflows:\n"
            "  source-sandbox read src/a.sol          Read a file through the sandbox\n"
            "  source-sandbox config --json           Show the effective config\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to TOML config (default: ./source_sandbox.toml if present).",
    )
    common.add_argument(
        "--base-path",
        default=None,
        help="Directory relative request paths are resolved against.",
    )
    common.add_argument(
        "--allow",
        action="append",
        dest="allowed_directories",
        default=None,
        metavar="DIR",
        help="Allowed directory (repeatable); replaces the configured allow-list.",
    )
    common.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Show detailed output.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # read ----------------------------------------------------------------
    read_parser = subparsers.add_parser(
        "read",
        parents=[common],
        help="Read one or more files through the sandbox",
        description=(
            "Resolve each path against the base path and read it if it lies inside an\n"
            "allowed directory. Paths may carry a file:// prefix.\n\n"
            "Examples:\n"
            "  source-sandbox read src/a.sol\n"
            "  source-sandbox read file://src/a.sol --json\n"
            "  source-sandbox read src/a.sol --base-path /project --allow /project/src\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    read_parser.add_argument("paths", nargs="+", help="Requested source paths")
    read_parser.add_argument(
        "--list-sources",
        action="store_true",
        default=False,
        help="List registered source-unit IDs after reading",
    )
    read_parser.add_argument("--json", action="store_true", help="Emit deterministic JSON output")
    read_parser.set_defaults(handler=_cmd_read)

    # config --------------------------------------------------------------
    config_parser = subparsers.add_parser(
        "config",
        parents=[common],
        help="Show the effective config",
    )
    config_parser.add_argument(
        "--json", action="store_true", help="Emit deterministic JSON output"
    )
    config_parser.set_defaults(handler=_cmd_config)

    return parser


# ---------------------------------------------------------------------------
# Entrypoints
# ---------------------------------------------------------------------------


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse argv, route to a command handler, and return process exit code."""

    parser = build_parser()
    namespace = parser.parse_args(list(argv) if argv is not None else None)
    handler = getattr(namespace, "handler", None)
    if not callable(handler):
        parser.print_help(sys.stderr)
        return int(ExitCode.CONFIG_ERROR)

    try:
        result = handler(namespace)
    except CLIError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    return int(result)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_read(args: argparse.Namespace) -> int:
    config = _load_effective_config(args)
    setup_logging(logging_config_from(config["observability"]))
    try:
        reader = SandboxedReader.from_config(config)
        kind = kind_string(ReadCallbackKind.READ_FILE)
        with request_scope(run_id=uuid.uuid4().hex):
            outcomes = [(path, reader.read_file(kind, path)) for path in args.paths]
    finally:
        shutdown_logging()

    exit_code = (
        ExitCode.SUCCESS
        if all(result.success for _, result in outcomes)
        else ExitCode.READ_REFUSED
    )

    if _flag(args, "json"):
        _emit_json(
            {
                "command": "read",
                "results": [{"path": path, **result.to_dict()} for path, result in outcomes],
                "source_unit_ids": reader.registry.source_unit_ids(),
                "path_mappings": {
                    key: value.as_posix()
                    for key, value in sorted(reader.registry.path_mappings.items())
                },
            }
        )
        return int(exit_code)

    renderer = _get_renderer(args)
    _render_outcomes(renderer, outcomes)
    if _flag(args, "list_sources"):
        renderer.section("Sources:")
        renderer.items(reader.registry.source_unit_ids())
    return int(exit_code)


def _cmd_config(args: argparse.Namespace) -> int:
    config = _load_effective_config(args)

    if _flag(args, "json"):
        _emit_json({"command": "config", "config": config})
        return int(ExitCode.SUCCESS)

    renderer = _get_renderer(args)
    sandbox = config["sandbox"]
    renderer.kv("Base path", sandbox["base_path"])
    renderer.section("Allowed directories:")
    renderer.items(sandbox["allowed_directories"] or ["(none)"])
    if renderer.verbose:
        renderer.section("Effective config:")
        renderer.text(json.dumps(config, indent=2, sort_keys=True, ensure_ascii=False))
    return int(ExitCode.SUCCESS)


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def _emit_json(payload: Mapping[str, object]) -> None:
    """Emit a JSON payload to stdout with deterministic formatting."""

    print(json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False))


def _get_renderer(args: argparse.Namespace) -> CLIRenderer:
    return create_renderer(verbose=_flag(args, "verbose"))


def _render_outcomes(renderer: CLIRenderer, outcomes: Sequence[tuple[str, ReadResult]]) -> None:
    show_headings = len(outcomes) > 1 or renderer.verbose
    for path, result in outcomes:
        if not result.success:
            renderer.fail(f"{path}: {result.content_or_error}")
            continue
        if show_headings:
            renderer.heading(f"==> {path} <==")
        renderer.content(result.content_or_error)


# ---------------------------------------------------------------------------
# Helpers: config, paths
# ---------------------------------------------------------------------------


def _load_effective_config(args: argparse.Namespace) -> dict[str, Any]:
    config_path = getattr(args, "config_path", None)
    overrides: dict[str, object] = {}

    base_path = getattr(args, "base_path", None)
    if base_path is not None:
        overrides["sandbox.base_path"] = _absolute_path_text(base_path)
    allowed = getattr(args, "allowed_directories", None)
    if allowed is not None:
        overrides["sandbox.allowed_directories"] = [_absolute_path_text(item) for item in allowed]

    try:
        return load_config(config_path, cli_overrides=overrides)
    except (ConfigLoadError, ConfigValidationError) as exc:
        raise CLIError(str(exc), exit_code=int(ExitCode.CONFIG_ERROR)) from exc


def _absolute_path_text(raw: str) -> str:
    return Path(raw).expanduser().absolute().as_posix()


def _flag(args: argparse.Namespace, name: str) -> bool:
    return bool(getattr(args, name, False))


__all__ = ["CLIError", "build_parser", "run_cli"]
