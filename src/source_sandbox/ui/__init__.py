"""UI package exports for the CLI and its rendering layer."""

from source_sandbox.ui.cli import CLIError, build_parser, run_cli
from source_sandbox.ui.render import CLIRenderer, create_renderer

__all__ = [
    "CLIError",
    "CLIRenderer",
    "build_parser",
    "create_renderer",
    "run_cli",
]
