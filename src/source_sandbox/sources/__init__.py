"""Source-unit registry exports."""

from source_sandbox.sources.registry import SourceRegistry

__all__ = ["SourceRegistry"]
