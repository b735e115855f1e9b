"""Integration tests that drive the CLI end to end."""
