"""Command-line interface for dectable."""

from dectable.cli.commands import cli, main

__all__ = ["cli", "main"]
