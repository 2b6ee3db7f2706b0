"""CLI module."""

from lintemit.cli.main import cli

__all__ = ["cli"]
