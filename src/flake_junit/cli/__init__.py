"""Command line interface for flake-junit."""

from flake_junit.cli.main import main

__all__ = ["main"]
