"""
CLI Layer - Command-line interface components.

This module contains the Typer-based CLI application used to query
provider plugins from a terminal.
"""

from anitorrent.cli.main import app

__all__ = ["app"]
