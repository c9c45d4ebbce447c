# src/ragline/cli/__init__.py
"""CLI package for ragline.

This package provides the command-line interface using Typer.
The CLI is a thin wrapper around the commands layer.
"""

from ragline.cli.app import app, console

__all__ = ["app", "console"]
