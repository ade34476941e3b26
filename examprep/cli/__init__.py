"""examprep command-line interface."""

from examprep.cli.main import app, main

__all__ = ["app", "main"]
