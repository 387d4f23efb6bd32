"""The specflow command-line interface."""

from ._app import create_app, main
from ._commands._context import CLIContext

__all__ = ["CLIContext", "create_app", "main"]
