"""specflow CLI commands."""
# pyright: reportUnusedCallResult=false

from typing import TYPE_CHECKING

from ._context import CLIContext, OutputFormat
from ._errors import exit_code_for_exception
from ._shared import (
    ExitCode,
    FormattableData,
    confirm_destructive,
    exit_with_error,
    exit_with_success,
    format_json,
    format_table,
    format_yaml,
    get_console,
    get_error_console,
)
from ._schema import app as schema_app
from ._specs import archive, sync
from ._workflow import instructions, list_, new, schemas, status

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "CLIContext",
    "ExitCode",
    "FormattableData",
    "OutputFormat",
    "confirm_destructive",
    "exit_code_for_exception",
    "exit_with_error",
    "exit_with_success",
    "format_json",
    "format_table",
    "format_yaml",
    "get_console",
    "get_error_console",
    "register_commands",
]


def register_commands(app: "App") -> None:
    app.command(status, name="status")
    app.command(instructions, name="instructions")
    app.command(schemas, name="schemas")
    app.command(schema_app)
    app.command(list_, name="list")
    app.command(new, name="new")
    app.command(sync, name="sync")
    app.command(archive, name="archive")
