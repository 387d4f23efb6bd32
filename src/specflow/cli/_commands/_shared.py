# pyright: reportExplicitAny=false
"""Output, confirmation, and exit helpers shared by the commands.

Data goes to stdout through ``print`` so it can be piped; messages and
prompts go through rich consoles built from the current ``CLIContext``.
"""

import sys
from enum import IntEnum
from typing import TYPE_CHECKING, Any, Never

from rich.markup import escape

from ._context import CLIContext

if TYPE_CHECKING:
    from rich.console import Console

# Anything the JSON and YAML encoders accept
FormattableData = dict[str, Any]

__all__ = [
    "ExitCode",
    "FormattableData",
    "confirm_destructive",
    "exit_with_error",
    "exit_with_success",
    "format_json",
    "format_table",
    "format_yaml",
    "get_console",
    "get_error_console",
]

_YES_ANSWERS = frozenset({"y", "yes"})


class ExitCode(IntEnum):
    """Process exit status of a specflow command."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5


# =============================================================================
# Formatters
# =============================================================================


def format_json(data: FormattableData, *, indent: bool = True) -> str:
    """Serialize with orjson, two-space indented unless ``indent`` is False."""
    import orjson  # noqa: PLC0415

    return orjson.dumps(data, option=orjson.OPT_INDENT_2 if indent else 0).decode("utf-8")


def format_yaml(data: FormattableData) -> str:
    """Serialize as block-style YAML, keeping key order and unicode."""
    import yaml  # noqa: PLC0415

    return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)


def format_table(headers: list[str], rows: list[list[str]]) -> str:
    from pytablewriter import MarkdownTableWriter  # noqa: PLC0415

    return MarkdownTableWriter(headers=headers, value_matrix=rows, margin=1).dumps()


# =============================================================================
# Consoles
# =============================================================================


def _console(*, stderr: bool) -> "Console":
    from rich.console import Console  # noqa: PLC0415

    return Console(
        stderr=stderr,
        no_color=CLIContext.get_current().no_color,
        soft_wrap=True,
        highlight=False,
    )


def get_console() -> "Console":
    """Console for messages on stdout, honoring --no-color."""
    return _console(stderr=False)


def get_error_console() -> "Console":
    """Console for errors and prompts on stderr, honoring --no-color."""
    return _console(stderr=True)


def confirm_destructive(message: str, *, force: bool, console: "Console") -> bool:
    """Ask before changing files; True means go ahead.

    ``force`` (``--yes``) skips the question. Without a TTY on stdin
    there is no one to ask, so the answer is no.
    """
    if force:
        return True
    if not sys.stdin.isatty():
        return False

    console.print(f"[yellow]{escape(message)}[/yellow]")
    try:
        response = console.input("[bold]Confirm (y/N): [/bold]")
    except (EOFError, KeyboardInterrupt):
        return False
    return response.strip().lower() in _YES_ANSWERS


# =============================================================================
# Exits
# =============================================================================


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: "Console | None" = None,
) -> Never:
    """Print ``Error: <message>`` (markup escaped) and exit with ``code``."""
    (console or get_error_console()).print(f"[red]Error:[/red] {escape(message)}")
    raise SystemExit(code)


def exit_with_success(
    message: str | None = None,
    *,
    console: "Console | None" = None,
) -> Never:
    """Exit 0, printing ``message`` (rich markup allowed) first if given."""
    if message is not None:
        (console or get_console()).print(message)
    raise SystemExit(ExitCode.SUCCESS)
