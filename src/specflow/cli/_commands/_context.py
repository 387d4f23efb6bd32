# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for dataclass field
"""Per-invocation CLI state shared with every command.

The root app builds one ``CLIContext`` from the global options and the
loaded configuration, and publishes it through a context variable for the
duration of the command.
"""

import contextvars
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from specflow.config import Config


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"
    YAML = "yaml"
    TABLE = "table"


_active: "contextvars.ContextVar[CLIContext | None]" = contextvars.ContextVar(
    "specflow_cli_context", default=None
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global options and configuration for the running command.

    Attributes:
        config: Configuration loaded for this run.
        quiet: Suppress informational output.
        no_color: Disable colored console output.
        project_root: The ``--project-root`` value, if given.
        logger: The CLI file logger, or None outside the CLI.
    """

    config: "Config" = field(repr=False)
    quiet: bool = False
    no_color: bool = False
    project_root: Path | None = None
    logger: "FilteringBoundLogger | None" = field(default=None, repr=False)

    @classmethod
    def get_current(cls) -> "CLIContext":
        """Return the published context, or one built from default configuration."""
        ctx = _active.get()
        if ctx is None:
            from specflow.config import Config  # noqa: PLC0415

            ctx = cls(config=Config.from_dict({}))
        return ctx

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:
        _active.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Forget the published context."""
        _active.set(None)

    def resolve_project_root(self) -> Path:
        """Return --project-root, else the discovered project root, else the cwd."""
        if self.project_root is not None:
            return self.project_root

        from specflow.config import find_project_root  # noqa: PLC0415

        return find_project_root() or Path.cwd()
