"""Helper utilities for CLI commands."""

from pathlib import Path
from typing import TYPE_CHECKING

from specflow.config import get_user_data_dir
from specflow.spec import SpecSyncOrchestrator
from specflow.utils._logging import create_null_logger
from specflow.workflow import SchemaResolver

from ._context import CLIContext

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

__all__ = [
    "get_logger",
    "get_orchestrator",
    "get_resolver",
    "get_user_schemas_dir",
]


def get_logger(ctx: CLIContext) -> "FilteringBoundLogger":
    """Return the CLI logger, or a null logger when none was configured."""
    return ctx.logger if ctx.logger is not None else create_null_logger()


def get_user_schemas_dir(ctx: CLIContext) -> Path:
    """Return ``workflow.schemas_dir`` if set, else the per-user data directory."""
    configured = ctx.config.workflow.schemas_dir
    if configured:
        return Path(configured).expanduser()
    return get_user_data_dir() / "schemas"


def get_resolver(ctx: CLIContext, project_root: Path) -> SchemaResolver:
    """Get a SchemaResolver for the project, user, and package layers."""
    return SchemaResolver(
        project_root=project_root,
        user_schemas_dir=get_user_schemas_dir(ctx),
        logger=get_logger(ctx),
    )


def get_orchestrator(ctx: CLIContext) -> SpecSyncOrchestrator:
    """Get a SpecSyncOrchestrator logging to the CLI log."""
    return SpecSyncOrchestrator(logger=get_logger(ctx))
