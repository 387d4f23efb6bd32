# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415, FBT002
"""Workflow commands: status, instructions, schemas, list, and new."""

from typing import Annotated

from cyclopts import Parameter
from rich.markup import escape

from specflow.exceptions import SpecflowError
from specflow.spec import get_task_progress
from specflow.utils._paths import get_changes_dir
from specflow.workflow import (
    create_change,
    format_change_status,
    generate_instructions,
    list_changes,
    load_change_context,
)

from ._context import CLIContext, OutputFormat
from ._errors import exit_code_for_exception
from ._helpers import get_logger, get_resolver
from ._output import (
    changes_to_dict,
    format_changes_text,
    format_instructions_text,
    format_schemas_text,
    format_status_text,
    instructions_to_dict,
    output_result,
    progress_status,
    schemas_to_dict,
    status_to_dict,
)
from ._shared import exit_with_error, exit_with_success, get_console, get_error_console

__all__ = [
    "instructions",
    "list_",
    "new",
    "schemas",
    "status",
]


def status(
    *,
    change: Annotated[str, Parameter(name=["--change", "-c"], help="Change name")],
    schema: Annotated[
        str | None,
        Parameter(name=["--schema", "-s"], help="Schema override"),
    ] = None,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TEXT,
) -> None:
    """Show which artifacts of a change are done, ready, or blocked

    Args:
        change: Name of the change.
        schema: Schema to use instead of the change's own.
        format_: Output format.
    """
    ctx = CLIContext.get_current()
    project_root = ctx.resolve_project_root()

    try:
        context = load_change_context(
            project_root,
            change,
            schema,
            resolver=get_resolver(ctx, project_root),
            default_schema=ctx.config.workflow.default_schema,
        )
    except SpecflowError as e:
        exit_with_error(str(e), exit_code_for_exception(e), console=get_error_console())

    change_status = format_change_status(context)
    print(  # noqa: T201
        output_result(
            status_to_dict(change_status),
            format_,
            text=format_status_text(change_status),
            table_headers=["Artifact", "Status", "Output", "Missing"],
            table_rows=[
                [
                    artifact.id,
                    artifact.state.value,
                    artifact.output_path,
                    ", ".join(artifact.missing_deps),
                ]
                for artifact in change_status.artifacts
            ],
        )
    )
    exit_with_success()


def instructions(
    artifact: str,
    /,
    *,
    change: Annotated[str, Parameter(name=["--change", "-c"], help="Change name")],
    schema: Annotated[
        str | None,
        Parameter(name=["--schema", "-s"], help="Schema override"),
    ] = None,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TEXT,
) -> None:
    """Show the template, dependencies, and guidance for one artifact

    Args:
        artifact: Artifact ID within the change's schema.
        change: Name of the change.
        schema: Schema to use instead of the change's own.
        format_: Output format.
    """
    ctx = CLIContext.get_current()
    project_root = ctx.resolve_project_root()
    resolver = get_resolver(ctx, project_root)

    try:
        context = load_change_context(
            project_root,
            change,
            schema,
            resolver=resolver,
            default_schema=ctx.config.workflow.default_schema,
        )
        result = generate_instructions(context, artifact, resolver=resolver)
    except SpecflowError as e:
        exit_with_error(str(e), exit_code_for_exception(e), console=get_error_console())

    print(  # noqa: T201
        output_result(
            instructions_to_dict(result),
            format_,
            text=format_instructions_text(result),
            table_headers=["Dependency", "Done", "Path"],
            table_rows=[[dep.id, str(dep.done), dep.path] for dep in result.dependencies],
        )
    )
    exit_with_success()


def schemas(
    *,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TEXT,
) -> None:
    """List available workflow schemas

    Args:
        format_: Output format.
    """
    ctx = CLIContext.get_current()
    infos = get_resolver(ctx, ctx.resolve_project_root()).list_schemas_with_info()

    print(  # noqa: T201
        output_result(
            schemas_to_dict(infos),
            format_,
            text=format_schemas_text(infos),
            table_headers=["Name", "Source", "Artifacts", "Description"],
            table_rows=[
                [info.name, info.source.value, ", ".join(info.artifacts), info.description]
                for info in infos
            ],
        )
    )
    exit_with_success()


def list_(
    *,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TEXT,
) -> None:
    """List active changes with their task progress

    Args:
        format_: Output format.
    """
    ctx = CLIContext.get_current()
    changes_dir = get_changes_dir(ctx.resolve_project_root())

    try:
        changes = [
            (name, get_task_progress(changes_dir / name)) for name in list_changes(changes_dir)
        ]
    except SpecflowError as e:
        exit_with_error(str(e), exit_code_for_exception(e), console=get_error_console())

    print(  # noqa: T201
        output_result(
            changes_to_dict(changes),
            format_,
            text=format_changes_text(changes),
            table_headers=["Change", "Tasks", "Status"],
            table_rows=[
                [name, progress.format(), progress_status(progress)] for name, progress in changes
            ],
        )
    )
    exit_with_success()


def new(
    name: str,
    /,
    *,
    schema: Annotated[
        str | None,
        Parameter(name=["--schema", "-s"], help="Workflow schema for the change"),
    ] = None,
) -> None:
    """Create a new change folder

    Args:
        name: Kebab-case change name.
        schema: Workflow schema. Defaults to workflow.default_schema.
    """
    ctx = CLIContext.get_current()
    project_root = ctx.resolve_project_root()
    schema_name = schema or ctx.config.workflow.default_schema

    try:
        change_dir = create_change(
            project_root,
            name,
            schema_name=schema_name,
            resolver=get_resolver(ctx, project_root),
        )
    except (SpecflowError, OSError) as e:
        exit_with_error(str(e), exit_code_for_exception(e), console=get_error_console())

    get_logger(ctx).info("change_created", change=name, schema=schema_name, path=str(change_dir))
    if ctx.quiet:
        exit_with_success()
    exit_with_success(
        f"[green]Created change[/green] {name} at {escape(str(change_dir))}", console=get_console()
    )
