# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415
"""Schema command group: checks on workflow schema directories."""

from typing import Annotated

from cyclopts import App, Parameter

from specflow.exceptions import SpecflowError
from specflow.workflow import SchemaSource

from ._context import CLIContext, OutputFormat
from ._errors import exit_code_for_exception
from ._helpers import get_logger, get_resolver
from ._output import format_schema_checks_text, output_result, schema_checks_to_dict
from ._shared import ExitCode, exit_with_error, exit_with_success, get_error_console

__all__ = ["app"]

app = App(name="schema", help="Inspect workflow schemas", help_on_error=True)


@app.command(name="validate")
def validate(
    name: str | None = None,
    /,
    *,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TEXT,
) -> None:
    """Check a schema's structure and templates

    Without a name, every schema in the project's schemas directory is
    checked.

    Args:
        name: Schema to check, resolved across all layers.
        format_: Output format.
    """
    ctx = CLIContext.get_current()
    resolver = get_resolver(ctx, ctx.resolve_project_root())

    if name is None:
        checks = resolver.check_layer(SchemaSource.PROJECT)
        if checks is None:
            if format_ in (OutputFormat.TEXT, OutputFormat.TABLE):
                exit_with_success("No project schemas directory found.")
            checks = []
        elif not checks and format_ in (OutputFormat.TEXT, OutputFormat.TABLE):
            exit_with_success("No schemas found in project.")
    else:
        try:
            checks = [resolver.check_schema(name)]
        except SpecflowError as e:
            exit_with_error(str(e), exit_code_for_exception(e), console=get_error_console())

    invalid = [check.name for check in checks if not check.valid]
    get_logger(ctx).info("schemas_validated", checked=len(checks), invalid=invalid)

    print(  # noqa: T201
        output_result(
            schema_checks_to_dict(checks),
            format_,
            text=format_schema_checks_text(checks),
            table_headers=["Schema", "Valid", "Issues"],
            table_rows=[
                [check.name, str(check.valid), "; ".join(check.issues)] for check in checks
            ],
        )
    )
    if invalid:
        raise SystemExit(ExitCode.VALIDATION_ERROR)
    exit_with_success()
