# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415, FBT002
"""Spec commands: sync a change's delta specs, and archive a change."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Annotated, Never

from cyclopts import Parameter
from rich.markup import escape

from specflow.exceptions import (
    SpecError,
    SpecflowError,
    SpecIOError,
    SpecWriteError,
    ValidationFailureError,
)
from specflow.spec import (
    archive_change,
    find_spec_updates,
    get_archive_path,
    get_task_progress,
    read_text,
    validate_change_deltas,
    validate_proposal,
)
from specflow.utils._paths import get_specs_dir
from specflow.workflow import get_change_dir

from ._context import CLIContext
from ._errors import exit_code_for_exception
from ._helpers import get_logger, get_orchestrator
from ._output import validation_lines
from ._shared import (
    ExitCode,
    confirm_destructive,
    exit_with_error,
    exit_with_success,
    get_console,
    get_error_console,
)

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from specflow.spec import SpecUpdate, SyncResult

__all__ = [
    "ABORTED_MESSAGE",
    "archive",
    "sync",
]

ABORTED_MESSAGE = "Aborted. No files were changed."
PROPOSAL_FILE_NAME = "proposal.md"


def _print_plan(updates: Sequence["SpecUpdate"], console: "Console") -> None:
    console.print("Specs to update:")
    for update in updates:
        action = "update" if update.target_existed else "create"
        console.print(f"  {escape(update.capability)}: {action}")


def _print_counts(result: "SyncResult", console: "Console", *, quiet: bool) -> None:
    if not quiet:
        for spec in result.updates:
            console.print(f"  {escape(spec.update.capability)}: {spec.counts.summary()}")
    console.print(f"Totals: {result.totals.summary()}")
    console.print("[green]Specs updated successfully.[/green]")


def _exit_with_sync_failure(error: SpecflowError, console: "Console") -> Never:
    """Report a failed sync or archive and exit.

    Failures before the write phase changed nothing on disk and say so.
    A write-phase failure lists the specs that were already written.
    """
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    code = exit_code_for_exception(error)

    if isinstance(error, SpecWriteError):
        if error.written:
            console.print("Specs written before the failure:")
            for path in error.written:
                console.print(f"  {escape(str(path))}")
        raise SystemExit(code)

    if isinstance(error, SpecIOError) and error.operation == "move":
        console.print("Specs were updated but the change was not moved to the archive.")
        raise SystemExit(code)

    if isinstance(error, ValidationFailureError):
        for line in validation_lines(error.reports):
            console.print(f"  {escape(line)}")
    console.print(ABORTED_MESSAGE)
    raise SystemExit(code)


def sync(
    change: str,
    /,
    *,
    yes: Annotated[
        bool,
        Parameter(name=["--yes", "-y"], help="Apply without confirmation"),
    ] = False,
    no_validate: Annotated[
        bool,
        Parameter(name=["--no-validate"], negative="", help="Skip validation of rebuilt specs"),
    ] = False,
) -> None:
    """Merge a change's delta specs into the main specs

    Every capability is merged and validated before any file is written.

    Args:
        change: Name of the change.
        yes: Apply without confirmation.
        no_validate: Skip validation of rebuilt specs.
    """
    ctx = CLIContext.get_current()
    project_root = ctx.resolve_project_root()
    console = get_console()
    error_console = get_error_console()
    validate = ctx.config.sync.validate_ and not no_validate

    try:
        change_dir = get_change_dir(project_root, change)
    except SpecflowError as e:
        exit_with_error(str(e), exit_code_for_exception(e), console=error_console)

    updates = find_spec_updates(change_dir, get_specs_dir(project_root))
    if not updates:
        exit_with_success(f"No delta specs found for change '{escape(change)}'.", console=console)

    _print_plan(updates, console)
    if not confirm_destructive("Proceed with spec updates?", force=yes, console=error_console):
        exit_with_success(ABORTED_MESSAGE, console=console)

    orchestrator = get_orchestrator(ctx)
    try:
        rebuilt = orchestrator.prepare(updates, change_name=change)
        if validate:
            orchestrator.validate(rebuilt)
        else:
            get_logger(ctx).warning("sync_validation_skipped", change=change)
        result = orchestrator.write(rebuilt)
    except SpecError as e:
        _exit_with_sync_failure(e, error_console)

    _print_counts(result, console, quiet=ctx.quiet)
    exit_with_success()


def _print_proposal_warnings(change_dir: "Path", console: "Console") -> None:
    proposal = change_dir / PROPOSAL_FILE_NAME
    if not proposal.is_file():
        return
    report = validate_proposal(read_text(proposal))
    if report.issues:
        console.print(f"[yellow]Proposal warnings in {PROPOSAL_FILE_NAME} (non-blocking):[/yellow]")
        for issue in report.issues:
            console.print(f"  [yellow]{escape(issue.message)}[/yellow]")


def _check_change(change_dir: "Path", console: "Console", error_console: "Console") -> None:
    """Validate the proposal and delta specs; exit if a delta spec fails."""
    try:
        _print_proposal_warnings(change_dir, console)
        failing = validate_change_deltas(change_dir)
    except SpecflowError as e:
        exit_with_error(str(e), exit_code_for_exception(e), console=error_console)
    if not failing:
        return

    error_console.print("[red]Validation errors in change delta specs:[/red]")
    for line in validation_lines(failing):
        error_console.print(f"  {escape(line)}")
    error_console.print("Validation failed. Please fix the errors before archiving.")
    error_console.print("To skip validation (not recommended), use --no-validate flag.")
    raise SystemExit(ExitCode.VALIDATION_ERROR)


def archive(  # noqa: PLR0913
    change: str,
    /,
    *,
    yes: Annotated[
        bool,
        Parameter(name=["--yes", "-y"], help="Skip all confirmation prompts"),
    ] = False,
    skip_specs: Annotated[
        bool,
        Parameter(name=["--skip-specs"], negative="", help="Archive without updating specs"),
    ] = False,
    no_validate: Annotated[
        bool,
        Parameter(name=["--no-validate"], negative="", help="Skip validation of the change"),
    ] = False,
) -> None:
    """Sync a change's specs and move it to the archive

    Delta specs are validated first, even with --skip-specs. Declining the
    spec updates archives the change without them.

    Args:
        change: Name of the change.
        yes: Skip all confirmation prompts.
        skip_specs: Archive without updating specs.
        no_validate: Skip validation of the change and the rebuilt specs.
    """
    ctx = CLIContext.get_current()
    project_root = ctx.resolve_project_root()
    console = get_console()
    error_console = get_error_console()
    logger = get_logger(ctx)
    validate = ctx.config.sync.validate_ and not no_validate

    try:
        change_dir = get_change_dir(project_root, change)
        progress = get_task_progress(change_dir)
    except SpecflowError as e:
        exit_with_error(str(e), exit_code_for_exception(e), console=error_console)

    archive_path = get_archive_path(project_root, change)
    if archive_path.exists():
        exit_with_error(
            f"Archive '{archive_path.name}' already exists.",
            ExitCode.VALIDATION_ERROR,
            console=error_console,
        )

    if validate:
        _check_change(change_dir, console, error_console)
    else:
        message = "Skipping validation may archive invalid specs. Continue?"
        if not confirm_destructive(message, force=yes, console=error_console):
            exit_with_success("Archive cancelled.", console=console)
        console.print("[yellow]Warning: validation skipped.[/yellow]")
        logger.warning("archive_validation_skipped", change=change)

    console.print(f"Task status: {progress.format()}")
    if progress.remaining:
        message = f"Warning: {progress.remaining} incomplete task(s) found. Continue?"
        if not confirm_destructive(message, force=yes, console=error_console):
            exit_with_success("Archive cancelled.", console=console)

    if skip_specs:
        console.print("Skipping spec updates (--skip-specs flag provided).")
    else:
        updates = find_spec_updates(change_dir, get_specs_dir(project_root))
        if updates:
            _print_plan(updates, console)
            if not confirm_destructive(
                "Proceed with spec updates?", force=yes, console=error_console
            ):
                console.print("Skipping spec updates. Proceeding with archive.")
                logger.info("archive_spec_updates_declined", change=change)
                skip_specs = True

    try:
        result = archive_change(
            project_root,
            change,
            skip_specs=skip_specs,
            validate=validate,
            orchestrator=get_orchestrator(ctx),
            logger=logger,
        )
    except SpecflowError as e:
        _exit_with_sync_failure(e, error_console)

    if result.sync is not None and result.sync.updates:
        _print_counts(result.sync, console, quiet=ctx.quiet)
    exit_with_success(
        f"Change '{escape(change)}' archived as '{escape(result.archive_path.name)}'.",
        console=console,
    )
