# pyright: reportExplicitAny=false
"""Output conversion for workflow and sync commands."""

from typing import TYPE_CHECKING

from specflow.workflow import ArtifactState

from ._context import OutputFormat
from ._shared import FormattableData, format_json, format_table, format_yaml

if TYPE_CHECKING:
    from specflow.spec import SyncResult, TaskProgress, ValidationReport
    from specflow.workflow import ArtifactInstructions, ChangeStatus, SchemaCheck, SchemaInfo

__all__ = [
    "changes_to_dict",
    "format_changes_text",
    "format_instructions_text",
    "format_schema_checks_text",
    "format_schemas_text",
    "format_status_text",
    "instructions_to_dict",
    "output_result",
    "progress_status",
    "schema_checks_to_dict",
    "schemas_to_dict",
    "status_to_dict",
    "sync_result_to_dict",
    "validation_lines",
]

_STATE_MARKERS: dict[ArtifactState, str] = {
    ArtifactState.DONE: "[x]",
    ArtifactState.READY: "[ ]",
    ArtifactState.BLOCKED: "[-]",
}


# =============================================================================
# Dict Conversion
# =============================================================================


def status_to_dict(status: "ChangeStatus") -> FormattableData:
    return {
        "change": status.change_name,
        "schema": status.schema_name,
        "is_complete": status.is_complete,
        "apply_requires": list(status.apply_requires),
        "artifacts": [
            {
                "id": artifact.id,
                "output_path": artifact.output_path,
                "status": artifact.state.value,
                "missing_deps": list(artifact.missing_deps),
            }
            for artifact in status.artifacts
        ],
    }


def instructions_to_dict(instructions: "ArtifactInstructions") -> FormattableData:
    return {
        "change": instructions.change_name,
        "artifact": instructions.artifact_id,
        "schema": instructions.schema_name,
        "change_dir": str(instructions.change_dir),
        "output_path": instructions.output_path,
        "description": instructions.description,
        "instruction": instructions.instruction,
        "template": instructions.template,
        "dependencies": [
            {
                "id": dep.id,
                "done": dep.done,
                "path": dep.path,
                "description": dep.description,
            }
            for dep in instructions.dependencies
        ],
        "unlocks": list(instructions.unlocks),
    }


def schemas_to_dict(schemas: "list[SchemaInfo]") -> FormattableData:
    return {
        "schemas": [
            {
                "name": info.name,
                "description": info.description,
                "artifacts": list(info.artifacts),
                "source": info.source.value,
            }
            for info in schemas
        ]
    }


def progress_status(progress: "TaskProgress") -> str:
    if progress.total == 0:
        return "no-tasks"
    return "complete" if progress.remaining == 0 else "in-progress"


def changes_to_dict(changes: "list[tuple[str, TaskProgress]]") -> FormattableData:
    return {
        "changes": [
            {
                "name": name,
                "completed_tasks": progress.completed,
                "total_tasks": progress.total,
                "status": progress_status(progress),
            }
            for name, progress in changes
        ]
    }


def schema_checks_to_dict(checks: "list[SchemaCheck]") -> FormattableData:
    return {
        "valid": all(check.valid for check in checks),
        "schemas": [
            {
                "name": check.name,
                "path": str(check.path),
                "valid": check.valid,
                "issues": list(check.issues),
            }
            for check in checks
        ],
    }


def sync_result_to_dict(result: "SyncResult") -> FormattableData:
    """Convert a sync result to a dictionary with per-capability counts."""
    return {
        "capabilities": [
            {
                "capability": spec.update.capability,
                "target": str(spec.update.target),
                "created": not spec.update.target_existed,
                "added": spec.counts.added,
                "modified": spec.counts.modified,
                "removed": spec.counts.removed,
                "renamed": spec.counts.renamed,
            }
            for spec in result.updates
        ],
        "totals": {
            "added": result.totals.added,
            "modified": result.totals.modified,
            "removed": result.totals.removed,
            "renamed": result.totals.renamed,
        },
    }


# =============================================================================
# Text Rendering
# =============================================================================


def format_status_text(status: "ChangeStatus") -> str:
    done = sum(1 for artifact in status.artifacts if artifact.state is ArtifactState.DONE)
    lines = [
        f"Change: {status.change_name}",
        f"Schema: {status.schema_name}",
        f"Progress: {done}/{len(status.artifacts)} artifacts complete",
        "",
    ]
    width = max((len(artifact.id) for artifact in status.artifacts), default=0)
    for artifact in status.artifacts:
        marker = _STATE_MARKERS[artifact.state]
        line = f"{marker} {artifact.id.ljust(width)}  {artifact.output_path}"
        if artifact.missing_deps:
            line += f"  (blocked by: {', '.join(artifact.missing_deps)})"
        lines.append(line)
    if status.is_complete:
        lines.extend(["", "All artifacts complete."])
    return "\n".join(lines)


def format_instructions_text(instructions: "ArtifactInstructions") -> str:
    lines = [
        f"Artifact: {instructions.artifact_id}",
        f"Change: {instructions.change_name}",
        f"Schema: {instructions.schema_name}",
        f"Output: {instructions.change_dir / instructions.output_path}",
    ]
    if instructions.description:
        lines.append(f"Description: {instructions.description}")

    if instructions.dependencies:
        lines.extend(["", "Dependencies:"])
        for dep in instructions.dependencies:
            marker = "[x]" if dep.done else "[ ]"
            lines.append(f"  {marker} {dep.id} ({dep.path})")

    if instructions.unlocks:
        lines.extend(["", f"Unlocks: {', '.join(instructions.unlocks)}"])

    if instructions.instruction:
        lines.extend(["", "Instruction:", instructions.instruction.rstrip("\n")])

    lines.extend(["", "Template:", instructions.template.rstrip("\n")])
    return "\n".join(lines)


def format_schemas_text(schemas: "list[SchemaInfo]") -> str:
    if not schemas:
        return "No schemas found."
    lines: list[str] = []
    for info in schemas:
        header = f"{info.name} ({info.source.value})"
        lines.append(f"{header}: {info.description}" if info.description else header)
        lines.append(f"  artifacts: {', '.join(info.artifacts)}")
    return "\n".join(lines)


def format_changes_text(changes: "list[tuple[str, TaskProgress]]") -> str:
    if not changes:
        return "No active changes found."
    width = max(len(name) for name, _ in changes)
    lines = ["Changes:"]
    lines.extend(f"  {name.ljust(width)}  {progress.format()}" for name, progress in changes)
    return "\n".join(lines)


def format_schema_checks_text(checks: "list[SchemaCheck]") -> str:
    lines = ["Validation Results:"]
    for check in checks:
        lines.append(f"  {'✓' if check.valid else '✗'} {check.name}")
        lines.extend(f"    error: {issue}" for issue in check.issues)
    return "\n".join(lines)


def validation_lines(reports: "dict[str, ValidationReport]") -> list[str]:
    """Render every issue of every report, one line each, errors first."""
    lines: list[str] = []
    for capability in sorted(reports):
        report = reports[capability]
        lines.extend(str(issue) for issue in report.errors)
        lines.extend(str(issue) for issue in report.warnings)
    return lines


# =============================================================================
# Dispatch
# =============================================================================


def output_result(
    data: FormattableData,
    output_format: OutputFormat,
    *,
    text: str,
    table_headers: list[str] | None = None,
    table_rows: list[list[str]] | None = None,
) -> str:
    """Dispatch output formatting based on format enum.

    Args:
        data: The data dictionary for structured formats.
        output_format: The output format to use.
        text: Pre-rendered text output.
        table_headers: Headers for table output.
        table_rows: Rows for table output.

    Returns:
        Formatted string representation.
    """
    if output_format == OutputFormat.JSON:
        return format_json(data)
    if output_format == OutputFormat.YAML:
        return format_yaml(data).rstrip("\n")
    if output_format == OutputFormat.TABLE and table_headers is not None and table_rows is not None:
        return format_table(table_headers, table_rows)
    return text
