"""Change context, status, and per-artifact instructions."""

from pathlib import Path
from typing import TYPE_CHECKING

from ._changes import get_change_dir, resolve_schema_for_change
from ._graph import ArtifactGraph
from ._models import (
    ArtifactInstructions,
    ArtifactState,
    ArtifactStatus,
    ChangeContext,
    ChangeStatus,
    DependencyInfo,
    Schema,
)
from ._state import detect_completed

if TYPE_CHECKING:
    from ._resolver import SchemaResolver

DEFAULT_SCHEMA = "spec-driven"


def load_change_context(
    project_root: Path,
    change_name: str,
    schema_name: str | None = None,
    *,
    resolver: "SchemaResolver",
    default_schema: str = DEFAULT_SCHEMA,
) -> ChangeContext:
    """Build the graph for a change and detect its completed artifacts.

    The schema is the explicit ``schema_name`` if given, else the one in the
    change metadata, else ``default_schema``. Completion is read from disk
    on every call.
    """
    change_dir = get_change_dir(project_root, change_name)
    resolved_name = resolve_schema_for_change(change_dir, schema_name, default_schema)
    graph = ArtifactGraph.from_schema(resolver.resolve(resolved_name))

    return ChangeContext(
        graph=graph,
        completed=detect_completed(graph, change_dir),
        schema_name=resolved_name,
        change_name=change_name,
        change_dir=change_dir,
        project_root=project_root,
    )


def format_change_status(context: ChangeContext, schema: Schema | None = None) -> ChangeStatus:
    """Classify every artifact of a change as done, ready, or blocked.

    Artifacts are listed in build order. ``apply_requires`` falls back to
    every artifact when the schema does not declare one.
    """
    graph = context.graph
    schema = schema or graph.schema
    completed = context.completed
    ready = set(graph.get_next_artifacts(completed))
    blocked = graph.get_blocked(completed)

    statuses: list[ArtifactStatus] = []
    for artifact_id in graph.get_build_order():
        artifact = graph.get_artifact(artifact_id)
        if artifact_id in completed:
            state = ArtifactState.DONE
        elif artifact_id in ready:
            state = ArtifactState.READY
        else:
            state = ArtifactState.BLOCKED
        statuses.append(
            ArtifactStatus(
                id=artifact_id,
                output_path=artifact.generates,
                state=state,
                missing_deps=tuple(blocked.get(artifact_id, ())),
            )
        )

    apply_requires = (
        schema.apply_requires
        if schema.apply_requires is not None
        else tuple(artifact.id for artifact in schema.artifacts)
    )

    return ChangeStatus(
        change_name=context.change_name,
        schema_name=context.schema_name,
        is_complete=graph.is_complete(completed),
        apply_requires=apply_requires,
        artifacts=tuple(statuses),
    )


def generate_instructions(
    context: ChangeContext,
    artifact_id: str,
    *,
    resolver: "SchemaResolver",
) -> ArtifactInstructions:
    """Collect the template, dependencies, and unlocks for one artifact.

    Raises:
        ArtifactNotFoundError: If the schema has no such artifact.
        TemplateLoadError: If the artifact's template cannot be read.
    """
    graph = context.graph
    artifact = graph.get_artifact(artifact_id)
    template = resolver.load_template(context.schema_name, artifact.template)

    dependencies = tuple(
        DependencyInfo(
            id=dep_id,
            done=dep_id in context.completed,
            path=graph.get_artifact(dep_id).generates,
            description=graph.get_artifact(dep_id).description,
        )
        for dep_id in artifact.requires
    )

    return ArtifactInstructions(
        change_name=context.change_name,
        artifact_id=artifact.id,
        schema_name=context.schema_name,
        change_dir=context.change_dir,
        output_path=artifact.generates,
        description=artifact.description,
        instruction=artifact.instruction,
        template=template,
        dependencies=dependencies,
        unlocks=tuple(graph.get_dependents(artifact_id)),
    )
