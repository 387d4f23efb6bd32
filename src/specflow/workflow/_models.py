"""Data models for the artifact workflow.

Schemas and artifact definitions are immutable once resolved. Status and
instruction records are snapshots computed fresh for each command.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from specflow.workflow._graph import ArtifactGraph

type CompletedSet = frozenset[str]
type BlockedArtifacts = dict[str, list[str]]


# =============================================================================
# Enums
# =============================================================================


class ArtifactState(StrEnum):
    """Workflow state of a single artifact relative to a completion set."""

    DONE = "done"
    READY = "ready"
    BLOCKED = "blocked"


class SchemaSource(StrEnum):
    """Search layer a schema was resolved from, highest precedence first."""

    PROJECT = "project"
    USER = "user"
    PACKAGE = "package"


# =============================================================================
# Schema Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class ArtifactDef:
    """A single artifact declared by a workflow schema.

    Attributes:
        id: Unique artifact identifier within the schema.
        generates: Output path pattern relative to the change directory.
            Either a plain file path or a glob such as ``specs/**/*.md``.
        description: Short human-readable description.
        template: Template file name within the schema's templates directory.
        requires: IDs of artifacts that must be complete first.
        instruction: Optional guidance for producing the artifact.
    """

    id: str
    generates: str
    description: str = ""
    template: str = ""
    requires: tuple[str, ...] = ()
    instruction: str | None = None


@dataclass(frozen=True, slots=True)
class Schema:
    """A resolved workflow schema.

    Attributes:
        name: Schema name.
        version: Schema format version.
        artifacts: Artifact definitions in declaration order.
        description: Optional schema description.
        apply_requires: Artifacts that must be complete before implementation
            starts. None means every artifact.
    """

    name: str
    version: int
    artifacts: tuple[ArtifactDef, ...]
    description: str = ""
    apply_requires: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class SchemaInfo:
    """Summary of an available schema for listings."""

    name: str
    description: str
    artifacts: tuple[str, ...]
    source: SchemaSource


@dataclass(frozen=True, slots=True)
class SchemaCheck:
    """Outcome of checking one schema directory's document and templates."""

    name: str
    path: Path
    issues: tuple[str, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.issues


# =============================================================================
# Change Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class ChangeMetadata:
    """Contents of a change folder's ``.specflow.yaml`` file."""

    schema: str
    created: date | None = None


@dataclass(frozen=True, slots=True)
class ChangeContext:
    """Graph and completion state for one change, computed per invocation.

    Attributes:
        graph: Dependency graph of the change's schema.
        completed: Artifact IDs whose outputs exist on disk.
        schema_name: Name of the schema in use.
        change_name: Name of the change.
        change_dir: Path to the change folder.
        project_root: Path to the project root.
    """

    graph: "ArtifactGraph"
    completed: CompletedSet
    schema_name: str
    change_name: str
    change_dir: Path
    project_root: Path


# =============================================================================
# Status Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class ArtifactStatus:
    """Status of one artifact within a change."""

    id: str
    output_path: str
    state: ArtifactState
    missing_deps: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ChangeStatus:
    """Status of every artifact in a change, ordered by build order."""

    change_name: str
    schema_name: str
    is_complete: bool
    apply_requires: tuple[str, ...]
    artifacts: tuple[ArtifactStatus, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class DependencyInfo:
    """A dependency of an artifact, with its completion state."""

    id: str
    done: bool
    path: str
    description: str


@dataclass(frozen=True, slots=True)
class ArtifactInstructions:
    """Everything needed to produce one artifact of a change."""

    change_name: str
    artifact_id: str
    schema_name: str
    change_dir: Path
    output_path: str
    description: str
    instruction: str | None
    template: str
    dependencies: tuple[DependencyInfo, ...]
    unlocks: tuple[str, ...]
