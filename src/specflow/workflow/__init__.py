"""Artifact workflow: schemas, dependency graphs, and change folders."""

from ._changes import (
    METADATA_FILE_NAME,
    create_change,
    get_change_dir,
    list_changes,
    read_change_metadata,
    resolve_schema_for_change,
    validate_change_name,
    write_change_metadata,
)
from ._context import (
    DEFAULT_SCHEMA,
    format_change_status,
    generate_instructions,
    load_change_context,
)
from ._graph import ArtifactGraph
from ._models import (
    ArtifactDef,
    ArtifactInstructions,
    ArtifactState,
    ArtifactStatus,
    BlockedArtifacts,
    ChangeContext,
    ChangeMetadata,
    ChangeStatus,
    CompletedSet,
    DependencyInfo,
    Schema,
    SchemaCheck,
    SchemaInfo,
    SchemaSource,
)
from ._resolver import SchemaResolver, check_schema_dir, normalize_schema_name, parse_schema
from ._state import detect_completed, is_glob_pattern

__all__ = [
    "DEFAULT_SCHEMA",
    "METADATA_FILE_NAME",
    "ArtifactDef",
    "ArtifactGraph",
    "ArtifactInstructions",
    "ArtifactState",
    "ArtifactStatus",
    "BlockedArtifacts",
    "ChangeContext",
    "ChangeMetadata",
    "ChangeStatus",
    "CompletedSet",
    "DependencyInfo",
    "Schema",
    "SchemaCheck",
    "SchemaInfo",
    "SchemaResolver",
    "SchemaSource",
    "check_schema_dir",
    "create_change",
    "detect_completed",
    "format_change_status",
    "generate_instructions",
    "get_change_dir",
    "is_glob_pattern",
    "list_changes",
    "load_change_context",
    "normalize_schema_name",
    "parse_schema",
    "read_change_metadata",
    "resolve_schema_for_change",
    "validate_change_name",
    "write_change_metadata",
]
