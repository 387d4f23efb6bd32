"""Spec documents: delta parsing, merging, validation, sync, and archive."""

from ._archive import (
    TASKS_FILE_NAME,
    ArchiveResult,
    TaskProgress,
    archive_change,
    get_archive_path,
    get_task_progress,
    validate_change_deltas,
)
from ._io import read_text, write_text_atomic
from ._merge import apply_operations, build_updated_spec, placeholder_preamble
from ._models import (
    AddRequirement,
    ChangeCounts,
    DeltaKind,
    DeltaOperation,
    IssueLevel,
    MainDocument,
    ModifyRequirement,
    RebuiltSpec,
    RemoveRequirement,
    RenameRequirement,
    RequirementBlock,
    SpecUpdate,
    SyncResult,
    ValidationIssue,
    ValidationReport,
)
from ._parser import parse_delta_spec, parse_main_spec, render_main_spec, split_requirement_blocks
from ._sync import SPEC_FILE_NAME, SpecSyncOrchestrator, find_spec_updates
from ._validator import (
    MIN_PURPOSE_LENGTH,
    PROPOSAL_SUBJECT,
    SpecValidator,
    StructuralValidator,
    validate_delta_spec,
    validate_proposal,
)

__all__ = [
    "MIN_PURPOSE_LENGTH",
    "PROPOSAL_SUBJECT",
    "SPEC_FILE_NAME",
    "TASKS_FILE_NAME",
    "AddRequirement",
    "ArchiveResult",
    "ChangeCounts",
    "DeltaKind",
    "DeltaOperation",
    "IssueLevel",
    "MainDocument",
    "ModifyRequirement",
    "RebuiltSpec",
    "RemoveRequirement",
    "RenameRequirement",
    "RequirementBlock",
    "SpecSyncOrchestrator",
    "SpecUpdate",
    "SpecValidator",
    "StructuralValidator",
    "SyncResult",
    "TaskProgress",
    "ValidationIssue",
    "ValidationReport",
    "apply_operations",
    "archive_change",
    "build_updated_spec",
    "find_spec_updates",
    "get_archive_path",
    "get_task_progress",
    "parse_delta_spec",
    "parse_main_spec",
    "placeholder_preamble",
    "read_text",
    "render_main_spec",
    "split_requirement_blocks",
    "validate_change_deltas",
    "validate_delta_spec",
    "validate_proposal",
    "write_text_atomic",
]
