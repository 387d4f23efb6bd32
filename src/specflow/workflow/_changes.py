# pyright: reportAny=false
"""Change folder management.

A change lives in ``specflow/changes/<name>/``. Its ``.specflow.yaml``
metadata records the workflow schema the change was created with.
"""

import re
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from specflow.exceptions import (
    ChangeExistsError,
    ChangeMetadataError,
    ChangeNotFoundError,
    InvalidChangeNameError,
    SchemaNotFoundError,
)
from specflow.spec._io import write_text_atomic
from specflow.utils._paths import get_changes_dir

from ._models import ChangeMetadata
from ._resolver import normalize_schema_name

if TYPE_CHECKING:
    from ._resolver import SchemaResolver

METADATA_FILE_NAME = ".specflow.yaml"
ARCHIVE_DIR_NAME = "archive"

_KEBAB_CASE = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")

# Checked in order; the first matching mistake names the error
_NAME_MISTAKES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"[A-Z]"), "Change name must be lowercase (use kebab-case)"),
    (re.compile(r"\s"), "Change name cannot contain spaces (use hyphens instead)"),
    (re.compile(r"_"), "Change name cannot contain underscores (use hyphens instead)"),
    (re.compile(r"^-"), "Change name cannot start with a hyphen"),
    (re.compile(r"-$"), "Change name cannot end with a hyphen"),
    (re.compile(r"--"), "Change name cannot contain consecutive hyphens"),
    (
        re.compile(r"[^a-z0-9-]"),
        "Change name can only contain lowercase letters, numbers, and hyphens",
    ),
    (re.compile(r"^[0-9]"), "Change name must start with a letter"),
)


def validate_change_name(name: str) -> str:
    """Check that ``name`` is kebab-case and return it.

    Raises:
        InvalidChangeNameError: With a message naming the specific mistake.
    """
    if not name:
        msg = "Change name cannot be empty"
        raise InvalidChangeNameError(msg, change_name=name)

    if _KEBAB_CASE.match(name):
        return name

    for pattern, message in _NAME_MISTAKES:
        if pattern.search(name):
            raise InvalidChangeNameError(message, change_name=name)

    msg = "Change name must follow kebab-case convention (e.g., add-auth, refactor-db)"
    raise InvalidChangeNameError(msg, change_name=name)


def list_changes(changes_dir: Path) -> list[str]:
    """Return sorted names of active changes, excluding the archive."""
    if not changes_dir.is_dir():
        return []
    return sorted(
        entry.name
        for entry in changes_dir.iterdir()
        if entry.is_dir() and entry.name != ARCHIVE_DIR_NAME and not entry.name.startswith(".")
    )


def get_change_dir(project_root: Path, name: str) -> Path:
    """Return the folder of an existing change.

    Raises:
        InvalidChangeNameError: If ``name`` is not kebab-case.
        ChangeNotFoundError: If the change does not exist.
    """
    _ = validate_change_name(name)
    changes_dir = get_changes_dir(project_root)
    change_dir = changes_dir / name
    if not change_dir.is_dir():
        available = list_changes(changes_dir)
        listing = ", ".join(available) if available else "none"
        msg = f"Change '{name}' not found. Available changes: {listing}"
        raise ChangeNotFoundError(msg, change_name=name, available=available)
    return change_dir


# =============================================================================
# Metadata
# =============================================================================


def read_change_metadata(change_dir: Path) -> ChangeMetadata | None:
    """Read ``.specflow.yaml`` from a change folder.

    Returns:
        The metadata, or None if the file does not exist.

    Raises:
        ChangeMetadataError: If the file cannot be read or is malformed.
    """
    metadata_path = change_dir / METADATA_FILE_NAME
    if not metadata_path.is_file():
        return None

    try:
        content = metadata_path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Failed to read metadata: {e}"
        raise ChangeMetadataError(msg, metadata_path=metadata_path, cause=e) from e

    try:
        data: Any = yaml.safe_load(content)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in metadata file: {e}"
        raise ChangeMetadataError(msg, metadata_path=metadata_path, cause=e) from e

    if not isinstance(data, dict):
        msg = f"Invalid metadata: expected a mapping, got {type(data).__name__}"
        raise ChangeMetadataError(msg, metadata_path=metadata_path)

    schema = data.get("schema")
    if not isinstance(schema, str) or not schema:
        msg = "Invalid metadata: 'schema' must be a non-empty string"
        raise ChangeMetadataError(msg, metadata_path=metadata_path)

    created = data.get("created")
    if isinstance(created, str):
        try:
            created = date.fromisoformat(created)
        except ValueError as e:
            msg = f"Invalid metadata: 'created' is not an ISO date: {created}"
            raise ChangeMetadataError(msg, metadata_path=metadata_path, cause=e) from e
    elif created is not None and not isinstance(created, date):
        msg = "Invalid metadata: 'created' must be a date"
        raise ChangeMetadataError(msg, metadata_path=metadata_path)

    return ChangeMetadata(schema=schema, created=created)


def write_change_metadata(change_dir: Path, metadata: ChangeMetadata) -> Path:
    """Write ``.specflow.yaml`` into a change folder and return its path."""
    data: dict[str, str] = {"schema": metadata.schema}
    if metadata.created is not None:
        data["created"] = metadata.created.isoformat()
    metadata_path = change_dir / METADATA_FILE_NAME
    write_text_atomic(
        metadata_path,
        yaml.safe_dump(data, default_flow_style=False, sort_keys=False),
    )
    return metadata_path


def resolve_schema_for_change(
    change_dir: Path,
    explicit: str | None,
    default: str,
) -> str:
    """Pick a change's schema: explicit name, then metadata, then ``default``.

    Raises:
        ChangeMetadataError: If the metadata file exists but is malformed.
    """
    if explicit:
        return normalize_schema_name(explicit)
    metadata = read_change_metadata(change_dir)
    if metadata is not None:
        return metadata.schema
    return default


def create_change(
    project_root: Path,
    name: str,
    *,
    schema_name: str,
    resolver: "SchemaResolver",
    today: date | None = None,
) -> Path:
    """Create a new change folder with its metadata file.

    Raises:
        InvalidChangeNameError: If ``name`` is not kebab-case.
        SchemaNotFoundError: If ``schema_name`` is not available.
        ChangeExistsError: If the change folder already exists.
    """
    _ = validate_change_name(name)

    normalized = normalize_schema_name(schema_name)
    available = resolver.list_schemas()
    if normalized not in available:
        msg = f"Unknown schema '{normalized}'. Available: {', '.join(available)}"
        raise SchemaNotFoundError(msg, schema_name=normalized, available=available)

    change_dir = get_changes_dir(project_root) / name
    if change_dir.exists():
        msg = f"Change '{name}' already exists at {change_dir}"
        raise ChangeExistsError(msg, change_name=name, path=change_dir)

    change_dir.mkdir(parents=True)
    _ = write_change_metadata(
        change_dir,
        ChangeMetadata(schema=normalized, created=today or date.today()),
    )
    return change_dir
