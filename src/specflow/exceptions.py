"""specflow exceptions."""

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from specflow.spec._models import ValidationReport


class SpecflowError(Exception):
    """Base exception for specflow errors."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(SpecflowError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source


# =============================================================================
# Workflow Exceptions
# =============================================================================


class WorkflowError(SpecflowError):
    """Base exception for artifact workflow errors."""


class SchemaError(WorkflowError, ValueError):
    """Raised when a workflow schema is structurally unsound.

    Covers duplicate artifact IDs, dependencies on unknown artifacts, and
    cyclic dependencies. No graph is ever built from such a schema.

    Attributes:
        artifact_ids: The offending artifact IDs.
        cycle: The artifact IDs forming a cycle, if the error is a cycle.
    """

    def __init__(
        self,
        message: str,
        *,
        artifact_ids: list[str] | None = None,
        cycle: list[str] | None = None,
    ) -> None:
        """Initialize with error message and schema context.

        Args:
            message: Human-readable error message.
            artifact_ids: The offending artifact IDs.
            cycle: The artifact IDs forming a cycle.
        """
        super().__init__(message)
        self.artifact_ids: list[str] = artifact_ids or []
        self.cycle: list[str] | None = cycle


class SchemaNotFoundError(WorkflowError, LookupError):
    """Raised when a schema name resolves in none of the search layers.

    Attributes:
        schema_name: The name that was looked up.
        available: Names of the schemas that do exist.
    """

    def __init__(
        self,
        message: str,
        *,
        schema_name: str,
        available: list[str] | None = None,
    ) -> None:
        """Initialize with error message and lookup context."""
        super().__init__(message)
        self.schema_name: str = schema_name
        self.available: list[str] = available or []


class SchemaLoadError(WorkflowError):
    """Raised when a schema file cannot be read, parsed, or validated.

    Attributes:
        schema_path: Path to the schema file.
        cause: The underlying exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        *,
        schema_path: Path,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and file context."""
        super().__init__(message)
        self.schema_path: Path = schema_path
        self.cause: Exception | None = cause


class TemplateLoadError(WorkflowError):
    """Raised when an artifact template cannot be loaded."""

    def __init__(self, message: str, *, template_path: Path | str) -> None:
        """Initialize with error message and template path."""
        super().__init__(message)
        self.template_path: Path | str = template_path


class ArtifactNotFoundError(WorkflowError, LookupError):
    """Raised when an artifact ID is not part of a schema.

    Attributes:
        artifact_id: The ID that was looked up.
        schema_name: The schema that was searched.
    """

    def __init__(
        self,
        message: str,
        *,
        artifact_id: str,
        schema_name: str | None = None,
    ) -> None:
        """Initialize with error message and artifact context."""
        super().__init__(message)
        self.artifact_id: str = artifact_id
        self.schema_name: str | None = schema_name


class ChangeError(WorkflowError):
    """Base exception for change folder errors."""


class InvalidChangeNameError(ChangeError, ValueError):
    """Raised when a change name is not kebab-case."""

    def __init__(self, message: str, *, change_name: str) -> None:
        """Initialize with error message and the rejected name."""
        super().__init__(message)
        self.change_name: str = change_name


class ChangeNotFoundError(ChangeError, LookupError):
    """Raised when a change folder does not exist.

    Attributes:
        change_name: The change that was looked up.
        available: Names of the active changes.
    """

    def __init__(
        self,
        message: str,
        *,
        change_name: str | None,
        available: list[str] | None = None,
    ) -> None:
        """Initialize with error message and lookup context."""
        super().__init__(message)
        self.change_name: str | None = change_name
        self.available: list[str] = available or []


class ChangeExistsError(ChangeError):
    """Raised when creating a change whose folder already exists."""

    def __init__(self, message: str, *, change_name: str, path: Path) -> None:
        """Initialize with error message and the existing path."""
        super().__init__(message)
        self.change_name: str = change_name
        self.path: Path = path


class ChangeMetadataError(ChangeError):
    """Raised when a change metadata file is unreadable or malformed."""

    def __init__(
        self,
        message: str,
        *,
        metadata_path: Path,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and file context."""
        super().__init__(message)
        self.metadata_path: Path = metadata_path
        self.cause: Exception | None = cause


# =============================================================================
# Specification Exceptions
# =============================================================================


class SpecError(SpecflowError):
    """Base exception for specification sync errors."""


class SpecIOError(SpecError):
    """Raised when a specification file cannot be read or written.

    Attributes:
        path: Path to the file that caused the error.
        operation: The operation that failed ("read", "write", "move").
        cause: The underlying exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path,
        operation: str,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and I/O context.

        Args:
            message: Human-readable error message.
            path: Path to the file that caused the error.
            operation: The operation that failed ("read", "write", "move").
            cause: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.path: Path = path
        self.operation: str = operation
        self.cause: Exception | None = cause


class SpecParseError(SpecError):
    """Raised when delta or main spec markdown cannot be parsed.

    Attributes:
        path: Path to the file that caused the error, if known.
        line: Line number where the parse error occurred.
        content_type: Which document kind failed to parse ("delta", "main").
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        content_type: str,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and parse context.

        Args:
            message: Human-readable error message.
            path: Path to the file that caused the error.
            line: Line number where the parse error occurred.
            content_type: The document kind that failed to parse.
            cause: The underlying exception, if any.
        """
        if path and line:
            location = f"{path}:{line}"
        elif path:
            location = str(path)
        else:
            location = f"line {line}" if line else ""
        super().__init__(f"{location}: {message}" if location else message)
        self.path: Path | None = path
        self.line: int | None = line
        self.content_type: str = content_type
        self.cause: Exception | None = cause


class MissingRequirementError(SpecError, LookupError):
    """Raised when a MODIFIED or RENAMED entry names an absent requirement.

    Attributes:
        requirement: The requirement name that was not found.
        capability: The capability whose main spec was searched.
        operation: The delta operation that referenced it.
    """

    def __init__(
        self,
        message: str,
        *,
        requirement: str,
        capability: str,
        operation: str,
    ) -> None:
        """Initialize with error message and requirement context."""
        super().__init__(message)
        self.requirement: str = requirement
        self.capability: str = capability
        self.operation: str = operation


class RequirementConflictError(SpecError, ValueError):
    """Raised when a RENAMED entry targets a name that already exists."""

    def __init__(
        self,
        message: str,
        *,
        requirement: str,
        capability: str,
        operation: str,
    ) -> None:
        """Initialize with error message and requirement context."""
        super().__init__(message)
        self.requirement: str = requirement
        self.capability: str = capability
        self.operation: str = operation


class ValidationFailureError(SpecError, ValueError):
    """Raised when one or more rebuilt specs fail structural validation.

    Attributes:
        reports: Failing validation reports keyed by capability.
    """

    def __init__(
        self,
        message: str,
        *,
        reports: "dict[str, ValidationReport]",
    ) -> None:
        """Initialize with error message and the failing reports."""
        super().__init__(message)
        self.reports: dict[str, ValidationReport] = reports


class SpecWriteError(SpecError):
    """Raised when the write phase of a sync fails partway through.

    Files written before the failure stay written.

    Attributes:
        written: Target paths that were written successfully.
        failed: Target path whose write failed.
        cause: The underlying exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        *,
        written: list[Path],
        failed: Path,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and write-phase context."""
        super().__init__(message)
        self.written: list[Path] = written
        self.failed: Path = failed
        self.cause: Exception | None = cause


class ArchiveExistsError(SpecError):
    """Raised when the dated archive folder for a change already exists."""

    def __init__(self, message: str, *, archive_path: Path) -> None:
        """Initialize with error message and the existing archive path."""
        super().__init__(message)
        self.archive_path: Path = archive_path
