"""Mapping of specflow exceptions to CLI exit codes."""

from specflow.exceptions import (
    ArchiveExistsError,
    ArtifactNotFoundError,
    ChangeExistsError,
    ChangeMetadataError,
    ChangeNotFoundError,
    ConfigLoadError,
    ConfigValidationError,
    InvalidChangeNameError,
    MissingRequirementError,
    RequirementConflictError,
    SchemaError,
    SchemaLoadError,
    SchemaNotFoundError,
    SpecIOError,
    SpecParseError,
    SpecWriteError,
    TemplateLoadError,
    ValidationFailureError,
)

from ._shared import ExitCode

__all__ = ["exit_code_for_exception"]


def exit_code_for_exception(exc: BaseException) -> ExitCode:
    """Map exception to appropriate exit code.

    Args:
        exc: The exception to map.

    Returns:
        Exit code corresponding to the exception type.
    """
    # Not found errors -> NOT_FOUND (3)
    if isinstance(
        exc,
        (
            ChangeNotFoundError,
            SchemaNotFoundError,
            ArtifactNotFoundError,
            MissingRequirementError,
        ),
    ):
        return ExitCode.NOT_FOUND

    # Unreadable or malformed inputs -> LOAD_ERROR (1)
    if isinstance(
        exc,
        (
            SchemaLoadError,
            TemplateLoadError,
            ChangeMetadataError,
            SpecParseError,
            ConfigLoadError,
        ),
    ):
        return ExitCode.LOAD_ERROR

    # Validation errors -> VALIDATION_ERROR (2)
    if isinstance(
        exc,
        (
            ValidationFailureError,
            RequirementConflictError,
            SchemaError,
            InvalidChangeNameError,
            ChangeExistsError,
            ArchiveExistsError,
            ConfigValidationError,
        ),
    ):
        return ExitCode.VALIDATION_ERROR

    # I/O errors -> IO_ERROR (4)
    if isinstance(exc, (SpecIOError, SpecWriteError, OSError)):
        return ExitCode.IO_ERROR

    # Everything else -> INTERNAL_ERROR (5)
    return ExitCode.INTERNAL_ERROR
