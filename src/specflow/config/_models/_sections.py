"""Pydantic models for the ``[logging]``, ``[workflow]`` and ``[sync]`` tables."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from specflow.config._models._common import LogFormat, LogLevel

_SECTION_CONFIG = ConfigDict(frozen=True, extra="ignore")


class LoggingConfig(BaseModel):
    """Where and how the CLI writes its structured log.

    Attributes:
        level: Minimum level written.
        format: ``json`` lines or plain ``text``.
        file: Log file path. Empty writes ``cli.log`` in the per-user log directory.
    """

    model_config: ClassVar[ConfigDict] = _SECTION_CONFIG

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""


class WorkflowConfiguration(BaseModel):
    """Artifact workflow settings."""

    model_config: ClassVar[ConfigDict] = _SECTION_CONFIG

    default_schema: str = Field(
        default="spec-driven",
        min_length=1,
        description="Schema used for changes without a metadata file.",
    )
    schemas_dir: str = Field(
        default="",
        description=(
            "User-level schema override directory. Empty uses the platform "
            "user data directory."
        ),
    )


class SyncConfiguration(BaseModel):
    model_config: ClassVar[ConfigDict] = _SECTION_CONFIG

    validate_: bool = Field(
        default=True,
        alias="validate",
        description="Run structural validation on rebuilt specs before writing.",
    )
