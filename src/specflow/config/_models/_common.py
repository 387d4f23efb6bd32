"""Enums and records shared by the configuration models and loaders."""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any


class LogLevel(StrEnum):
    """Threshold for the CLI log file, most verbose first."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    JSON = "json"
    TEXT = "text"


class ConfigSourceName(StrEnum):
    """Where a layer of configuration came from.

    Declared from highest to lowest precedence; a layer overrides every
    layer listed after it.
    """

    CLI = "cli"
    ENV = "env"
    LOCAL = "local"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """One configuration layer as discovered on disk or in the environment.

    Attributes:
        name: Which layer this is.
        path: The TOML file backing the layer; None for cli, env, and default.
        exists: True when the file exists or the layer carries values.
        values: The raw, unvalidated values of the layer.
    """

    name: ConfigSourceName
    path: Path | None
    exists: bool
    values: dict[str, Any]  # pyright: ignore[reportExplicitAny]
