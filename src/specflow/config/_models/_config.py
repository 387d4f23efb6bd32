# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""The ``Config`` container: merged layers plus typed section views."""

from typing import TYPE_CHECKING, Any, ClassVar, TypeVar, overload

from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError

from specflow.config._defaults import DEFAULT_CONFIG
from specflow.config._loader import copy_value, deep_merge, parse_env_vars, read_toml_file
from specflow.config._models._common import ConfigSource, ConfigSourceName
from specflow.config._models._sections import (
    LoggingConfig,
    SyncConfiguration,
    WorkflowConfiguration,
)

if TYPE_CHECKING:
    from pathlib import Path
    from typing import Self

T = TypeVar("T")
SectionT = TypeVar("SectionT", bound=BaseModel)


def _section(model: type[SectionT], data: Any) -> SectionT:
    """Build a section model, falling back to defaults for invalid fields."""
    values: dict[str, Any] = data if isinstance(data, dict) else {}
    try:
        return model.model_validate(values)
    except ValidationError as e:
        invalid = {err["loc"][0] for err in e.errors() if err["loc"]}
        return model.model_validate({k: v for k, v in values.items() if k not in invalid})


def _read_layer(source: ConfigSource) -> dict[str, Any]:
    if source.name is ConfigSourceName.ENV:
        return parse_env_vars()
    if source.path is None:
        return source.values
    return read_toml_file(source.path) if source.exists else {}


def _validated(merged: dict[str, Any], source: str | None = None) -> dict[str, Any]:
    from specflow.config._validation import (  # noqa: PLC0415
        raise_if_validation_errors,
        validate_config,
    )

    raise_if_validation_errors(validate_config(merged), source=source)
    return merged


class Config(BaseModel):
    """Immutable merged configuration.

    Build instances with ``load``, ``from_file`` or ``from_dict``. The typed
    sections are exposed as properties; ``get`` reads any dotted key from
    the merged data.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())
    _logging: LoggingConfig = PrivateAttr(default_factory=LoggingConfig)
    _workflow: WorkflowConfiguration = PrivateAttr(default_factory=WorkflowConfiguration)
    _sync: SyncConfiguration = PrivateAttr(default_factory=SyncConfiguration)

    def __init__(
        self,
        *,
        _data: dict[str, Any] | None = None,
        _sources: tuple[ConfigSource, ...] = (),
    ) -> None:
        super().__init__()
        data = _data if _data is not None else copy_value(DEFAULT_CONFIG)
        self._data = data
        self._sources = _sources
        self._logging = _section(LoggingConfig, data.get("logging"))
        self._workflow = _section(WorkflowConfiguration, data.get("workflow"))
        self._sync = _section(SyncConfiguration, data.get("sync"))

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, validate: bool = True) -> "Self":
        """Overlay ``data`` on the defaults.

        Raises:
            ConfigValidationError: If ``validate`` is set and a value is invalid.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        return cls(_data=_validated(merged) if validate else merged)

    @classmethod
    def from_file(cls, path: "Path", *, validate: bool = True) -> "Self":
        """Overlay one TOML file on the defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file is not valid TOML.
            ConfigValidationError: Naming the file, if a value is invalid.
        """
        data = read_toml_file(path)
        merged = deep_merge(DEFAULT_CONFIG, data)
        if validate:
            _ = _validated(merged, source=str(path))
        source = ConfigSource(name=ConfigSourceName.PROJECT, path=path, exists=True, values=data)
        return cls(_data=merged, _sources=(source,))

    @classmethod
    def load(
        cls,
        *,
        project_root: "Path | None" = None,
        include_env: bool = True,
        include_cli: bool = False,
        cli_overrides: dict[str, Any] | None = None,
    ) -> "Self":
        """Merge every layer: defaults, user, project, local, env, then CLI.

        Args:
            project_root: Project root. Searched for upward from the cwd when None.
            include_env: Read ``SPECFLOW_*`` variables.
            include_cli: Apply ``cli_overrides`` as the top layer.
            cli_overrides: Values from command-line flags.

        Raises:
            ConfigLoadError: If a config file is not valid TOML.
            ConfigValidationError: If the merged result is invalid.
        """
        from specflow.config._discovery import discover_sources  # noqa: PLC0415

        discovered = discover_sources(
            project_root=project_root,
            include_env=include_env,
            include_cli=include_cli,
            cli_overrides=cli_overrides,
        )
        loaded = [
            ConfigSource(
                name=source.name,
                path=source.path,
                exists=source.exists,
                values=_read_layer(source),
            )
            for source in discovered
        ]

        merged: dict[str, Any] = {}
        for source in reversed(loaded):
            merged = deep_merge(merged, source.values)

        return cls(_data=_validated(merged), _sources=tuple(loaded))

    @property
    def sources(self) -> list[ConfigSource]:
        """Layers that were consulted, highest precedence first."""
        return list(self._sources)

    @property
    def logging(self) -> LoggingConfig:
        return self._logging

    @property
    def workflow(self) -> WorkflowConfiguration:
        return self._workflow

    @property
    def sync(self) -> SyncConfiguration:
        return self._sync

    @overload
    def get(self, key: str) -> Any: ...

    @overload
    def get(self, key: str, default: T) -> T: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Read a dotted key from the merged data.

        Examples:
            >>> config.get("workflow.default_schema")
            'spec-driven'
            >>> config.get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def to_dict(self) -> dict[str, Any]:
        """Deep copy of the merged data."""
        return copy_value(self._data)
