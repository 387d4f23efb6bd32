# pyright: reportAny=false
"""Workflow schema resolution.

Schemas live in directories named after the schema, each holding a
``schema.yaml`` and an optional ``templates/`` directory. Three layers are
searched, highest precedence first: the project's ``specflow/schemas``, the
user override directory, and the schemas shipped with the package.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated, ClassVar, Final, Self

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from specflow.exceptions import (
    SchemaError,
    SchemaLoadError,
    SchemaNotFoundError,
    TemplateLoadError,
)
from specflow.utils._logging import create_null_logger
from specflow.utils._paths import get_builtin_schemas_dir, get_project_schemas_dir

from ._graph import ArtifactGraph
from ._models import ArtifactDef, Schema, SchemaCheck, SchemaInfo, SchemaSource

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

SCHEMA_FILE_NAME = "schema.yaml"
TEMPLATES_DIR_NAME = "templates"


# =============================================================================
# Schema Document Models
# =============================================================================


class _ArtifactDocument(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    id: Annotated[str, Field(min_length=1)]
    generates: Annotated[str, Field(min_length=1)]
    description: str = ""
    template: Annotated[str, Field(min_length=1)]
    requires: list[str] = Field(default_factory=list)
    instruction: str | None = None


class _ApplyDocument(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    requires: list[str] = Field(default_factory=list)


class _SchemaDocument(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    name: Annotated[str, Field(min_length=1)]
    version: Annotated[int, Field(ge=1)]
    description: str = ""
    artifacts: Annotated[list[_ArtifactDocument], Field(min_length=1)]
    apply: _ApplyDocument | None = None

    @model_validator(mode="after")
    def _check_apply_requires(self) -> Self:
        if self.apply is not None:
            known = {artifact.id for artifact in self.artifacts}
            unknown = [name for name in self.apply.requires if name not in known]
            if unknown:
                msg = f"apply.requires references unknown artifacts: {', '.join(unknown)}"
                raise ValueError(msg)
        return self

    def to_schema(self) -> Schema:
        return Schema(
            name=self.name,
            version=self.version,
            description=self.description,
            artifacts=tuple(
                ArtifactDef(
                    id=artifact.id,
                    generates=artifact.generates,
                    description=artifact.description,
                    template=artifact.template,
                    requires=tuple(artifact.requires),
                    instruction=artifact.instruction,
                )
                for artifact in self.artifacts
            ),
            apply_requires=tuple(self.apply.requires) if self.apply is not None else None,
        )


def parse_schema(content: str, *, schema_path: Path) -> Schema:
    """Parse and validate schema YAML text.

    Args:
        content: Raw YAML text.
        schema_path: Path the text was read from, for error messages.

    Returns:
        The validated schema. Its dependency relation is checked by building
        an ArtifactGraph.

    Raises:
        SchemaLoadError: If the YAML is malformed or the document shape is
            invalid.
        SchemaError: If artifact IDs repeat, dependencies dangle, or the
            dependencies form a cycle.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        msg = f"Failed to parse schema at '{schema_path}': {e}"
        raise SchemaLoadError(msg, schema_path=schema_path, cause=e) from e

    try:
        document = _SchemaDocument.model_validate(data)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        msg = f"Invalid schema at '{schema_path}': {details}"
        raise SchemaLoadError(msg, schema_path=schema_path, cause=e) from e

    schema = document.to_schema()
    _ = ArtifactGraph.from_schema(schema)
    return schema


def check_schema_dir(name: str, schema_dir: Path) -> SchemaCheck:
    """Check that a schema directory parses and ships every artifact template.

    Problems are collected rather than raised. A document that fails to
    load stops the check before templates are looked up.
    """
    schema_path = schema_dir / SCHEMA_FILE_NAME
    if not schema_path.is_file():
        return SchemaCheck(name=name, path=schema_dir, issues=(f"{SCHEMA_FILE_NAME} not found",))

    try:
        schema = parse_schema(schema_path.read_text(encoding="utf-8"), schema_path=schema_path)
    except OSError as e:
        return SchemaCheck(name=name, path=schema_dir, issues=(f"Failed to read file: {e}",))
    except (SchemaLoadError, SchemaError) as e:
        return SchemaCheck(name=name, path=schema_dir, issues=(str(e),))

    templates_dir = schema_dir / TEMPLATES_DIR_NAME
    issues = tuple(
        f"Template file '{artifact.template}' not found for artifact '{artifact.id}'"
        for artifact in schema.artifacts
        if not (templates_dir / artifact.template).is_file()
    )
    return SchemaCheck(name=name, path=schema_dir, issues=issues)


# =============================================================================
# Resolver
# =============================================================================


def normalize_schema_name(name: str) -> str:
    """Strip a trailing ``.yaml`` or ``.yml`` from a schema name."""
    for suffix in (".yaml", ".yml"):
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


class SchemaResolver:
    """Resolves workflow schemas across the project, user, and package layers.

    The user override directory is passed in explicitly; the resolver holds
    no process-wide state.
    """

    __slots__: Final = ("_layers", "_logger")

    _layers: tuple[tuple[SchemaSource, Path], ...]
    _logger: "FilteringBoundLogger"

    def __init__(
        self,
        *,
        project_root: Path | None = None,
        user_schemas_dir: Path | None = None,
        package_schemas_dir: Path | None = None,
        logger: "FilteringBoundLogger | None" = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            project_root: Project root; enables the project-local layer.
            user_schemas_dir: User override directory; the layer is skipped
                when None.
            package_schemas_dir: Built-in schema directory. Defaults to the
                schemas shipped with specflow.
            logger: Logger for resolution events.
        """
        layers: list[tuple[SchemaSource, Path]] = []
        if project_root is not None:
            layers.append((SchemaSource.PROJECT, get_project_schemas_dir(project_root)))
        if user_schemas_dir is not None:
            layers.append((SchemaSource.USER, user_schemas_dir))
        layers.append(
            (SchemaSource.PACKAGE, package_schemas_dir or get_builtin_schemas_dir())
        )
        self._layers = tuple(layers)
        self._logger = logger if logger is not None else create_null_logger()

    @property
    def search_path(self) -> list[tuple[SchemaSource, Path]]:
        """Search layers, highest precedence first."""
        return list(self._layers)

    def _layer_schema_names(self, base_dir: Path) -> list[str]:
        if not base_dir.is_dir():
            return []
        return sorted(
            entry.name
            for entry in base_dir.iterdir()
            if entry.is_dir() and (entry / SCHEMA_FILE_NAME).is_file()
        )

    def _locate(self, name: str) -> tuple[SchemaSource, Path] | None:
        for source, base_dir in self._layers:
            schema_dir = base_dir / name
            if (schema_dir / SCHEMA_FILE_NAME).is_file():
                return source, schema_dir
        return None

    def get_schema_dir(self, name: str) -> Path | None:
        """Return the directory of the highest-precedence schema named ``name``."""
        located = self._locate(normalize_schema_name(name))
        return located[1] if located is not None else None

    def list_schemas(self) -> list[str]:
        """Return the sorted names of schemas available in any layer."""
        names: set[str] = set()
        for _, base_dir in self._layers:
            names.update(self._layer_schema_names(base_dir))
        return sorted(names)

    def resolve(self, name: str) -> Schema:
        """Load, validate, and return the schema named ``name``.

        Raises:
            SchemaNotFoundError: If no layer provides the schema.
            SchemaLoadError: If the schema file cannot be read or is invalid.
            SchemaError: If the dependency relation is unsound.
        """
        normalized = normalize_schema_name(name)
        located = self._locate(normalized)
        if located is None:
            available = self.list_schemas()
            msg = f"Schema '{normalized}' not found. Available schemas: {', '.join(available)}"
            raise SchemaNotFoundError(msg, schema_name=normalized, available=available)

        source, schema_dir = located
        schema_path = schema_dir / SCHEMA_FILE_NAME
        try:
            content = schema_path.read_text(encoding="utf-8")
        except OSError as e:
            msg = f"Failed to read schema at '{schema_path}': {e}"
            raise SchemaLoadError(msg, schema_path=schema_path, cause=e) from e

        schema = parse_schema(content, schema_path=schema_path)
        self._logger.debug(
            "schema_resolved",
            schema=normalized,
            source=source.value,
            path=str(schema_path),
        )
        return schema

    def list_schemas_with_info(self) -> list[SchemaInfo]:
        """Describe every available schema, sorted by name.

        Higher layers shadow lower ones. Schemas that fail to load are
        skipped with a logged warning.
        """
        infos: dict[str, SchemaInfo] = {}
        for source, base_dir in self._layers:
            for name in self._layer_schema_names(base_dir):
                if name in infos:
                    continue
                schema_path = base_dir / name / SCHEMA_FILE_NAME
                try:
                    schema = parse_schema(
                        schema_path.read_text(encoding="utf-8"), schema_path=schema_path
                    )
                except (OSError, SchemaLoadError, SchemaError) as e:
                    self._logger.warning(
                        "schema_skipped", schema=name, path=str(schema_path), error=str(e)
                    )
                    continue
                infos[name] = SchemaInfo(
                    name=name,
                    description=schema.description,
                    artifacts=tuple(artifact.id for artifact in schema.artifacts),
                    source=source,
                )
        return [infos[name] for name in sorted(infos)]

    def check_schema(self, name: str) -> SchemaCheck:
        """Check the highest-precedence schema named ``name``.

        Raises:
            SchemaNotFoundError: If no layer provides the schema.
        """
        normalized = normalize_schema_name(name)
        located = self._locate(normalized)
        if located is None:
            available = self.list_schemas()
            msg = f"Schema '{normalized}' not found. Available schemas: {', '.join(available)}"
            raise SchemaNotFoundError(msg, schema_name=normalized, available=available)
        return check_schema_dir(normalized, located[1])

    def check_layer(self, source: SchemaSource) -> list[SchemaCheck] | None:
        """Check every schema in one search layer, sorted by name.

        Returns None when the layer is not searched or its directory is missing.
        """
        base_dir = next((path for layer, path in self._layers if layer is source), None)
        if base_dir is None or not base_dir.is_dir():
            return None
        checks = [
            check_schema_dir(name, base_dir / name) for name in self._layer_schema_names(base_dir)
        ]
        self._logger.debug(
            "schema_layer_checked",
            source=source.value,
            checked=len(checks),
            invalid=sum(1 for check in checks if not check.valid),
        )
        return checks

    def load_template(self, schema_name: str, template_path: str) -> str:
        """Read a template from a schema's ``templates/`` directory.

        Raises:
            TemplateLoadError: If the schema or template cannot be found or read.
        """
        schema_dir = self.get_schema_dir(schema_name)
        if schema_dir is None:
            msg = f"Schema '{schema_name}' not found"
            raise TemplateLoadError(msg, template_path=template_path)

        full_path = schema_dir / TEMPLATES_DIR_NAME / template_path
        if not full_path.is_file():
            msg = f"Template not found: {full_path}"
            raise TemplateLoadError(msg, template_path=full_path)

        try:
            return full_path.read_text(encoding="utf-8")
        except OSError as e:
            msg = f"Failed to read template: {e}"
            raise TemplateLoadError(msg, template_path=full_path) from e
