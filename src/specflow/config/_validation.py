# pyright: reportAny=false, reportExplicitAny=false, reportUnknownArgumentType=false, reportUnknownVariableType=false
"""Checks a merged configuration dictionary against the section models.

Lenient checking ignores keys the models do not know; strict checking
reports each of them as an issue.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from specflow.config._models._sections import (
    LoggingConfig,
    SyncConfiguration,
    WorkflowConfiguration,
)
from specflow.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails

    from specflow.config._models._common import ConfigSource

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class ConfigIssue:
    """A problem with one configuration key.

    Attributes:
        key: Dotted key, such as ``logging.level``.
        message: What is wrong.
        expected: The accepted values or type, when pydantic reports them.
        actual: The offending value.
        source: The configuration layer the value came from, if known.
        severity: Errors stop loading; warnings do not.
    """

    key: str
    message: str
    expected: str | None
    actual: Any
    source: str | None
    severity: Severity


class _Document(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore")

    logging: LoggingConfig = LoggingConfig()
    workflow: WorkflowConfiguration = WorkflowConfiguration()
    sync: SyncConfiguration = SyncConfiguration()


_SECTIONS: dict[str, type[BaseModel]] = {
    "logging": LoggingConfig,
    "workflow": WorkflowConfiguration,
    "sync": SyncConfiguration,
}


def _from_pydantic(error: "ErrorDetails", source: str | None) -> ConfigIssue:
    ctx = error.get("ctx") or {}
    expected: str | None = None
    if "expected" in ctx:
        expected = str(ctx["expected"])
    elif "pattern" in ctx:
        expected = f"pattern: {ctx['pattern']}"

    return ConfigIssue(
        key=".".join(str(part) for part in error.get("loc", ())),
        message=str(error.get("msg", "Validation error")),
        expected=expected,
        actual=error.get("input"),
        source=source,
        severity="error",
    )


def _unknown_keys(config: dict[str, Any]) -> list[ConfigIssue]:
    issues: list[ConfigIssue] = []
    for section, values in config.items():
        model = _SECTIONS.get(section)
        if model is None:
            issues.append(
                ConfigIssue(section, "Unknown configuration section", None, values, None, "error")
            )
            continue
        if not isinstance(values, dict):
            continue
        known = {field.alias or name for name, field in model.model_fields.items()}
        issues.extend(
            ConfigIssue(f"{section}.{key}", "Unknown configuration key", None, value, None, "error")
            for key, value in values.items()
            if key not in known
        )
    return issues


def _check(values: dict[str, Any], source: str | None) -> list[ConfigIssue]:
    try:
        _ = _Document.model_validate(values)
    except ValidationError as e:
        return [_from_pydantic(err, source) for err in e.errors()]
    return []


def validate_config(config: dict[str, Any], *, strict: bool = False) -> list[ConfigIssue]:
    """Return every issue in ``config``; an empty list means it is valid."""
    issues = _check(config, source=None)
    if strict:
        issues.extend(_unknown_keys(config))
    return issues


def validate_source(source: "ConfigSource") -> list[ConfigIssue]:
    """Check one layer on its own, tagging issues with the layer's name."""
    if not source.exists or not source.values:
        return []
    return _check(source.values, source=source.name.value)


def raise_if_validation_errors(issues: list[ConfigIssue], source: str | None = None) -> None:
    """Raise for the first error-severity issue; warnings pass.

    Raises:
        ConfigValidationError: Naming the key, value, and expected value.
    """
    issue = next((i for i in issues if i.severity == "error"), None)
    if issue is None:
        return
    msg = f"Invalid configuration value for '{issue.key}'"
    raise ConfigValidationError(
        msg,
        key=issue.key,
        value=issue.actual,
        expected=issue.expected or issue.message,
        source=source or issue.source,
    )
