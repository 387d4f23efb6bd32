# pyright: reportAny=false, reportExplicitAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Raw configuration layers: TOML files, environment variables, merging."""

import os
import tomllib
from contextlib import suppress
from typing import TYPE_CHECKING, Any

import orjson

from specflow.exceptions import ConfigLoadError

if TYPE_CHECKING:
    from pathlib import Path

ENV_PREFIX = "SPECFLOW_"

# Share the prefix but control the process, not the config
_RESERVED_ENV_KEYS = frozenset({"DEBUG", "STRICT_CONFIG", "LOG_LEVEL"})

_TRUE_WORDS = frozenset({"true", "1"})
_BOOL_WORDS = _TRUE_WORDS | {"false", "0"}


def read_toml_file(path: "Path") -> dict[str, Any]:
    """Parse one TOML configuration file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ConfigLoadError: With the line and column of a syntax error.
    """
    with path.open("rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Failed to parse TOML file: {e}"
            raise ConfigLoadError(msg, path=path, line=e.lineno, column=e.colno) from e


def copy_value(value: Any) -> Any:
    """Copy nested dicts and lists; other values are shared."""
    if isinstance(value, dict):
        return {key: copy_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` overlaid with ``override``, leaving both untouched.

    Tables merge key by key. Any other value in ``override``, lists
    included, replaces the value in ``base``.
    """
    merged = copy_value(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy_value(value)
    return merged


def set_nested_key(d: dict[str, Any], key_path: str, value: Any) -> None:
    """Assign ``value`` at a dotted path, creating tables along the way.

    A scalar sitting where a table is needed is replaced.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "logging.level", "debug")
        >>> d
        {'logging': {'level': 'debug'}}
    """
    *tables, leaf = key_path.split(".")
    current = d
    for table in tables:
        if not isinstance(current.get(table), dict):
            current[table] = {}
        current = current[table]
    current[leaf] = value


def parse_env_value(value: str) -> Any:
    """Coerce an environment string to bool, int, float, or JSON, else keep it."""
    if value.lower() in _BOOL_WORDS:
        return value.lower() in _TRUE_WORDS

    with suppress(ValueError):
        return int(value)

    if "." in value:
        with suppress(ValueError):
            return float(value)

    if value[:1] + value[-1:] in ("[]", "{}"):
        with suppress(orjson.JSONDecodeError):
            return orjson.loads(value)

    return value


def parse_env_vars(prefix: str = ENV_PREFIX) -> dict[str, Any]:
    """Collect ``<prefix>SECTION__KEY`` variables into nested config values.

    ``SPECFLOW_WORKFLOW__DEFAULT_SCHEMA=minimal`` becomes
    ``{"workflow": {"default_schema": "minimal"}}``.
    """
    values: dict[str, Any] = {}
    for name, raw in os.environ.items():
        if not name.startswith(prefix):
            continue
        key = name.removeprefix(prefix)
        if not key or key in _RESERVED_ENV_KEYS:
            continue
        set_nested_key(values, key.replace("__", ".").lower(), parse_env_value(raw))
    return values
