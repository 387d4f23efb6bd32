"""specflow configuration.

Layered configuration loading, validation, and typed access.

Example:
    >>> from specflow.config import Config
    >>> config = Config.load()
    >>> config.workflow.default_schema
    'spec-driven'
"""

from specflow.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG
from ._discovery import (
    discover_sources,
    find_project_root,
    get_user_config_path,
    get_user_data_dir,
)
from ._load import safe_load_config
from ._loader import deep_merge, parse_env_vars, read_toml_file, set_nested_key
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LoggingConfig,
    LogLevel,
    SyncConfiguration,
    WorkflowConfiguration,
)
from ._validation import (
    ConfigIssue,
    raise_if_validation_errors,
    validate_config,
    validate_source,
)

__all__ = [
    "DEFAULT_CONFIG",
    "Config",
    "ConfigError",
    "ConfigIssue",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "SyncConfiguration",
    "WorkflowConfiguration",
    "deep_merge",
    "discover_sources",
    "find_project_root",
    "get_user_config_path",
    "get_user_data_dir",
    "parse_env_vars",
    "raise_if_validation_errors",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
    "validate_config",
    "validate_source",
]
