"""Configuration models: the section models and the ``Config`` container."""

from specflow.config._models._common import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
)
from specflow.config._models._config import Config
from specflow.config._models._sections import (
    LoggingConfig,
    SyncConfiguration,
    WorkflowConfiguration,
)

__all__ = [
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "SyncConfiguration",
    "WorkflowConfiguration",
]
