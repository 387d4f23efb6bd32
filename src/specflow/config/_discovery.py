"""Where configuration comes from: the project root and the config files.

A project is any directory holding a ``specflow/`` directory. Config files
live at ``specflow/config.toml`` (shared), ``specflow/config.local.toml``
(per checkout), and in the platform's user config directory.
"""

from pathlib import Path
from typing import Any

import platformdirs

from ._defaults import DEFAULT_CONFIG
from ._models._common import ConfigSource, ConfigSourceName

PROJECT_DIR_NAME = "specflow"
APP_NAME = "specflow"

PROJECT_CONFIG_FILE = "config.toml"
LOCAL_CONFIG_FILE = "config.local.toml"


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk up from ``start`` (default: cwd) to the first directory with ``specflow/``."""
    start_dir = (start or Path.cwd()).resolve()
    for candidate in (start_dir, *start_dir.parents):
        if (candidate / PROJECT_DIR_NAME).is_dir():
            return candidate
    return None


def get_user_config_path() -> Path:
    r"""Return the user config file, such as ``~/.config/specflow/config.toml``.

    On macOS this is under ``~/Library/Application Support``, on Windows
    under ``%APPDATA%``. The file need not exist.
    """
    return platformdirs.user_config_path(APP_NAME) / PROJECT_CONFIG_FILE


def get_user_data_dir() -> Path:
    return platformdirs.user_data_path(APP_NAME)


def _file_source(name: ConfigSourceName, path: Path) -> ConfigSource:
    try:
        exists = path.is_file()
    except OSError:
        exists = False
    return ConfigSource(name=name, path=path, exists=exists, values={})


def discover_sources(
    project_root: Path | None = None,
    *,
    include_env: bool = True,
    include_cli: bool = False,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """List the configuration layers, highest precedence first.

    File layers are listed even when the file is missing (``exists=False``);
    their values are read later. The project layers are left out when no
    project root is given or found. Environment values are parsed at load
    time, so the env layer is returned empty.
    """
    sources: list[ConfigSource] = []
    if include_cli:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI,
                path=None,
                exists=bool(cli_overrides),
                values=cli_overrides or {},
            )
        )
    if include_env:
        sources.append(ConfigSource(name=ConfigSourceName.ENV, path=None, exists=True, values={}))

    root = project_root or find_project_root()
    if root is not None:
        specflow_dir = root / PROJECT_DIR_NAME
        sources.append(_file_source(ConfigSourceName.LOCAL, specflow_dir / LOCAL_CONFIG_FILE))
        sources.append(_file_source(ConfigSourceName.PROJECT, specflow_dir / PROJECT_CONFIG_FILE))

    sources.append(_file_source(ConfigSourceName.USER, get_user_config_path()))
    sources.append(
        ConfigSource(name=ConfigSourceName.DEFAULT, path=None, exists=True, values=DEFAULT_CONFIG)
    )
    return sources
