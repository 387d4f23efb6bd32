"""Configuration loading for the CLI entry point."""

import os
import sys
from typing import TYPE_CHECKING, Never

from specflow.exceptions import ConfigError

from ._models import Config

if TYPE_CHECKING:
    from pathlib import Path

STRICT_CONFIG_ENV = "SPECFLOW_STRICT_CONFIG"


def _fail(message: str) -> Never:
    print(f"Error: {message}", file=sys.stderr)  # noqa: T201
    sys.exit(1)


def safe_load_config(
    *,
    config_path: "Path | None" = None,
    project_root: "Path | None" = None,
    cli_overrides: dict[str, object] | None = None,
) -> tuple[Config, str | None]:
    """Load configuration for a CLI run without crashing on bad config.

    A broken config file or value prints a warning and falls back to the
    defaults, unless ``SPECFLOW_STRICT_CONFIG=1``, which exits with status 1.
    An explicit ``--config`` path that does not exist always exits.

    Returns:
        The configuration and, when defaults were substituted, the reason.
    """
    if config_path is not None and not config_path.exists():
        _fail(f"Config file not found: {config_path}")

    try:
        if config_path is not None:
            config = Config.from_file(config_path)
        else:
            config = Config.load(
                project_root=project_root,
                include_cli=cli_overrides is not None,
                cli_overrides=cli_overrides,
            )
    except (ConfigError, OSError) as e:
        reason = f"Failed to load config: {e}"
        if os.environ.get(STRICT_CONFIG_ENV, "0") == "1":
            _fail(reason)
        print(f"Warning: {reason}", file=sys.stderr)  # noqa: T201
        return Config.from_dict({}), reason
    return config, None
