"""structlog loggers for specflow.

Every logger is standalone: it is built with ``structlog.wrap_logger`` and
never touches structlog's global configuration, so the CLI and tests can
hold several side by side. Events go to a file, one JSON object per line
or as plain ``key=value`` text.
"""

import logging
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

import structlog

from ._paths import get_specflow_cli_log_file

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger, Processor

LogFormatType = Literal["json", "text"]

DEBUG_ENV = "SPECFLOW_DEBUG"
LEVEL_ENV = "SPECFLOW_LOG_LEVEL"


def _debug_forced() -> bool:
    return bool(getenv(DEBUG_ENV))


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Map ``debug``/``info``/``warning``/``error`` to a level; unknown names give INFO.

    With ``respect_env``, a set SPECFLOW_DEBUG forces DEBUG.
    """
    if respect_env and _debug_forced():
        return logging.DEBUG
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def _get_log_level() -> int:
    """Level from SPECFLOW_DEBUG, then SPECFLOW_LOG_LEVEL, then INFO."""
    return _log_level_from_string(getenv(LEVEL_ENV, "info"), respect_env=True)


def _processors(log_format: LogFormatType) -> list["Processor"]:
    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_format == "json":
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def create_logger(
    log_file_path: str,
    *,
    log_level: int | None = None,
    log_format: LogFormatType = "json",
) -> "FilteringBoundLogger":
    """Create a logger appending to ``log_file_path``.

    The parent directory is created if needed. Without ``log_level`` the
    threshold comes from the environment.
    """
    path = Path(log_file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    level = log_level if log_level is not None else _get_log_level()

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.WriteLoggerFactory(file=path.open("a"))(),
            processors=_processors(log_format),
            wrapper_class=structlog.make_filtering_bound_logger(level),
            context_class=dict,
        ),
    )


def create_cli_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    command: str = "",
) -> "FilteringBoundLogger":
    """Create the logger for one CLI run.

    Args:
        level: Configured threshold; SPECFLOW_DEBUG overrides it.
        log_format: ``json`` or ``text``.
        log_file: Log file path. Empty means ``cli.log`` in the user log directory.
        command: Command name bound to every event, when given.
    """
    logger = create_logger(
        log_file or str(get_specflow_cli_log_file()),
        log_level=_log_level_from_string(level, respect_env=True),
        log_format=log_format,
    )
    return logger.bind(command=command) if command else logger


def create_null_logger() -> "FilteringBoundLogger":
    """Create a logger that drops every event.

    Library entry points fall back to it when the caller passes no logger.
    """
    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.ReturnLogger(),
            processors=[],
            wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
            context_class=dict,
        ),
    )
