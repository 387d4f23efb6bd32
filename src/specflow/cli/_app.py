"""The ``specflow`` command-line application."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from specflow import __version__
from specflow.config import safe_load_config
from specflow.utils._logging import create_cli_logger

from ._commands import register_commands
from ._commands._context import CLIContext

APP_HELP = "Spec-driven change workflow: propose, specify, design, implement, archive."


def _command_name(tokens: tuple[str, ...]) -> str:
    if tokens and not tokens[0].startswith("-"):
        return tokens[0]
    return ""


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the app with its commands and the global-option meta launcher.

    Args:
        console: Console for help and version output.
        error_console: Console for argument errors.
        exit_on_error: Exit on argument errors instead of raising.
    """
    app = App(
        name="specflow",
        help=APP_HELP,
        help_on_error=True,
        version=__version__,
        console=console or Console(),
        error_console=error_console or Console(stderr=True),
        exit_on_error=exit_on_error,
    )
    register_commands(app)

    @app.meta.default
    def _launch(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Write debug events to the log")] = False,
        quiet: Annotated[bool, Parameter(help="Suppress non-essential output")] = False,
        no_color: Annotated[
            bool, Parameter(name="--no-color", negative="", help="Disable colored output")
        ] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        project_root: Annotated[
            Path | None, Parameter(name="--project-root", help="Path to project root")
        ] = None,
    ) -> None:
        """Apply the global options, then run the requested command.

        Args:
            tokens: The command and its arguments.
            verbose: Write debug events to the log.
            quiet: Suppress non-essential output.
            no_color: Disable colored output.
            config: Config file to use instead of the discovered layers.
            project_root: Project root instead of searching upward from the cwd.
        """
        loaded, _ = safe_load_config(
            config_path=config,
            project_root=project_root,
            cli_overrides={"logging": {"level": "debug"}} if verbose else None,
        )
        log_settings = loaded.logging
        logger = create_cli_logger(
            level=log_settings.level.value,
            log_format=log_settings.format.value,  # type: ignore[arg-type]
            log_file=log_settings.file,
            command=_command_name(tokens),
        )

        CLIContext.set_current(
            CLIContext(
                config=loaded,
                quiet=quiet,
                no_color=no_color,
                project_root=project_root,
                logger=logger,
            )
        )
        try:
            app(tokens)
        finally:
            CLIContext.reset()

    return app


def main() -> None:
    """Entry point for the ``specflow`` console script."""
    create_app().meta()


if __name__ == "__main__":
    main()
