from collections.abc import Callable

import pytest
from rich.console import Console

from specflow.cli import create_app
from specflow.cli._commands._context import CLIContext

from tests.conftest import SpecflowProject


@pytest.fixture
def specflow_cli(console: Console, specflow_project: SpecflowProject) -> Callable[..., int]:
    """Create CLI app for testing that returns the exit code.

    Every invocation goes through the global options with
    ``--project-root`` pointing at ``specflow_project``.
    """
    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        """Run CLI app and return exit code (0 if no SystemExit)."""
        try:
            app.meta(["--project-root", str(specflow_project.root), *args])
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0
        finally:
            CLIContext.reset()

    return _run
