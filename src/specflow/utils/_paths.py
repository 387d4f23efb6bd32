from importlib.resources import files
from pathlib import Path

import platformdirs

APP_NAME = "specflow"


def get_specflow_log_dir() -> Path:
    """Get the per-user log directory for specflow."""
    return platformdirs.user_log_path(APP_NAME)


def get_specflow_cli_log_file() -> Path:
    """Get the path to the CLI log file inside the user log directory."""
    return get_specflow_log_dir() / "cli.log"


def get_builtin_schemas_dir() -> Path:
    """Get the directory holding the workflow schemas shipped with the package."""
    return Path(str(files("specflow.workflow").joinpath("schemas")))


def get_project_specflow_dir(project_root: Path) -> Path:
    """Get the specflow/ directory of a project."""
    return project_root / "specflow"


def get_project_schemas_dir(project_root: Path) -> Path:
    """Get the project-local schema override directory."""
    return get_project_specflow_dir(project_root) / "schemas"


def get_specs_dir(project_root: Path) -> Path:
    """Get the directory holding the main specs, one folder per capability."""
    return get_project_specflow_dir(project_root) / "specs"


def get_changes_dir(project_root: Path) -> Path:
    """Get the directory holding active change folders."""
    return get_project_specflow_dir(project_root) / "changes"


def get_archive_dir(project_root: Path) -> Path:
    """Get the directory holding archived change folders."""
    return get_changes_dir(project_root) / "archive"
