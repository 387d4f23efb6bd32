"""Shared test fixtures for specflow tests."""

import os
from dataclasses import dataclass
from pathlib import Path

import pytest
from rich.console import Console

MAIN_SPEC = """\
# auth Specification

## Purpose
Authenticate users before they reach protected resources.

## Requirements
### Requirement: Login
The system SHALL authenticate users with a password.

#### Scenario: Valid credentials
- **WHEN** a user submits valid credentials
- **THEN** a session is created

### Requirement: Logout
The system SHALL end the session on logout.

#### Scenario: Logout
- **WHEN** a user logs out
- **THEN** the session is destroyed
"""


def requirement(name: str, text: str = "The system SHALL do it.") -> str:
    """Render a requirement block that passes structural validation."""
    return (
        f"### Requirement: {name}\n"
        f"{text}\n"
        "\n"
        f"#### Scenario: {name} works\n"
        "- **WHEN** it is used\n"
        "- **THEN** it works\n"
    )


@dataclass(frozen=True, slots=True)
class SpecflowProject:
    """Paths for a specflow-enabled test project."""

    root: Path
    specflow_dir: Path
    specs_dir: Path
    changes_dir: Path

    def write_main_spec(self, capability: str, text: str) -> Path:
        path = self.specs_dir / capability / "spec.md"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def create_change(self, name: str, *, schema: str = "spec-driven") -> Path:
        change_dir = self.changes_dir / name
        change_dir.mkdir(parents=True, exist_ok=True)
        (change_dir / ".specflow.yaml").write_text(f"schema: {schema}\n", encoding="utf-8")
        return change_dir

    def write_delta(self, change: str, capability: str, text: str) -> Path:
        path = self.changes_dir / change / "specs" / capability / "spec.md"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Keep tests away from the real user config, data, and log directories."""
    for key in list(os.environ):
        if key.startswith("SPECFLOW_"):
            monkeypatch.delenv(key)

    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(home / ".local" / "share"))
    monkeypatch.setenv("XDG_STATE_HOME", str(home / ".local" / "state"))


@pytest.fixture
def specflow_project(tmp_path: Path) -> SpecflowProject:
    """Create a project with empty specs/ and changes/ directories.

    Structure:
        tmp_path/
            specflow/
                specs/
                changes/
    """
    specflow_dir = tmp_path / "specflow"
    specs_dir = specflow_dir / "specs"
    changes_dir = specflow_dir / "changes"
    specs_dir.mkdir(parents=True)
    changes_dir.mkdir(parents=True)
    return SpecflowProject(
        root=tmp_path,
        specflow_dir=specflow_dir,
        specs_dir=specs_dir,
        changes_dir=changes_dir,
    )


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )
