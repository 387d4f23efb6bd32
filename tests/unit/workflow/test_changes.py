"""Unit tests for change folder management."""

from datetime import date
from pathlib import Path

import pytest

from specflow.exceptions import (
    ChangeExistsError,
    ChangeMetadataError,
    ChangeNotFoundError,
    InvalidChangeNameError,
    SchemaNotFoundError,
)
from specflow.workflow import (
    ChangeMetadata,
    SchemaResolver,
    create_change,
    get_change_dir,
    list_changes,
    read_change_metadata,
    resolve_schema_for_change,
    validate_change_name,
    write_change_metadata,
)

from tests.conftest import SpecflowProject


class TestValidateChangeName:
    @pytest.mark.parametrize("name", ["add-auth", "fix2", "a", "refactor-db-layer", "v2-api"])
    def test_accepts_kebab_case(self, name: str) -> None:
        assert validate_change_name(name) == name

    @pytest.mark.parametrize(
        ("name", "message"),
        [
            ("", "cannot be empty"),
            ("Add-Auth", "must be lowercase"),
            ("add auth", "cannot contain spaces"),
            ("add_auth", "cannot contain underscores"),
            ("-add", "cannot start with a hyphen"),
            ("add-", "cannot end with a hyphen"),
            ("add--auth", "consecutive hyphens"),
            ("add.auth", "only contain lowercase letters"),
            ("2fa", "must start with a letter"),
        ],
    )
    def test_rejects_with_specific_message(self, name: str, message: str) -> None:
        with pytest.raises(InvalidChangeNameError, match=message) as exc_info:
            validate_change_name(name)

        assert exc_info.value.change_name == name


class TestListChanges:
    def test_missing_dir_is_empty(self, tmp_path: Path) -> None:
        assert list_changes(tmp_path / "missing") == []

    def test_excludes_archive_and_hidden(self, specflow_project: SpecflowProject) -> None:
        for name in ("zeta", "alpha", "archive", ".hidden"):
            (specflow_project.changes_dir / name).mkdir()
        (specflow_project.changes_dir / "README.md").write_text("x", encoding="utf-8")

        assert list_changes(specflow_project.changes_dir) == ["alpha", "zeta"]


class TestGetChangeDir:
    def test_returns_existing_change(self, specflow_project: SpecflowProject) -> None:
        change_dir = specflow_project.create_change("add-auth")

        assert get_change_dir(specflow_project.root, "add-auth") == change_dir

    def test_missing_change_lists_available(self, specflow_project: SpecflowProject) -> None:
        specflow_project.create_change("add-auth")

        with pytest.raises(ChangeNotFoundError) as exc_info:
            get_change_dir(specflow_project.root, "remove-auth")

        assert exc_info.value.available == ["add-auth"]
        assert "Available changes: add-auth" in str(exc_info.value)

    def test_invalid_name_rejected_before_lookup(self, specflow_project: SpecflowProject) -> None:
        with pytest.raises(InvalidChangeNameError):
            get_change_dir(specflow_project.root, "../escape")


class TestMetadata:
    def test_round_trips_schema_and_date(self, tmp_path: Path) -> None:
        metadata = ChangeMetadata(schema="spec-driven", created=date(2026, 3, 1))

        path = write_change_metadata(tmp_path, metadata)

        assert path.name == ".specflow.yaml"
        assert read_change_metadata(tmp_path) == metadata

    def test_missing_file_is_none(self, tmp_path: Path) -> None:
        assert read_change_metadata(tmp_path) is None

    def test_unquoted_yaml_date_accepted(self, tmp_path: Path) -> None:
        (tmp_path / ".specflow.yaml").write_text(
            "schema: custom\ncreated: 2026-02-03\n", encoding="utf-8"
        )

        assert read_change_metadata(tmp_path) == ChangeMetadata("custom", date(2026, 2, 3))

    @pytest.mark.parametrize(
        "content",
        ["schema: [unclosed", "- a list\n", "created: 2026-01-01\n", "schema: x\ncreated: soon\n"],
    )
    def test_malformed_metadata_raises(self, tmp_path: Path, content: str) -> None:
        (tmp_path / ".specflow.yaml").write_text(content, encoding="utf-8")

        with pytest.raises(ChangeMetadataError) as exc_info:
            read_change_metadata(tmp_path)

        assert exc_info.value.metadata_path == tmp_path / ".specflow.yaml"


class TestResolveSchemaForChange:
    def test_explicit_wins(self, tmp_path: Path) -> None:
        write_change_metadata(tmp_path, ChangeMetadata(schema="from-metadata"))

        assert resolve_schema_for_change(tmp_path, "explicit.yaml", "default") == "explicit"

    def test_metadata_over_default(self, tmp_path: Path) -> None:
        write_change_metadata(tmp_path, ChangeMetadata(schema="from-metadata"))

        assert resolve_schema_for_change(tmp_path, None, "default") == "from-metadata"

    def test_default_without_metadata(self, tmp_path: Path) -> None:
        assert resolve_schema_for_change(tmp_path, None, "default") == "default"

    def test_malformed_metadata_propagates(self, tmp_path: Path) -> None:
        (tmp_path / ".specflow.yaml").write_text("schema: [", encoding="utf-8")

        with pytest.raises(ChangeMetadataError):
            resolve_schema_for_change(tmp_path, None, "default")


class TestCreateChange:
    def test_creates_folder_with_metadata(self, specflow_project: SpecflowProject) -> None:
        change_dir = create_change(
            specflow_project.root,
            "add-auth",
            schema_name="spec-driven",
            resolver=SchemaResolver(),
            today=date(2026, 5, 4),
        )

        assert change_dir == specflow_project.changes_dir / "add-auth"
        assert read_change_metadata(change_dir) == ChangeMetadata("spec-driven", date(2026, 5, 4))

    def test_existing_change_raises(self, specflow_project: SpecflowProject) -> None:
        specflow_project.create_change("add-auth")

        with pytest.raises(ChangeExistsError) as exc_info:
            create_change(
                specflow_project.root, "add-auth",
                schema_name="spec-driven",
                resolver=SchemaResolver(),
            )

        assert exc_info.value.change_name == "add-auth"

    def test_unknown_schema_raises(self, specflow_project: SpecflowProject) -> None:
        with pytest.raises(SchemaNotFoundError, match="Unknown schema 'nope'"):
            create_change(
                specflow_project.root, "add-auth", schema_name="nope", resolver=SchemaResolver()
            )

        assert not (specflow_project.changes_dir / "add-auth").exists()

    def test_invalid_name_raises(self, specflow_project: SpecflowProject) -> None:
        with pytest.raises(InvalidChangeNameError):
            create_change(
                specflow_project.root, "Add_Auth",
                schema_name="spec-driven",
                resolver=SchemaResolver(),
            )
