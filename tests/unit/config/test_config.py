# pyright: reportAny=false
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from specflow.config import Config, ConfigSourceName, LogFormat, LogLevel
from specflow.exceptions import ConfigLoadError, ConfigValidationError

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


class TestConfigDefaults:
    def test_typed_sections_have_defaults(self) -> None:
        config = Config.from_dict({})

        assert config.logging.level == LogLevel.INFO
        assert config.logging.format == LogFormat.JSON
        assert config.workflow.default_schema == "spec-driven"
        assert config.workflow.schemas_dir == ""
        assert config.sync.validate_ is True

    def test_get_by_dotted_key(self) -> None:
        config = Config.from_dict({"workflow": {"default_schema": "minimal"}})

        assert config.get("workflow.default_schema") == "minimal"
        assert config.get("workflow.missing", "fallback") == "fallback"
        assert config.get("logging.level.deeper") is None

    def test_to_dict_is_a_copy(self) -> None:
        config = Config.from_dict({})

        data = config.to_dict()
        data["logging"]["level"] = "error"

        assert config.get("logging.level") == "info"

    def test_invalid_value_raises(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            _ = Config.from_dict({"logging": {"level": "loud"}})

        assert exc_info.value.key == "logging.level"
        assert exc_info.value.value == "loud"

    def test_empty_default_schema_is_rejected(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            _ = Config.from_dict({"workflow": {"default_schema": ""}})

        assert exc_info.value.key == "workflow.default_schema"

    def test_validation_can_be_skipped(self) -> None:
        config = Config.from_dict({"logging": {"level": "loud"}}, validate=False)

        assert config.logging.level == LogLevel.INFO


class TestConfigFromFile:
    def test_loads_and_merges_with_defaults(self, fs: "FakeFilesystem") -> None:
        path = Path("/project/specflow/config.toml")
        fs.create_file(path, contents='[logging]\nlevel = "debug"\n\n[sync]\nvalidate = false\n')

        config = Config.from_file(path)

        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.format == LogFormat.JSON
        assert config.sync.validate_ is False
        assert [s.name for s in config.sources] == [ConfigSourceName.PROJECT]

    def test_raises_config_load_error_for_invalid_toml(self, fs: "FakeFilesystem") -> None:
        path = Path("/project/specflow/config.toml")
        fs.create_file(path, contents="[logging\n")

        with pytest.raises(ConfigLoadError):
            _ = Config.from_file(path)

    def test_validation_error_names_the_file(self, fs: "FakeFilesystem") -> None:
        path = Path("/project/specflow/config.toml")
        fs.create_file(path, contents='[logging]\nformat = "xml"\n')

        with pytest.raises(ConfigValidationError) as exc_info:
            _ = Config.from_file(path)

        assert exc_info.value.source == str(path)


class TestConfigLoad:
    def test_layers_override_in_precedence_order(
        self, fs: "FakeFilesystem", monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fs.create_file(
            "/project/specflow/config.toml",
            contents='[workflow]\ndefault_schema = "project"\n\n[logging]\nlevel = "warning"\n',
        )
        fs.create_file(
            "/project/specflow/config.local.toml",
            contents='[workflow]\ndefault_schema = "local"\n',
        )
        monkeypatch.setenv("SPECFLOW_LOGGING__FORMAT", "text")

        config = Config.load(
            project_root=Path("/project"),
            include_cli=True,
            cli_overrides={"logging": {"level": "debug"}},
        )

        assert config.workflow.default_schema == "local"
        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.format == LogFormat.TEXT

    def test_env_can_disable_validation(
        self, fs: "FakeFilesystem", monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fs.create_dir("/project/specflow")
        monkeypatch.setenv("SPECFLOW_SYNC__VALIDATE", "false")

        config = Config.load(project_root=Path("/project"))

        assert config.sync.validate_ is False

    def test_sources_listed_highest_first(self, fs: "FakeFilesystem") -> None:
        fs.create_dir("/project/specflow")

        config = Config.load(project_root=Path("/project"), include_env=False)

        assert [s.name for s in config.sources] == [
            ConfigSourceName.LOCAL,
            ConfigSourceName.PROJECT,
            ConfigSourceName.USER,
            ConfigSourceName.DEFAULT,
        ]
