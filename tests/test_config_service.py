"""Tests for ConfigService."""

from pathlib import Path

from laneboard.models import LaneboardConfig
from laneboard.services import ConfigService


def write_config(root: Path, body: str) -> None:
    (root / "laneboard.yml").write_text(body)


class TestConfigLoading:
    """Tests for loading laneboard.yml."""

    def test_defaults_without_file(self, tmp_path: Path):
        service = ConfigService(tmp_path)
        assert service.get_config() == LaneboardConfig.default()
        assert not service.has_config_error

    def test_loads_values(self, tmp_path: Path):
        write_config(
            tmp_path,
            "database: data/boards.db\ncopy_suffix: ' copy'\ncompact_after_clone: false\n",
        )
        config = ConfigService(tmp_path).get_config()

        assert config.database == "data/boards.db"
        assert config.copy_suffix == " copy"
        assert config.compact_after_clone is False

    def test_invalid_yaml(self, tmp_path: Path):
        write_config(tmp_path, "database: [unclosed\n")
        service = ConfigService(tmp_path)

        assert service.get_config() == LaneboardConfig.default()
        assert service.has_config_error
        assert "Invalid YAML" in service.config_error

    def test_empty_file(self, tmp_path: Path):
        write_config(tmp_path, "")
        service = ConfigService(tmp_path)
        assert service.get_config() == LaneboardConfig.default()
        assert "empty" in service.config_error

    def test_not_a_mapping(self, tmp_path: Path):
        write_config(tmp_path, "- a\n- b\n")
        service = ConfigService(tmp_path)
        service.get_config()
        assert "mapping" in service.config_error

    def test_validation_error(self, tmp_path: Path):
        write_config(tmp_path, "database: /etc/boards.db\n")
        service = ConfigService(tmp_path)

        assert service.get_config().database == "laneboard.db"
        assert service.config_error.startswith("Invalid laneboard.yml")

    def test_blank_suffix_rejected(self, tmp_path: Path):
        write_config(tmp_path, "copy_suffix: '  '\n")
        service = ConfigService(tmp_path)
        assert service.get_config().copy_suffix == " (Copy)"
        assert service.has_config_error


class TestConfigPaths:
    """Tests for path resolution and caching."""

    def test_database_path_relative_to_root(self, tmp_path: Path):
        assert ConfigService(tmp_path).database_path == tmp_path / "laneboard.db"

    def test_memory_database(self, tmp_path: Path):
        write_config(tmp_path, "database: ':memory:'\n")
        assert ConfigService(tmp_path).database_path == ":memory:"

    def test_cached_until_reload(self, tmp_path: Path):
        service = ConfigService(tmp_path)
        service.get_config()
        write_config(tmp_path, "default_board_name: Later\n")

        assert service.get_config().default_board_name == "My Board"
        service.reload()
        assert service.get_config().default_board_name == "Later"
