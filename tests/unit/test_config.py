"""Unit tests for configuration loading."""

import json
from pathlib import Path

import pytest

from reading_list.config import AppConfig, load_config


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("READING_LIST_CONFIG", "READING_LIST_DATA_DIR", "READING_LIST_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestAppConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.name == "reading_list"
        assert config.log_level == "INFO"
        assert config.data_dir == Path.home() / ".reading_list"
        assert config.user_prefs_path == config.data_dir / "preferences.json"
        assert config.log_path == config.data_dir / "reading_list.log"

    def test_log_level_is_case_insensitive(self):
        assert AppConfig(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValueError):
            AppConfig(log_level="chatty")

    def test_no_log_file(self):
        assert AppConfig(log_file=None).log_path is None


class TestLoadConfig:
    """Tests for reading the config file and environment."""

    def test_missing_file(self, tmp_path):
        config = load_config(tmp_path / "config.json")
        assert config == AppConfig()

    def test_values_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps({"data_dir": str(tmp_path / "data"), "log_level": "warning"}),
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.data_dir == tmp_path / "data"
        assert config.log_level == "WARNING"

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"log_level": "ERROR"}), encoding="utf-8")
        monkeypatch.setenv("READING_LIST_CONFIG", str(path))
        monkeypatch.setenv("READING_LIST_DATA_DIR", str(tmp_path / "env"))
        monkeypatch.setenv("READING_LIST_LOG_LEVEL", "DEBUG")

        config = load_config()

        assert config.data_dir == tmp_path / "env"
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("content", ["{broken", "[1, 2]", '{"log_level": "chatty"}'])
    def test_malformed_file_gives_defaults(self, tmp_path, content):
        path = tmp_path / "config.json"
        path.write_text(content, encoding="utf-8")
        assert load_config(path) == AppConfig()

    def test_unknown_keys_are_ignored(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"name": "my list", "colour": "blue"}), encoding="utf-8")
        assert load_config(path).name == "my list"
