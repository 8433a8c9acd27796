"""Tests for config module"""

import pytest
import yaml
from agentdeck.core.config import Config, get_config_path, load_config
from agentdeck.core.errors import ConfigError


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "agentdeck" / "config.yaml"


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, config_file):
        config = load_config(config_file)
        assert config.repos == []
        assert config.log_level == "INFO"
        assert config.path == config_file

    def test_reads_repos_and_level(self, config_file):
        config_file.parent.mkdir()
        config_file.write_text("repos:\n  - /a\n  - /b\nlog_level: DEBUG\n")
        config = load_config(config_file)
        assert config.repos == ["/a", "/b"]
        assert config.log_level == "DEBUG"

    def test_empty_file_gives_defaults(self, config_file):
        config_file.parent.mkdir()
        config_file.write_text("")
        assert load_config(config_file).repos == []

    def test_malformed_yaml_raises(self, config_file):
        config_file.parent.mkdir()
        config_file.write_text("repos: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(config_file)

    def test_non_mapping_raises(self, config_file):
        config_file.parent.mkdir()
        config_file.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(config_file)

    def test_duplicate_repo_raises(self, config_file):
        config_file.parent.mkdir()
        config_file.write_text("repos:\n  - /a\n  - /a\n")
        with pytest.raises(ConfigError, match="duplicate repo"):
            load_config(config_file)

    def test_empty_repo_entry_raises(self, config_file):
        config_file.parent.mkdir()
        config_file.write_text("repos:\n  - ''\n")
        with pytest.raises(ConfigError, match="invalid repo"):
            load_config(config_file)

    def test_default_path_is_under_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_config_path() == tmp_path / ".agentdeck" / "config.yaml"
        assert load_config().path == tmp_path / ".agentdeck" / "config.yaml"


class TestConfigRepos:
    def test_add_repo(self, config_file):
        config = Config(path=config_file)
        assert config.add_repo("/a") is True
        assert config.add_repo("/a") is False
        assert config.get_repos() == ["/a"]

    def test_remove_repo(self, config_file):
        config = Config(path=config_file, repos=["/a", "/b"])
        assert config.remove_repo("/a") is True
        assert config.remove_repo("/a") is False
        assert config.get_repos() == ["/b"]

    def test_get_repos_returns_copy(self, config_file):
        config = Config(path=config_file, repos=["/a"])
        config.get_repos().append("/b")
        assert config.repos == ["/a"]


class TestConfigSave:
    def test_save_creates_directory_and_round_trips(self, config_file):
        config = Config(path=config_file)
        config.add_repo("/code/app")
        config.save()

        assert yaml.safe_load(config_file.read_text()) == {
            "repos": ["/code/app"],
            "log_level": "INFO",
        }
        assert load_config(config_file).repos == ["/code/app"]

    def test_save_failure_raises_config_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        config = Config(path=blocker / "config.yaml")
        with pytest.raises(ConfigError, match="Failed to save"):
            config.save()
