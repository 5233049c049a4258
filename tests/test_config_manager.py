import json
import pytest
from config import PathConfig, UcdConfig
from core.utilities.config_manager import ConfigManager


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(PathConfig, "get_config_path", classmethod(lambda cls: path))
    monkeypatch.setattr(ConfigManager, "_instance", None)
    return path


class TestConfigManager:

    def test_defaults_without_file(self, config_path):
        manager = ConfigManager()
        assert manager.get_ucd_base_url() == UcdConfig.BASE_URL
        assert manager.get_log_level() == "WARNING"
        assert manager.get_show_progress() is True
        assert not config_path.exists()

    def test_singleton(self, config_path):
        assert ConfigManager() is ConfigManager()

    def test_settings_persist(self, config_path):
        manager = ConfigManager()
        manager.set_log_level("info")
        manager.set_show_progress(False)
        manager.set_ucd_base_url("file:///srv/ucd/")

        with open(config_path) as f:
            saved = json.load(f)
        assert saved == {
            "ucd_base_url": "file:///srv/ucd/",
            "log_level": "INFO",
            "show_progress": False
        }

    def test_missing_keys_filled_in(self, config_path):
        config_path.write_text(json.dumps({"log_level": "DEBUG"}))
        manager = ConfigManager()
        assert manager.get_log_level() == "DEBUG"
        assert manager.get_ucd_base_url() == UcdConfig.BASE_URL

    def test_unreadable_file_falls_back_to_defaults(self, config_path):
        config_path.write_text("[1, 2")
        assert ConfigManager().settings == ConfigManager.DEFAULT_SETTINGS

    def test_invalid_values_rejected(self, config_path):
        manager = ConfigManager()
        with pytest.raises(ValueError):
            manager.set_log_level("LOUD")
        with pytest.raises(ValueError):
            manager.set_ucd_base_url("ftp://example.org/ucd/")
        assert not config_path.exists()

    def test_unknown_stored_level_ignored(self, config_path):
        config_path.write_text(json.dumps({"log_level": "chatty"}))
        assert ConfigManager().get_log_level() == "WARNING"


class TestUcdConfig:

    def test_file_url(self):
        assert UcdConfig.get_file_url("UnicodeData.txt", "https://example.org/ucd") == \
            "https://example.org/ucd/UnicodeData.txt"
        assert UcdConfig.get_file_url("NameAliases.txt").startswith(UcdConfig.BASE_URL)
