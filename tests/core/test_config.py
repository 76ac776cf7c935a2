"""Tests for scalebook.core.config and config_schema."""

import json
import os

import pytest
import yaml

from scalebook.core.config import Config
from scalebook.core.exceptions import ConfigurationError


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.get("paths.data_dir").endswith(".scalebook-data")
        assert config.get("storage.key") == "weight-management-app"
        assert config.get("defaults.height") == 170.0
        assert config.get("logging.level") == "WARNING"

    def test_custom_data_dir(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        assert config.get("paths.data_dir") == tmp_dir

    def test_yaml_config_file(self, tmp_config_file):
        config = Config(config_file=tmp_config_file)
        assert config.get("storage.key") == "test-weights"
        assert config.get("defaults.height") == 180

    def test_json_config_file(self, tmp_dir):
        path = os.path.join(tmp_dir, "config.json")
        with open(path, "w") as f:
            json.dump({"logging": {"level": "DEBUG"}}, f)
        assert Config(config_file=path, data_dir=tmp_dir).get("logging.level") == "DEBUG"

    def test_missing_file_uses_defaults(self, tmp_dir):
        config = Config(config_file=os.path.join(tmp_dir, "nope.yaml"), data_dir=tmp_dir)
        assert config.get("storage.key") == "weight-management-app"

    def test_unparseable_file_raises(self, tmp_dir):
        path = os.path.join(tmp_dir, "broken.yaml")
        with open(path, "w") as f:
            f.write("paths: [unclosed\n")
        with pytest.raises(ConfigurationError):
            Config(config_file=path, data_dir=tmp_dir)

    def test_non_mapping_file_raises(self, tmp_dir):
        path = os.path.join(tmp_dir, "list.yaml")
        with open(path, "w") as f:
            yaml.dump([1, 2, 3], f)
        with pytest.raises(ConfigurationError, match="mapping"):
            Config(config_file=path, data_dir=tmp_dir)

    def test_env_overrides_file(self, tmp_config_file, monkeypatch):
        monkeypatch.setenv("SCALEBOOK_STORAGE__KEY", "from-env")
        config = Config(config_file=tmp_config_file)
        assert config.get("storage.key") == "from-env"

    def test_custom_env_prefix(self, monkeypatch, tmp_dir):
        monkeypatch.setenv("MYAPP_LOGGING__LEVEL", "INFO")
        config = Config(env_prefix="MYAPP_", data_dir=tmp_dir)
        assert config.get("logging.level") == "INFO"

    def test_get_missing_key(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        assert config.get("nonexistent.key") is None
        assert config.get("nonexistent.key", "fallback") == "fallback"

    def test_set(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        config.set("custom.nested.value", 42)
        assert config.get("custom.nested.value") == 42

    def test_extra_defaults(self, tmp_dir):
        config = Config(data_dir=tmp_dir, defaults={"defaults": {"height": 165}})
        assert config.get("defaults.height") == 165


class TestValidated:
    def test_typed_values(self, tmp_config_file, tmp_dir):
        settings = Config(config_file=tmp_config_file).validated()
        assert settings.storage.key == "test-weights"
        assert settings.defaults.height == 180.0
        assert str(settings.paths.data_dir) == os.path.join(tmp_dir, "data")

    def test_env_strings_are_coerced(self, monkeypatch, tmp_dir):
        monkeypatch.setenv("SCALEBOOK_DEFAULTS__HEIGHT", "165.5")
        monkeypatch.setenv("SCALEBOOK_LOGGING__LEVEL", "debug")
        settings = Config(data_dir=tmp_dir).validated()
        assert settings.defaults.height == 165.5
        assert settings.logging.level == "DEBUG"

    def test_invalid_height(self, tmp_dir):
        config = Config(data_dir=tmp_dir, defaults={"defaults": {"height": -3}})
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            config.validated()

    def test_invalid_log_level(self, tmp_dir):
        config = Config(data_dir=tmp_dir, defaults={"logging": {"level": "LOUD"}})
        with pytest.raises(ConfigurationError):
            config.validated()

    def test_empty_storage_key(self, tmp_dir):
        config = Config(data_dir=tmp_dir, defaults={"storage": {"key": "  "}})
        with pytest.raises(ConfigurationError):
            config.validated()
