"""
Tests for the configuration file loader.
"""

import json

import pytest

from request_logger.core.config import LogLevel, Transport
from request_logger.core.env_config import ConfigFileLoader, ConfigValidationError
from request_logger.core.env_config.file_loader import CONFIG_FILE_ENV


class TestFromYaml:
    """Tests for YAML loading."""

    def test_section(self, tmp_path):
        config = tmp_path / "logging.yaml"
        config.write_text(
            "request_logger:\n"
            "  level: debug\n"
            "  transport: console\n"
            "  logDetails: true\n"
            "  context: Api\n",
            encoding="utf-8",
        )

        options = ConfigFileLoader.from_yaml(config)

        assert options.level is LogLevel.DEBUG
        assert options.transport is Transport.PRETTY
        assert options.log_details is True
        assert options.context == "Api"

    def test_root_mapping(self, tmp_path):
        config = tmp_path / "logging.yml"
        config.write_text("level: warn\nfile: logs/app.jsonl\n", encoding="utf-8")

        options = ConfigFileLoader.from_file(config)

        assert options.level is LogLevel.WARN
        assert options.file == "logs/app.jsonl"

    def test_invalid_syntax(self, tmp_path):
        config = tmp_path / "bad.yaml"
        config.write_text("level: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigValidationError, match="Invalid YAML"):
            ConfigFileLoader.from_yaml(config)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigFileLoader.from_yaml(tmp_path / "missing.yaml")


class TestFromJson:
    """Tests for JSON loading."""

    def test_load(self, tmp_path):
        config = tmp_path / "logging.json"
        config.write_text(json.dumps({"transport": "json", "autoLogging": False}), encoding="utf-8")

        options = ConfigFileLoader.from_file(config)

        assert options.transport is Transport.STRUCTURED
        assert options.auto_logging is False

    def test_invalid_syntax(self, tmp_path):
        config = tmp_path / "bad.json"
        config.write_text("{", encoding="utf-8")

        with pytest.raises(ConfigValidationError, match="Invalid JSON"):
            ConfigFileLoader.from_json(config)

    def test_empty(self, tmp_path):
        config = tmp_path / "empty.json"
        config.write_text("{}", encoding="utf-8")

        with pytest.raises(ConfigValidationError, match="Empty config"):
            ConfigFileLoader.from_json(config)

    def test_non_mapping_root(self, tmp_path):
        config = tmp_path / "list.json"
        config.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ConfigValidationError, match="mapping"):
            ConfigFileLoader.from_json(config)

    def test_unknown_option(self, tmp_path):
        config = tmp_path / "unknown.json"
        config.write_text(json.dumps({"colour": True}), encoding="utf-8")

        with pytest.raises(ConfigValidationError, match="colour"):
            ConfigFileLoader.from_json(config)

    def test_invalid_level(self, tmp_path):
        config = tmp_path / "level.json"
        config.write_text(json.dumps({"level": "loud"}), encoding="utf-8")

        with pytest.raises(ConfigValidationError, match="Unknown log level"):
            ConfigFileLoader.from_json(config)


class TestFromFile:
    """Tests for format detection and env path."""

    def test_unsupported_suffix(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported config format"):
            ConfigFileLoader.from_file(tmp_path / "logging.toml")

    def test_from_env_path(self, tmp_path, monkeypatch):
        config = tmp_path / "logging.json"
        config.write_text(json.dumps({"level": "error"}), encoding="utf-8")
        monkeypatch.setenv(CONFIG_FILE_ENV, str(config))

        assert ConfigFileLoader.from_env_path().level is LogLevel.ERROR

    def test_from_env_path_unset(self, monkeypatch):
        monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)

        with pytest.raises(ValueError, match=CONFIG_FILE_ENV):
            ConfigFileLoader.from_env_path()
