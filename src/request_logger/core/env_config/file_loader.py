"""
Configuration file loader for YAML and JSON files.

Supports loading LoggerOptions from external configuration files. Keys
may use snake_case or the camelCase spellings (autoLogging, logDetails,
...). A top-level "request_logger" section is used when present.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Union

from ..config import LoggerOptions
from ..exceptions import ConfigurationError, RequestLoggerException

CONFIG_FILE_ENV = "REQUEST_LOGGER_CONFIG_FILE"
SECTION = "request_logger"


class ConfigValidationError(RequestLoggerException):
    """Raised when configuration file is invalid."""
    pass


class ConfigFileLoader:
    """
    Loader of logger options from files.

    Supports YAML and JSON formats with automatic format detection.

    Examples:
        >>> options = ConfigFileLoader.from_yaml("logging.yaml")
        >>> options = ConfigFileLoader.from_json("logging.json")
        >>> options = ConfigFileLoader.from_file("logging.yaml")  # Auto-detect
        >>> options = ConfigFileLoader.from_env_path()  # From REQUEST_LOGGER_CONFIG_FILE
    """

    @staticmethod
    def from_yaml(path: Union[str, Path]) -> LoggerOptions:
        """
        Load options from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigValidationError: If the file is invalid
            ImportError: If PyYAML is not installed
        """
        try:
            import yaml
        except ImportError:
            raise ImportError(
                "PyYAML is required to load YAML configs. "
                "Install it with: pip install request-logger-core[yaml] or pip install pyyaml"
            )

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML syntax in {path}: {e}")

        return ConfigFileLoader._build_options(data, str(path))

    @staticmethod
    def from_json(path: Union[str, Path]) -> LoggerOptions:
        """
        Load options from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigValidationError: If the file is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON syntax in {path}: {e}")

        return ConfigFileLoader._build_options(data, str(path))

    @staticmethod
    def from_file(path: Union[str, Path]) -> LoggerOptions:
        """
        Detect the format by extension (.yaml, .yml, .json).

        Raises:
            ValueError: If the format is not supported
        """
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            return ConfigFileLoader.from_yaml(path)
        if suffix == ".json":
            return ConfigFileLoader.from_json(path)

        raise ValueError(
            f"Unsupported config format: {suffix}. Use .yaml, .yml or .json"
        )

    @staticmethod
    def from_env_path() -> LoggerOptions:
        """
        Load options from the file named by REQUEST_LOGGER_CONFIG_FILE.

        Raises:
            ValueError: If the variable is not set
        """
        path = os.environ.get(CONFIG_FILE_ENV)
        if not path:
            raise ValueError(f"{CONFIG_FILE_ENV} environment variable is not set")
        return ConfigFileLoader.from_file(path)

    @staticmethod
    def _build_options(data: Any, source: str) -> LoggerOptions:
        if not data:
            raise ConfigValidationError(f"Empty config file: {source}")
        if not isinstance(data, dict):
            raise ConfigValidationError(f"Config root must be a mapping in {source}")

        section: Dict[str, Any] = data.get(SECTION, data)
        if not isinstance(section, dict):
            raise ConfigValidationError(f"'{SECTION}' section must be a mapping in {source}")

        try:
            return LoggerOptions.from_dict(section)
        except (ConfigurationError, TypeError, ValueError) as e:
            raise ConfigValidationError(f"Invalid logger options in {source}: {e}")
