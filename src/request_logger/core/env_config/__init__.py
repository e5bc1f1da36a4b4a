"""
Environment and file based configuration.

Example:
    >>> from request_logger.core.env_config import load_from_env, ConfigFileLoader
    >>> options = load_from_env()                         # REQUEST_LOGGER_* / .env
    >>> options = ConfigFileLoader.from_file("logging.yaml")
"""

from .settings import LoggerSettings
from .loader import load_from_env, describe_options
from .file_loader import ConfigFileLoader, ConfigValidationError

__all__ = [
    "LoggerSettings",
    "load_from_env",
    "describe_options",
    "ConfigFileLoader",
    "ConfigValidationError",
]
