"""
Configuration loader from environment variables and .env files.
"""

from typing import Any, Optional

from ..config import LoggerOptions
from .settings import LoggerSettings


def load_from_env(env_file: Optional[str] = None, **overrides: Any) -> LoggerOptions:
    """
    Load LoggerOptions from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters
    2. Environment variables (REQUEST_LOGGER_*)
    3. .env file
    4. Defaults

    Args:
        env_file: Custom .env file path (default: ./.env if present)
        **overrides: Explicit option overrides (formatter included)

    Returns:
        LoggerOptions instance

    Example:
        >>> options = load_from_env()
        >>> options = load_from_env(env_file=".env.production", log_details=True)
    """
    if env_file is not None:
        settings = LoggerSettings(_env_file=env_file)
    else:
        settings = LoggerSettings()

    values = settings.model_dump()
    values.update(overrides)
    return LoggerOptions.from_dict(values)


def describe_options(options: LoggerOptions) -> str:
    """
    One-line summary of options.

    Useful for debugging and startup banners.

    Example:
        >>> describe_options(LoggerOptions())
        'level=info transport=pretty file=- auto_logging=True details=False request_id=True'
    """
    return (
        f"level={options.level.value} transport={options.transport.value} "
        f"file={options.file or '-'} auto_logging={options.auto_logging} "
        f"details={options.log_details} request_id={options.log_request_id}"
    )
