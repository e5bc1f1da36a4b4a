"""
Pydantic settings for environment configuration.

Reads REQUEST_LOGGER_* variables and an optional .env file.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggerSettings(BaseSettings):
    """
    Logger options from environment variables.

    Reads from:
    1. Environment variables (REQUEST_LOGGER_*)
    2. .env file
    3. Defaults

    Example .env file:
        REQUEST_LOGGER_LEVEL=debug
        REQUEST_LOGGER_TRANSPORT=json
        REQUEST_LOGGER_FILE=/var/log/app.jsonl
        REQUEST_LOGGER_LOG_DETAILS=true
        REQUEST_LOGGER_LOG_REQUEST_ID=false

    Usage:
        >>> settings = LoggerSettings()
        >>> settings.level
        'info'
    """

    model_config = SettingsConfigDict(
        env_prefix='REQUEST_LOGGER_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    context: Optional[str] = None
    enabled: bool = True
    level: Literal["fatal", "error", "warn", "info", "debug", "trace"] = "info"
    transport: Literal["pretty", "structured", "console", "json"] = "pretty"
    auto_logging: bool = True
    file: Optional[str] = None
    log_request_start: bool = True
    log_details: bool = False
    log_request_id: bool = True
    app_label: str = "Starlette"
    timestamp_interval: float = Field(default=1.0, gt=0)
    redact_details: bool = True
    request_id_header: Optional[str] = None
    log_startup: bool = True

    @field_validator('level', 'transport', mode='before')
    @classmethod
    def lowercase(cls, v):
        """Accept LEVEL=INFO as well as level=info."""
        return v.lower() if isinstance(v, str) else v

    @field_validator('file', 'context', 'request_id_header', mode='before')
    @classmethod
    def empty_is_none(cls, v):
        """REQUEST_LOGGER_FILE= (empty) means no file."""
        if isinstance(v, str) and not v.strip():
            return None
        return v
