"""
Configuration for Request Logger.

All options are immutable (frozen dataclass) and supplied once at
construction.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional

from .exceptions import ConfigurationError

# Display-string override: (level_name, message, context) -> line
FormatterFunc = Callable[[str, str, str], str]


class LogLevel(str, Enum):
    """Threshold levels, most severe first."""
    FATAL = "fatal"
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"

    @property
    def severity(self) -> int:
        """Numeric severity, aligned with stdlib logging numbers."""
        return _SEVERITY[self]


_SEVERITY = {
    LogLevel.FATAL: 50,
    LogLevel.ERROR: 40,
    LogLevel.WARN: 30,
    LogLevel.INFO: 20,
    LogLevel.DEBUG: 10,
    LogLevel.TRACE: 5,
}


class Transport(str, Enum):
    """Sink selection."""
    PRETTY = "pretty"
    STRUCTURED = "structured"


_TRANSPORT_ALIASES = {
    "console": Transport.PRETTY,
    "pretty": Transport.PRETTY,
    "json": Transport.STRUCTURED,
    "structured": Transport.STRUCTURED,
}

_LEVEL_ALIASES = {
    "warning": LogLevel.WARN,
    "critical": LogLevel.FATAL,
    "verbose": LogLevel.TRACE,
}

# camelCase option names accepted by LoggerOptions.create() / from_dict()
_OPTION_ALIASES = {
    "autoLogging": "auto_logging",
    "logRequestStart": "log_request_start",
    "logDetails": "log_details",
    "logRequestId": "log_request_id",
    "appLabel": "app_label",
    "timestampInterval": "timestamp_interval",
    "redactDetails": "redact_details",
    "requestIdHeader": "request_id_header",
    "logStartup": "log_startup",
}


def parse_level(value: Any) -> LogLevel:
    """
    Convert a string (or LogLevel) into LogLevel.

    Accepts the stdlib spellings "warning" and "critical" as well.

    Raises:
        ConfigurationError: If the level is unknown
    """
    if isinstance(value, LogLevel):
        return value
    name = str(value).strip().lower()
    if name in _LEVEL_ALIASES:
        return _LEVEL_ALIASES[name]
    try:
        return LogLevel(name)
    except ValueError:
        raise ConfigurationError(
            f"Unknown log level: {value}. "
            f"Available: {', '.join(level.value for level in LogLevel)}"
        )


def parse_transport(value: Any) -> Transport:
    """
    Convert a string (or Transport) into Transport.

    "console" and "json" are accepted as aliases of pretty and structured.

    Raises:
        ConfigurationError: If the transport is unknown
    """
    if isinstance(value, Transport):
        return value
    transport = _TRANSPORT_ALIASES.get(str(value).strip().lower())
    if transport is None:
        raise ConfigurationError(
            f"Unknown transport: {value}. "
            f"Available: {', '.join(_TRANSPORT_ALIASES)}"
        )
    return transport


@dataclass(frozen=True)
class LoggerOptions:
    """
    Options for the Logger and the request lifecycle hooks.

    Attributes:
        context: Default context label (falls back to "default")
        enabled: Master switch; False turns every log call into a no-op
        level: Minimum level that is written
        transport: pretty (coloured lines) or structured (JSON lines)
        formatter: Optional display-string override (level, message, context) -> str
        auto_logging: Log request start/completion automatically
        file: Path of the structured sink file (activates the structured sink)
        log_request_start: Log a line when a request arrives
        log_details: Append query, path params and body to completion lines
        log_request_id: Generate correlation IDs and prefix lines with 8 chars
        app_label: Label shown as [<app_label>] in pretty lines
        timestamp_interval: Refresh period of the cached timestamp (seconds)
        redact_details: Mask sensitive keys (password, token, ...) in details
        request_id_header: Response header that echoes the correlation ID
        log_startup: Log startup line and route table on ASGI startup

    Example:
        >>> options = LoggerOptions.create(
        ...     level="debug",
        ...     transport="json",
        ...     file="/var/log/app.jsonl",
        ...     logDetails=True,
        ... )
    """

    context: Optional[str] = None
    enabled: bool = True
    level: LogLevel = LogLevel.INFO
    transport: Transport = Transport.PRETTY
    formatter: Optional[FormatterFunc] = None
    auto_logging: bool = True
    file: Optional[str] = None
    log_request_start: bool = True
    log_details: bool = False
    log_request_id: bool = True
    app_label: str = "Starlette"
    timestamp_interval: float = 1.0
    redact_details: bool = True
    request_id_header: Optional[str] = None
    log_startup: bool = True

    def __post_init__(self):
        """Validation."""
        if not isinstance(self.level, LogLevel):
            raise ConfigurationError("level must be a LogLevel (use LoggerOptions.create for strings)")
        if not isinstance(self.transport, Transport):
            raise ConfigurationError("transport must be a Transport (use LoggerOptions.create for strings)")
        if self.formatter is not None and not callable(self.formatter):
            raise ConfigurationError("formatter must be callable")
        if self.timestamp_interval <= 0:
            raise ConfigurationError("timestamp_interval must be positive")
        if self.file is not None and not str(self.file).strip():
            raise ConfigurationError("file must be a non-empty path")

    @property
    def pretty_enabled(self) -> bool:
        """Pretty sink is active unless the structured transport replaces it."""
        return self.transport is Transport.PRETTY

    @property
    def structured_enabled(self) -> bool:
        """Structured sink is active for the structured transport or a file."""
        return self.transport is Transport.STRUCTURED or bool(self.file)

    @classmethod
    def create(cls, **kwargs: Any) -> "LoggerOptions":
        """
        Create LoggerOptions with string values and camelCase aliases.

        Args:
            **kwargs: Any option; level/transport may be strings, and the
                      camelCase spellings (autoLogging, logDetails, ...)
                      are accepted

        Returns:
            LoggerOptions instance

        Raises:
            ConfigurationError: On unknown options or invalid values

        Example:
            >>> LoggerOptions.create(level="WARN", transport="console", autoLogging=False)
        """
        return cls.from_dict(kwargs)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LoggerOptions":
        """Build options from a mapping (config files, env settings)."""
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}

        for key, value in data.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown logger option: {key}")
            values[name] = value

        if "level" in values:
            values["level"] = parse_level(values["level"])
        if "transport" in values:
            values["transport"] = parse_transport(values["transport"])
        if "timestamp_interval" in values:
            values["timestamp_interval"] = float(values["timestamp_interval"])

        return cls(**values)

    def is_enabled_for(self, level: LogLevel) -> bool:
        """True if a call at `level` passes the switch and the threshold."""
        return self.enabled and level.severity >= self.level.severity
