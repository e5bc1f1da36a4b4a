"""
Main logger for Request Logger.

Combines the display formatter with the pretty and structured sinks and
exposes five leveled entry points.
"""

import logging
import sys
from typing import IO, Optional

from ..clock import ClockService
from ..config import FormatterFunc, LoggerOptions, LogLevel
from .formatters import DEFAULT_CONTEXT, DefaultFormatter, get_formatter
from .handlers import create_pretty_handler, create_structured_handler

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

# Entry point name -> threshold level
_ENTRY_LEVELS = {
    "info": LogLevel.INFO,
    "warn": LogLevel.WARN,
    "error": LogLevel.ERROR,
    "debug": LogLevel.DEBUG,
    "verbose": LogLevel.TRACE,
}


class Logger:
    """
    Leveled logger with a pretty and a structured sink.

    Features:
    - Coloured human-readable lines (pretty sink)
    - JSON lines to stdout or a file (structured sink), or both
    - Custom display formatter strategy
    - Level threshold and master switch with no side effects when off

    Every call is a synchronous format-and-write; the only shared mutable
    value is the clock's cached timestamp.

    Args:
        options: Logger options (uses defaults if None)
        clock: Clock service for timestamps (a private one if None)
        name: Name of the underlying stdlib logger
        stream: Pretty sink stream for records below error (default: sys.stdout)
        error_stream: Pretty sink stream for error records (default: sys.stderr)
        structured_stream: Structured sink stream when no file is set
                           (default: sys.stdout)

    Example:
        >>> logger = Logger(LoggerOptions.create(context="Users"))
        >>> logger.log("Service ready")
        >>> logger.error("Lookup failed", trace, "UserRepository")
    """

    def __init__(
        self,
        options: Optional[LoggerOptions] = None,
        clock: Optional[ClockService] = None,
        name: str = "request_logger.sink",
        stream: Optional[IO[str]] = None,
        structured_stream: Optional[IO[str]] = None,
        error_stream: Optional[IO[str]] = None,
    ):
        self.options = options or LoggerOptions()
        self.clock = clock or ClockService(interval=self.options.timestamp_interval)
        self.name = name
        self._closed = False

        self._formatter: FormatterFunc = self.options.formatter or DefaultFormatter(
            self.clock, app_label=self.options.app_label
        )

        level = self.options.level.severity

        # Private Python logger: not registered with logging.getLogger(),
        # so two Logger instances never share handlers
        self._logger = logging.Logger(name, level)
        self._logger.propagate = False  # Don't propagate to root logger

        if not self.options.enabled:
            return

        if self.options.pretty_enabled:
            # Errors and their traces go to stderr, everything else to stdout
            self._logger.addHandler(create_pretty_handler(
                level=level,
                formatter=get_formatter("pretty"),
                stream=stream,
                below=logging.ERROR,
            ))
            self._logger.addHandler(create_pretty_handler(
                level=max(level, logging.ERROR),
                formatter=get_formatter("pretty"),
                stream=error_stream if error_stream is not None else sys.stderr,
            ))

        if self.options.structured_enabled:
            self._logger.addHandler(create_structured_handler(
                level=level,
                formatter=get_formatter("structured"),
                file_path=self.options.file,
                stream=structured_stream,
            ))

    def is_enabled_for(self, level_name: str) -> bool:
        """True if a call through the given entry point would be written."""
        return self.options.is_enabled_for(_ENTRY_LEVELS[level_name])

    def format_message(self, level_name: str, message: str, context: Optional[str] = None) -> str:
        """Build the display line (custom formatter or default template)."""
        ctx = context or self.options.context or DEFAULT_CONTEXT
        return self._formatter(level_name, message, ctx)

    def _write(
        self,
        level_name: str,
        message: str,
        context: Optional[str],
        trace: Optional[str] = None,
    ) -> None:
        if self._closed or not self.is_enabled_for(level_name):
            return

        # A raising custom formatter propagates to the caller
        display = self.format_message(level_name, message, context)
        self._logger.log(
            _ENTRY_LEVELS[level_name].severity,
            display,
            extra={
                "display": display,
                "level_name": level_name,
                "context": context or self.options.context or DEFAULT_CONTEXT,
                "trace": trace,
            },
        )

    # Leveled entry points

    def log(self, message: str, context: Optional[str] = None) -> None:
        """
        Log info message.

        Example:
            >>> logger.log("GET /users +1.52ms", "Router")
        """
        self._write("info", message, context)

    info = log

    def warn(self, message: str, context: Optional[str] = None) -> None:
        """
        Log warning message.

        Example:
            >>> logger.warn("GET /users/9 - Not Found", "HttpError")
        """
        self._write("warn", message, context)

    warning = warn

    def error(self, message: str, trace: Optional[str] = None, context: Optional[str] = None) -> None:
        """
        Log error message with an optional stack trace.

        The pretty sink prints the trace as a separate line; the
        structured sink stores it in the "trace" field.

        Example:
            >>> logger.error("GET /boom - boom", traceback.format_exc(), "Exception")
        """
        self._write("error", message, context, trace)

    def debug(self, message: str, context: Optional[str] = None) -> None:
        """Log debug message."""
        self._write("debug", message, context)

    def verbose(self, message: str, context: Optional[str] = None) -> None:
        """Log verbose (trace level) message."""
        self._write("verbose", message, context)

    def close(self) -> None:
        """
        Flush and close all handlers.

        Idempotent. Closing releases the file sink; later calls are no-ops.
        """
        if self._closed:
            return

        for handler in self._logger.handlers[:]:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

        self._closed = True

    def __enter__(self):
        """Context manager support."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Close logger on context exit."""
        self.close()
        return False


# Global logger instance (singleton pattern)
_default_logger: Optional[Logger] = None


def get_logger(options: Optional[LoggerOptions] = None) -> Logger:
    """
    Get global logger instance.

    Creates new logger if not exists, or returns existing one.

    Args:
        options: Logger options (only used on first call)

    Returns:
        Logger instance
    """
    global _default_logger

    if _default_logger is None:
        _default_logger = Logger(options)

    return _default_logger


def configure_logging(options: LoggerOptions) -> Logger:
    """
    Configure global logger.

    Replaces existing logger with new options.

    Args:
        options: Logger options

    Returns:
        New Logger instance
    """
    global _default_logger

    if _default_logger is not None:
        _default_logger.close()
    _default_logger = Logger(options)
    return _default_logger
