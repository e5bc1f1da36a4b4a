"""
Logging system for Request Logger.

Provides coloured human-readable output and JSON lines, to the console
and/or a file.

Example:
    >>> from request_logger.core.logging import Logger
    >>> from request_logger.core.config import LoggerOptions
    >>>
    >>> # Quick start with defaults
    >>> logger = Logger()
    >>> logger.log("Hello, World!")
    >>>
    >>> # Pretty console output plus a JSON lines file
    >>> options = LoggerOptions.create(level="debug", file="/var/log/app.jsonl")
    >>> logger = Logger(options)
    >>> logger.debug("Cache warmed", "Startup")
"""

from .logger import Logger, get_logger, configure_logging
from .formatters import (
    DefaultFormatter,
    PrettyFormatter,
    StructuredFormatter,
    get_formatter,
    strip_ansi,
)
from .handlers import create_pretty_handler, create_structured_handler

__all__ = [
    # Logger
    "Logger",
    "get_logger",
    "configure_logging",
    # Formatters
    "DefaultFormatter",
    "PrettyFormatter",
    "StructuredFormatter",
    "get_formatter",
    "strip_ansi",
    # Handlers
    "create_pretty_handler",
    "create_structured_handler",
]
