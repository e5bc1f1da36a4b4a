"""Request Logger - request-lifecycle logging middleware with outcome classification."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.clock import ClockService
from .core.config import LoggerOptions, LogLevel, Transport
from .core.exceptions import (
    RequestLoggerException,
    ConfigurationError,
    HttpError,
    HttpStatus,
    RequestValidationError,
    make_http_error,
)
from .core.logging import Logger, get_logger, configure_logging
from .core.tracker import RequestState, RequestTracker, extract_path
from .core.classifier import OutcomeClassifier, ErrorResponse, format_duration
from .core.env_config import load_from_env, ConfigFileLoader
from .middleware import RequestLoggingMiddleware, install

# Library diagnostics go nowhere unless the application configures them
logging.getLogger('request_logger').addHandler(logging.NullHandler())

# Version info - read from package metadata (single source of truth in pyproject.toml)
try:
    __version__ = version("request-logger-core")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__author__ = "Request Logger Contributors"
__license__ = "MIT"

# All public exports
__all__ = [
    # Logger
    "Logger",
    "get_logger",
    "configure_logging",
    "ClockService",

    # Config
    "LoggerOptions",
    "LogLevel",
    "Transport",
    "load_from_env",
    "ConfigFileLoader",

    # Lifecycle
    "RequestState",
    "RequestTracker",
    "OutcomeClassifier",
    "ErrorResponse",
    "extract_path",
    "format_duration",

    # Host adapter
    "RequestLoggingMiddleware",
    "install",

    # Exceptions
    "RequestLoggerException",
    "ConfigurationError",
    "HttpError",
    "HttpStatus",
    "RequestValidationError",
    "make_http_error",

    # Version
    "__version__",
]
