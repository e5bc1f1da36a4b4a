"""Core Request Logger modules."""

from .clock import ClockService, format_timestamp
from .config import LoggerOptions, LogLevel, Transport, parse_level, parse_transport
from .exceptions import (
    RequestLoggerException,
    ConfigurationError,
    HttpError,
    HttpStatus,
    RequestValidationError,
    make_http_error,
)
from .outcome import (
    ValidationIssue,
    ValidationFailure,
    TypedHttpFailure,
    UnhandledFailure,
    from_exception,
)
from .tracker import RequestInfo, RequestState, RequestTracker, extract_path
from .classifier import OutcomeClassifier, ErrorResponse, format_duration

__all__ = [
    # Clock
    "ClockService",
    "format_timestamp",
    # Config
    "LoggerOptions",
    "LogLevel",
    "Transport",
    "parse_level",
    "parse_transport",
    # Exceptions
    "RequestLoggerException",
    "ConfigurationError",
    "HttpError",
    "HttpStatus",
    "RequestValidationError",
    "make_http_error",
    # Failures
    "ValidationIssue",
    "ValidationFailure",
    "TypedHttpFailure",
    "UnhandledFailure",
    "from_exception",
    # Lifecycle
    "RequestInfo",
    "RequestState",
    "RequestTracker",
    "OutcomeClassifier",
    "ErrorResponse",
    "extract_path",
    "format_duration",
]
