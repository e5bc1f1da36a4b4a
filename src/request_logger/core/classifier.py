"""
Outcome classifier.

Decides which log shape a finished request gets and, for validation and
typed HTTP errors, which response the host should send.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl

from ..utils.sanitizer import mask_sensitive_data
from .clock import ClockService
from .config import LoggerOptions
from .logging.logger import Logger
from .outcome import (
    TypedHttpFailure,
    UnhandledFailure,
    ValidationFailure,
    from_exception,
)
from .tracker import ROUTER_CONTEXT, RequestInfo, RequestState, extract_path

VALIDATION_CONTEXT = "ValidationError"
HTTP_ERROR_CONTEXT = "HttpError"
EXCEPTION_CONTEXT = "Exception"


@dataclass(frozen=True)
class ErrorResponse:
    """Response the host should send for a classified failure."""

    status: int
    body: Dict[str, Any]


def format_duration(seconds: float) -> str:
    """
    Render a duration.

    Below one millisecond: whole microseconds ("850μs"); otherwise
    milliseconds with two decimals ("12.50ms").

    Examples:
        >>> format_duration(0.00085)
        '850μs'
        >>> format_duration(0.0125)
        '12.50ms'
    """
    ms = seconds * 1000
    if ms < 1:
        return f"{round(ms * 1000)}μs"
    return f"{ms:.2f}ms"


def plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count > 1 else ''}"


def query_params(url: str) -> Dict[str, str]:
    """All query parameters as a flat map; a repeated key keeps its last value."""
    query_start = url.find("?")
    if query_start == -1:
        return {}
    query = url[query_start + 1:].split("#", 1)[0]
    return dict(parse_qsl(query, keep_blank_values=True))


class OutcomeClassifier:
    """
    Logs request completion and classifies failures.

    Args:
        logger: Logger for all outcome lines
        options: Logger options
        clock: Same clock the RequestTracker stamped the start mark with

    Example:
        >>> classifier = OutcomeClassifier(logger, options, clock)
        >>> classifier.complete(state, RequestInfo("GET", "http://localhost/"))
        >>> response = classifier.fail(state, request, HttpError.not_found())
        >>> response.status
        404
    """

    def __init__(self, logger: Logger, options: LoggerOptions, clock: ClockService):
        self.logger = logger
        self.options = options
        self.clock = clock

    # Success

    def build_details(self, request: RequestInfo) -> Dict[str, Any]:
        """Query, path params and body; only the non-empty members."""
        details: Dict[str, Any] = {}

        query = query_params(request.url)
        if query:
            details["query"] = query

        if request.params:
            details["params"] = dict(request.params)

        if request.body is not None:
            details["body"] = request.body

        if details and self.options.redact_details:
            details = mask_sensitive_data(details)
        return details

    def complete(self, state: Optional[RequestState], request: RequestInfo) -> None:
        """Log the completion line of a successfully handled request."""
        if not self.options.auto_logging or state is None:
            return

        duration = format_duration(self.clock.now() - state.start_mark)
        message = f"{state.prefix()}{request.method} {state.resolved_path} +{duration}"

        if self.options.log_details:
            details = self.build_details(request)
            if details:
                message += " " + json.dumps(
                    details, ensure_ascii=False, separators=(",", ":"), default=str
                )

        self.logger.log(message, ROUTER_CONTEXT)

    # Failure

    def fail(
        self,
        state: Optional[RequestState],
        request: RequestInfo,
        error: BaseException,
    ) -> Optional[ErrorResponse]:
        """
        Log a failed request and build its response.

        Returns:
            ErrorResponse for validation and typed HTTP errors, None for
            unhandled exceptions (the host's default response applies)
        """
        path = state.resolved_path if state is not None else extract_path(request.url)
        failure = from_exception(error)

        if isinstance(failure, ValidationFailure):
            return self._validation(request.method, path, failure)
        if isinstance(failure, TypedHttpFailure):
            return self._typed(request.method, path, failure)
        self._unhandled(request.method, path, failure)
        return None

    def _validation(self, method: str, path: str, failure: ValidationFailure) -> ErrorResponse:
        count = len(failure.issues)
        summary = ", ".join(f"{issue.field_path}: {issue.message}" for issue in failure.issues)
        self.logger.warn(
            f"{method} {path} - Validation failed ({plural(count, 'error')}): {summary}",
            VALIDATION_CONTEXT,
        )
        return ErrorResponse(
            status=400,
            body={
                "error": "Validation failed",
                "message": f"Request validation failed with {plural(count, 'error')}",
                "details": [issue.to_detail() for issue in failure.issues],
            },
        )

    def _typed(self, method: str, path: str, failure: TypedHttpFailure) -> ErrorResponse:
        self.logger.warn(f"{method} {path} - {failure.error.message}", HTTP_ERROR_CONTEXT)
        return ErrorResponse(status=failure.status, body=failure.error.to_json())

    def _unhandled(self, method: str, path: str, failure: UnhandledFailure) -> None:
        self.logger.error(f"{method} {path} - {failure.message}", failure.stack, EXCEPTION_CONTEXT)
