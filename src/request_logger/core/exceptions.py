"""
Exception hierarchy for Request Logger.

Classification at the framework boundary:
- HttpError - typed error raised by handlers, carries its own status
- RequestValidationError - validation failure tagged with code "VALIDATION"
- anything else - unhandled exception, left to the host's default response
"""

import json
from enum import IntEnum
from typing import Any, Dict, Iterable, Mapping, Optional

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RequestLoggerException(Exception):
    """Base exception for Request Logger."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(RequestLoggerException, ValueError):
    """Invalid logger options."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# HTTP ERRORS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HttpStatus(IntEnum):
    """
    Closed set of status codes with a named constructor.

    The phrase is used as the default body.
    """

    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    CONFLICT = 409
    PRECONDITION_FAILED = 412
    UNPROCESSABLE_ENTITY = 422
    TOO_MANY_REQUESTS = 429
    INTERNAL_SERVER_ERROR = 500

    @property
    def phrase(self) -> str:
        """Canonical English name, e.g. 'Not Found'."""
        return self.name.replace("_", " ").title()


class HttpError(RequestLoggerException):
    """
    Typed HTTP error that handlers raise to produce a specific response.

    The value is immutable: status and body cannot be reassigned after
    construction. One class covers every status; use make_http_error() or
    the named classmethods instead of subclassing.

    Args:
        status: HTTP status code (100-599)
        body: Response message, any JSON-serializable value

    Example:
        >>> raise HttpError.not_found("User 42 does not exist")
        >>> HttpError.not_found("dd").to_json()
        {'status': 404, 'message': 'dd'}
    """

    def __init__(self, status: int, body: Any):
        if isinstance(status, bool) or not isinstance(status, int) or not 100 <= status <= 599:
            raise ValueError(f"HTTP status must be an integer in 100..599, got {status!r}")

        self._status = int(status)
        self._body = body
        super().__init__(body if isinstance(body, str) else json.dumps(body, default=str))

    def __setattr__(self, name: str, value: Any) -> None:
        # status and body are frozen once both are set
        if name in ("_status", "_body") and "_body" in self.__dict__:
            raise AttributeError(f"HttpError.{name.lstrip('_')} is read-only")
        super().__setattr__(name, value)

    @property
    def status(self) -> int:
        return self._status

    @property
    def body(self) -> Any:
        return self._body

    def to_json(self) -> Dict[str, Any]:
        """JSON-representable shape: {"status": ..., "message": body}."""
        return {"status": self._status, "message": self._body}

    def to_response(self) -> Dict[str, Any]:
        return self.to_json()

    def __repr__(self) -> str:
        return f"HttpError(status={self._status}, body={self._body!r})"

    # Named constructors

    @classmethod
    def bad_request(cls, body: Any = None) -> "HttpError":
        return make_http_error(HttpStatus.BAD_REQUEST, body)

    @classmethod
    def unauthorized(cls, body: Any = None) -> "HttpError":
        return make_http_error(HttpStatus.UNAUTHORIZED, body)

    @classmethod
    def forbidden(cls, body: Any = None) -> "HttpError":
        return make_http_error(HttpStatus.FORBIDDEN, body)

    @classmethod
    def not_found(cls, body: Any = None) -> "HttpError":
        return make_http_error(HttpStatus.NOT_FOUND, body)

    @classmethod
    def method_not_allowed(cls, body: Any = None) -> "HttpError":
        return make_http_error(HttpStatus.METHOD_NOT_ALLOWED, body)

    @classmethod
    def conflict(cls, body: Any = None) -> "HttpError":
        return make_http_error(HttpStatus.CONFLICT, body)

    @classmethod
    def precondition_failed(cls, body: Any = None) -> "HttpError":
        return make_http_error(HttpStatus.PRECONDITION_FAILED, body)

    @classmethod
    def unprocessable_entity(cls, body: Any = None) -> "HttpError":
        return make_http_error(HttpStatus.UNPROCESSABLE_ENTITY, body)

    @classmethod
    def too_many_requests(cls, body: Any = None) -> "HttpError":
        return make_http_error(HttpStatus.TOO_MANY_REQUESTS, body)

    @classmethod
    def internal_server_error(cls, body: Any = None) -> "HttpError":
        return make_http_error(HttpStatus.INTERNAL_SERVER_ERROR, body)


def make_http_error(status: int, body: Any = None) -> HttpError:
    """
    Build an HttpError.

    Args:
        status: HTTP status code
        body: Response message (defaults to the canonical phrase for
              statuses in HttpStatus, otherwise "Error")

    Returns:
        HttpError instance

    Examples:
        >>> make_http_error(409).to_json()
        {'status': 409, 'message': 'Conflict'}
        >>> make_http_error(418, "I'm a teapot").status
        418
    """
    if body is None:
        try:
            body = HttpStatus(status).phrase
        except ValueError:
            body = "Error"
    return HttpError(status, body)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# VALIDATION
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

VALIDATION_CODE = "VALIDATION"


class RequestValidationError(RequestLoggerException):
    """
    Validation failure reported by a request-parsing layer.

    The message is a JSON document of the form:

        {"type": "validation",
         "errors": [{"path": "/email", "message": "...", "value": "x"}, ...]}

    Classification relies on the ``code`` tag and on that exact shape;
    any other message falls back to the unhandled-exception path.

    Example:
        >>> raise RequestValidationError.from_issues([
        ...     {"path": "/age", "message": "Expected number >= 0", "value": -5},
        ... ])
    """

    code = VALIDATION_CODE

    @classmethod
    def from_issues(cls, issues: Iterable[Mapping[str, Any]]) -> "RequestValidationError":
        """Encode issues into the JSON message shape."""
        payload = {"type": "validation", "errors": [dict(issue) for issue in issues]}
        return cls(json.dumps(payload, default=str))


def validation_error_code(error: BaseException) -> Optional[str]:
    """Return the framework tag of an error, if any."""
    code = getattr(error, "code", None)
    return code if isinstance(code, str) else None
