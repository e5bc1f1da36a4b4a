"""
Tagged failure model.

from_exception() converts a raised error into exactly one of
ValidationFailure, TypedHttpFailure or UnhandledFailure. All probing of
error shapes happens here, once, at the framework boundary; the
classifier only switches on the resulting type.

Recognised validation shapes:
- pydantic.ValidationError (entries from .errors())
- errors tagged code == "VALIDATION" whose message is the JSON document
  {"type": "validation", "errors": [{"path", "message", "value"}, ...]}
"""

import json
import traceback
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from .exceptions import VALIDATION_CODE, HttpError, validation_error_code

UNKNOWN_ERROR = "Unknown error"

_JSON_SCALARS = (str, int, float, bool, type(None))


@dataclass(frozen=True)
class ValidationIssue:
    """One failed validation rule."""

    field_path: str
    message: str
    value: Any = None

    def __post_init__(self):
        object.__setattr__(self, "field_path", self.field_path.lstrip("/."))

    def to_detail(self) -> dict:
        return {"field": self.field_path, "message": self.message, "value": self.value}


@dataclass(frozen=True)
class ValidationFailure:
    issues: Tuple[ValidationIssue, ...]


@dataclass(frozen=True)
class TypedHttpFailure:
    status: int
    body: Any
    error: HttpError


@dataclass(frozen=True)
class UnhandledFailure:
    name: str
    message: str
    stack: Optional[str]


Failure = Union[ValidationFailure, TypedHttpFailure, UnhandledFailure]


def _jsonable(value: Any) -> Any:
    """Coerce a rejected input into something a JSON response can carry."""
    if isinstance(value, _JSON_SCALARS):
        return value
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return str(value)


def _issues_from_pydantic(error: PydanticValidationError) -> List[ValidationIssue]:
    return [
        ValidationIssue(
            field_path=".".join(str(part) for part in entry.get("loc", ())),
            message=entry.get("msg", ""),
            value=_jsonable(entry.get("input")),
        )
        for entry in error.errors()
    ]


def parse_validation_message(message: str) -> Optional[List[ValidationIssue]]:
    """
    Parse the JSON validation document carried in an error message.

    Returns:
        List of issues, or None if the message is not valid JSON or not
        of the expected {"type": "validation", "errors": [...]} shape
    """
    try:
        payload = json.loads(message)
    except (TypeError, ValueError):
        return None

    if not isinstance(payload, dict) or payload.get("type") != "validation":
        return None
    errors = payload.get("errors")
    if not isinstance(errors, list):
        return None

    issues = []
    for entry in errors:
        if not isinstance(entry, dict):
            return None
        path = entry.get("path", entry.get("field", ""))
        issues.append(ValidationIssue(
            field_path=str(path) if path is not None else "",
            message=str(entry.get("message", "")),
            value=_jsonable(entry.get("value")),
        ))
    return issues


def unhandled_message(error: BaseException) -> str:
    """
    Message to log for an unhandled exception.

    JSON-looking messages are never logged; the exception's class name
    is used instead.
    """
    message = str(error)
    if not message:
        return UNKNOWN_ERROR
    if message.lstrip().startswith("{"):
        return type(error).__name__ or UNKNOWN_ERROR
    return message


def format_stack(error: BaseException) -> Optional[str]:
    """Formatted traceback of an exception, or None if it was never raised."""
    if error.__traceback__ is None:
        return None
    return "".join(traceback.format_exception(type(error), error, error.__traceback__)).rstrip()


def _unhandled(error: BaseException) -> UnhandledFailure:
    return UnhandledFailure(
        name=type(error).__name__,
        message=unhandled_message(error),
        stack=format_stack(error),
    )


def from_exception(error: BaseException) -> Failure:
    """
    Convert a raised error into a tagged failure.

    Order: validation, typed HTTP error, everything else. A validation
    tag with a malformed message degrades to UnhandledFailure.

    Example:
        >>> from_exception(HttpError.not_found("dd"))
        TypedHttpFailure(status=404, body='dd', error=HttpError(status=404, body='dd'))
    """
    if isinstance(error, PydanticValidationError):
        return ValidationFailure(tuple(_issues_from_pydantic(error)))

    if validation_error_code(error) == VALIDATION_CODE:
        issues = parse_validation_message(str(error))
        if issues is None:
            return _unhandled(error)
        return ValidationFailure(tuple(issues))

    if isinstance(error, HttpError):
        return TypedHttpFailure(status=error.status, body=error.body, error=error)

    return _unhandled(error)
