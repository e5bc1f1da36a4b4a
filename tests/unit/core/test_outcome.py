"""
Tests for the tagged failure model.
"""

import json

import pytest
from pydantic import BaseModel, Field, ValidationError

from request_logger.core.exceptions import HttpError, RequestValidationError
from request_logger.core.outcome import (
    TypedHttpFailure,
    UnhandledFailure,
    ValidationFailure,
    ValidationIssue,
    from_exception,
    parse_validation_message,
    unhandled_message,
)


class User(BaseModel):
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    age: int = Field(ge=0)


class TaggedError(Exception):
    code = "VALIDATION"


def raised(error):
    try:
        raise error
    except Exception as caught:
        return caught


class TestValidationIssue:
    """Tests for ValidationIssue."""

    def test_leading_separator_stripped(self):
        assert ValidationIssue("/email", "bad").field_path == "email"
        assert ValidationIssue(".user.name", "bad").field_path == "user.name"

    def test_to_detail(self):
        issue = ValidationIssue("age", "too small", -5)
        assert issue.to_detail() == {"field": "age", "message": "too small", "value": -5}


class TestParseValidationMessage:
    """Tests for parse_validation_message."""

    def test_valid_document(self):
        message = json.dumps({
            "type": "validation",
            "errors": [{"path": "/email", "message": "Expected email", "value": "x"}],
        })

        issues = parse_validation_message(message)

        assert issues == [ValidationIssue("email", "Expected email", "x")]

    def test_field_key_accepted(self):
        message = json.dumps({"type": "validation", "errors": [{"field": "age", "message": "m"}]})
        assert parse_validation_message(message)[0].field_path == "age"

    @pytest.mark.parametrize("message", [
        "not json",
        "[]",
        '{"type": "other", "errors": []}',
        '{"type": "validation"}',
        '{"type": "validation", "errors": ["x"]}',
    ])
    def test_malformed(self, message):
        assert parse_validation_message(message) is None


class TestUnhandledMessage:
    """Tests for unhandled_message."""

    def test_plain_message(self):
        assert unhandled_message(RuntimeError("boom")) == "boom"

    def test_empty_message(self):
        assert unhandled_message(RuntimeError()) == "Unknown error"

    def test_json_message_replaced_by_name(self):
        assert unhandled_message(RuntimeError('{"secret": 1}')) == "RuntimeError"


class TestFromException:
    """Tests for from_exception."""

    def test_pydantic_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            User(email="x", age=-5)

        failure = from_exception(exc_info.value)

        assert isinstance(failure, ValidationFailure)
        assert [issue.field_path for issue in failure.issues] == ["email", "age"]
        assert failure.issues[0].value == "x"
        assert failure.issues[1].value == -5

    def test_nested_pydantic_path(self):
        class Wrapper(BaseModel):
            user: User

        with pytest.raises(ValidationError) as exc_info:
            Wrapper(user={"email": "a@b.co", "age": -1})

        failure = from_exception(exc_info.value)
        assert failure.issues[0].field_path == "user.age"

    def test_tagged_validation_error(self):
        error = RequestValidationError.from_issues([
            {"path": "/email", "message": "Expected email", "value": "x"},
            {"path": "/age", "message": "Expected number >= 0", "value": -5},
        ])

        failure = from_exception(error)

        assert isinstance(failure, ValidationFailure)
        assert len(failure.issues) == 2

    def test_tagged_error_with_malformed_message_is_unhandled(self):
        failure = from_exception(raised(TaggedError("not a document")))

        assert isinstance(failure, UnhandledFailure)
        assert failure.message == "not a document"

    def test_http_error(self):
        error = HttpError.not_found("dd")

        failure = from_exception(error)

        assert isinstance(failure, TypedHttpFailure)
        assert failure.status == 404
        assert failure.body == "dd"
        assert failure.error is error

    def test_generic_exception(self):
        failure = from_exception(raised(RuntimeError("boom")))

        assert isinstance(failure, UnhandledFailure)
        assert failure.name == "RuntimeError"
        assert failure.message == "boom"
        assert "Traceback" in failure.stack
        assert "RuntimeError: boom" in failure.stack

    def test_never_raised_exception_has_no_stack(self):
        failure = from_exception(RuntimeError("boom"))
        assert failure.stack is None
