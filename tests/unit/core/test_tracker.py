"""
Tests for the request state tracker.
"""

import uuid

import pytest

from request_logger.core.tracker import RequestState, RequestTracker, extract_path


class TestExtractPath:
    """Tests for extract_path."""

    @pytest.mark.parametrize("url, expected", [
        ("http://localhost:8000/users/7?expand=1", "/users/7"),
        ("http://localhost:8000/users/7#top", "/users/7"),
        ("https://example.com/a/b/c", "/a/b/c"),
        ("http://localhost", "/"),
        ("http://localhost?x=1", "/"),
        ("http://localhost/", "/"),
        ("/plain/path?q", "/plain/path"),
        ("http://h/p?next=/other", "/p"),
    ])
    def test_paths(self, url, expected):
        assert extract_path(url) == expected


class TestRequestState:
    """Tests for RequestState."""

    def test_path_resolved_lazily_once(self):
        state = RequestState(start_mark=0.0, url="http://h/users?x=1")

        assert state._resolved_path is None
        assert state.resolved_path == "/users"
        assert state._resolved_path == "/users"

    def test_prefix_with_id(self):
        state = RequestState(0.0, "http://h/", correlation_id="0123456789abcdef")

        assert state.short_id == "01234567"
        assert state.prefix() == "[01234567] "

    def test_prefix_without_id(self):
        state = RequestState(0.0, "http://h/")
        assert state.prefix() == ""


class TestRequestTracker:
    """Tests for RequestTracker.begin."""

    def _tracker(self, make_logger, fake_clock, **kwargs):
        logger = make_logger(**kwargs)
        return RequestTracker(logger, logger.options, fake_clock)

    def test_begin_stamps_start(self, make_logger, fake_clock):
        tracker = self._tracker(make_logger, fake_clock)

        state = tracker.begin("GET", "http://h/")

        assert state.start_mark == fake_clock.now()

    def test_correlation_id(self, make_logger, fake_clock, capture):
        tracker = self._tracker(make_logger, fake_clock)

        state = tracker.begin("GET", "http://h/users")

        uuid.UUID(state.correlation_id)
        line = capture.lines()[0]
        assert line.endswith(f"INFO [Router] [{state.correlation_id[:8]}] GET /users")

    def test_distinct_ids(self, make_logger, fake_clock):
        tracker = self._tracker(make_logger, fake_clock)
        first = tracker.begin("GET", "http://h/")
        second = tracker.begin("GET", "http://h/")
        assert first.correlation_id != second.correlation_id

    def test_no_id(self, make_logger, fake_clock, capture):
        tracker = self._tracker(make_logger, fake_clock, log_request_id=False)

        state = tracker.begin("POST", "http://h/user")

        assert state.correlation_id is None
        assert capture.lines()[0].endswith("INFO [Router] POST /user")

    def test_start_line_disabled(self, make_logger, fake_clock, capture):
        tracker = self._tracker(make_logger, fake_clock, log_request_start=False)

        state = tracker.begin("GET", "http://h/")

        assert capture.pretty.getvalue() == ""
        assert state.correlation_id is not None

    def test_auto_logging_disabled(self, make_logger, fake_clock, capture):
        tracker = self._tracker(make_logger, fake_clock, auto_logging=False)

        tracker.begin("GET", "http://h/")

        assert capture.pretty.getvalue() == ""
