"""
Pytest configuration and fixtures for request-logger-core tests.
"""

import io

import pytest

from request_logger.core.clock import ClockService
from request_logger.core.config import LoggerOptions
from request_logger.core.logging.formatters import strip_ansi
from request_logger.core.logging.logger import Logger

FIXED_TIMESTAMP = "10/19/2026, 12:00:00 PM"


class FakeClock(ClockService):
    """
    Deterministic clock: time only moves when advance() is called.

    Example:
        def test_duration(fake_clock):
            start = fake_clock.now()
            fake_clock.advance(0.0125)
            assert fake_clock.now() - start == pytest.approx(0.0125)
    """

    def __init__(self, start: float = 100.0, stamp: str = FIXED_TIMESTAMP):
        self.current = start
        super().__init__(interval=1.0, monotonic=lambda: self.current, render=lambda: stamp)

    def advance(self, seconds: float) -> None:
        self.current += seconds


class LogCapture:
    """Captures the pretty and structured sinks in memory."""

    def __init__(self):
        self.pretty = io.StringIO()
        self.structured = io.StringIO()

    def lines(self):
        """Pretty sink lines with styling stripped."""
        return [strip_ansi(line) for line in self.pretty.getvalue().splitlines()]

    def lines_with(self, text):
        return [line for line in self.lines() if text in line]

    def records(self):
        import json
        return [json.loads(line) for line in self.structured.getvalue().splitlines()]


@pytest.fixture
def fake_clock():
    """Deterministic clock instance."""
    return FakeClock()


@pytest.fixture
def capture():
    """In-memory sinks."""
    return LogCapture()


@pytest.fixture
def make_logger(fake_clock, capture):
    """
    Factory for loggers writing into the capture fixture.

    Example:
        def test_warn(make_logger, capture):
            logger = make_logger(level="warn")
            logger.warn("careful")
            assert capture.lines_with("careful")
    """
    created = []

    def factory(options=None, **kwargs):
        if options is None:
            options = LoggerOptions.create(**kwargs)
        logger = Logger(
            options,
            clock=fake_clock,
            stream=capture.pretty,
            structured_stream=capture.structured,
            error_stream=capture.pretty,
        )
        created.append(logger)
        return logger

    yield factory

    for logger in created:
        logger.close()
