"""
Tests for LoggerOptions and level/transport parsing.
"""

import dataclasses

import pytest

from request_logger.core.config import (
    LoggerOptions,
    LogLevel,
    Transport,
    parse_level,
    parse_transport,
)
from request_logger.core.exceptions import ConfigurationError


class TestLogLevel:
    """Tests for LogLevel severities."""

    def test_severity_order(self):
        ordered = [LogLevel.TRACE, LogLevel.DEBUG, LogLevel.INFO,
                   LogLevel.WARN, LogLevel.ERROR, LogLevel.FATAL]
        severities = [level.severity for level in ordered]
        assert severities == sorted(severities)

    def test_aligned_with_stdlib(self):
        import logging
        assert LogLevel.INFO.severity == logging.INFO
        assert LogLevel.WARN.severity == logging.WARNING
        assert LogLevel.FATAL.severity == logging.CRITICAL


class TestParsing:
    """Tests for parse_level and parse_transport."""

    @pytest.mark.parametrize("value, expected", [
        ("info", LogLevel.INFO),
        ("WARN", LogLevel.WARN),
        ("warning", LogLevel.WARN),
        ("critical", LogLevel.FATAL),
        ("verbose", LogLevel.TRACE),
        (" debug ", LogLevel.DEBUG),
        (LogLevel.ERROR, LogLevel.ERROR),
    ])
    def test_parse_level(self, value, expected):
        assert parse_level(value) is expected

    def test_parse_level_unknown(self):
        with pytest.raises(ConfigurationError, match="Unknown log level"):
            parse_level("loud")

    @pytest.mark.parametrize("value, expected", [
        ("pretty", Transport.PRETTY),
        ("console", Transport.PRETTY),
        ("structured", Transport.STRUCTURED),
        ("JSON", Transport.STRUCTURED),
    ])
    def test_parse_transport(self, value, expected):
        assert parse_transport(value) is expected

    def test_parse_transport_unknown(self):
        with pytest.raises(ConfigurationError, match="Unknown transport"):
            parse_transport("syslog")


class TestLoggerOptions:
    """Tests for LoggerOptions."""

    def test_defaults(self):
        options = LoggerOptions()

        assert options.enabled is True
        assert options.level is LogLevel.INFO
        assert options.transport is Transport.PRETTY
        assert options.auto_logging is True
        assert options.log_request_start is True
        assert options.log_details is False
        assert options.log_request_id is True
        assert options.file is None
        assert options.pretty_enabled
        assert not options.structured_enabled

    def test_frozen(self):
        options = LoggerOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.level = LogLevel.DEBUG

    def test_create_with_strings_and_aliases(self):
        options = LoggerOptions.create(
            level="debug",
            transport="json",
            autoLogging=False,
            logRequestStart=False,
            logDetails=True,
            logRequestId=False,
        )

        assert options.level is LogLevel.DEBUG
        assert options.transport is Transport.STRUCTURED
        assert options.auto_logging is False
        assert options.log_request_start is False
        assert options.log_details is True
        assert options.log_request_id is False

    def test_create_unknown_option(self):
        with pytest.raises(ConfigurationError, match="Unknown logger option: colour"):
            LoggerOptions.create(colour=True)

    def test_level_must_be_enum_in_constructor(self):
        with pytest.raises(ConfigurationError):
            LoggerOptions(level="info")

    def test_formatter_must_be_callable(self):
        with pytest.raises(ConfigurationError, match="callable"):
            LoggerOptions(formatter="not callable")

    def test_interval_must_be_positive(self):
        with pytest.raises(ConfigurationError):
            LoggerOptions.create(timestamp_interval=0)

    def test_blank_file_rejected(self):
        with pytest.raises(ConfigurationError):
            LoggerOptions(file="  ")

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            LoggerOptions.create(level="nope")

    def test_file_activates_structured_sink(self):
        """Hybrid: pretty stays on, structured sink writes the file."""
        options = LoggerOptions(file="/tmp/app.jsonl")

        assert options.pretty_enabled
        assert options.structured_enabled

    def test_structured_transport_disables_pretty(self):
        options = LoggerOptions(transport=Transport.STRUCTURED)

        assert not options.pretty_enabled
        assert options.structured_enabled

    def test_is_enabled_for(self):
        options = LoggerOptions(level=LogLevel.WARN)

        assert options.is_enabled_for(LogLevel.ERROR)
        assert options.is_enabled_for(LogLevel.WARN)
        assert not options.is_enabled_for(LogLevel.INFO)

    def test_disabled_blocks_all_levels(self):
        options = LoggerOptions(enabled=False, level=LogLevel.TRACE)
        assert not options.is_enabled_for(LogLevel.FATAL)
