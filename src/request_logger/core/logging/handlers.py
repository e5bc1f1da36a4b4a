"""
Log handlers for the pretty and structured sinks.

Each handler writes synchronously under its own lock, so records never
interleave. Write failures propagate to the caller instead of being
printed to stderr by logging.Handler.handleError.
"""

import logging
import sys
from pathlib import Path
from typing import IO, Optional


class RaisingStreamHandler(logging.StreamHandler):
    """StreamHandler that re-raises write errors."""

    def handleError(self, record: logging.LogRecord) -> None:
        # Called from inside emit()'s except block
        raise


class RaisingFileHandler(logging.FileHandler):
    """Append-only FileHandler that re-raises write errors."""

    def handleError(self, record: logging.LogRecord) -> None:
        raise


class BelowLevelFilter(logging.Filter):
    """
    Passes only records below a level.

    Keeps error records off the stdout handler when they have a stderr
    handler of their own.
    """

    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def create_pretty_handler(
    level: int,
    formatter: logging.Formatter,
    stream: Optional[IO[str]] = None,
    below: Optional[int] = None
) -> RaisingStreamHandler:
    """
    Create pretty (human-readable) handler.

    Args:
        level: Log level (e.g. logging.INFO)
        formatter: Formatter instance
        stream: Target stream (default: sys.stdout)
        below: Only pass records below this level

    Returns:
        StreamHandler configured for coloured lines

    Example:
        >>> from .formatters import PrettyFormatter
        >>> handler = create_pretty_handler(logging.INFO, PrettyFormatter())
    """
    handler = RaisingStreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    if below is not None:
        handler.addFilter(BelowLevelFilter(below))
    return handler


def create_structured_handler(
    level: int,
    formatter: logging.Formatter,
    file_path: Optional[str] = None,
    stream: Optional[IO[str]] = None
) -> logging.StreamHandler:
    """
    Create structured (JSON lines) handler.

    Writes to file_path when given (appending, parent directories
    created), otherwise to stream or sys.stdout.

    Args:
        level: Log level
        formatter: Formatter instance
        file_path: Path to the JSON lines file
        stream: Target stream when no file is configured

    Returns:
        FileHandler or StreamHandler instance

    Example:
        >>> from .formatters import StructuredFormatter
        >>> handler = create_structured_handler(
        ...     logging.INFO,
        ...     StructuredFormatter(),
        ...     file_path="/var/log/app.jsonl"
        ... )
    """
    if file_path:
        # Create directory if it doesn't exist
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        handler: logging.StreamHandler = RaisingFileHandler(
            filename=file_path,
            mode='a',
            encoding='utf-8'
        )
    else:
        handler = RaisingStreamHandler(stream if stream is not None else sys.stdout)

    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler
