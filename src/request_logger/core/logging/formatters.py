"""
Log formatters for the pretty and structured sinks.

DefaultFormatter builds the coloured display line; PrettyFormatter and
StructuredFormatter are logging.Formatter adapters used by the handlers.
"""

import json
import logging
import os
import re
from typing import Any, Dict, Optional

from ..clock import ClockService

# ANSI color codes
COLORS = {
    'info': '\033[32m',       # Green
    'warn': '\033[33m',       # Yellow
    'error': '\033[31m',      # Red
    'debug': '\033[35m',      # Magenta
    'verbose': '\033[36m',    # Cyan
    'DIM': '\033[2m',
    'RESET': '\033[0m',
}

# Matches every CSI escape sequence (colors, bold, dim, ...)
ANSI_PATTERN = re.compile(r'\x1b\[[0-9;]*[A-Za-z]')

DEFAULT_CONTEXT = "default"


def strip_ansi(text: str) -> str:
    """
    Remove ANSI styling tokens.

    Idempotent: stripping an already stripped string returns it unchanged.

    Example:
        >>> strip_ansi("\\033[32mINFO\\033[0m ready")
        'INFO ready'
    """
    return ANSI_PATTERN.sub('', text)


def colorize(text: str, color: str) -> str:
    """Wrap text in a color token from COLORS."""
    return f"{COLORS[color]}{text}{COLORS['RESET']}"


class DefaultFormatter:
    """
    Built-in display formatter.

    Same call signature as a custom formatter:
    ``formatter(level_name, message, context) -> str``.

    Format:
        [<app_label>] <pid>  - <timestamp>   <LEVEL> [<context>] <message>

    The app label is green, pid and timestamp are dim, the level and
    the bracketed context use the level color.

    Args:
        clock: Source of the cached timestamp
        app_label: Label in the first segment
        pid: Process ID (defaults to os.getpid())
    """

    def __init__(self, clock: ClockService, app_label: str = "Starlette", pid: Optional[int] = None):
        self.clock = clock
        self.app_label = app_label
        self.pid = pid if pid is not None else os.getpid()

    def __call__(self, level: str, message: str, context: str) -> str:
        color = level if level in COLORS else 'info'
        return (
            f"{colorize(f'[{self.app_label}]', 'info')} "
            f"{colorize(str(self.pid), 'DIM')}  - "
            f"{colorize(self.clock.timestamp(), 'DIM')}   "
            f"{colorize(level.upper(), color)} "
            f"{colorize(f'[{context}]', color)} "
            f"{message}"
        )


class PrettyFormatter(logging.Formatter):
    """
    Formatter for the pretty sink.

    Emits the pre-built display line; error records with a trace get the
    trace as a separate line.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as display line (+ trace)."""
        line = getattr(record, 'display', record.getMessage())
        trace = getattr(record, 'trace', None)
        if trace:
            return f"{line}\n{trace.rstrip()}"
        return line


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for the structured sink.

    Outputs one JSON object per record:
    - level: Entry point name (info, warn, error, debug, verbose)
    - time: Epoch milliseconds
    - pid: Process ID
    - context: Context label
    - msg: Display line with styling stripped
    - trace: Stack trace (error records only, when present)

    Example output:
        {"level": "info", "time": 1760884512123, "pid": 4242,
         "context": "Router", "msg": "[Starlette] 4242  - ... GET / +1.20ms"}
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "level": getattr(record, 'level_name', record.levelname.lower()),
            "time": int(record.created * 1000),
            "pid": record.process,
            "context": getattr(record, 'context', DEFAULT_CONTEXT),
            "msg": strip_ansi(getattr(record, 'display', record.getMessage())),
        }

        trace = getattr(record, 'trace', None)
        if trace:
            log_data["trace"] = trace

        return json.dumps(log_data, ensure_ascii=False, default=str)


def get_formatter(sink: str) -> logging.Formatter:
    """
    Get handler formatter by sink type.

    Args:
        sink: Sink type (pretty, structured)

    Returns:
        Formatter instance

    Raises:
        ValueError: If sink is unknown
    """
    formatters = {
        "pretty": PrettyFormatter,
        "structured": StructuredFormatter,
    }

    formatter_class = formatters.get(sink.lower())
    if not formatter_class:
        raise ValueError(
            f"Unknown sink type: {sink}. "
            f"Available: {', '.join(formatters.keys())}"
        )

    return formatter_class()
