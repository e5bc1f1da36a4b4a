"""Request state: start mark, correlation ID and lazily resolved path."""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .clock import ClockService
from .config import LoggerOptions
from .logging.logger import Logger

ROUTER_CONTEXT = "Router"


def extract_path(url: str) -> str:
    """
    Path component of a URL, found by a plain string scan.

    Locates "://", then the first "/" after it, then the first "?" or "#"
    (or the end of the string). A bare path is scanned from the start.

    Examples:
        >>> extract_path("http://localhost:8000/users/7?expand=1")
        '/users/7'
        >>> extract_path("http://localhost")
        '/'
    """
    scheme_end = url.find("://")
    begin = scheme_end + 3 if scheme_end != -1 else 0

    end = len(url)
    for marker in ("?", "#"):
        index = url.find(marker, begin)
        if index != -1 and index < end:
            end = index

    start = url.find("/", begin, end)
    if start == -1:
        return "/"
    return url[start:end]


@dataclass
class RequestInfo:
    """What the classifier reads from the host's request."""

    method: str
    url: str
    params: Dict[str, Any] = field(default_factory=dict)
    body: Any = None


@dataclass
class RequestState:
    """
    Per-request tracking data.

    start_mark comes from ClockService.now() and must only be compared
    with values from the same clock.
    """

    start_mark: float
    url: str
    correlation_id: Optional[str] = None
    _resolved_path: Optional[str] = field(default=None, repr=False)

    @property
    def resolved_path(self) -> str:
        if self._resolved_path is None:
            self._resolved_path = extract_path(self.url)
        return self._resolved_path

    @property
    def short_id(self) -> Optional[str]:
        """First 8 characters of the correlation ID."""
        return self.correlation_id[:8] if self.correlation_id else None

    def prefix(self) -> str:
        """'[abcd1234] ' or '' when there is no correlation ID."""
        short_id = self.short_id
        return f"[{short_id}] " if short_id else ""


class RequestTracker:
    """
    Creates RequestState at the start of a request and logs the start line.

    Args:
        logger: Logger used for the start line
        options: Logger options (auto_logging, log_request_start, log_request_id)
        clock: Monotonic source for the start mark
    """

    def __init__(self, logger: Logger, options: LoggerOptions, clock: ClockService):
        self.logger = logger
        self.options = options
        self.clock = clock

    def begin(self, method: str, url: str) -> RequestState:
        """Stamp a new request; call before any handler logic runs."""
        state = RequestState(start_mark=self.clock.now(), url=url)

        if self.options.log_request_id:
            state.correlation_id = str(uuid.uuid4())

        if self.options.auto_logging and self.options.log_request_start:
            self.logger.log(f"{state.prefix()}{method} {state.resolved_path}", ROUTER_CONTEXT)

        return state
