"""
Clock service for request timing and display timestamps.

Durations come from a monotonic source; the wall-clock string shown in log
lines is cached and refreshed by a background thread instead of being
recomputed on every call.
"""

import logging
import threading
import time
from datetime import datetime
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DISPLAY_FORMAT = "%m/%d/%Y, %I:%M:%S %p"


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Render a local wall-clock time, e.g. '10/19/2026, 03:45:12 PM'."""
    return (moment or datetime.now()).strftime(DISPLAY_FORMAT)


class ClockService:
    """
    Monotonic duration source plus a low-resolution cached timestamp.

    Owned by the composition root (the middleware or the application) and
    injected into the Logger. The cached value is read without locking:
    it is display data and at most `interval` seconds stale.

    Args:
        interval: Refresh period of the cached timestamp (seconds)
        monotonic: Monotonic time source (seconds)
        render: Produces the display string

    Example:
        >>> clock = ClockService(interval=1.0)
        >>> clock.start()
        >>> start = clock.now()
        >>> clock.timestamp()
        '10/19/2026, 03:45:12 PM'
        >>> clock.stop()
    """

    def __init__(
        self,
        interval: float = 1.0,
        monotonic: Callable[[], float] = time.perf_counter,
        render: Callable[[], str] = format_timestamp,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")

        self.interval = interval
        self._monotonic = monotonic
        self._render = render
        self._cached: Optional[str] = None
        self._rendered_at = 0.0

        # Ticker thread control
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def now(self) -> float:
        """Monotonic time in seconds; only differences are meaningful."""
        return self._monotonic()

    def timestamp(self) -> str:
        """
        Cached display timestamp.

        Refreshed by the ticker while it runs. Without a ticker the value
        is re-rendered on read once it is `interval` seconds old.
        """
        cached = self._cached
        if cached is None or (
            not self.running and self.now() - self._rendered_at >= self.interval
        ):
            cached = self.refresh()
        return cached

    def refresh(self) -> str:
        """Recompute the cached timestamp."""
        rendered = self._render()
        self._rendered_at = self.now()
        self._cached = rendered
        return rendered

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _tick_loop(self) -> None:
        while not self._stop_event.wait(self.interval):
            self.refresh()

    def start(self) -> None:
        """
        Start the background refresh thread.

        Safe to call multiple times - subsequent calls are ignored while
        the thread is running.
        """
        if self.running:
            logger.debug("Clock ticker already running")
            return

        self.refresh()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._tick_loop,
            name="RequestLoggerClock",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """
        Stop the background refresh thread.

        Safe to call even if the ticker is not running.
        """
        if not self.running:
            return

        self._stop_event.set()
        self._thread.join(timeout=self.interval + 1.0)

        if self._thread.is_alive():
            logger.warning("Clock ticker did not stop cleanly")
        self._thread = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
