"""
Starlette (ASGI) host adapter.

Wires the RequestTracker and OutcomeClassifier into the request
lifecycle: before routing, after successful handling and on error.

Example:
    >>> from starlette.applications import Starlette
    >>> from request_logger import LoggerOptions, install
    >>>
    >>> app = Starlette(routes=[...])
    >>> install(app, LoggerOptions.create(logDetails=True))
"""

import json
import logging
from typing import Any, List, Optional
from urllib.parse import parse_qsl

from starlette.datastructures import URL, MutableHeaders
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .core.classifier import OutcomeClassifier
from .core.clock import ClockService
from .core.config import LoggerOptions
from .core.logging.logger import Logger
from .core.tracker import ROUTER_CONTEXT, RequestInfo, RequestState, RequestTracker

logger = logging.getLogger(__name__)


def decode_body(raw: bytes, content_type: str) -> Any:
    """
    Decode a captured request body for logging.

    JSON content types are parsed, urlencoded forms become a flat map,
    multipart bodies are summarised by size, anything else is text.
    """
    if not raw:
        return None

    content_type = content_type.lower()
    if "json" in content_type:
        try:
            return json.loads(raw)
        except ValueError:
            pass
    if content_type.startswith("application/x-www-form-urlencoded"):
        return dict(parse_qsl(raw.decode("utf-8", errors="replace"), keep_blank_values=True))
    if content_type.startswith("multipart/"):
        return f"<multipart body: {len(raw)} bytes>"
    return raw.decode("utf-8", errors="replace")


def request_url(scope: Scope) -> str:
    """
    Full request URL with the path exactly as the client sent it.

    starlette.datastructures.URL is built from the percent-decoded
    scope["path"], where an encoded "?" or "#" would look like the start of
    a query or fragment. The raw path keeps them encoded.
    """
    url = URL(scope=scope)
    raw_path = scope.get("raw_path")
    if raw_path:
        url = url.replace(path=raw_path.split(b"?", 1)[0].decode("latin-1"))
    return str(url)


class ErrorJSONResponse(JSONResponse):
    """JSONResponse that stringifies values json cannot encode."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
            default=str,
        ).encode("utf-8")


def _header(scope: Scope, name: bytes) -> str:
    for key, value in scope.get("headers", ()):
        if key.lower() == name:
            return value.decode("latin-1")
    return ""


class RequestLoggingMiddleware:
    """
    ASGI middleware that logs the lifecycle of every HTTP request.

    - request start line (optional) and completion line with duration
    - validation failures and HttpError become JSON responses (400 / the
      error's status) plus a warn line
    - other exceptions are logged with their traceback and re-raised so the
      host's default error response applies
    - on lifespan startup the clock ticker starts and the route table is
      logged; on shutdown the ticker stops

    The Logger is published as ``request.state.log`` and the correlation
    ID as ``request.state.request_id``.

    Args:
        app: Wrapped ASGI application
        options: Logger options (uses defaults if None)
        logger: Logger to use (built from options if None)
        clock: Clock service (the logger's clock, or a new one, if None).
               A clock created here is started and stopped with the
               application lifespan; an injected one is left to its owner.
    """

    def __init__(
        self,
        app: ASGIApp,
        options: Optional[LoggerOptions] = None,
        logger: Optional[Logger] = None,
        clock: Optional[ClockService] = None,
    ):
        self.app = app
        self.options = options or (logger.options if logger is not None else LoggerOptions())

        self._owns_clock = clock is None and logger is None
        if clock is None:
            clock = logger.clock if logger is not None else ClockService(
                interval=self.options.timestamp_interval
            )
        self.clock = clock
        self.logger = logger or Logger(self.options, clock=self.clock)

        self.tracker = RequestTracker(self.logger, self.options, self.clock)
        self.classifier = OutcomeClassifier(self.logger, self.options, self.clock)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            await self._handle_http(scope, receive, send)
        elif scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
        else:
            await self.app(scope, receive, send)

    # HTTP

    async def _handle_http(self, scope: Scope, receive: Receive, send: Send) -> None:
        method = scope["method"]
        url = request_url(scope)
        state = self.tracker.begin(method, url)

        request_state = scope.setdefault("state", {})
        request_state["log"] = self.logger
        request_state["request_id"] = state.correlation_id

        capture = self.options.auto_logging and self.options.log_details
        chunks: List[bytes] = []
        response_started = False

        async def receive_wrapper() -> Message:
            message = await receive()
            if capture and message["type"] == "http.request":
                chunks.append(message.get("body", b""))
            return message

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
                self._add_request_id_header(message, state)
            await send(message)

        try:
            await self.app(scope, receive_wrapper, send_wrapper)
        except Exception as exc:
            request = RequestInfo(method=method, url=url, params=scope.get("path_params") or {})
            response = self.classifier.fail(state, request, exc)
            if response is None:
                raise
            if response_started:
                logger.debug("Response already started, re-raising %s", type(exc).__name__)
                raise
            await ErrorJSONResponse(response.body, status_code=response.status)(
                scope, receive, send_wrapper
            )
            return

        body = decode_body(b"".join(chunks), _header(scope, b"content-type")) if capture else None
        request = RequestInfo(
            method=method,
            url=url,
            params=scope.get("path_params") or {},
            body=body,
        )
        self.classifier.complete(state, request)

    def _add_request_id_header(self, message: Message, state: RequestState) -> None:
        header = self.options.request_id_header
        if not header or not state.correlation_id:
            return
        message.setdefault("headers", [])
        MutableHeaders(scope=message).append(header, state.correlation_id)

    # Lifespan

    async def _handle_lifespan(self, scope: Scope, receive: Receive, send: Send) -> None:
        async def send_wrapper(message: Message) -> None:
            if message["type"] == "lifespan.startup.complete":
                if self._owns_clock:
                    self.clock.start()
                if self.options.log_startup:
                    self.log_startup(scope.get("app"))
            elif message["type"] == "lifespan.shutdown.complete":
                if self._owns_clock:
                    self.clock.stop()
            await send(message)

        await self.app(scope, receive, send_wrapper)

    def log_startup(self, app: Any) -> None:
        """Log the startup line and the application's route table."""
        label = self.options.app_label
        self.logger.log(f"{label} application started", label)

        routes = getattr(app, "routes", None) or []
        if not routes:
            return

        self.logger.log("Routes:", label)
        for route in routes:
            path = getattr(route, "path", None)
            if path is None:
                continue
            methods = getattr(route, "methods", None) or ()
            shown = sorted(m for m in methods if m != "HEAD") or ["*"]
            for method in shown:
                self.logger.log(f"{method} {path}", ROUTER_CONTEXT)


def install(
    app: Any,
    options: Optional[LoggerOptions] = None,
    logger: Optional[Logger] = None,
    clock: Optional[ClockService] = None,
) -> None:
    """
    Add RequestLoggingMiddleware to a Starlette application.

    Must be called before the application starts serving.

    Example:
        >>> app = Starlette(routes=routes)
        >>> install(app, LoggerOptions.create(level="debug"))
    """
    app.add_middleware(RequestLoggingMiddleware, options=options, logger=logger, clock=clock)
