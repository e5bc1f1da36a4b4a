"""
Advanced Logging Examples for Request Logger.

Demonstrates structured output, the JSON lines file sink, request
details, the request ID header and a custom formatter.
"""

import os
import tempfile

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from request_logger import Logger, LoggerOptions, install


async def echo(request: Request):
    payload = await request.json()
    return JSONResponse({"id": request.path_params["item_id"], "received": payload})


def build_app(options: LoggerOptions) -> Starlette:
    app = Starlette(routes=[Route("/items/{item_id}", echo, methods=["POST"])])
    install(app, options)
    return app


def example_1_structured():
    """Example 1: JSON lines on stdout."""
    print("\n" + "="*60)
    print("EXAMPLE 1: Structured Transport")
    print("="*60 + "\n")

    app = build_app(LoggerOptions.create(transport="json", logStartup=False))

    with TestClient(app) as client:
        client.post("/items/7", json={"name": "lamp"})


def example_2_file_and_details():
    """Example 2: Pretty console plus JSON file, with request details."""
    print("\n" + "="*60)
    print("EXAMPLE 2: File Sink and Request Details")
    print("="*60 + "\n")

    log_file = os.path.join(tempfile.gettempdir(), "request_logger_example.jsonl")

    app = build_app(LoggerOptions.create(
        file=log_file,
        logDetails=True,
        requestIdHeader="X-Request-ID",
        logStartup=False,
    ))

    with TestClient(app) as client:
        response = client.post(
            "/items/7?dry_run=1",
            json={"name": "lamp", "password": "hunter2"},  # Masked in the log
        )
        print(f"\nX-Request-ID: {response.headers['x-request-id']}")

    print(f"\nLog file contents ({log_file}):")
    print("-" * 60)
    with open(log_file, 'r', encoding='utf-8') as f:
        print(f.read())
    print("-" * 60 + "\n")


def example_3_custom_formatter():
    """Example 3: Custom display formatter."""
    print("\n" + "="*60)
    print("EXAMPLE 3: Custom Formatter")
    print("="*60 + "\n")

    def formatter(level: str, message: str, context: str) -> str:
        return f"[CUSTOM] {level.upper()} ({context}): {message}"

    with Logger(LoggerOptions.create(formatter=formatter)) as logger:
        logger.log("Hello Custom", "Router")
        logger.warn("Disk almost full", "Storage")


if __name__ == "__main__":
    example_1_structured()
    example_2_file_and_details()
    example_3_custom_formatter()

    print("\n" + "="*60)
    print("All examples completed!")
    print("="*60 + "\n")
