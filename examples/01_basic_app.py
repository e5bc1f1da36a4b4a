"""
Basic Usage Examples for Request Logger.

A small Starlette application with request logging installed. Requests
are sent in-process with Starlette's TestClient, so no server is needed.

Run with a real server instead:
    uvicorn examples.01_basic_app:app --reload
"""

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from request_logger import LoggerOptions, install


async def index(request: Request):
    return PlainTextResponse("Hello")


async def get_user(request: Request):
    user_id = request.path_params["user_id"]
    # Logger published by the middleware
    request.state.log.debug(f"Loading user {user_id}", "Users")
    return JSONResponse({"id": user_id})


app = Starlette(routes=[
    Route("/", index),
    Route("/users/{user_id}", get_user),
])
install(app, LoggerOptions.create(level="debug"))


def example_1_requests():
    """Example 1: Start and completion lines."""
    print("\n" + "="*60)
    print("EXAMPLE 1: Request Lifecycle Logging")
    print("="*60 + "\n")

    with TestClient(app) as client:
        client.get("/")
        client.get("/users/42")


def example_2_quiet():
    """Example 2: Completion lines only, no correlation IDs."""
    print("\n" + "="*60)
    print("EXAMPLE 2: Completion Lines Only")
    print("="*60 + "\n")

    quiet = Starlette(routes=[Route("/", index)])
    install(quiet, LoggerOptions.create(logRequestStart=False, logRequestId=False, logStartup=False))

    with TestClient(quiet) as client:
        client.get("/")


if __name__ == "__main__":
    example_1_requests()
    example_2_quiet()

    print("\n" + "="*60)
    print("All examples completed!")
    print("="*60 + "\n")
