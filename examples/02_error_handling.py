"""
Error Handling Examples for Request Logger.

Shows how the three failure kinds are logged and answered:
- HttpError raised by a handler -> warn line, {"status", "message"} body
- pydantic ValidationError -> warn line, 400 with per-field details
- any other exception -> error line with traceback, host's 500 response
"""

from pydantic import BaseModel, Field
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from request_logger import HttpError, LoggerOptions, install


class User(BaseModel):
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    age: int = Field(ge=0)


async def create_user(request: Request):
    user = User.model_validate(await request.json())
    return JSONResponse(user.model_dump(), status_code=201)


async def missing(request: Request):
    raise HttpError.not_found("User 42 does not exist")


async def boom(request: Request):
    raise RuntimeError("boom")


app = Starlette(routes=[
    Route("/user", create_user, methods=["POST"]),
    Route("/missing", missing),
    Route("/boom", boom),
])
install(app, LoggerOptions.create(logStartup=False))


def example_1_http_error():
    """Example 1: Typed HTTP error."""
    print("\n" + "="*60)
    print("EXAMPLE 1: HttpError")
    print("="*60 + "\n")

    with TestClient(app) as client:
        response = client.get("/missing")
        print(f"Response: {response.status_code} {response.json()}\n")


def example_2_validation():
    """Example 2: Validation failure with two errors."""
    print("\n" + "="*60)
    print("EXAMPLE 2: Validation")
    print("="*60 + "\n")

    with TestClient(app) as client:
        response = client.post("/user", json={"email": "x", "age": -5})
        print(f"Response: {response.status_code} {response.json()}\n")


def example_3_unhandled():
    """Example 3: Unhandled exception."""
    print("\n" + "="*60)
    print("EXAMPLE 3: Unhandled Exception")
    print("="*60 + "\n")

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/boom")
        print(f"Response: {response.status_code}\n")


if __name__ == "__main__":
    example_1_http_error()
    example_2_validation()
    example_3_unhandled()

    print("\n" + "="*60)
    print("All examples completed!")
    print("="*60 + "\n")
