"""
Shared pytest fixtures for all tests.

Provides an in-process echo server mounted through httpx's ASGI transport and
dispatcher instances wired to it.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest
import pytest_asyncio
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route

from http_intercept import Http, HttpxTransport, RequestOptions
from http_intercept.emitter import RequestRecord

BASE = "http://localhost:9090"
ALL_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


async def echo_endpoint(request: Request):
    path = request.url.path
    url = path + (f"?{request.url.query}" if request.url.query else "")

    # Checked before /echo so the prefix match below does not catch it.
    if path == "/echo-body":
        body = await request.body()
        return PlainTextResponse(body.decode())

    if path.startswith("/echo"):
        return JSONResponse(
            {
                "method": request.method,
                "headers": dict(request.headers),
                "url": url,
            }
        )

    if path == "/slow":
        await asyncio.sleep(0.1)
        return PlainTextResponse("slow-response")

    if path == "/401":
        return PlainTextResponse("unauthorized", status_code=401)

    if path == "/500":
        return PlainTextResponse("server-error", status_code=500)

    if path == "/201":
        return PlainTextResponse("created", status_code=201)

    return PlainTextResponse("ok")


def create_echo_app() -> Starlette:
    routes = [Route("/{path:path}", echo_endpoint, methods=ALL_METHODS)]
    return Starlette(routes=routes)


@dataclass
class RecordingTransport:
    """Transport wrapper remembering every call it receives."""

    inner: Any
    calls: list[tuple[str, RequestOptions]] = field(default_factory=list)

    async def send(self, url: str, options: RequestOptions) -> httpx.Response:
        self.calls.append((url, options))
        return await self.inner.send(url, options)

    async def aclose(self) -> None:
        await self.inner.aclose()


class ListEmitter:
    def __init__(self) -> None:
        self.records: list[RequestRecord] = []

    def emit(self, record: RequestRecord) -> None:
        self.records.append(record)


@pytest.fixture
def echo_app():
    return create_echo_app()


@pytest_asyncio.fixture
async def echo_client(echo_app):
    transport = httpx.ASGITransport(app=echo_app)
    async with httpx.AsyncClient(transport=transport) as client:
        yield client


@pytest.fixture
def transport(echo_client):
    """RecordingTransport over the echo server."""
    return RecordingTransport(HttpxTransport(echo_client))


@pytest.fixture
def emitter():
    return ListEmitter()


@pytest_asyncio.fixture
async def http(transport, emitter):
    """Dispatcher wired to the echo server, with fresh collections per test."""
    async with Http(transport, emitter=emitter) as instance:
        yield instance
