"""Shared pytest fixtures for provider tests."""

import inspect
from collections.abc import Awaitable, Callable
from typing import Any
from urllib.parse import parse_qs

import httpx
import pytest

from oauthlink_core.auth.transport import HttpTransport
from oauthlink_core.config import ProviderConfig

RouteHandler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


class FakeProviderAPI:
    """
    Route table standing in for a provider's HTTP endpoints.

    Routes are keyed by method and URL without query string. Every request is
    recorded; an unrouted request fails the test.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], RouteHandler] = {}
        self.requests: list[httpx.Request] = []

    def route(self, method: str, url: str, handler: RouteHandler) -> None:
        self.routes[(method.upper(), url)] = handler

    def reply(
        self,
        method: str,
        url: str,
        status_code: int = 200,
        *,
        json: Any = None,
        content: bytes | None = None,
    ) -> None:
        """Route to a fixed response (a fresh Response object per request)."""

        def _handler(_request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=json)

        self.route(method, url, _handler)

    def calls(self, method: str, url: str) -> list[httpx.Request]:
        return [
            r for r in self.requests if r.method == method.upper() and _route_url(r) == url
        ]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, _route_url(request)))
        if handler is None:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        result = handler(request)
        if inspect.isawaitable(result):
            result = await result
        return result


def _route_url(request: httpx.Request) -> str:
    return f"{request.url.scheme}://{request.url.host}{request.url.path}"


def form_body(request: httpx.Request) -> dict[str, str]:
    """Decode a form-encoded request body into a flat dict."""
    return {k: v[0] for k, v in parse_qs(request.content.decode("utf-8")).items()}


def make_config(**overrides: Any) -> ProviderConfig:
    values: dict[str, Any] = {
        "client_id": "client-id",
        "client_secret": "client-secret",
        "enabled": True,
    }
    values.update(overrides)
    return ProviderConfig(**values)


@pytest.fixture
def fake_api() -> FakeProviderAPI:
    return FakeProviderAPI()


@pytest.fixture
def transport(fake_api: FakeProviderAPI) -> HttpTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_api))
    return HttpTransport(timeout=2.0, client=client)
