"""
OmniCognitor Gateway: Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the test suite.
How:   The upstream PostgREST API is replaced by `FakeUpstream`, plugged into
       the real DataAPIClient through `httpx.MockTransport`. The gateway is
       exercised through httpx's ASGITransport, so no server or network is
       needed.

Fixture Hierarchy (all function-scoped):
    ├── settings:      Settings with a service credential
    ├── upstream:      FakeUpstream recording every outbound request
    ├── data_api:      DataAPIClient wired to `upstream`
    ├── make_client:   factory building an app + AsyncClient for given settings
    └── test_client:   AsyncClient for the default `settings`
"""

import os
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Keep the module-level app in omnicognitor.main quiet and offline
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("SUPABASE_URL", "https://db.test")

from omnicognitor.config import Settings  # noqa: E402
from omnicognitor.main import create_app  # noqa: E402
from omnicognitor.services.data_api import DataAPIClient  # noqa: E402

UpstreamHandler = Callable[[httpx.Request], httpx.Response]


class FakeUpstream:
    """
    Minimal stand-in for the PostgREST endpoint.

    Register responses per `(method, table)` with `on()`; unregistered
    tables answer 404 like PostgREST does for an unknown relation.

    Usage:
        upstream.on("GET", "users", json=[{"id": 1}])
        upstream.on("POST", "users", status=409, json={"code": "23505"})
        upstream.fail("GET", "platform")   # transport error
    """

    def __init__(self) -> None:
        self.handlers: Dict[Tuple[str, str], UpstreamHandler] = {}
        self.calls: List[httpx.Request] = []

    def on(
        self,
        method: str,
        table: str,
        status: int = 200,
        json: Any = None,
        text: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status, text=text, headers=headers)
            if json is None:
                return httpx.Response(status, headers=headers)
            return httpx.Response(status, json=json, headers=headers)

        self.handlers[(method, table)] = handler

    def fail(self, method: str, table: str, message: str = "connection refused") -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError(message, request=request)

        self.handlers[(method, table)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        table = request.url.path.rsplit("/", 1)[-1]
        handler = self.handlers.get((request.method, table))
        if handler is None:
            return httpx.Response(
                404,
                json={"code": "42P01", "message": f'relation "public.{table}" does not exist'},
            )
        return handler(request)

    def calls_for(self, method: str, table: str) -> List[httpx.Request]:
        return [
            c for c in self.calls
            if c.method == method and c.url.path.rsplit("/", 1)[-1] == table
        ]


def make_settings(**overrides: Any) -> Settings:
    values: Dict[str, Any] = {
        "supabase_url": "https://db.test/",
        "supabase_service_role_key": "service-key",
        "allow_public_write": False,
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest_asyncio.fixture
async def data_api(settings, upstream):
    client = DataAPIClient(settings, transport=httpx.MockTransport(upstream))
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def make_client(upstream):
    """
    Factory fixture: `await make_client(settings)` returns an AsyncClient
    talking to a fresh app whose upstream is `upstream`.
    """
    opened = []

    async def _make(client_settings: Settings) -> AsyncClient:
        api = DataAPIClient(client_settings, transport=httpx.MockTransport(upstream))
        app = create_app(settings=client_settings, data_api=api)
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        opened.append((client, api))
        return client

    yield _make

    for client, api in opened:
        await client.aclose()
        await api.aclose()


@pytest_asyncio.fixture
async def test_client(make_client, settings):
    return await make_client(settings)


@pytest.fixture
def settings_factory():
    """`settings_factory(**overrides)` builds Settings on top of the test defaults."""
    return make_settings
