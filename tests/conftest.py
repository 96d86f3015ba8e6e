"""Pytest configuration shared across the suite."""

from __future__ import annotations

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for rootdir-relative imports
    import _bootstrap  # type: ignore # noqa: F401

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import anyio
import httpx
import pytest

from bazaar_devapi.clients import DeveloperApiClient
from bazaar_devapi.core.config import BazaarSettings
from bazaar_devapi.storage import InMemoryTokenStore


class FakeClock:
    """Deterministic UTC clock that tests advance explicitly."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakeVendor:
    """MockTransport handler replying with queued responses per request path."""

    def __init__(self, *, latency: float = 0.0) -> None:
        self.latency = latency
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, list[Any]] = {}

    def respond(self, path: str, *responses: Any) -> None:
        """Queue responses (``httpx.Response``, dict payloads or exceptions) for ``path``."""
        self._routes.setdefault(path, []).extend(responses)

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.path == path]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.latency:
            await anyio.sleep(self.latency)
        queued = self._routes.get(request.url.path)
        if not queued:
            raise AssertionError(f"Unexpected vendor call to {request.url.path}")
        reply = queued.pop(0) if len(queued) > 1 else queued[0]
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, json=reply)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def bazaar_settings() -> BazaarSettings:
    return BazaarSettings(
        base_uri="https://vendor.example/",
        client_id="c1",
        client_secret="s1",
        redirect_path="/oauth/cb",
        refresh_token=None,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryTokenStore:
    return InMemoryTokenStore(clock=clock)


@pytest.fixture
def vendor() -> FakeVendor:
    return FakeVendor()


@pytest.fixture
def api_client_factory(
    bazaar_settings: BazaarSettings, vendor: FakeVendor
) -> Callable[..., DeveloperApiClient]:
    def _factory(settings: BazaarSettings | None = None) -> DeveloperApiClient:
        return DeveloperApiClient(settings or bazaar_settings, transport=vendor.transport)

    return _factory


@pytest.fixture
def api_client(api_client_factory) -> DeveloperApiClient:
    return api_client_factory()
