"""
Pytest configuration and helpers for the Instagram client test-suite.

The client talks to the network through an injected httpx.AsyncClient, so the
fixtures below wire it to an httpx.MockTransport that records every request
and answers from a small routing table. No test touches the real API.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, AsyncGenerator, Callable, Dict, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio

# ---------------------------------------------------------------------------
# Environment bootstrap
# ---------------------------------------------------------------------------

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_ACCESS_TOKEN = "test_access_token"

os.environ["APP_NAME"] = "Instagram Client Tests"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["INSTAGRAM_API_BASE_URL"] = "https://api.instagram.com/v1"
os.environ["INSTAGRAM_CLIENT_ID"] = "test_client_id"
os.environ["INSTAGRAM_CLIENT_SECRET"] = "test_client_secret"
os.environ["INSTAGRAM_ACCESS_TOKEN"] = TEST_ACCESS_TOKEN

from instagram_client.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from instagram_client.core.services.instagram_api_service import (  # noqa: E402
    InstagramAPIService,
)
from tests.factories import envelope, error_envelope  # noqa: E402


# ---------------------------------------------------------------------------
# Fake API
# ---------------------------------------------------------------------------


class FakeInstagramAPI:
    """Mock transport handler keyed by (method, path below /v1)."""

    API_PREFIX = "/v1"

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}

    def add(
        self,
        path: str,
        data: Any = None,
        *,
        method: str = "GET",
        code: int = 200,
        status_code: int = 200,
        body: Optional[Any] = None,
        content: Optional[bytes] = None,
    ) -> None:
        """Register a response; body overrides the generated envelope."""
        payload = body if body is not None else envelope(data, code=code)

        def _respond(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=payload)

        self._routes[(method, path)] = _respond

    def fail(self, path: str, *, method: str = "GET") -> None:
        """Make requests to path raise a connection error."""

        def _raise(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        self._routes[(method, path)] = _raise

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith(self.API_PREFIX):
            path = path[len(self.API_PREFIX):]
        handler = self._routes.get((request.method, path))
        if handler is None:
            return httpx.Response(404, json=error_envelope(code=400))
        return handler(request)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


@pytest.fixture
def fake_api() -> FakeInstagramAPI:
    return FakeInstagramAPI()


@pytest_asyncio.fixture
async def service(fake_api: FakeInstagramAPI) -> AsyncGenerator[InstagramAPIService, None]:
    """Authenticated service whose HTTP traffic goes to fake_api."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_api)) as http_client:
        yield InstagramAPIService(
            client_id="test_client_id",
            client_secret="test_client_secret",
            access_token=TEST_ACCESS_TOKEN,
            http_client=http_client,
        )


@pytest_asyncio.fixture
async def anonymous_service(
    fake_api: FakeInstagramAPI,
) -> AsyncGenerator[InstagramAPIService, None]:
    """Service without an access token."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_api)) as http_client:
        yield InstagramAPIService(client_id="test_client_id", http_client=http_client)
