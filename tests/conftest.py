"""
HAL Navigator Test Fixtures
===========================

Shared fixtures for all test modules.
"""

import pytest
import pytest_asyncio
import httpx
from unittest.mock import AsyncMock
from typing import Any, Dict, List, Optional

from hal_navigator import (
    HttpxTransport,
    NavigatorOptions,
    Resource,
    TransportResponse,
)

BASE_URL = "https://api.example.test"
ROOT_URL = f"{BASE_URL}/"


# ============================================
# FAKE HAL SERVER
# ============================================

class FakeHalServer:
    """
    In-memory HAL API served through httpx.MockTransport.

    Routes are keyed by (method, path). Every request received is recorded
    so tests can inspect headers, query strings and bodies.
    """

    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url
        self.routes: Dict[tuple, tuple] = {}
        self.requests: List[httpx.Request] = []

    def on_discover(self, properties: Optional[Dict[str, Any]] = None, links: Optional[Dict[str, Dict]] = None):
        resource = Resource(properties=dict(properties or {}))
        for relation, link in (links or {}).items():
            resource.add_link(relation, **link)
        self.on_get("/", resource)

    def on_get(self, path: str, resource: Any, status: int = 200, headers: Optional[Dict[str, str]] = None):
        body = resource.to_raw() if isinstance(resource, Resource) else resource
        self.routes[("GET", path)] = (status, body, headers or {})

    def on_post(self, path: str, status: int, body: Any = None, headers: Optional[Dict[str, str]] = None):
        self.routes[("POST", path)] = (status, body, headers or {})

    def on_post_redirect(self, path: str, location: str):
        self.on_post(path, 201, headers={"Location": location})

    def requests_for(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"No route for {request.method} {request.url.path}"})

        status, body, headers = route
        if body is None:
            return httpx.Response(status, headers=headers)
        return httpx.Response(status, json=body, headers=headers)


@pytest.fixture
def hal_server():
    """An empty fake HAL API."""
    return FakeHalServer()


@pytest_asyncio.fixture
async def transport(hal_server):
    """HttpxTransport talking to the fake HAL API; the client is closed afterwards."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(hal_server.handler)) as client:
        yield HttpxTransport(client=client)


@pytest.fixture
def options(transport):
    """Navigator options bound to the fake HAL API."""
    return NavigatorOptions(get=transport.get, post=transport.post)


# ============================================
# MOCK TRANSPORT
# ============================================

def make_response(
    status: int = 200,
    body: Any = None,
    location: str = ROOT_URL,
    headers: Optional[Dict[str, str]] = None,
) -> TransportResponse:
    """TransportResponse wrapping a real httpx.Response for header lookups."""
    return TransportResponse(
        status=status,
        body={} if body is None else body,
        location=location,
        response=httpx.Response(status, headers=headers or {}),
    )


@pytest.fixture
def mock_get():
    """Mock transport GET returning an empty resource."""
    return AsyncMock(return_value=make_response())


@pytest.fixture
def mock_post():
    """Mock transport POST returning 200 with an empty resource."""
    return AsyncMock(return_value=make_response())


@pytest.fixture
def mock_options(mock_get, mock_post):
    """Navigator options backed by mock transport functions."""
    return NavigatorOptions(get=mock_get, post=mock_post)


@pytest.fixture
def root_resource():
    """Root resource exposing a plain and a templated relation."""
    return (
        Resource()
        .add_property("version", "1.0")
        .add_link("self", "/")
        .add_link("users", "/users")
        .add_link("user", "/users/{id}", templated=True)
        .add_link("search", "/users{?admin}", templated=True)
    )
