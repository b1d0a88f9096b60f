from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from unittest.mock import Mock

import httpx
import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


@dataclass
class FakeServer:
    """In-memory server answering every request with the same response.

    The requests received are recorded, with their body already read, so
    tests can assert on what was sent over the wire.
    """

    status_code: int = 200
    content: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def respond(self, status_code: int = 200, content: bytes = b"", **headers: str) -> None:
        self.status_code = status_code
        self.content = content
        self.headers = {name.replace("_", "-"): value for name, value in headers.items()}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.content, headers=self.headers)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def server() -> FakeServer:
    """Create a fake server answering ``200`` with an empty body."""
    return FakeServer()


@pytest.fixture
def http_client(server: FakeServer) -> Generator[httpx.Client, None, None]:
    """Create an httpx.Client whose requests are answered by the fake
    server."""
    with httpx.Client(transport=httpx.MockTransport(server.handler)) as client:
        yield client


@pytest.fixture
def async_http_client(server: FakeServer) -> httpx.AsyncClient:
    """Create an httpx.AsyncClient whose requests are answered by the
    fake server."""
    return httpx.AsyncClient(transport=httpx.MockTransport(server.handler))


@pytest.fixture
def failing_client() -> Generator[httpx.Client, None, None]:
    """Create an httpx.Client whose requests fail to connect."""

    def handler(request: httpx.Request) -> httpx.Response:
        msg = "connection refused"
        raise httpx.ConnectError(msg, request=request)

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        yield client


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing hooks."""
    return Mock()
