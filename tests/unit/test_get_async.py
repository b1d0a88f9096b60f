from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx
import pytest
from pydantic import BaseModel

from typedrest import get_async
from typedrest.core import ClientConfig

if TYPE_CHECKING:
    from tests.conftest import FakeServer

TEST_URL = "https://api.example.com/posts"


class Blog(BaseModel):
    id: int
    title: str


###############################
#     Tests for get_async     #
###############################


@pytest.mark.asyncio
async def test_get_async_typed_list(
    server: FakeServer, async_http_client: httpx.AsyncClient
) -> None:
    server.respond(200, b'[{"id":1,"title":"Post 1"}]')
    async with async_http_client:
        response = await get_async(TEST_URL, result_type=list[Blog], client=async_http_client)
    assert response.status_code == 200
    assert response.content == [Blog(id=1, title="Post 1")]
    assert server.last_request.headers["Accept"] == "application/json"


@pytest.mark.asyncio
async def test_get_async_concurrent(
    server: FakeServer, async_http_client: httpx.AsyncClient
) -> None:
    server.respond(200, b"1")
    async with async_http_client:
        responses = await asyncio.gather(
            *(get_async(f"{TEST_URL}/{i}", result_type=int, client=async_http_client) for i in range(5))
        )
    assert [response.content for response in responses] == [1] * 5
    assert len(server.requests) == 5


@pytest.mark.asyncio
async def test_get_async_not_found(
    server: FakeServer, async_http_client: httpx.AsyncClient
) -> None:
    server.respond(404, b"not found")
    async with async_http_client:
        response = await get_async(TEST_URL, client=async_http_client)
    assert response.content is None
    assert response.error == "not found"


@pytest.mark.asyncio
async def test_get_async_invalid_token(
    server: FakeServer, async_http_client: httpx.AsyncClient
) -> None:
    async with async_http_client:
        with pytest.raises(ValueError, match=r"token must be a non-empty string"):
            await get_async(TEST_URL, token=None, client=async_http_client)
    assert server.requests == []


@pytest.mark.asyncio
async def test_get_async_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(httpx.ConnectTimeout):
            await get_async(TEST_URL, client=client)


@pytest.mark.asyncio
async def test_get_async_creates_and_closes_client(
    server: FakeServer, monkeypatch: pytest.MonkeyPatch
) -> None:
    created = []

    def create_async_client(self: ClientConfig) -> httpx.AsyncClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(server.handler))
        created.append(client)
        return client

    monkeypatch.setattr(ClientConfig, "create_async_client", create_async_client)
    server.respond(200, b'"ok"')
    assert (await get_async(TEST_URL)).content == "ok"
    assert created[0].is_closed


@pytest.mark.asyncio
async def test_get_async_does_not_close_injected_client(
    async_http_client: httpx.AsyncClient,
) -> None:
    async with async_http_client:
        await get_async(TEST_URL, client=async_http_client)
        assert not async_http_client.is_closed
