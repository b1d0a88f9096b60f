from __future__ import annotations

import io
import json
from typing import TYPE_CHECKING

import pytest
from pydantic import BaseModel

from typedrest import post_async

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    import httpx

    from tests.conftest import FakeServer

TEST_URL = "https://api.example.com/users"


class UserWithId(BaseModel):
    Id: int
    Name: str


async def chunks() -> AsyncIterator[bytes]:
    for chunk in (b"ab", b"cd", b"ef"):
        yield chunk


################################
#     Tests for post_async     #
################################


@pytest.mark.asyncio
async def test_post_async_json(server: FakeServer, async_http_client: httpx.AsyncClient) -> None:
    server.respond(201, b'{"Id":101,"Name":"John Doe"}')
    async with async_http_client:
        response = await post_async(
            TEST_URL, {"Name": "John Doe"}, result_type=UserWithId, client=async_http_client
        )
    assert response.status_code == 201
    assert response.content == UserWithId(Id=101, Name="John Doe")
    assert json.loads(server.last_request.content) == {"Name": "John Doe"}
    assert server.last_request.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_post_async_async_iterable(
    server: FakeServer, async_http_client: httpx.AsyncClient
) -> None:
    async with async_http_client:
        await post_async(
            TEST_URL, chunks(), content_type="application/octet-stream", client=async_http_client
        )
    assert server.last_request.content == b"abcdef"


@pytest.mark.asyncio
async def test_post_async_file_stream(
    server: FakeServer, async_http_client: httpx.AsyncClient
) -> None:
    data = b"x" * 200_000
    async with async_http_client:
        await post_async(TEST_URL, io.BytesIO(data), client=async_http_client)
    assert server.last_request.content == data


@pytest.mark.asyncio
async def test_post_async_sync_iterator(
    server: FakeServer, async_http_client: httpx.AsyncClient
) -> None:
    async with async_http_client:
        await post_async(TEST_URL, iter([b"1", b"2"]), client=async_http_client)
    assert server.last_request.content == b"12"


@pytest.mark.asyncio
async def test_post_async_invalid_token(
    server: FakeServer, async_http_client: httpx.AsyncClient
) -> None:
    async with async_http_client:
        with pytest.raises(ValueError, match=r"token must be a non-empty string"):
            await post_async(TEST_URL, {}, token="", client=async_http_client)
    assert server.requests == []
