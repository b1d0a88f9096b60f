from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from unittest.mock import Mock

import httpx
import pytest

from typedrest.core import ClientConfig, send, send_async, stream, stream_async
from typedrest.decoding import ResponseDecoder
from typedrest.models import HttpRequest

if TYPE_CHECKING:
    from tests.conftest import FakeServer

TEST_URL = "https://api.example.com/data"


def make_request(**kwargs: Any) -> HttpRequest:
    return HttpRequest(
        url=TEST_URL,
        method=kwargs.pop("method", "GET"),
        headers=kwargs.pop("headers", {"Accept": "application/json"}),
        **kwargs,
    )


##########################
#     Tests for send     #
##########################


def test_send_decodes_response(server: FakeServer, http_client: httpx.Client) -> None:
    server.respond(200, b'{"a":1}')
    response = send(http_client, make_request())
    assert response.status_code == 200
    assert response.content == {"a": 1}
    assert response.url == TEST_URL
    assert response.method == "GET"


def test_send_body_and_content_headers(server: FakeServer, http_client: httpx.Client) -> None:
    send(
        http_client,
        make_request(
            method="POST", content_headers={"Content-Type": "text/plain"}, body=b"hello"
        ),
    )
    assert server.last_request.content == b"hello"
    assert server.last_request.headers["Content-Type"] == "text/plain"


def test_send_custom_decoder(server: FakeServer, http_client: httpx.Client) -> None:
    decoder = Mock(spec=ResponseDecoder)
    send(http_client, make_request(), int, config=ClientConfig(decoder=decoder))
    decoder.decode_response.assert_called_once()
    assert decoder.decode_response.call_args.args[3] is int


def test_send_transport_error(failing_client: httpx.Client, caplog: pytest.LogCaptureFixture) -> None:
    on_response = Mock()
    with (
        caplog.at_level(logging.DEBUG, logger="typedrest"),
        pytest.raises(httpx.ConnectError),
    ):
        send(failing_client, make_request(), config=ClientConfig(on_response=on_response))
    on_response.assert_not_called()
    assert "ConnectError" in caplog.text


def test_send_logs_response(
    server: FakeServer, http_client: httpx.Client, caplog: pytest.LogCaptureFixture
) -> None:
    server.respond(418)
    with caplog.at_level(logging.DEBUG, logger="typedrest"):
        send(http_client, make_request())
    records = [record for record in caplog.records if getattr(record, "status_code", None)]
    assert len(records) == 1
    assert records[0].status_code == 418
    assert records[0].method == "GET"
    assert records[0].url == TEST_URL


def test_send_hooks(server: FakeServer, http_client: httpx.Client) -> None:
    server.respond(200, b"", x_id="1")
    on_request, on_response = Mock(), Mock()
    send(
        http_client,
        make_request(method="PUT", content_headers={"Content-Type": "text/plain"}, body=b"x"),
        config=ClientConfig(on_request=on_request, on_response=on_response),
    )
    request_info = on_request.call_args.args[0]
    assert request_info.method == "PUT"
    assert request_info.headers == {"Accept": "application/json", "Content-Type": "text/plain"}
    assert request_info.has_body
    response_info = on_response.call_args.args[0]
    assert response_info.status_code == 200
    assert response_info.headers["x-id"] == "1"


################################
#     Tests for send_async     #
################################


@pytest.mark.asyncio
async def test_send_async(server: FakeServer, async_http_client: httpx.AsyncClient) -> None:
    server.respond(200, b"5")
    async with async_http_client:
        response = await send_async(async_http_client, make_request(), int)
    assert response.content == 5


@pytest.mark.asyncio
async def test_send_async_iterator_body(
    server: FakeServer, async_http_client: httpx.AsyncClient
) -> None:
    async with async_http_client:
        await send_async(
            async_http_client, make_request(method="POST", body=iter([b"a", b"b"]))
        )
    assert server.last_request.content == b"ab"


############################
#     Tests for stream     #
############################


def test_stream_returns_callback_result(server: FakeServer, http_client: httpx.Client) -> None:
    server.respond(500, b"boom")
    result = stream(
        http_client,
        make_request(),
        lambda body, status_code, headers: (status_code, body.read()),
    )
    assert result == (500, b"boom")


@pytest.mark.asyncio
async def test_stream_async_returns_callback_result(
    server: FakeServer, async_http_client: httpx.AsyncClient
) -> None:
    server.respond(200, b"data")

    async def callback(body, status_code, headers):  # noqa: ANN001, ANN202
        return await body.read()

    async with async_http_client:
        assert await stream_async(async_http_client, make_request(), callback) == b"data"
