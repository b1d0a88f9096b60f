r"""Send built requests through an ``httpx`` client.

The dispatcher is the only place where typedrest touches the network.
Transport failures (``httpx.RequestError`` and its subclasses) are
logged and re-raised unchanged: there is no retry, no timeout policy
and no recovery at this layer.
"""

from __future__ import annotations

__all__ = ["send", "send_async", "stream", "stream_async"]

import inspect
import logging
import time
from dataclasses import replace
from typing import TYPE_CHECKING, Any

import httpx

from typedrest.callbacks import invoke_on_request, invoke_on_response
from typedrest.core.config import ClientConfig
from typedrest.decoding import ResponseDecoder
from typedrest.models import AsyncResponseStream, ResponseStream
from typedrest.request_builder import aiter_stream
from typedrest.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from typedrest.models import HttpRequest, Response

logger: logging.Logger = logging.getLogger(__name__)

_DEFAULT_DECODER = ResponseDecoder()


def _prepare(request: HttpRequest, config: ClientConfig) -> float:
    invoke_on_request(
        config.on_request,
        url=request.url,
        method=request.method,
        headers=request.all_headers,
        has_body=request.has_body,
    )
    logger.debug(f"Sending {request.method} request to {request.url}")
    return time.time()


def _complete(
    request: HttpRequest, response: httpx.Response, config: ClientConfig, start_time: float
) -> None:
    invoke_on_response(
        config.on_response,
        url=request.url,
        method=request.method,
        status_code=response.status_code,
        headers=response.headers,
        start_time=start_time,
    )
    log_structured(
        logger,
        logging.DEBUG,
        f"{request.method} request to {request.url} returned {response.status_code}",
        method=request.method,
        url=request.url,
        status_code=response.status_code,
        elapsed=time.time() - start_time,
    )


def _log_transport_error(request: HttpRequest, exc: httpx.RequestError) -> None:
    logger.debug(
        f"{request.method} request to {request.url} encountered {type(exc).__name__}: {exc}"
    )


def _to_async(request: HttpRequest) -> HttpRequest:
    # httpx.AsyncClient only accepts bytes or asynchronous iterables as body
    if request.body is None or isinstance(request.body, bytes):
        return request
    return replace(request, body=aiter_stream(request.body))


def send(
    client: httpx.Client,
    request: HttpRequest,
    result_type: Any = Any,
    *,
    config: ClientConfig | None = None,
) -> Response[Any]:
    r"""Send a request and decode its response.

    Args:
        client: The ``httpx.Client`` used to send the request.
        request: The request to send.
        result_type: The type the response body is decoded into.
        config: Optional config providing the decoder and the hooks.

    Returns:
        The decoded ``Response``.

    Raises:
        httpx.RequestError: If the request could not be sent.
        ConversionError: If a scalar result cannot be parsed.
        DeserializationError: If a JSON result cannot be decoded.
    """
    config = config or ClientConfig()
    start_time = _prepare(request, config)
    try:
        response = client.send(request.to_httpx(client))
    except httpx.RequestError as exc:
        _log_transport_error(request, exc)
        raise
    _complete(request, response, config, start_time)
    return (config.decoder or _DEFAULT_DECODER).decode_response(
        response.status_code,
        response.headers,
        response.content,
        result_type,
        url=request.url,
        method=request.method,
    )


async def send_async(
    client: httpx.AsyncClient,
    request: HttpRequest,
    result_type: Any = Any,
    *,
    config: ClientConfig | None = None,
) -> Response[Any]:
    r"""Send a request asynchronously and decode its response.

    See ``send`` for the arguments and the raised exceptions.
    """
    config = config or ClientConfig()
    request = _to_async(request)
    start_time = _prepare(request, config)
    try:
        response = await client.send(request.to_httpx(client))
    except httpx.RequestError as exc:
        _log_transport_error(request, exc)
        raise
    _complete(request, response, config, start_time)
    return (config.decoder or _DEFAULT_DECODER).decode_response(
        response.status_code,
        response.headers,
        response.content,
        result_type,
        url=request.url,
        method=request.method,
    )


def stream(
    client: httpx.Client,
    request: HttpRequest,
    callback: Callable[[ResponseStream, int, httpx.Headers], Any],
    *,
    config: ClientConfig | None = None,
) -> Any:
    r"""Send a request and hand the raw response body to a callback.

    The body is never buffered nor decoded: ``callback`` receives a
    readable binary stream, the status code and the response headers.
    The response is closed once the callback returns or raises.

    Args:
        client: The ``httpx.Client`` used to send the request.
        request: The request to send.
        callback: Called as ``callback(stream, status_code, headers)``.
        config: Optional config providing the hooks.

    Returns:
        The value returned by ``callback``.

    Raises:
        httpx.RequestError: If the request could not be sent.
    """
    config = config or ClientConfig()
    start_time = _prepare(request, config)
    try:
        response = client.send(request.to_httpx(client), stream=True)
    except httpx.RequestError as exc:
        _log_transport_error(request, exc)
        raise
    try:
        _complete(request, response, config, start_time)
        return callback(ResponseStream(response), response.status_code, response.headers)
    finally:
        response.close()


async def stream_async(
    client: httpx.AsyncClient,
    request: HttpRequest,
    callback: Callable[[AsyncResponseStream, int, httpx.Headers], Any | Awaitable[Any]],
    *,
    config: ClientConfig | None = None,
) -> Any:
    r"""Send a request asynchronously and hand the raw response body to a
    callback.

    ``callback`` may be a plain function or a coroutine function. See
    ``stream`` for the details.
    """
    config = config or ClientConfig()
    request = _to_async(request)
    start_time = _prepare(request, config)
    try:
        response = await client.send(request.to_httpx(client), stream=True)
    except httpx.RequestError as exc:
        _log_transport_error(request, exc)
        raise
    try:
        _complete(request, response, config, start_time)
        result = callback(
            AsyncResponseStream(response), response.status_code, response.headers
        )
        if inspect.isawaitable(result):
            result = await result
        return result
    finally:
        await response.aclose()
