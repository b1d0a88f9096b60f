r"""Shared HTTP method logic for sync and async operations.

This module contains the logic behind the functional API (``get``,
``post``...) and the client classes: it builds the request, picks or
creates the ``httpx`` client, and dispatches the request.
"""

from __future__ import annotations

__all__ = [
    "execute_http_method",
    "execute_http_method_async",
    "execute_stream",
    "execute_stream_async",
]

from typing import TYPE_CHECKING, Any

from typedrest.core.config import ClientConfig
from typedrest.core.dispatch import send, send_async, stream, stream_async
from typedrest.request_builder import NO_TOKEN, build_request

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    import httpx

    from typedrest.models import HttpRequest, Response


def _build(
    url: str,
    method: str,
    config: ClientConfig,
    *,
    payload: Any = None,
    headers: Mapping[str, str] | None = None,
    token: str | None = NO_TOKEN,
    content_type: str | None = None,
    accept: str | None = None,
) -> HttpRequest:
    if headers is None and accept is not None:
        headers = {"Accept": accept}
    return build_request(
        method,
        url,
        payload=payload,
        headers=headers,
        token=token,
        content_type=content_type,
        base_headers=config.headers,
    )


def execute_http_method(
    url: str,
    method: str,
    *,
    payload: Any = None,
    result_type: Any = Any,
    headers: Mapping[str, str] | None = None,
    token: str | None = NO_TOKEN,
    content_type: str | None = None,
    client: httpx.Client | None = None,
    config: ClientConfig | None = None,
) -> Response[Any]:
    """Execute an HTTP method and decode the response (synchronous).

    This is the core shared logic for all synchronous HTTP methods.
    It handles request building, client creation, and cleanup.

    Args:
        url: The URL to send the request to.
        method: The HTTP method (GET, POST, PUT, PATCH, DELETE).
        payload: Optional request payload.
        result_type: The type the response body is decoded into.
        headers: Optional request headers. If ``None``, JSON defaults
            are used.
        token: Optional bearer token. Must be a non-empty string if given.
        content_type: Optional body media type used with default headers.
        client: An optional httpx.Client object to use for making requests.
            If None, a new client will be created and closed after use.
        config: An optional ClientConfig object. If None, default
            ClientConfig values are used.

    Returns:
        The decoded ``Response``.

    Raises:
        ValueError: If ``token`` is explicitly ``None`` or empty. Raised
            before any network activity.
        httpx.RequestError: If the request could not be sent.
        DecodeError: If the response body cannot be decoded.
    """
    config = config or ClientConfig()
    request = _build(
        url, method, config, payload=payload, headers=headers, token=token, content_type=content_type
    )
    owns_client = client is None
    client = client or config.create_client()
    try:
        return send(client, request, result_type, config=config)
    finally:
        if owns_client:
            client.close()


async def execute_http_method_async(
    url: str,
    method: str,
    *,
    payload: Any = None,
    result_type: Any = Any,
    headers: Mapping[str, str] | None = None,
    token: str | None = NO_TOKEN,
    content_type: str | None = None,
    client: httpx.AsyncClient | None = None,
    config: ClientConfig | None = None,
) -> Response[Any]:
    """Execute an HTTP method and decode the response (asynchronous).

    See ``execute_http_method`` for the arguments.
    """
    config = config or ClientConfig()
    request = _build(
        url, method, config, payload=payload, headers=headers, token=token, content_type=content_type
    )
    owns_client = client is None
    client = client or config.create_async_client()
    try:
        return await send_async(client, request, result_type, config=config)
    finally:
        if owns_client:
            await client.aclose()


def execute_stream(
    url: str,
    method: str,
    callback: Callable[..., Any],
    *,
    headers: Mapping[str, str] | None = None,
    token: str | None = NO_TOKEN,
    accept: str | None = None,
    client: httpx.Client | None = None,
    config: ClientConfig | None = None,
) -> Any:
    """Execute an HTTP method and stream the response body to a callback
    (synchronous).

    Args:
        url: The URL to send the request to.
        method: The HTTP method, usually GET.
        callback: Called as ``callback(stream, status_code, headers)``.
        headers: Optional request headers.
        token: Optional bearer token. Must be a non-empty string if given.
        accept: Optional ``Accept`` header, used when ``headers`` is None.
        client: An optional httpx.Client object to use for making requests.
        config: An optional ClientConfig object.

    Returns:
        The value returned by ``callback``.
    """
    config = config or ClientConfig()
    request = _build(url, method, config, headers=headers, token=token, accept=accept)
    owns_client = client is None
    client = client or config.create_client()
    try:
        return stream(client, request, callback, config=config)
    finally:
        if owns_client:
            client.close()


async def execute_stream_async(
    url: str,
    method: str,
    callback: Callable[..., Any],
    *,
    headers: Mapping[str, str] | None = None,
    token: str | None = NO_TOKEN,
    accept: str | None = None,
    client: httpx.AsyncClient | None = None,
    config: ClientConfig | None = None,
) -> Any:
    """Execute an HTTP method and stream the response body to a callback
    (asynchronous).

    See ``execute_stream`` for the arguments. ``callback`` may be a
    coroutine function.
    """
    config = config or ClientConfig()
    request = _build(url, method, config, headers=headers, token=token, accept=accept)
    owns_client = client is None
    client = client or config.create_async_client()
    try:
        return await stream_async(client, request, callback, config=config)
    finally:
        if owns_client:
            await client.aclose()
