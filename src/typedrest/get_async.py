r"""Contains asynchronous HTTP GET requests with typed responses."""

from __future__ import annotations

__all__ = ["get_async", "get_stream_async"]

from typing import TYPE_CHECKING, Any

from typedrest.core.http_logic import execute_http_method_async, execute_stream_async
from typedrest.request_builder import NO_TOKEN

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    import httpx

    from typedrest.core.config import ClientConfig
    from typedrest.models import Response


async def get_async(
    url: str,
    *,
    result_type: Any = Any,
    headers: Mapping[str, str] | None = None,
    token: str | None = NO_TOKEN,
    client: httpx.AsyncClient | None = None,
    config: ClientConfig | None = None,
) -> Response[Any]:
    r"""Send an HTTP GET request asynchronously and decode the response
    body.

    Args:
        url: The URL to send the GET request to.
        result_type: The type the response body is decoded into.
        headers: Optional request headers. If None, the request is sent
            with ``Accept: application/json``.
        token: Optional bearer token. Passing ``None`` explicitly is an
            error.
        client: An optional httpx.AsyncClient object to use for making
            requests. If None, a new client will be created and closed
            after use.
        config: An optional ClientConfig object.

    Returns:
        A ``Response`` holding the decoded content or the error text.

    Example:
        ```pycon
        >>> import asyncio
        >>> from typedrest import get_async
        >>> async def example():
        ...     response = await get_async("https://api.example.com/posts", result_type=list)
        ...     return response.content
        ...
        >>> asyncio.run(example())  # doctest: +SKIP

        ```
    """
    return await execute_http_method_async(
        url=url,
        method="GET",
        result_type=result_type,
        headers=headers,
        token=token,
        client=client,
        config=config,
    )


async def get_stream_async(
    url: str,
    callback: Callable[..., Any],
    *,
    headers: Mapping[str, str] | None = None,
    token: str | None = NO_TOKEN,
    accept: str | None = None,
    client: httpx.AsyncClient | None = None,
    config: ClientConfig | None = None,
) -> Any:
    r"""Send an HTTP GET request asynchronously and hand the response body
    stream to a callback.

    ``callback`` is called as ``callback(stream, status_code, headers)``
    where ``stream`` is an ``AsyncResponseStream``. It may be a coroutine
    function, in which case it is awaited.
    """
    return await execute_stream_async(
        url=url,
        method="GET",
        callback=callback,
        headers=headers,
        token=token,
        accept=accept,
        client=client,
        config=config,
    )
