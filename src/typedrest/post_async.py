r"""Contains asynchronous HTTP POST requests with typed responses."""

from __future__ import annotations

__all__ = ["post_async"]

from typing import TYPE_CHECKING, Any

from typedrest.core.http_logic import execute_http_method_async
from typedrest.request_builder import NO_TOKEN

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from typedrest.core.config import ClientConfig
    from typedrest.models import Response


async def post_async(
    url: str,
    payload: Any = None,
    *,
    result_type: Any = Any,
    headers: Mapping[str, str] | None = None,
    token: str | None = NO_TOKEN,
    content_type: str | None = None,
    client: httpx.AsyncClient | None = None,
    config: ClientConfig | None = None,
) -> Response[Any]:
    r"""Send an HTTP POST request asynchronously and decode the response
    body.

    The arguments behave as in post, except that client is an
    httpx.AsyncClient and that the payload may also be an
    asynchronous iterable of byte chunks.
    """
    return await execute_http_method_async(
        url=url,
        method="POST",
        payload=payload,
        result_type=result_type,
        headers=headers,
        token=token,
        content_type=content_type,
        client=client,
        config=config,
    )
