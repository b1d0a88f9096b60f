r"""Contains asynchronous HTTP DELETE requests with typed responses."""

from __future__ import annotations

__all__ = ["delete_async"]

from typing import TYPE_CHECKING, Any

from typedrest.core.http_logic import execute_http_method_async
from typedrest.request_builder import NO_TOKEN

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from typedrest.core.config import ClientConfig
    from typedrest.models import Response


async def delete_async(
    url: str,
    *,
    result_type: Any = Any,
    headers: Mapping[str, str] | None = None,
    token: str | None = NO_TOKEN,
    client: httpx.AsyncClient | None = None,
    config: ClientConfig | None = None,
) -> Response[Any]:
    r"""Send an HTTP DELETE request asynchronously and decode the response
    body.

    Example:
        ```pycon
        >>> import asyncio
        >>> from typedrest import delete_async
        >>> asyncio.run(delete_async("https://api.example.com/posts/1"))  # doctest: +SKIP

        ```
    """
    return await execute_http_method_async(
        url=url,
        method="DELETE",
        result_type=result_type,
        headers=headers,
        token=token,
        client=client,
        config=config,
    )
