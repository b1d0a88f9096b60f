r"""Contains synchronous HTTP PUT requests with typed responses."""

from __future__ import annotations

__all__ = ["put"]

from typing import TYPE_CHECKING, Any

from typedrest.core.http_logic import execute_http_method
from typedrest.request_builder import NO_TOKEN

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from typedrest.core.config import ClientConfig
    from typedrest.models import Response


def put(
    url: str,
    payload: Any = None,
    *,
    result_type: Any = Any,
    headers: Mapping[str, str] | None = None,
    token: str | None = NO_TOKEN,
    content_type: str | None = None,
    client: httpx.Client | None = None,
    config: ClientConfig | None = None,
) -> Response[Any]:
    r"""Send an HTTP PUT request and decode the response body.

    The arguments behave as in post.

    Example:
        ```pycon
        >>> from typedrest import put
        >>> response = put(
        ...     "https://api.example.com/posts/1", {"title": "updated"}, token="secret"
        ... )  # doctest: +SKIP

        ```
    """
    return execute_http_method(
        url=url,
        method="PUT",
        payload=payload,
        result_type=result_type,
        headers=headers,
        token=token,
        content_type=content_type,
        client=client,
        config=config,
    )
