r"""Contains the synchronous generic HTTP request function."""

from __future__ import annotations

__all__ = ["request"]

from typing import TYPE_CHECKING, Any

from typedrest.core.http_logic import execute_http_method
from typedrest.request_builder import NO_TOKEN

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from typedrest.core.config import ClientConfig
    from typedrest.models import Response


def request(
    method: str,
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
    r"""Send an HTTP request with an arbitrary method and decode the
    response body.

    Args:
        method: The HTTP method, e.g. ``"GET"`` or ``"OPTIONS"``.
        url: The URL to send the request to.
        payload: Optional request payload.
        result_type: The type the response body is decoded into.
        headers: Optional request headers.
        token: Optional bearer token. Passing ``None`` explicitly is an
            error.
        content_type: Optional media type of the payload.
        client: An optional httpx.Client object to use for making requests.
        config: An optional ClientConfig object.

    Returns:
        The decoded ``Response``.

    Example:
        ```pycon
        >>> from typedrest import request
        >>> response = request("OPTIONS", "https://api.example.com/posts")  # doctest: +SKIP

        ```
    """
    return execute_http_method(
        url=url,
        method=method,
        payload=payload,
        result_type=result_type,
        headers=headers,
        token=token,
        content_type=content_type,
        client=client,
        config=config,
    )
