r"""Contains synchronous HTTP DELETE requests with typed responses."""

from __future__ import annotations

__all__ = ["delete"]

from typing import TYPE_CHECKING, Any

from typedrest.core.http_logic import execute_http_method
from typedrest.request_builder import NO_TOKEN

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from typedrest.core.config import ClientConfig
    from typedrest.models import Response


def delete(
    url: str,
    *,
    result_type: Any = Any,
    headers: Mapping[str, str] | None = None,
    token: str | None = NO_TOKEN,
    client: httpx.Client | None = None,
    config: ClientConfig | None = None,
) -> Response[Any]:
    r"""Send an HTTP DELETE request and decode the response body.

    An empty response body, as sent with ``204 No Content``, is decoded
    as ``None`` for JSON result types.

    The arguments behave as in ``get``.

    Example:
        ```pycon
        >>> from typedrest import delete
        >>> response = delete("https://api.example.com/posts/1", token="secret")  # doctest: +SKIP
        >>> response.status_code  # doctest: +SKIP
        204

        ```
    """
    return execute_http_method(
        url=url,
        method="DELETE",
        result_type=result_type,
        headers=headers,
        token=token,
        client=client,
        config=config,
    )
