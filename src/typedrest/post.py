r"""Contains synchronous HTTP POST requests with typed responses."""

from __future__ import annotations

__all__ = ["post"]

from typing import TYPE_CHECKING, Any

from typedrest.core.http_logic import execute_http_method
from typedrest.request_builder import NO_TOKEN

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from typedrest.core.config import ClientConfig
    from typedrest.models import Response


def post(
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
    r"""Send an HTTP POST request and decode the response body.

    Args:
        url: The URL to send the POST request to.
        payload: The request payload. Objects are serialized to JSON,
            ``str`` and ``bytes`` are sent unchanged, and readable binary
            streams are streamed without being loaded into memory.
        result_type: The type the response body is decoded into.
        headers: Optional request headers. If None, the request is sent
            with JSON ``Accept`` and ``Content-Type`` headers.
        token: Optional bearer token. Passing ``None`` explicitly is an
            error.
        content_type: Optional media type of the payload. It sets the
            ``Content-Type`` header, even when ``headers`` is given.
            Defaults to JSON when no ``Content-Type`` is set otherwise.
        client: An optional httpx.Client object to use for making requests.
            If None, a new client will be created and closed after use.
        config: An optional ClientConfig object.

    Returns:
        A ``Response`` holding the decoded content on success, or the
        response text as ``error`` otherwise.

    Raises:
        ValueError: If ``token`` is ``None`` or empty. No request is sent.
        httpx.RequestError: If the request could not be sent.
        DecodeError: If the response body cannot be decoded.

    Example:
        ```pycon
        >>> from pydantic import BaseModel
        >>> from typedrest import post
        >>> class UserWithId(BaseModel):
        ...     Id: int
        ...     Name: str
        ...
        >>> response = post(
        ...     "https://api.example.com/posts", {"Name": "John Doe"}, result_type=UserWithId
        ... )  # doctest: +SKIP
        >>> response.content.Id  # doctest: +SKIP
        101

        ```
    """
    return execute_http_method(
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
