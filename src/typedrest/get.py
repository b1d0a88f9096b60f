r"""Contains synchronous HTTP GET requests with typed responses."""

from __future__ import annotations

__all__ = ["get", "get_stream"]

from typing import TYPE_CHECKING, Any

from typedrest.core.http_logic import execute_http_method, execute_stream
from typedrest.request_builder import NO_TOKEN

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    import httpx

    from typedrest.core.config import ClientConfig
    from typedrest.models import Response, ResponseStream


def get(
    url: str,
    *,
    result_type: Any = Any,
    headers: Mapping[str, str] | None = None,
    token: str | None = NO_TOKEN,
    client: httpx.Client | None = None,
    config: ClientConfig | None = None,
) -> Response[Any]:
    r"""Send an HTTP GET request and decode the response body.

    Args:
        url: The URL to send the GET request to.
        result_type: The type the response body is decoded into:
            ``bytes``, ``str``, a scalar such as ``int``, ``Any`` for the
            parsed JSON tree, or any type pydantic can validate.
        headers: Optional request headers. If None, the request is sent
            with ``Accept: application/json``.
        token: Optional bearer token sent as ``Authorization`` header.
            Passing ``None`` explicitly is an error.
        client: An optional httpx.Client object to use for making requests.
            If None, a new client will be created and closed after use.
        config: An optional ClientConfig object. If None, default
            ClientConfig values are used.

    Returns:
        A ``Response`` holding the decoded content on success, or the
        response text as ``error`` otherwise.

    Raises:
        ValueError: If ``token`` is ``None`` or empty. No request is sent.
        httpx.RequestError: If the request could not be sent.
        DecodeError: If the response body cannot be decoded into
            ``result_type``.

    Example:
        ```pycon
        >>> from typedrest import get
        >>> response = get("https://api.example.com/posts", result_type=str)  # doctest: +SKIP
        >>> response.content  # doctest: +SKIP
        '[{"id": 1, "title": "Post 1"}]'

        ```
    """
    return execute_http_method(
        url=url,
        method="GET",
        result_type=result_type,
        headers=headers,
        token=token,
        client=client,
        config=config,
    )


def get_stream(
    url: str,
    callback: Callable[[ResponseStream, int, httpx.Headers], Any],
    *,
    headers: Mapping[str, str] | None = None,
    token: str | None = NO_TOKEN,
    accept: str | None = None,
    client: httpx.Client | None = None,
    config: ClientConfig | None = None,
) -> Any:
    r"""Send an HTTP GET request and hand the response body stream to a
    callback.

    The body is neither buffered nor decoded, which makes this function
    suitable for large downloads. The callback runs whatever the status
    code is, and the response is closed once it returns.

    Args:
        url: The URL to send the GET request to.
        callback: Called as ``callback(stream, status_code, headers)``
            where ``stream`` is a readable binary stream.
        headers: Optional request headers.
        token: Optional bearer token. Passing ``None`` explicitly is an
            error.
        accept: Optional ``Accept`` header, used when ``headers`` is None.
        client: An optional httpx.Client object to use for making requests.
        config: An optional ClientConfig object.

    Returns:
        The value returned by ``callback``.

    Example:
        ```pycon
        >>> import shutil
        >>> from typedrest import get_stream
        >>> with open("archive.zip", "wb") as file:  # doctest: +SKIP
        ...     get_stream(
        ...         "https://api.example.com/archive.zip",
        ...         lambda stream, status, headers: shutil.copyfileobj(stream, file),
        ...         accept="application/zip",
        ...     )
        ...

        ```
    """
    return execute_stream(
        url=url,
        method="GET",
        callback=callback,
        headers=headers,
        token=token,
        accept=accept,
        client=client,
        config=config,
    )
