r"""Synchronous client for typed REST calls.

This module provides a context manager-based client for making multiple
typed HTTP requests through one shared ``httpx.Client``, reusing its
connection pool across calls.
"""

from __future__ import annotations

__all__ = ["RestClient"]

from typing import TYPE_CHECKING, Any

from typedrest.core.config import ClientConfig
from typedrest.core.http_logic import execute_http_method, execute_stream
from typedrest.request_builder import NO_TOKEN

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType
    from typing import Self

    import httpx

    from typedrest.models import Response, ResponseStream


class RestClient:
    r"""Synchronous client for typed REST calls.

    The underlying ``httpx.Client`` is injected by the caller or created
    from the config. ``RestClient`` only closes a client it created
    itself, so a single ``httpx.Client`` can be shared by the whole
    application and outlive any ``RestClient``.

    .. code-block:: python

        import httpx
        from typedrest import RestClient

        with httpx.Client(base_url="https://api.example.com") as http_client:
            client = RestClient(client=http_client)
            posts = client.get("/posts", result_type=list[Post]).content
        # http_client is closed here by the outer ``with`` block

        with RestClient() as client:
            user = client.post("https://api.example.com/users", {"Name": "John Doe"})
        # the client created by RestClient is closed here

    Args:
        client: Optional httpx.Client instance to use for requests.
            If ``None``, a new client is created with ``config.timeout``.
        config: Optional ClientConfig instance. If ``None``, a default
            ClientConfig is used.
    """

    def __init__(
        self,
        *,
        client: httpx.Client | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        self._config: ClientConfig = config or ClientConfig()
        self._owns_client = client is None
        self._client: httpx.Client = client or self._config.create_client()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(config={self._config})"

    @property
    def config(self) -> ClientConfig:
        return self._config

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        r"""Close the underlying ``httpx.Client`` if this object created
        it."""
        if self._owns_client:
            self._client.close()

    def request(
        self,
        method: str,
        url: str,
        payload: Any = None,
        *,
        result_type: Any = Any,
        headers: Mapping[str, str] | None = None,
        token: str | None = NO_TOKEN,
        content_type: str | None = None,
    ) -> Response[Any]:
        r"""Send an HTTP request and decode the response body.

        Args:
            method: The HTTP method.
            url: The URL to send the request to.
            payload: Optional request payload.
            result_type: The type the response body is decoded into.
            headers: Optional request headers. If None, JSON defaults are
                used.
            token: Optional bearer token. Passing ``None`` explicitly is
                an error.
            content_type: Optional media type of the payload.

        Returns:
            The decoded ``Response``.

        Raises:
            ValueError: If ``token`` is ``None`` or empty.
            httpx.RequestError: If the request could not be sent.
            DecodeError: If the response body cannot be decoded.
        """
        return execute_http_method(
            url=url,
            method=method,
            payload=payload,
            result_type=result_type,
            headers=headers,
            token=token,
            content_type=content_type,
            client=self._client,
            config=self._config,
        )

    def get(
        self,
        url: str,
        *,
        result_type: Any = Any,
        headers: Mapping[str, str] | None = None,
        token: str | None = NO_TOKEN,
    ) -> Response[Any]:
        r"""Send an HTTP GET request. See ``request`` for the arguments."""
        return self.request("GET", url, result_type=result_type, headers=headers, token=token)

    def post(
        self,
        url: str,
        payload: Any = None,
        *,
        result_type: Any = Any,
        headers: Mapping[str, str] | None = None,
        token: str | None = NO_TOKEN,
        content_type: str | None = None,
    ) -> Response[Any]:
        r"""Send an HTTP POST request. See ``request`` for the arguments."""
        return self.request(
            "POST",
            url,
            payload,
            result_type=result_type,
            headers=headers,
            token=token,
            content_type=content_type,
        )

    def put(
        self,
        url: str,
        payload: Any = None,
        *,
        result_type: Any = Any,
        headers: Mapping[str, str] | None = None,
        token: str | None = NO_TOKEN,
        content_type: str | None = None,
    ) -> Response[Any]:
        r"""Send an HTTP PUT request. See ``request`` for the arguments."""
        return self.request(
            "PUT",
            url,
            payload,
            result_type=result_type,
            headers=headers,
            token=token,
            content_type=content_type,
        )

    def patch(
        self,
        url: str,
        payload: Any = None,
        *,
        result_type: Any = Any,
        headers: Mapping[str, str] | None = None,
        token: str | None = NO_TOKEN,
        content_type: str | None = None,
    ) -> Response[Any]:
        r"""Send an HTTP PATCH request. See ``request`` for the arguments."""
        return self.request(
            "PATCH",
            url,
            payload,
            result_type=result_type,
            headers=headers,
            token=token,
            content_type=content_type,
        )

    def delete(
        self,
        url: str,
        *,
        result_type: Any = Any,
        headers: Mapping[str, str] | None = None,
        token: str | None = NO_TOKEN,
    ) -> Response[Any]:
        r"""Send an HTTP DELETE request. See ``request`` for the
        arguments."""
        return self.request("DELETE", url, result_type=result_type, headers=headers, token=token)

    def get_stream(
        self,
        url: str,
        callback: Callable[[ResponseStream, int, httpx.Headers], Any],
        *,
        headers: Mapping[str, str] | None = None,
        token: str | None = NO_TOKEN,
        accept: str | None = None,
    ) -> Any:
        r"""Send an HTTP GET request and hand the response body stream to
        ``callback(stream, status_code, headers)``.

        Returns:
            The value returned by ``callback``.
        """
        return execute_stream(
            url=url,
            method="GET",
            callback=callback,
            headers=headers,
            token=token,
            accept=accept,
            client=self._client,
            config=self._config,
        )
