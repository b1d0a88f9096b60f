r"""Asynchronous client for typed REST calls.

This module provides an async context manager-based client for making
multiple typed HTTP requests through one shared ``httpx.AsyncClient``.
"""

from __future__ import annotations

__all__ = ["AsyncRestClient"]

from typing import TYPE_CHECKING, Any

from typedrest.core.config import ClientConfig
from typedrest.core.http_logic import execute_http_method_async, execute_stream_async
from typedrest.request_builder import NO_TOKEN

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType
    from typing import Self

    import httpx

    from typedrest.models import Response


class AsyncRestClient:
    r"""Asynchronous client for typed REST calls.

    It mirrors ``RestClient`` over an ``httpx.AsyncClient``. Calls may be
    issued concurrently from several tasks.

    Args:
        client: Optional httpx.AsyncClient instance to use for requests.
            If ``None``, a new client is created with ``config.timeout``
            and closed when the context exits.
        config: Optional ClientConfig instance.

    Example:
        ```pycon
        >>> import asyncio
        >>> from typedrest import AsyncRestClient
        >>> async def main():  # doctest: +SKIP
        ...     async with AsyncRestClient() as client:
        ...         posts, users = await asyncio.gather(
        ...             client.get("https://api.example.com/posts"),
        ...             client.get("https://api.example.com/users"),
        ...         )
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        self._config: ClientConfig = config or ClientConfig()
        self._owns_client = client is None
        self._client: httpx.AsyncClient = client or self._config.create_async_client()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(config={self._config})"

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        r"""Close the underlying ``httpx.AsyncClient`` if this object
        created it."""
        if self._owns_client:
            await self._client.aclose()

    async def request(
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

        See ``RestClient.request`` for the arguments.
        """
        return await execute_http_method_async(
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

    async def get(
        self,
        url: str,
        *,
        result_type: Any = Any,
        headers: Mapping[str, str] | None = None,
        token: str | None = NO_TOKEN,
    ) -> Response[Any]:
        return await self.request("GET", url, result_type=result_type, headers=headers, token=token)

    async def post(
        self,
        url: str,
        payload: Any = None,
        *,
        result_type: Any = Any,
        headers: Mapping[str, str] | None = None,
        token: str | None = NO_TOKEN,
        content_type: str | None = None,
    ) -> Response[Any]:
        return await self.request(
            "POST",
            url,
            payload,
            result_type=result_type,
            headers=headers,
            token=token,
            content_type=content_type,
        )

    async def put(
        self,
        url: str,
        payload: Any = None,
        *,
        result_type: Any = Any,
        headers: Mapping[str, str] | None = None,
        token: str | None = NO_TOKEN,
        content_type: str | None = None,
    ) -> Response[Any]:
        return await self.request(
            "PUT",
            url,
            payload,
            result_type=result_type,
            headers=headers,
            token=token,
            content_type=content_type,
        )

    async def patch(
        self,
        url: str,
        payload: Any = None,
        *,
        result_type: Any = Any,
        headers: Mapping[str, str] | None = None,
        token: str | None = NO_TOKEN,
        content_type: str | None = None,
    ) -> Response[Any]:
        return await self.request(
            "PATCH",
            url,
            payload,
            result_type=result_type,
            headers=headers,
            token=token,
            content_type=content_type,
        )

    async def delete(
        self,
        url: str,
        *,
        result_type: Any = Any,
        headers: Mapping[str, str] | None = None,
        token: str | None = NO_TOKEN,
    ) -> Response[Any]:
        return await self.request(
            "DELETE", url, result_type=result_type, headers=headers, token=token
        )

    async def get_stream(
        self,
        url: str,
        callback: Callable[..., Any],
        *,
        headers: Mapping[str, str] | None = None,
        token: str | None = NO_TOKEN,
        accept: str | None = None,
    ) -> Any:
        r"""Send an HTTP GET request and hand the response body stream to
        ``callback(stream, status_code, headers)``, which may be a
        coroutine function."""
        return await execute_stream_async(
            url=url,
            method="GET",
            callback=callback,
            headers=headers,
            token=token,
            accept=accept,
            client=self._client,
            config=self._config,
        )
