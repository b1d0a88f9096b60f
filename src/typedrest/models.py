r"""Request and response models exchanged with the ``httpx`` client."""

from __future__ import annotations

__all__ = ["AsyncResponseStream", "HttpRequest", "Response", "ResponseStream"]

import io
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import httpx

from typedrest.core.config import DEFAULT_CHUNK_SIZE
from typedrest.exceptions import HttpRequestError

if TYPE_CHECKING:
    from collections.abc import Mapping

T = TypeVar("T")


@dataclass
class HttpRequest:
    r"""Request ready to be dispatched.

    Attributes:
        url: The URL of the request.
        method: The HTTP method, upper-cased.
        headers: The transport headers, attached to the request.
        content_headers: The headers describing the body. Always empty
            when there is no body.
        body: ``None``, ``bytes``, or an iterable of byte chunks for
            streamed bodies.
    """

    url: str
    method: str
    headers: dict[str, str] = field(default_factory=dict)
    content_headers: dict[str, str] = field(default_factory=dict)
    body: Any = None

    @property
    def has_body(self) -> bool:
        return self.body is not None

    @property
    def all_headers(self) -> dict[str, str]:
        r"""Return the transport and the content headers together."""
        return {**self.headers, **self.content_headers}

    def to_httpx(self, client: httpx.Client | httpx.AsyncClient) -> httpx.Request:
        r"""Build the ``httpx.Request`` sent by ``client``.

        Args:
            client: The client that will send the request. Its base URL,
                default headers and cookies are applied.

        Returns:
            The ``httpx.Request``.
        """
        return client.build_request(
            method=self.method,
            url=self.url,
            headers=self.all_headers,
            content=self.body,
        )


@dataclass
class Response(Generic[T]):
    r"""Outcome of a typed call.

    Exactly one of ``content`` and ``error`` is meaningful, depending on
    whether the status code indicates success. On success ``content``
    holds the decoded value and ``error`` is ``None``. On failure
    ``error`` holds the response body text and ``content`` is ``None``.

    Attributes:
        status_code: The HTTP status code.
        headers: The response headers, looked up case-insensitively.
        content: The decoded body, on success.
        error: The body text, on failure.
        url: The requested URL.
        method: The HTTP method of the request.

    Example:
        ```pycon
        >>> from typedrest.models import Response
        >>> response = Response(status_code=404, headers={}, error="not found")
        >>> response.is_success
        False
        >>> response.content is None
        True

        ```
    """

    status_code: int
    headers: httpx.Headers | Mapping[str, str]
    content: T | None = None
    error: str | None = None
    url: str = ""
    method: str = ""

    def __post_init__(self) -> None:
        self.headers = httpx.Headers(self.headers)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def raise_for_status(self) -> Response[T]:
        r"""Raise an ``HttpRequestError`` if the call did not succeed.

        Returns:
            The response itself, so calls can be chained.

        Raises:
            HttpRequestError: If the status code does not indicate success.
                The error message is the response body text.

        Example:
            ```pycon
            >>> from typedrest.models import Response
            >>> Response(status_code=200, headers={}, content=42).raise_for_status().content
            42

            ```
        """
        if not self.is_success:
            raise HttpRequestError(
                method=self.method,
                url=self.url,
                message=self.error or f"{self.method} request to {self.url} failed "
                f"with status {self.status_code}",
                status_code=self.status_code,
                body=self.error,
            )
        return self


class ResponseStream(io.RawIOBase):
    r"""Readable binary stream over the body of a streamed
    ``httpx.Response``.

    The bytes are pulled from the network as they are read, so the body
    is never fully buffered in memory.

    Args:
        response: A response obtained with ``stream=True``.
        chunk_size: The number of bytes pulled at a time.

    Attributes:
        response: The underlying streamed ``httpx.Response``.
    """

    def __init__(self, response: httpx.Response, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        super().__init__()
        self.response = response
        self._iterator = response.iter_bytes(chunk_size)
        self._buffer = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Any) -> int:
        # Fill the whole buffer unless the body ends first
        view = memoryview(buffer).cast("B")
        filled = 0
        while filled < len(view):
            if not self._buffer:
                chunk = next(self._iterator, None)
                if chunk is None:
                    break
                self._buffer = chunk
                continue
            size = min(len(view) - filled, len(self._buffer))
            view[filled : filled + size] = self._buffer[:size]
            self._buffer = self._buffer[size:]
            filled += size
        return filled


class AsyncResponseStream:
    r"""Asynchronous readable stream over the body of a streamed
    ``httpx.Response``.

    Args:
        response: A response obtained with ``stream=True`` from an
            ``httpx.AsyncClient``.
        chunk_size: The number of bytes pulled at a time.

    Example:
        ```pycon
        >>> async def consume(stream):  # doctest: +SKIP
        ...     async for chunk in stream:
        ...         print(len(chunk))
        ...

        ```
    """

    def __init__(self, response: httpx.Response, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self.response = response
        self._iterator = response.aiter_bytes(chunk_size)
        self._chunk_size = chunk_size
        self._buffer = b""
        self._exhausted = False

    async def _pull(self) -> bool:
        try:
            self._buffer += await self._iterator.__anext__()
        except StopAsyncIteration:
            self._exhausted = True
            return False
        return True

    async def read(self, size: int = -1) -> bytes:
        r"""Read up to ``size`` bytes, or everything left if ``size`` is
        negative. An empty result means the end of the stream."""
        if size < 0:
            while not self._exhausted:
                await self._pull()
            data, self._buffer = self._buffer, b""
            return data
        while len(self._buffer) < size and not self._exhausted:
            await self._pull()
        data, self._buffer = self._buffer[:size], self._buffer[size:]
        return data

    def __aiter__(self) -> AsyncResponseStream:
        return self

    async def __anext__(self) -> bytes:
        chunk = await self.read(self._chunk_size)
        if not chunk:
            raise StopAsyncIteration
        return chunk
