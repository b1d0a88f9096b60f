r"""Build the requests sent by typedrest.

A request is assembled from a URL, a verb, optional headers, an optional
bearer token and an optional payload. Payloads are encoded as follows:

- ``None``: no body
- ``bytes`` / ``bytearray``: sent unchanged
- ``str``: sent as UTF-8 text
- readable binary stream (an object with ``read``) or iterable of byte
  chunks: streamed to the server without being loaded into memory
- anything else: serialized to JSON with pydantic, which handles
  dictionaries, lists, dataclasses and pydantic models
"""

from __future__ import annotations

__all__ = [
    "NO_TOKEN",
    "aiter_stream",
    "build_request",
    "encode_payload",
    "is_stream",
    "iter_stream",
]

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter

from typedrest.core.config import DEFAULT_CHUNK_SIZE, JSON_MEDIA_TYPE
from typedrest.headers import bearer_header, default_headers, merge_headers, partition_headers
from typedrest.models import HttpRequest

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator, Mapping
    from typing import BinaryIO

logger: logging.Logger = logging.getLogger(__name__)

# Default value of the ``token`` keyword meaning "no bearer authentication".
# An explicit ``token=None`` is rejected instead of silently ignored.
NO_TOKEN: Any = object()

_JSON_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)


def is_stream(payload: Any) -> bool:
    r"""Indicate if a payload must be streamed rather than buffered.

    Example:
        ```pycon
        >>> import io
        >>> from typedrest.request_builder import is_stream
        >>> is_stream(io.BytesIO(b"data"))
        True
        >>> is_stream(b"data")
        False
        >>> is_stream({"name": "John Doe"})
        False

        ```
    """
    if isinstance(payload, (bytes, bytearray, str, dict, list, tuple)):
        return False
    return (
        hasattr(payload, "read")
        or hasattr(payload, "__aiter__")
        or (hasattr(payload, "__iter__") and hasattr(payload, "__next__"))
    )


def iter_stream(stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    r"""Yield the content of a readable binary stream chunk by chunk."""
    while chunk := stream.read(chunk_size):
        yield chunk


async def aiter_stream(payload: Any, chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
    r"""Adapt a synchronous stream payload to the asynchronous iteration
    expected by ``httpx.AsyncClient``.

    Reads from synchronous files and iterators may block, so they run in
    a worker thread and the event loop stays responsive while a large
    file is uploaded.
    """
    if hasattr(payload, "__aiter__"):
        async for chunk in payload:
            yield chunk
    elif hasattr(payload, "read"):
        while chunk := await asyncio.to_thread(payload.read, chunk_size):
            yield chunk
    else:
        iterator = iter(payload)
        while (chunk := await asyncio.to_thread(next, iterator, None)) is not None:
            yield chunk


def encode_payload(payload: Any) -> Any:
    r"""Encode a payload into a request body.

    Args:
        payload: The payload to encode.

    Returns:
        ``None`` if there is no payload, ``bytes`` for buffered payloads,
        or the stream itself for streamed payloads.

    Example:
        ```pycon
        >>> from typedrest.request_builder import encode_payload
        >>> encode_payload({"Name": "John Doe"})
        b'{"Name":"John Doe"}'
        >>> encode_payload("plain text")
        b'plain text'
        >>> encode_payload(None) is None
        True

        ```
    """
    if payload is None:
        return None
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload)
    if isinstance(payload, str):
        return payload.encode("utf-8")
    if is_stream(payload):
        if hasattr(payload, "read"):
            return iter_stream(payload)
        return payload
    return _JSON_ADAPTER.dump_json(payload)


def build_request(
    method: str,
    url: str,
    *,
    payload: Any = None,
    headers: Mapping[str, str] | None = None,
    token: str | None = NO_TOKEN,
    content_type: str | None = None,
    base_headers: Mapping[str, str] | None = None,
) -> HttpRequest:
    r"""Build a request.

    Args:
        method: The HTTP method.
        url: The URL of the request.
        payload: The optional payload. See the module documentation for
            the supported types.
        headers: Optional headers. If ``None``, JSON ``Accept`` and
            ``Content-Type`` defaults are used.
        token: Optional bearer token. If given, it must be a non-empty
            string.
        content_type: Optional media type of the body. It overrides any
            ``Content-Type`` found in the headers. A body left without
            ``Content-Type`` is labelled as JSON.
        base_headers: Optional headers applied before ``headers``,
            usually coming from ``ClientConfig.headers``.

    Returns:
        The request.

    Raises:
        ValueError: If ``token`` is explicitly ``None`` or empty.

    Example:
        ```pycon
        >>> from typedrest.request_builder import build_request
        >>> request = build_request("post", "https://api.example.com/posts", payload={"a": 1})
        >>> request.method
        'POST'
        >>> request.headers
        {'Accept': 'application/json'}
        >>> request.content_headers
        {'Content-Type': 'application/json'}

        ```
    """
    auth = {} if token is NO_TOKEN else bearer_header(token)
    body = encode_payload(payload)
    has_body = body is not None
    if headers is None:
        headers = default_headers(has_body=has_body, content_type=content_type)
    transport, content = partition_headers(merge_headers(base_headers, headers, auth))
    if has_body:
        if content_type is not None:
            content = merge_headers(content, {"Content-Type": content_type})
        elif not any(name.strip().lower() == "content-type" for name in content):
            content["Content-Type"] = JSON_MEDIA_TYPE
    elif content:
        logger.debug(
            f"Dropping content headers {sorted(content)} from {method.upper()} request "
            f"to {url} without body"
        )
        content = {}
    return HttpRequest(
        url=url,
        method=method.upper(),
        headers=transport,
        content_headers=content,
        body=body,
    )
