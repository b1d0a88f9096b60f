r"""typedrest - One-call typed REST requests on top of httpx.

This package sends HTTP requests and converts their responses into the
type the caller asks for, in a single call. Built on top of the modern
httpx library, it takes care of the request boilerplate: JSON
serialization of payloads, default JSON headers, bearer tokens, content
headers, and decoding of the response body.

Key Features:
    - GET, POST, PUT, PATCH and DELETE in one call, sync and async
    - Response bodies decoded as bytes, text, scalars, raw JSON, or any
      type pydantic can validate (models, dataclasses, ``list[Model]``...)
    - Non-success responses returned with their status, headers and
      error text instead of raising, with ``raise_for_status`` on demand
    - Bearer-token and custom-header support
    - Streaming request bodies and streaming response callbacks for large
      payloads
    - Injected ``httpx`` clients, so one connection pool can be shared

Example:
    ```pycon
    >>> from pydantic import BaseModel
    >>> from typedrest import RestClient, get
    >>> class Blog(BaseModel):
    ...     id: int
    ...     title: str
    ...
    >>> blogs = get("https://api.example.com/posts", result_type=list[Blog])  # doctest: +SKIP
    >>> with RestClient() as client:  # doctest: +SKIP
    ...     response = client.post("https://api.example.com/posts", {"title": "Hello"})
    ...     response.raise_for_status()
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncRestClient",
    "ClientConfig",
    "ConversionError",
    "DecodeError",
    "DeserializationError",
    "HttpRequestError",
    "Response",
    "RestClient",
    "TypedRestError",
    "__version__",
    "delete",
    "delete_async",
    "get",
    "get_async",
    "get_stream",
    "get_stream_async",
    "patch",
    "patch_async",
    "post",
    "post_async",
    "put",
    "put_async",
    "request",
    "request_async",
]

from importlib.metadata import PackageNotFoundError, version

from typedrest.client import RestClient
from typedrest.client_async import AsyncRestClient
from typedrest.core.config import ClientConfig
from typedrest.delete import delete
from typedrest.delete_async import delete_async
from typedrest.exceptions import (
    ConversionError,
    DecodeError,
    DeserializationError,
    HttpRequestError,
    TypedRestError,
)
from typedrest.get import get, get_stream
from typedrest.get_async import get_async, get_stream_async
from typedrest.models import Response
from typedrest.patch import patch
from typedrest.patch_async import patch_async
from typedrest.post import post
from typedrest.post_async import post_async
from typedrest.put import put
from typedrest.put_async import put_async
from typedrest.request import request
from typedrest.request_async import request_async

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
