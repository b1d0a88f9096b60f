r"""Callback types and data structures for observability.

This module provides the two lifecycle hooks of a typedrest call:

- on_request: Called after the request is built, before it is sent
- on_response: Called once the response status and headers are known

Hooks are plain callables taking a single info object. They are
configured on ``ClientConfig`` and are useful for logging, metrics, or
auditing outgoing traffic.

Example:
    ```pycon
    >>> from typedrest import get
    >>> from typedrest.callbacks import ResponseInfo
    >>> from typedrest.core import ClientConfig
    >>> def log_response(info: ResponseInfo):
    ...     print(f"{info.method} {info.url} -> {info.status_code}")
    ...
    >>> content = get(
    ...     "https://api.example.com/data", config=ClientConfig(on_response=log_response)
    ... )  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = ["RequestInfo", "ResponseInfo", "invoke_on_request", "invoke_on_response"]

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


@dataclass
class RequestInfo:
    """Information passed to on_request callback.

    Attributes:
        url: The URL being requested.
        method: The HTTP method (e.g., "GET", "POST").
        headers: All the headers sent with the request.
        has_body: Whether the request carries a body.
    """

    url: str
    method: str
    headers: dict[str, str]
    has_body: bool


@dataclass
class ResponseInfo:
    """Information passed to on_response callback.

    Attributes:
        url: The URL that was requested.
        method: The HTTP method (e.g., "GET", "POST").
        status_code: The HTTP status code of the response.
        headers: The response headers.
        elapsed: Seconds between sending the request and this callback.
    """

    url: str
    method: str
    status_code: int
    headers: httpx.Headers
    elapsed: float


def invoke_on_request(
    on_request: Callable[[RequestInfo], None] | None,
    *,
    url: str,
    method: str,
    headers: Mapping[str, str],
    has_body: bool,
) -> None:
    """Invoke on_request callback if provided.

    Args:
        on_request: Optional callback to invoke before the request is sent.
        url: The URL being requested.
        method: The HTTP method (e.g., "GET", "POST").
        headers: The headers sent with the request.
        has_body: Whether the request carries a body.
    """
    if on_request is not None:
        on_request(RequestInfo(url=url, method=method, headers=dict(headers), has_body=has_body))


def invoke_on_response(
    on_response: Callable[[ResponseInfo], None] | None,
    *,
    url: str,
    method: str,
    status_code: int,
    headers: Mapping[str, str],
    start_time: float,
) -> None:
    """Invoke on_response callback if provided.

    Args:
        on_response: Optional callback to invoke once the response is known.
        url: The URL that was requested.
        method: The HTTP method (e.g., "GET", "POST").
        status_code: The HTTP status code of the response.
        headers: The response headers.
        start_time: The timestamp when the request was sent.
    """
    if on_response is not None:
        on_response(
            ResponseInfo(
                url=url,
                method=method,
                status_code=status_code,
                headers=httpx.Headers(headers),
                elapsed=time.time() - start_time,
            )
        )
