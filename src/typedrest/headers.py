r"""Header utilities used to build requests.

Headers describing the body entity (``Content-Type``,
``Content-Length``...) only make sense when a body is sent, so the
supplied headers are split into transport headers, attached to the
request itself, and content headers, attached to the body.
"""

from __future__ import annotations

__all__ = [
    "CONTENT_HEADER_NAMES",
    "bearer_header",
    "default_headers",
    "is_content_header",
    "merge_headers",
    "partition_headers",
]

from typing import TYPE_CHECKING

from typedrest.core.config import JSON_MEDIA_TYPE
from typedrest.core.validation import validate_token

if TYPE_CHECKING:
    from collections.abc import Mapping

# Lower-cased names of the headers that belong to the body entity
CONTENT_HEADER_NAMES = frozenset(
    {
        "allow",
        "content-disposition",
        "content-encoding",
        "content-language",
        "content-length",
        "content-location",
        "content-md5",
        "content-range",
        "content-type",
        "expires",
        "last-modified",
    }
)


def is_content_header(name: str) -> bool:
    r"""Indicate if a header name describes the body entity.

    Args:
        name: The header name. The comparison is case-insensitive.

    Returns:
        ``True`` if the header is a content header, otherwise ``False``.

    Example:
        ```pycon
        >>> from typedrest.headers import is_content_header
        >>> is_content_header("Content-Type")
        True
        >>> is_content_header("X-Request-Id")
        False

        ```
    """
    return name.strip().lower() in CONTENT_HEADER_NAMES


def partition_headers(
    headers: Mapping[str, str] | None,
) -> tuple[dict[str, str], dict[str, str]]:
    r"""Split headers into transport headers and content headers.

    Every header ends up in exactly one of the two dictionaries. Names
    that are not known content headers are transport headers, so
    arbitrary custom headers are supported.

    Args:
        headers: The headers to split.

    Returns:
        A tuple ``(transport, content)``.

    Example:
        ```pycon
        >>> from typedrest.headers import partition_headers
        >>> transport, content = partition_headers(
        ...     {"Accept": "application/json", "Content-Type": "text/plain"}
        ... )
        >>> transport
        {'Accept': 'application/json'}
        >>> content
        {'Content-Type': 'text/plain'}

        ```
    """
    transport: dict[str, str] = {}
    content: dict[str, str] = {}
    for name, value in (headers or {}).items():
        if is_content_header(name):
            content[name] = value
        else:
            transport[name] = value
    return transport, content


def default_headers(has_body: bool, content_type: str | None = None) -> dict[str, str]:
    r"""Return the headers used when the caller supplies none.

    Args:
        has_body: Whether the request carries a body.
        content_type: The body media type. Defaults to JSON.

    Returns:
        The default headers.

    Example:
        ```pycon
        >>> from typedrest.headers import default_headers
        >>> default_headers(has_body=False)
        {'Accept': 'application/json'}
        >>> default_headers(has_body=True)
        {'Accept': 'application/json', 'Content-Type': 'application/json'}

        ```
    """
    headers = {"Accept": JSON_MEDIA_TYPE}
    if has_body:
        headers["Content-Type"] = content_type or JSON_MEDIA_TYPE
    return headers


def bearer_header(token: str | None) -> dict[str, str]:
    r"""Return the ``Authorization`` header for a bearer token.

    Args:
        token: The bearer token.

    Returns:
        A dictionary with the ``Authorization`` header.

    Raises:
        ValueError: If the token is ``None`` or empty.

    Example:
        ```pycon
        >>> from typedrest.headers import bearer_header
        >>> bearer_header("abc")
        {'Authorization': 'Bearer abc'}

        ```
    """
    return {"Authorization": f"Bearer {validate_token(token)}"}


def merge_headers(*headers: Mapping[str, str] | None) -> dict[str, str]:
    r"""Merge several header mappings, later ones taking precedence.

    Header names are compared case-insensitively, and the casing of the
    last occurrence is kept.

    Example:
        ```pycon
        >>> from typedrest.headers import merge_headers
        >>> merge_headers({"accept": "text/plain"}, None, {"Accept": "application/json"})
        {'Accept': 'application/json'}

        ```
    """
    merged: dict[str, tuple[str, str]] = {}
    for mapping in headers:
        for name, value in (mapping or {}).items():
            merged[name.lower()] = (name, value)
    return dict(merged.values())
