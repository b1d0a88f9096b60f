r"""Define the exception types raised by typedrest.

Transport failures (DNS, connection, timeout) are never wrapped: the
``httpx`` exceptions propagate unchanged. The types below cover the
failures that this library itself detects.
"""

from __future__ import annotations

__all__ = [
    "ConversionError",
    "DecodeError",
    "DeserializationError",
    "HttpRequestError",
    "TypedRestError",
]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


class TypedRestError(Exception):
    r"""Base class of all the errors raised by typedrest."""


class HttpRequestError(TypedRestError):
    r"""Raised when a response with a non-success status code is turned
    into an exception.

    Args:
        method: The HTTP method of the failed request.
        url: The URL of the failed request.
        message: The error message.
        status_code: The HTTP status code of the response.
        body: The response body decoded as UTF-8 text.
        response: The underlying ``httpx.Response``, if available.

    Example:
        ```pycon
        >>> from typedrest.exceptions import HttpRequestError
        >>> error = HttpRequestError(
        ...     method="GET",
        ...     url="https://api.example.com/data",
        ...     message="not found",
        ...     status_code=404,
        ...     body="not found",
        ... )
        >>> error.status_code
        404
        >>> str(error)
        'not found'

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.message = message
        self.status_code = status_code
        self.body = body
        self.response = response

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(method={self.method!r}, url={self.url!r}, "
            f"status_code={self.status_code})"
        )


class DecodeError(TypedRestError):
    r"""Raised when the response body cannot be turned into the requested
    type.

    Args:
        message: The error message.
        result_type: The type requested by the caller.
        content: The raw response body.
    """

    def __init__(self, message: str, result_type: Any, content: bytes) -> None:
        super().__init__(message)
        self.result_type = result_type
        self.content = content


class ConversionError(DecodeError):
    r"""Raised when the response text is not a valid literal of the
    requested scalar type (e.g. ``int`` or ``bool``)."""


class DeserializationError(DecodeError):
    r"""Raised when the response body is not valid JSON or does not match
    the shape of the requested type."""
