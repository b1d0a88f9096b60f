r"""Parameter validation utilities.

This module provides the validation functions applied to the arguments
of a call before any network activity takes place.
"""

from __future__ import annotations

__all__ = ["validate_timeout", "validate_token"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


def validate_timeout(timeout: float | httpx.Timeout) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0 if provided as a numeric value.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from typedrest.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(30)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_token(token: str | None) -> str:
    """Validate a bearer token.

    Args:
        token: The bearer token to validate.

    Returns:
        The token, unchanged.

    Raises:
        ValueError: If the token is ``None`` or an empty string.

    Example:
        ```pycon
        >>> from typedrest.core.validation import validate_token
        >>> validate_token("secret")
        'secret'
        >>> validate_token(None)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: token must be a non-empty string, got None

        ```
    """
    if token is None or not isinstance(token, str) or not token:
        msg = f"token must be a non-empty string, got {token!r}"
        raise ValueError(msg)
    return token
