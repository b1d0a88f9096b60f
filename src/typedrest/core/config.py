r"""Configuration dataclass and defaults for typedrest clients.

This module provides configuration constants and a dataclass-based
configuration object shared by the functional API and the
RestClient / AsyncRestClient context manager classes.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_TIMEOUT",
    "JSON_MEDIA_TYPE",
    "ClientConfig",
]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

import httpx

from typedrest.core.validation import validate_timeout

if TYPE_CHECKING:
    from collections.abc import Callable

    from typedrest.callbacks import RequestInfo, ResponseInfo
    from typedrest.decoding import ResponseDecoder


# Default timeout in seconds for HTTP requests
# Only applied to clients created by typedrest itself
DEFAULT_TIMEOUT = 10.0

# Media type used for Accept and Content-Type when no headers are supplied
JSON_MEDIA_TYPE = "application/json"

# Number of bytes read at a time from a payload stream or a response stream
DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass
class ClientConfig:
    """Configuration shared by all the calls of a client.

    Args:
        timeout: Maximum seconds to wait for the server response. Only used
            when typedrest creates the ``httpx`` client itself. Must be > 0.
        headers: Optional base headers sent with every request. Per-call
            headers take precedence over these.
        decoder: Optional ``ResponseDecoder`` replacing the default one,
            e.g. to customize how typed results are built.
        on_request: Optional callback called before each request is sent.
        on_response: Optional callback called when a response arrives.

    Example:
        ```pycon
        >>> from typedrest.core.config import ClientConfig
        >>> config = ClientConfig()  # Use defaults
        >>> config.timeout
        10.0
        >>> config = ClientConfig(headers={"X-Api-Version": "2"})
        >>> merged = config.merge(timeout=30.0)  # Override specific parameters
        >>> merged.timeout
        30.0
        >>> merged.headers
        {'X-Api-Version': '2'}

        ```
    """

    timeout: float | httpx.Timeout = DEFAULT_TIMEOUT
    headers: dict[str, str] | None = None
    decoder: ResponseDecoder | None = None
    on_request: Callable[[RequestInfo], None] | None = None
    on_response: Callable[[ResponseInfo], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_timeout(self.timeout)

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ClientConfig instance with overrides applied.

        Example:
            ```pycon
            >>> from typedrest.core.config import ClientConfig
            >>> config = ClientConfig(timeout=5.0)
            >>> config.merge(timeout=None).timeout
            5.0
            >>> config.merge(timeout=1.0).timeout
            1.0

            ```
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary with the configuration parameters.
        """
        return {
            "timeout": self.timeout,
            "headers": self.headers,
            "decoder": self.decoder,
            "on_request": self.on_request,
            "on_response": self.on_response,
        }

    def create_client(self) -> httpx.Client:
        r"""Create a synchronous ``httpx.Client`` honoring this config."""
        return httpx.Client(timeout=self.timeout)

    def create_async_client(self) -> httpx.AsyncClient:
        r"""Create an asynchronous ``httpx.AsyncClient`` honoring this
        config."""
        return httpx.AsyncClient(timeout=self.timeout)
