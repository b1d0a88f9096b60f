r"""Core shared logic for sync and async HTTP operations.

This package contains the configuration, the validation helpers, the
dispatcher and the execution logic shared by the functional API and the
client classes.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_TIMEOUT",
    "JSON_MEDIA_TYPE",
    "ClientConfig",
    "execute_http_method",
    "execute_http_method_async",
    "execute_stream",
    "execute_stream_async",
    "send",
    "send_async",
    "stream",
    "stream_async",
    "validate_timeout",
    "validate_token",
]

from typedrest.core.config import DEFAULT_CHUNK_SIZE, DEFAULT_TIMEOUT, JSON_MEDIA_TYPE, ClientConfig
from typedrest.core.dispatch import send, send_async, stream, stream_async
from typedrest.core.http_logic import (
    execute_http_method,
    execute_http_method_async,
    execute_stream,
    execute_stream_async,
)
from typedrest.core.validation import validate_timeout, validate_token
