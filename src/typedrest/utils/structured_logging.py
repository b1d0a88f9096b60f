r"""Structured logging utilities for machine-readable log output.

typedrest logs through the standard ``logging`` module, under the
``typedrest`` logger hierarchy. Every dispatched call emits a debug
record carrying ``method``, ``url``, ``status_code`` and ``elapsed``
fields. The ``StructuredFormatter`` below renders such records as JSON
lines, together with the correlation id of the current context, which
suits log aggregation systems.

Example:
    ```python
    import logging
    from typedrest import get
    from typedrest.utils.structured_logging import StructuredFormatter, correlation_id

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("typedrest")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    with correlation_id("job-42"):
        posts = get("https://api.example.com/posts")
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "typedrest_correlation_id", default=None
)

# Attributes every LogRecord has; anything else was passed through ``extra``
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


def get_correlation_id() -> str | None:
    """Get the correlation ID of the current context.

    Returns:
        The current correlation ID, or None if not set.
    """
    return _correlation_id.get()


def set_correlation_id(value: str) -> None:
    """Set the correlation ID of the current context.

    The value lives in a context variable, so concurrent threads and
    asyncio tasks each see their own correlation ID.

    Args:
        value: The correlation ID (e.g. a request ID or a trace ID).

    Example:
        ```pycon
        >>> from typedrest.utils.structured_logging import (
        ...     clear_correlation_id,
        ...     get_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> set_correlation_id("request-456")
        >>> get_correlation_id()
        'request-456'
        >>> clear_correlation_id()

        ```
    """
    _correlation_id.set(value)


def clear_correlation_id() -> None:
    """Clear the correlation ID of the current context."""
    _correlation_id.set(None)


@contextmanager
def correlation_id(value: str) -> Iterator[str]:
    """Context manager setting the correlation ID for a block of code.

    The previous correlation ID is restored on exit, even if an
    exception is raised.

    Example:
        ```pycon
        >>> from typedrest.utils.structured_logging import correlation_id, get_correlation_id
        >>> with correlation_id("batch-7"):
        ...     get_correlation_id()
        ...
        'batch-7'
        >>> get_correlation_id() is None
        True

        ```
    """
    token = _correlation_id.set(value)
    try:
        yield value
    finally:
        _correlation_id.reset(token)


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    The output always has ``timestamp``, ``level``, ``logger``,
    ``message``, ``module``, ``function`` and ``line``. The correlation
    ID, the exception traceback and every field passed through
    ``extra`` are added when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        current_id = get_correlation_id()
        if current_id is not None:
            log_data["correlation_id"] = current_id
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value
        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        # ISO 8601 in UTC with millisecond precision; datefmt is ignored
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(logger: logging.Logger, level: int, message: str, **extra: Any) -> None:
    """Log a message with structured data.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.DEBUG).
        message: Log message.
        **extra: Additional structured fields to include in the record.

    Example:
        ```pycon
        >>> import logging
        >>> from typedrest.utils.structured_logging import log_structured
        >>> logger = logging.getLogger("typedrest.example")
        >>> log_structured(logger, logging.DEBUG, "GET done", status_code=200)

        ```
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra=extra)
